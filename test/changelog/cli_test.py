# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import textwrap

import pytest

import changelog.cli as examinee


HISTORY = textwrap.dedent('''\
    remote:
      org: gardener
      name: cc-utils
    tags:
      - label: v1.0.0
        date: 2024-01-01
        hash: bbbbbbbbbbbbbbbb
    commits:
      - hash: aaaaaaaaaaaaaaaa
        header: add a
        type: feat
      - hash: bbbbbbbbbbbbbbbb
        header: initial commit
        tag: v1.0.0
''')


@pytest.fixture
def history_file(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('CHANGELOG_STYLE', raising=False)

    path = tmp_path / 'history.yaml'
    path.write_text(HISTORY)
    return str(path)


def test_plain(history_file, capsys, restore_logging):
    examinee.main([history_file, '--release', 'v1.1.0', '--style', 'plain'])

    out = capsys.readouterr().out
    assert '## v1.1.0 - ' in out
    assert '### Features\n\n- add a (aaaaaaa)' in out
    assert '## v1.0.0 - 2024-01-01\n\n- initial commit (bbbbbbb)' in out
    assert 'Full Changelog: [v1.0.0...v1.1.0]' in out
    assert out.endswith('[v1.0.0...v1.1.0]: https://github.com/gardener/cc-utils/compare/v1.0.0...v1.1.0\n')


def test_linked_without_release(history_file, capsys, restore_logging):
    examinee.main([history_file])

    out = capsys.readouterr().out
    assert 'add a' not in out
    assert '## [v1.0.0] - 2024-01-01' in out
    assert '[v1.0.0]: https://github.com/gardener/cc-utils/compare/bbbbbbbbbbbbbbbb...v1.0.0' in out


def test_cfg_file(history_file, tmp_path, capsys, restore_logging):
    cfg_file = tmp_path / 'cfg.yaml'
    cfg_file.write_text(textwrap.dedent('''\
        style: plain
        rules:
          - kind: type
            type: feat
            title: New Features
    '''))

    examinee.main([history_file, '-r', 'v1.1.0', '--cfg', str(cfg_file)])

    out = capsys.readouterr().out
    assert '### New Features\n\n- add a (aaaaaaa)' in out
    # no catch-all rule configured
    assert 'initial commit' not in out


def test_invalid_history(tmp_path, capsys, restore_logging):
    path = tmp_path / 'history.yaml'
    path.write_text('commits:\n  - header: no hash\n')

    with pytest.raises(SystemExit) as e:
        examinee.main([str(path)])

    assert e.value.code == 1
    assert capsys.readouterr().out == ''


def test_release_with_existing_label(history_file, capsys, restore_logging):
    with pytest.raises(SystemExit) as e:
        examinee.main([history_file, '--release', 'v1.0.0'])

    assert e.value.code == 1
    assert capsys.readouterr().out == ''
