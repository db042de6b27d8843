# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import textwrap

import pytest

import changelog.markdown as examinee
import changelog.model as cm


@pytest.fixture
def doc():
    return cm.Document()


def test_render_empty_document(doc):
    assert examinee.render(doc) == '\n'


def test_render(doc):
    doc.sections.extend(['# title', 'paragraph\n'])
    doc.links.extend(['[a]: https://a', '[b]: https://b'])

    assert examinee.render(doc) == textwrap.dedent('''\
        # title

        paragraph


        [a]: https://a
        [b]: https://b
    ''')


def test_render_without_links(doc):
    doc.sections.extend(['# title', 'paragraph'])

    assert examinee.render(doc) == '# title\n\nparagraph\n'


def test_emit_preamble(doc):
    examinee.emit_preamble(doc)

    assert doc.sections == [
        '# Changelog\n\nAll notable changes to this project will be documented in this file.',
    ]
    assert doc.links == []


def test_emit_commit_list_plain(doc, commit):
    examinee.emit_commit_list(
        doc=doc,
        title='Features',
        commits=[commit('c1', header='add a'), commit('c2', header='add b')],
    )

    assert doc.sections == [
        '### Features',
        '- add a (c100000)\n- add b (c200000)',
    ]
    assert doc.links == []


def test_emit_commit_list_without_title(doc, commit):
    examinee.emit_commit_list(doc=doc, title=None, commits=[commit('c1', header='add a')])

    assert doc.sections == ['- add a (c100000)']


def test_emit_commit_list_linked(doc, commit, remote):
    c1 = commit('c1', header='add a')
    examinee.emit_commit_list(
        doc=doc,
        title='Features',
        commits=[c1],
        style=cm.RenderStyle.LINKED,
        remote=remote,
    )

    assert doc.sections == ['### Features', '- add a ([c100000])']
    assert doc.links == [f'[c100000]: https://github.com/gardener/cc-utils/commit/{c1.hash}']


def test_emit_commit_list_linked_without_remote(doc, commit):
    examinee.emit_commit_list(
        doc=doc,
        title=None,
        commits=[commit('c1', header='add a')],
        style=cm.RenderStyle.LINKED,
    )

    assert doc.sections == ['- add a (c100000)']
    assert doc.links == []


def test_emit_tag_section_plain(doc, commit, tag):
    v2 = tag('v2', hash='c1', version='2.0.0')
    groups = [cm.Group(title='Features', commits=[commit('c1', header='add a')])]

    examinee.emit_tag_section(doc=doc, tag=v2, groups=groups, parent=tag('v1', hash='c2'))

    assert doc.sections == [
        '## 2.0.0 - 2024-01-31',
        '### Features',
        '- add a (c100000)',
    ]
    assert doc.links == []


def test_emit_tag_section_linked(doc, commit, tag, remote):
    c1 = commit('c1', header='add a')
    v1 = tag('v1', hash='c2')
    v2 = tag('v2', hash='c1')

    examinee.emit_tag_section(
        doc=doc,
        tag=v2,
        groups=[cm.Group(title='Features', commits=[c1])],
        style=cm.RenderStyle.LINKED,
        remote=remote,
        parent=v1,
    )

    assert doc.sections == [
        '## [v2] - 2024-01-31',
        '### Features',
        '- add a ([c100000])',
        'Full Changelog: [v1...v2]',
    ]
    assert doc.links == [
        '[v2]: https://github.com/gardener/cc-utils/compare/v1...v2',
        f'[c100000]: https://github.com/gardener/cc-utils/commit/{c1.hash}',
        '[v1...v2]: https://github.com/gardener/cc-utils/compare/v1...v2',
    ]


def test_full_changelog_link_is_independent_of_style(doc, tag, remote):
    examinee.emit_tag_section(
        doc=doc,
        tag=tag('2.0.0', hash='c1'),
        groups=[],
        style=cm.RenderStyle.PLAIN,
        remote=remote,
        parent=tag('1.0.0', hash='c2'),
    )

    assert doc.sections == ['## 2.0.0 - 2024-01-31', 'Full Changelog: [1.0.0...2.0.0]']
    assert doc.links == ['[1.0.0...2.0.0]: https://github.com/gardener/cc-utils/compare/1.0.0...2.0.0']


def test_emit_tag_section_oldest_tag(doc, tag, remote):
    root_hash = 'f' * 40
    examinee.emit_tag_section(
        doc=doc,
        tag=tag('v1', hash='c1'),
        groups=[],
        style=cm.RenderStyle.LINKED,
        remote=remote,
        root_hash=root_hash,
    )

    # no parent -> compare against oldest known commit; no "full changelog"
    assert doc.sections == ['## [v1] - 2024-01-31']
    assert doc.links == [f'[v1]: https://github.com/gardener/cc-utils/compare/{root_hash}...v1']


def test_emit_tag_section_without_comparison_base(doc, tag, remote):
    examinee.emit_tag_section(
        doc=doc,
        tag=tag('v1', hash='c1'),
        groups=[],
        style=cm.RenderStyle.LINKED,
        remote=remote,
    )

    assert doc.sections == ['## v1 - 2024-01-31']
    assert doc.links == []


def test_emit_tag_section_skips_empty_groups(doc, commit, tag):
    examinee.emit_tag_section(
        doc=doc,
        tag=tag('v1', hash='c1'),
        groups=[
            cm.Group(title='Features', commits=[]),
            cm.Group(title='Bug Fixes', commits=[commit('c1', header='fix a')]),
        ],
    )

    assert doc.sections == ['## v1 - 2024-01-31', '### Bug Fixes', '- fix a (c100000)']
