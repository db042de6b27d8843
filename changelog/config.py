# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import datetime
import enum
import logging
import os

import dacite

import changelog.classify
import changelog.model as cm
import changelog.util


logger = logging.getLogger(__name__)

USER_CFG_FILE_NAME = '.changelog.yaml'
STYLE_ENV_VAR = 'CHANGELOG_STYLE'


def _to_date(value) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    raise ValueError(f'not a date: {value=}')


_dacite_cfg = dacite.Config(
    cast=[enum.Enum, tuple],
    type_hooks={
        datetime.date: _to_date,
    },
    strict=True,
)


@dataclasses.dataclass
class ChangelogCfg:
    style: cm.RenderStyle = cm.RenderStyle.LINKED
    rules: tuple[cm.Rule, ...] = cm.DEFAULT_RULES

    def __post_init__(self):
        self.rules = changelog.classify.validate_rules(self.rules)


def _as_raw(cfg: ChangelogCfg) -> dict:
    return {
        'style': str(cfg.style),
        'rules': [
            {k: v for k, v in dataclasses.asdict(rule).items() if v is not None}
            for rule in cfg.rules
        ],
    }


def _config_from_user_home() -> dict | None:
    cfg_file_path = os.path.join(os.path.expanduser('~'), USER_CFG_FILE_NAME)
    if not os.path.isfile(cfg_file_path):
        return None

    logger.debug(f'reading {cfg_file_path=}')
    return changelog.util.parse_yaml_file(cfg_file_path) or {}


def _config_from_env() -> dict | None:
    if style := os.environ.get(STYLE_ENV_VAR):
        return {'style': style}

    return None


def _config_from_file(path: str | None) -> dict | None:
    if not path:
        return None

    return changelog.util.parse_yaml_file(path) or {}


def load_config(
    cfg_file: str | None=None,
) -> ChangelogCfg:
    '''
    loads configuration, merging (in ascending precedence):

    - built-in defaults
    - user-config (~/.changelog.yaml)
    - environment (CHANGELOG_STYLE)
    - the given cfg_file
    '''
    raw_cfgs = [
        raw for raw in (
            _config_from_user_home(),
            _config_from_env(),
            _config_from_file(cfg_file),
        ) if raw is not None
    ]
    for raw in raw_cfgs:
        if not isinstance(raw, dict):
            raise ValueError(f'changelog-config must be a mapping, found: {type(raw)}')

    merged = changelog.util.merge_dicts(_as_raw(ChangelogCfg()), *raw_cfgs)

    return dacite.from_dict(
        data_class=ChangelogCfg,
        data=merged,
        config=_dacite_cfg,
    )


@dataclasses.dataclass
class CommitEntry:
    '''
    tag: label of the tag that first released this commit (absent for unreleased commits)
    '''
    hash: str
    header: str
    type: str | None = None
    tag: str | None = None

    def as_commit(self) -> cm.Commit:
        return cm.Commit(
            hash=self.hash,
            header=self.header,
            type=self.type,
        )


@dataclasses.dataclass
class HistorySnapshot:
    '''
    serialisable form of a repository's history (tags and commits ordered newest-first), as
    provided by callers (e.g. as YAML document):

    remote:
      org: gardener
      name: cc-utils
    tags:
      - label: v1.1.0
        date: 2024-01-31
        hash: 0b7b5f1...
    commits:
      - hash: 0b7b5f1...
        type: feat
        header: add changelog-generator
        tag: v1.1.0
    '''
    tags: tuple[cm.Tag, ...] = ()
    commits: tuple[CommitEntry, ...] = ()
    remote: cm.RemoteRepo | None = None

    def as_history(self) -> cm.History:
        labels = set()
        for tag in self.tags:
            if tag.label in labels:
                raise ValueError(f'duplicate tag {tag.label=}')
            labels.add(tag.label)

        owners = {}
        for entry in self.commits:
            if entry.tag is None:
                continue
            if entry.tag not in labels:
                raise ValueError(f'{entry.hash=} references unknown tag {entry.tag=}')
            owners[entry.hash] = entry.tag

        return cm.History(
            tags=self.tags,
            commits=tuple(entry.as_commit() for entry in self.commits),
            owners=owners,
            remote=self.remote,
        )


def history_from_dict(raw: dict) -> cm.History:
    if not isinstance(raw, dict):
        raise ValueError(f'history must be a mapping, found: {type(raw)}')

    snapshot = dacite.from_dict(
        data_class=HistorySnapshot,
        data=raw,
        config=_dacite_cfg,
    )
    return snapshot.as_history()


def load_history(path: str) -> cm.History:
    return history_from_dict(changelog.util.parse_yaml_file(path) or {})
