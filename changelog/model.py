# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import datetime
import enum
import types
import typing


BREAKING_MARKER = '!'
SHORT_HASH_LENGTH = 7


class RenderStyle(enum.StrEnum):
    '''
    PLAIN: short commit-hashes are rendered inline, no hyperlinks
    LINKED: commits and tags are rendered as markdown reference-style links (requires a known
            remote repository; falls back to PLAIN otherwise)
    '''
    PLAIN = 'plain'
    LINKED = 'linked'


class RuleKind(enum.StrEnum):
    BREAKING = 'breaking'
    TYPE = 'type'
    OTHERS = 'others'


@dataclasses.dataclass(frozen=True, kw_only=True)
class Rule:
    '''
    A classification rule, determining which of a tag's commits are listed below `title`.

    kind: BREAKING - commits whose type ends with the breaking-change marker
          TYPE - commits of the given (conventional-commit) type (case-insensitive)
          OTHERS - all commits whose type is not claimed by any TYPE-rule (incl. untyped commits)
    type: the commit-type to match; must (only) be set for rules of kind TYPE
    '''
    kind: RuleKind
    title: str
    type: str | None = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', RuleKind(self.kind))

        match self.kind:
            case RuleKind.TYPE:
                if not self.type:
                    raise ValueError(f'rule {self.title=} of kind {self.kind} requires a type')
                if self.type.endswith(BREAKING_MARKER):
                    raise ValueError(
                        f'rule {self.title=}: {self.type=} must not end with {BREAKING_MARKER}'
                        f' (use a rule of kind {RuleKind.BREAKING} instead)'
                    )
            case RuleKind.BREAKING | RuleKind.OTHERS:
                if self.type:
                    raise ValueError(f'rule {self.title=} of kind {self.kind} must not set a type')
            case _:
                raise NotImplementedError(self.kind)

    @staticmethod
    def breaking(title: str) -> typing.Self:
        return Rule(kind=RuleKind.BREAKING, title=title)

    @staticmethod
    def of_type(type: str, title: str) -> typing.Self:
        return Rule(kind=RuleKind.TYPE, title=title, type=type)

    @staticmethod
    def others(title: str) -> typing.Self:
        return Rule(kind=RuleKind.OTHERS, title=title)


DEFAULT_RULES = (
    Rule.breaking('Breaking'),
    Rule.of_type('feat', 'Features'),
    Rule.of_type('fix', 'Bug Fixes'),
    Rule.others('Others'),
)


@dataclasses.dataclass(frozen=True)
class Commit:
    hash: str
    header: str
    type: str | None = None

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    @property
    def is_breaking(self) -> bool:
        return bool(self.type) and self.type.endswith(BREAKING_MARKER)

    @property
    def base_type(self) -> str | None:
        '''
        the commit's type w/o breaking-change marker, in lower case (None for untyped commits)
        '''
        if not self.type:
            return None
        return self.type.removesuffix(BREAKING_MARKER).lower() or None


@dataclasses.dataclass(frozen=True)
class Tag:
    '''
    label: the tag's name (as found in the repository)
    version: the version to display (defaults to label)
    hash: the commit-hash the tag points to (empty for pending tags)
    '''
    label: str
    date: datetime.date
    version: str | None = None
    hash: str = ''

    def __post_init__(self):
        if not self.version:
            object.__setattr__(self, 'version', self.label)

    @property
    def utc_date(self) -> datetime.date:
        if not isinstance(self.date, datetime.datetime):
            return self.date
        if self.date.tzinfo is None:
            # naive timestamps are assumed to already be UTC
            return self.date.date()
        return self.date.astimezone(datetime.timezone.utc).date()


@dataclasses.dataclass(frozen=True)
class RemoteRepo:
    org: str
    name: str
    hostname: str = 'github.com'

    def url(self) -> str:
        return f'https://{self.hostname}/{self.org}/{self.name}'

    def commit_url(self, commit_hash: str) -> str:
        return f'{self.url()}/commit/{commit_hash}'

    def compare_url(self, whence: str, whither: str) -> str:
        return f'{self.url()}/compare/{whence}...{whither}'


@dataclasses.dataclass(frozen=True)
class History:
    '''
    A snapshot of a repository's history.

    tags: newest first
    commits: newest first
    owners: commit-hash -> label of the tag that first released the commit. Commits not yet
            released have no entry.
    remote: the remote repository (used to create hyperlinks), if known
    '''
    tags: tuple[Tag, ...] = ()
    commits: tuple[Commit, ...] = ()
    owners: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)
    remote: RemoteRepo | None = None

    def __post_init__(self):
        object.__setattr__(self, 'tags', tuple(self.tags))
        object.__setattr__(self, 'commits', tuple(self.commits))
        object.__setattr__(self, 'owners', types.MappingProxyType(dict(self.owners)))

    def owner(self, commit: Commit) -> str | None:
        return self.owners.get(commit.hash)

    def commits_of(self, tag: Tag) -> list[Commit]:
        return [c for c in self.commits if self.owners.get(c.hash) == tag.label]

    @property
    def root_hash(self) -> str | None:
        '''
        hash of the oldest known commit (None for empty histories)
        '''
        if not self.commits:
            return None
        return self.commits[-1].hash


@dataclasses.dataclass
class Group:
    '''
    title: None if the group is to be rendered w/o subtitle
    '''
    title: str | None
    commits: list[Commit]


@dataclasses.dataclass
class Document:
    sections: list[str] = dataclasses.field(default_factory=list)
    links: list[str] = dataclasses.field(default_factory=list)
