# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging

import changelog.model as cm


logger = logging.getLogger(__name__)


def validate_rules(rules: collections.abc.Iterable[cm.Rule]) -> tuple[cm.Rule, ...]:
    rules = tuple(rules)

    catch_all_rules = [r for r in rules if r.kind is cm.RuleKind.OTHERS]
    if len(catch_all_rules) > 1:
        raise ValueError(
            f'at most one rule of kind {cm.RuleKind.OTHERS} is allowed, found: '
            f'{", ".join(r.title for r in catch_all_rules)}'
        )

    return rules


def declared_types(rules: collections.abc.Iterable[cm.Rule]) -> set[str]:
    return {
        rule.type.lower() for rule in rules
        if rule.kind is cm.RuleKind.TYPE
    }


def matches(
    rule: cm.Rule,
    commit: cm.Commit,
    claimed_types: set[str],
) -> bool:
    match rule.kind:
        case cm.RuleKind.BREAKING:
            return commit.is_breaking
        case cm.RuleKind.TYPE:
            return commit.base_type is not None and commit.base_type == rule.type.lower()
        case cm.RuleKind.OTHERS:
            return commit.base_type not in claimed_types
        case _:
            raise NotImplementedError(rule.kind)


def classify(
    commits: collections.abc.Iterable[cm.Commit],
    rules: collections.abc.Iterable[cm.Rule]=cm.DEFAULT_RULES,
) -> list[cm.Group]:
    '''
    groups the given commits according to the given rules (in rule-order). Each rule is evaluated
    independently, so a commit may be contained in more than one group (e.g. a breaking feature
    will be listed both as breaking change and as feature). Empty groups are omitted.

    If none of the commits matched a rule other than the catch-all rule (e.g. for histories not
    following conventional-commits), the catch-all group is returned w/o title.
    '''
    commits = list(commits)
    rules = validate_rules(rules)
    claimed_types = declared_types(rules)

    groups = []
    has_typed_group = False
    for rule in rules:
        matching = [c for c in commits if matches(rule, c, claimed_types)]
        if not matching:
            continue

        if rule.kind is not cm.RuleKind.OTHERS:
            has_typed_group = True

        groups.append((rule, cm.Group(title=rule.title, commits=matching)))

    if not has_typed_group:
        for rule, group in groups:
            if rule.kind is cm.RuleKind.OTHERS:
                logger.debug(f'no typed commits found - omitting title {group.title=}')
                group.title = None

    return [group for _, group in groups]
