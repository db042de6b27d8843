# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import datetime
import logging

import changelog.assign
import changelog.classify
import changelog.markdown
import changelog.model as cm


logger = logging.getLogger(__name__)


def build_document(
    history: cm.History,
    rules: collections.abc.Iterable[cm.Rule]=cm.DEFAULT_RULES,
    style: cm.RenderStyle=cm.RenderStyle.LINKED,
) -> cm.Document:
    rules = changelog.classify.validate_rules(rules)
    doc = cm.Document()
    changelog.markdown.emit_preamble(doc)

    tags = history.tags
    for idx, tag in enumerate(tags):
        # tags are ordered newest-first; oldest tag has no parent
        parent = tags[idx + 1] if idx + 1 < len(tags) else None
        commits = history.commits_of(tag)
        logger.debug(f'{tag.label=}: {len(commits)} commit(s)')

        changelog.markdown.emit_tag_section(
            doc=doc,
            tag=tag,
            groups=changelog.classify.classify(commits, rules),
            style=style,
            remote=history.remote,
            parent=parent,
            root_hash=history.root_hash,
        )

    return doc


def generate(
    history: cm.History,
    label: str | None=None,
    rules: collections.abc.Iterable[cm.Rule]=cm.DEFAULT_RULES,
    style: cm.RenderStyle=cm.RenderStyle.LINKED,
    date: datetime.date | None=None,
) -> str:
    '''
    renders the changelog for the given history.

    label: if passed, all unreleased commits are listed below a pending tag of that name
    date: the pending tag's date (defaults to now)
    '''
    if label:
        history = changelog.assign.assign_pending(
            history=history,
            label=label,
            date=date,
        )
    elif history.commits and history.commits[0].hash not in history.owners:
        logger.info('history contains unreleased commits, which will be omitted')

    doc = build_document(
        history=history,
        rules=rules,
        style=style,
    )
    return changelog.markdown.render(doc)
