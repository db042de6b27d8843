# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import datetime
import logging

import changelog.model as cm


logger = logging.getLogger(__name__)


def pending_tag(
    label: str,
    date: datetime.date | None=None,
) -> cm.Tag:
    if date is None:
        date = datetime.datetime.now(tz=datetime.timezone.utc)

    return cm.Tag(
        label=label,
        version=label,
        date=date,
        hash='',
    )


def assign_pending(
    history: cm.History,
    label: str,
    date: datetime.date | None=None,
) -> cm.History:
    '''
    returns a copy of the given history, with a new (pending) tag named `label` prepended to
    its tags. All commits not yet released (i.e. newer than the newest owned commit) are
    attached to the pending tag.

    Existing ownership is never changed. Note that each call will prepend another pending tag;
    hence this function should be called (at most) once per changelog.
    '''
    if label in {t.label for t in history.tags}:
        raise ValueError(f'cannot create pending tag: {label=} is already an existing tag')

    tag = pending_tag(label=label, date=date)
    owners = dict(history.owners)

    attached = 0
    for commit in history.commits:
        # older commits are owned by previous releases
        if commit.hash in owners:
            break
        owners[commit.hash] = tag.label
        attached += 1

    logger.debug(f'attached {attached} unreleased commit(s) to pending tag {label}')

    return dataclasses.replace(
        history,
        tags=(tag, *history.tags),
        owners=owners,
    )
