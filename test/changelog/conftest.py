# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import datetime
import logging

import pytest

import changelog.model as cm


@pytest.fixture
def commit():
    def _commit(hash: str, header: str='some change', type: str | None=None):
        # pad to full length (short-hashes are derived from the first characters)
        return cm.Commit(
            hash=hash.ljust(40, '0'),
            header=header,
            type=type,
        )
    return _commit


@pytest.fixture
def tag():
    def _tag(label: str, hash: str, date=datetime.date(2024, 1, 31), version=None):
        return cm.Tag(
            label=label,
            version=version,
            date=date,
            hash=hash.ljust(40, '0'),
        )
    return _tag


@pytest.fixture
def remote():
    return cm.RemoteRepo(org='gardener', name='cc-utils')


@pytest.fixture
def restore_logging():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    for h in list(logging.root.handlers):
        logging.root.removeHandler(h)
    for h in handlers:
        logging.root.addHandler(h)
    logging.root.setLevel(level)
