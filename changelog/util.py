# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import copy
import functools
import os
import pathlib

import deepmerge
import yaml


MAX_ELEMENTS_COUNT = 100000


def existing_file(path: str | pathlib.Path):
    if not os.path.isfile(path):
        raise ValueError(f'not an existing file: {path}')
    return path


def load_yaml(stream, max_elements_count: int=MAX_ELEMENTS_COUNT):
    '''
    Parses YAML from the given stream (or str) using yaml.SafeLoader.

    In addition, a mitigation against YAML Bombs (Billion Laughs Attack) is applied (by limiting
    amount of allowed elements)

    @raises ValueError if YAML Bomb was (heuristically) detected.
    '''
    parsed = yaml.load(stream, Loader=yaml.SafeLoader)
    _count_elements(parsed, max_elements_count=max_elements_count)
    return parsed


def parse_yaml_file(path, max_elements_count: int=MAX_ELEMENTS_COUNT):
    existing_file(path)

    with open(path) as f:
        return load_yaml(f, max_elements_count=max_elements_count)


def _count_elements(value, count=0, max_elements_count=MAX_ELEMENTS_COUNT):
    '''
    recursively counts elements contained in the given value. Before each recursion step,
    the amount of encountered elements is checked against a maximum allowed elements count.
    If said threshold is exceeded, recursion is aborted and a `ValueError` is raised.

    @param value: typically a dict or a list. Other types will yield a count of 1
    '''
    if count > max_elements_count:
        raise ValueError('document too large')

    if isinstance(value, dict):
        values = value.values()
    elif isinstance(value, list):
        values = value
    else:
        return 1

    leng = 0
    for v in values:
        leng += _count_elements(v, count=count+leng, max_elements_count=max_elements_count)

    return leng


_merger = deepmerge.Merger(
    [(dict, ['merge']), (list, ['override'])],
    ['override'],
    ['override'],
)


def merge_dicts(base: dict, *other: dict) -> dict:
    '''
    merges copies of the given dict instances and returns the merge result. The arguments remain
    unmodified.

    In case of merge conflicts, values from `other` overwrite values from `base`. Lists are not
    merged, but replaced.
    '''
    return functools.reduce(
        lambda b, o: _merger.merge(b, copy.deepcopy(o)),
        [base, *other],
        {},
    )
