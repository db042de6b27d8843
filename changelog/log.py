# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import copy
import logging
import sys

import termcolor


class ChangelogFormatter(logging.Formatter):
    level_colors = {
        logging.DEBUG: 'blue',
        logging.INFO: 'green',
        logging.WARNING: 'yellow',
        logging.ERROR: 'red',
        logging.CRITICAL: 'red',
    }

    def __init__(self, *args, stream=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.stream = stream or sys.stderr

    def color_level_name(self, level_name: str, level_number: int) -> str:
        if not (color := self.level_colors.get(level_number)):
            return level_name
        # colouring depends on the handler's stream (stderr), not on stdout
        return termcolor.colored(level_name, color, attrs=['bold'], force_color=True)

    def formatMessage(self, record):
        record_copy = copy.copy(record)
        levelname = record_copy.levelname
        if self.stream.isatty():
            levelname = self.color_level_name(levelname, record_copy.levelno)
        record_copy.__dict__['levelprefix'] = levelname
        return super().formatMessage(record_copy)


def default_fmt_string() -> str:
    return '%(asctime)s [%(levelprefix)s] %(name)s: %(message)s'


def configure_default_logging(
    level=None,
    force=True,
):
    '''
    configures the root logger to log to stderr (stdout is reserved for the rendered changelog)
    '''
    if not level:
        level = logging.INFO

    # make sure to have a clean root logger (in case setup is called multiple times)
    if force:
        for h in list(logging.root.handlers):
            logging.root.removeHandler(h)
            h.close()

    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(ChangelogFormatter(fmt=default_fmt_string(), stream=sys.stderr))

    logging.root.addHandler(hdlr=sh)
    logging.root.setLevel(level=level)
