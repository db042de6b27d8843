#! /usr/bin/env python3
# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import sys

import dacite

import changelog.config
import changelog.generate
import changelog.log
import changelog.model as cm


logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    ''' Parses CLI for changelog generation '''
    parser = argparse.ArgumentParser(
        description='Render a markdown changelog from a history snapshot (YAML)',
    )
    parser.add_argument(
        'history',
        help='YAML file containing tags and commits (newest-first)',
    )
    parser.add_argument(
        '--release', '-r',
        default=None,
        help='if set, list unreleased commits below a pending release of this name',
    )
    parser.add_argument(
        '--style', '-s',
        choices=[str(s) for s in cm.RenderStyle],
        default=None,
        help='overwrites configured render-style',
    )
    parser.add_argument(
        '--cfg', '-c',
        default=None,
        help='YAML file containing changelog-configuration (style, rules)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    changelog.log.configure_default_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        cfg = changelog.config.load_config(cfg_file=args.cfg)
        history = changelog.config.load_history(args.history)
    except (ValueError, dacite.DaciteError) as e:
        logger.error(f'invalid input: {e}')
        sys.exit(1)

    style = cm.RenderStyle(args.style) if args.style else cfg.style
    if style is cm.RenderStyle.LINKED and not history.remote:
        logger.info('no remote repository known - will not render links')

    try:
        md = changelog.generate.generate(
            history=history,
            label=args.release,
            rules=cfg.rules,
            style=style,
        )
    except ValueError as e:
        logger.error(f'cannot render changelog: {e}')
        sys.exit(1)

    sys.stdout.write(md)


if __name__ == '__main__':
    main()
