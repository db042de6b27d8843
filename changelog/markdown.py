# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging

import changelog.model as cm


logger = logging.getLogger(__name__)


PREAMBLE = '''\
# Changelog

All notable changes to this project will be documented in this file.'''


def link_definition(name: str, url: str) -> str:
    # markdown reference-style link (links are not inlined)
    return f'[{name}]: {url}'


def effective_style(
    style: cm.RenderStyle,
    remote: cm.RemoteRepo | None,
) -> cm.RenderStyle:
    style = cm.RenderStyle(style)
    if style is cm.RenderStyle.LINKED and not remote:
        return cm.RenderStyle.PLAIN
    return style


def emit_preamble(doc: cm.Document):
    doc.sections.append(PREAMBLE)


def emit_commit_list(
    doc: cm.Document,
    title: str | None,
    commits: collections.abc.Iterable[cm.Commit],
    style: cm.RenderStyle=cm.RenderStyle.PLAIN,
    remote: cm.RemoteRepo | None=None,
):
    if title:
        doc.sections.append(f'### {title}')

    style = effective_style(style, remote)

    lines = []
    for commit in commits:
        match style:
            case cm.RenderStyle.LINKED:
                lines.append(f'- {commit.header} ([{commit.short_hash}])')
                doc.links.append(
                    link_definition(commit.short_hash, remote.commit_url(commit.hash)),
                )
            case cm.RenderStyle.PLAIN:
                lines.append(f'- {commit.header} ({commit.short_hash})')
            case _:
                raise NotImplementedError(style)

    doc.sections.append('\n'.join(lines))


def emit_tag_section(
    doc: cm.Document,
    tag: cm.Tag,
    groups: collections.abc.Iterable[cm.Group],
    style: cm.RenderStyle=cm.RenderStyle.PLAIN,
    remote: cm.RemoteRepo | None=None,
    parent: cm.Tag | None=None,
    root_hash: str | None=None,
):
    '''
    appends the section for the given tag (heading, followed by the given groups of commits).

    parent: the next-older tag (None for the oldest tag)
    root_hash: hash of the oldest known commit; used as comparison-base for the oldest tag
    '''
    date = tag.utc_date.strftime('%Y-%m-%d')
    style = effective_style(style, remote)

    if parent:
        whence = parent.version
    else:
        whence = root_hash

    if style is cm.RenderStyle.LINKED and whence:
        doc.links.append(
            link_definition(tag.version, remote.compare_url(whence, tag.version)),
        )
        doc.sections.append(f'## [{tag.version}] - {date}')
    else:
        if style is cm.RenderStyle.LINKED:
            logger.debug(f'no comparison-base known for {tag.version=} - omitting link')
        doc.sections.append(f'## {tag.version} - {date}')

    for group in groups:
        if not group.commits:
            continue
        emit_commit_list(
            doc=doc,
            title=group.title,
            commits=group.commits,
            style=style,
            remote=remote,
        )

    if remote and parent:
        link_name = f'{parent.version}...{tag.version}'
        doc.sections.append(f'Full Changelog: [{link_name}]')
        doc.links.append(
            link_definition(link_name, remote.compare_url(parent.version, tag.version)),
        )


def render(doc: cm.Document) -> str:
    sections = '\n\n'.join(doc.sections)
    links = '\n'.join(doc.links)
    full = '\n\n'.join((sections, links))

    return f'{full.strip()}\n'
