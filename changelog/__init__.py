# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
Changelog Generator

Renders a markdown changelog from a snapshot of a repository's history (tags and commits, both
ordered newest-first).

Commits not yet covered by any release tag may be attached to a "pending" tag (the release that
is about to be created). For each tag, commits are grouped by their (conventional-commit) type,
according to an ordered list of rules. Unless disabled, commits and tags are referenced using
markdown reference-style links pointing to the remote repository (if known).

Retrieving history from git, as well as parsing commit messages, is left to callers.
'''
