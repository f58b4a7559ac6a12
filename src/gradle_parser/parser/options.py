# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Feature flags controlling what the parser extracts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserOptions:
    """Independent feature flags. All are enabled by default.

    Attributes:
        skip_comments: Strip comments from opaque snippets (extension and
            task bodies). When False the snippets are kept verbatim.
        collect_raw_content: Keep the input text in ``ParseResult.raw_text``.
        parse_plugins: Extract plugins.
        parse_dependencies: Extract dependencies.
        parse_repositories: Extract repositories.
        parse_tasks: Extract tasks.
    """

    skip_comments: bool = True
    collect_raw_content: bool = True
    parse_plugins: bool = True
    parse_dependencies: bool = True
    parse_repositories: bool = True
    parse_tasks: bool = True
