"""Bracket link markup: ``[PageName]`` becomes a link to ``/view/PageName``."""

import html
import re

# Pattern for page references: [PageName]
# Bytes pattern, so \w is the ASCII word class.
LINK_PATTERN = re.compile(rb"\[(\w+)\]")

LINK_TEMPLATE = rb'<a href="/view/\1">\1</a>'


def filter_links(body: bytes, escape: bool = False) -> bytes:
    """Replace every ``[Word]`` reference in ``body`` with an anchor element.

    Replacement output is not rescanned, so nested or adjacent brackets are
    handled left to right without recursion.

    Args:
        body: Raw page body.
        escape: HTML-escape the body before substituting links. Bracket
            references survive escaping unchanged.

    Returns:
        The body with references turned into HTML links.
    """
    if escape:
        body = html.escape(body.decode("utf-8", errors="replace")).encode("utf-8")
    return LINK_PATTERN.sub(LINK_TEMPLATE, body)
