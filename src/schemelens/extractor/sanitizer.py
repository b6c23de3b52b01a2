"""
Markup normalizer applied to raw page markup before it is parsed.
"""

from __future__ import annotations

import re

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_SCRIPT_RE = re.compile(r"<script[\s\S]*?>[\s\S]*?</script\s*>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?>[\s\S]*?</style\s*>", re.IGNORECASE)
_EVENT_DQ_RE = re.compile(r"\son\w+\s*=\s*\"(?:[^\"\\]|\\.)*\"", re.IGNORECASE)
_EVENT_SQ_RE = re.compile(r"\son\w+\s*=\s*'(?:[^'\\]|\\.)*'", re.IGNORECASE)
_EVENT_BARE_RE = re.compile(r"\son\w+\s*=\s*[^\s\"'>]+", re.IGNORECASE)


def sanitize_html(html: str | None) -> str:
    """Strip comments, ``<script>``/``<style>`` blocks and inline event handlers.

    Comments go first so a commented-out ``<script>`` cannot hide the end of
    a real one.
    """
    if not html:
        return ""
    html = _COMMENT_RE.sub("", html)
    html = _SCRIPT_RE.sub("", html)
    html = _STYLE_RE.sub("", html)
    html = _EVENT_DQ_RE.sub("", html)
    html = _EVENT_SQ_RE.sub("", html)
    html = _EVENT_BARE_RE.sub("", html)
    return html
