"""
Detection of client-rendered application shells.

A saved page whose content is filled in by JavaScript has nothing for the
extractor to read. Such pages are reported instead of producing an empty
record.
"""

from __future__ import annotations

import re

_EMPTY_APP_ROOT_RE = re.compile(r"<app-root[^>]*>(\s*)</app-root>", re.IGNORECASE)
_EMPTY_ROOT_DIV_RE = re.compile(r"<div id=\"root\"[^>]*>(\s*)</div>", re.IGNORECASE)
_ROUTER_OUTLET_RE = re.compile(r"<router-outlet[^>]*>", re.IGNORECASE)
_SHELL_MARKER_RE = re.compile(r"<script|<app-root|<router-outlet|window\.app", re.IGNORECASE)

SHELL_MAX_LENGTH = 900

SPA_SHELL_MESSAGE = (
    "Dynamic SPA detected: the page loads its content via JavaScript. "
    "Save the rendered page from the browser and extract that instead."
)


def detect_spa_shell(html: str | None) -> bool:
    """True when raw markup looks like an empty single-page-app shell.

    Run on the markup as received; sanitizing first would strip the
    ``<script>`` tags the short-page check looks for.
    """
    if not html:
        return False
    if _EMPTY_APP_ROOT_RE.search(html) or _EMPTY_ROOT_DIV_RE.search(html) or _ROUTER_OUTLET_RE.search(html):
        return True
    collapsed = " ".join(html.split())
    return len(collapsed) < SHELL_MAX_LENGTH and bool(_SHELL_MARKER_RE.search(html))
