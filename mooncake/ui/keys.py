# mooncake/ui/keys.py
# SPDX-License-Identifier: Apache-2.0
"""Namespaced Streamlit widget keys.

Several tabs render buttons with the same label ("Sign in", "Refresh"), and
Streamlit refuses duplicate element ids. Every widget key is therefore built
as ``"<page>:<name>"`` with a short, hardcoded page namespace ("home", "nft",
"karma", "mine", "sidebar").
"""

from __future__ import annotations


def k(page: str, name: str) -> str:
    """Return the widget key ``"<page>:<name>"``.

    Examples:
        >>> k("nft", "mint")
        'nft:mint'
    """
    return f"{page}:{name}"
