# mooncake/core/state.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Session-scoped UI state helpers for the Mooncake front end.

A Streamlit session is one page load in the visitor's browser. Everything the
app computes "once at mount" is stored here under a fixed key and reused on
every rerun of that session:

- the `MintFlow` derived from the startup URL
- the two one-shot loaders
- the mint preview image

`reset_mount()` drops those keys, which is what a full page reload would do.
"""

from collections.abc import Mapping
from typing import Final

import streamlit as st

from mooncake.core.loaders import OneShotLoader

MINT_FLOW_KEY: Final[str] = "MINT_FLOW"
KARMA_LOADER_KEY: Final[str] = "KARMA_LOADER"
TOKENS_LOADER_KEY: Final[str] = "TOKENS_LOADER"
PREVIEW_KEY: Final[str] = "PREVIEW_IMAGE"
# Not a mount key: queued cookie writes must survive `reset_mount()`.
AUTH_COOKIE_WRITES_KEY: Final[str] = "AUTH_COOKIE_WRITES"

MOUNT_KEYS: Final[tuple[str, ...]] = (
    MINT_FLOW_KEY,
    KARMA_LOADER_KEY,
    TOKENS_LOADER_KEY,
    PREVIEW_KEY,
)

__all__ = [
    "AUTH_COOKIE_WRITES_KEY",
    "KARMA_LOADER_KEY",
    "MINT_FLOW_KEY",
    "PREVIEW_KEY",
    "TOKENS_LOADER_KEY",
    "consume_params",
    "location_search",
    "reset_mount",
]


def location_search(params: Mapping[str, str] | None = None) -> str:
    """Rebuild the browser's ``location.search`` from the query parameters.

    Values are joined as they come, without re-escaping, so
    ``?transactionHashes=abc`` round-trips to the same string. Returns an empty
    string when the URL has no query.
    """
    if params is None:
        params = st.query_params.to_dict()
    if not params:
        return ""
    return "?" + "&".join(f"{key}={value}" for key, value in params.items())


def consume_params(names: tuple[str, ...]) -> None:
    """Remove the given keys from the address bar (e.g. a login callback)."""
    for name in names:
        if name in st.query_params:
            del st.query_params[name]


def reset_mount() -> None:
    """Forget everything computed at mount; the next run re-derives it.

    Loaders are discarded first so a fetch still in flight drops its result.
    """
    for key in MOUNT_KEYS:
        stale = st.session_state.pop(key, None)
        if isinstance(stale, OneShotLoader):
            stale.discard()
