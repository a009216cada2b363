# mooncake/core/cookies.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Browser-cookie storage for the wallet login.

NEAR Wallet sends the visitor back to a brand new page load, and every page
load is a new Streamlit session. The login callback (`?account_id=...`) is
therefore saved to a first-party cookie and read back from
`st.context.cookies` when the next session builds its provider.

Streamlit only exposes request cookies read-only, so writes are queued as
`Set-Cookie` strings (built with `http.cookies`) and applied by a zero-height
component that assigns `document.cookie` on the top-level page.
"""

import json
import logging
from collections.abc import Mapping, MutableSequence
from http.cookies import SimpleCookie
from typing import Final
from urllib.parse import quote, unquote

import streamlit as st
import streamlit.components.v1 as components

from mooncake.core.state import AUTH_COOKIE_WRITES_KEY

log = logging.getLogger(__name__)

AUTH_COOKIE: Final[str] = "mooncake_wallet_auth"
AUTH_COOKIE_MAX_AGE: Final[int] = 30 * 24 * 3600


def auth_cookie_header(
    auth: Mapping[str, str] | None, *, max_age: int = AUTH_COOKIE_MAX_AGE
) -> str:
    """Build the cookie assignment for `auth`; `None` expires the cookie."""
    jar: SimpleCookie = SimpleCookie()
    jar[AUTH_COOKIE] = quote(json.dumps(dict(auth or {}), separators=(",", ":")), safe="")
    morsel = jar[AUTH_COOKIE]
    morsel["path"] = "/"
    morsel["max-age"] = max_age if auth else 0
    morsel["samesite"] = "Lax"
    return morsel.OutputString()


def parse_auth_cookie(raw: str | None) -> dict[str, str] | None:
    """Decode the stored login; anything unreadable counts as signed out."""
    if not raw:
        return None
    try:
        data = json.loads(unquote(raw))
    except ValueError:
        log.warning("Ignoring malformed %s cookie", AUTH_COOKIE)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("account_id"), str):
        return None
    return {str(k): str(v) for k, v in data.items() if v}


class CookieAuthStore:
    """`AuthStore` over the request cookies plus a queue of pending writes."""

    def __init__(self, cookies: Mapping[str, str], pending: MutableSequence[str]) -> None:
        self._cookies = cookies
        self._pending = pending

    def load(self) -> dict[str, str] | None:
        return parse_auth_cookie(self._cookies.get(AUTH_COOKIE))

    def save(self, auth: Mapping[str, str]) -> None:
        self._pending.append(auth_cookie_header(auth))

    def clear(self) -> None:
        self._pending.append(auth_cookie_header(None))


def flush_cookie_writes() -> int:
    """Apply the queued cookie writes in the browser; returns how many ran."""
    pending = st.session_state.get(AUTH_COOKIE_WRITES_KEY)
    if not pending:
        return 0
    script = "".join(f"parent.document.cookie = {json.dumps(h)};" for h in pending)
    components.html(f"<script>{script}</script>", height=0)
    count = len(pending)
    del pending[:]
    return count
