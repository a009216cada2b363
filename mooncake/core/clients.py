# mooncake/core/clients.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Client factories for the NEAR provider used by the Mooncake front end.

- `get_rpc()`      → process-wide `NearRpcClient`, cached with
                      `@st.cache_resource` so every visitor shares one
                      `requests.Session` (connection pooling, one TLS setup).
- `auth_store()`   → this visitor's login cookie store.
- `get_provider()` → per-visitor `NearWalletProvider`, kept in
                      `st.session_state` and seeded from the login cookie.

If endpoints change at runtime, clear Streamlit's resource cache to force a
new RPC client.
"""

import streamlit as st

from mooncake.services.near import AuthStore, NearRpcClient, NearWalletProvider

from .config import settings
from .cookies import CookieAuthStore
from .state import AUTH_COOKIE_WRITES_KEY

PROVIDER_KEY = "NEAR_PROVIDER"


@st.cache_resource(show_spinner=False)
def get_rpc() -> NearRpcClient:
    """Construct (once) and return the shared JSON-RPC client.

    No health check here; `NearWalletProvider.init_contract()` does that.
    """
    return NearRpcClient(settings.NODE_URL, timeout=settings.RPC_TIMEOUT)


def auth_store() -> AuthStore:
    ss = st.session_state
    if AUTH_COOKIE_WRITES_KEY not in ss:
        ss[AUTH_COOKIE_WRITES_KEY] = []
    return CookieAuthStore(st.context.cookies, ss[AUTH_COOKIE_WRITES_KEY])


def get_provider() -> NearWalletProvider:
    """Return this visitor's provider, creating it on the first run."""
    ss = st.session_state
    if PROVIDER_KEY not in ss:
        ss[PROVIDER_KEY] = NearWalletProvider(get_rpc(), settings, store=auth_store())
    return ss[PROVIDER_KEY]
