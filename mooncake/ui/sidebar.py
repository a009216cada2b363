# mooncake/ui/sidebar.py
# SPDX-License-Identifier: Apache-2.0
"""Sidebar composition: wallet status, network and quick links.

Behavior
--------
- Signed out: a "Sign in with NEAR Wallet" button. Clicking it asks the
  session for the login redirect and shows the link the visitor follows.
- Signed in: the account id and a "Sign out" button. Signing out forgets the
  account and drops everything computed at mount, the same as a page reload.
- Below: the network / contract the app is bound to and links to the explorer
  and the wallet's collectibles tab.

Returns
-------
`render_sidebar_and_status()` returns the context dict passed to every view:
- `settings`: the loaded settings dataclass instance.
- `provider`: the visitor's `NearWalletProvider`.
- `session`: the `WalletSession` wrapping it.
- `flow`: the `MintFlow` computed at mount.
- `account_id`: current account id or `None`.
"""

from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from mooncake.core.config import settings
from mooncake.core.mint_flow import MintFlow
from mooncake.core.session import WalletSession
from mooncake.core.state import reset_mount
from mooncake.services.near import NearWalletProvider
from mooncake.ui.components import wallet_redirect
from mooncake.ui.keys import k

log = logging.getLogger(__name__)


def _wallet_status(session: WalletSession) -> None:
    account_id = session.current_account_id()
    if account_id:
        st.sidebar.write(f"**Signed in**  `{account_id}`")
        if st.sidebar.button("Sign out", key=k("sidebar", "sign_out")):
            session.sign_out()
            reset_mount()
            st.rerun()
        return

    st.sidebar.write("**Not signed in**")
    if st.sidebar.button("Sign in with NEAR Wallet", key=k("sidebar", "sign_in")):
        with st.sidebar:
            wallet_redirect(session.request_sign_in(), "Continue to NEAR Wallet")


def render_sidebar_and_status(
    provider: NearWalletProvider, session: WalletSession, flow: MintFlow
) -> dict[str, Any]:
    """Render the sidebar and return the context dict for the views."""
    st.sidebar.header("Wallet")
    _wallet_status(session)

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"**Network**  `{settings.NEAR_ENV}`  \n"
        f"**Contract**  `{provider.contract_name}`"
    )
    st.sidebar.markdown(
        f"[NEAR Explorer]({provider.explorer_url}) · "
        f"[My collectibles]({provider.collectibles_url()})"
    )

    return dict(
        settings=settings,
        provider=provider,
        session=session,
        flow=flow,
        account_id=session.current_account_id(),
    )
