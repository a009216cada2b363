# mooncake/app.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

__doc__ = """Mooncake NFT: Edition #2022 front end (Streamlit).

Run with `streamlit run mooncake/app.py`. This module wires up logging, the
NEAR provider bootstrap, the once-per-page-load mint flow, the sidebar and the
tab set.

Tabs (left-to-right order):
  1) Home             : intro and the Edition #2022 gallery.
  2) Edition #2022    : glitch preview, sign in, mint.
  3) My Mooncakes     : tokens held by the signed-in account.
  4) Karmaboard       : top karma ranking from the contract.

Startup order (every rerun, work is skipped once cached in session state):
  1) Bootstrap the provider; on failure render a fatal error and stop.
  2) Snapshot the query string, then consume a wallet login callback and
     write the login cookie the next page load signs in from.
  3) Compute the MintFlow once per page load from sign-in + query string.
  4) Render the sidebar (returns `ctx`), the confirmation banner, the tabs.
"""

# ────────────────────── sys.path bootstrap for local packages ─────────────────
# `streamlit run` executes this file as a script; put the repository root on
# sys.path so `import mooncake` works without `pip install -e .`.
import pathlib
import sys

ROOT_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))
# ──────────────────────────────────────────────────────────────────────────────

import logging
from typing import Final

import streamlit as st

from mooncake.core.clients import get_provider
from mooncake.core.config import settings
from mooncake.core.cookies import flush_cookie_writes
from mooncake.core.mint_flow import MintFlow, MintState
from mooncake.core.session import WalletSession
from mooncake.core.state import MINT_FLOW_KEY, consume_params, location_search, reset_mount
from mooncake.services.near import NearError
from mooncake.ui.components import confirmation_banner
from mooncake.ui.layout import configure_page, fatal_error
from mooncake.ui.sidebar import render_sidebar_and_status
from mooncake.views import home, karmaboard, my_nfts, nft

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)-8s: %(message)s"
)
log = logging.getLogger(__name__)

configure_page(title="Mooncake NFT")

# ─────────────────────────────── Bootstrap ────────────────────────────────────
provider = get_provider()
try:
    provider.init_contract()
except NearError as e:
    log.exception("Provider bootstrap failed")
    fatal_error(e)

# Snapshot the URL before the login callback parameters are stripped from it.
search = location_search()
if provider.complete_sign_in(st.query_params.to_dict()):
    consume_params(provider.AUTH_PARAMS)
    reset_mount()
flush_cookie_writes()

session = WalletSession(provider)
ss = st.session_state
if MINT_FLOW_KEY not in ss:
    ss[MINT_FLOW_KEY] = MintFlow.at_mount(session, search)
flow: MintFlow = ss[MINT_FLOW_KEY]

ctx: dict = render_sidebar_and_status(provider, session, flow)

if flow.state is MintState.CONFIRMED:
    confirmation_banner(flow.transaction_hash, flow.explorer_url, flow.collectibles_url)

# ─────────────────────────────── Tabs wiring ──────────────────────────────────
TAB_TITLES: Final[list[str]] = [
    "Home",
    "Edition #2022",
    "My Mooncakes",
    "Karmaboard",
]

tab1, tab2, tab3, tab4 = st.tabs(TAB_TITLES)

with tab1:
    home.render(ctx)

with tab2:
    nft.render(ctx)  # preview + sign in / mint

with tab3:
    my_nfts.render(ctx)

with tab4:
    karmaboard.render(ctx)
