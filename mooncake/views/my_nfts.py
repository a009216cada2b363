# mooncake/views/my_nfts.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit view: My Mooncakes

Gallery of the tokens held by the signed-in account, loaded once per browser
session through `my_tokens(account_id)`. Each token's `metadata.media` is a
`data:` URI produced on chain, rendered as-is.
"""

import streamlit as st

from mooncake.core.loaders import LoadState, OneShotLoader
from mooncake.core.state import TOKENS_LOADER_KEY
from mooncake.services.near import TokenRecord
from mooncake.ui.components import image_grid


def _loader(ctx: dict, account_id: str) -> OneShotLoader[TokenRecord]:
    ss = st.session_state
    if TOKENS_LOADER_KEY not in ss:
        ss[TOKENS_LOADER_KEY] = OneShotLoader(
            "my_tokens", lambda: ctx["provider"].my_tokens(account_id)
        )
    return ss[TOKENS_LOADER_KEY]


def render(ctx: dict) -> None:
    """Render the My Mooncakes tab."""
    st.header("My Mooncakes")

    account_id = ctx["account_id"]
    if not account_id:
        st.info("Sign in with NEAR Wallet to see your Mooncakes.")
        return

    loader = _loader(ctx, account_id)
    loader.load()

    if loader.state is LoadState.FAILED:
        st.warning(f"Could not load your tokens: {loader.error}")
    elif not loader.items:
        st.info("No Mooncakes yet. Mint one on the Edition #2022 tab!")
    else:
        image_grid([t.media for t in loader.items if t.media], columns=3)

    st.caption(
        "The NFT image will be algorithmically generated and stored on-chain. "
        "Each mint will have a unique glitch."
    )
