# mooncake/views/nft.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit view: Edition #2022 (mint page)

Left: the glitch preview. "Glitch it" swaps the neutral artwork for one of the
ten variants, "Reset" brings the neutral artwork back. Nothing here touches
the network.

Right: the mint action, chosen by the `MintFlow` state computed at mount.
  SIGNED_OUT     → "Sign in to mint" (wallet login redirect)
  READY_TO_MINT  → "Mint" (wallet sign redirect for `nft_mint_2022`)
  SUBMITTING     → link to continue in the wallet
  CONFIRMED      → nothing; the banner at the top of the app links out

Errors
------
`flow.submit_mint()` is deliberately not wrapped in try/except: a provider
failure is shown by Streamlit's own exception display.
"""

import streamlit as st

from mooncake.core.constants import (
    MINT_DEPOSIT_YOCTO,
    NEUTRAL_IMAGE,
    asset_url,
    fmt_near,
    variant_urls,
)
from mooncake.core.mint_flow import MintFlow, MintState
from mooncake.core.state import PREVIEW_KEY
from mooncake.core.variants import PreviewImage, VariantSelector
from mooncake.ui.components import html_image, wallet_redirect
from mooncake.ui.keys import k


def _preview(base_url: str) -> PreviewImage:
    ss = st.session_state
    if PREVIEW_KEY not in ss:
        ss[PREVIEW_KEY] = PreviewImage(
            VariantSelector(variant_urls(base_url)), asset_url(base_url, NEUTRAL_IMAGE)
        )
    return ss[PREVIEW_KEY]


def _mint_actions(flow: MintFlow) -> None:
    if flow.state is MintState.SIGNED_OUT:
        if st.button("Sign in to mint", key=k("nft", "sign_in"), type="primary"):
            flow.request_sign_in()
        if flow.redirect is not None:
            wallet_redirect(flow.redirect, "Continue to NEAR Wallet")
        return

    if flow.state is MintState.READY_TO_MINT:
        if st.button("Mint", key=k("nft", "mint"), type="primary"):
            flow.submit_mint()
            st.rerun()
        return

    if flow.state is MintState.SUBMITTING:
        if flow.redirect is not None:
            wallet_redirect(flow.redirect, "Approve the mint in NEAR Wallet")
        else:
            st.caption("Waiting for the wallet…")


def render(ctx: dict) -> None:
    """Render the Edition #2022 tab."""
    st.header("Edition #2022")
    flow: MintFlow = ctx["flow"]
    preview = _preview(ctx["settings"].ASSET_BASE_URL)

    left, right = st.columns(2)
    with left:
        html_image(preview.src, alt="Mooncake preview")
        st.markdown("### 恭喜发财")
        row = st.columns(2)
        with row[0]:
            if st.button("Glitch it", key=k("nft", "glitch"), use_container_width=True):
                preview.click()
                st.rerun()
        with row[1]:
            if st.button(
                "Reset",
                key=k("nft", "reset"),
                disabled=not preview.showing_variant,
                use_container_width=True,
            ):
                preview.pointer_leave()
                st.rerun()

    with right:
        st.write(
            "In 2022, the mooncake NFT got some problems, just like the crypto market. "
            "The Hanzi gets distorted when you mint a new mooncake. "
            "*Maybe it's not a glitch, but a feature?*"
        )
        st.markdown(f"**{fmt_near(MINT_DEPOSIT_YOCTO)}**")
        _mint_actions(flow)
        st.caption(
            "The NFT image will be algorithmically generated and stored on-chain. "
            "Each mint will have a unique glitch."
        )
