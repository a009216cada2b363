# mooncake/views/home.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit view: Home

Static introduction to the Mooncake NFT plus the Edition #2022 gallery. The
gallery shows the first six glitch variants; one of them, picked at random on
every rerun with a bound of 6, is featured above the grid.
"""

import streamlit as st

from mooncake.core.constants import (
    EDITION_2021_IMAGE,
    GALLERY_VARIANTS,
    asset_url,
    variant_urls,
)
from mooncake.core.variants import VariantSelector
from mooncake.ui.components import html_image, image_grid


def render(ctx: dict) -> None:
    """Render the Home tab."""
    base = ctx["settings"].ASSET_BASE_URL

    left, right = st.columns(2)
    with left:
        st.subheader("Mooncake")
        st.caption("*noun*")
        st.write(
            "a Chinese bakery product traditionally eaten during the "
            "[Mid-Autumn Festival](https://www.google.com/search?q=mid-autumn+festival). "
            "Often gifted to family and friends to give best wishes."
        )
    with right:
        st.subheader("Mooncake NFT")
        st.caption("*noun*")
        st.write(
            "a humble virtual (and on chain) Mooncake. Dairy free. Zero calories. "
            "Keeps you in a good mood when added to your wallet. Also a great gift "
            "for your (crypto) friends."
        )

    st.markdown("---")
    st.subheader("Edition #2022: A Glitch or a Feature?")
    st.write(
        "In 2022, the mooncake NFT got some problems, just like the crypto market. "
        "The Hanzi gets distorted when you mint a new mooncake. It's different every "
        "time. *Maybe it's not a glitch, but a feature?*"
    )

    gallery = VariantSelector(variant_urls(base)).head(GALLERY_VARIANTS)
    featured, _ = st.columns([1, 2])
    with featured:
        html_image(gallery.pick_variant(), alt="Featured glitch")
    image_grid(gallery.variants, columns=3)

    st.markdown("---")
    st.subheader("See more past editions")
    st.markdown("**Edition #2021**")
    html_image(asset_url(base, EDITION_2021_IMAGE), alt="Hash Nuts")
