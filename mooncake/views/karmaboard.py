# mooncake/views/karmaboard.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit view: Karmaboard

Loads `top_rank()` once per browser session and shows it highest karma first.
The contract keeps its rank ascending, so the view flips a copy; the stored
tuple is never reordered.
"""

import streamlit as st

from mooncake.core.loaders import LoadState, OneShotLoader, ranked_for_display
from mooncake.core.state import KARMA_LOADER_KEY
from mooncake.services.near import KarmaEntry
from mooncake.ui.components import table_karmaboard


def _loader(ctx: dict) -> OneShotLoader[KarmaEntry]:
    ss = st.session_state
    if KARMA_LOADER_KEY not in ss:
        ss[KARMA_LOADER_KEY] = OneShotLoader("karmaboard", ctx["provider"].top_rank)
    return ss[KARMA_LOADER_KEY]


def render(ctx: dict) -> None:
    """Render the Karmaboard tab."""
    st.header("The Karmaboard")
    st.caption("Sending your friends Mooncake earns karma for you.")

    loader = _loader(ctx)
    loader.load()

    if loader.state is LoadState.FAILED:
        st.warning(f"Karmaboard unavailable: {loader.error}")
        return
    table_karmaboard(ranked_for_display(loader.items))
