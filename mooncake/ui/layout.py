# mooncake/ui/layout.py
# SPDX-License-Identifier: Apache-2.0
"""Page-level layout helpers.

`configure_page` must run before any other Streamlit element is created
(Streamlit enforces that `st.set_page_config` comes first), so the entrypoint
calls it on its very first line of UI work. `fatal_error` is the single place
where the app gives up on rendering: it is used for bootstrap failures only.
"""

from __future__ import annotations

import streamlit as st


def configure_page(title: str) -> None:
    """Set the browser title and wide layout, then print the in-app title."""
    st.set_page_config(page_title=title, page_icon="🥮", layout="wide")
    st.title(f"🥮 {title}")


def fatal_error(exc: BaseException) -> None:
    """Render a top-level error and stop the script run. Never returns."""
    st.error(f"Error: `{exc}`")
    st.stop()
