# mooncake/ui/components.py
# SPDX-License-Identifier: Apache-2.0
"""Reusable Streamlit UI components.

Currently provided:
  • table_karmaboard(): ranked Karmaboard table (rows already in display order).
  • image_grid(): fixed-size image tiles laid out in columns.
  • wallet_redirect(): a same-tab link that sends the visitor to the wallet.
  • confirmation_banner(): success banner after a mint redirect.

Images are emitted as raw `<img>` tags rather than `st.image` so that relative
locators (Streamlit static serving) and `data:` URIs from the contract both
work unchanged.
"""

from __future__ import annotations

import html
import re
from collections.abc import Sequence

import streamlit as st

from mooncake.services.near import KarmaEntry, WalletRedirect

# Implicit NEAR accounts are 64 lowercase hex chars; elide them like an address.
_IMPLICIT_RE = re.compile(r"[0-9a-f]{64}")
_ACCT_PREFIX = 6
_ACCT_SUFFIX = 4

_TILE_STYLE = "width:100%;max-width:18rem;border:1px solid #fff;border-radius:0.375rem;"


def _short_account(
    account_id: str, *, prefix: int = _ACCT_PREFIX, suffix: int = _ACCT_SUFFIX
) -> str:
    """Return a display form of an account id.

    Named accounts ("alice.testnet") are shown as-is, however long; implicit
    (64 hex chars) accounts are elided to "abcdef…1234". Empty input yields "-".
    """
    if not account_id:
        return "-"
    if not _IMPLICIT_RE.fullmatch(account_id):
        return account_id
    return f"{account_id[:prefix]}…{account_id[-suffix:]}"


def karmaboard_rows(entries: Sequence[KarmaEntry]) -> list[dict[str, object]]:
    """Build the table records for `table_karmaboard`, preserving order."""
    return [
        {"Rank": i, "Account": _short_account(e.account_id), "Karma": f"{e.karma:,}"}
        for i, e in enumerate(entries, start=1)
    ]


def table_karmaboard(entries: Sequence[KarmaEntry]) -> None:
    """Render the Karmaboard. `entries` must already be in display order."""
    rows = karmaboard_rows(entries)
    if not rows:
        st.info("Nobody has earned karma yet. Send a friend a Mooncake!")
        return
    st.table(rows)


def html_image(src: str, alt: str = "") -> None:
    st.markdown(
        f'<img src="{html.escape(src, quote=True)}" alt="{html.escape(alt)}" '
        f'style="{_TILE_STYLE}"/>',
        unsafe_allow_html=True,
    )


def image_grid(sources: Sequence[str], *, columns: int = 3) -> None:
    """Render `sources` as image tiles, `columns` per row. Empty renders nothing."""
    for start in range(0, len(sources), columns):
        row = st.columns(columns)
        for col, src in zip(row, sources[start : start + columns]):
            with col:
                html_image(src)


def wallet_redirect(redirect: WalletRedirect, label: str) -> None:
    """Same-tab link to the wallet.

    Streamlit cannot navigate the top window from Python, so the visitor
    follows this link to leave the page.
    """
    st.markdown(
        f'<a href="{html.escape(redirect.url, quote=True)}" target="_self">'
        f"<b>{html.escape(label)} →</b></a>",
        unsafe_allow_html=True,
    )


def confirmation_banner(tx_hash: str, explorer_url: str, collectibles_url: str) -> None:
    st.success(
        f"🎉 Your Mooncake is on its way! Transaction `{tx_hash}`  \n"
        f"[View on NEAR Explorer]({explorer_url}) · "
        f"[See it in your wallet]({collectibles_url})"
    )
