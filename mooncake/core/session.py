# mooncake/core/session.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Wallet session: a read-through view of the provider's sign-in state.

`WalletSession` never caches anything itself. Every call goes back to the
provider, so the answer is always whatever the provider holds right now; a new
page load therefore re-derives the signed-in status from scratch.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mooncake.services.near import NearWalletProvider, WalletRedirect


@dataclass(frozen=True)
class SessionState:
    signed_in: bool
    account_id: str | None = None


class WalletSession:
    """Sign-in / sign-out / identity primitives of one visitor."""

    def __init__(self, provider: NearWalletProvider) -> None:
        self.provider = provider

    def is_signed_in(self) -> bool:
        return self.provider.is_signed_in()

    def current_account_id(self) -> str | None:
        """Account id of the signed-in visitor, or None when signed out."""
        if not self.provider.is_signed_in():
            return None
        return self.provider.account_id

    def request_sign_in(self) -> WalletRedirect:
        """Ask the provider for the wallet login navigation.

        Control never comes back to this page run: the visitor follows the
        redirect and the next page load re-evaluates `is_signed_in()`.
        """
        return self.provider.request_sign_in()

    def sign_out(self) -> None:
        self.provider.sign_out()

    def snapshot(self) -> SessionState:
        account_id = self.current_account_id()
        return SessionState(signed_in=account_id is not None, account_id=account_id)
