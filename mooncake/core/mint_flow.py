# mooncake/core/mint_flow.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Mint flow: sign-in status + mint submission + redirect-based confirmation.

There is no push channel from the chain. The only success signal is the wallet
sending the browser back with ``?transactionHashes=<id>`` in the URL, so the
flow is computed **once** at mount from two inputs, the session's
`is_signed_in()` and the raw query string, and only changes afterwards through
an explicit `submit_mint()`.

States
------
SIGNED_OUT     only action: sign in
READY_TO_MINT  only action: mint
SUBMITTING     entered the instant `submit_mint()` is called; the visitor is
               about to leave for the wallet, no spinner is modelled
CONFIRMED      the URL carried a transaction hash; terminal for this page load

Failure semantics
-----------------
`submit_mint()` does not catch anything coming out of the provider. Errors
reach Streamlit's default exception display.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from mooncake.core.session import WalletSession
from mooncake.services.near import WalletRedirect

log = logging.getLogger(__name__)

#: Literal prefix the wallet uses when returning from a relayed transaction.
CONFIRMATION_PREFIX = "?transactionHashes="


class MintState(str, Enum):
    SIGNED_OUT = "signed_out"
    READY_TO_MINT = "ready_to_mint"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


class MintUnavailable(RuntimeError):
    """`submit_mint()` was called outside READY_TO_MINT."""


def parse_transaction_hash(search: str | None) -> str | None:
    """Return the raw transaction identifier carried by `search`, if any.

    The query string must start with ``?transactionHashes=``; the identifier is
    everything after the first ``=`` with no unescaping or validation. An empty
    identifier counts as no confirmation.

    Examples:
        >>> parse_transaction_hash("?transactionHashes=abc123")
        'abc123'
        >>> parse_transaction_hash("?account_id=alice.testnet") is None
        True
    """
    if not search or not search.startswith(CONFIRMATION_PREFIX):
        return None
    value = search.split("=", 1)[1]
    return value or None


@dataclass
class MintFlow:
    session: WalletSession
    state: MintState
    transaction_hash: str | None = None
    redirect: WalletRedirect | None = field(default=None)

    @classmethod
    def at_mount(cls, session: WalletSession, search: str | None) -> MintFlow:
        """Interpret the startup inputs once and pick the initial state."""
        tx_hash = parse_transaction_hash(search)
        if tx_hash is not None:
            log.info("Mint confirmed by redirect: %s", tx_hash)
            return cls(session, MintState.CONFIRMED, transaction_hash=tx_hash)
        if session.is_signed_in():
            return cls(session, MintState.READY_TO_MINT)
        return cls(session, MintState.SIGNED_OUT)

    @property
    def actions(self) -> tuple[str, ...]:
        if self.state is MintState.SIGNED_OUT:
            return ("sign_in",)
        if self.state is MintState.READY_TO_MINT:
            return ("mint",)
        return ()

    def request_sign_in(self) -> WalletRedirect:
        if self.state is not MintState.SIGNED_OUT:
            raise MintUnavailable(f"sign in is not available in state {self.state.value}")
        self.redirect = self.session.request_sign_in()
        return self.redirect

    def submit_mint(self) -> WalletRedirect:
        """Enter SUBMITTING and hand the mint over to the provider.

        Raises:
            MintUnavailable: outside READY_TO_MINT.
        """
        if self.state is not MintState.READY_TO_MINT:
            raise MintUnavailable(f"mint is not available in state {self.state.value}")
        account_id = self.session.current_account_id()
        self.state = MintState.SUBMITTING
        self.redirect = self.session.provider.nft_mint_2022(account_id)
        return self.redirect

    @property
    def explorer_url(self) -> str | None:
        if self.transaction_hash is None:
            return None
        return self.session.provider.transaction_url(self.transaction_hash)

    @property
    def collectibles_url(self) -> str:
        return self.session.provider.collectibles_url()
