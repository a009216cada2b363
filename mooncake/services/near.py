# mooncake/services/near.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
NEAR wallet/chain provider used by the Mooncake front end.

This module is the single boundary between the app and the outside world:
  • JSON-RPC view calls against a NEAR node (over `requests`)
  • NEAR Wallet login / sign redirect URLs
  • Consumption of the wallet's login callback parameters
  • Parsing of contract payloads into small frozen records

Everything that touches the network lives here; the session, mint flow and
loaders in `core/` only see the `NearWalletProvider` methods.

Redirect model
--------------
The wallet is a separate site. Signing in and minting are both full-page
navigations: we build a URL, the visitor follows it, and the wallet sends the
browser back to `APP_BASE_URL`. Login comes back with `?account_id=...`; a
relayed transaction comes back with `?transactionHashes=...`.

Notes
-----
The sign URL carries one borsh-serialized transaction. NEAR Wallet only reads
the receiver and the actions from it and rebuilds the rest (signer key, nonce,
block hash) from its own access key, so those fields are sent zeroed.
"""

import base64
import json
import logging
import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlencode

import requests

from mooncake.core.config import Settings, settings
from mooncake.core.constants import (
    MINT_DEPOSIT_YOCTO,
    MINT_GAS,
    MINT_METHOD,
    TOKENS_FOR_OWNER_METHOD,
)

log = logging.getLogger(__name__)

# =============================================================================
# Errors
# =============================================================================


class NearError(RuntimeError):
    """Base class for provider failures."""


class RpcError(NearError):
    """The node could not be reached or answered with an error."""


class ProviderNotReady(NearError):
    """A provider call was made before `init_contract()` succeeded."""


class BootstrapError(NearError):
    """`init_contract()` failed; the page cannot be rendered."""


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class WalletRedirect:
    """A navigation the visitor must follow to continue in the wallet."""

    url: str
    purpose: str


@dataclass(frozen=True)
class KarmaEntry:
    """One Karmaboard row as returned by the contract."""

    karma: int
    account_id: str


@dataclass(frozen=True)
class TokenRecord:
    """One NFT owned by the signed-in account."""

    token_id: str
    owner_id: str
    media: str
    title: str | None = None


def parse_karma_rank(raw: Sequence[Sequence[Any]]) -> list[KarmaEntry]:
    """Convert `[[karma, account_id], ...]` into entries, preserving order.

    Karma is a u128 on chain and may arrive as a number or a decimal string.
    """
    return [KarmaEntry(int(karma), str(account_id)) for karma, account_id in raw]


def parse_tokens(raw: Sequence[Mapping[str, Any]]) -> list[TokenRecord]:
    """Convert NEP-171 token JSON objects into `TokenRecord`s."""
    out: list[TokenRecord] = []
    for token in raw:
        meta = token.get("metadata") or {}
        out.append(
            TokenRecord(
                token_id=str(token.get("token_id", "")),
                owner_id=str(token.get("owner_id", "")),
                media=meta.get("media") or "",
                title=meta.get("title"),
            )
        )
    return out


# =============================================================================
# Borsh encoding (just enough for one FunctionCall transaction)
# =============================================================================

_ED25519 = 0
_ACTION_FUNCTION_CALL = 2


def _u32(n: int) -> bytes:
    return struct.pack("<I", n)


def _u64(n: int) -> bytes:
    return struct.pack("<Q", n)


def _u128(n: int) -> bytes:
    return int(n).to_bytes(16, "little")


def _string(s: str) -> bytes:
    raw = s.encode("utf-8")
    return _u32(len(raw)) + raw


def encode_function_call_tx(
    *,
    signer_id: str,
    receiver_id: str,
    method_name: str,
    args: Mapping[str, Any],
    gas: int,
    deposit: int,
) -> bytes:
    """Serialize a single-action FunctionCall `Transaction` with borsh layout.

    Layout: signer_id, public_key (ed25519, zeroed), nonce (0), receiver_id,
    block_hash (zeroed), actions[1] = FunctionCall(method, args, gas, deposit).
    """
    args_json = json.dumps(dict(args), separators=(",", ":")).encode("utf-8")
    action = (
        bytes([_ACTION_FUNCTION_CALL])
        + _string(method_name)
        + _u32(len(args_json))
        + args_json
        + _u64(gas)
        + _u128(deposit)
    )
    return (
        _string(signer_id)
        + bytes([_ED25519])
        + bytes(32)
        + _u64(0)
        + _string(receiver_id)
        + bytes(32)
        + _u32(1)
        + action
    )


# =============================================================================
# JSON-RPC client
# =============================================================================


class NearRpcClient:
    """Tiny JSON-RPC client for the read-only queries the app needs."""

    def __init__(
        self,
        node_url: str,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.node_url = node_url
        self.timeout = timeout
        self._http = session or requests.Session()

    def call(self, method: str, params: Mapping[str, Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": "dontcare", "method": method, "params": params}
        try:
            resp = self._http.post(self.node_url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise RpcError(f"RPC {method} failed: {e}") from e

        if not isinstance(body, dict):
            raise RpcError(f"RPC {method} returned a non-object body: {body!r}")
        if "error" in body:
            err = body["error"]
            detail = err.get("data") or err.get("message") if isinstance(err, dict) else err
            raise RpcError(f"RPC {method} error: {detail}")
        result = body.get("result")
        if result is None:
            raise RpcError(f"RPC {method} returned no result")
        # `query` reports contract/account errors inside a successful envelope.
        if isinstance(result, dict) and "error" in result:
            raise RpcError(f"RPC {method} error: {result['error']}")
        return result

    def view_account(self, account_id: str) -> dict[str, Any]:
        return self.call(
            "query",
            {"request_type": "view_account", "finality": "final", "account_id": account_id},
        )

    def view_function(
        self, contract_id: str, method_name: str, args: Mapping[str, Any] | None = None
    ) -> Any:
        """Call a contract view method and decode its JSON return value."""
        args_b64 = base64.b64encode(json.dumps(dict(args or {})).encode()).decode()
        result = self.call(
            "query",
            {
                "request_type": "call_function",
                "finality": "final",
                "account_id": contract_id,
                "method_name": method_name,
                "args_base64": args_b64,
            },
        )
        if not isinstance(result, dict):
            raise RpcError(f"view {method_name} returned {result!r}")
        raw = bytes(result.get("result", []))
        return json.loads(raw.decode("utf-8")) if raw else None


# =============================================================================
# Sign-in storage
# =============================================================================


class AuthStore(Protocol):
    """Where the provider keeps the wallet login between page loads."""

    def load(self) -> Mapping[str, str] | None: ...

    def save(self, auth: Mapping[str, str]) -> None: ...

    def clear(self) -> None: ...


class MemoryAuthStore:
    """In-process `AuthStore`; shared instances survive a new provider."""

    def __init__(self) -> None:
        self._auth: dict[str, str] = {}

    def load(self) -> dict[str, str] | None:
        return dict(self._auth) or None

    def save(self, auth: Mapping[str, str]) -> None:
        self._auth = dict(auth)

    def clear(self) -> None:
        self._auth = {}


# =============================================================================
# Wallet provider
# =============================================================================


class NearWalletProvider:
    """Wallet connection + contract wrapper for one browser session.

    The signed-in account is written to an `AuthStore` (a browser cookie in the
    app, see `core/cookies.py`) and read back when the provider is created, so
    a fresh Streamlit session after the wallet redirect is still signed in.
    Without a store the login only lasts as long as the provider object.
    """

    #: Query parameters NEAR Wallet appends after a successful login.
    AUTH_PARAMS: tuple[str, ...] = ("account_id", "public_key", "all_keys")

    def __init__(
        self,
        rpc: NearRpcClient,
        cfg: Settings = settings,
        store: AuthStore | None = None,
    ) -> None:
        self._rpc = rpc
        self._cfg = cfg
        self._ready = False
        self._store = store or MemoryAuthStore()
        self._auth: dict[str, str] = dict(self._store.load() or {})

    # ----------------------------------------------------------------- config

    @property
    def contract_name(self) -> str:
        return self._cfg.CONTRACT_NAME

    @property
    def explorer_url(self) -> str:
        return self._cfg.EXPLORER_URL

    @property
    def wallet_url(self) -> str:
        return self._cfg.WALLET_URL

    @property
    def ready(self) -> bool:
        return self._ready

    # -------------------------------------------------------------- bootstrap

    def init_contract(self) -> None:
        """Validate configuration and check the contract account exists.

        Raises:
            BootstrapError: on missing configuration or an unreachable node /
                unknown contract account.
        """
        if self._ready:
            return
        missing = [
            name
            for name, value in (
                ("NEAR_NODE_URL", self._cfg.NODE_URL),
                ("NEAR_WALLET_URL", self._cfg.WALLET_URL),
                ("CONTRACT_NAME", self._cfg.CONTRACT_NAME),
            )
            if not value
        ]
        if missing:
            raise BootstrapError(
                f"Unconfigured NEAR environment {self._cfg.NEAR_ENV!r}: "
                f"set {', '.join(missing)} in .env"
            )
        try:
            self._rpc.view_account(self._cfg.CONTRACT_NAME)
        except NearError as e:
            raise BootstrapError(
                f"Cannot reach contract {self._cfg.CONTRACT_NAME!r}: {e}"
            ) from e
        self._ready = True
        log.info(
            "Connected to %s on %s (%s)",
            self._cfg.CONTRACT_NAME,
            self._cfg.NEAR_ENV,
            self._cfg.NODE_URL,
        )

    def _require_ready(self) -> None:
        if not self._ready:
            raise ProviderNotReady("init_contract() must complete first")

    # ---------------------------------------------------------------- session

    def is_signed_in(self) -> bool:
        self._require_ready()
        return bool(self._auth.get("account_id"))

    @property
    def account_id(self) -> str | None:
        self._require_ready()
        return self._auth.get("account_id") or None

    def complete_sign_in(self, params: Mapping[str, str]) -> bool:
        """Consume a wallet login callback; return True if an account was stored."""
        self._require_ready()
        account_id = params.get("account_id")
        if not account_id:
            return False
        self._auth = {k: params[k] for k in self.AUTH_PARAMS if params.get(k)}
        self._store.save(self._auth)
        log.info("Signed in as %s", account_id)
        return True

    def sign_in_url(self) -> str:
        self._require_ready()
        query = urlencode(
            {
                "contract_id": self._cfg.CONTRACT_NAME,
                "success_url": self._cfg.APP_BASE_URL,
                "failure_url": self._cfg.APP_BASE_URL,
            }
        )
        return f"{self._cfg.WALLET_URL.rstrip('/')}/login/?{query}"

    def request_sign_in(self) -> WalletRedirect:
        return WalletRedirect(self.sign_in_url(), "sign_in")

    def sign_out(self) -> None:
        self._require_ready()
        if self._auth:
            log.info("Signed out %s", self._auth.get("account_id"))
        self._auth = {}
        self._store.clear()

    # --------------------------------------------------------------- contract

    def nft_mint_2022(self, account_id: str) -> WalletRedirect:
        """Build the wallet redirect that mints one token for `account_id`."""
        self._require_ready()
        tx = encode_function_call_tx(
            signer_id=account_id,
            receiver_id=self._cfg.CONTRACT_NAME,
            method_name=MINT_METHOD,
            args={"receiver_id": account_id},
            gas=MINT_GAS,
            deposit=MINT_DEPOSIT_YOCTO,
        )
        query = urlencode(
            {
                "transactions": base64.b64encode(tx).decode(),
                "callbackUrl": self._cfg.APP_BASE_URL,
            }
        )
        log.info("Mint requested for %s", account_id)
        return WalletRedirect(f"{self._cfg.WALLET_URL.rstrip('/')}/sign?{query}", "mint")

    def my_tokens(self, account_id: str) -> list[TokenRecord]:
        self._require_ready()
        raw = self._rpc.view_function(
            self._cfg.CONTRACT_NAME, TOKENS_FOR_OWNER_METHOD, {"account_id": account_id}
        )
        return parse_tokens(raw or [])

    def top_rank(self) -> list[KarmaEntry]:
        self._require_ready()
        raw = self._rpc.view_function(self._cfg.CONTRACT_NAME, self._cfg.TOP_RANK_METHOD)
        return parse_karma_rank(raw or [])

    # ------------------------------------------------------------------ links

    def transaction_url(self, tx_hash: str) -> str:
        return f"{self._cfg.EXPLORER_URL.rstrip('/')}/transactions/{tx_hash}"

    def collectibles_url(self) -> str:
        return f"{self._cfg.WALLET_URL.rstrip('/')}/?tab=collectibles"
