# mooncake/core/config.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Centralized, immutable configuration for the Mooncake Streamlit front end.

A frozen `Settings` dataclass is populated from environment variables (loaded
via python-dotenv if a `.env` file is present). The singleton `settings` is
imported by other modules so that `os.getenv` calls stay in one place.

Network defaults
----------------
`NEAR_ENV` picks a set of default endpoints (node RPC, wallet, helper,
explorer) in the same spirit as near-api-js `getConfig(env)`. Each endpoint can
still be overridden individually. An unknown `NEAR_ENV` leaves the endpoints
blank; the provider refuses to bootstrap in that case so the problem shows up
as a page-level error rather than as a half-working app.

Testing
-------
Set environment variables **before** importing this module, or build a
`Settings(...)` directly with explicit values and pass it to the provider.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

NETWORKS: dict[str, dict[str, str]] = {
    "testnet": {
        "node_url": "https://rpc.testnet.near.org",
        "wallet_url": "https://wallet.testnet.near.org",
        "helper_url": "https://helper.testnet.near.org",
        "explorer_url": "https://explorer.testnet.near.org",
    },
    "mainnet": {
        "node_url": "https://rpc.mainnet.near.org",
        "wallet_url": "https://wallet.near.org",
        "helper_url": "https://helper.mainnet.near.org",
        "explorer_url": "https://explorer.near.org",
    },
}

_NEAR_ENV = os.getenv("NEAR_ENV", "testnet")
_NET = NETWORKS.get(_NEAR_ENV, {})


@dataclass(frozen=True)
class Settings:
    """
    Immutable application settings.

    See `.env.example` at the repository root for a template.
    """

    # --- NEAR network --------------------------------------------------------
    NEAR_ENV: str = _NEAR_ENV
    NODE_URL: str = os.getenv("NEAR_NODE_URL", _NET.get("node_url", ""))
    WALLET_URL: str = os.getenv("NEAR_WALLET_URL", _NET.get("wallet_url", ""))
    HELPER_URL: str = os.getenv("NEAR_HELPER_URL", _NET.get("helper_url", ""))
    EXPLORER_URL: str = os.getenv("NEAR_EXPLORER_URL", _NET.get("explorer_url", ""))

    # --- Contract ------------------------------------------------------------
    # Account the Mooncake NFT contract is deployed to (e.g. "mooncake.testnet").
    CONTRACT_NAME: str = os.getenv("CONTRACT_NAME", "")
    # View method returning the karma rank as [[karma, account_id], ...].
    TOP_RANK_METHOD: str = os.getenv("TOP_RANK_METHOD", "top_rank")

    # --- App URLs ------------------------------------------------------------
    # Public URL of this app; the wallet redirects back here after login/sign.
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:8501/")
    # Where the edition images (e_0.svg … e_9.svg, facai.svg) are served from.
    ASSET_BASE_URL: str = os.getenv("ASSET_BASE_URL", "app/static")

    # --- Runtime -------------------------------------------------------------
    RPC_TIMEOUT: float = float(os.getenv("RPC_TIMEOUT", "10"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
