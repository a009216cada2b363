# mooncake/core/constants.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
NEAR economics constants and the Edition #2022 asset catalogue.

This module centralizes:
  1) **Protocol units** used when building the mint transaction (yoctoNEAR
     deposit, gas) and for display formatting.
  2) **Image resources** for the edition: the neutral preview image, the
     ordered list of glitch variants and the previous edition's artwork.

Design notes
------------
- Constants are typed `Final[...]` to communicate immutability.
- Variant locators are built from a base URL so the same catalogue works with
  Streamlit static serving or an external CDN.
"""

from typing import Final

# ---------------------------------------------------------------------------
# NEAR units
# ---------------------------------------------------------------------------

#: 1 NEAR expressed in yoctoNEAR (10^24).
YOCTO_PER_NEAR: Final[int] = 10**24

#: Deposit the contract requires for `nft_mint_2022` (exactly 1 NEAR).
MINT_DEPOSIT_YOCTO: Final[int] = YOCTO_PER_NEAR

#: Gas attached to the mint call. The on-chain SVG generation is expensive,
#: so we attach the 300 Tgas maximum.
MINT_GAS: Final[int] = 300_000_000_000_000

#: Contract method minting one Edition #2022 token for `receiver_id`.
MINT_METHOD: Final[str] = "nft_mint_2022"

#: NEP-171 enumeration view listing the tokens held by an account.
TOKENS_FOR_OWNER_METHOD: Final[str] = "nft_tokens_for_owner"

# ---------------------------------------------------------------------------
# Edition #2022 assets
# ---------------------------------------------------------------------------

#: Number of glitch variants shown by the interactive mint preview.
PREVIEW_VARIANTS: Final[int] = 10

#: Number of variants shown on the home page gallery (a head slice).
GALLERY_VARIANTS: Final[int] = 6

NEUTRAL_IMAGE: Final[str] = "facai.svg"
VARIANT_IMAGE: Final[str] = "e_{index}.svg"
EDITION_2021_IMAGE: Final[str] = "Hash Nuts.png"


def asset_url(base_url: str, name: str) -> str:
    """Join an asset file name onto `base_url` without doubling slashes."""
    return f"{base_url.rstrip('/')}/{name}"


def variant_urls(base_url: str, count: int = PREVIEW_VARIANTS) -> tuple[str, ...]:
    """Return the ordered, immutable tuple of variant image locators.

    Examples:
        >>> variant_urls("app/static", 2)
        ('app/static/e_0.svg', 'app/static/e_1.svg')
    """
    return tuple(
        asset_url(base_url, VARIANT_IMAGE.format(index=i)) for i in range(count)
    )


def fmt_near(yocto: int) -> str:
    """Format yoctoNEAR into a human string, e.g. ``1 NEAR (Ⓝ)``."""
    amount = yocto / YOCTO_PER_NEAR
    text = f"{amount:.4f}".rstrip("0").rstrip(".")
    return f"{text} NEAR (Ⓝ)"
