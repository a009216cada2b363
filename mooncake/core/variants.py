# mooncake/core/variants.py
# SPDX-License-Identifier: Apache-2.0
"""Random image-variant selection for the edition preview and gallery.

`VariantSelector` owns an ordered, immutable tuple of image locators and picks
one uniformly at random using Python's default (unseeded) `random` source.
Each call site builds its own selector so the bound always matches the list it
indexes: 10 variants for the mint preview, the first 6 for the home gallery.

`PreviewImage` is the cosmetic toggle on the mint page: neutral artwork at
rest, a random variant while "hovered" or after a click.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class VariantSelector:
    variants: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.variants:
            raise ValueError("VariantSelector needs at least one variant")

    @property
    def bound(self) -> int:
        return len(self.variants)

    def pick(self) -> int:
        """Return a uniformly distributed index in ``[0, bound)``."""
        return random.randrange(self.bound)

    def variant(self, index: int) -> str:
        if not 0 <= index < self.bound:
            raise IndexError(f"variant {index} out of range [0, {self.bound})")
        return self.variants[index]

    def pick_variant(self) -> str:
        return self.variants[self.pick()]

    def head(self, count: int) -> VariantSelector:
        """Selector over the first `count` variants."""
        if not 0 < count <= self.bound:
            raise ValueError(f"head({count}) outside 1..{self.bound}")
        return VariantSelector(self.variants[:count])


@dataclass
class PreviewImage:
    """Neutral artwork at rest, a random variant after enter or click.

    Streamlit has no hover event, so the mint page drives `click()` from its
    "Glitch it" button and `pointer_leave()` from "Reset". `pointer_enter()`
    is the same transition as `click()`, kept for hover-capable front ends.
    """

    selector: VariantSelector
    neutral: str
    src: str = field(default="")

    def __post_init__(self) -> None:
        if not self.src:
            self.src = self.neutral

    def pointer_enter(self) -> str:
        self.src = self.selector.pick_variant()
        return self.src

    def click(self) -> str:
        self.src = self.selector.pick_variant()
        return self.src

    def pointer_leave(self) -> str:
        self.src = self.neutral
        return self.src

    @property
    def showing_variant(self) -> bool:
        return self.src != self.neutral
