# mooncake/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""Mooncake NFT: Streamlit front end for the Edition #2022 NEAR contract."""

__version__ = "0.1.0"
