"""Tests for the small pure helpers used by the Streamlit views."""

from __future__ import annotations

import pathlib
import sys
import unittest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mooncake.core.constants import asset_url, fmt_near, variant_urls  # noqa: E402
from mooncake.core.loaders import ranked_for_display  # noqa: E402
from mooncake.core.mint_flow import parse_transaction_hash  # noqa: E402
from mooncake.core.state import location_search  # noqa: E402
from mooncake.services.near import parse_karma_rank  # noqa: E402
from mooncake.ui.components import _short_account, karmaboard_rows  # noqa: E402
from mooncake.ui.keys import k  # noqa: E402


class TestLocationSearch(unittest.TestCase):
    def test_empty_query_is_empty_string(self) -> None:
        self.assertEqual(location_search({}), "")

    def test_wallet_callback_round_trips_to_a_confirmation(self) -> None:
        search = location_search({"transactionHashes": "7xKb9"})
        self.assertEqual(search, "?transactionHashes=7xKb9")
        self.assertEqual(parse_transaction_hash(search), "7xKb9")

    def test_other_first_parameter_is_not_a_confirmation(self) -> None:
        search = location_search({"account_id": "alice.testnet", "transactionHashes": "x"})
        self.assertIsNone(parse_transaction_hash(search))


class TestKarmaboardRows(unittest.TestCase):
    def test_rows_follow_display_order_with_ranks(self) -> None:
        entries = ranked_for_display(parse_karma_rank([[10, "a.near"], [5, "b.near"]]))
        rows = karmaboard_rows(entries)
        self.assertEqual([r["Account"] for r in rows], ["b.near", "a.near"])
        self.assertEqual([r["Rank"] for r in rows], [1, 2])

    def test_no_rows_for_empty_rank(self) -> None:
        self.assertEqual(karmaboard_rows([]), [])

    def test_implicit_accounts_are_elided(self) -> None:
        implicit = "ab" * 32
        self.assertEqual(_short_account(implicit), "ababab…abab")
        self.assertEqual(_short_account("alice.testnet"), "alice.testnet")
        self.assertEqual(_short_account(""), "-")

    def test_long_named_accounts_are_kept_whole(self) -> None:
        named = "a" * 60 + ".near"
        self.assertEqual(_short_account(named), named)
        upper_hex = "AB" * 32
        self.assertEqual(_short_account(upper_hex), upper_hex)


class TestConstants(unittest.TestCase):
    def test_asset_locators(self) -> None:
        self.assertEqual(asset_url("app/static/", "facai.svg"), "app/static/facai.svg")
        urls = variant_urls("app/static")
        self.assertEqual(len(urls), 10)
        self.assertEqual(urls[9], "app/static/e_9.svg")

    def test_fmt_near(self) -> None:
        self.assertEqual(fmt_near(10**24), "1 NEAR (Ⓝ)")
        self.assertEqual(fmt_near(5 * 10**23), "0.5 NEAR (Ⓝ)")

    def test_widget_keys_are_namespaced(self) -> None:
        self.assertEqual(k("nft", "mint"), "nft:mint")


if __name__ == "__main__":
    unittest.main()
