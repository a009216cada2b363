"""End-to-end runs of `mooncake/app.py` under Streamlit's `AppTest` harness.

The NEAR node and the browser cookie jar are replaced with in-memory stand-ins;
everything between them (bootstrap, sign-in callback, mint flow, views) is the
real app code.
"""

from __future__ import annotations

import pathlib
import sys
import unittest
from http.cookies import SimpleCookie
from typing import Any
from unittest import mock

from streamlit.testing.v1 import AppTest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mooncake.core.config import Settings  # noqa: E402
from mooncake.core.cookies import CookieAuthStore  # noqa: E402
from mooncake.services.near import RpcError  # noqa: E402

APP = str(ROOT / "mooncake" / "app.py")

CFG = Settings(
    NEAR_ENV="testnet",
    NODE_URL="https://rpc.test",
    WALLET_URL="https://wallet.test/",
    HELPER_URL="https://helper.test",
    EXPLORER_URL="https://explorer.test",
    CONTRACT_NAME="mooncake.testnet",
    TOP_RANK_METHOD="top_rank",
    APP_BASE_URL="http://localhost:8501/",
)

TOKEN = {
    "token_id": "2022-abc",
    "owner_id": "alice.testnet",
    "metadata": {"media": "data:image/svg+xml;base64,PHN2Zy8+"},
}


class FakeRpc:
    """Stub RPC client returning canned view results."""

    def __init__(self, views: dict[str, Any] | None = None, *, down: bool = False) -> None:
        self.views = views or {}
        self.down = down
        self.calls: list[str] = []

    def view_account(self, account_id: str) -> dict[str, Any]:
        if self.down:
            raise RpcError("connection refused")
        return {"amount": "1"}

    def view_function(self, contract_id: str, method_name: str, args: Any = None) -> Any:
        self.calls.append(method_name)
        return self.views.get(method_name)


class AppCase(unittest.TestCase):
    """Runs the app against `self.rpc` with a browser-like cookie jar."""

    def setUp(self) -> None:
        self.rpc = FakeRpc(
            {"top_rank": [[5, "a.near"], [10, "b.near"]], "nft_tokens_for_owner": []}
        )
        self.jar: dict[str, str] = {}
        self.cookie_writes: list[str] = []

    def browser_applies_cookies(self) -> None:
        for header in self.cookie_writes:
            parsed: SimpleCookie = SimpleCookie()
            parsed.load(header)
            for name, morsel in parsed.items():
                if str(morsel["max-age"]) == "0":
                    self.jar.pop(name, None)
                else:
                    self.jar[name] = morsel.value
        self.cookie_writes.clear()

    def page_load(self, **query: str) -> AppTest:
        """One fresh browser page load, i.e. a new Streamlit session."""
        at = AppTest.from_file(APP, default_timeout=30)
        for key, value in query.items():
            at.query_params[key] = value
        with mock.patch.multiple(
            "mooncake.core.clients",
            get_rpc=lambda: self.rpc,
            settings=CFG,
            auth_store=lambda: CookieAuthStore(self.jar, self.cookie_writes),
        ):
            at.run()
        return at

    def rerun(self, at: AppTest) -> AppTest:
        with mock.patch.multiple(
            "mooncake.core.clients",
            get_rpc=lambda: self.rpc,
            settings=CFG,
            auth_store=lambda: CookieAuthStore(self.jar, self.cookie_writes),
        ):
            at.run()
        return at

    def signed_in(self) -> AppTest:
        return self.page_load(account_id="alice.testnet", public_key="ed25519:x")

    @staticmethod
    def labels(at: AppTest) -> list[str]:
        return [b.label for b in at.main.button]

    @staticmethod
    def markdown(at: AppTest) -> list[str]:
        return [m.value for m in at.markdown]


class TestBootstrap(AppCase):
    def test_unreachable_contract_renders_error_and_stops(self) -> None:
        self.rpc = FakeRpc(down=True)
        at = self.page_load()
        self.assertEqual(len(at.error), 1)
        self.assertIn("Cannot reach contract", at.error[0].value)
        self.assertEqual(len(at.tabs), 0)
        self.assertEqual(len(at.button), 0)
        self.assertEqual(self.rpc.calls, [])

    def test_healthy_contract_renders_all_tabs(self) -> None:
        at = self.page_load()
        self.assertFalse(at.exception)
        self.assertEqual(
            [t.label for t in at.tabs], ["Home", "Edition #2022", "My Mooncakes", "Karmaboard"]
        )


class TestMintActions(AppCase):
    def test_signed_out_offers_only_sign_in(self) -> None:
        at = self.page_load()
        labels = self.labels(at)
        self.assertIn("Sign in to mint", labels)
        self.assertNotIn("Mint", labels)

    def test_sign_in_button_links_to_the_wallet_login(self) -> None:
        at = self.page_load()
        at.button(key="nft:sign_in").click()
        self.rerun(at)
        links = [m for m in self.markdown(at) if "Continue to NEAR Wallet" in m]
        self.assertEqual(len(links), 1)
        self.assertIn("https://wallet.test/login/?contract_id=mooncake.testnet", links[0])

    def test_signed_in_offers_only_mint(self) -> None:
        at = self.signed_in()
        labels = self.labels(at)
        self.assertIn("Mint", labels)
        self.assertNotIn("Sign in to mint", labels)
        self.assertTrue(any("alice.testnet" in m.value for m in at.sidebar.markdown))

    def test_mint_click_shows_the_wallet_sign_link(self) -> None:
        at = self.signed_in()
        at.button(key="nft:mint").click()
        self.rerun(at)
        self.assertFalse(at.exception)
        self.assertNotIn("Mint", self.labels(at))
        links = [m for m in self.markdown(at) if "Approve the mint in NEAR Wallet" in m]
        self.assertEqual(len(links), 1)
        self.assertIn("https://wallet.test/sign?transactions=", links[0])


class TestPreview(AppCase):
    def test_glitch_shows_a_variant_and_reset_restores_the_neutral_image(self) -> None:
        at = self.page_load()
        self.assertTrue(at.button(key="nft:reset").disabled)

        at.button(key="nft:glitch").click()
        self.rerun(at)
        preview = [m for m in self.markdown(at) if 'alt="Mooncake preview"' in m]
        self.assertRegex(preview[0], r"e_\d\.svg")
        self.assertFalse(at.button(key="nft:reset").disabled)

        at.button(key="nft:reset").click()
        self.rerun(at)
        preview = [m for m in self.markdown(at) if 'alt="Mooncake preview"' in m]
        self.assertIn("facai.svg", preview[0])


class TestMyMooncakes(AppCase):
    def test_signed_out_asks_to_sign_in(self) -> None:
        at = self.page_load()
        infos = [i.value for i in at.info]
        self.assertIn("Sign in with NEAR Wallet to see your Mooncakes.", infos)
        self.assertNotIn("nft_tokens_for_owner", self.rpc.calls)

    def test_no_tokens_renders_no_images(self) -> None:
        at = self.signed_in()
        self.assertFalse(at.exception)
        self.assertIn("No Mooncakes yet. Mint one on the Edition #2022 tab!", [i.value for i in at.info])
        self.assertFalse(any("data:image" in m for m in self.markdown(at)))
        self.assertEqual(self.rpc.calls.count("nft_tokens_for_owner"), 1)

    def test_tokens_render_their_media(self) -> None:
        self.rpc.views["nft_tokens_for_owner"] = [TOKEN]
        at = self.signed_in()
        images = [m for m in self.markdown(at) if "data:image/svg+xml" in m]
        self.assertEqual(len(images), 1)


class TestKarmaboard(AppCase):
    def test_highest_karma_is_listed_first(self) -> None:
        at = self.page_load()
        self.assertEqual(len(at.table), 1)
        table = at.table[0].value
        self.assertEqual(list(table["Account"]), ["b.near", "a.near"])
        self.assertEqual(list(table["Rank"]), [1, 2])

    def test_rank_is_fetched_once_per_page_load(self) -> None:
        at = self.page_load()
        at.button(key="nft:glitch").click()
        self.rerun(at)
        self.assertEqual(self.rpc.calls.count("top_rank"), 1)


class TestSignInAcrossRedirect(AppCase):
    def test_returning_from_the_wallet_keeps_the_account(self) -> None:
        first = self.signed_in()
        self.assertTrue(any("alice.testnet" in m.value for m in first.sidebar.markdown))
        self.assertEqual(len(self.cookie_writes), 1)

        # Mint redirect: the wallet sends the browser to a new page load.
        self.browser_applies_cookies()
        second = self.page_load(transactionHashes="abc123")

        self.assertTrue(any("alice.testnet" in m.value for m in second.sidebar.markdown))
        self.assertFalse(any("Not signed in" in m.value for m in second.sidebar.markdown))
        self.assertIn("abc123", second.success[0].value)
        infos = [i.value for i in second.info]
        self.assertNotIn("Sign in with NEAR Wallet to see your Mooncakes.", infos)
        self.assertIn("No Mooncakes yet. Mint one on the Edition #2022 tab!", infos)

    def test_sign_out_forgets_the_account_on_the_next_load(self) -> None:
        at = self.signed_in()
        self.browser_applies_cookies()
        at.sidebar.button(key="sidebar:sign_out").click()
        self.rerun(at)
        self.assertTrue(any("Not signed in" in m.value for m in at.sidebar.markdown))

        self.browser_applies_cookies()
        again = self.page_load()
        self.assertTrue(any("Not signed in" in m.value for m in again.sidebar.markdown))
        self.assertIn("Sign in to mint", self.labels(again))


def _flush_script() -> None:
    import streamlit as st

    from mooncake.core.cookies import flush_cookie_writes
    from mooncake.core.state import AUTH_COOKIE_WRITES_KEY

    if AUTH_COOKIE_WRITES_KEY not in st.session_state:
        st.session_state[AUTH_COOKIE_WRITES_KEY] = ["mooncake_wallet_auth=x; Path=/"]
    st.text(f"flushed {flush_cookie_writes()}")


class TestFlushCookieWrites(unittest.TestCase):
    def test_queued_writes_are_applied_once(self) -> None:
        from mooncake.core.state import AUTH_COOKIE_WRITES_KEY

        at = AppTest.from_function(_flush_script, default_timeout=30)
        at.run()
        self.assertEqual(at.text[0].value, "flushed 1")
        self.assertEqual(at.session_state[AUTH_COOKIE_WRITES_KEY], [])

        at.run()
        self.assertEqual(at.text[0].value, "flushed 0")


if __name__ == "__main__":
    unittest.main()
