"""Tests for price derivation and the /api/price proxy routes."""

import json
from unittest.mock import patch

import httpx
import pytest
from httpx import AsyncClient

from config.settings import settings
from src.lo_common.errors import InvalidAddressError, PriceNotFoundError
from src.lo_price.application.service import resolve_pair
from src.lo_price.domain.pricing import derive_price, lookup_price

BASE = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
FROZEN_MS = 1_700_000_000_000


class TestDerivePrice:
    def test_ratio(self) -> None:
        assert derive_price({BASE.lower(): "3500.12", USDC: "1.00"}, BASE.lower(), USDC) == "3500.12"

    def test_keys_matched_case_insensitively(self) -> None:
        data = {BASE: "2", USDC.upper().replace("0X", "0x"): "4"}
        assert derive_price(data, BASE.lower(), USDC) == "0.5"

    def test_numeric_values_accepted(self) -> None:
        assert derive_price({"a": 3, "b": 2}, "a", "b") == "1.5"

    def test_lookup_missing(self) -> None:
        assert lookup_price({"a": "1"}, "b") is None

    @pytest.mark.parametrize(
        "data",
        [
            {"a": "1"},
            {"b": "1"},
            {"a": "1", "b": "0"},
            {"a": "1", "b": "-1"},
            {"a": "1", "b": "abc"},
            {"a": "-1", "b": "1"},
            {"a": "1", "b": "Infinity"},
            ["a", "b"],
        ],
    )
    def test_fails_closed(self, data: object) -> None:
        with pytest.raises(PriceNotFoundError):
            derive_price(data, "a", "b")

    def test_resolve_pair_defaults(self) -> None:
        assert resolve_pair(None, None) == (
            settings.DEFAULT_BASE_TOKEN.lower(),
            settings.DEFAULT_QUOTE_TOKEN.lower(),
        )
        assert resolve_pair(USDC.upper().replace("0X", "0x"), "") == (
            USDC,
            settings.DEFAULT_QUOTE_TOKEN.lower(),
        )

    @pytest.mark.parametrize("value", ["0xAA", "../../orderbook", USDC[2:], USDC + "?x=1"])
    def test_resolve_pair_rejects_non_addresses(self, value: str) -> None:
        with pytest.raises(InvalidAddressError):
            resolve_pair(value, None)


class TestGetPrice:
    async def test_end_to_end_pair(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(200, {BASE.lower(): "3500.12", USDC: "1.00"})

        with patch("src.lo_price.application.service.now_ms", return_value=FROZEN_MS):
            resp = await client.get("/api/price", params={"base": BASE, "quote": USDC})

        assert resp.status_code == 200
        assert resp.json() == {"price": "3500.12", "timestamp": FROZEN_MS}
        sent = upstream.last
        assert sent.method == "GET"
        assert sent.url.path == f"/price/v1.1/137/{BASE.lower()},{USDC}"
        assert sent.headers["Authorization"] == f"Bearer {api_key}"

    async def test_path_injection_rejected(self, client: AsyncClient, api_key: str, upstream) -> None:
        resp = await client.get(
            "/api/price", params={"base": "../../orderbook/v4.0/137/limit-order/order", "quote": USDC}
        )

        assert resp.status_code == 400
        assert resp.json()["message"].startswith("Invalid base address")
        assert upstream.requests == []

    async def test_defaults_when_omitted(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(200, {BASE.lower(): "2", USDC: "1"})

        resp = await client.get("/api/price")

        assert resp.status_code == 200
        assert resp.json()["price"] == "2"
        assert upstream.last.url.path.endswith(f"{BASE.lower()},{USDC}")

    @pytest.mark.parametrize(
        ("upstream_status", "expected"),
        [(401, 401), (429, 429), (500, 502), (404, 502)],
    )
    async def test_upstream_status_mapping(
        self, client: AsyncClient, api_key: str, upstream, upstream_status: int, expected: int
    ) -> None:
        upstream.respond(upstream_status, text="nope")

        resp = await client.get("/api/price", params={"base": BASE, "quote": USDC})

        assert resp.status_code == expected
        assert "message" in resp.json()

    async def test_invalid_key_message(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(401, text="unauthorized")
        resp = await client.get("/api/price")
        assert resp.json() == {"message": "Invalid API key"}

    async def test_token_missing_from_response(
        self, client: AsyncClient, api_key: str, upstream
    ) -> None:
        upstream.respond(200, {BASE.lower(): "3500.12"})

        resp = await client.get("/api/price", params={"base": BASE, "quote": USDC})

        assert resp.status_code == 502
        assert resp.json() == {"message": "Base or quote token not found in API response"}

    async def test_zero_quote_is_502(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(200, {BASE.lower(): "3500.12", USDC: "0"})

        resp = await client.get("/api/price", params={"base": BASE, "quote": USDC})

        assert resp.status_code == 502

    async def test_non_json_body_is_502(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(200, text="<html>")
        resp = await client.get("/api/price")
        assert resp.status_code == 502

    async def test_timeout_is_504(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.error = httpx.ReadTimeout("timed out")
        resp = await client.get("/api/price")
        assert resp.status_code == 504

    async def test_missing_api_key_is_500(
        self, client: AsyncClient, no_api_key: None, upstream
    ) -> None:
        resp = await client.get("/api/price")

        assert resp.status_code == 500
        assert resp.json() == {"message": "API key not configured"}
        assert upstream.requests == []


class TestPostPrice:
    async def test_default_pair_via_post(self, client: AsyncClient, api_key: str, upstream) -> None:
        upstream.respond(200, {BASE: "3000", USDC: "1"})

        resp = await client.post("/api/price")

        assert resp.status_code == 200
        assert resp.json()["price"] == "3000"
        sent = upstream.last
        assert sent.method == "POST"
        assert sent.url.path == "/price/v1.1/137"
        assert json.loads(sent.content) == {
            "tokens": [settings.DEFAULT_BASE_TOKEN, settings.DEFAULT_QUOTE_TOKEN]
        }
