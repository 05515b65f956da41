"""Tests for the click CLI, with the backend mocked by respx."""

import httpx
import pytest
import respx
from click.testing import CliRunner

from pos.application.display_sync import DEFAULT_CHANNEL_NAME
from pos.infrastructure.cli.main import cli
from pos.infrastructure.config import Settings, get_settings

BASE_URL = "http://pos.test"

PRODUCTS = [
    {
        "id": 1,
        "sku": "9556001000011",
        "name": "Milo 1kg",
        "price": 10.0,
        "category": "Beverages",
        "stock_quantity": 12,
        "is_sst_applicable": True,
    },
    {
        "id": 2,
        "sku": "9556002000022",
        "name": "Gardenia Bread",
        "price": 5.0,
        "category": "Bakery",
        "stock_quantity": 4,
        "is_sst_applicable": False,
    },
]


@pytest.fixture(autouse=True)
def pos_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("POS_API_URL", BASE_URL)
    monkeypatch.setenv("POS_PRINT_DELAY", "0")
    monkeypatch.delenv("POS_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestProductCommands:

    def test_list_requires_token(self):
        result = CliRunner().invoke(cli, ["products", "list"])
        assert result.exit_code != 0
        assert "Not signed in" in result.output

    def test_list_with_filter(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/products").mock(return_value=httpx.Response(200, json=PRODUCTS))
            result = CliRunner().invoke(
                cli, ["--token", "t0k3n", "products", "list", "--category", "Bakery"]
            )
        assert result.exit_code == 0, result.output
        assert "Gardenia Bread" in result.output
        assert "Milo" not in result.output

    def test_categories(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/products").mock(return_value=httpx.Response(200, json=PRODUCTS))
            result = CliRunner().invoke(cli, ["--token", "t0k3n", "products", "categories"])
        assert result.exit_code == 0, result.output
        assert result.output.split() == ["All", "Beverages", "Bakery"]

    def test_backend_down(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/products").mock(return_value=httpx.Response(503))
            result = CliRunner().invoke(cli, ["--token", "t0k3n", "products", "list"])
        assert result.exit_code != 0
        assert "Could not load products" in result.output


class TestScanCommand:

    def test_scan_and_checkout_prints_receipt(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/products/scan/9556001000011").mock(
                return_value=httpx.Response(200, json=PRODUCTS[0])
            )
            mock.get("/api/products").mock(return_value=httpx.Response(200, json=PRODUCTS))
            checkout = mock.post("/api/checkout").mock(
                return_value=httpx.Response(200, json={"sale_id": 501})
            )
            result = CliRunner().invoke(
                cli,
                ["--token", "t0k3n", "scan", "9556001000011", "9556001000011", "--checkout"],
            )

        assert result.exit_code == 0, result.output
        assert checkout.called
        assert "Sale #501 committed" in result.output
        assert "Order #: 501" in result.output
        assert "RM 21.20" in result.output

    def test_checkout_rejected(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/products/scan/9556002000022").mock(
                return_value=httpx.Response(200, json=PRODUCTS[1])
            )
            mock.post("/api/checkout").mock(
                return_value=httpx.Response(409, json={"error": "Insufficient stock"})
            )
            result = CliRunner().invoke(
                cli, ["--token", "t0k3n", "scan", "9556002000022", "--checkout"]
            )
        assert result.exit_code != 0
        assert "Insufficient stock" in result.output


class TestSettings:

    def test_display_channel_matches_hub_default(self):
        assert Settings().channel_name == DEFAULT_CHANNEL_NAME

    def test_channel_name_from_env(self, monkeypatch):
        monkeypatch.setenv("POS_CHANNEL_NAME", "lane_2")
        assert Settings().channel_name == "lane_2"
