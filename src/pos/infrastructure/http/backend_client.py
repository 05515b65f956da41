"""HTTP implementations of the catalog repository and sale ledger.

Every request carries the session's bearer token.  Transport and HTTP
errors are translated into domain exceptions here so nothing above this
module ever sees an httpx type.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pos.application.context import SessionContext
from pos.domain.exceptions import (
    AuthenticationRequiredError,
    CommitFailureError,
    LookupNotFoundError,
    LookupTransportError,
    ValidationError,
)
from pos.domain.model.cart import LineItem
from pos.domain.model.product import Product
from pos.domain.model.sale import CommitResult
from pos.domain.model.value_objects import Money
from pos.domain.repository.catalog_repository import CatalogRepository
from pos.domain.repository.sale_ledger import SaleLedger

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin wrapper around httpx.AsyncClient for the POS backend."""

    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {
            "Accept": "application/json",
            "Authorization": self._session.bearer(),
        }
        async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
            return await client.request(method, path, headers=headers, **kwargs)


def product_from_json(raw: dict) -> Product:
    return Product(
        id=str(raw["id"]),
        sku=str(raw.get("sku") or ""),
        name=raw["name"],
        price=Money.of(raw["price"]),
        category=raw.get("category") or "",
        stock_quantity=int(raw.get("stock_quantity") or 0),
        is_tax_applicable=bool(raw.get("is_sst_applicable", False)),
        image_url=raw.get("image_url") or None,
    )


def error_message(response: httpx.Response) -> str | None:
    """Pull a human-readable message out of an error response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error") or body.get("message")
    return None


class HttpCatalogRepository(CatalogRepository):

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def list_all(self) -> list[Product]:
        try:
            response = await self._client.request("GET", "/api/products")
            response.raise_for_status()
        except (httpx.HTTPError, AuthenticationRequiredError) as exc:
            raise LookupTransportError(f"Could not load products: {exc}") from exc
        try:
            return [product_from_json(item) for item in response.json() or []]
        except (ValueError, KeyError, TypeError, ValidationError) as exc:
            raise LookupTransportError(f"Unreadable product list: {exc!r}") from exc

    async def get_by_code(self, code: str) -> Product:
        try:
            response = await self._client.request("GET", f"/api/products/scan/{code}")
        except (httpx.HTTPError, AuthenticationRequiredError) as exc:
            raise LookupTransportError(f"Lookup for {code} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise LookupNotFoundError(code)
        if response.is_error:
            raise LookupTransportError(
                f"Lookup for {code} failed with HTTP {response.status_code}"
            )
        try:
            return product_from_json(response.json())
        except (ValueError, KeyError, TypeError, ValidationError) as exc:
            raise LookupTransportError(f"Unreadable product for {code}: {exc!r}") from exc


class HttpSaleLedger(SaleLedger):

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    async def commit(self, lines: tuple[LineItem, ...]) -> CommitResult:
        payload = {
            "items": [
                {"product_id": _wire_id(line.product_id), "quantity": line.quantity.value}
                for line in lines
            ]
        }
        try:
            response = await self._client.request("POST", "/api/checkout", json=payload)
        except (httpx.HTTPError, AuthenticationRequiredError) as exc:
            logger.error("Checkout request failed: %s", exc)
            raise CommitFailureError() from exc

        if response.is_error:
            raise CommitFailureError(error_message(response))

        # The server may already have recorded the sale.
        try:
            sale_id = response.json()["sale_id"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Unreadable checkout response (HTTP %s): %r", response.status_code, exc)
            raise CommitFailureError() from exc
        return CommitResult(sale_id=str(sale_id))


def _wire_id(product_id: str) -> int | str:
    # The backend keys products by integer id.
    return int(product_id) if product_id.isdigit() else product_id
