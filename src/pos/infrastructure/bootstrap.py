"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pos.application.cart_store import CartStore
from pos.application.checkout import CheckoutOrchestrator
from pos.application.context import CatalogHandle, SessionContext
from pos.application.customer_display import CustomerDisplay
from pos.application.display_sync import BroadcastHub, DisplaySynchronizer
from pos.application.ports import ReceiptPrinter, TerminalView
from pos.application.receipt import StoreInfo
from pos.application.scan_lookup import ScanLookupHandler
from pos.application.terminal import PosTerminal
from pos.domain.service.scan_decoder import ScanDecoder
from pos.infrastructure.config import Settings
from pos.infrastructure.console import ConsolePrinter, ConsoleView, FilePrinter
from pos.infrastructure.http.backend_client import (
    BackendClient,
    HttpCatalogRepository,
    HttpSaleLedger,
)


def session_context(settings: Settings) -> SessionContext:
    return SessionContext(
        token=settings.token,
        username=settings.username,
        role=settings.role,
    )


def store_info(settings: Settings, session: SessionContext) -> StoreInfo:
    return StoreInfo(
        name=settings.store_name,
        address=settings.store_address,
        phone=settings.store_phone,
        cashier=session.username,
    )


def receipt_printer(settings: Settings, store: StoreInfo) -> ReceiptPrinter:
    if settings.receipt_dir is not None:
        return FilePrinter(store, settings.receipt_dir)
    return ConsolePrinter(store)


def build_terminal(
    settings: Settings,
    session: SessionContext,
    hub: BroadcastHub | None = None,
    view: TerminalView | None = None,
) -> PosTerminal:
    client = BackendClient(settings.api_url, session, timeout=settings.http_timeout)
    catalog_repo = HttpCatalogRepository(client)
    hub = hub or BroadcastHub()
    view = view or ConsoleView()

    synchronizer = DisplaySynchronizer(hub.channel(settings.channel_name))
    cart_store = CartStore(synchronizer)
    catalog = CatalogHandle(catalog_repo)
    checkout = CheckoutOrchestrator(
        cart_store=cart_store,
        ledger=HttpSaleLedger(client),
        view=view,
        printer=receipt_printer(settings, store_info(settings, session)),
        catalog=catalog,
        print_delay=settings.print_delay,
    )
    return PosTerminal(
        session=session,
        catalog=catalog,
        cart_store=cart_store,
        decoder=ScanDecoder(settings.scan_gap_seconds),
        scan_handler=ScanLookupHandler(catalog_repo, cart_store, view),
        checkout=checkout,
    )


def customer_display(settings: Settings, hub: BroadcastHub, on_render) -> CustomerDisplay:
    return CustomerDisplay(hub.channel(settings.channel_name), on_render=on_render)
