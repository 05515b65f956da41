"""CLI commands that run a terminal session."""

from __future__ import annotations

import asyncio
import time

import click

from pos.application.dto import CartDTO, to_cart_dto
from pos.application.display_sync import BroadcastHub
from pos.application.terminal import PosTerminal
from pos.domain.exceptions import CommitFailureError, DomainException
from pos.domain.service.scan_decoder import ENTER, KeyEvent
from pos.infrastructure.bootstrap import build_terminal, customer_display, session_context
from pos.infrastructure.config import Settings

# Spacing used when replaying a typed line as a scanner burst.
BURST_INTERVAL = 0.001

HELP_TEXT = """\
Type or scan a barcode and press Enter to add it.
  add <id>    add a product by catalog id
  inc <id>    increase quantity      dec <id>   decrease quantity
  rm <id>     remove the line        cart       show the cart
  checkout    pay and print          quit       end the session"""


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart."""
    if not dto.items:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>11} {'Total':>11}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<6} {item.product_name[:20]:<20} {item.quantity:>5} "
            f"{item.unit_price:>11} {item.line_total:>11}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Subtotal':<33} {dto.subtotal:>23}")
    click.echo(f"  {'SST (6%)':<33} {dto.tax_amount:>23}")
    click.echo(f"  {'Total':<33} {dto.grand_total:>23}")
    click.echo(f"  ({dto.item_count} items)")


def _show(terminal: PosTerminal) -> None:
    store = terminal.cart_store
    _display_cart(to_cart_dto(store.snapshot(), store.totals()))


def _require_session(settings: Settings) -> None:
    if not session_context(settings).is_authenticated:
        raise click.ClickException("Not signed in: set POS_TOKEN or pass --token.")


def burst_events(code: str, start: float) -> list[KeyEvent]:
    """Key events a scanner would produce for *code*."""
    events = [
        KeyEvent(key=ch, timestamp=start + i * BURST_INTERVAL)
        for i, ch in enumerate(code)
    ]
    events.append(KeyEvent(key=ENTER, timestamp=start + len(code) * BURST_INTERVAL))
    return events


@click.command("scan")
@click.argument("codes", nargs=-1, required=True)
@click.option("--checkout", "do_checkout", is_flag=True, default=False, help="Commit the sale afterwards.")
@click.pass_obj
def scan(settings: Settings, codes: tuple[str, ...], do_checkout: bool) -> None:
    """Scan CODES into a fresh cart and show it."""
    _require_session(settings)

    async def run() -> None:
        pos = build_terminal(settings, session_context(settings))
        for code in codes:
            await pos.scan(code)
        _show(pos)
        if do_checkout:
            sale = await pos.checkout()
            click.echo(f"Sale #{sale.id} committed  (total={sale.grand_total})")
        await pos.wait_idle()

    try:
        asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("terminal")
@click.option("--display/--no-display", default=False, help="Echo the customer display.")
@click.pass_obj
def terminal(settings: Settings, display: bool) -> None:
    """Run an interactive terminal session on stdin."""
    _require_session(settings)
    asyncio.run(_session(settings, display))


async def _session(settings: Settings, display: bool) -> None:
    hub = BroadcastHub()
    pos = build_terminal(settings, session_context(settings), hub=hub)
    if display:
        screen = customer_display(settings, hub, on_render=lambda text: click.echo(text, err=True))
        screen.open()
        pos.cart_store.publish()

    try:
        await pos.catalog.refresh()
    except DomainException as exc:
        click.secho(f"Catalog unavailable: {exc}", fg="yellow", err=True)

    click.echo(f"Signed in as {pos.session.username} ({pos.session.role})")
    click.echo(HELP_TEXT)
    stdin = click.get_text_stream("stdin")

    while True:
        line = await asyncio.to_thread(stdin.readline)
        if not line:
            break
        words = line.strip().split()
        if not words:
            continue
        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            break
        try:
            if command == "add" and args:
                pos.add_product(args[0])
            elif command == "inc" and args:
                pos.increment(args[0])
            elif command == "dec" and args:
                pos.decrement(args[0])
            elif command == "rm" and args:
                pos.remove(args[0])
            elif command == "cart":
                pass
            elif command == "checkout":
                sale = await pos.checkout()
                click.echo(f"Sale #{sale.id} committed  (total={sale.grand_total})")
            else:
                for event in burst_events(line.strip(), time.monotonic()):
                    pos.handle_key(event)
                await pos.wait_for_lookups()
        except CommitFailureError:
            pass  # already alerted by the checkout view
        except DomainException as exc:
            click.secho(str(exc), fg="red", err=True)
        _show(pos)

    await pos.wait_idle()
