"""
DigitalPro operator CLI.

Maintenance commands that act on the same stores as the API:

    python main.py promote-admin someone@example.com
    python main.py promote-admin someone@example.com --revoke
    python main.py purge-sessions
    python main.py refund-order <order-id>
    python main.py stats
"""

import argparse
import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

from api.dependencies import ServiceContainer, get_container
from modules.orders.models import OrderStatus
from shared.exceptions import DigitalProError

console = Console()


async def promote_admin(container: ServiceContainer, email: str, revoke: bool = False) -> int:
    user = await container.identity.get_user_by_email(email)
    if user is None:
        console.print(f"[red]Error:[/red] no user with email {email}")
        return 1

    await container.identity.set_admin(user.id, not revoke)
    verb = "Revoked admin from" if revoke else "Promoted"
    console.print(f"[green]{verb}[/green] {user.email}")
    return 0


async def purge_sessions(container: ServiceContainer) -> int:
    removed = await container.sessions.purge_expired()
    console.print(f"Removed [bold]{removed}[/bold] expired session(s)")
    return 0


async def refund_order(container: ServiceContainer, order_id: str) -> int:
    order = await container.orders.update_order_status(order_id, OrderStatus.REFUNDED)
    console.print(
        f"[green]Order {order.id} refunded.[/green] "
        f"User {order.user_id} loses access to product {order.product_id} "
        "unless another grant applies."
    )
    return 0


async def show_stats(container: ServiceContainer) -> int:
    stats = await container.orders.get_sales_stats()

    table = Table(title="Sales")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total sales", str(stats.total_sales))
    table.add_row("Orders", str(stats.total_orders))
    table.add_row("Completed", str(stats.completed_orders))
    table.add_row("Refunded", str(stats.refunded_orders))
    table.add_row("Customers", str(stats.total_customers))
    table.add_row("Leads", str(stats.total_leads))
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DigitalPro operator commands")
    commands = parser.add_subparsers(dest="command", required=True)

    promote = commands.add_parser("promote-admin", help="Make a user a catalog administrator")
    promote.add_argument("email", help="Email of an existing user")
    promote.add_argument("--revoke", action="store_true", help="Remove admin rights instead")

    commands.add_parser("purge-sessions", help="Delete expired sessions")

    refund = commands.add_parser("refund-order", help="Mark an order refunded (revokes its entitlement)")
    refund.add_argument("order_id")

    commands.add_parser("stats", help="Show sales totals")
    return parser


async def run(args: argparse.Namespace, container: ServiceContainer) -> int:
    if args.command == "promote-admin":
        return await promote_admin(container, args.email, revoke=args.revoke)
    if args.command == "purge-sessions":
        return await purge_sessions(container)
    if args.command == "refund-order":
        return await refund_order(container, args.order_id)
    return await show_stats(container)


def main(argv: Optional[list[str]] = None, container: Optional[ServiceContainer] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args, container or get_container()))
    except DigitalProError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
