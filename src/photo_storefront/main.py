"""Command line storefront client."""

import argparse
import asyncio
import getpass
import logging
from collections.abc import Callable, Sequence

from photo_storefront.app_logging import configure_logging
from photo_storefront.client import StorefrontClient
from photo_storefront.config import ClientSettings
from photo_storefront.services.catalog import CatalogUnavailableError
from photo_storefront.views.terminal import TerminalView

logger = logging.getLogger(__name__)

PasswordPrompt = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the storefront CLI."""
    parser = argparse.ArgumentParser(
        prog="photo-storefront", description="Photo Storefront client"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status", help="show who is logged in")
    login = commands.add_parser("login", help="log in with email and password")
    login.add_argument("email")
    register = commands.add_parser("register", help="create an account")
    register.add_argument("name")
    register.add_argument("email")
    commands.add_parser("logout", help="end the current session")
    commands.add_parser("catalog", help="list photos for sale")
    add = commands.add_parser("add", help="add a photo to the cart")
    add.add_argument("item_id", type=int)
    add.add_argument("--quantity", type=int, default=1)
    remove = commands.add_parser("remove", help="remove a photo from the cart")
    remove.add_argument("item_id", type=int)
    commands.add_parser("cart", help="show the cart")
    commands.add_parser("clear-cart", help="empty the cart")
    return parser


async def run(  # noqa: PLR0911
    args: argparse.Namespace,
    client: StorefrontClient,
    prompt_password: PasswordPrompt = getpass.getpass,
) -> int:
    """Execute one CLI command, drawing only what that command shows."""
    controller = client.view_controller
    await client.start(show_shop=False)

    if args.command == "status":
        return 0
    if args.command == "login":
        result = await client.auth_client.login(
            args.email, prompt_password("Password: ")
        )
        return 0 if result.ok else 1
    if args.command == "register":
        result = await client.auth_client.register(
            args.name, args.email, prompt_password("Password: ")
        )
        return 0 if result.ok else 1
    if args.command == "logout":
        client.auth_client.logout()
        return 0
    if args.command == "catalog":
        try:
            await client.load_catalog()
        except CatalogUnavailableError as exc:
            controller.alert(str(exc))
            return 1
        return 0

    if not client.session_manager.is_authenticated:
        controller.alert("Log in to use the cart")
        return 1
    if args.command == "add":
        return await _add_to_cart(client, args.item_id, args.quantity)
    if args.command == "remove":
        client.cart_manager.remove_item(args.item_id)
        return 0
    if args.command == "cart":
        controller.view.render_cart(client.cart_manager.cart)
        return 0
    if args.command == "clear-cart":
        client.cart_manager.clear()
        return 0
    return 2


async def _add_to_cart(client: StorefrontClient, item_id: int, quantity: int) -> int:
    controller = client.view_controller
    if quantity < 1:
        controller.alert("Quantity must be at least 1")
        return 1
    try:
        await client.catalog.refresh()
    except CatalogUnavailableError as exc:
        controller.alert(str(exc))
        return 1
    image = client.catalog.find(item_id)
    if image is None:
        controller.alert(f"Photo #{item_id} is not available")
        return 1
    client.cart_manager.add_item(image.as_cart_item(), quantity)
    return 0


async def _main(argv: Sequence[str] | None) -> int:
    args = build_parser().parse_args(argv)
    client = StorefrontClient.create(ClientSettings(), TerminalView())
    try:
        return await run(args, client)
    finally:
        await client.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the storefront CLI."""
    configure_logging(logging.WARNING)
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
