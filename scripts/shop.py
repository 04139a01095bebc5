"""
Terminal Storefront

Browse a tenant's menu, customize products and manage the cart from the
terminal. The cart survives restarts through the configured cart storage.
Run from project root: python scripts/shop.py estafeten
"""

import sys
import os
import argparse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront.cart import CartStore, CloseReason, ProductCustomization
from storefront.core.config import get_settings, setup_logging
from storefront.core.money import format_cents, format_delta
from storefront.schemas import MenuResponse
from storefront.services.menu_client import MenuClient, MenuFetchError

HELP = """
Commands:
  a <n>   customize and add product <n>
  + <n>   one more of cart line <n>
  - <n>   one less of cart line <n>
  r <n>   remove cart line <n>
  c       empty the cart
  m       show the menu
  v       show the cart
  q       quit
"""


def print_menu(menu: MenuResponse) -> list:
    """Print the menu and return products in display order."""
    products = []
    print(f"\n{menu.tenant.name} · Pedir")
    print("Delivery y recogida. Precios en EUR.")
    for category in menu.categories:
        print(f"\n== {category.name} ==")
        for product in category.products:
            products.append(product)
            print(f"  [{len(products)}] {product.name:<30} {format_cents(product.base_price_cents):>10}")
            if product.description:
                print(f"       {product.description}")
    return products


def print_cart_bar(cart: CartStore) -> None:
    count = cart.item_count()
    label = "artículo" if count == 1 else "artículos"
    print(f"\n🛒 Carrito: {count} {label} · {format_cents(cart.subtotal_cents())}")


def print_cart(cart: CartStore) -> None:
    if not cart.items:
        print("\nEl carrito está vacío.")
        return
    print()
    for index, item in enumerate(cart.items, start=1):
        print(f"  ({index}) {item.name} · {format_cents(item.unit_price_cents)} · x{item.quantity}")
        if item.modifiers and (item.modifiers.bread or item.modifiers.side):
            parts = []
            if item.modifiers.bread:
                parts.append(f"PAN: {item.modifiers.bread}")
            if item.modifiers.side:
                parts.append(f"GUARNICIÓN: {item.modifiers.side}")
            print(f"      {' · '.join(parts)}")
    print_cart_bar(cart)


def choose(prompt: str, options: list) -> int:
    """Ask for an option number; returns -1 when the user backs out."""
    while True:
        answer = input(prompt).strip().lower()
        if answer in ("", "x", "esc"):
            return -1
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        print("  Opción no válida.")


def customize(menu: MenuResponse, product, cart: CartStore) -> None:
    flow = ProductCustomization.from_menu(menu, product)
    print(f"\n{product.name}")
    if product.description:
        print(f"  {product.description}")

    print("\nPAN *")
    for index, option in enumerate(flow.bread_options, start=1):
        print(f"  [{index}] {option.name} ({format_delta(option.price_cents)})")
    choice = choose("Pan (x para cerrar): ", list(flow.bread_options))
    if choice < 0:
        flow.cancel(CloseReason.ESCAPE_KEY)
        return
    flow.select_bread(flow.bread_options[choice].name)

    print("\nGUARNICIÓN *")
    for index, option in enumerate(flow.side_options, start=1):
        print(f"  [{index}] {option.name} ({format_delta(option.price_cents)})")
    choice = choose("Guarnición (x para cerrar): ", list(flow.side_options))
    if choice < 0:
        flow.cancel(CloseReason.ESCAPE_KEY)
        return
    flow.select_side(flow.side_options[choice].name)

    answer = input(f"Total {format_cents(flow.total_cents)}. ¿Añadir al carrito? [S/n] ").strip().lower()
    if answer in ("", "s", "si", "sí", "y", "yes"):
        flow.confirm(cart)
    else:
        flow.cancel(CloseReason.CLOSE_BUTTON)


def line_at(cart: CartStore, arg: str):
    if not arg.isdigit() or not 1 <= int(arg) <= len(cart.items):
        print("  Línea no válida.")
        return None
    return cart.items[int(arg) - 1]


def run(tenant: str, base_url: str) -> int:
    try:
        with MenuClient(base_url=base_url) as client:
            menu = client.fetch_menu(tenant)
    except MenuFetchError as e:
        print(f"\n❌ {e}")
        return 1

    cart = CartStore()
    cart.subscribe(lambda items: print_cart_bar(cart))

    products = print_menu(menu)
    print_cart_bar(cart)
    print(HELP)

    while True:
        try:
            raw = input("> ").strip()
        except EOFError:
            break
        command, _, arg = raw.partition(" ")
        arg = arg.strip()

        if command == "q":
            break
        elif command == "m":
            products = print_menu(menu)
        elif command == "v":
            print_cart(cart)
        elif command == "c":
            cart.clear()
        elif command == "a":
            if arg.isdigit() and 1 <= int(arg) <= len(products):
                customize(menu, products[int(arg) - 1], cart)
            else:
                print("  Producto no válido.")
        elif command in ("+", "-", "r"):
            line = line_at(cart, arg)
            if line is None:
                continue
            if command == "+":
                cart.increment(line.id)
            elif command == "-":
                cart.decrement(line.id)
            else:
                cart.remove(line.id)
        elif command:
            print(HELP)

    return 0


if __name__ == "__main__":
    settings = get_settings()
    setup_logging()

    parser = argparse.ArgumentParser(description="Terminal storefront")
    parser.add_argument("tenant", help="Tenant slug")
    parser.add_argument("--api", default=settings.api_base_url, help="Menu API base URL")
    args = parser.parse_args()

    sys.exit(run(args.tenant, args.api))
