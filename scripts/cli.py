#!/usr/bin/env python3
"""Command-line interface for the Wizard's Potion Shop API.

Usage examples:
    python scripts/cli.py list
    python scripts/cli.py get pot-1a2b3c4d5e6f
    python scripts/cli.py next-number
    python scripts/cli.py create --ordered-by "Merlin the Wise" \\
        --address "Tower of Magic, Enchanted Forest" \\
        --ingredient "Dragon scale:2:pcs:100" \\
        --ingredient "Moonwater:3:ml:50" \\
        --ingredient "Newt eye:5:pcs:15"
    python scripts/cli.py status pot-1a2b3c4d5e6f ready
    python scripts/cli.py delete pot-1a2b3c4d5e6f --yes
"""

import argparse
import json
import sys

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0

DELIVERY_METHODS = ["Owl Post", "Dragon Express", "Magical Teleport", "Wizard Courier", "Shop Pickup"]
PAYMENT_METHODS = ["Gold Coins", "Silver Coins", "Magical Transfer", "Credit Spell", "Barter"]
STATUSES = ["brewing", "ready", "delivered"]


def format_output(data: object) -> None:
    """Pretty-print a JSON-serialisable object."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def handle_response(response: httpx.Response) -> dict:
    """Return the JSON body or exit with an error message."""
    try:
        body = response.json()
    except ValueError:
        body = {"detail": response.text}

    if response.status_code >= 400:
        print(
            f"Error {response.status_code}: {json.dumps(body.get('detail', 'Unknown error'), ensure_ascii=False)}",
            file=sys.stderr,
        )
        sys.exit(1)

    return body


def parse_ingredient(value: str) -> dict[str, object]:
    """Parse NAME:QTY:UNIT:PRICE into an ingredient payload."""
    parts = value.rsplit(":", 3)
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(
            f"Invalid ingredient '{value}'. Expected NAME:QTY:UNIT:PRICE"
        )
    name, quantity, unit, price = parts
    try:
        return {
            "name": name,
            "quantity": float(quantity),
            "unit": unit,
            "price_per_unit": float(price),
        }
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid ingredient '{value}'. Quantity and price must be numbers"
        )


def cmd_list(args: argparse.Namespace, base_url: str) -> None:
    """List potions."""
    resp = httpx.get(f"{base_url}/api/potions/", timeout=DEFAULT_TIMEOUT)
    format_output(handle_response(resp))


def cmd_get(args: argparse.Namespace, base_url: str) -> None:
    """Retrieve a single potion by ID."""
    resp = httpx.get(f"{base_url}/api/potions/{args.id}", timeout=DEFAULT_TIMEOUT)
    format_output(handle_response(resp))


def cmd_next_number(args: argparse.Namespace, base_url: str) -> None:
    """Show the number the next potion would receive."""
    resp = httpx.get(f"{base_url}/api/potions/next-number", timeout=DEFAULT_TIMEOUT)
    format_output(handle_response(resp))


def build_create_payload(args: argparse.Namespace) -> dict[str, object]:
    data: dict[str, object] = {
        "ordered_by": args.ordered_by,
        "delivery_address": args.address,
        "delivery_method": args.delivery,
        "payment_method": args.payment,
        "ingredients": args.ingredient or [],
    }
    if args.ready_date:
        data["ready_date"] = args.ready_date
    return data


def cmd_create(args: argparse.Namespace, base_url: str) -> None:
    """Submit a new potion order."""
    resp = httpx.post(
        f"{base_url}/api/potions/",
        json=build_create_payload(args),
        timeout=DEFAULT_TIMEOUT,
    )
    format_output(handle_response(resp))


def cmd_status(args: argparse.Namespace, base_url: str) -> None:
    """Change the status of a potion."""
    resp = httpx.patch(
        f"{base_url}/api/potions/{args.id}",
        json={"status": args.status},
        timeout=DEFAULT_TIMEOUT,
    )
    format_output(handle_response(resp))


def cmd_delete(args: argparse.Namespace, base_url: str) -> None:
    """Delete a potion, asking for confirmation unless --yes is given."""
    url = f"{base_url}/api/potions/{args.id}"

    if not args.yes:
        resp = httpx.delete(url, timeout=DEFAULT_TIMEOUT)
        if resp.status_code != 409:
            handle_response(resp)
            return
        answer = input(f"{resp.json()['detail']} [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Delete cancelled.")
            return

    resp = httpx.delete(url, params={"confirm": "true"}, timeout=DEFAULT_TIMEOUT)
    format_output(handle_response(resp))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cli.py",
        description="Wizard's Potion Shop CLI",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL (default: {DEFAULT_BASE_URL})",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    # --- list ---
    sub.add_parser("list", help="List potions")

    # --- get ---
    p_get = sub.add_parser("get", help="Get potion by ID")
    p_get.add_argument("id", help="Potion ID")

    # --- next-number ---
    sub.add_parser("next-number", help="Show the next potion number")

    # --- create ---
    p_create = sub.add_parser("create", help="Submit a new potion order")
    p_create.add_argument("--ordered-by", required=True, help="Customer name (2-100 chars)")
    p_create.add_argument("--address", required=True, help="Delivery address (5-200 chars)")
    p_create.add_argument("--ready-date", help="ISO 8601 timestamp (default: tomorrow)")
    p_create.add_argument("--delivery", choices=DELIVERY_METHODS, default=DELIVERY_METHODS[0])
    p_create.add_argument("--payment", choices=PAYMENT_METHODS, default=PAYMENT_METHODS[0])
    p_create.add_argument(
        "--ingredient",
        action="append",
        type=parse_ingredient,
        metavar="NAME:QTY:UNIT:PRICE",
        help="Ingredient line (repeat; at least 3 required)",
    )

    # --- status ---
    p_status = sub.add_parser("status", help="Change a potion's status")
    p_status.add_argument("id", help="Potion ID")
    p_status.add_argument("status", choices=STATUSES)

    # --- delete ---
    p_delete = sub.add_parser("delete", help="Delete a potion")
    p_delete.add_argument("id", help="Potion ID")
    p_delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    base_url: str = args.base_url

    dispatch = {
        "list": cmd_list,
        "get": cmd_get,
        "next-number": cmd_next_number,
        "create": cmd_create,
        "status": cmd_status,
        "delete": cmd_delete,
    }

    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    handler(args, base_url)


if __name__ == "__main__":
    main()
