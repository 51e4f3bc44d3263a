"""CLI to exercise a running bullion_gateway server.

Usage:
  bullion-smoke health
  bullion-smoke register Ada Lovelace ada@example.com 'correct horse battery'
  bullion-smoke login ada@example.com 'correct horse battery'
  bullion-smoke me --token <token>
  bullion-smoke quotes AAPL MSFT
  bullion-smoke search apple --head 5
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_register(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {
        "firstName": args.first_name,
        "lastName": args.last_name,
        "email": args.email,
        "password": args.password,
    }
    r = client.post("/api/auth/register", json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_login(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post("/api/auth/login", json={"email": args.email, "password": args.password})
    r.raise_for_status()
    data = r.json()
    if args.token_only:
        print(data["token"])
    else:
        print_json(data)
    return 0


def cmd_me(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/users/me", headers={"Authorization": f"Bearer {args.token}"})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_quotes(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/quotes", params={"symbols": ",".join(args.symbols)})
    r.raise_for_status()
    quotes = r.json().get("quotes", {})
    for sym, entry in quotes.items():
        if "error" in entry:
            print(f"{sym:<8} {entry['status']:<10} {entry['error']}")
        else:
            print(
                f"{sym:<8} {entry['status']:<10} {entry.get('price')} "
                f"({entry.get('change')}, {entry.get('changePct')}%)"
            )
    return 0


def cmd_search(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/search", params={"q": args.query})
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} matches for {args.query!r}")
    print_json(data[: args.head] if args.head else data)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exercise bullion_gateway API routes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")

    p = subparsers.add_parser("register", help="POST /api/auth/register")
    p.add_argument("first_name")
    p.add_argument("last_name")
    p.add_argument("email")
    p.add_argument("password")

    p = subparsers.add_parser("login", help="POST /api/auth/login")
    p.add_argument("email")
    p.add_argument("password")
    p.add_argument("--token-only", action="store_true", help="Print only the token")

    p = subparsers.add_parser("me", help="GET /api/users/me")
    p.add_argument("--token", required=True, help="Bearer token from login")

    p = subparsers.add_parser("quotes", help="GET /api/quotes")
    p.add_argument("symbols", nargs="+", help="Tickers (e.g. AAPL MSFT)")

    p = subparsers.add_parser("search", help="GET /api/search")
    p.add_argument("query", help="Symbol or company name")
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")

    return parser


HANDLERS = {
    "health": cmd_health,
    "register": cmd_register,
    "login": cmd_login,
    "me": cmd_me,
    "quotes": cmd_quotes,
    "search": cmd_search,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    handler = HANDLERS[args.command]
    base_url = args.base_url.rstrip("/")

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
