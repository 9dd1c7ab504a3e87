"""CLI helpers for computing fingerprints offline."""

import argparse
import json
import sys

from request_fingerprint.application.fingerprint_engine import (
    compute_fingerprint,
    serialize_fingerprint_parts,
)
from request_fingerprint.domain.header_allowlist import (
    FINGERPRINT_HEADERS,
    PRIMARY_HEADER_KEYS,
    select_fingerprint_headers,
)
from request_fingerprint.domain.models import PrimaryHeaders, RequestAttributes


def parse_header(value: str) -> tuple[str, str]:
    """Parse a ``Name: value`` header argument."""
    name, sep, header_value = value.partition(":")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {value!r}")
    return name, header_value.strip()


def build_attributes(args: argparse.Namespace) -> RequestAttributes:
    """Build request attributes from parsed ``compute`` arguments.

    ``--header`` values go through the allow-list just like request headers
    do. The dedicated primary header flags take precedence over a ``--header``
    carrying the same name.
    """
    headers = select_fingerprint_headers(dict(args.header or []))
    primary = PrimaryHeaders(
        user_agent=(
            args.user_agent if args.user_agent is not None else headers.get("user-agent", "")
        ),
        accept=args.accept if args.accept is not None else headers.get("accept", ""),
        accept_language=(
            args.accept_language
            if args.accept_language is not None
            else headers.get("accept-language", "")
        ),
        accept_encoding=(
            args.accept_encoding
            if args.accept_encoding is not None
            else headers.get("accept-encoding", "")
        ),
    )
    return RequestAttributes(
        client_address=args.ip,
        method=args.method,
        protocol_version=args.protocol,
        primary_headers=primary,
        tls_version=args.tls or None,
        port=args.port or None,
        extra_headers={
            name: value for name, value in headers.items() if name not in PRIMARY_HEADER_KEYS
        },
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description="Request fingerprint helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fingerprint a request as the server would see it
  fingerprint-cli compute --ip 203.0.113.5 --user-agent "TestBot/1.0"

  # Include allow-listed headers and show the hashed string
  fingerprint-cli compute --ip 203.0.113.5 --header "DNT: 1" --show-parts

  # List the headers that take part in fingerprints
  fingerprint-cli headers
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    compute_parser = subparsers.add_parser("compute", help="Compute a fingerprint")
    compute_parser.add_argument("--ip", required=True, help="Client address")
    compute_parser.add_argument("--method", default="GET", help="Request method")
    compute_parser.add_argument("--protocol", default="HTTP/1.1", help="Protocol version")
    compute_parser.add_argument("--tls", help="TLS version label (e.g. TLS1.3)")
    compute_parser.add_argument("--port", help="Port from the Host header")
    compute_parser.add_argument("--user-agent", help="User-Agent header")
    compute_parser.add_argument("--accept", help="Accept header")
    compute_parser.add_argument("--accept-language", help="Accept-Language header")
    compute_parser.add_argument("--accept-encoding", help="Accept-Encoding header")
    compute_parser.add_argument(
        "--header",
        action="append",
        type=parse_header,
        metavar="'NAME: VALUE'",
        help="Additional header; headers outside the allow-list are ignored",
    )
    compute_parser.add_argument(
        "--show-parts", action="store_true", help="Also print the hashed string"
    )
    compute_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("headers", help="List the allow-listed headers")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "headers":
        for name in sorted(FINGERPRINT_HEADERS, key=str.lower):
            print(name)
        return 0

    attributes = build_attributes(args)
    fingerprint = compute_fingerprint(attributes)
    if args.json:
        print(
            json.dumps(
                {
                    "fingerprint": fingerprint,
                    "parts": serialize_fingerprint_parts(attributes),
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        print(fingerprint)
        if args.show_parts:
            print(serialize_fingerprint_parts(attributes))
    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
