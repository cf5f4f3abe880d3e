"""CLI entrypoint for the ScamVigil scan host."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from scamvigil import __version__
from scamvigil.config import load_config
from scamvigil.constants.branding import CLI_DESCRIPTION
from scamvigil.constants.messages import (
    ACTION_ADD_TO_WATCHLIST,
    ACTION_GET_SCAN_RESULT,
    ACTION_PERFORM_SCAN,
    ACTION_SCAN_EMAIL,
    ACTION_SCAN_LINK,
    ACTION_SCAN_MESSAGE,
)
from scamvigil.exceptions import ConfigError
from scamvigil.monitoring import build_watchlist_scheduler
from scamvigil.runtime import VigilRuntime, build_runtime
from scamvigil.types import JsonObject

CLI_ORIGIN = "cli"


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="scamvigil",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-r", "--root", type=Path, default=Path.cwd(), help="Directory holding scamvigil.yaml")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sign_in = subparsers.add_parser("sign-in", help="Store a bearer token (and optionally the backend URL)")
    sign_in.add_argument("-t", "--token", required=True, help="Bearer token issued by the sign-in flow")
    sign_in.add_argument("-b", "--backend-url", default=None, help="Backend base URL")

    subparsers.add_parser("sign-out", help="Forget the stored bearer token")

    scan_profile = subparsers.add_parser("scan-profile", help="Scan a social profile URL")
    scan_profile.add_argument("url", help="Profile URL")
    scan_profile.add_argument("-p", "--platform", default=None, help="Platform name (inferred from URL if omitted)")

    scan_link = subparsers.add_parser("scan-link", help="Scan a link")
    scan_link.add_argument("url", help="URL to evaluate")

    scan_email = subparsers.add_parser("scan-email", help="Verify an email sender")
    scan_email.add_argument("email", help="Email address or text containing one")

    scan_message = subparsers.add_parser("scan-message", help="Scan a free-text message")
    scan_message.add_argument("text", help="Message text")

    get_result = subparsers.add_parser("get-result", help="Show the cached profile result, if fresh")
    get_result.add_argument("url", help="Profile URL")

    watch_add = subparsers.add_parser("watch-add", help="Add a profile to the monitoring watchlist")
    watch_add.add_argument("url", help="Profile URL")

    subparsers.add_parser("poll", help="Run one watchlist polling cycle")
    subparsers.add_parser("watch", help="Poll the watchlist on a schedule until interrupted")

    return parser


def build_request(args: argparse.Namespace) -> JsonObject | None:
    """Translate a scan-type subcommand into an inbound request message."""
    if args.command == "scan-profile":
        return {"action": ACTION_PERFORM_SCAN, "url": args.url, "platform": args.platform}
    if args.command == "scan-link":
        return {"action": ACTION_SCAN_LINK, "url": args.url}
    if args.command == "scan-email":
        return {"action": ACTION_SCAN_EMAIL, "email": args.email}
    if args.command == "scan-message":
        return {"action": ACTION_SCAN_MESSAGE, "text": args.text}
    if args.command == "get-result":
        return {"action": ACTION_GET_SCAN_RESULT, "profileUrl": args.url}
    if args.command == "watch-add":
        return {"action": ACTION_ADD_TO_WATCHLIST, "profileUrl": args.url}
    return None


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        config = load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    runtime = build_runtime(config)

    request = build_request(args)
    if request is not None:
        envelope = asyncio.run(runtime.router.handle(request, CLI_ORIGIN))
        print(json.dumps(envelope, indent=2, ensure_ascii=False))
        return 0 if envelope.get("success") else 1

    if args.command == "sign-in":
        asyncio.run(runtime.auth_gate.sign_in(args.token, backend_url=args.backend_url))
        print("Signed in.")
        return 0

    if args.command == "sign-out":
        asyncio.run(runtime.auth_gate.sign_out())
        print("Signed out.")
        return 0

    if args.command == "poll":
        alert = asyncio.run(runtime.poller.run_cycle())
        print(f"Notified alert {alert.alert_id}." if alert else "No new watchlist alerts.")
        return 0

    if args.command == "watch":
        try:
            asyncio.run(_watch(runtime))
        except KeyboardInterrupt:
            print("Stopped.")
        return 0

    parser.error(f"Unsupported command: {args.command}")
    return 2


async def _watch(runtime: VigilRuntime) -> None:
    """Run the watchlist scheduler on the current event loop until cancelled."""
    scheduler = build_watchlist_scheduler(runtime.poller, interval_minutes=runtime.config.poll_interval_minutes)
    scheduler.start()
    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)


if __name__ == "__main__":
    raise SystemExit(main())
