"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="contact-journey",
        description="Build a Salesforce contact's interaction journey",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Read Salesforce settings from YAML instead of SF_* environment variables",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # auth
    subparsers.add_parser("auth", help="Check the token exchange (token is redacted)")

    # journey
    journey_parser = subparsers.add_parser("journey", help="Build the journey payload for a contact")
    journey_parser.add_argument("contact_id", help="Salesforce Contact Id")
    journey_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write journey JSON to file (default: stdout)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "auth":
        _run_auth(args)
    elif args.command == "journey":
        _run_journey(args)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    from contact_journey.config import Settings

    if args.config:
        return Settings.from_yaml(args.config)
    return Settings.from_env()


def _run_auth(args: argparse.Namespace) -> None:
    """Run auth command."""
    from contact_journey.errors import JourneyError
    from contact_journey.salesforce.auth import CredentialProvider

    try:
        with CredentialProvider(_load_settings(args)) as provider:
            credential = provider.acquire()
    except JourneyError as e:
        raise SystemExit(str(e))

    token = credential.access_token
    print(
        json.dumps(
            {
                "success": True,
                "access_token": f"{token[:6]}...({len(token)} chars)",
                "instance_url": credential.base_url,
                "token_type": credential.token_type,
            },
            indent=2,
        )
    )


def _run_journey(args: argparse.Namespace) -> None:
    """Run journey command."""
    from contact_journey.errors import JourneyError
    from contact_journey.pipeline import build_journey

    try:
        journey = build_journey(args.contact_id, settings=_load_settings(args))
    except JourneyError as e:
        raise SystemExit(str(e))

    output = json.dumps({"success": True, "journey": journey.to_payload()}, indent=2)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote journey with {len(journey.events)} events to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
