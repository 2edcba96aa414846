# main.py
"""
Run the Google Wallet REST calls from a terminal.

  wallet-rest run                      create class, get/create object, print Save link
  wallet-rest create-issuer NAME EMAIL create a new issuer account
  wallet-rest update-permissions ...   REPLACE the issuer's permission list

Settings come from the environment (see wallet_rest.config.Settings) and
can be overridden with flags.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from wallet_rest.auth import authorize, load_credential
from wallet_rest.config import OBJECT_TYPES, Settings
from wallet_rest.errors import WalletError
from wallet_rest.issuers import Permission, create_issuer, update_permissions
from wallet_rest.workflow import WalletObjectWorkflow


def _load_payload(path: Optional[str]) -> Optional[Dict[str, Any]]:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise WalletError(f"Could not load payload from {path}: {e}") from e
    if not isinstance(payload, dict):
        raise WalletError(f"Payload in {path} must be a JSON object")
    return payload


def _parse_permission(value: str) -> Permission:
    email, sep, role = value.rpartition(":")
    if not sep or not email:
        raise argparse.ArgumentTypeError(f"expected EMAIL:ROLE, got {value!r}")
    try:
        return Permission(email_address=email, role=role.upper())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid permission {value!r}") from None


def _show(label: str, data: Any) -> None:
    print(label, json.dumps(data, indent=2) if isinstance(data, (dict, list)) else data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wallet-rest", description=__doc__.splitlines()[1])
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--key-file", help="service account key (GOOGLE_APPLICATION_CREDENTIALS)")
    parser.add_argument("--issuer-id", help="issuer ID (WALLET_ISSUER_ID)")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="create class, get or create object, print Save link")
    run.add_argument("--object-type", choices=OBJECT_TYPES, help="WALLET_OBJECT_TYPE")
    run.add_argument("--class-id", help="class suffix (WALLET_CLASS_ID)")
    run.add_argument("--user-id", help="user ID, e.g. an email address (WALLET_USER_ID)")
    run.add_argument("--origin", action="append", dest="origins", help="allowed origin, repeatable")
    run.add_argument("--class-payload", help="JSON file with the class body")
    run.add_argument("--object-payload", help="JSON file with the object body")

    issuer = sub.add_parser("create-issuer", help="create a new issuer account")
    issuer.add_argument("name")
    issuer.add_argument("email")

    perms = sub.add_parser(
        "update-permissions",
        help="replace the issuer's permissions",
        description=(
            "Replace the permission list of an issuer. This is not a merge: "
            "every account that should keep access must be listed."
        ),
    )
    perms.add_argument(
        "permissions",
        nargs="+",
        type=_parse_permission,
        metavar="EMAIL:ROLE",
        help="ROLE is READER, WRITER or OWNER",
    )
    return parser


def _run(settings: Settings, args: argparse.Namespace) -> None:
    class_payload = _load_payload(args.class_payload)
    object_payload = _load_payload(args.object_payload)

    workflow = WalletObjectWorkflow.from_settings(settings)
    try:
        result = workflow.run(class_payload, object_payload)
    finally:
        workflow.client.close()

    _show("class POST response:", result.class_response.data)
    outcome = result.object_outcome
    _show(f"object GET or POST response ({outcome.kind.value}):", outcome.data)
    if outcome.error is not None:
        print(f"[!] {outcome.error}", file=sys.stderr)

    print("\n[+] Save link:")
    print(result.save_link.url)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env().with_overrides(
            key_file_path=args.key_file,
            issuer_id=args.issuer_id,
            object_type=getattr(args, "object_type", None),
            class_id=getattr(args, "class_id", None),
            user_id=getattr(args, "user_id", None),
            origins=tuple(args.origins) if getattr(args, "origins", None) else None,
        )
        if args.command == "run":
            _run(settings, args)
            return 0

        credential = load_credential(settings.key_file_path)
        client = authorize(credential, timeout=settings.timeout)
        try:
            if args.command == "create-issuer":
                response = create_issuer(client, args.name, args.email)
                _show("issuer POST response:", response.data)
            else:
                response = update_permissions(client, settings.issuer_id, args.permissions)
                _show("permissions PUT response:", response.data)
        finally:
            client.close()
        return 0
    except WalletError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
