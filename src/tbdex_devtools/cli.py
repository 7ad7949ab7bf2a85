#!/usr/bin/env python3
"""
tbdex-devtools - Create DIDs, sign and decode JWTs for testing

Usage:
    tbdex-devtools create-did --key-algorithm secp256k1 -o alice.json
    tbdex-devtools create-jwt -i alice.json -s did:example:bob -m '{"beep": "boop"}'
    tbdex-devtools decode-jwt "eyJ..." --verify -i alice.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .did import DEFAULT_KEY_ALGORITHM, PortableDid
from .dev_tools import DevTools
from .errors import (
    DevToolsError,
    JwtVerificationError,
    MalformedKeyError,
    MalformedTokenError,
    NoSigningKeyError,
    UnsupportedAlgorithmError,
)
from .jwt import verify_jwt
from .keys import SUPPORTED_KEY_ALGORITHMS
from .version import SDK_VERSION

# Exit codes
EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_INVALID_ARGS = 2
EXIT_FILE_ERROR = 3
EXIT_INVALID_KEY = 4
EXIT_INVALID_TOKEN = 5
EXIT_SIGNATURE_FAILED = 6


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tbdex-devtools",
        description="Create DIDs, sign and decode JWTs for tbDEX testing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {SDK_VERSION}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_did = subparsers.add_parser("create-did", help="Create a did:key and print it as a portable DID")
    create_did.add_argument(
        "--key-algorithm",
        choices=SUPPORTED_KEY_ALGORITHMS,
        default=DEFAULT_KEY_ALGORITHM,
        help=f"Signing key algorithm (default: {DEFAULT_KEY_ALGORITHM})",
    )
    create_did.add_argument(
        "-o",
        "--output",
        help="Write the portable DID to a file instead of stdout",
    )

    create_jwt = subparsers.add_parser("create-jwt", help="Sign a payload as a compact JWT")
    create_jwt.add_argument(
        "-i",
        "--issuer",
        required=True,
        help="Issuer's portable DID (JSON file)",
    )
    create_jwt.add_argument(
        "-s",
        "--subject",
        required=True,
        help="JWT subject",
    )
    create_jwt.add_argument(
        "-m",
        "--payload",
        help="Payload as JSON object",
    )
    create_jwt.add_argument(
        "-f",
        "--file",
        help="Payload file (default: stdin)",
    )
    create_jwt.add_argument(
        "--raw",
        action="store_true",
        help="Output only the compact JWT",
    )

    decode_jwt = subparsers.add_parser("decode-jwt", help="Decode a compact JWT")
    decode_jwt.add_argument(
        "token",
        help="Compact JWT",
    )
    decode_jwt.add_argument(
        "--verify",
        action="store_true",
        help="Verify the signature against the issuer's public key",
    )
    decode_jwt.add_argument(
        "-i",
        "--issuer",
        help="Issuer's portable DID (JSON file), required with --verify",
    )
    return parser


def load_portable_did(path: str) -> PortableDid:
    """Read a portable DID written by create-did"""
    return PortableDid.from_dict(json.loads(Path(path).read_text()))


def read_payload(args: argparse.Namespace) -> Any:
    # Priority: --payload > --file > stdin
    if args.payload:
        return json.loads(args.payload)
    if args.file and args.file != "-":
        content = Path(args.file).read_text().strip()
        return json.loads(content) if content else {}
    if not sys.stdin.isatty():
        content = sys.stdin.read().strip()
        return json.loads(content) if content else {}
    return {}


async def run_create_did(args: argparse.Namespace) -> int:
    portable_did = DevTools.create_did(key_algorithm=args.key_algorithm)
    output = json.dumps(portable_did.to_dict(), indent=2)

    if args.output:
        try:
            Path(args.output).write_text(output + "\n")
        except OSError as e:
            print(f"Error: Cannot write output file: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        print(portable_did.did)
    else:
        print(output)
    return EXIT_SUCCESS


async def run_create_jwt(args: argparse.Namespace) -> int:
    try:
        issuer = load_portable_did(args.issuer)
    except (OSError, ValueError, KeyError, TypeError) as e:
        print(f"Error: Cannot read issuer file: {args.issuer}", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        payload = read_payload(args)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON payload: {e}", file=sys.stderr)
        return EXIT_INVALID_ARGS
    except OSError as e:
        print(f"Error: Cannot read payload file: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    if not isinstance(payload, dict):
        print("Error: Payload must be a JSON object", file=sys.stderr)
        return EXIT_INVALID_ARGS

    try:
        token = await DevTools.create_jwt(issuer=issuer, subject=args.subject, payload=payload)
    except (NoSigningKeyError, MalformedKeyError, UnsupportedAlgorithmError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_KEY

    if args.raw:
        print(token)
    else:
        output: Dict[str, Any] = {
            "success": True,
            "issuer": issuer.did,
            "subject": args.subject,
            "jwt": token,
        }
        print(json.dumps(output, indent=2))
    return EXIT_SUCCESS


async def run_decode_jwt(args: argparse.Namespace) -> int:
    if args.verify and not args.issuer:
        print("Error: --verify requires --issuer", file=sys.stderr)
        return EXIT_INVALID_ARGS

    public_key_jwk = None
    if args.verify:
        try:
            issuer = load_portable_did(args.issuer)
            public_key_jwk = issuer.key_set.verification_method_keys[0].public_key_jwk
        except (OSError, ValueError, KeyError, TypeError, IndexError) as e:
            print(f"Error: Cannot read issuer file: {args.issuer}", file=sys.stderr)
            print(str(e), file=sys.stderr)
            return EXIT_FILE_ERROR

    try:
        if public_key_jwk is not None:
            decoded = await verify_jwt(args.token, public_key_jwk)
        else:
            decoded = DevTools.decode_jwt(args.token)
    except MalformedTokenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_TOKEN
    except JwtVerificationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SIGNATURE_FAILED
    except (MalformedKeyError, UnsupportedAlgorithmError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_KEY

    output: Dict[str, Any] = {
        "header": decoded.header,
        "payload": decoded.payload,
        "signature": decoded.signature,
    }
    if args.verify:
        output["verified"] = True
    print(json.dumps(output, indent=2))
    return EXIT_SUCCESS


COMMANDS = {
    "create-did": run_create_did,
    "create-jwt": run_create_jwt,
    "decode-jwt": run_decode_jwt,
}


async def main_async(args: argparse.Namespace) -> int:
    try:
        return await COMMANDS[args.command](args)
    except DevToolsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_GENERAL_ERROR


def main(argv: Optional[List[str]] = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        exit_code = asyncio.run(main_async(args))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        sys.exit(EXIT_GENERAL_ERROR)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_GENERAL_ERROR)


if __name__ == "__main__":
    main()
