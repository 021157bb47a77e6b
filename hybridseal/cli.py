"""
hybridseal Command Line
=======================

File-oriented front-end over the envelope API::

    hybridseal keygen --bits 2048 --out alice
    hybridseal fingerprint alice.pub.der
    hybridseal encrypt --key alice.pub.der notes.txt notes.sealed
    hybridseal decrypt --key alice.key.der notes.sealed notes.txt
    hybridseal sign --key alice.key.der --pub alice.pub.der notes.txt notes.signed
    hybridseal verify --key alice.pub.der --expect <fingerprint> notes.signed notes.txt

``--base64`` on encrypt/sign writes Base64 text instead of raw bytes, and on
decrypt/verify reads it.

Exit status: 0 success, 1 cryptographic or input failure, 2 file error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hybridseal import codec, config
from hybridseal.envelope import EnvelopeDecrypter, EnvelopeEncrypter
from hybridseal.errors import HybridSealError, InvalidInputError
from hybridseal.fingerprint import sha256, sha256_fingerprint
from hybridseal.keys import generate_keypair
from hybridseal.signed import EnvelopeSigner, EnvelopeVerifier

logger = logging.getLogger(__name__)

PUBLIC_SUFFIX = ".pub.der"
PRIVATE_SUFFIX = ".key.der"


# ---------------------------------------------------------------------------
# I/O helpers
# ---------------------------------------------------------------------------


def _read_input(path: Path, base64_text: bool) -> bytes:
    data = path.read_bytes()
    if base64_text:
        return codec.b64decode(data.strip())
    return data


def _write_output(path: Path, data: bytes, base64_text: bool) -> None:
    if base64_text:
        path.write_text(codec.b64encode(data) + "\n", encoding="ascii")
    else:
        path.write_bytes(data)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_keygen(args: argparse.Namespace) -> int:
    pair = generate_keypair(args.bits)
    prefix = Path(args.out)
    prefix.parent.mkdir(parents=True, exist_ok=True)
    Path(str(prefix) + PUBLIC_SUFFIX).write_bytes(pair.public_key)
    private_path = Path(str(prefix) + PRIVATE_SUFFIX)
    private_path.write_bytes(pair.private_key)
    try:
        private_path.chmod(0o600)
    except OSError:
        logger.warning("Could not restrict permissions on %s", private_path)
    print(pair.fingerprint)
    return 0


def _cmd_fingerprint(args: argparse.Namespace) -> int:
    print(sha256_fingerprint(Path(args.keyfile).read_bytes()))
    return 0


def _cmd_encrypt(args: argparse.Namespace) -> int:
    encrypter = EnvelopeEncrypter(Path(args.key).read_bytes())
    sealed = encrypter.encrypt(Path(args.input).read_bytes())
    _write_output(Path(args.output), sealed, args.base64)
    return 0


def _cmd_decrypt(args: argparse.Namespace) -> int:
    decrypter = EnvelopeDecrypter(Path(args.key).read_bytes())
    plaintext = decrypter.decrypt(_read_input(Path(args.input), args.base64))
    Path(args.output).write_bytes(plaintext)
    return 0


def _cmd_sign(args: argparse.Namespace) -> int:
    fingerprint_raw = sha256(Path(args.pub).read_bytes())
    signer = EnvelopeSigner(Path(args.key).read_bytes(), fingerprint_raw)
    signed = signer.sign(Path(args.input).read_bytes())
    _write_output(Path(args.output), signed, args.base64)
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    verifier = EnvelopeVerifier(Path(args.key).read_bytes())
    message = verifier.verify(_read_input(Path(args.input), args.base64))
    if args.expect and message.fingerprint != args.expect.strip().lower():
        raise InvalidInputError(
            f"Envelope was signed as {message.fingerprint}, expected {args.expect}."
        )
    Path(args.output).write_bytes(message.content)
    print(message.fingerprint)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hybridseal",
        description="Hybrid RSA + AES-GCM envelopes and signed messages.",
    )
    parser.add_argument("--log-level", default=None, help="override HYBRIDSEAL_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keygen", help="generate an RSA key pair as DER files")
    p.add_argument("--bits", type=int, default=None, help="modulus size (default from config)")
    p.add_argument("--out", required=True, help="output prefix for .pub.der / .key.der")
    p.set_defaults(func=_cmd_keygen)

    p = sub.add_parser("fingerprint", help="print a DER public key's fingerprint")
    p.add_argument("keyfile")
    p.set_defaults(func=_cmd_fingerprint)

    for name, func, key_help in (
        ("encrypt", _cmd_encrypt, "recipient public key (DER)"),
        ("decrypt", _cmd_decrypt, "recipient private key (DER)"),
        ("sign", _cmd_sign, "signer private key (DER)"),
        ("verify", _cmd_verify, "signer public key (DER)"),
    ):
        p = sub.add_parser(name, help=f"{name} a file")
        p.add_argument("--key", required=True, help=key_help)
        p.add_argument("--base64", action="store_true", help="Base64 text instead of raw bytes")
        p.add_argument("input")
        p.add_argument("output")
        p.set_defaults(func=func)

    sub.choices["sign"].add_argument(
        "--pub", required=True, help="public key paired with --key; its fingerprint goes in the envelope"
    )
    sub.choices["verify"].add_argument(
        "--expect", default=None, help="reject unless the embedded fingerprint equals this"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)
    try:
        return args.func(args)
    except HybridSealError as exc:
        print(f"hybridseal: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"hybridseal: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
