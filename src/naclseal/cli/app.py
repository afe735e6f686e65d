"""CLI application entry point and command routing for naclseal.

This module is the **sole error boundary** for the entire application.
It catches :class:`~naclseal.exceptions.NaclSealError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Stdout carries command payloads only; every message goes to stderr
  through the console proxy.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, BinaryIO, NoReturn

from naclseal.cli import exit_codes
from naclseal.cli.console import console, escape
from naclseal.cli.logging_setup import configure_logging
from naclseal.exceptions import NaclSealError, UsageError
from naclseal.version import __version__

if TYPE_CHECKING:
    from naclseal.core.sealing_service import SealingService

logger = logging.getLogger(__name__)

_SUBCOMMANDS = """\
Available subcommands:
  genkey           Generates a new keypair and writes it to stdout
  pubkey           Reads a keypair from stdin and writes its public key to stdout
  seal pub.json    Reads data from stdin, encrypts it into a sealed box, writes the box to stdout
  unseal priv.json Reads a sealed box from stdin, decrypts it, writes data to stdout
  doctor           Checks that this environment can seal and unseal"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose errors raise :class:`UsageError` instead of exiting 2."""

    def error(self, message: str) -> NoReturn:
        console.print(escape(self.format_usage().rstrip()))
        raise UsageError(message, hint="Run naclseal --help for usage.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are dispatched on the count of positional arguments
    rather than through argparse sub-parsers:

    * ``naclseal genkey`` / ``pubkey`` / ``doctor``
    * ``naclseal seal <pubkey-file>`` / ``unseal <keypair-file>``
    """
    parser = _ArgumentParser(
        prog="naclseal",
        usage="%(prog)s [<flags>] <cmd> [<args>]",
        description="Anonymous public-key encryption with NaCl sealed boxes.",
        epilog=_SUBCOMMANDS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-b",
        "--base64",
        action="store_true",
        help="Automatically base64 decode input and encode output "
        "while seal/unseal.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="cmd",
        help="Subcommand followed by its arguments.",
    )
    return parser


def _print_usage(parser: argparse.ArgumentParser) -> None:
    console.print(escape(parser.format_help().rstrip()))


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _build_service() -> SealingService:
    """Wire the PyNaCl backend into the core sealing service."""
    from naclseal.core.sealing_service import SealingService
    from naclseal.infra.nacl_backend import PyNaclSealingBackend

    return SealingService(PyNaclSealingBackend())


def _handle_genkey(stdout: BinaryIO) -> int:
    """Write a fresh keypair envelope to stdout."""
    from naclseal.core.key_codec import encode_keypair
    from naclseal.infra.streams import StreamWriter

    keypair = _build_service().generate_keypair()
    with StreamWriter(stdout) as writer:
        writer.write(encode_keypair(keypair) + b"\n")
    return exit_codes.SUCCESS


def _handle_pubkey(stdin: BinaryIO, stdout: BinaryIO) -> int:
    """Read a keypair envelope from stdin, write its public-key envelope."""
    from naclseal.core.key_codec import decode_keypair, encode_public_key
    from naclseal.core.sealing_service import SealingService
    from naclseal.infra.streams import StreamReader, StreamWriter

    keypair = decode_keypair(StreamReader(stdin).read())
    public_key = SealingService.derive_public_key(keypair)
    with StreamWriter(stdout) as writer:
        writer.write(encode_public_key(public_key) + b"\n")
    return exit_codes.SUCCESS


def _handle_seal(
    key_path: str,
    stdin: BinaryIO,
    stdout: BinaryIO,
    *,
    base64_recoding: bool,
) -> int:
    """Seal stdin for the public key stored in *key_path*."""
    from naclseal.infra.key_files import read_public_key_file
    from naclseal.infra.streams import open_input, open_output

    public_key = read_public_key_file(key_path)
    message = open_input(stdin, base64_recoding=base64_recoding).read()
    box = _build_service().seal(message, public_key)
    with open_output(stdout, base64_recoding=base64_recoding) as writer:
        writer.write(box)
    return exit_codes.SUCCESS


def _handle_unseal(
    key_path: str,
    stdin: BinaryIO,
    stdout: BinaryIO,
    *,
    base64_recoding: bool,
) -> int:
    """Open the sealed box on stdin with the keypair stored in *key_path*.

    The box is fully verified before the output stream is touched, so a
    failed open writes nothing.
    """
    from naclseal.infra.key_files import read_keypair_file
    from naclseal.infra.streams import open_input, open_output

    keypair = read_keypair_file(key_path)
    box = open_input(stdin, base64_recoding=base64_recoding).read()
    plaintext = _build_service().unseal(box, keypair)
    with open_output(stdout, base64_recoding=base64_recoding) as writer:
        writer.write(plaintext)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from naclseal.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _dispatch(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    stdin: BinaryIO,
    stdout: BinaryIO,
) -> int:
    positional: list[str] = args.args
    logger.debug("Dispatching %s (base64=%s)", positional, args.base64)

    if not positional:
        _print_usage(parser)
        return exit_codes.USAGE_ERROR

    if len(positional) == 1:
        command = positional[0]
        if command == "genkey":
            return _handle_genkey(stdout)
        if command == "pubkey":
            return _handle_pubkey(stdin, stdout)
        if command == "doctor":
            return _handle_doctor()
        _print_usage(parser)
        raise UsageError(f"Unknown command: {command}")

    if len(positional) == 2:
        command, key_path = positional
        if command == "seal":
            return _handle_seal(
                key_path, stdin, stdout, base64_recoding=args.base64,
            )
        if command == "unseal":
            return _handle_unseal(
                key_path, stdin, stdout, base64_recoding=args.base64,
            )
        _print_usage(parser)
        raise UsageError(f"Unknown command: {command}")

    _print_usage(parser)
    raise UsageError(f"Unknown args: {' '.join(positional)}")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    """Run the naclseal CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    stdin, stdout:
        Binary streams for payloads.  Default to the process's standard
        streams.  Accepting them enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    NaclSealError
        Any failure of the selected operation; rendered by :func:`cli`.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    return _dispatch(
        parser,
        args,
        stdin if stdin is not None else sys.stdin.buffer,
        stdout if stdout is not None else sys.stdout.buffer,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _render_error(exc: NaclSealError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except UsageError as exc:
        _render_error(exc)
        sys.exit(exit_codes.USAGE_ERROR)
    except NaclSealError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
