"""``naclseal doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can generate keys, seal and unseal.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from naclseal.cli import exit_codes
from naclseal.cli.console import console
from naclseal.exceptions import NaclSealError
from naclseal.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _pynacl_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the PyNaCl row."""
    from naclseal.infra.nacl_backend import pynacl_version

    try:
        return "PyNaCl", pynacl_version(), "[green]OK[/green]"
    except NaclSealError:
        return "PyNaCl", "NOT INSTALLED", "[red]FAIL[/red]"


def _self_test_check() -> tuple[str, str, str]:
    """Seal and unseal a probe message with a throwaway keypair."""
    from naclseal.core.sealing_service import SealingService
    from naclseal.infra.nacl_backend import PyNaclSealingBackend

    probe = b"naclseal doctor"
    service = SealingService(PyNaclSealingBackend())
    try:
        keypair = service.generate_keypair()
        box = service.seal(probe, service.derive_public_key(keypair))
        opened = service.unseal(box, keypair)
    except NaclSealError as exc:
        return "Self-test", str(exc), "[red]FAIL[/red]"
    if opened != probe:
        return "Self-test", "round trip mismatch", "[red]FAIL[/red]"
    return "Self-test", "seal/unseal round trip", "[green]OK[/green]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the optional Rich row."""
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "not installed", "[yellow]WARN[/yellow]"
    from importlib.metadata import PackageNotFoundError, version

    try:
        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "unknown", "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _naclseal_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the naclseal version row."""
    return "naclseal", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nnaclseal doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<12} {value:<32} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _naclseal_version_check(),
        _python_version_check(),
        _pynacl_version_check(),
        _self_test_check(),
        _rich_check(),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="naclseal doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
