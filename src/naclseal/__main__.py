"""Allow ``python -m naclseal`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m naclseal`` behaves identically to the ``naclseal``
console script.
"""

from __future__ import annotations

from naclseal.cli.app import cli

if __name__ == "__main__":
    cli()
