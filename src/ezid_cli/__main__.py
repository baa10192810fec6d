"""Allow ``python -m ezid_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m ezid_cli`` behaves identically to the ``ezid``
console script.
"""

from __future__ import annotations

from ezid_cli.cli.app import cli

if __name__ == "__main__":
    cli()
