"""CLI application entry point and command routing for ezid-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ezid_cli.exceptions.EzidError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages on
stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here.  Work is delegated to the core
  codecs, the identifier service and the infrastructure layer.
* Command output goes to stdout via :class:`RecordWriter`; diagnostics
  go to stderr via the console proxy.
* Multi-identifier commands report each failure and keep going; the
  exit code is ``GENERAL_ERROR`` if anything failed.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Sequence

from ezid_cli.cli import exit_codes
from ezid_cli.cli.console import configure_logging, console, escape_markup
from ezid_cli.cli.output import OutputOptions, RecordWriter
from ezid_cli.config import Settings, load_settings
from ezid_cli.core import anvl, ark
from ezid_cli.core.identifier_service import IdentifierService
from ezid_cli.core.models import AnvlRecord
from ezid_cli.exceptions import EzidError, ParseError, RegistryError, UsageError
from ezid_cli.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _output_parent() -> argparse.ArgumentParser:
    """Flags shared by every command that prints records."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--csv",
        metavar="COL:COL",
        default=None,
        help="Print one CSV row per record with these columns.",
    )
    parent.add_argument(
        "--header",
        action="store_true",
        help="With --csv, print a header row first.",
    )
    parent.add_argument(
        "--array",
        action="store_true",
        help="Print each record as a JSON object.",
    )
    parent.add_argument(
        "--ark",
        default=None,
        help="Identifier to report in the 'ark' column when a record has none.",
    )
    return parent


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="ezid",
        description="Manage ARK identifiers and their ANVL metadata.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--url", default=None, help="Registry root URL.")
    parser.add_argument(
        "--base",
        default=None,
        help="Base identifier, e.g. ark:/99999/fk4.",
    )
    parser.add_argument("--session-file", default=None, help="Session cookie file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )

    output = _output_parent()
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    fq = commands.add_parser("fq", help="Print fully-qualified identifiers.")
    fq.add_argument("identifiers", nargs="+", metavar="ID")

    commands.add_parser("anvl", parents=[output], help="Re-emit ANVL read from stdin.")

    args_to_anvl = commands.add_parser(
        "args_to_anvl",
        parents=[output],
        help="Build a record from key:value arguments.",
    )
    args_to_anvl.add_argument("pairs", nargs="*", metavar="KEY:VALUE")

    commands.add_parser(
        "array_to_anvl",
        parents=[output],
        help="Convert a JSON object on stdin to ANVL.",
    )

    get = commands.add_parser("get", parents=[output], help="Fetch identifier metadata.")
    get.add_argument("identifiers", nargs="+", metavar="ID")

    mint = commands.add_parser("mint", parents=[output], help="Mint new identifiers.")
    mint.add_argument("pairs", nargs="*", metavar="KEY:VALUE")
    mint.add_argument(
        "--proxy",
        default=None,
        help="Set _target to PROXY followed by the new identifier.",
    )
    mint.add_argument("--count", type=int, default=1, help="How many identifiers to mint.")

    create = commands.add_parser(
        "create",
        parents=[output],
        help="Create an identifier with a chosen blade.",
    )
    create.add_argument("identifier", metavar="ID")
    create.add_argument("pairs", nargs="*", metavar="KEY:VALUE")

    update = commands.add_parser("update", parents=[output], help="Update metadata.")
    update.add_argument("identifier", metavar="ID")
    update.add_argument("pairs", nargs="*", metavar="KEY:VALUE")

    delete = commands.add_parser("delete", parents=[output], help="Delete identifiers.")
    delete.add_argument("identifiers", nargs="+", metavar="ID")

    login = commands.add_parser("login", help="Open a registry session.")
    login.add_argument("--username", default=None)

    commands.add_parser("logout", help="Close the registry session.")

    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_pairs(pairs: Sequence[str]) -> AnvlRecord:
    """Turn ``key:value`` arguments into a record.

    The split happens at the first colon; the key is trimmed and the
    value kept verbatim, so ``_target:https://x`` works.

    Raises
    ------
    UsageError
        If an argument has no colon or an empty key.
    """
    elements: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition(":")
        key = key.strip()
        if not sep or not key:
            raise UsageError(
                f"Expected key:value, got {pair!r}",
                hint="Write metadata as e.g. erc.who:Quinn",
            )
        elements[key] = value
    return AnvlRecord(elements)


def _options(args: argparse.Namespace) -> OutputOptions:
    return OutputOptions.from_flags(
        csv=args.csv,
        header=args.header,
        array=args.array,
        ark=args.ark,
    )


def _report_error(exc: EzidError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
    if isinstance(exc, RegistryError) and exc.body:
        console.print(escape_markup(exc.body.rstrip("\n")))


def _read_stdin() -> str:
    """Read all of stdin as text; undecodable input is a ParseError."""
    try:
        return sys.stdin.read()
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"stdin is not valid UTF-8 at byte {exc.start}: {exc.reason}",
            hint="Convert the input to UTF-8 first.",
        ) from exc


def _for_each(items: Sequence[str], action: Callable[[str], None]) -> int:
    """Run *action* per item; report failures and keep going."""
    failed = False
    for item in items:
        try:
            action(item)
        except EzidError as exc:
            logger.info("Failed on %s", item)
            _report_error(exc)
            failed = True
    return exit_codes.GENERAL_ERROR if failed else exit_codes.SUCCESS


def _build_service(settings: Settings) -> IdentifierService:
    """Wire the requests transport and session store into the service."""
    from ezid_cli.infra.requests_client import RequestsHttpClient
    from ezid_cli.infra.session_store import SessionStore

    client = RequestsHttpClient(
        SessionStore(settings.session_file),
        timeout=settings.timeout,
    )
    return IdentifierService(client, settings.ark_base, settings.url)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_fq(args: argparse.Namespace, settings: Settings) -> int:
    writer = RecordWriter(OutputOptions())
    base = settings.ark_base
    return _for_each(
        args.identifiers,
        lambda identifier: writer.write_line(ark.resolve(base, identifier)),
    )


def _handle_anvl(args: argparse.Namespace, settings: Settings) -> int:
    record = anvl.decode(_read_stdin(), ark=args.ark)
    RecordWriter(_options(args)).write(record)
    return exit_codes.SUCCESS


def _handle_args_to_anvl(args: argparse.Namespace, settings: Settings) -> int:
    RecordWriter(_options(args)).write(parse_pairs(args.pairs))
    return exit_codes.SUCCESS


def _handle_array_to_anvl(args: argparse.Namespace, settings: Settings) -> int:
    try:
        data = json.loads(_read_stdin())
    except ValueError as exc:
        raise UsageError(f"stdin is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise UsageError("stdin must hold a JSON object of name/value pairs.")

    record = AnvlRecord({str(key): str(value) for key, value in data.items()})
    RecordWriter(_options(args)).write(record)
    return exit_codes.SUCCESS


def _handle_get(args: argparse.Namespace, settings: Settings) -> int:
    service = _build_service(settings)
    writer = RecordWriter(_options(args))
    return _for_each(
        args.identifiers,
        lambda identifier: writer.write(service.get(identifier)),
    )


def _handle_mint(args: argparse.Namespace, settings: Settings) -> int:
    if args.count < 1:
        raise UsageError("--count must be at least 1.")
    metadata = parse_pairs(args.pairs)
    service = _build_service(settings)
    writer = RecordWriter(_options(args))
    for _ in range(args.count):
        writer.write(service.mint(metadata, proxy=args.proxy))
    return exit_codes.SUCCESS


def _handle_create(args: argparse.Namespace, settings: Settings) -> int:
    metadata = parse_pairs(args.pairs)
    service = _build_service(settings)
    RecordWriter(_options(args)).write(service.create(args.identifier, metadata))
    return exit_codes.SUCCESS


def _handle_update(args: argparse.Namespace, settings: Settings) -> int:
    metadata = parse_pairs(args.pairs)
    service = _build_service(settings)
    RecordWriter(_options(args)).write(service.update(args.identifier, metadata))
    return exit_codes.SUCCESS


def _handle_delete(args: argparse.Namespace, settings: Settings) -> int:
    service = _build_service(settings)
    writer = RecordWriter(_options(args))
    return _for_each(
        args.identifiers,
        lambda identifier: writer.write(service.delete(identifier)),
    )


def _handle_login(args: argparse.Namespace, settings: Settings) -> int:
    username = args.username or settings.username
    password = settings.password
    if not username or not password:
        from ezid_cli.cli.prompt import prompt_credentials

        username, password = prompt_credentials(username)

    result = _build_service(settings).login(username, password)
    console.print(f"[green]{escape_markup(result.get('success', 'logged in'))}[/green]")
    return exit_codes.SUCCESS


def _handle_logout(args: argparse.Namespace, settings: Settings) -> int:
    result = _build_service(settings).logout()
    console.print(f"[green]{escape_markup(result.get('success', 'logged out'))}[/green]")
    return exit_codes.SUCCESS


_HANDLERS: dict[str, Callable[[argparse.Namespace, Settings], int]] = {
    "fq": _handle_fq,
    "anvl": _handle_anvl,
    "args_to_anvl": _handle_args_to_anvl,
    "array_to_anvl": _handle_array_to_anvl,
    "get": _handle_get,
    "mint": _handle_mint,
    "create": _handle_create,
    "update": _handle_update,
    "delete": _handle_delete,
    "login": _handle_login,
    "logout": _handle_logout,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ezid CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    EzidError
        For failures outside per-identifier batches; :func:`cli`
        turns these into an exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    settings = load_settings(
        url=args.url,
        base=args.base,
        session_file=args.session_file,
    )
    logger.debug("Using base %s at %s", settings.base, settings.url)

    return _HANDLERS[args.command](args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except EzidError as exc:
        _report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
