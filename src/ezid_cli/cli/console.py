"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Diagnostics go to stderr; stdout is reserved for command output
(ANVL, CSV, JSON) so it can be piped.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from ezid_cli.exceptions import EnvironmentError

_LOG_FORMAT = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def escape_markup(text: str) -> str:
	"""Escape Rich markup in *text* so brackets print literally.

	Without Rich nothing interprets markup, so *text* is returned as-is.
	"""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)


def _verbosity_to_level(verbosity: int) -> int:
	if verbosity >= 2:
		return logging.DEBUG
	if verbosity == 1:
		return logging.INFO
	return logging.WARNING


def configure_logging(verbosity: int = 0) -> None:
	"""Install one stderr handler on the ``ezid_cli`` logger.

	Uses ``rich.logging.RichHandler`` when Rich is importable.  Calling
	this again replaces the previous handler instead of stacking.
	"""
	try:
		from rich.logging import RichHandler

		handler: logging.Handler = RichHandler(
			console=get_rich_console(),
			show_time=False,
			show_path=False,
		)
		handler.setFormatter(logging.Formatter("%(message)s"))
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(_LOG_FORMAT))

	package_logger = logging.getLogger("ezid_cli")
	for existing in list(package_logger.handlers):
		package_logger.removeHandler(existing)
	package_logger.addHandler(handler)
	package_logger.setLevel(_verbosity_to_level(verbosity))
	package_logger.propagate = False
