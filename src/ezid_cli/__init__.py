"""ezid-cli — ARK identifier management against an EZID-style registry.

Built around a pure ANVL codec and ARK resolver with a thin HTTP layer.
"""

from ezid_cli.version import __version__

__all__: list[str] = ["__version__"]
