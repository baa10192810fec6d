"""Runtime configuration for ezid-cli.

Values come from ``EZID_*`` environment variables (or a ``.env`` file)
and may be overridden by CLI flags.  The resulting :class:`Settings`
object is frozen: the base identifier is fixed once at start-up and
read-only afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ezid_cli.core.models import ArkBase
from ezid_cli.exceptions import ConfigError

DEFAULT_URL: str = "https://ezid.cdlib.org"
DEFAULT_BASE: str = "ark:/99999/fk4"
DEFAULT_SESSION_FILE: Path = Path.home() / ".ezid" / "session.json"


class Settings(BaseSettings):
    url: str = Field(default=DEFAULT_URL)
    base: str = Field(default=DEFAULT_BASE)
    username: str | None = Field(default=None)
    password: str | None = Field(default=None, repr=False)
    session_file: Path = Field(default=DEFAULT_SESSION_FILE)
    timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="EZID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def ark_base(self) -> ArkBase:
        """The parsed base configuration.

        Raises
        ------
        ConfigError
            If ``base`` is not ``[ark:/]NNNNN/shoulder``.
        """
        return ArkBase.parse(self.base)


def load_settings(**overrides: Any) -> Settings:
    """Build :class:`Settings`, applying non-``None`` *overrides*.

    The base is validated eagerly so a bad value stops the process
    before any command runs.

    Raises
    ------
    ConfigError
        On an invalid base or any other invalid setting.
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = Settings(**explicit)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    ArkBase.parse(settings.base)
    return settings
