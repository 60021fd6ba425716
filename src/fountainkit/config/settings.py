"""Settings for fountainkit, read from files, the environment and flags."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, cast

import structlog
import yaml
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fountainkit.exceptions import ConfigurationError, check_config_keys

logger = structlog.get_logger(__name__)


def _load_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


CONFIG_LOADERS: dict[str, Callable[[Path], Any]] = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".toml": _load_toml,
    ".json": _load_json,
}


def read_config_file(config_path: Path | str) -> dict[str, Any]:
    """Read a YAML, TOML or JSON config file into a dict of setting values.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the format is unknown, the top level is not a
            mapping, or a key is a known misspelling
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    loader = CONFIG_LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ConfigurationError(
            message=f"Unsupported configuration file format: {path.suffix.lower()}",
            hint="Use a .yaml, .yml, .toml or .json file",
            details={
                "file": str(path),
                "detected_format": path.suffix.lower(),
                "supported_formats": sorted(CONFIG_LOADERS),
            },
        )

    data = loader(path)
    if not isinstance(data, dict):
        raise ConfigurationError(
            message=f"Configuration file must contain a mapping: {path}",
            hint="Write settings as key/value pairs at the top level",
            details={"file": str(path), "found": type(data).__name__},
        )
    check_config_keys(data)
    return data


class FountainKitSettings(BaseSettings):
    """Rendering and logging options.

    Later sources win:

    - field defaults
    - a ``.env`` file in the working directory
    - ``FOUNTAINKIT_*`` environment variables
    - config files (``fountainkit --config fountainkit.yaml ...``)
    - command line flags such as ``fountainkit fmt --width 72``
    """

    model_config = SettingsConfigDict(
        env_prefix="FOUNTAINKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    wrap_width: int = Field(
        default=64, gt=0, description="Wrap column for action and dialogue"
    )
    show_section: bool = Field(default=False, description="Render section headings")
    show_synopsis: bool = Field(default=False, description="Render synopses")
    show_notes: bool = Field(default=False, description="Render notes")

    html_page: bool = Field(
        default=False,
        description="Emit a complete HTML document rather than a fragment",
    )
    inline_css: bool = Field(default=False, description="Embed a <style> block")
    link_css: bool = Field(default=False, description="Emit a <link> element")
    css_path: Path = Field(
        default=Path("fountain.css"),
        description="Stylesheet to inline or link; inlining falls back to the "
        "built-in sheet when it cannot be read",
    )

    pretty: bool = Field(
        default=False, description="Indent JSON and use block style YAML"
    )
    type_names: bool = Field(
        default=False,
        description="Write element types as CamelCase names, not integers",
    )

    debug: bool = Field(default=False, description="Add call sites to log records")
    log_level: str = Field(
        default="WARNING",
        description="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="console, json or structured",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None, description="Also write logs to this rotating file"
    )

    @field_validator("css_path", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand ``$VARS`` and ``~`` in path settings.

        Relative paths are kept relative.
        """
        if v is None:
            return None
        if isinstance(v, (dict, list, set, tuple)):  # noqa: UP038
            raise ValueError(f"Expected a path, got {type(v).__name__}: {v!r}")
        if isinstance(v, Path):
            return v.expanduser()
        return Path(os.path.expandvars(str(v))).expanduser()

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any, info: ValidationInfo) -> str:
        """Accept level and format names in any case."""
        if not isinstance(v, str):
            raise ValueError(
                f"{info.field_name} must be a string, got {type(v).__name__}"
            )
        return v.upper() if info.field_name == "log_level" else v.lower()

    @classmethod
    def from_env(cls) -> FountainKitSettings:
        """Settings from defaults, ``.env`` and the environment only."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> FountainKitSettings:
        """Settings with the values of one config file applied.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the file cannot be used as configuration
        """
        return cls(**read_config_file(config_path))

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: Iterable[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> FountainKitSettings:
        """Merge config files, an env file and CLI arguments.

        Files are applied in order, so later files override earlier ones.
        Missing files are skipped with a warning. ``None`` CLI values mean
        the flag was not given.
        """
        data: dict[str, Any] = {}
        for config_file in config_files or ():
            try:
                data.update(read_config_file(config_file))
            except FileNotFoundError:
                logger.warning(
                    "Configuration file not found, skipping",
                    config_file=str(config_file),
                )

        if env_file:
            settings = cast(
                "FountainKitSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)
        return apply_overrides(settings, cli_args)


def apply_overrides(
    settings: FountainKitSettings, overrides: dict[str, Any] | None
) -> FountainKitSettings:
    """Copy of ``settings`` with the non-None ``overrides`` validated in."""
    given = {k: v for k, v in (overrides or {}).items() if v is not None}
    if not given:
        return settings
    return FountainKitSettings(**{**settings.model_dump(), **given})


def config_search_paths() -> list[Path]:
    """Config files read when ``--config`` is not given, lowest priority first."""
    user_dir = Path.home() / ".config" / "fountainkit"
    project_dir = Path.cwd()
    return [
        *(user_dir / f"config.{ext}" for ext in ("yaml", "json", "toml")),
        *(project_dir / f"fountainkit.{ext}" for ext in ("yaml", "json", "toml")),
    ]


_settings: FountainKitSettings | None = None
_discovered_configs: list[Path] | None = None


def _discover_config_files() -> list[Path]:
    global _discovered_configs
    if _discovered_configs is None:
        found = []
        for path in config_search_paths():
            try:
                if path.is_file():
                    found.append(path)
            except OSError:
                continue
        _discovered_configs = found
    return _discovered_configs


def get_settings() -> FountainKitSettings:
    """The process-wide settings, loaded on first use.

    User and project config files are applied when present, on top of the
    environment and defaults.
    """
    global _settings
    if _settings is None:
        config_files = _discover_config_files()
        if config_files:
            _settings = FountainKitSettings.from_multiple_sources(config_files)
        else:
            _settings = FountainKitSettings.from_env()
    return _settings


def set_settings(settings: FountainKitSettings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Forget loaded settings and discovered config files.

    The next ``get_settings()`` reads the environment and the filesystem
    again.
    """
    global _settings, _discovered_configs
    _settings = None
    _discovered_configs = None


def reset_settings() -> None:
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> FountainKitSettings:
    """Settings for one CLI command.

    Args:
        config_file: File named with ``--config``; replaces the discovered
            user and project config files
        cli_overrides: Flag values by setting name, ``None`` when not given

    Raises:
        FileNotFoundError: If ``config_file`` does not exist
    """
    if config_file is None:
        return apply_overrides(get_settings(), cli_overrides)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    return FountainKitSettings.from_multiple_sources(
        config_files=[config_file], cli_args=cli_overrides
    )
