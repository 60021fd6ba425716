"""Configuration utilities for CLI commands."""

from __future__ import annotations

from typing import Any

import typer

from fountainkit.config import get_logger, get_settings_for_cli
from fountainkit.config.settings import FountainKitSettings

logger = get_logger(__name__)


def cli_state(ctx: typer.Context) -> dict[str, Any]:
    """Global options stored by the main callback."""
    return ctx.obj if isinstance(ctx.obj, dict) else {}


def load_cli_settings(
    ctx: typer.Context, overrides: dict[str, Any] | None = None
) -> FountainKitSettings:
    """Resolve settings for a command.

    CLI overrides win over the ``--config`` file, which wins over the
    environment and defaults. ``None`` overrides are ignored.
    """
    config_file = cli_state(ctx).get("config")
    applied = {k: v for k, v in (overrides or {}).items() if v is not None}
    if applied:
        logger.debug("Applying CLI overrides", overrides=sorted(applied))
    return get_settings_for_cli(config_file=config_file, cli_overrides=applied)


def is_verbose(ctx: typer.Context) -> bool:
    state = cli_state(ctx)
    return bool(state.get("verbose") or state.get("debug"))
