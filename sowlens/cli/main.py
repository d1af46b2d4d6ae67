# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..constant import LOG_LEVEL_DEFAULT, LOG_LEVEL_ENV
from ..providers import JsonFileConfigStore
from .providers_cmd import models_group

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@click.group()
@click.version_option(__version__, prog_name="sowlens")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or {LOG_LEVEL_DEFAULT}).",
)
@click.option(
    "--store-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file holding the persisted LLM configuration.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: Optional[str],
    store_path: Optional[Path],
) -> None:
    """sowlens — LLM provider configuration for SOW analysis."""
    level = log_level or os.environ.get(LOG_LEVEL_ENV, LOG_LEVEL_DEFAULT)
    if level.lower() not in _LOG_LEVELS:
        level = LOG_LEVEL_DEFAULT
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["store"] = JsonFileConfigStore(store_path)


cli.add_command(models_group)
