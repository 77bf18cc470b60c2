"""CLI module for subpolicy."""

import logging
from pathlib import Path

import click

from subpolicy.cli.exit_codes import ExitCode
from subpolicy.cli.output import error_exit

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="subpolicy")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """subpolicy - Decide which subtitle stream to show by default."""
    from subpolicy.config import ConfigError, get_config
    from subpolicy.feature_flags import log_enabled_flags
    from subpolicy.logging import configure_logging

    ctx.ensure_object(dict)

    try:
        config = get_config(
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    configure_logging(config.logging)
    log_enabled_flags()
    ctx.obj["config"] = config


@click.command("flags")
def flags_command() -> None:
    """List the relevance feature flags and whether they are enabled."""
    from subpolicy.feature_flags import is_enabled, known_flags

    for name, description in sorted(known_flags().items()):
        state = "on" if is_enabled(name) else "off"
        click.echo(f"{name:<30} {state:<4} {description}")


def _register_commands() -> None:
    from subpolicy.cli.evaluate import evaluate_command

    main.add_command(evaluate_command)
    main.add_command(flags_command)


_register_commands()
