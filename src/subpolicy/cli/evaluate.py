"""Evaluate a selection request and show the subtitle decisions."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from subpolicy.cli.exit_codes import ExitCode
from subpolicy.cli.output import error_exit, format_option
from subpolicy.config.models import SubpolicyConfig
from subpolicy.logging import selection_context
from subpolicy.policy import RelevanceOptions, SubtitleDecision, SubtitlePolicy
from subpolicy.settings import SettingsValidationError, load_selection_request

logger = logging.getLogger(__name__)


def _decision_to_dict(decision: SubtitleDecision) -> dict[str, Any]:
    candidate = decision.candidate
    return {
        "index": candidate.stream_index,
        "language": candidate.language,
        "source": candidate.source.value,
        "flags": sorted(f.value for f in candidate.flags),
        "name": candidate.name,
        "relevant": decision.relevant,
        "rank": decision.rank,
        "reason": decision.reason,
    }


def _format_table(decisions: list[SubtitleDecision]) -> str:
    rows = [("Stream", "Lang", "Source", "Flags", "Relevant", "Rank", "Reason")]
    for d in decisions:
        c = d.candidate
        rows.append(
            (
                str(c.stream_index),
                c.language,
                c.source.value,
                ",".join(sorted(f.value for f in c.flags)) or "-",
                "yes" if d.relevant else "no",
                "-" if d.rank is None else str(d.rank),
                d.reason,
            )
        )
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return "\n".join(
        "  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip()
        for row in rows
    )


@click.command("evaluate")
@click.argument("request_file", type=click.Path(path_type=Path))
@format_option
@click.option(
    "--item-id",
    default=None,
    help="Identifier used to tag log lines (default: request file name).",
)
@click.option(
    "--require-selection",
    is_flag=True,
    default=False,
    help="Exit with an error when no stream is selected.",
)
@click.pass_context
def evaluate_command(
    ctx: click.Context,
    request_file: Path,
    output_format: str,
    item_id: str | None,
    require_selection: bool,
) -> None:
    """Show relevance, rank and reason for every subtitle stream.

    REQUEST_FILE is a YAML document with "preferences", "playback" and
    "streams" sections.

    Examples:

    \b
        subpolicy evaluate movie.yaml
        subpolicy evaluate movie.yaml --format json
    """
    json_output = output_format.casefold() == "json"

    try:
        request = load_selection_request(request_file)
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except SettingsValidationError as e:
        error_exit(e.message, ExitCode.REQUEST_VALIDATION_ERROR, json_output)

    config: SubpolicyConfig | None = ctx.obj.get("config") if ctx.obj else None
    options = RelevanceOptions.from_config(
        config.relevance if config is not None else SubpolicyConfig().relevance
    )

    policy = SubtitlePolicy(request.snapshot, request.context, options)
    with selection_context(item_id or request_file.name):
        decisions = policy.evaluate(request.candidates)

    selected = next((d.candidate for d in decisions if d.selected), None)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "selected": None if selected is None else selected.stream_index,
                    "streams": [_decision_to_dict(d) for d in decisions],
                },
                indent=2,
            )
        )
    else:
        if decisions:
            click.echo(_format_table(decisions))
        else:
            click.echo("No subtitle streams.")
        if selected is None:
            click.echo("Selected: none")
        else:
            click.echo(
                f"Selected: stream {selected.stream_index} ({selected.language})"
            )

    if require_selection and selected is None:
        error_exit(
            "No relevant subtitle stream", ExitCode.NO_STREAM_SELECTED, json_output
        )
