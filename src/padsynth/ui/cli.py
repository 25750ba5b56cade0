"""
Command-Line Interface for Pad Synth.

Provides commands for replaying intent scripts through the reconciler and
for inspecting the change set between two snapshots.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
import structlog
import yaml
from pydantic import ValidationError

from padsynth import __version__
from padsynth.core.config import Settings
from padsynth.core.exceptions import ConfigError, PadSynthError

logger = structlog.get_logger()


def _load_settings(config_path: Optional[Path]) -> Settings:
    if config_path is None:
        return Settings()
    try:
        return Settings.from_yaml(config_path)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def _load_script(path: Path) -> tuple[Optional[dict], list[dict]]:
    """Read a replay script: either a list of actions or {initial_state, actions}."""
    with open(path) as f:
        data: Any = yaml.safe_load(f) or []
    if isinstance(data, list):
        return None, data
    if isinstance(data, dict):
        return data.get("initial_state"), list(data.get("actions", []))
    raise ConfigError(f"replay script {path} must be a list or a mapping")


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: Optional[str]) -> None:
    """
    Pad Synth - audio graph reconciliation for a keyboard synth with an X/Y pad.
    """
    ctx.ensure_object(dict)

    config_path = Path(config) if config else None
    try:
        settings = _load_settings(config_path)
    except PadSynthError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    settings.debug = settings.debug or debug

    # Configure logging
    log_level = "DEBUG" if settings.debug else settings.log_level.upper()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(log_level, logging.INFO)
        ),
    )

    ctx.obj["debug"] = settings.debug
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Record graph calls without a virtual graph")
@click.pass_context
def replay(ctx: click.Context, script: str, dry_run: bool) -> None:
    """Replay an action script and print the graph calls each action causes."""
    from padsynth.audio import RecordingGraphManager, VirtualAudioGraph
    from padsynth.core.actions import parse_action
    from padsynth.core.state import SynthState, create_initial_state
    from padsynth.core.store import SnapshotStore
    from padsynth.reconcile import ReconciliationController

    settings: Settings = ctx.obj["settings"]

    try:
        initial, raw_actions = _load_script(Path(script))
        actions = [parse_action(raw) for raw in raw_actions]
    except (ValidationError, PadSynthError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logger.debug("Replaying script", script=script, actions=len(actions))

    graph = None if dry_run else VirtualAudioGraph(settings.audio)
    recorder = RecordingGraphManager(delegate=graph)
    store = SnapshotStore(
        initial_state=SynthState(**initial) if initial else create_initial_state(settings)
    )
    controller = ReconciliationController(recorder)

    # Baseline, then build the graph the initial snapshot describes
    controller.on_snapshot(store.get_current_snapshot())
    if graph is not None:
        graph.create_oscillators(store.get_current_snapshot())
        graph.rebuild_effect_chain(store.get_current_snapshot().get("effects", {}))

    controller.start(store)
    try:
        for index, action in enumerate(actions, start=1):
            recorder.clear()
            store.dispatch(action)
            click.echo(f"[{index}] {action.type}")
            if not recorder.calls:
                click.echo("    (no graph changes)")
            for call in recorder.calls:
                if call.operation == "create_oscillators":
                    notes = ", ".join(call.kwargs["snapshot"].get("notes", ())) or "-"
                    click.echo(f"    create_oscillators(notes=[{notes}])")
                elif call.operation == "rebuild_effect_chain":
                    names = {a: e["name"] for a, e in call.kwargs["effects"].items()}
                    click.echo(f"    rebuild_effect_chain({names})")
                else:
                    click.echo(f"    {call}")
    except PadSynthError as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj["debug"]:
            raise
        sys.exit(1)
    finally:
        controller.stop()

    if graph is not None:
        click.echo()
        click.echo(yaml.safe_dump(graph.summary(), sort_keys=False).rstrip())


@cli.command()
@click.argument("before", type=click.Path(exists=True, dir_okay=False))
@click.argument("after", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def diff(ctx: click.Context, before: str, after: str) -> None:
    """Print the change set between two snapshot files."""
    from padsynth.core.config import load_snapshot
    from padsynth.reconcile import compute_change_set

    try:
        changes = compute_change_set(load_snapshot(Path(before)), load_snapshot(Path(after)))
    except PadSynthError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(yaml.safe_dump(changes.as_dict(), sort_keys=False).rstrip())


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
