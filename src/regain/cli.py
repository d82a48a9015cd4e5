"""CLI interface for the REGAIN session engine."""

from __future__ import annotations

import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

import click

from regain.alternatives import find_alternative_variations
from regain.catalog import Catalog, load_exercises
from regain.completion import commit_completed_session
from regain.config import Config
from regain.constants import FRAMEWORK_MUSCLE_MAPPINGS, FRAMEWORK_ROTATIONS, PHASES
from regain.errors import RegainError, classify_error
from regain.logging import setup_logging
from regain.models import DaySession, SessionPlan, UserProfile
from regain.session import generate_session
from regain.store import JsonFileStore
from regain.weekly import generate_weekly_system


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _emit(payload: dict, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(text)


def _load_session(data: dict) -> SessionPlan | DaySession:
    if "day" in data:
        return DaySession.from_dict(data)
    return SessionPlan.from_dict(data)


def _fail(exc: RegainError) -> None:
    click.echo(f"Error [{classify_error(exc)}]: {exc}", err=True)
    sys.exit(1)


class _Context:
    def __init__(self, config: Config):
        self.config = config
        self._catalog: Catalog | None = None

    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            self._catalog = load_exercises(
                self.config.catalog_sources,
                timeout=self.config.catalog_timeout_seconds,
            )
        return self._catalog

    def rng(self, seed: int | None) -> random.Random:
        if seed is None:
            seed = self.config.seed
        return random.Random(seed)


pass_context = click.make_pass_decorator(_Context)


@click.group()
@click.option("--log-format", type=click.Choice(["json", "text"]), help="Override REGAIN_LOG_FORMAT.")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level.")
@click.pass_context
def main(ctx: click.Context, log_format: str | None, verbose: bool):
    """REGAIN session and weekly plan generator."""
    config = Config.from_env()
    setup_logging(log_format or config.log_format, logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = _Context(config)


@main.command()
@click.option("--discipline", "-d", type=str, help="Discipline, e.g. Pilates.")
@click.option("--framework", "-f", type=str, help="Framework part, e.g. Push.")
@click.option(
    "--profile-file",
    type=click.Path(exists=True, path_type=Path),
    help="Profile JSON (currentMilestones, discomforts, ...).",
)
@click.option(
    "--previous-file",
    type=click.Path(exists=True, path_type=Path),
    help="Previous session JSON, used for the variety rule.",
)
@click.option("--seed", type=int, help="Seed for reproducible selection.")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the session to a file.")
@pass_context
def session(
    obj: _Context,
    discipline: str | None,
    framework: str | None,
    profile_file: Path | None,
    previous_file: Path | None,
    seed: int | None,
    output: Path | None,
):
    """Generate a single session."""
    profile = UserProfile.from_dict(_read_json(profile_file)) if profile_file else UserProfile()
    previous = [_load_session(_read_json(previous_file))] if previous_file else []

    try:
        plan = generate_session(
            discipline, framework, profile, previous,
            catalog=obj.catalog, rng=obj.rng(seed),
        )
    except RegainError as exc:
        _fail(exc)

    _emit(plan.to_dict(), output)


@main.command()
@click.option("--days", type=click.IntRange(1, 7), help="Training days per week.")
@click.option("--framework", "-f", type=str, help="Framework, e.g. Push/Pull or Full Body.")
@click.option("--start-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="First training day.")
@click.option(
    "--profile-file",
    type=click.Path(exists=True, path_type=Path),
    help="Profile JSON (preferredDisciplines, currentMilestones, ...).",
)
@click.option("--seed", type=int, help="Seed for reproducible selection.")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the system to a file.")
@pass_context
def week(
    obj: _Context,
    days: int | None,
    framework: str | None,
    start_date,
    profile_file: Path | None,
    seed: int | None,
    output: Path | None,
):
    """Generate a weekly training system."""
    profile = UserProfile.from_dict(_read_json(profile_file)) if profile_file else UserProfile()

    overrides: dict[str, Any] = {}
    if days is not None:
        overrides["days_per_week"] = days
    if framework:
        overrides["framework"] = framework
    if start_date is not None:
        overrides["start_date"] = start_date.date()

    try:
        system = generate_weekly_system(
            profile, overrides, catalog=obj.catalog, rng=obj.rng(seed),
        )
    except RegainError as exc:
        _fail(exc)

    click.echo(
        f"Generated {len(system.sessions)} sessions ({system.framework}) from {system.start_date}",
        err=True,
    )
    _emit(system.to_dict(), output)


@main.command()
@click.option(
    "--session-file",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Session JSON containing the item to swap.",
)
@click.option("--phase", required=True, type=click.Choice(list(PHASES)))
@click.option("--index", type=int, default=0, show_default=True, help="Item index within the phase.")
@pass_context
def alternatives(obj: _Context, session_file: Path, phase: str, index: int):
    """Suggest swap-in variations for one session item."""
    plan = _load_session(_read_json(session_file))
    items = getattr(plan.phases, phase)
    if not 0 <= index < len(items):
        click.echo(f"Error: {phase} has {len(items)} items, no index {index}.", err=True)
        sys.exit(1)

    try:
        found = find_alternative_variations(items[index], list(obj.catalog), phase)
    except RegainError as exc:
        _fail(exc)

    click.echo(json.dumps([item.to_dict() for item in found], indent=2, ensure_ascii=False))


@main.command()
@click.option(
    "--store-dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Root directory of the JSON profile store.",
)
@click.option("--user-id", required=True, type=str)
@click.option(
    "--session-file",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Completed session JSON.",
)
def complete(store_dir: Path, user_id: str, session_file: Path):
    """Record a completed session against the user's milestones."""
    plan = _load_session(_read_json(session_file))
    profile = commit_completed_session(JsonFileStore(store_dir), user_id, plan)
    click.echo(json.dumps(profile.to_dict()["currentMilestones"], indent=2, sort_keys=True))


@main.command("list-frameworks")
def list_frameworks():
    """List frameworks and their muscle groups."""
    for name, rotation in FRAMEWORK_ROTATIONS.items():
        click.echo(f"{name}: {' → '.join(rotation)}")
    click.echo()
    for name, mapping in FRAMEWORK_MUSCLE_MAPPINGS.items():
        click.echo(f"{name}:")
        click.echo(f"  Primary: {', '.join(mapping.primary)}")
        click.echo(f"  Secondary: {', '.join(mapping.secondary)}")


if __name__ == "__main__":
    main()
