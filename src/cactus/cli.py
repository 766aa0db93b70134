"""CLI interface for Cactus."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from cactus.core.engine import CactusError, PurgeEngine
from cactus.core.ignore import git_available
from cactus.models.scan_result import ScanResult
from cactus.targets import DEFAULT_MAX_DEPTH, group_for
from cactus.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _fail(message: str) -> NoReturn:
    click.echo(message, err=True)
    sys.exit(1)


def _print_report(base: Path, results: list[ScanResult]) -> None:
    for result in results:
        rel = result.repo.relative_to(base)
        click.echo(click.style(str(rel), bold=True))
        for candidate in result.candidates:
            dir_rel = candidate.relative_to(result.repo)
            click.echo(f"  {click.style(str(dir_rel), fg='red')}  {bytes_to_human(candidate.size_bytes)}")

    total_count = sum(len(r.candidates) for r in results)
    total_size = sum(r.total_bytes for r in results)
    click.echo(f"\n{total_count} dirs, {bytes_to_human(total_size)} reclaimable")


def _group_id(name: str) -> str | None:
    group = group_for(name)
    return group.id if group else None


def _report_json(base: Path, results: list[ScanResult]) -> list[dict]:
    return [
        {
            "repo": str(r.repo.relative_to(base)),
            "total_bytes": r.total_bytes,
            "dirs": [
                {
                    "path": str(c.relative_to(r.repo)),
                    "size_bytes": c.size_bytes,
                    "group": _group_id(c.path.name),
                }
                for c in r.candidates
            ],
        }
        for r in results
    ]


def _confirm() -> bool:
    try:
        choice = click.prompt("Purge? [y/N]", default="n", show_default=False, prompt_suffix=" ")
    except click.exceptions.Abort:
        # end of input reads as a declined prompt
        click.echo()
        return False
    return choice.strip() in ("y", "Y", "yes")


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("-L", "depth", default=DEFAULT_MAX_DEPTH, show_default=True, type=click.IntRange(min=0),
              help="Max depth to search for repos")
@click.option("--dry-run", "-n", is_flag=True, help="Show what would be deleted without deleting")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.option("--jobs", "-j", default=None, type=click.IntRange(min=1), envvar="CACTUS_JOBS",
              help="Repositories to scan in parallel (default: CPU count)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (never prompts)")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(path: Path, depth: int, dry_run: bool, yes: bool, jobs: int | None, as_json: bool, verbose: int) -> None:
    """Purge gitignored build artifacts and caches.

    Finds git repositories under PATH and lists build and cache
    directories their ignore rules exclude, then deletes them after
    confirmation.
    """
    _setup_logging(verbose)

    if not git_available():
        _fail("cactus: git executable not found on PATH")

    engine = PurgeEngine(max_workers=jobs)
    try:
        base, repos = engine.find_repositories(path, depth)
    except CactusError as exc:
        _fail(f"cactus: {exc}")

    results = engine.scan(repos)

    # JSON mode never prompts, so without --yes it is a dry run
    if as_json and not yes:
        dry_run = True

    if not results:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_purge", "results": []}))
        else:
            click.echo("Nothing to purge.")
        return

    if not as_json:
        _print_report(base, results)

    if dry_run:
        if as_json:
            click.echo(json.dumps({"status": "dry_run", "results": _report_json(base, results)}, indent=2))
        return

    if not yes and not _confirm():
        click.echo("Aborted.")
        return

    outcome = engine.purge(results)

    if as_json:
        data = {
            "status": "purged",
            "results": _report_json(base, results),
            "freed_bytes": outcome.freed_bytes,
            "errors": outcome.errors,
        }
        click.echo(json.dumps(data, indent=2))
    else:
        for error in outcome.errors:
            click.echo(f"cactus: {error}", err=True)
        click.echo(f"Freed {bytes_to_human(outcome.freed_bytes)}")

    if outcome.failures:
        _fail(f"{outcome.failures} dirs failed to remove")
