"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import requests
import typer

from mdvault.config import Settings, load_config
from mdvault.core.notify import find_conflicts, send_notification
from mdvault.core.pipeline import FileChange, run_archive, run_format


VaultOption = Annotated[Optional[str], typer.Option("--vault-path", "-v", help="Path to the vault to operate on")]
DryRunOption = Annotated[bool, typer.Option("--dry-run", "-n", help="Print what would change without writing")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and set the log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _vault(settings: Settings) -> Path:
    root = Path(settings.vault_path)
    if not root.exists():
        _fail(f"Vault path not found: {root}")
    return root


def _report(results: list[FileChange], verb: str, dry_run: bool) -> None:
    """Print one line per changed file (plus a diff in dry-run mode); exit 1 if any file failed."""
    failed = 0
    for change in results:
        if not change.ok:
            typer.echo(f"Error: {change.error}", err=True)
            failed += 1
            continue
        typer.echo(f"{verb} {change.path}")
        if dry_run:
            counts = change.summary()
            typer.echo(f"  dry run, would make the following changes (+{counts['added']} -{counts['deleted']}):")
            typer.echo(change.diff(), nl=False)
    if not results:
        typer.echo("Nothing to change.")
    if failed:
        raise typer.Exit(1)


def format_cmd(vault: VaultOption = None, dry_run: DryRunOption = False):
    """Apply basic formatting to all markdown files in the vault."""
    settings = _settings(overrides={"vault_path": vault})
    results = run_format(_vault(settings), settings, dry_run=dry_run)
    _report(results, "Formatted", dry_run)


def archive_cmd(
    vault: VaultOption = None,
    dry_run: DryRunOption = False,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only archive files tagged #<tag>; '' for all files")] = None,
    ):
    """Archive todos that have been entirely completed."""
    settings = _settings(overrides={"vault_path": vault, "archive_tag": tag})
    results = run_archive(_vault(settings), settings, dry_run=dry_run)
    _report(results, "Archived", dry_run)


def notify_cmd(
    vault: VaultOption = None,
    topic: Annotated[Optional[str], typer.Option("--topic", "-t", help="ntfy topic to notify")] = None,
    ntfy_url: Annotated[Optional[str], typer.Option("--ntfy-url", help="ntfy server URL")] = None,
    pattern: Annotated[Optional[str], typer.Option("--pattern", "-p", help="Glob naming sync-conflict files")] = None,
    ):
    """Send an ntfy push notification listing sync-conflict files in the vault."""
    settings = _settings(overrides={
        "vault_path": vault, "ntfy_topic": topic, "ntfy_url": ntfy_url, "conflict_pattern": pattern,
    })
    if not settings.ntfy_topic:
        _fail("No ntfy topic given (use --topic or MDVAULT_NTFY_TOPIC)")
    if not settings.conflict_pattern:
        _fail("No conflict pattern given (use --pattern or MDVAULT_CONFLICT_PATTERN)")

    conflicts = find_conflicts(_vault(settings), settings.conflict_pattern)
    if not conflicts:
        typer.echo("No sync conflicts found")
        return
    for path in conflicts:
        typer.echo(f"  {path}")

    try:
        send_notification(settings.ntfy_url, settings.ntfy_topic, conflicts)
    except requests.RequestException as e:
        _fail("Failed to send notification", e)
    typer.echo(f"Sent notification for {len(conflicts)} sync conflict(s)")
