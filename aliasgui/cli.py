import difflib
import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from aliasgui import __version__
from aliasgui.config import Config
from aliasgui.exceptions import ValidationError
from aliasgui.log import setup_logging
from aliasgui.models import AliasRecord
from aliasgui.porter import AliasPorter
from aliasgui.search import filter_records
from aliasgui.service import AliasService, Response
from aliasgui.validation import validate_aliases
from aliasgui.writer import read_config

console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]✗[/] {escape(message)}", soft_wrap=True)
    click.get_current_context().exit(1)


def _check(response: Response) -> Response:
    """Exit with the error message when a request failed"""
    if not response.ok:
        _fail(response.error or f"Request failed with status {response.status}")
    return response


def _current_records(service: AliasService):
    response = _check(service.get_aliases())
    return [AliasRecord.from_dict(data) for data in response.body]


def _save(service: AliasService, records) -> None:
    _check(service.save_aliases([record.to_dict() for record in records]))


@click.group()
@click.option("--file", "-f", "config_file", type=click.Path(dir_okay=False), help="Shell config file to manage")
@click.option("--dialect", type=click.Choice(["posix", "powershell"]), help="Config syntax (auto-detect if not specified)")
@click.option("--verbose", "-v", is_flag=True, help="Show what aliasgui does to your files")
@click.version_option(version=__version__, prog_name="aliasgui")
@click.pass_context
def main(ctx, config_file, dialect, verbose):
    """aliasgui - edit the aliases in your shell startup file 🐚"""
    settings = Config()
    setup_logging("INFO" if verbose else settings.get("log_level", "WARNING"))

    try:
        resolved_dialect = settings.resolve_dialect(dialect)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="dialect")

    ctx.obj = {
        "settings": settings,
        "service": AliasService(
            settings.resolve_config_path(config_file),
            resolved_dialect,
            max_body_size=settings.get("max_body_size"),
        ),
    }


@main.command(name="list")
@click.option("--search", "-s", help="Only show aliases matching this text")
@click.option("--fuzzy", is_flag=True, help="Use fuzzy matching for --search")
@click.pass_obj
def list_aliases(obj, search, fuzzy):
    """List the aliases defined in your config"""
    service = obj["service"]
    records = _current_records(service)
    if search:
        records = filter_records(
            records, search, fuzzy=fuzzy, threshold=obj["settings"].get("fuzzy_threshold", 60)
        )

    if not records:
        if search:
            console.print(f"[yellow]No aliases match '{search}'[/]")
        else:
            console.print("[yellow]No aliases found.[/] Add one with 'aliasgui add'")
        return

    table = Table(title=f"📋 Aliases in {service.config_path.name} ({len(records)} total)")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Command", style="green")
    table.add_column("Type", style="magenta")
    table.add_column("Line", style="dim", justify="right")
    for record in records:
        kind = "fn" if record.has_params else "alias"
        line = str(record.line_number) if record.line_number else "—"
        table.add_row(record.name, escape(record.command), kind, line)

    console.print(table)


@main.command()
@click.option("--name", "-n", prompt=True, help="Alias name")
@click.option("--command", "-c", prompt=True, help="Command to alias")
@click.option("--params", is_flag=True, help="Write a function that forwards its arguments")
@click.pass_obj
def add(obj, name, command, params):
    """Add an alias to your config"""
    service = obj["service"]
    records = _current_records(service)
    if any(record.name == name for record in records):
        _fail(f"Alias '{name}' already exists. Use 'aliasgui edit' to change it")

    records.append(AliasRecord(name=name, command=command, has_params=params))
    _save(service, records)
    console.print(f"[green]✔[/] Added alias: [cyan]{name}[/] = '{escape(command)}'")
    console.print(f"[dim]   For current session, run: source {service.config_path}[/]")


@main.command()
@click.option("--name", "-n", prompt=True, help="Alias name")
@click.option("--command", "-c", help="New command")
@click.option("--params/--no-params", default=None, help="Forward arguments or not")
@click.pass_obj
def edit(obj, name, command, params):
    """Change an existing alias"""
    service = obj["service"]
    records = _current_records(service)
    matches = [record for record in records if record.name == name]
    if not matches:
        _fail(f"Alias '{name}' not found in {service.config_path}")

    for record in matches:
        if command:
            record.command = command
        if params is not None:
            record.has_params = params

    _save(service, records)
    console.print(f"[green]✔[/] Edited alias: [cyan]{name}[/] = '{escape(matches[0].command)}'")


@main.command()
@click.argument("name")
@click.pass_obj
def remove(obj, name):
    """Remove an alias from your config"""
    service = obj["service"]
    records = _current_records(service)
    remaining = [record for record in records if record.name != name]
    if len(remaining) == len(records):
        _fail(f"Alias '{name}' not found in {service.config_path}")

    _save(service, remaining)
    console.print(f"[green]✔[/] Removed alias: [cyan]{name}[/]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Show the changes without writing them")
@click.pass_obj
def save(obj, file, dry_run):
    """Replace the managed aliases with the list in FILE (JSON or YAML)"""
    service = obj["service"]
    try:
        payload = AliasPorter().load_payload(Path(file))
    except (OSError, ValueError) as e:
        _fail(f"Could not read {file}: {e}")

    if dry_run:
        try:
            records = validate_aliases(payload)
        except ValidationError as e:
            _fail(str(e))
        old = read_config(service.config_path)
        new = service.render(records)
        diff = "".join(
            difflib.unified_diff(
                old.splitlines(keepends=True),
                new.splitlines(keepends=True),
                fromfile=f"{service.config_path} (current)",
                tofile=f"{service.config_path} (new)",
            )
        )
        if diff:
            console.print(Syntax(diff, "diff", theme="ansi_dark"))
        else:
            console.print("[dim]No changes[/]")
        return

    response = _check(service.save_aliases(payload))
    console.print(f"[green]✔[/] Saved {response.body['count']} aliases to {service.config_path}")


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--format", "-F", "fmt", type=click.Choice(["json", "yaml"]), default="json", help="Export format")
@click.pass_obj
def export(obj, file, fmt):
    """Export the aliases in your config to FILE"""
    records = _current_records(obj["service"])
    success, message = AliasPorter().export_to_file(records, Path(file), format=fmt)
    if not success:
        _fail(message)
    console.print(f"[green]✔[/] {message}")


@main.group()
def backup():
    """Manage backups of your config file"""


@backup.command(name="create")
@click.pass_obj
def backup_create(obj):
    """Snapshot the config file now"""
    response = _check(obj["service"].create_backup())
    console.print(f"[green]✔[/] Backup created: {response.body['backupPath']}")


@backup.command(name="list")
@click.pass_obj
def backup_list(obj):
    """List existing backups, newest first"""
    response = _check(obj["service"].list_backups())
    if not response.body:
        console.print("[yellow]No backups found.[/] Create one with 'aliasgui backup create'")
        return

    table = Table(title=f"💾 Backups ({len(response.body)} total)")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Modified", style="green")
    table.add_column("Size", style="dim", justify="right")
    for entry in response.body:
        modified = entry["time"][:19].replace("T", " ")
        table.add_row(entry["name"], modified, f"{entry['size']} B")
    console.print(table)


@backup.command(name="restore")
@click.argument("backup_path")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def backup_restore(obj, backup_path, yes):
    """Restore the config file from BACKUP_PATH"""
    service = obj["service"]
    if not yes and not click.confirm(f"Overwrite {service.config_path} with this backup?"):
        return

    response = _check(service.restore_backup({"backupPath": backup_path}))
    if response.body.get("snapshotPath"):
        console.print(f"[dim]Previous config saved to {response.body['snapshotPath']}[/]")
    console.print(f"[green]✔[/] Restored {service.config_path}")


@backup.command(name="delete")
@click.argument("backup_path")
@click.pass_obj
def backup_delete(obj, backup_path):
    """Delete the backup at BACKUP_PATH"""
    _check(obj["service"].delete_backup(backup_path))
    console.print(f"[green]✔[/] Deleted backup: {Path(backup_path).name}")


@main.command()
@click.pass_obj
def info(obj):
    """Show which config file and dialect are in use"""
    data = _check(obj["service"].info()).body
    table = Table(show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Config file", data["configPath"])
    table.add_row("Platform", data["platform"])
    table.add_row("Shell", data["shell"])
    table.add_row("Dialect", data["dialect"])
    console.print(table)


@main.command(name="execution-policy")
@click.option("--set", "set_policy", is_flag=True, help="Allow local scripts for the current user")
@click.pass_obj
def execution_policy(obj, set_policy):
    """Check (or relax) the PowerShell execution policy on Windows"""
    service = obj["service"]
    if set_policy:
        result = _check(service.set_execution_policy()).body
        if not result.get("success"):
            _fail(f"Could not set execution policy: {result.get('error')}")
        console.print("[green]✔[/] Execution policy set to RemoteSigned")
        return

    result = _check(service.get_execution_policy()).body
    console.print(f"Execution policy: [cyan]{result['policy']}[/]")
    if result.get("needsSetup"):
        console.print("[yellow]⚠[/] Your profile will not load under this policy.")
        console.print("[dim]   Run 'aliasgui execution-policy --set' to allow it[/]")


@main.group(name="config")
def config_group():
    """View or change aliasgui settings"""


@config_group.command(name="get")
@click.argument("key")
@click.pass_obj
def config_get(obj, key):
    """Print one setting"""
    settings = obj["settings"]
    if key not in settings.config:
        _fail(f"Unknown setting: {key}")
    console.print(f"{key} = {json.dumps(settings.get(key))}")


@config_group.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(obj, key, value):
    """Persist one setting (VALUE is parsed as JSON when possible)"""
    settings = obj["settings"]
    if key not in Config.DEFAULT_CONFIG:
        _fail(f"Unknown setting: {key}")
    try:
        parsed = json.loads(value)
    except ValueError:
        parsed = value
    settings.set(key, parsed)
    console.print(f"[green]✔[/] {key} = {json.dumps(parsed)}")


if __name__ == "__main__":
    main()
