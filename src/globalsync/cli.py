"""GlobalSync CLI - team timezone dashboard."""

import functools
import json
import logging
import sys
from datetime import date, datetime, timezone

import click

from .config import load_config
from .core.collaboration import CollaborationWindow
from .core.roster import DEFAULT_TIMEZONE, Participant, TeamMember
from .core.schedule import (
    SCHEDULE_PRESETS,
    Status,
    find_preset,
    preset_by_name,
    random_flavor_text,
    status_info,
)
from .core.timerange import (
    ALL_TIMEZONES,
    detect_local_timezone,
    format_timezone_display,
    is_offset_label,
    local_time,
    migrate_timezone,
)
from .dashboard import AmbiguousMemberError, Dashboard, open_dashboard
from .storage import StorageError

STATUS_CHOICES = [s.value for s in Status]


def _validate_timezone(ctx, param, value):
    if value is None:
        return None
    if not is_offset_label(value):
        raise click.BadParameter(f"expected a label like UTC+5.5, got {value!r}")
    return migrate_timezone(value)


def _validate_preset(ctx, param, value):
    if value is None:
        return None
    preset = preset_by_name(value)
    if preset is None:
        names = ", ".join(p.name for p in SCHEDULE_PRESETS)
        raise click.BadParameter(f"unknown preset {value!r} (choose from: {names})")
    return preset


def profile_options(func):
    """Options shared by commands that edit a participant."""
    options = [
        click.option("--timezone", "-t", callback=_validate_timezone, help="UTC offset, e.g. UTC-8 or UTC+5.5"),
        click.option("--status", "-s", type=click.Choice(STATUS_CHOICES), help="Current status"),
        click.option("--work", "work_hours", help="Work hours, e.g. 9-17 (empty to clear)"),
        click.option("--sleep", "sleep_hours", help="Sleep hours, e.g. 23-7 (empty to clear)"),
        click.option("--avatar", help="Avatar URL or initial"),
        click.option("--auto/--no-auto", "auto_status", default=None, help="Derive status from schedule"),
        click.option("--preset", callback=_validate_preset, help="Apply a named schedule preset"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_updates(**opts) -> dict:
    """Turn profile option values into participant field updates."""
    updates = {}
    preset = opts.pop("preset", None)
    if preset is not None:
        updates["work_hours"] = preset.work_hours
        updates["sleep_hours"] = preset.sleep_hours
    for key, value in opts.items():
        if value is None:
            continue
        if key == "status":
            value = Status(value)
        if key == "avatar":
            value = value or None
        updates[key] = value
    return updates


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def reports_storage_errors(func):
    """Turn a failed save into an error message and exit status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StorageError as e:
            _fail(str(e))
    return wrapper


def _dashboard() -> Dashboard:
    return open_dashboard(load_config())


def _require_member(dash: Dashboard, ref: str) -> TeamMember:
    try:
        member = dash.find_member(ref)
    except AmbiguousMemberError as e:
        _fail(str(e))
    if member is None:
        _fail(f"No team member matches {ref!r}")
    return member


def _participant_line(p: Participant, now: datetime, dash: Dashboard) -> str:
    info = status_info(p.status)
    clock = local_time(p.timezone, now).strftime("%H:%M")
    period = dash.period_of(p, now).value
    auto = " (auto)" if p.auto_status else ""
    return f"{p.name or '(unnamed)':16} {clock}  {p.timezone:9} {info.icon} {info.label}{auto} [{period}]"


def _participant_json(p: Participant, now: datetime, dash: Dashboard) -> dict:
    data = p.to_dict()
    data["localTime"] = local_time(p.timezone, now).strftime("%H:%M")
    data["period"] = dash.period_of(p, now).value
    return data


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """GlobalSync - team timezone dashboard."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("name")
@profile_options
@reports_storage_errors
def init(name: str, **opts):
    """Create (or rename) your own profile."""
    config = load_config()
    dash = open_dashboard(config)
    updates = {}
    # Defaults only apply to first-time setup; a rename keeps the schedule
    if not dash.personal.name:
        tz = config.default_timezone
        if tz == DEFAULT_TIMEZONE:
            tz = detect_local_timezone()
        updates = {
            "timezone": tz,
            "work_hours": config.default_work_hours,
            "sleep_hours": config.default_sleep_hours,
        }
    updates.update(_collect_updates(**opts))
    personal = dash.update_personal(name=name, **updates)
    click.echo(f"Profile ready: {personal.name} ({format_timezone_display(personal.timezone)})")


@main.command("set")
@profile_options
@click.option("--name", "-n", help="Display name")
@reports_storage_errors
def set_profile(name: str | None, **opts):
    """Update your own profile."""
    updates = _collect_updates(**opts)
    if name:
        updates["name"] = name
    if not updates:
        _fail("Nothing to update")
    dash = _dashboard()
    personal = dash.update_personal(**updates)
    click.echo(f"Updated {personal.name or 'profile'}.")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(as_json: bool):
    """Show your profile and your team's current state."""
    dash = _dashboard()
    now = datetime.now(timezone.utc)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "personal": _participant_json(dash.personal, now, dash),
                    "team": [_participant_json(m, now, dash) for m in dash.team],
                    "theme": dash.snapshot.theme.value,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not dash.personal.name:
        click.echo("No profile yet. Run 'globalsync init NAME' to get started.")
        return

    click.echo(_participant_line(dash.personal, now, dash))
    click.echo(f"  {random_flavor_text(dash.personal.status)}")
    preset = find_preset(dash.personal.work_hours, dash.personal.sleep_hours)
    if preset:
        click.echo(f"  Schedule: {preset.emoji} {preset.name}")

    if dash.team:
        click.echo("\nTeam:")
        for member in dash.team:
            click.echo(f"  {_participant_line(member, now, dash)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def team(as_json: bool):
    """List team members with their ids."""
    dash = _dashboard()

    if as_json:
        click.echo(json.dumps([m.to_dict() for m in dash.team], indent=2, ensure_ascii=False))
        return

    if not dash.team:
        click.echo("No team members yet.")
        return

    for member in dash.team:
        click.echo(f"{member.id[:8]}  {member.name:16} {member.timezone:9} {member.work_hours:6} {member.sleep_hours}")


@main.command()
@click.argument("name")
@profile_options
@reports_storage_errors
def add(name: str, **opts):
    """Add a team member."""
    config = load_config()
    dash = open_dashboard(config)
    fields = {
        "timezone": config.default_timezone,
        "work_hours": config.default_work_hours,
        "sleep_hours": config.default_sleep_hours,
    }
    fields.update(_collect_updates(**opts))
    member = dash.add_member(Participant(name=name, **fields))
    click.echo(f"Added {member.name} ({member.id[:8]}).")


@main.command("import")
@click.argument("share_string")
@reports_storage_errors
def import_member(share_string: str):
    """Add a team member from a GlobalSync:// profile string."""
    dash = _dashboard()
    member = dash.import_member(share_string)
    if member is None:
        _fail("Invalid share string format. Please check and try again.")
    click.echo(f"Imported {member.name} ({member.id[:8]}).")


@main.command()
@click.argument("member_ref")
@profile_options
@click.option("--name", "-n", help="Display name")
@reports_storage_errors
def update(member_ref: str, name: str | None, **opts):
    """Update a team member (by id prefix or name)."""
    dash = _dashboard()
    member = _require_member(dash, member_ref)
    updates = _collect_updates(**opts)
    if name:
        updates["name"] = name
    if not updates:
        _fail("Nothing to update")
    updated = dash.update_member(member.id, **updates)
    click.echo(f"Updated {updated.name}.")


@main.command()
@click.argument("member_ref")
@reports_storage_errors
def remove(member_ref: str):
    """Remove a team member (by id prefix or name)."""
    dash = _dashboard()
    member = _require_member(dash, member_ref)
    dash.remove_member(member.id)
    click.echo(f"Removed {member.name}.")


@main.command()
def share():
    """Print your profile share string."""
    dash = _dashboard()
    if not dash.personal.name:
        _fail("Set up your profile first with 'globalsync init NAME'")
    click.echo(dash.export_profile())


@main.command("export-app")
def export_app():
    """Print a share string with your whole dashboard."""
    click.echo(_dashboard().export_app())


@main.command("import-app")
@click.argument("share_string")
@click.option("--yes", is_flag=True, help="Replace current data without asking")
@reports_storage_errors
def import_app(share_string: str, yes: bool):
    """Replace all data from a GlobalSyncApp:// string."""
    dash = _dashboard()
    if not yes and dash.personal.name:
        click.confirm("This replaces your profile and team. Continue?", abort=True)
    if not dash.import_app(share_string):
        _fail("Invalid app share string format. Please check and try again.")
    click.echo(f"Imported {dash.personal.name} with {len(dash.team)} team member(s).")


def _window_json(window: CollaborationWindow) -> dict:
    data = window.to_dict()
    data["label"] = window.format()
    return data


@main.command()
@click.option("--top", type=click.IntRange(min=1), default=None, help="Number of windows to show (default from config)")
@click.option("--all", "show_all", is_flag=True, help="Show every window in UTC order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def windows(top: int | None, show_all: bool, as_json: bool):
    """Show the best collaboration windows (UTC)."""
    config = load_config()
    dash = open_dashboard(config)

    if show_all:
        found = dash.collaboration_windows()
    else:
        found = dash.best_windows(top if top is not None else config.top_windows)

    if as_json:
        click.echo(json.dumps([_window_json(w) for w in found], indent=2))
        return

    if not dash.team:
        click.echo("Add team members to see collaboration windows.")
        return

    if not found:
        click.echo("No overlapping available hours.")
        click.echo("Team schedules don't currently overlap. Consider adjusting work hours.")
        return

    for i, window in enumerate(found, 1):
        members = ", ".join(window.available_members)
        click.echo(
            f"{i}. {window.period.emoji} {window.format():16} "
            f"({window.duration_hours()}h, {window.member_count} people) {members}"
        )
    click.echo("\nTimes shown in UTC. Windows are calculated from work/sleep schedules.")


@main.command("calendar-link")
@click.argument("index", type=int)
@click.option("--date", "-d", "target_date", default=None,
              help="Date for the event (YYYY-MM-DD), defaults to today (UTC)")
@click.option("--title", default=None, help="Event title")
@click.option("--all", "from_all", is_flag=True, help="INDEX refers to the full window list")
def calendar_link(index: int, target_date: str | None, title: str | None, from_all: bool):
    """Print a calendar link for window INDEX (as numbered by 'windows')."""
    config = load_config()
    dash = open_dashboard(config)
    found = dash.collaboration_windows() if from_all else dash.best_windows(config.top_windows)

    if not 1 <= index <= len(found):
        _fail(f"No window #{index} (found {len(found)})")

    try:
        on_date = date.fromisoformat(target_date) if target_date else None
    except ValueError:
        _fail(f"Invalid date {target_date!r}, expected YYYY-MM-DD")

    click.echo(dash.calendar_url(found[index - 1], on_date, title or config.calendar_title))


@main.command()
@reports_storage_errors
def theme():
    """Toggle between dark and light theme."""
    snapshot = _dashboard().toggle_theme()
    click.echo(f"Theme: {snapshot.theme.value}")


@main.command()
def timezones():
    """List supported UTC offsets."""
    for label in ALL_TIMEZONES:
        click.echo(format_timezone_display(label))


@main.command()
def presets():
    """List schedule presets."""
    for preset in SCHEDULE_PRESETS:
        sleep = preset.sleep_hours or "none"
        click.echo(f"{preset.emoji} {preset.name:18} work {preset.work_hours:6} sleep {sleep:6} {preset.description}")


@main.command()
@reports_storage_errors
def tick():
    """Apply auto-status once."""
    changed = _dashboard().tick()
    if changed:
        click.echo(f"Updated status for: {', '.join(changed)}")
    else:
        click.echo("No status changes.")


def _watch_tick(dash: Dashboard) -> list[str]:
    """Pick up changes made by other commands, then apply auto-status once."""
    dash.reload()
    return dash.tick()


@main.command()
@click.option("--interval", type=click.IntRange(min=1), default=None, help="Seconds between ticks (default from config)")
def watch(interval: int | None):
    """Keep auto-status current until interrupted."""
    from apscheduler.schedulers.blocking import BlockingScheduler
    from apscheduler.triggers.interval import IntervalTrigger

    config = load_config()
    dash = open_dashboard(config)
    seconds = interval or config.tick_seconds

    def run_tick():
        try:
            changed = _watch_tick(dash)
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            return
        if changed:
            click.echo(f"{datetime.now().strftime('%H:%M:%S')} Auto-status updated: {', '.join(changed)}")

    scheduler = BlockingScheduler(timezone="UTC")
    scheduler.add_job(run_tick, IntervalTrigger(seconds=seconds), id="auto_status", coalesce=True)
    click.echo(f"Watching schedules every {seconds}s. Press Ctrl+C to stop")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        click.echo("Stopped.")


@main.command()
@click.option("--yes", is_flag=True, help="Skip confirmation")
@reports_storage_errors
def reset(yes: bool):
    """Clear your profile name so it can be set up again."""
    if not yes:
        click.confirm("Reset your profile?", abort=True)
    _dashboard().reset_profile()
    click.echo("Profile reset. Run 'globalsync init NAME' to set it up again.")
