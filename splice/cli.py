"""
splice.cli - Typer CLI entry point.

Provides all subcommands for creating, assembling and exporting timelines.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from splice import __version__
from splice.assembly.engine import assemble
from splice.assembly.ordering import analysis_hint_ranker
from splice.catalog import load_asset_records
from splice.config import SpliceConfig
from splice.editing import add_clip, add_track
from splice.exceptions import ConfigError, SpliceError
from splice.export.destination import FileDestination, export_timeline
from splice.export.timecode import seconds_to_display_time
from splice.logging import configure_logging
from splice.project import Project, find_project_dir

app = typer.Typer(
    name="splice",
    help="Automated timeline assembly toolkit.\n\n"
    "Orders and groups media assets into a timeline and exports it as a "
    "CMX 3600 EDL for DaVinci Resolve, Premiere Pro and other NLEs.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"splice {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Splice - automated timeline assembly toolkit."""
    configure_logging(verbose)


def require_project() -> Project:
    project_dir = find_project_dir()
    if not project_dir:
        console.print("[red]Error: Not in a Splice project directory[/red]")
        console.print("[dim]Run 'splice init' first or cd into a project directory[/dim]")
        raise typer.Exit(1)
    return Project(project_dir)


def require_config(project: Project) -> SpliceConfig:
    try:
        return project.config()
    except ConfigError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)


def fail(error: SpliceError) -> typer.Exit:
    console.print(f"[red]Error: {error}[/red]")
    return typer.Exit(1)


# Project and timeline management


@app.command("init")
def init_project(
    name: str = typer.Argument(..., help="Project name"),
    profile: str = typer.Option(
        "rough-cut",
        "--profile",
        "-p",
        help="Assembly profile: rough-cut, scene-cut, or story",
    ),
    path: str = typer.Option(".", "--path", "-d", help="Directory to create project in"),
) -> None:
    """Create a new Splice project."""
    project_path = Path(path) / name

    if project_path.exists():
        console.print(f"[red]Error: Directory '{project_path}' already exists[/red]")
        raise typer.Exit(1)

    try:
        project = Project(project_path)
        project.create(profile=profile)
    except (SpliceError, OSError) as e:
        console.print(f"[red]Error creating project: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Created project '{name}' with profile '{profile}'")
    console.print(f"[dim]  {project_path}[/dim]")
    console.print("\nNext steps:")
    console.print(f"  cd {name}")
    console.print('  splice create "My Timeline"')


@app.command("create")
def create_timeline(
    name: str = typer.Argument(..., help="Timeline name"),
    framerate: int | None = typer.Option(None, "--framerate", "-r", help="Frames per second"),
    resolution: str | None = typer.Option(None, "--resolution", help="Resolution, e.g. 1920x1080"),
) -> None:
    """Create an empty timeline."""
    project = require_project()
    config = require_config(project)

    try:
        timeline = project.store.create(
            name,
            framerate=framerate or config.framerate,
            resolution=resolution or config.resolution,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Created timeline '{name}'")
    console.print(f"[dim]  ID: {timeline.id}[/dim]")
    console.print(f"\nNext step: [cyan]splice add {timeline.id} <assets.json>[/cyan]")


@app.command("add")
def add_assets(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
    assets_file: Path = typer.Argument(..., help="JSON or YAML file of asset records"),
) -> None:
    """Register assets for a timeline."""
    project = require_project()

    try:
        project.store.load(timeline_id)
        records = load_asset_records(assets_file)
        added = project.catalog.register(timeline_id, records)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error reading {assets_file}: {e}[/red]")
        raise typer.Exit(1)
    except SpliceError as e:
        raise fail(e)

    console.print(f"[green]✓[/green] Registered {len(added)} asset(s)")
    if added:
        console.print(f"\nNext step: [cyan]splice assemble {timeline_id}[/cyan]")


@app.command("timelines")
def list_timelines() -> None:
    """List all timelines in the project."""
    project = require_project()
    timelines = project.store.list_timelines()

    if not timelines:
        console.print("[yellow]No timelines found. Run 'splice create' first.[/yellow]")
        return

    table = Table(title="Timelines")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("FPS", justify="right")
    table.add_column("Clips", justify="right")
    table.add_column("Duration", style="green")

    for timeline in timelines:
        table.add_row(
            timeline.id,
            timeline.name,
            str(timeline.framerate),
            str(timeline.clip_count()),
            seconds_to_display_time(timeline.duration),
        )

    console.print(table)


@app.command("show")
def show_timeline(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
) -> None:
    """Show the tracks and clips of a timeline."""
    project = require_project()

    try:
        timeline = project.store.load(timeline_id)
    except SpliceError as e:
        raise fail(e)

    console.print(
        f"[bold]{timeline.name}[/bold] "
        f"[dim]{timeline.framerate} fps, {timeline.resolution}, "
        f"{seconds_to_display_time(timeline.duration)}[/dim]"
    )

    if not timeline.tracks:
        console.print("[yellow]No tracks yet. Run 'splice assemble' first.[/yellow]")
        return

    for track in timeline.tracks:
        table = Table(title=f"{track.type} track {track.id}")
        table.add_column("Clip", style="cyan")
        table.add_column("Asset")
        table.add_column("Start", style="green")
        table.add_column("End", style="green")
        table.add_column("Transition in")

        for clip in track.clips:
            transition = clip.transitions.in_
            table.add_row(
                clip.id,
                clip.asset_id,
                seconds_to_display_time(clip.start_time),
                seconds_to_display_time(clip.end_time),
                f"{transition.type} {transition.duration_seconds:.2f}s" if transition else "",
            )

        console.print(table)


@app.command("delete")
def delete_timeline(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
) -> None:
    """Delete a timeline and its registered assets."""
    project = require_project()

    try:
        project.store.delete(timeline_id)
    except SpliceError as e:
        raise fail(e)
    project.catalog.remove_timeline(timeline_id)

    console.print(f"[green]✓[/green] Deleted timeline {timeline_id}")


# Assembly and editing


@app.command("assemble")
def assemble_timeline(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
    strategy: str | None = typer.Option(
        None, "--strategy", "-s", help="Ordering strategy: chronological or semantic"
    ),
    group_by: str | None = typer.Option(
        None, "--group-by", "-g", help="Metadata key to group clips by (e.g. scene)"
    ),
    no_group: bool = typer.Option(False, "--no-group", help="Disable grouping from config"),
    transitions: bool | None = typer.Option(
        None, "--transitions/--no-transitions", help="Add dissolves between clips"
    ),
) -> None:
    """Auto-assemble a timeline from its registered assets."""
    project = require_project()
    config = require_config(project)

    try:
        options = config.assembly_options(
            strategy=strategy,
            group_by=group_by,
            add_transitions=transitions,
        )
        if no_group:
            options = options.model_copy(update={"group_by": None})

        timeline = project.store.load(timeline_id)
        assets = project.catalog.assets_for(timeline_id)
        ranker = (
            analysis_hint_ranker(config.semantic_hint_key)
            if options.strategy == "semantic"
            else None
        )
        assembled = assemble(assets, options, timeline, ranker=ranker)
        saved = project.store.save(assembled)
    except SpliceError as e:
        raise fail(e)

    console.print(
        f"[green]✓[/green] Assembled {saved.clip_count()} clip(s), "
        f"duration {seconds_to_display_time(saved.duration)}"
    )
    console.print(f"\nNext step: [cyan]splice export {timeline_id}[/cyan]")


@app.command("track")
def add_track_cmd(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
    track_type: str = typer.Option("video", "--type", "-t", help="video, audio, or graphics"),
) -> None:
    """Add an empty track to a timeline."""
    project = require_project()

    try:
        timeline = project.store.load(timeline_id)
        updated, track = add_track(timeline, track_type)
        project.store.save(updated)
    except SpliceError as e:
        raise fail(e)

    console.print(f"[green]✓[/green] Added {track.type} track {track.id}")


@app.command("clip")
def add_clip_cmd(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
    track_id: str = typer.Argument(..., help="Track ID"),
    asset_id: str = typer.Argument(..., help="Asset ID"),
    start: float = typer.Option(0.0, "--start", help="Record in, seconds"),
    end: float | None = typer.Option(None, "--end", help="Record out, seconds"),
    in_point: float = typer.Option(0.0, "--in", help="Source in, seconds"),
    out_point: float | None = typer.Option(None, "--out", help="Source out, seconds"),
) -> None:
    """Place a clip on a track at an explicit position."""
    project = require_project()

    try:
        timeline = project.store.load(timeline_id)
        updated, clip = add_clip(
            timeline,
            track_id,
            asset_id,
            start_time=start,
            end_time=end,
            in_point=in_point,
            out_point=out_point,
        )
        project.store.save(updated)
    except SpliceError as e:
        raise fail(e)

    console.print(
        f"[green]✓[/green] Added clip {clip.id} "
        f"({seconds_to_display_time(clip.start_time)} - {seconds_to_display_time(clip.end_time)})"
    )


# Export


@app.command("export")
def export_edl_cmd(
    timeline_id: str = typer.Argument(..., help="Timeline ID"),
    format: str | None = typer.Option(
        None, "--format", "-f", help="EDL format (CMX3600, the default)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file path"),
) -> None:
    """Export a timeline as an Edit Decision List."""
    project = require_project()
    config = require_config(project)

    destination = FileDestination(Path(output)) if output else project.destination

    try:
        timeline = project.store.load(timeline_id)
        updated, record = export_timeline(timeline, destination, format or config.export_format)
        project.store.save(updated)
    except SpliceError as e:
        raise fail(e)

    console.print(f"[green]✓[/green] Exported to {record.location}")
    console.print(f"[dim]  Format: {record.format}, {timeline.clip_count()} event(s)[/dim]")
