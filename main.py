"""Student Roster Manager: main CLI.

Usage:
  python main.py                          Interactive menu
  python main.py menu                     Interactive menu
  python main.py setup                    First-time setup (wizard)
  python main.py config show              Show configuration
  python main.py config edit              Edit configuration
  python main.py students                 List students
  python main.py courses                  List courses
  python main.py search <keyword>         Search students
  python main.py report course <code>     Course report (terminal + CSV)
  python main.py report student <id>      Student report (terminal + CSV)
  python main.py export [--excel]         Export CSV (and Excel)
  python main.py populate                 Add sample data and save
  python main.py validate                 Consistency check
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

console = Console()


def _setup_logging(config) -> None:
    """Console logging through Rich, plus an optional log file."""
    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False)
    ]
    if config.logging.file:
        log_file = Path(config.logging.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)
    logging.basicConfig(
        level=config.logging.level.value,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


def _load_config_or_abort(ctx: click.Context):
    """Loads the configuration (defaults if none exists) or aborts."""
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj.get("config_path") if ctx.obj else None)
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(str(e), style="red", markup=False)
        sys.exit(1)
    _setup_logging(config)
    return mgr, config


def _load_roster(config, force: bool = False):
    """Loads the saved CSV data (if enabled) into a fresh roster."""
    from data.csv_store import CsvImportError, CsvStore
    from models.roster import Roster

    if not (force or config.behaviour.load_on_start):
        return Roster()
    try:
        roster, report = CsvStore(config.storage).load()
    except CsvImportError as e:
        console.print(f"[red bold]Loading failed:[/red bold]\n{escape(str(e))}")
        sys.exit(1)
    if report.skipped:
        console.print(f"[yellow]⚠[/yellow]  {len(report.skipped)} rows skipped while loading.")
    if report.repaired:
        console.print(f"[yellow]⚠[/yellow]  {len(report.repaired)} enrolment links repaired.")
    return roster


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.pass_context
def cmd_setup(ctx: click.Context):
    """First-time setup: create the configuration with the wizard."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj.get("config_path"))
    if not mgr.first_run_check():
        console.print(
            "[yellow]A configuration already exists.[/yellow]\n"
            "Use [bold]python main.py config edit[/bold] to change it."
        )
        if not click.confirm("Set up again anyway?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Setup complete![/bold green]")
        console.print("Start the menu with [bold]python main.py[/bold].")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Show or edit the configuration."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Shows the current configuration."""
    mgr, config = _load_config_or_abort(ctx)
    if mgr.first_run_check():
        console.print("[dim]No config file found, showing defaults.[/dim]")
    mgr.show(config)


@cmd_config.command("edit")
@click.pass_context
def config_edit(ctx: click.Context):
    """Edits the configuration interactively."""
    mgr, config = _load_config_or_abort(ctx)
    mgr.edit_interactive(config)


# ─── MENU ─────────────────────────────────────────────────────────────────────

@click.command("menu")
@click.pass_context
def cmd_menu(ctx: click.Context):
    """Starts the interactive menu."""
    from shell.menu import RosterShell

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config)
    RosterShell(roster, config, console).run()


# ─── LISTS & SEARCH ───────────────────────────────────────────────────────────

@click.command("students")
@click.pass_context
def cmd_students(ctx: click.Context):
    """Lists all students."""
    from shell.menu import print_students

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    print_students(console, roster.list_students(), "List of Students")


@click.command("courses")
@click.pass_context
def cmd_courses(ctx: click.Context):
    """Lists all courses."""
    from shell.menu import print_courses

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    print_courses(console, roster)


@click.command("search")
@click.argument("keyword")
@click.option("--ignore-case", "-i", is_flag=True, default=False,
              help="Compare case-insensitively.")
@click.pass_context
def cmd_search(ctx: click.Context, keyword: str, ignore_case: bool):
    """Searches students by name, ID or course code."""
    from shell.menu import print_students

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    case_sensitive = config.behaviour.case_sensitive_search and not ignore_case
    hits = roster.search_students(keyword, case_sensitive=case_sensitive)
    if not hits:
        console.print("No matching student found.")
        return
    print_students(console, hits, f'Search Results for "{keyword}"')


# ─── REPORT ───────────────────────────────────────────────────────────────────

@click.group("report")
def cmd_report():
    """Generates course or student reports."""


@cmd_report.command("course")
@click.argument("code")
@click.pass_context
def report_course(ctx: click.Context, code: str):
    """Course report: enrolled students (terminal + CSV)."""
    from export.reports import ReportWriter
    from models.errors import RosterError

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    try:
        ReportWriter(config.storage, console).course_report(roster, code)
    except RosterError as e:
        console.print(str(e), style="red", markup=False)
        sys.exit(1)


@cmd_report.command("student")
@click.argument("student_id")
@click.pass_context
def report_student(ctx: click.Context, student_id: str):
    """Student report: student data and courses (terminal + CSV)."""
    from export.reports import ReportWriter
    from models.errors import RosterError

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    try:
        ReportWriter(config.storage, console).student_report(roster, student_id)
    except RosterError as e:
        console.print(str(e), style="red", markup=False)
        sys.exit(1)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.option("--excel", is_flag=True, default=False,
              help="Also write the Excel workbook.")
@click.option("--output", "-o", default=None,
              help="Path of the Excel workbook (default from config).")
@click.pass_context
def cmd_export(ctx: click.Context, excel: bool, output: Optional[str]):
    """Writes students.csv and courses.csv (optionally an Excel workbook)."""
    from data.csv_store import CsvStore

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    students_path, courses_path = CsvStore(config.storage).export_all(roster)
    console.print(f"[green]✓[/green] Students exported to {escape(str(students_path))}")
    console.print(f"[green]✓[/green] Courses exported to {escape(str(courses_path))}")

    if excel:
        from export.excel_export import RosterExcelExporter
        out_path = Path(output) if output else config.storage.excel_path
        RosterExcelExporter(roster).export(out_path)
        console.print(f"[green]✓[/green] Excel workbook saved: {escape(str(out_path))}")


# ─── POPULATE ─────────────────────────────────────────────────────────────────

@click.command("populate")
@click.option("--extra", default=0, type=click.IntRange(min=0),
              help="Number of additional random students.")
@click.option("--seed", default=42, help="Random seed for reproducible data.")
@click.option("--save/--no-save", default=True,
              help="Export the result to CSV afterwards.")
@click.pass_context
def cmd_populate(ctx: click.Context, extra: int, seed: int, save: bool):
    """Adds the sample students, courses and enrolments."""
    from data.csv_store import CsvStore
    from data.dummy_data import DummyDataGenerator

    mgr, config = _load_config_or_abort(ctx)
    roster = _load_roster(config, force=True)
    gen = DummyDataGenerator(seed=seed)
    gen.populate(roster, extra_students=extra)
    gen.print_summary(roster)
    console.print(f"\n[dim]{roster.summary()}[/dim]")

    if save:
        students_path, courses_path = CsvStore(config.storage).export_all(roster)
        console.print(
            f"[green]✓[/green] Saved: {escape(str(students_path))}, "
            f"{escape(str(courses_path))}"
        )


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.pass_context
def cmd_validate(ctx: click.Context):
    """Checks the saved data for one-sided or dangling enrolments."""
    from analysis.consistency import check_consistency
    from data.csv_store import CsvImportError, CsvStore, LoadReport
    from models.roster import Roster

    mgr, config = _load_config_or_abort(ctx)
    store = CsvStore(config.storage)
    # Loaded without reconcile() so broken links stay visible
    roster, load_report = Roster(), LoadReport()
    try:
        store.load_students(roster, load_report)
        store.load_courses(roster, load_report)
    except CsvImportError as e:
        console.print(f"[red bold]Loading failed:[/red bold]\n{escape(str(e))}")
        sys.exit(1)

    console.print(f"\n{roster.summary()}\n")
    report = check_consistency(roster)
    if load_report.skipped:
        errors = load_report.skipped + report.errors
        report = report.model_copy(update={"errors": errors, "is_consistent": False})
    report.print_rich()

    sys.exit(0 if report.is_consistent else 1)


# ─── MAIN CLI ─────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Path of the YAML configuration file.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Student Roster Manager: students, courses and enrolments.

    Start with: python main.py
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main():
    """Entry point. Starts the interactive menu when called without arguments."""
    if len(sys.argv) == 1:
        console.print(Panel(
            "[bold]Student Roster Manager[/bold]\n"
            "[dim]Type ESC at any prompt to cancel the current operation.[/dim]",
            border_style="cyan",
        ))
        sys.argv.append("menu")

    cli()


# Register commands
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_menu)
cli.add_command(cmd_students)
cli.add_command(cmd_courses)
cli.add_command(cmd_search)
cli.add_command(cmd_report)
cli.add_command(cmd_export)
cli.add_command(cmd_populate)
cli.add_command(cmd_validate)


if __name__ == "__main__":
    main()
