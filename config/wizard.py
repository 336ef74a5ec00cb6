"""Interactive setup wizard for the roster configuration.

Walks the user through the storage, behaviour and logging sections.
Defaults can be accepted with Enter.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from config.schema import (
    AppConfig,
    BehaviourConfig,
    LoggingConfig,
    LogLevel,
    StorageConfig,
)

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def _success(text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


# ─── STEP 1: Storage ───

def wizard_storage(current: Optional[StorageConfig] = None) -> StorageConfig:
    _header("Step 1: Storage")
    sc = current or StorageConfig()
    _info("All folders are created on demand below the base directory.")

    base_dir = Prompt.ask("Base directory", default=str(sc.base_dir))
    students_dir = Prompt.ask("Folder for students.csv", default=sc.students_dir)
    courses_dir = Prompt.ask("Folder for courses.csv", default=sc.courses_dir)
    reports_dir = Prompt.ask("Folder for reports", default=sc.reports_dir)
    excel_file = Prompt.ask("Excel workbook", default=sc.excel_file)

    try:
        return StorageConfig(
            base_dir=Path(base_dir),
            students_dir=students_dir,
            courses_dir=courses_dir,
            reports_dir=reports_dir,
            excel_file=excel_file,
        )
    except Exception as e:
        _warn(f"Validation error: {escape(str(e))}")
        _warn("Keeping the previous storage settings.")
        return sc


# ─── STEP 2: Behaviour ───

def wizard_behaviour(current: Optional[BehaviourConfig] = None) -> BehaviourConfig:
    _header("Step 2: Behaviour")
    bc = current or BehaviourConfig()

    load_on_start = Confirm.ask("Load saved data on start?", default=bc.load_on_start)
    autosave = Confirm.ask("Export data to CSV on exit?", default=bc.autosave_on_exit)
    keyword = Prompt.ask("Cancel keyword", default=bc.cancel_keyword)
    case_sensitive = Confirm.ask(
        "Case-sensitive student search?", default=bc.case_sensitive_search
    )

    try:
        return BehaviourConfig(
            load_on_start=load_on_start,
            autosave_on_exit=autosave,
            cancel_keyword=keyword,
            case_sensitive_search=case_sensitive,
        )
    except Exception as e:
        _warn(f"Validation error: {escape(str(e))}")
        _warn("Keeping the previous behaviour settings.")
        return bc


# ─── STEP 3: Logging ───

def wizard_logging(current: Optional[LoggingConfig] = None) -> LoggingConfig:
    _header("Step 3: Logging")
    lc = current or LoggingConfig()

    level = Prompt.ask(
        "Log level",
        choices=[lvl.value for lvl in LogLevel],
        default=lc.level.value,
    )
    file_raw = Prompt.ask(
        "Log file (empty = console only)",
        default=str(lc.file) if lc.file else "",
    )
    return LoggingConfig(
        level=LogLevel(level),
        file=Path(file_raw) if file_raw.strip() else None,
    )


def run_wizard() -> Optional[AppConfig]:
    """Runs the complete interactive setup wizard.

    Returns:
        The finished AppConfig, or None if the user aborts.
    """
    console.print()
    console.print(Panel(
        "[bold]Welcome to the Student Roster Manager![/bold]\n\n"
        "The wizard sets up where data and reports are stored.\n"
        "[dim]Defaults can be accepted with Enter.[/dim]",
        title="[bold cyan]Setup[/bold cyan]",
        border_style="cyan",
    ))

    if not Confirm.ask("\nSet up the configuration now?", default=True):
        console.print("[yellow]Setup cancelled.[/yellow]")
        return None

    try:
        config = AppConfig(
            storage=wizard_storage(),
            behaviour=wizard_behaviour(),
            logging=wizard_logging(),
        )

        if not Confirm.ask("\nSave configuration?", default=True):
            console.print("[yellow]Configuration not saved.[/yellow]")
            return None

        _success("Saving configuration...")
        return config

    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard cancelled.[/yellow]")
        return None
