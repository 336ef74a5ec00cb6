"""Configuration manager: load, save, validate and edit interactively.

Uses ruamel.yaml so the saved file carries section comments.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.defaults import default_app_config
from config.schema import AppConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML COMMENTS ───

_YAML_HEADER = f"""\
# ============================================
# Student Roster Manager: configuration
# Created: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "storage": (
        "Storage",
        "Folders are relative to base_dir. Reports go to <reports_dir>/CourseReports\n"
        "and <reports_dir>/StudentReports.",
    ),
    "behaviour": (
        "Behaviour",
        "cancel_keyword aborts any prompt and returns to the menu.",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "roster_config.yaml"

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is not None:
            self.DEFAULT_CONFIG = Path(config_path)
            self.CONFIG_DIR = self.DEFAULT_CONFIG.parent

    def first_run_check(self) -> bool:
        """True if no config file exists yet."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Loading ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Load the config from YAML. Validated by Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Config file not found: {target}\n"
                f"Run 'python main.py setup' to create one."
            )
        try:
            with open(target, "r", encoding="utf-8") as f:
                raw = yaml.load(f)
        except YAMLError as e:
            raise ValueError(
                f"Invalid config file: {target}\n"
                f"YAML error: {e}"
            ) from e
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Invalid config file: {target}\n"
                f"Pydantic error: {e}"
            ) from e

    def load_or_default(self) -> AppConfig:
        """Like load(), but falls back to the defaults when no file exists."""
        if self.first_run_check():
            return default_app_config()
        return self.load()

    # ─── Saving ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Save the config as commented YAML."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Configuration saved: {escape(str(target))}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    # ─── Interactive editing ───

    def show(self, config: AppConfig) -> None:
        """Prints the configuration as tables."""
        for section, model in (
            ("Storage", config.storage),
            ("Behaviour", config.behaviour),
            ("Logging", config.logging),
        ):
            table = Table(title=section, box=box.ROUNDED)
            table.add_column("Setting", style="bold")
            table.add_column("Value")
            for k, v in model.model_dump(mode="json").items():
                table.add_row(k, escape(str(v)))
            console.print(table)

    def edit_interactive(self, config: AppConfig) -> AppConfig:
        """Interactive edit menu for the configuration."""
        from config.wizard import wizard_behaviour, wizard_logging, wizard_storage

        while True:
            console.print()
            console.print(Panel("[bold]Edit configuration[/bold]", border_style="cyan"))
            console.print("  [bold]1.[/bold] Storage (folders)")
            console.print("  [bold]2.[/bold] Behaviour")
            console.print("  [bold]3.[/bold] Logging")
            console.print("  [bold]0.[/bold] Save & back")

            choice = Prompt.ask("\nChoice", default="0")

            if choice == "1":
                config = config.model_copy(
                    update={"storage": wizard_storage(config.storage)}
                )
            elif choice == "2":
                config = config.model_copy(
                    update={"behaviour": wizard_behaviour(config.behaviour)}
                )
            elif choice == "3":
                config = config.model_copy(
                    update={"logging": wizard_logging(config.logging)}
                )
            elif choice == "0":
                self.save(config)
                break
            else:
                console.print("[yellow]Invalid choice.[/yellow]")

        return config
