"""Input helpers for the interactive shell.

Every text prompt trims the input, re-asks on empty input and raises
OperationCancelled when the cancel keyword is typed.
"""

import re
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from models.student import StudentType, is_valid_student_id

_MENU_NUMBER = re.compile(r"-?[0-9]+")


class OperationCancelled(Exception):
    """The user typed the cancel keyword at a prompt."""

    def __init__(self):
        super().__init__("Operation cancelled by user.")


class Prompter:
    """Validated prompts on top of rich.prompt.Prompt."""

    def __init__(self, console: Optional[Console] = None, cancel_keyword: str = "esc"):
        self.console = console or Console()
        self.cancel_keyword = cancel_keyword.lower()

    def _ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console).strip()

    def text(self, prompt: str) -> str:
        """A non-empty answer."""
        while True:
            value = self._ask(prompt)
            if value.lower() == self.cancel_keyword:
                raise OperationCancelled()
            if value:
                return value
            self.console.print("Input cannot be empty. Please try again.")

    def student_id(self, prompt: str = "Enter student ID (format Sxxx, e.g., S001)") -> str:
        """A student id in Sxxx format."""
        while True:
            value = self.text(prompt)
            if is_valid_student_id(value):
                return value
            self.console.print(
                "Invalid student ID format. Please follow the format Sxxx (e.g., S001)."
            )

    def student_type(self) -> StudentType:
        """Undergraduate or Postgraduate (exact spelling)."""
        while True:
            value = self.text("Enter student type (Undergraduate/Postgraduate)")
            if value in StudentType.choices():
                return StudentType(value)
            self.console.print(
                "Invalid type. Please enter either 'Undergraduate' or 'Postgraduate'."
            )

    def menu_choice(self, prompt: str = "Enter your choice") -> int:
        """A whole number in plain ASCII digits; anything else is asked again."""
        value = Prompt.ask(prompt, console=self.console).strip()
        while not _MENU_NUMBER.fullmatch(value):
            value = Prompt.ask(
                "Invalid input. Please enter a valid number", console=self.console
            ).strip()
        return int(value)
