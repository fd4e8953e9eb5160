# Rev 0.2.0
# projectz/ui/console_menu.py
"""Line-based CRUD menu.

The currently selected project is threaded through the handlers: each one
receives the selection and returns the selection the loop should keep.
"""
from __future__ import annotations
import dataclasses
from decimal import Decimal
from typing import Callable, Dict, Optional

from projectz.models.entities import Project
from projectz.models.errors import DbError, InvalidInputError, ProjectNotFoundError
from projectz.utils.logging_setup import get_logger
from .input_parsing import (
    DIFFICULTY_MAX,
    DIFFICULTY_MIN,
    clean_text,
    is_valid_difficulty,
    parse_hours,
    parse_int,
)

OPERATIONS = [
    "1) Add a project",
    "2) List projects",
    "3) Select a project",
    "4) Update project details",
    "5) Delete a project",
]

_log = get_logger("ConsoleMenu")


def format_project(project: Project) -> str:
    return (
        f"\n   ID= {project.project_id}"
        f"\n   Project Name= {project.project_name}"
        f"\n   Estimated Hours= {project.estimated_hours}"
        f"\n   Actual Hours= {project.actual_hours}"
        f"\n   Difficulty= {project.difficulty}"
        f"\n   Notes= {project.notes}"
    )


class ProjectsMenu:
    def __init__(self, service, *, input_fn: Callable[[str], str] = input, output: Callable[[str], None] = print):
        self._service = service
        self._input = input_fn
        self._out = output
        self._handlers: Dict[int, Callable[[Optional[Project]], Optional[Project]]] = {
            1: self.create_project,
            2: self.list_projects,
            3: self.select_project,
            4: self.update_project_details,
            5: self.delete_project,
        }

    # ---------- loop ----------

    def run(self) -> None:
        current: Optional[Project] = None
        while True:
            try:
                selection = self._get_user_selection(current)
                current = self._handlers[selection](current)
            except (KeyboardInterrupt, EOFError):
                self._out("\nExiting the menu.")
                return
            except (ProjectNotFoundError, DbError, InvalidInputError) as exc:
                _log.warning("Menu operation failed: %s", exc)
                self._out(f"Error: {exc} Try again")

    # ---------- operations ----------

    def create_project(self, current: Optional[Project]) -> Optional[Project]:
        name = self._get_string_input("Enter project name")
        estimated = self._get_decimal_input("Enter estimated hours")
        actual = self._get_decimal_input("Enter actual hours")
        difficulty = None
        while difficulty is None:
            value = self._get_int_input(f"Enter difficulty ({DIFFICULTY_MIN}-{DIFFICULTY_MAX})")
            if is_valid_difficulty(value):
                difficulty = value
            else:
                self._out(f"Difficulty must be between {DIFFICULTY_MIN} and {DIFFICULTY_MAX}. Try again.")
        notes = self._get_string_input("Enter notes")

        if name is None:
            self._out("Project name is required.")
            return current

        project = Project(
            project_name=name,
            estimated_hours=estimated,
            actual_hours=actual,
            difficulty=difficulty,
            notes=notes,
        )
        db_project = self._service.add_project(project)
        self._out(f"Created: {format_project(db_project)}")
        return current

    def list_projects(self, current: Optional[Project]) -> Optional[Project]:
        projects = self._service.fetch_all_projects()
        self._out("Projects:")
        for p in projects:
            self._out(f"   {p.project_id}: {p.project_name}")
        return current

    def select_project(self, current: Optional[Project]) -> Optional[Project]:
        self.list_projects(current)
        project_id = self._get_int_input("Enter project ID")
        return self._service.fetch_project_by_id(project_id)

    def update_project_details(self, current: Optional[Project]) -> Optional[Project]:
        if current is None:
            self._out("Choose a project first")
            return None

        name = self._get_string_input(f"Enter project name ({current.project_name})")
        estimated = self._get_decimal_input(f"Enter estimated hours ({current.estimated_hours})")
        actual = self._get_decimal_input(f"Enter actual hours ({current.actual_hours})")
        difficulty = self._get_optional_int_input(
            f"Enter difficulty ({DIFFICULTY_MIN}-{DIFFICULTY_MAX}) ({current.difficulty})"
        )
        notes = self._get_string_input(f"Enter note ({current.notes})")

        if difficulty is not None and not is_valid_difficulty(difficulty):
            self._out(f"Difficulty must be between {DIFFICULTY_MIN} and {DIFFICULTY_MAX}. Keeping original value.")
            difficulty = None

        updated = dataclasses.replace(
            current,
            project_name=name if name is not None else current.project_name,
            estimated_hours=estimated if estimated is not None else current.estimated_hours,
            actual_hours=actual if actual is not None else current.actual_hours,
            difficulty=difficulty if difficulty is not None else current.difficulty,
            notes=notes if notes is not None else current.notes,
        )
        self._service.update_project(updated)
        refreshed = self._service.fetch_project_by_id(updated.project_id)
        self._out("Project updated successfully")
        return refreshed

    def delete_project(self, current: Optional[Project]) -> Optional[Project]:
        if current is None:
            self._out("Please choose a project first")
            return None
        answer = self._get_int_input(f"Are you sure? Enter 1 to delete project {current.project_id}")
        if answer != 1:
            return current
        self._service.delete_project(current.project_id)
        self._out("Project deleted")
        return None

    # ---------- input helpers ----------

    def _get_user_selection(self, current: Optional[Project]) -> int:
        while True:
            self._print_operations(current)
            value = self._get_int_input("Enter selection")
            if value in self._handlers:
                return value
            self._out(f"Invalid selection. Enter a number between 1 and {len(self._handlers)}.")

    def _get_string_input(self, prompt: str) -> Optional[str]:
        return clean_text(self._input(f"{prompt}: "))

    def _get_int_input(self, prompt: str) -> int:
        while True:
            try:
                value = parse_int(self._input(f"{prompt}: "))
            except InvalidInputError as exc:
                self._out(f"{exc}. Please try again.")
                continue
            if value is None:
                self._out("Invalid input. Please try again.")
                continue
            return value

    def _get_optional_int_input(self, prompt: str) -> Optional[int]:
        while True:
            try:
                return parse_int(self._input(f"{prompt}: "))
            except InvalidInputError as exc:
                self._out(f"{exc}. Please try again.")

    def _get_decimal_input(self, prompt: str) -> Optional[Decimal]:
        while True:
            try:
                return parse_hours(self._input(f"{prompt}: "))
            except InvalidInputError as exc:
                self._out(f"{exc}. Please try again.")

    def _print_operations(self, current: Optional[Project]) -> None:
        self._out("Selections (Ctrl+C to Quit):")
        for line in OPERATIONS:
            self._out(f"  {line}")
        self._out("No project chosen" if current is None else f"Working on: {format_project(current)}")
