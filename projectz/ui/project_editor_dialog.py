# projectz/ui/project_editor_dialog.py
# Rev 0.2.0 — Add/Update form for a single project
from __future__ import annotations
import dataclasses
from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDialogButtonBox, QWidget
)

from projectz.models.entities import Project
from projectz.ui.input_parsing import (
    DIFFICULTY_MAX, DIFFICULTY_MIN, clean_text, parse_difficulty, parse_hours
)
from projectz.models.errors import InvalidInputError


def _text(value) -> str:
    return "" if value is None else str(value)


class ProjectEditorDialog(QDialog):
    """
    Name, Est. Hours, Act. Hours, Difficulty, Notes, OK/Cancel.

    The dialog only collects text; project() turns it into a Project and
    raises InvalidInputError when a field does not parse.
    """

    def __init__(self, *, existing: Optional[Project] = None, parent: QWidget | None = None):
        super().__init__(parent)
        self._existing = existing
        self.setWindowTitle("Add Project" if existing is None else f"Update Project #{existing.project_id}")

        self._name = QLineEdit()
        self._estimated = QLineEdit()
        self._estimated.setPlaceholderText("e.g. 12.50")
        self._actual = QLineEdit()
        self._actual.setPlaceholderText("e.g. 10.00")
        self._difficulty = QLineEdit()
        self._difficulty.setPlaceholderText(f"{DIFFICULTY_MIN}-{DIFFICULTY_MAX}")
        self._notes = QLineEdit()

        if existing is not None:
            self._name.setText(_text(existing.project_name))
            self._estimated.setText(_text(existing.estimated_hours))
            self._actual.setText(_text(existing.actual_hours))
            self._difficulty.setText(_text(existing.difficulty))
            self._notes.setText(_text(existing.notes))

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Est. Hours:", self._estimated)
        form.addRow("Act. Hours:", self._actual)
        form.addRow(f"Difficulty ({DIFFICULTY_MIN}-{DIFFICULTY_MAX}):", self._difficulty)
        form.addRow("Notes:", self._notes)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        lay = QVBoxLayout(self)
        lay.addLayout(form)
        lay.addWidget(btns)

    def project(self) -> Project:
        name = clean_text(self._name.text())
        if name is None:
            raise InvalidInputError("Project name is required")
        difficulty = parse_difficulty(self._difficulty.text())
        if difficulty is None:
            raise InvalidInputError(f"Difficulty must be between {DIFFICULTY_MIN} and {DIFFICULTY_MAX}")
        values = dict(
            project_name=name,
            estimated_hours=parse_hours(self._estimated.text()),
            actual_hours=parse_hours(self._actual.text()),
            difficulty=difficulty,
            notes=clean_text(self._notes.text()),
        )
        if self._existing is None:
            return Project(**values)
        return dataclasses.replace(self._existing, **values)
