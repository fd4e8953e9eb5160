# Rev 0.2.0
# projectZ — Main Window
# Columns: ID | Name | Est. Hours | Act. Hours | Difficulty | Notes

from __future__ import annotations
from typing import Any, Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QTableWidget, QTableWidgetItem, QHeaderView, QMessageBox, QDialog
)

from projectz.models.errors import DbError, InvalidInputError, ProjectNotFoundError
from projectz.ui.project_editor_dialog import ProjectEditorDialog
from projectz.utils.config import save_settings
from projectz.utils.logging_setup import get_logger

_COLUMNS = ["ID", "Name", "Est. Hours", "Act. Hours", "Difficulty", "Notes"]


class MainWindow(QMainWindow):
    def __init__(self, *, project_service, settings: Optional[Dict[str, Any]] = None, parent=None):
        super().__init__(parent)
        self._service = project_service
        self._settings = settings or {}
        self._log = get_logger("MainWindow")

        self.setWindowTitle("projectZ — Project Manager")
        size = self._settings.get("main_window", {})
        self.resize(int(size.get("width", 800)), int(size.get("height", 600)))

        # ---- central ----
        central = QWidget(self)
        v = QVBoxLayout(central)

        self._tbl = QTableWidget(0, len(_COLUMNS), self)
        self._tbl.setSelectionBehavior(QTableWidget.SelectRows)
        self._tbl.setSelectionMode(QTableWidget.SingleSelection)
        self._tbl.setEditTriggers(QTableWidget.NoEditTriggers)
        self._tbl.setAlternatingRowColors(True)
        self._tbl.verticalHeader().setVisible(False)
        self._tbl.setHorizontalHeaderLabels(_COLUMNS)
        h = self._tbl.horizontalHeader()
        for col in range(len(_COLUMNS)):
            h.setSectionResizeMode(col, QHeaderView.ResizeToContents)
        h.setSectionResizeMode(1, QHeaderView.Stretch)   # Name
        h.setSectionResizeMode(5, QHeaderView.Stretch)   # Notes
        self._tbl.doubleClicked.connect(self._update_project)
        v.addWidget(self._tbl)

        buttons = QHBoxLayout()
        for label, slot in (
            ("Add Project", self._add_project),
            ("Update Project", self._update_project),
            ("Delete Project", self._delete_project),
            ("Refresh", self._reload_projects),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        buttons.addStretch(1)
        v.addLayout(buttons)

        self.setCentralWidget(central)

        # initial load
        self._reload_projects()

    # -------------------- data loading --------------------

    def _reload_projects(self):
        try:
            projects = self._service.fetch_all_projects()
        except DbError as exc:
            self._show_error("Load failed", exc)
            return
        self._tbl.setRowCount(0)
        for p in projects:
            r = self._tbl.rowCount()
            self._tbl.insertRow(r)
            values = [p.project_id, p.project_name, p.estimated_hours, p.actual_hours, p.difficulty, p.notes]
            for c, value in enumerate(values):
                item = QTableWidgetItem("" if value is None else str(value))
                if c == 0:
                    item.setData(Qt.UserRole, p.project_id)
                self._tbl.setItem(r, c, item)

    def _selected_project_id(self) -> Optional[int]:
        row = self._tbl.currentRow()
        if row < 0:
            return None
        item = self._tbl.item(row, 0)
        return int(item.data(Qt.UserRole)) if item is not None else None

    # -------------------- actions --------------------

    def _add_project(self):
        dlg = ProjectEditorDialog(parent=self)
        if dlg.exec() != QDialog.Accepted:
            return
        try:
            project = self._service.add_project(dlg.project())
        except InvalidInputError as exc:
            QMessageBox.warning(self, "Invalid input", f"Invalid input: {exc}")
            return
        except DbError as exc:
            self._show_error("Add failed", exc)
            return
        self._log.info("Added project %s via form", project.project_id)
        self._reload_projects()

    def _update_project(self, *_):
        project_id = self._selected_project_id()
        if project_id is None:
            QMessageBox.information(self, "Update Project", "Select a project to update.")
            return
        try:
            existing = self._service.fetch_project_by_id(project_id)
            dlg = ProjectEditorDialog(existing=existing, parent=self)
            if dlg.exec() != QDialog.Accepted:
                return
            self._service.update_project(dlg.project())
        except InvalidInputError as exc:
            QMessageBox.warning(self, "Invalid input", f"Invalid input: {exc}")
            return
        except (ProjectNotFoundError, DbError) as exc:
            self._show_error("Update failed", exc)
            return
        self._reload_projects()

    def _delete_project(self):
        project_id = self._selected_project_id()
        if project_id is None:
            QMessageBox.information(self, "Delete Project", "Select a project to delete.")
            return
        confirm = QMessageBox.question(
            self, "Confirm", f"Delete project {project_id}?", QMessageBox.Yes | QMessageBox.No
        )
        if confirm != QMessageBox.Yes:
            return
        try:
            self._service.delete_project(project_id)
        except (ProjectNotFoundError, DbError) as exc:
            self._show_error("Delete failed", exc)
        self._reload_projects()

    def _show_error(self, title: str, exc: Exception) -> None:
        self._log.error("%s: %s", title, exc)
        QMessageBox.critical(self, title, str(exc))

    # -------------------- settings --------------------

    def closeEvent(self, event):
        if self._settings:
            self._settings.setdefault("main_window", {}).update(
                {"width": self.width(), "height": self.height()}
            )
            try:
                save_settings(self._settings)
            except OSError as exc:
                self._log.warning("Could not save settings: %s", exc)
        super().closeEvent(event)
