# Rev 0.2.0
"""Exceptions shared by the data, service and UI layers."""
from __future__ import annotations


class DbError(Exception):
    """Any failure below the service layer: connect, SQL, constraint, mapping."""


class RowMappingError(Exception):
    """Entity/schema mismatch while turning a row into an entity."""


class ProjectNotFoundError(LookupError):
    def __init__(self, project_id):
        super().__init__(f"Project with ID={project_id} does not exist.")
        self.project_id = project_id


class InvalidInputError(ValueError):
    """User supplied text that is not a valid number/difficulty."""
