# projectZ application context
# Rev 0.2.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from .utils.logging_setup import get_logger
from .repositories.db import Database
from .repositories.sqlite_project_repository import SQLiteProjectRepository
from .services.project_service import ProjectService

@dataclass
class AppContext:
    """Central container for shared app resources."""
    db_path: Path
    db: Database
    projects_repo: SQLiteProjectRepository
    project_service: ProjectService

    @classmethod
    def create(cls, db_path: Path) -> "AppContext":
        """Initialize DB (with pending migrations), DAO, and service."""
        log = get_logger("AppContext")
        db = Database(db_path)
        applied = db.run_migrations()
        if applied:
            log.info("Applied migrations: %s", ", ".join(applied))
        repo = SQLiteProjectRepository(db)
        service = ProjectService(repo)
        log.info("AppContext initialized with DB=%s", db_path)
        return cls(db_path=Path(db_path), db=db, projects_repo=repo, project_service=service)
