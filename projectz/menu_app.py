# Rev 0.2.0

# projectz/menu_app.py  (Rev 0.2.0)
from __future__ import annotations
import argparse
import sys

from projectz.app_context import AppContext
from projectz.ui.console_menu import ProjectsMenu
from projectz.utils.config import resolve_db_path
from projectz.utils.logging_setup import setup_logging
from projectz.utils.paths import ensure_dirs


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="projectz-menu", description="projectZ text menu")
    ap.add_argument("--db", help="SQLite database file (default: PROJECTZ_DB, settings, XDG data dir)")
    args = ap.parse_args(argv)

    ensure_dirs()
    # stdout belongs to the menu; logs go to the file only
    setup_logging("projectZ-menu", console=False)
    ctx = AppContext.create(resolve_db_path(args.db))
    ProjectsMenu(ctx.project_service).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
