#!/usr/bin/env python3
"""Run Alembic migrations programmatically; safe to run repeatedly."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


def build_config() -> Config:
    ini_path = BACKEND_DIR / "alembic.ini"
    cfg = Config(str(ini_path)) if ini_path.exists() else Config()
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return cfg


def run_alembic_upgrade(revision: str = "head"):
    try:
        command.upgrade(build_config(), revision)
        print(f"Alembic upgrade to {revision} completed.", file=sys.stdout)
    except Exception as exc:
        print("Alembic upgrade failed:", exc, file=sys.stderr)
        raise


def create_all_tables():
    """Create tables straight from the models, without migration history"""
    from app.core.database import Base, get_engine
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    print("Tables created from models.", file=sys.stdout)


def main():
    parser = argparse.ArgumentParser(description="Initialize the content database")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="Create tables from models instead of running migrations",
    )
    parser.add_argument("--revision", default="head", help="Target Alembic revision")
    args = parser.parse_args()

    if args.create_all:
        create_all_tables()
    else:
        run_alembic_upgrade(args.revision)


if __name__ == "__main__":
    main()
