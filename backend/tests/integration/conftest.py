import os
from pathlib import Path

import pytest
from alembic import command, config


def _alembic_config_for_backend():
    backend_root = Path(__file__).resolve().parents[2]
    cfg = config.Config()
    # Ensure Alembic uses the repository's migrations folder by absolute path
    cfg.set_main_option("script_location", str(backend_root / "migrations"))
    return cfg


@pytest.fixture()
def sync_database_url(tmp_path):
    """
    Sync URL for migration tests.

    `MIGRATIONS_DATABASE_URL` points the tests at a real server (for
    example the docker-compose Postgres); otherwise a throwaway sqlite
    file is used.
    """
    return os.environ.get("MIGRATIONS_DATABASE_URL") or f"sqlite:///{tmp_path / 'migrations.db'}"


@pytest.fixture()
def alembic_config(sync_database_url):
    cfg = _alembic_config_for_backend()
    cfg.set_main_option("sqlalchemy.url", sync_database_url)
    return cfg


@pytest.fixture()
def apply_migrations(alembic_config):
    command.upgrade(alembic_config, "head")
    return alembic_config
