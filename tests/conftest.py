from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the swdsms package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from swdsms.core import config as core_config  # noqa: E402
from swdsms.db import models  # noqa: E402
from swdsms.db import session as db_session  # noqa: E402


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.reset_caches()


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Local snapshots live in a temp dir; no remote backend configured."""
    path = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(path))
    monkeypatch.setenv("STATIC_DIR", str(tmp_path / "web"))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    _reset_caches()
    yield path
    _reset_caches()


@pytest.fixture()
def db_env(tmp_path, monkeypatch, data_dir):
    """Temporary SQLite remote backend with the schema created."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    _reset_caches()


@pytest.fixture()
def unprovisioned_db(tmp_path, monkeypatch, data_dir):
    """Remote backend reachable but without the users/reports tables."""
    db_file = tmp_path / "empty.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _reset_caches()
    yield db_file
    _reset_caches()
