from base64 import b64encode
from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from votigo import create_app
from votigo.extensions import db
from votigo.services import categories as category_service
from votigo.services import storage

ADMIN_PASSWORD = "testpass"


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "ADMIN_USERNAME": "admin",
            "ADMIN_PASSWORD": ADMIN_PASSWORD,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def cli_runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def admin_headers():
    token = b64encode(f"admin:{ADMIN_PASSWORD}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture()
def make_category(db_session):
    """Create a category with options, optionally moved straight to a status."""

    def _make(
        name="Best Costume",
        vote_type="single",
        options=("A", "B"),
        status="draft",
        show_results="after_close",
        max_rank=None,
    ):
        category = category_service.create_category(
            db_session,
            name=name,
            vote_type=vote_type,
            show_results=show_results,
            max_rank=max_rank,
        )
        created = [category_service.add_option(db_session, category.id, option) for option in options]
        if status != "draft":
            storage.set_category_status(db_session, category, status)
        return category, created

    return _make
