"""
Shared fixtures: every test gets its own temp directory holding the SQLite
file, the upload folder and a built frontend.
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio
from folio.core import Database
from folio.modules.posts import PostService, init_posts_db

TEST_ORIGINS = ['http://localhost:3000', 'http://localhost:3002']


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test data, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def upload_dir(tmp_dir):
    return os.path.join(tmp_dir, "uploads")


@pytest.fixture
def app(tmp_dir, upload_dir):
    """Flask app with every Folio module registered"""
    frontend = os.path.join(tmp_dir, "public")
    os.makedirs(frontend)
    with open(os.path.join(frontend, "index.html"), "w") as f:
        f.write("<html><body><div id='root'></div></body></html>")

    app = Flask(__name__, static_folder=None)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = os.path.join(tmp_dir, "databases")
    app.config["BLOG_DB"] = os.path.join(tmp_dir, "databases", "blog.db")
    app.config["UPLOAD_FOLDER"] = upload_dir
    app.config["FRONTEND_FOLDER"] = frontend
    app.config["CORS_ORIGINS"] = TEST_ORIGINS
    Folio(app)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def database(tmp_dir):
    db = Database(os.path.join(tmp_dir, "blog.db"))
    init_posts_db(db)
    return db


@pytest.fixture
def service(database, upload_dir):
    return PostService(database, upload_dir=upload_dir)
