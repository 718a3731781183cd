import logging
import os

from dotenv import load_dotenv

# Config defaults and CORS origins read the environment at import time
load_dotenv()

import click  # noqa: E402
from flask import Flask  # noqa: E402
from .config import get_config  # noqa: E402
from .extensions import db, migrate, cors, llm  # noqa: E402
from sqlalchemy import text  # noqa: E402
from werkzeug.middleware.proxy_fix import ProxyFix  # noqa: E402

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(uri: str) -> None:
    # sqlite:////abs/path.sqlite or sqlite:///rel/path.sqlite; in-memory needs nothing
    if not uri.startswith("sqlite:///") or ":memory:" in uri:
        return
    path = uri[len("sqlite:///"):]
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    app = Flask(__name__)

    # Load config
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%d-%m-%Y %H:%M:%S",
    )

    # Honor proxy headers from a reverse proxy for correct scheme/host
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=1)  # type: ignore[assignment]

    # Init extensions
    _ensure_sqlite_dir(app.config["SQLALCHEMY_DATABASE_URI"])
    cors.init_app(app)
    db.init_app(app)
    migrate.init_app(app, db)
    llm.init_app(app)

    from . import models  # noqa: F401  register tables on the metadata
    from .errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints (REST API under /api)
    from .apis import register_api
    register_api(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/db-check")
    def db_check():
        try:
            db.session.execute(text("SELECT 1"))
            return {"db": "ok"}
        except Exception as e:
            db.session.rollback()
            return {"db": "error", "message": str(e)}, 500

    @app.cli.command("init-db")
    def init_db_command():
        """Create any missing tables."""
        db.create_all()
        click.echo("Database initialized")

    # Tables exist before the first request is served
    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
        logger.info("Database ready at %s", db.engine.url.render_as_string(hide_password=True))

    return app
