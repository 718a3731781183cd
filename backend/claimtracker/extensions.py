import os
import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from sqlalchemy import event
from sqlalchemy.engine import Engine

from .integrations.llm.client import LLM

# Flask extensions singletons

db = SQLAlchemy()
migrate = Migrate()
llm = LLM()

# Configure allowed origins from env (comma-separated). In production avoid wildcard.
_allowed = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
_origins = [o.strip() for o in _allowed.split(",") if o.strip()] if _allowed else []
if not _origins:
	# Fallback defaults for local development
	env = os.getenv("FLASK_ENV", "development").lower()
	if env != "production":
		_origins = [
			"http://localhost:5173",
			"http://127.0.0.1:5173",
			"http://0.0.0.0:5173",
			"http://localhost:3000",
			"http://127.0.0.1:3000",
		]
cors = CORS(resources={r"/api/*": {"origins": _origins}}, supports_credentials=True)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
	# SQLite ignores REFERENCES clauses unless enabled per connection
	if isinstance(dbapi_connection, sqlite3.Connection):
		cursor = dbapi_connection.cursor()
		cursor.execute("PRAGMA foreign_keys=ON")
		cursor.close()
