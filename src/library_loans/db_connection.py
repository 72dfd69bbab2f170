import os
import urllib.parse
import warnings

from sqlalchemy import create_engine

from .core.config import PROJECT_ROOT, get_settings


def get_engine():
    """Return a SQLAlchemy Engine.

    Resolution order:
      1. `DATABASE_URL` environment variable (recommended for production)
      2. Individual env vars: `DB_USER`, `DB_PASSWORD`, `DB_HOST`, `DB_PORT`, `DB_NAME`
      3. Fallback to local SQLite file `data/prestamos.db` (development convenience)
    """
    settings = get_settings()

    database_url = settings["database_url"]
    if database_url:
        return create_engine(database_url)

    user = os.environ.get("DB_USER")
    password = os.environ.get("DB_PASSWORD")
    host = os.environ.get("DB_HOST")
    port = os.environ.get("DB_PORT")
    dbname = os.environ.get("DB_NAME")

    if user and dbname and host:
        pwd = urllib.parse.quote_plus(password) if password else ""
        port_part = f":{port}" if port else ""
        conn = f"mysql+pymysql://{user}:{pwd}@{host}{port_part}/{dbname}"
        return create_engine(conn)

    # Fallback: local sqlite file
    db_dir = PROJECT_ROOT / "data"
    db_dir.mkdir(parents=True, exist_ok=True)
    db_path = db_dir / "prestamos.db"
    warnings.warn(
        "DATABASE_URL not set and DB env vars not found - falling back to local sqlite at: %s" % db_path
    )
    return create_engine(f"sqlite:///{db_path}")
