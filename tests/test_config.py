from shared.core.config import Settings, build_database_url
from shared.core.database import create_db_engine


def test_database_url_takes_precedence():
    config = Settings(DATABASE_URL="sqlite:///./x.db")
    assert build_database_url(config) == "sqlite:///./x.db"


def test_database_url_built_from_parts():
    config = Settings(DATABASE_URL=None, DB_USER="u", DB_PASS="p",
                      DB_HOST="db", DB_PORT="5433", DB_NAME="props")
    assert build_database_url(config) == "postgresql+psycopg2://u:p@db:5433/props"


def test_sqlite_engine_skips_pool_sizing():
    engine = create_db_engine("sqlite://")
    try:
        assert engine.dialect.name == "sqlite"
    finally:
        engine.dispose()
