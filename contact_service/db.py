import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .settings import Settings

logger = logging.getLogger(__name__)

TABLE_NAME = "contact_form"

# primary key column per dialect; everything else is portable
_ID_COLUMNS = {
    "sqlite": "id INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "id SERIAL PRIMARY KEY",
}
_DEFAULT_ID_COLUMN = "id INT AUTO_INCREMENT PRIMARY KEY"

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS contact_form (
    {id_column},
    first_name VARCHAR(255) NOT NULL,
    last_name VARCHAR(255) NOT NULL,
    email VARCHAR(255) NOT NULL,
    mobile VARCHAR(20) NOT NULL,
    password VARCHAR(255) NOT NULL,
    image_path VARCHAR(255),
    address TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

def make_engine(settings: Settings) -> Engine:
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # sessions are used from the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(settings.database_url, future=True, pool_pre_ping=True, connect_args=connect_args)

def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def create_table_sql(dialect_name: str) -> str:
    return CREATE_TABLE_SQL.format(id_column=_ID_COLUMNS.get(dialect_name, _DEFAULT_ID_COLUMN))

def init_db(engine: Engine) -> bool:
    try:
        with engine.begin() as conn:
            conn.execute(text(create_table_sql(engine.dialect.name)))
    except Exception:
        logger.exception("Error creating table `%s`", TABLE_NAME)
        return False
    logger.info("Table `%s` is ready.", TABLE_NAME)
    return True
