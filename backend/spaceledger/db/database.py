"""
Database connection and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parents[2]

# Get settings from environment
database_url = os.getenv("DATABASE_URL", "sqlite:///./spaceledger.db")
sql_echo = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
tracking_rules_path = os.getenv(
    "TRACKING_RULES_PATH", str(BACKEND_DIR / "config" / "tracking_rules.yaml")
)
cors_origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

class Settings:
    database_url = database_url
    sql_echo = sql_echo
    tracking_rules_path = tracking_rules_path
    cors_origins = cors_origins

settings = Settings()


def make_engine(url: str, echo: bool = False):
    """Create an engine; SQLite connections are shared across request threads."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(settings.database_url, echo=settings.sql_echo)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
