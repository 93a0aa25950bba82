"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for the factory roster and saved inventions.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Factory(Base):
    """Candidate manufacturer."""

    __tablename__ = "factories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    country = Column(String, nullable=True)
    city = Column(String, nullable=True)
    industry = Column(JSON, nullable=True)  # list of labels, or a legacy comma-joined string
    materials = Column(JSON, nullable=True)
    capabilities = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    scale = Column(String, nullable=True)
    approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class InventionResult(Base):
    """An intake submission together with the matches returned for it."""

    __tablename__ = "inventions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    industry = Column(String, nullable=True)
    type = Column(String, nullable=True)
    materials = Column(JSON, nullable=True)
    country = Column(String, nullable=True)
    analysis_result = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
