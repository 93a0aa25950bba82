"""
Factories Repository.

Responsibilities:
- Paginated reads of the factories table.
- Bulk deletes for merged duplicates.
- Persisting inventions with their match results.
- Transaction-safe writes.

Non-Responsibilities:
- No business logic.
- No scoring.
- No retries: storage errors propagate to the caller unchanged.

Invariant:
Repositories must not encode domain decisions.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from factorymatch.database import Factory, InventionResult, get_session
from factorymatch.logger import get_logger

logger = get_logger()

DEFAULT_PAGE_SIZE = 1000

FACTORY_FIELDS = (
    "name",
    "email",
    "phone",
    "country",
    "city",
    "industry",
    "materials",
    "capabilities",
    "notes",
    "scale",
    "approved",
    "created_at",
)


def _to_row(factory: Factory) -> Dict[str, Any]:
    row = {"id": factory.id}
    for field in FACTORY_FIELDS:
        row[field] = getattr(factory, field)
    return row


class FactoryRepository:
    """Read/write access to the factory roster in one SQLite database."""

    def __init__(self, db_path: Path, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.db_path = db_path
        self.page_size = page_size

    def fetch_factories(
        self,
        approved: Optional[bool] = None,
        page: int = 0,
        page_size: Optional[int] = None,
        newest_first: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Fetch one page of factory rows.

        Args:
            approved: Filter on approval; None returns every row
            page: Zero-based page number
            page_size: Rows per page (default: repository page size)
            newest_first: Order by created_at descending instead of id ascending

        Returns:
            List of row dictionaries, shorter than page_size on the last page
        """
        size = page_size or self.page_size
        session = get_session(self.db_path)
        try:
            query = session.query(Factory)
            if approved is not None:
                query = query.filter(Factory.approved == approved)
            if newest_first:
                query = query.order_by(Factory.created_at.desc(), Factory.id.desc())
            else:
                query = query.order_by(Factory.id.asc())
            return [_to_row(f) for f in query.offset(page * size).limit(size).all()]
        except SQLAlchemyError as e:
            logger.record_failure(type(e).__name__)
            logger.error("Factory fetch failed", page=page, approved=approved, error=str(e))
            raise
        finally:
            session.close()

    def fetch_all(self, approved: Optional[bool] = None, newest_first: bool = False) -> List[Dict[str, Any]]:
        """Read the whole table page by page until a short page."""
        rows: List[Dict[str, Any]] = []
        page = 0
        while True:
            batch = self.fetch_factories(
                approved=approved, page=page, page_size=self.page_size, newest_first=newest_first
            )
            rows.extend(batch)
            if len(batch) < self.page_size:
                break
            page += 1
        logger.record_fetch(len(rows))
        logger.debug("Roster fetched", rows=len(rows), pages=page + 1, approved=approved)
        return rows

    def count_factories(self, approved: Optional[bool] = None) -> int:
        session = get_session(self.db_path)
        try:
            query = session.query(Factory)
            if approved is not None:
                query = query.filter(Factory.approved == approved)
            return query.count()
        finally:
            session.close()

    def add_factories(self, rows: Iterable[Dict[str, Any]]) -> List[int]:
        """Insert factory rows in one transaction and return their ids."""
        session = get_session(self.db_path)
        try:
            factories = []
            for row in rows:
                values = {k: row[k] for k in FACTORY_FIELDS if row.get(k) is not None}
                if "industry" not in values and row.get("industries") is not None:
                    values["industry"] = row["industries"]
                if isinstance(values.get("created_at"), str):
                    values["created_at"] = datetime.fromisoformat(values["created_at"])
                factories.append(Factory(**values))
            session.add_all(factories)
            session.commit()
            return [f.id for f in factories]
        except SQLAlchemyError as e:
            session.rollback()
            logger.record_failure(type(e).__name__)
            logger.error("Factory insert failed", error=str(e))
            raise
        finally:
            session.close()

    def delete_factories(self, ids: List[Any]) -> int:
        """
        Delete factories by id in one statement.

        Returns:
            Number of rows deleted
        """
        if not ids:
            return 0
        session = get_session(self.db_path)
        try:
            deleted = (
                session.query(Factory)
                .filter(Factory.id.in_(list(ids)))
                .delete(synchronize_session=False)
            )
            session.commit()
            logger.info("Factories deleted", requested=len(ids), deleted=deleted)
            return deleted
        except SQLAlchemyError as e:
            session.rollback()
            logger.record_failure(type(e).__name__)
            logger.error("Factory delete failed", ids=list(ids), error=str(e))
            raise
        finally:
            session.close()

    def insert_invention_result(self, record: Dict[str, Any]) -> int:
        """
        Persist an invention together with its analysis result.

        Args:
            record: name, description, industry, type, materials, country,
                analysis_result (JSON-serializable)

        Returns:
            The new invention id
        """
        session = get_session(self.db_path)
        try:
            invention = InventionResult(
                name=record["name"],
                description=record["description"],
                industry=record.get("industry"),
                type=record.get("type"),
                materials=record.get("materials"),
                country=record.get("country"),
                analysis_result=record.get("analysis_result"),
            )
            session.add(invention)
            session.commit()
            return invention.id
        except SQLAlchemyError as e:
            session.rollback()
            logger.record_failure(type(e).__name__)
            logger.error("Invention insert failed", name=record.get("name"), error=str(e))
            raise
        finally:
            session.close()

    def fetch_invention_results(self) -> List[Dict[str, Any]]:
        session = get_session(self.db_path)
        try:
            return [
                {
                    "id": inv.id,
                    "name": inv.name,
                    "description": inv.description,
                    "industry": inv.industry,
                    "type": inv.type,
                    "materials": inv.materials,
                    "country": inv.country,
                    "analysis_result": inv.analysis_result,
                    "created_at": inv.created_at,
                }
                for inv in session.query(InventionResult).order_by(InventionResult.id.asc()).all()
            ]
        finally:
            session.close()
