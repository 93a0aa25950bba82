"""
Entry points used by the host application.

Wraps the two engines around one storage collaborator:
ranking inventions against approved factories, and finding and
merging duplicate factory records.
"""

from typing import Any, Dict, List, Optional, Union

from pipelines.entity_resolution.resolver import DEFAULT_CHUNK_SIZE, ProgressCallback, find_duplicates
from pipelines.matching.ranking import find_top_factories, invention_materials
from pipelines.matching.industry import resolve_industry

from .logger import get_logger
from .models import DuplicateGroup, InventionQuery, MatchResult

logger = get_logger()


class FactoryMatchService:
    """Ranking, duplicate detection and merging over one factory repository."""

    def __init__(self, repository, dedup_chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.repository = repository
        self.dedup_chunk_size = dedup_chunk_size

    def rank(self, invention: Union[InventionQuery, Dict[str, Any]]) -> List[MatchResult]:
        """Return up to 5 approved factories for the invention, best first."""
        if isinstance(invention, dict):
            invention = InventionQuery.from_dict(invention)
        return find_top_factories(invention, self.repository)

    async def find_duplicates(self, on_progress: Optional[ProgressCallback] = None) -> List[DuplicateGroup]:
        """Scan the whole roster for duplicate groups."""
        return await find_duplicates(self.repository, on_progress=on_progress, chunk_size=self.dedup_chunk_size)

    def merge_group(self, primary_id: Any, suspect_ids: List[Any]) -> int:
        """
        Keep the primary record and delete the suspects.

        No fields are copied from the suspects into the primary.

        Returns:
            Number of records deleted

        Raises:
            ValueError: If the primary id is among the suspect ids
        """
        if primary_id in suspect_ids:
            raise ValueError(f"Primary factory {primary_id} cannot also be a suspect")
        if not suspect_ids:
            logger.debug("Merge skipped: no suspects", primary_id=primary_id)
            return 0
        deleted = self.repository.delete_factories(list(suspect_ids))
        logger.record_merge(deleted)
        logger.info("Duplicate group merged", primary_id=primary_id, suspects=list(suspect_ids), deleted=deleted)
        return deleted

    def save_invention(self, invention: InventionQuery, results: List[MatchResult]) -> int:
        """Persist the invention with the results returned for it."""
        return self.repository.insert_invention_result(
            {
                "name": invention.name,
                "description": invention.description,
                "industry": resolve_industry(invention.industry, invention.text),
                "type": invention.type,
                "materials": invention_materials(invention),
                "country": invention.country,
                "analysis_result": [r.to_dict() for r in results],
            }
        )
