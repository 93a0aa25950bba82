"""
Entity Resolution Orchestrator.

Responsibilities:
- Run the pairwise duplicate scan over the full roster.
- Apply candidate selection, pair scoring and the acceptance threshold.
- Group accepted pairs under a primary record.
- Report progress and yield to the event loop between chunks.

Non-Responsibilities:
- No feature computation.
- No mutation of persistent state (merging is the caller's decision).

Invariant:
A record is claimed at most once per scan: it is either a primary or a
suspect of exactly one group, or in no group at all.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Set, Union

from factorymatch.logger import get_logger
from factorymatch.models import DuplicateGroup, FactoryRecord, Suspect

from .candidate_selector import is_candidate_pair
from .scoring import score_pair

logger = get_logger()

DUPLICATE_THRESHOLD = 80
DEFAULT_CHUNK_SIZE = 20

ProgressCallback = Callable[[int, int], Union[None, Awaitable[None]]]


class ClaimRegistry:
    """Identifiers already placed in a group during one scan."""

    def __init__(self):
        self._ids: Set[Any] = set()

    def claim(self, record_id: Any) -> None:
        self._ids.add(record_id)

    def is_claimed(self, record_id: Any) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, record_id: Any) -> bool:
        return record_id in self._ids


async def _report(on_progress: Optional[ProgressCallback], processed: int, total: int) -> None:
    if on_progress is None:
        return
    result = on_progress(processed, total)
    if inspect.isawaitable(result):
        await result


async def group_duplicates(
    factories: List[FactoryRecord],
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[DuplicateGroup]:
    """
    Cluster factories into primary + suspects groups.

    Args:
        factories: Full roster, newest first. Earlier records become primaries.
        on_progress: Optional callback(processed, total), plain or async.
            Called every chunk_size outer iterations and once at the end
            with (total, total), including (0, 0) for an empty roster.
        chunk_size: Outer iterations between progress reports and yields

    Returns:
        Groups in the order their primaries appear in the roster
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    groups: List[DuplicateGroup] = []
    claimed = ClaimRegistry()
    total = len(factories)
    pairs_compared = 0

    for i, primary in enumerate(factories):
        if i > 0 and i % chunk_size == 0:
            await _report(on_progress, i, total)
            await asyncio.sleep(0)

        if claimed.is_claimed(primary.id):
            continue

        suspects: List[Suspect] = []
        for candidate in factories[i + 1:]:
            if claimed.is_claimed(candidate.id):
                continue
            if not is_candidate_pair(primary, candidate):
                continue
            pairs_compared += 1
            result = score_pair(primary, candidate)
            if result is None or result.score < DUPLICATE_THRESHOLD:
                continue
            suspects.append(Suspect(factory=candidate, score=result.score, reason=result.reason))
            claimed.claim(candidate.id)

        if suspects:
            groups.append(DuplicateGroup(primary=primary, suspects=suspects))
            claimed.claim(primary.id)

    await _report(on_progress, total, total)
    logger.record_dedup_scan(pairs_compared, len(groups))
    logger.info(
        "Duplicate scan complete",
        total=total,
        pairs_compared=pairs_compared,
        groups=len(groups),
        claimed=len(claimed),
    )
    return groups


async def find_duplicates(
    repository,
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[DuplicateGroup]:
    """
    Fetch the whole roster (approval ignored), newest first, and scan it.

    Args:
        repository: Storage collaborator exposing fetch_all(newest_first=...)
        on_progress: See group_duplicates
        chunk_size: See group_duplicates
    """
    rows: Iterable[dict] = repository.fetch_all(newest_first=True)
    factories = [FactoryRecord.from_row(row) for row in rows]
    return await group_duplicates(factories, on_progress=on_progress, chunk_size=chunk_size)
