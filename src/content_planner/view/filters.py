from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from content_planner.schemas import ArticleRead, PRIORITIES, STATUSES, Stats


@dataclass(frozen=True)
class ArticleFilter:
    """Five independent predicates, combined with AND.

    - search: case-insensitive substring of title, keyword or description
    - category / priority / funnel / status: exact match
    An empty or None value matches everything.
    """

    search: str = ""
    category: Optional[str] = None
    priority: Optional[str] = None
    funnel: Optional[str] = None
    status: Optional[str] = None

    def _matches_search(self, record: ArticleRead) -> bool:
        needle = (self.search or "").lower()
        if not needle:
            return True
        for hay in (record.title, record.keyword, record.description):
            if hay and needle in hay.lower():
                return True
        return False

    def matches(self, record: ArticleRead) -> bool:
        if not self._matches_search(record):
            return False
        for name in ("category", "priority", "funnel", "status"):
            wanted = getattr(self, name)
            if wanted and getattr(record, name) != wanted:
                return False
        return True


def apply_filters(records: Iterable[ArticleRead], flt: ArticleFilter) -> List[ArticleRead]:
    return [r for r in records if flt.matches(r)]


def category_options(records: Iterable[ArticleRead]) -> List[str]:
    return sorted({r.category for r in records if r.category})


def local_stats(records: Iterable[ArticleRead]) -> Stats:
    """Same counts as the store's stats, computed from records in memory."""
    records = list(records)
    counts = {
        f"{p.lower()}_priority": sum(1 for r in records if r.priority == p)
        for p in PRIORITIES
    }
    counts.update({s: sum(1 for r in records if r.status == s) for s in STATUSES})
    return Stats(total=len(records), **counts)
