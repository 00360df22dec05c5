"""In-memory planning view.

Holds the last loaded snapshot of every plan plus the current filter and
layout. Nothing is mutated locally: a status change is sent to the source,
then the whole list and the stats are reloaded and the filter re-applied.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Optional

from content_planner.schemas import ArticleRead, Stats
from content_planner.view.fallback import as_records, fallback_articles
from content_planner.view.filters import (
    ArticleFilter,
    apply_filters,
    category_options,
    local_stats,
)
from content_planner.view.render import ViewMode, ViewModel, render
from content_planner.view.sources import SOURCE_ERRORS, ArticleSource

logger = logging.getLogger(__name__)


class PlanningView:
    def __init__(
        self,
        source: ArticleSource,
        *,
        fallback: Optional[Iterable[Dict[str, Any]]] = None,
        mode: Any = ViewMode.LIST,
    ):
        self.source = source
        self.fallback = list(fallback) if fallback is not None else fallback_articles()
        self.mode = ViewMode.parse(mode)
        self.filter = ArticleFilter()
        self.all_records: List[ArticleRead] = []
        self.visible_records: List[ArticleRead] = []
        self.stats = Stats()
        self.using_fallback = False
        self.seed_attempts = 0

    # -------- Loading --------
    def _fetch(self) -> List[ArticleRead]:
        return [ArticleRead.model_validate(a) for a in self.source.list_articles()]

    def _seed(self) -> bool:
        """Push the fallback dataset into an empty store. Attempted at most once."""
        self.seed_attempts += 1
        try:
            count = self.source.bulk_upsert(self.fallback)
        except SOURCE_ERRORS as exc:
            logger.warning("Failed to seed articles: %s", exc)
            return False
        logger.info("Seeded %d article(s) into an empty store", count)
        return True

    def _use_fallback(self) -> None:
        self.all_records = as_records(self.fallback)
        self.using_fallback = True

    def load(self, seed: bool = True) -> List[ArticleRead]:
        """Reload the full list, seeding an empty store on the first attempt.

        Pass `seed=False` for reloads that must never write to the store.
        Never raises: a failed first load shows the fallback dataset, a failed
        reload keeps the last snapshot.
        """
        try:
            records = self._fetch()
            if not records and seed and self.seed_attempts == 0 and self._seed():
                records = self._fetch()
        except SOURCE_ERRORS as exc:
            logger.error("Failed to load articles: %s", exc)
            if not self.all_records:
                self._use_fallback()
        else:
            if records:
                self.all_records = records
                self.using_fallback = False
            elif self.using_fallback or self.seed_attempts:
                # Seeding was tried and the store is still empty or unreachable
                self._use_fallback()
            else:
                self.all_records = []
        self.apply_filters()
        return self.all_records

    def refresh_stats(self) -> Stats:
        if self.using_fallback:
            self.stats = local_stats(self.all_records)
            return self.stats
        try:
            self.stats = Stats.model_validate(self.source.stats())
        except SOURCE_ERRORS as exc:
            logger.warning("Failed to load stats, counting locally: %s", exc)
            self.stats = local_stats(self.all_records)
        return self.stats

    # -------- Filtering / layout --------
    def apply_filters(self) -> List[ArticleRead]:
        self.visible_records = apply_filters(self.all_records, self.filter)
        return self.visible_records

    def set_filter(self, **changes: Any) -> List[ArticleRead]:
        """Update any of search/category/priority/funnel/status and re-filter."""
        self.filter = dataclasses.replace(self.filter, **changes)
        return self.apply_filters()

    def clear_filters(self) -> List[ArticleRead]:
        self.filter = ArticleFilter()
        return self.apply_filters()

    def set_mode(self, mode: Any) -> ViewMode:
        self.mode = ViewMode.parse(mode)
        return self.mode

    def category_options(self) -> List[str]:
        return category_options(self.all_records)

    def render(self) -> ViewModel:
        return render(self.visible_records, self.mode)

    # -------- Mutations --------
    def change_status(self, pk: Optional[int], status: str) -> bool:
        """Patch one plan's status, then reload list and stats. Returns False on failure."""
        if pk is None:
            logger.warning("Cannot change status of a plan that is not stored")
            return False
        try:
            self.source.patch_article(pk, {"status": status})
        except SOURCE_ERRORS as exc:
            logger.error("Failed to update article %s: %s", pk, exc)
            return False
        self.load(seed=False)
        self.refresh_stats()
        return True
