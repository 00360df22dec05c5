"""Field-level update plans for article writes.

Every write is described as a mapping of column name to either `KEEP`
(leave the stored value alone) or `Replace(value)`. `apply_updates` is the
only place the merge rule lives, so upsert, patch and insert share it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from content_planner.schemas import ArticleIn, ArticlePatch

DESCRIPTIVE_FIELDS = (
    "title",
    "keyword",
    "intent",
    "funnel",
    "description",
    "priority",
    "word_count",
    "category",
    "week",
)
# Only overwritten when the caller supplies a value
PRESERVED_FIELDS = ("status", "notes")
PATCHABLE_FIELDS = ("status", "notes", "week")


class _Keep:
    _instance: Optional["_Keep"] = None

    def __new__(cls) -> "_Keep":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "KEEP"


KEEP = _Keep()


@dataclass(frozen=True)
class Replace:
    value: Any


FieldUpdate = Union[_Keep, Replace]
UpdatePlan = Dict[str, FieldUpdate]


def _replace_if_given(value: Any) -> FieldUpdate:
    return KEEP if value is None else Replace(value)


def _field_update(name: str, value: Any) -> FieldUpdate:
    # A stored status is never blank
    if name == "status" and isinstance(value, str) and not value.strip():
        return KEEP
    return _replace_if_given(value)


def plan_upsert(payload: ArticleIn) -> UpdatePlan:
    plan: UpdatePlan = {name: Replace(getattr(payload, name)) for name in DESCRIPTIVE_FIELDS}
    for name in PRESERVED_FIELDS:
        plan[name] = _field_update(name, getattr(payload, name))
    return plan


def plan_patch(patch: ArticlePatch) -> UpdatePlan:
    return {name: _field_update(name, getattr(patch, name)) for name in PATCHABLE_FIELDS}


def apply_updates(current: Mapping[str, Any], plan: Mapping[str, FieldUpdate]) -> Dict[str, Any]:
    """Return a new mapping with every `Replace` applied on top of `current`."""
    merged = dict(current)
    for name, update in plan.items():
        if isinstance(update, Replace):
            merged[name] = update.value
    return merged
