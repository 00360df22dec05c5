"""Turn a filtered record list into a layout-independent view model.

`render(records, mode)` is pure: the same records and mode always produce the
same `ViewModel`, and nothing is kept between calls. The static page consumes
`ViewModel.to_dict()` as JSON; the CLI prints it as text.
"""
from __future__ import annotations

import enum
import math
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from content_planner.schemas import ArticleRead, STATUSES
from content_planner.view.palette import (
    Badge,
    CATEGORY_COLORS,
    PRIORITY_COLORS,
    STATUS_COLORS,
    badge,
)

EMPTY_MESSAGE = "No articles match your filters"
WEEKS_PER_QUARTER = 13

STATUS_LABELS = {
    "planned": "Planned",
    "in_progress": "In Progress",
    "written": "Written",
    "published": "Published",
}


class ViewMode(str, enum.Enum):
    LIST = "list"
    CALENDAR = "calendar"
    CATEGORY = "category"

    @classmethod
    def parse(cls, value: Any) -> "ViewMode":
        """Unknown or missing modes fall back to the flat list."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.LIST


def quarter_for_week(week: Optional[int]) -> Optional[int]:
    if week is None:
        return None
    return math.ceil(week / WEEKS_PER_QUARTER)


@dataclass
class Row:
    record: ArticleRead
    category: Badge
    priority: Badge
    status: Badge
    # (value, label) pairs; only list rows carry the status control
    status_options: Tuple[Tuple[str, str], ...] = ()

    @property
    def editable(self) -> bool:
        return bool(self.status_options) and self.record.id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record": self.record.model_dump(mode="json"),
            "badges": {
                "category": self.category.to_dict(),
                "priority": self.priority.to_dict(),
                "status": self.status.to_dict(),
            },
            "status_options": [{"value": v, "label": l} for v, l in self.status_options],
            "editable": self.editable,
        }


@dataclass
class Group:
    key: Optional[Hashable]
    label: str
    rows: List[Row] = field(default_factory=list)
    quarter: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "count": self.count,
            "quarter": self.quarter,
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass
class ViewModel:
    mode: ViewMode
    total: int
    groups: List[Group] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "total": self.total,
            "empty": self.empty,
            "message": self.message,
            "groups": [g.to_dict() for g in self.groups],
        }


def _row(record: ArticleRead, *, with_status_control: bool = False) -> Row:
    options: Tuple[Tuple[str, str], ...] = ()
    if with_status_control:
        options = tuple((s, STATUS_LABELS[s]) for s in STATUSES)
    return Row(
        record=record,
        category=badge(CATEGORY_COLORS, record.category),
        priority=badge(PRIORITY_COLORS, record.priority),
        status=badge(STATUS_COLORS, record.status),
        status_options=options,
    )


def _group_by(
    records: Sequence[ArticleRead], key: Callable[[ArticleRead], Any]
) -> "OrderedDict[Any, List[ArticleRead]]":
    """Bucket records by key; records keep their incoming order inside a bucket."""
    buckets: "OrderedDict[Any, List[ArticleRead]]" = OrderedDict()
    for record in records:
        buckets.setdefault(key(record), []).append(record)
    return buckets


def _none_last(value: Any) -> Tuple[bool, Any]:
    return (value is None, value if value is not None else 0)


def _list_groups(records: Sequence[ArticleRead]) -> List[Group]:
    return [
        Group(
            key=None,
            label="All articles",
            rows=[_row(r, with_status_control=True) for r in records],
        )
    ]


def _calendar_groups(records: Sequence[ArticleRead]) -> List[Group]:
    buckets = _group_by(records, lambda r: r.week)
    groups = []
    for week in sorted(buckets, key=_none_last):
        label = f"Week {week}" if week is not None else "Unscheduled"
        groups.append(
            Group(
                key=week,
                label=label,
                rows=[_row(r) for r in buckets[week]],
                quarter=quarter_for_week(week),
            )
        )
    return groups


def _category_groups(records: Sequence[ArticleRead]) -> List[Group]:
    buckets = _group_by(records, lambda r: r.category)
    return [
        Group(key=name, label=name or "Uncategorized", rows=[_row(r) for r in buckets[name]])
        for name in sorted(buckets, key=lambda c: (c is None, c or ""))
    ]


_GROUPERS: Dict[ViewMode, Callable[[Sequence[ArticleRead]], List[Group]]] = {
    ViewMode.LIST: _list_groups,
    ViewMode.CALENDAR: _calendar_groups,
    ViewMode.CATEGORY: _category_groups,
}


def empty_view(mode: Any = ViewMode.LIST) -> ViewModel:
    return ViewModel(mode=ViewMode.parse(mode), total=0, groups=[], message=EMPTY_MESSAGE)


def render(records: Iterable[ArticleRead], mode: Any = ViewMode.LIST) -> ViewModel:
    mode = ViewMode.parse(mode)
    records = list(records)
    if not records:
        return empty_view(mode)
    return ViewModel(mode=mode, total=len(records), groups=_GROUPERS[mode](records))
