from .filters import ArticleFilter, apply_filters
from .planning import PlanningView
from .render import ViewMode, ViewModel, render
from .sources import ArticleSource, HttpSource, StoreSource

__all__ = [
    "ArticleFilter",
    "ArticleSource",
    "HttpSource",
    "PlanningView",
    "StoreSource",
    "ViewMode",
    "ViewModel",
    "apply_filters",
    "render",
]
