from .models import ArticlePlan, Base, DEFAULT_STATUS
from .session import make_engine, make_session_factory, ping, session_scope

__all__ = [
    "ArticlePlan",
    "Base",
    "DEFAULT_STATUS",
    "make_engine",
    "make_session_factory",
    "ping",
    "session_scope",
]
