from .store import ArticleStore, StoreState, configure_store, get_store

__all__ = ["ArticleStore", "StoreState", "configure_store", "get_store"]
