import os, sys, importlib

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

MODULES = [
    "content_planner",
    "content_planner.api",
    "content_planner.api.articles_api",
    "content_planner.api.view_api",
    "content_planner.cli",
    "content_planner.config",
    "content_planner.db",
    "content_planner.db.models",
    "content_planner.db.session",
    "content_planner.db_init",
    "content_planner.errors",
    "content_planner.main",
    "content_planner.schemas",
    "content_planner.services",
    "content_planner.services.merge",
    "content_planner.services.store",
    "content_planner.view",
    "content_planner.view.fallback",
    "content_planner.view.filters",
    "content_planner.view.palette",
    "content_planner.view.planning",
    "content_planner.view.render",
    "content_planner.view.sources",
]

def test_import_all_modules():
    failed = []
    for name in MODULES:
        try:
            importlib.import_module(name)
        except Exception as e:
            failed.append((name, str(e)))
    assert not failed, f"Failed imports: {failed}"


def test_routes_are_mounted():
    from content_planner.main import app

    paths = app.openapi()["paths"]
    for path in (
        "/health",
        "/api/articles",
        "/api/articles/{pk}",
        "/api/articles/bulk",
        "/api/stats",
        "/api/view",
        "/api/view/render",
    ):
        assert path in paths, path
