import httpx
import pytest

from content_planner.errors import ServiceUnavailableError
from content_planner.view.fallback import FALLBACK_ARTICLES
from content_planner.view.planning import PlanningView
from content_planner.view.render import ViewMode
from content_planner.view.sources import HttpSource, StoreSource


class FakeSource:
    """In-memory source that records every call."""

    def __init__(self, rows=None, *, fail_list=False, fail_bulk=False, fail_stats=False):
        self.rows = list(rows or [])
        self.fail_list = fail_list
        self.fail_bulk = fail_bulk
        self.fail_stats = fail_stats
        self.calls = []

    def list_articles(self):
        self.calls.append("list")
        if self.fail_list:
            raise httpx.ConnectError("connection refused")
        return [dict(r) for r in self.rows]

    def stats(self):
        self.calls.append("stats")
        if self.fail_stats:
            raise httpx.ReadTimeout("timed out")
        return {"total": len(self.rows)}

    def bulk_upsert(self, articles):
        self.calls.append("bulk")
        if self.fail_bulk:
            raise ServiceUnavailableError()
        for i, a in enumerate(articles, start=1):
            self.rows.append({"id": i, "article_id": a["id"], "title": a["title"], "week": a["week"]})
        return len(articles)

    def patch_article(self, pk, changes):
        self.calls.append(("patch", pk, changes))
        for r in self.rows:
            if r["id"] == pk:
                r.update(changes)
                return r
        raise ServiceUnavailableError("gone")


def test_load_existing_rows_does_not_seed():
    source = FakeSource([{"id": 1, "article_id": "A1", "title": "One", "week": 1}])
    view = PlanningView(source)
    view.load()
    assert source.calls == ["list"]
    assert [r.article_id for r in view.all_records] == ["A1"]
    assert view.visible_records == view.all_records
    assert view.using_fallback is False


def test_empty_store_is_seeded_once_then_reloaded():
    source = FakeSource()
    view = PlanningView(source)
    view.load()
    assert source.calls == ["list", "bulk", "list"]
    assert len(view.all_records) == len(FALLBACK_ARTICLES)
    assert view.using_fallback is False

    source.rows.clear()
    view.load()
    assert source.calls.count("bulk") == 1


def test_reload_without_seed_never_writes():
    source = FakeSource()
    view = PlanningView(source)
    assert view.load(seed=False) == []
    assert "bulk" not in source.calls
    assert view.seed_attempts == 0
    assert view.using_fallback is False
    assert view.render().empty is True


def test_failed_seed_falls_back_to_builtin_plan():
    source = FakeSource(fail_bulk=True)
    view = PlanningView(source)
    view.load()
    assert view.seed_attempts == 1
    assert view.using_fallback is True
    assert len(view.all_records) == len(FALLBACK_ARTICLES)
    assert all(r.id is None for r in view.all_records)

    view.load()
    assert view.seed_attempts == 1
    assert view.using_fallback is True


def test_unreachable_source_falls_back_and_never_raises():
    view = PlanningView(FakeSource(fail_list=True))
    records = view.load()
    assert view.using_fallback is True
    assert len(records) == len(FALLBACK_ARTICLES)
    assert view.render().total == len(FALLBACK_ARTICLES)


def test_failed_reload_keeps_last_snapshot():
    source = FakeSource([{"id": 1, "article_id": "A1", "title": "One", "week": 1}])
    view = PlanningView(source)
    view.load()
    source.fail_list = True
    view.load()
    assert [r.article_id for r in view.all_records] == ["A1"]
    assert view.using_fallback is False


def test_unready_store_triggers_seed_exactly_once(unready_store):
    view = PlanningView(StoreSource(unready_store))
    view.load()
    assert view.seed_attempts == 1
    assert view.using_fallback is True
    view.refresh_stats()
    assert view.stats.total == len(FALLBACK_ARTICLES)


def test_stats_fall_back_to_local_counts():
    source = FakeSource([{"id": 1, "article_id": "A1", "title": "One", "priority": "High"}], fail_stats=True)
    view = PlanningView(source)
    view.load()
    stats = view.refresh_stats()
    assert stats.total == 1
    assert stats.high_priority == 1


def test_filters_and_modes():
    view = PlanningView(FakeSource(fail_list=True))
    view.load()

    view.set_filter(category="Industry Guides")
    assert {r.article_id for r in view.visible_records} == {"A05", "A10"}

    view.set_filter(search="CHURCH")
    assert [r.article_id for r in view.visible_records] == ["A05"]

    view.set_mode("category")
    vm = view.render()
    assert vm.mode is ViewMode.CATEGORY
    assert [g.label for g in vm.groups] == ["Industry Guides"]

    view.set_filter(category="Script Writing")
    assert view.render().empty is True

    view.clear_filters()
    assert len(view.visible_records) == len(FALLBACK_ARTICLES)
    assert "Industry Guides" in view.category_options()


def test_change_status_patches_then_reloads(store, make_article):
    created = store.upsert_article(make_article("C1", category="X"))
    store.upsert_article(make_article("C2", category="Y"))

    view = PlanningView(StoreSource(store))
    view.load()
    view.set_filter(category="X")
    assert view.change_status(created.id, "written") is True

    # Reloaded from the store with the filter re-applied
    assert [(r.article_id, r.status) for r in view.visible_records] == [("C1", "written")]
    assert view.stats.written == 1
    assert store.get_article(created.id).status == "written"


def test_change_status_failure_leaves_snapshot():
    source = FakeSource([{"id": 1, "article_id": "A1", "title": "One"}])
    view = PlanningView(source)
    view.load()
    assert view.change_status(99, "written") is False
    assert view.all_records[0].status == "planned"
    assert view.change_status(None, "written") is False


def test_http_source_against_app(client):
    with HttpSource(client=client) as source:
        view = PlanningView(source, mode="calendar")
        view.load()
        view.refresh_stats()

        assert view.using_fallback is False
        assert view.stats.total == len(FALLBACK_ARTICLES)
        vm = view.render()
        weeks = [g.key for g in vm.groups]
        assert weeks == sorted(weeks)

        target = view.all_records[0]
        assert view.change_status(target.id, "published") is True
        assert view.stats.published == 1


def test_http_source_raises_http_errors(unready_client):
    source = HttpSource(client=unready_client)
    assert source.list_articles() == []
    with pytest.raises(httpx.HTTPStatusError):
        source.patch_article(1, {"status": "written"})
