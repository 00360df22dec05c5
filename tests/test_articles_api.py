from sqlalchemy.exc import DataError, IntegrityError

from content_planner.view.fallback import fallback_articles


ARTICLE = {
    "article_id": "A01",
    "title": "How to Connect a Teleprompter to Your DSLR Rig",
    "keyword": "teleprompter dslr setup",
    "intent": "Informational",
    "funnel": "TOFU",
    "description": "Mounting and cabling",
    "priority": "High",
    "word_count": 1800,
    "category": "Hardware Integrations",
    "week": 1,
}


def test_health_reports_db_ready(client, unready_client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "dbReady": True, "store": "ready"}

    r = unready_client.get("/health")
    assert r.status_code == 200
    assert r.json()["dbReady"] is False
    assert r.json()["store"] == "unavailable"


def test_articles_crud(client):
    # List (empty)
    r = client.get("/api/articles")
    assert r.status_code == 200
    assert r.json() == []

    # Create
    r = client.post("/api/articles", json=ARTICLE)
    assert r.status_code == 200
    created = r.json()
    assert created["article_id"] == "A01"
    assert created["status"] == "planned"
    pk = created["id"]

    # Get
    r = client.get(f"/api/articles/{pk}")
    assert r.status_code == 200
    assert r.json()["title"] == ARTICLE["title"]

    # Patch
    r = client.patch(f"/api/articles/{pk}", json={"status": "in_progress", "notes": "outline done"})
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"
    assert r.json()["notes"] == "outline done"
    assert r.json()["week"] == 1

    # Delete
    r = client.delete(f"/api/articles/{pk}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    # Confirm deletion
    r = client.get(f"/api/articles/{pk}")
    assert r.status_code == 404
    assert r.json() == {"error": "Article not found"}


def test_post_same_article_id_upserts(client):
    first = client.post("/api/articles", json={**ARTICLE, "status": "written", "notes": "n1"}).json()
    second = client.post("/api/articles", json={**ARTICLE, "title": "Retitled"})
    assert second.status_code == 200
    body = second.json()
    assert body["id"] == first["id"]
    assert body["title"] == "Retitled"
    assert body["status"] == "written"
    assert body["notes"] == "n1"
    assert len(client.get("/api/articles").json()) == 1


def test_post_requires_article_id_and_title(client):
    r = client.post("/api/articles", json={"title": "No key"})
    assert r.status_code == 422
    r = client.post("/api/articles", json={"article_id": "X1"})
    assert r.status_code == 422
    r = client.post("/api/articles", json={"article_id": "X1", "title": "T", "word_count": -5})
    assert r.status_code == 422
    assert client.get("/api/articles").json() == []


def test_not_found_paths(client):
    assert client.get("/api/articles/999").status_code == 404
    assert client.patch("/api/articles/999", json={"status": "written"}).status_code == 404


def test_delete_missing_is_success(client):
    client.post("/api/articles", json=ARTICLE)
    r = client.delete("/api/articles/999")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert len(client.get("/api/articles").json()) == 1


def test_bulk_accepts_seed_spelling(client):
    seed = fallback_articles()
    r = client.post("/api/articles/bulk", json={"articles": seed})
    assert r.status_code == 200
    assert r.json() == {"success": True, "count": len(seed)}

    rows = client.get("/api/articles").json()
    assert len(rows) == len(seed)
    assert [(a["week"], a["article_id"]) for a in rows] == sorted(
        (a["week"], a["id"]) for a in seed
    )
    first = next(a for a in rows if a["article_id"] == seed[0]["id"])
    assert first["word_count"] == seed[0]["wordCount"]
    assert first["status"] == "planned"


def test_bulk_with_malformed_record_changes_nothing(client):
    good = [{**ARTICLE, "article_id": f"G{i}"} for i in range(9)]
    bad = {"article_id": "BAD"}  # missing title
    r = client.post("/api/articles/bulk", json={"articles": good[:4] + [bad] + good[4:]})
    assert r.status_code == 422
    assert client.get("/api/articles").json() == []


def test_stats(client):
    client.post("/api/articles", json=ARTICLE)
    client.post("/api/articles", json={**ARTICLE, "article_id": "A02", "priority": "Low"})
    r = client.get("/api/stats")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert body["high_priority"] == 1
    assert body["medium_priority"] == 0
    assert body["low_priority"] == 1
    assert body["planned"] == 2


def test_unready_store_http_contract(unready_client):
    r = unready_client.get("/api/articles")
    assert r.status_code == 200
    assert r.json() == []

    r = unready_client.get("/api/stats")
    assert r.status_code == 200
    assert r.json()["total"] == 0
    assert r.json()["high_priority"] == 0

    r = unready_client.post("/api/articles", json=ARTICLE)
    assert r.status_code == 503
    assert r.json() == {"error": "Database not available"}

    assert unready_client.get("/api/articles/1").status_code == 503
    assert unready_client.patch("/api/articles/1", json={"status": "written"}).status_code == 503
    assert unready_client.delete("/api/articles/1").status_code == 503
    r = unready_client.post("/api/articles/bulk", json={"articles": [ARTICLE]})
    assert r.status_code == 503


def test_engine_errors_map_to_error_responses(client, store, monkeypatch):
    def rejected(session, payload):
        raise DataError("INSERT INTO article_plans", {}, Exception("value too long for type character varying(10)"))

    monkeypatch.setattr(store, "_upsert_in", rejected)
    r = client.post("/api/articles", json=ARTICLE)
    assert r.status_code == 422
    assert "value too long" in r.json()["error"]

    def conflicting(session, payload):
        raise IntegrityError("INSERT INTO article_plans", {}, Exception("duplicate key"))

    monkeypatch.setattr(store, "_upsert_in", conflicting)
    r = client.post("/api/articles/bulk", json={"articles": [ARTICLE]})
    assert r.status_code == 500
    assert r.json() == {"error": "duplicate key"}
