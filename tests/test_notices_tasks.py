"""
Notices and tasks: finders, slugs and the title-or-heading rule.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from notices import repository as notices_repository
from notices.repository import NOTICES
from tasks.repository import TASKS


@pytest.fixture
def as_admin(login_as, admin_user):
    login_as(admin_user)


class TestNotices:
    def test_create_defaults_date_to_today(self, client, as_admin, memory_db):
        response = client.post("/api/v1/notices/create", json={"title": "Office closed", "slug": "office-closed"})

        assert response.status_code == 201
        assert response.json()["data"]["date"] == date.today().isoformat()

    def test_duplicate_slug_is_conflict(self, client, as_admin, memory_db):
        memory_db.seed(NOTICES, title="A", slug="office-closed")

        response = client.post("/api/v1/notices/create", json={"title": "B", "slug": "office-closed"})

        assert response.status_code == 409
        assert len(memory_db.rows("notices")) == 1

    def test_bad_slug_is_rejected(self, client, as_admin, memory_db):
        response = client.post("/api/v1/notices/create", json={"title": "B", "slug": "Not A Slug"})

        assert response.status_code == 400
        assert memory_db.rows("notices") == []

    def test_reversed_date_range_is_rejected(self, client):
        response = client.get(
            "/api/v1/notices/date-range",
            params={"start_date": "2024-05-10", "end_date": "2024-05-01"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "start_date must be on or before end_date."

    def test_date_range_passes_parsed_dates(self, client, monkeypatch):
        between = AsyncMock(return_value=[])
        monkeypatch.setattr(notices_repository, "notices_between", between)

        response = client.get(
            "/api/v1/notices/date-range",
            params={"start_date": "2024-05-01", "end_date": "2024-05-01"},
        )

        assert response.json() == {"success": True, "count": 0, "data": []}
        between.assert_awaited_once_with(date(2024, 5, 1), date(2024, 5, 1))

    def test_search_is_public(self, client, monkeypatch):
        search = AsyncMock(return_value=[{"id": 1, "title": "Pool closed"}])
        monkeypatch.setattr(notices_repository, "search_notices", search)

        response = client.get("/api/v1/notices/search", params={"q": " pool "})

        assert response.json()["count"] == 1
        search.assert_awaited_once_with("pool", limit=None, offset=0)

    def test_lookup_by_slug(self, client, memory_db):
        memory_db.seed(NOTICES, title="A", slug="gate-code")

        response = client.get("/api/v1/notices/slug/gate-code")

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "A"

    def test_assignee_filter(self, client, memory_db):
        memory_db.seed(NOTICES, title="A", slug="a", assign="maria")
        memory_db.seed(NOTICES, title="B", slug="b", assign="omar")

        body = client.get("/api/v1/notices/assignee/maria").json()

        assert [n["slug"] for n in body["data"]] == ["a"]


class TestTasks:
    def test_title_or_heading_is_required(self, client, as_admin, memory_db):
        response = client.post("/api/v1/tasks/create", json={"assign": "maria"})

        assert response.status_code == 400
        assert "title or heading is required" in response.json()["message"]
        assert memory_db.rows("tasks") == []

    def test_heading_alone_is_enough(self, client, as_admin, memory_db):
        response = client.post("/api/v1/tasks/create", json={"heading": "Call the landlord"})

        assert response.status_code == 201

    def test_commission_accepts_form_key(self, client, as_admin, memory_db):
        client.post("/api/v1/tasks/create", json={"title": "Deal", "Commission": "2%"})

        assert memory_db.rows("tasks")[0]["commission"] == "2%"

    def test_update_cannot_clear_both_title_and_heading(self, client, as_admin, memory_db):
        task = memory_db.seed(TASKS, title="Deal")

        response = client.put(f"/api/v1/tasks/{task['id']}", json={"title": None})

        assert response.status_code == 400
        assert memory_db.rows("tasks")[0]["title"] == "Deal"

    def test_update_missing_task_is_not_found(self, client, as_admin, memory_db):
        assert client.put("/api/v1/tasks/5", json={"title": "x"}).status_code == 404
