"""
Agency endpoints end to end against the in-memory store.
"""

import pytest

from agency.repository import AGENCY

BASE = "/api/v1/agency"
PAYLOAD = {"owner_name": "A", "office_name": "B", "email": "a@b.com"}


@pytest.fixture
def as_admin(login_as, admin_user):
    login_as(admin_user)
    return admin_user


class TestCreateAgency:
    def test_create_generates_cuid_and_default_status(self, client, as_admin, memory_db):
        response = client.post(f"{BASE}/create", json=PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        agency = body["agency"]
        assert agency["cuid"]
        assert agency["status"] == "Active"
        assert agency["owner_name"] == "A"
        assert len(memory_db.rows("agency")) == 1

    def test_duplicate_cuid_is_conflict_and_original_unchanged(self, client, as_admin, memory_db):
        first = client.post(f"{BASE}/create", json=PAYLOAD).json()["agency"]

        response = client.post(f"{BASE}/create", json={**PAYLOAD, "owner_name": "Other", "cuid": first["cuid"]})

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Agency with this CUID already exists."}
        rows = memory_db.rows("agency")
        assert len(rows) == 1
        assert rows[0]["owner_name"] == "A"

    @pytest.mark.parametrize("missing", ["owner_name", "office_name", "email"])
    def test_missing_required_field_is_rejected(self, client, as_admin, memory_db, missing):
        payload = {k: v for k, v in PAYLOAD.items() if k != missing}

        response = client.post(f"{BASE}/create", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert missing in response.json()["message"]
        assert memory_db.rows("agency") == []

    def test_non_admin_cannot_create(self, client, login_as, regular_user, memory_db):
        login_as(regular_user)

        response = client.post(f"{BASE}/create", json=PAYLOAD)

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin only."
        assert memory_db.rows("agency") == []

    def test_anonymous_cannot_create(self, client):
        response = client.post(f"{BASE}/create", json=PAYLOAD)

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create_is_recorded_in_activity_log(self, client, as_admin, memory_db):
        client.post(f"{BASE}/create", json=PAYLOAD)

        (entry,) = memory_db.rows("recent_activity")
        assert entry["action"] == "create"
        assert entry["module"] == "agency"
        assert entry["user_id"] == as_admin["id"]


class TestReadAgency:
    def test_round_trip_create_then_get(self, client, as_admin):
        created = client.post(f"{BASE}/create", json={**PAYLOAD, "phone": "123"}).json()["agency"]

        fetched = client.get(f"{BASE}/{created['id']}").json()["agency"]

        for key, value in {**PAYLOAD, "phone": "123", "status": "Active"}.items():
            assert fetched[key] == value

    def test_public_lookup_by_cuid(self, client, memory_db):
        memory_db.seed(AGENCY, cuid="abc-123", **PAYLOAD)

        response = client.get(f"{BASE}/cuid/abc-123")

        assert response.status_code == 200
        assert response.json()["agency"]["cuid"] == "abc-123"

    def test_list_returns_rows_and_count(self, client, as_admin, memory_db):
        memory_db.seed(AGENCY, cuid="one", **PAYLOAD)
        memory_db.seed(AGENCY, cuid="two", **PAYLOAD)

        body = client.get(f"{BASE}/all").json()

        assert body["count"] == 2
        assert {a["cuid"] for a in body["agencies"]} == {"one", "two"}

    def test_list_pagination(self, client, as_admin, memory_db):
        for i in range(5):
            memory_db.seed(AGENCY, cuid=f"c{i}", **PAYLOAD)

        body = client.get(f"{BASE}/all", params={"limit": 2, "offset": 1}).json()

        assert body["count"] == 2

    def test_unknown_id_is_not_found(self, client, as_admin):
        response = client.get(f"{BASE}/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Agency not found with id: 999"}

    def test_non_numeric_id_is_validation_error(self, client, as_admin):
        response = client.get(f"{BASE}/not-a-number")

        assert response.status_code == 400


class TestUpdateAgency:
    def test_partial_update_keeps_other_fields(self, client, as_admin, memory_db):
        row = memory_db.seed(AGENCY, cuid="c1", phone="555", **PAYLOAD)

        response = client.put(f"{BASE}/{row['id']}", json={"office_name": "New Office"})

        assert response.status_code == 200
        stored = memory_db.rows("agency")[0]
        assert stored["office_name"] == "New Office"
        assert stored["phone"] == "555"
        assert response.json()["agency"]["office_name"] == "New Office"

    def test_empty_update_is_idempotent(self, client, as_admin, memory_db):
        row = memory_db.seed(AGENCY, cuid="c1", phone="555", **PAYLOAD)
        before = {c: row[c] for c in AGENCY.columns}

        client.put(f"{BASE}/{row['id']}", json={})

        after = {c: memory_db.rows("agency")[0][c] for c in AGENCY.columns}
        assert after == before

    def test_explicit_empty_value_is_not_coalesced(self, client, as_admin, memory_db):
        row = memory_db.seed(AGENCY, cuid="c1", phone="555", **PAYLOAD)

        client.put(f"{BASE}/{row['id']}", json={"phone": ""})

        assert memory_db.rows("agency")[0]["phone"] == ""

    def test_update_unknown_id_is_not_found_and_creates_nothing(self, client, as_admin, memory_db):
        response = client.put(f"{BASE}/42", json={"office_name": "X"})

        assert response.status_code == 404
        assert memory_db.rows("agency") == []

    def test_cuid_cannot_be_renamed_onto_another_agency(self, client, as_admin, memory_db):
        memory_db.seed(AGENCY, cuid="taken", **PAYLOAD)
        row = memory_db.seed(AGENCY, cuid="mine", **PAYLOAD)

        response = client.put(f"{BASE}/{row['id']}", json={"cuid": "taken"})

        assert response.status_code == 409


class TestDeleteAgency:
    def test_delete_removes_row(self, client, as_admin, memory_db):
        row = memory_db.seed(AGENCY, cuid="c1", **PAYLOAD)

        response = client.delete(f"{BASE}/{row['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Agency deleted successfully."
        assert client.get(f"{BASE}/{row['id']}").status_code == 404

    def test_delete_unknown_id_is_not_found(self, client, as_admin):
        assert client.delete(f"{BASE}/77").status_code == 404
