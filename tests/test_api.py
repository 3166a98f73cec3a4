import pytest
from fastapi.testclient import TestClient

from famspend.api.deps import get_auth_session
from famspend.core.errors import BackendError
from famspend.main import app
from tests.conftest import FakeSession, context_row, member_row


@pytest.fixture
def session(alice):
    return FakeSession(
        alice,
        {
            "get_my_context": [context_row()],
            "get_family_members": [member_row("u1", "admin", "alice"), member_row("u2", "member", "bob")],
        },
    )


@pytest.fixture
def client(session):
    app.dependency_overrides[get_auth_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_family_page_signed_out():
    app.dependency_overrides[get_auth_session] = lambda: FakeSession(None)
    try:
        resp = TestClient(app).get("/family")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    assert resp.json()["status"] == "signed_out"


def test_family_page_marks_only_others_as_manageable(client):
    body = client.get("/family").json()

    assert body["status"] == "family"
    assert body["is_admin"] is True
    assert body["family"]["join_code"] == "ABC123"
    manage = {m["user_id"]: m["can_manage"] for m in body["members"]}
    assert manage == {"u1": False, "u2": True}


def test_family_page_without_family(client, session):
    session.responses["get_my_context"] = []
    body = client.get("/family").json()
    assert body["status"] == "no_family"
    assert body["current_user_id"] == "u1"


def test_member_sees_no_manageable_targets(client, session):
    session.responses["get_my_context"] = [context_row(role="member")]
    body = client.get("/family").json()
    assert body["is_admin"] is False
    assert not any(m["can_manage"] for m in body["members"])


def test_changing_own_role_is_refused_by_page(client, session):
    resp = client.put("/family/members/u1/role", json={"role": "member"})
    assert resp.status_code == 422
    assert "update_member_role" not in session.names()


def test_promote_other_member(client, session):
    resp = client.put("/family/members/u2/role", json={"role": "admin"})
    assert resp.status_code == 200
    assert ("update_member_role", {"target_user_id": "u2", "new_role": "admin"}) in session.calls
    assert resp.json()["notifications"] == [{"level": "success", "message": "Member role updated to admin"}]


def test_delete_requires_matching_confirmation(client, session):
    resp = client.request("DELETE", "/family", json={"confirmation": "smiths"})
    assert resp.status_code == 422
    assert "delete_family" not in session.names()

    session.responses["get_my_context"] = lambda args: (
        [context_row(family=False)] if "delete_family" in session.names() else [context_row()]
    )
    resp = client.request("DELETE", "/family", json={"confirmation": "Smiths"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "no_family"


def test_backend_rejection_maps_to_400(client, session):
    session.responses["kick_member"] = BackendError("Only admins can remove members")
    resp = client.delete("/family/members/u2")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Failed to remove member: Only admins can remove members"


def test_actions_require_sign_in():
    app.dependency_overrides[get_auth_session] = lambda: FakeSession(None)
    try:
        resp = TestClient(app).post("/family/join", json={"join_code": "ABC123"})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 401


def test_create_family_with_blank_name(client, session):
    session.responses["get_my_context"] = []
    resp = client.post("/family", json={"name": "  "})
    assert resp.status_code == 422
    assert "create_family" not in session.names()


def test_categories_page_and_create(client, session):
    rows = [{"id": "c1", "family_id": "f1", "name": "Groceries", "created_at": "2025-01-01T00:00:00Z"}]
    session.responses["get_categories_for_my_family"] = lambda args: list(rows)

    def create(args):
        row = {"id": "c2", "family_id": "f1", "name": args["category_name"], "created_at": "2025-01-02T00:00:00Z"}
        rows.append(row)
        return row

    session.responses["create_category_for_my_family"] = create

    assert [c["name"] for c in client.get("/categories").json()["categories"]] == ["Groceries"]
    body = client.post("/categories", json={"category_name": "Fuel"}).json()
    assert [c["name"] for c in body["categories"]] == ["Groceries", "Fuel"]
    assert body["notifications"] == [{"level": "success", "message": "Category created"}]


def test_categories_load_failure_is_rendered(client, session):
    session.responses["get_categories_for_my_family"] = BackendError("no family")
    body = client.get("/categories").json()
    assert body["categories"] == []
    assert body["error"] == "Failed to fetch categories: no family"
    assert body["notifications"] == [{"level": "error", "message": "Failed to load categories"}]


def test_expenses_page_formats_amounts(client, session):
    session.responses["get_expenses_dashboard_context"] = {
        "family": None,
        "personal_total": 1500,
        "family_total": 2500.5,
        "recent_family_expenses": [
            {"id": "e1", "expense_title": "Milk", "amount": 150, "username": "bob", "created_at": "2025-01-01T20:30:00Z"}
        ],
        "personal_expenses": [],
    }
    body = client.get("/expenses").json()
    assert body["family_total"] == "PKR 2,500.50"
    assert body["personal_total"] == "PKR 1,500.00"
    assert body["recent"][0] == {
        "id": "e1",
        "title": "Milk",
        "amount": "PKR 150.00",
        "username": "bob",
        "date": "01/02/25",
        "time": "01:30 AM",
    }
