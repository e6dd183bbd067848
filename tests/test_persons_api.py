import asyncpg
import pytest

BASE = "/api/v1"


def test_create_person_returns_generated_fields(client):
    resp = client.post(f"{BASE}/persons", json={"name": "John Doe", "email": "john@example.com"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 1
    assert body["name"] == "John Doe"
    assert body["email"] == "john@example.com"
    assert body["picture"] == ""
    assert body["team_id"] is None
    assert "team" not in body
    assert body["created_at"]
    assert body["updated_at"]


def test_created_ids_are_unique(make_person):
    ids = {make_person(email=f"p{i}@example.com")["id"] for i in range(5)}
    assert len(ids) == 5
    assert 0 not in ids


def test_duplicate_email_is_rejected(client, make_person):
    make_person(email="dup@example.com")

    resp = client.post(f"{BASE}/persons", json={"name": "Other", "email": "dup@example.com"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Email is already in use"}


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@example.com"},
        {"name": "", "email": "a@example.com"},
        {"name": "No Email"},
        {"name": "Bad Email", "email": "not-an-email"},
    ],
)
def test_create_person_validation(client, payload):
    resp = client.post(f"{BASE}/persons", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]


def test_malformed_json_body_is_400(client):
    resp = client.post(
        f"{BASE}/persons",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_get_person(client, make_person):
    person = make_person(picture="https://img.example.com/j.png")

    resp = client.get(f"{BASE}/persons/{person['id']}")

    assert resp.status_code == 200
    assert resp.json()["picture"] == "https://img.example.com/j.png"


def test_get_missing_person_is_404(client):
    resp = client.get(f"{BASE}/persons/42")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Person not found"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/persons/abc"),
        ("PUT", "/persons/abc"),
        ("DELETE", "/persons/abc"),
        ("POST", "/persons/abc/remove-from-team"),
    ],
)
def test_non_numeric_person_id_is_400(client, method, path):
    resp = client.request(method, BASE + path, json={"name": "x", "email": "x@example.com"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid person ID"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/persons/99999999999999999999"),
        ("PUT", "/persons/99999999999999999999"),
        ("DELETE", "/persons/99999999999999999999"),
        ("POST", "/persons/99999999999999999999/remove-from-team"),
        ("GET", "/persons/-99999999999999999999"),
    ],
)
def test_person_id_beyond_bigint_is_400(client, store, method, path):
    async def no_store_call(*args, **kwargs):
        raise AssertionError("out-of-range id reached the store")

    store.persons.get = no_store_call
    store.persons.delete = no_store_call

    resp = client.request(method, BASE + path, json={"name": "x", "email": "x@example.com"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid person ID"}


def test_list_persons_expands_team(client, make_person, make_team):
    alice = make_person(name="Alice", email="alice@example.com")
    make_person(name="Bob", email="bob@example.com")
    team = make_team(name="Core")
    client.post(f"{BASE}/assign", json={"person_id": alice["id"], "team_id": team["id"]})

    resp = client.get(f"{BASE}/persons")

    assert resp.status_code == 200
    by_name = {p["name"]: p for p in resp.json()}
    assert by_name["Alice"]["team"]["name"] == "Core"
    assert "members" not in by_name["Alice"]["team"]
    assert "team" not in by_name["Bob"]
    assert by_name["Bob"]["team_id"] is None


def test_update_person_overwrites_all_fields(client, make_person):
    person = make_person(picture="old.png")

    resp = client.put(
        f"{BASE}/persons/{person['id']}",
        json={"name": "Jane Doe", "email": "jane@example.com"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Jane Doe"
    assert body["email"] == "jane@example.com"
    assert body["picture"] == ""


def test_update_missing_person_is_404(client):
    resp = client.put(f"{BASE}/persons/9", json={"name": "X", "email": "x@example.com"})
    assert resp.status_code == 404


def test_update_person_to_taken_email_is_400(client, make_person):
    make_person(email="taken@example.com")
    other = make_person(email="other@example.com")

    resp = client.put(
        f"{BASE}/persons/{other['id']}",
        json={"name": "Other", "email": "taken@example.com"},
    )

    assert resp.status_code == 400


def test_delete_person_does_not_check_existence(client, make_person):
    person = make_person()

    first = client.delete(f"{BASE}/persons/{person['id']}")
    second = client.delete(f"{BASE}/persons/{person['id']}")

    assert first.status_code == 200
    assert first.json() == {"message": "Person deleted successfully"}
    assert second.status_code == 200
    assert client.get(f"{BASE}/persons/{person['id']}").status_code == 404


def test_delete_person_store_failure_is_500(client, store):
    async def broken_delete(person_id):
        raise asyncpg.PostgresError("connection lost")

    store.persons.delete = broken_delete

    resp = client.delete(f"{BASE}/persons/1")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to delete person"}


def test_assign_to_team(client, make_person, make_team):
    person = make_person()
    team = make_team()

    resp = client.post(f"{BASE}/assign", json={"person_id": person["id"], "team_id": team["id"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["team_id"] == team["id"]
    assert body["team"]["name"] == "Dev Team"


def test_assign_is_idempotent(client, make_person, make_team):
    person = make_person()
    team = make_team()
    payload = {"person_id": person["id"], "team_id": team["id"]}

    first = client.post(f"{BASE}/assign", json=payload).json()
    second = client.post(f"{BASE}/assign", json=payload).json()

    assert first["team_id"] == second["team_id"] == team["id"]
    assert client.get(f"{BASE}/persons/{person['id']}").json()["team_id"] == team["id"]
    members = client.get(f"{BASE}/teams/{team['id']}").json()["members"]
    assert [m["id"] for m in members] == [person["id"]]


def test_assign_unknown_person_or_team_is_404(client, make_person, make_team):
    person = make_person()
    team = make_team()

    missing_person = client.post(f"{BASE}/assign", json={"person_id": 99, "team_id": team["id"]})
    missing_team = client.post(f"{BASE}/assign", json={"person_id": person["id"], "team_id": 99})

    assert missing_person.status_code == 404
    assert missing_person.json() == {"error": "Person not found"}
    assert missing_team.status_code == 404
    assert missing_team.json() == {"error": "Team not found"}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"person_id": 1},
        {"person_id": "x", "team_id": 1},
        {"person_id": 0, "team_id": 1},
        {"person_id": 99999999999999999999, "team_id": 1},
        {"person_id": 1, "team_id": 99999999999999999999},
    ],
)
def test_assign_validation(client, payload):
    resp = client.post(f"{BASE}/assign", json=payload)
    assert resp.status_code == 400


def test_assign_refetch_failure_is_500_after_save(client, store, make_person, make_team):
    person = make_person()
    team = make_team()
    real_get = store.persons.get
    calls = {"n": 0}

    async def flaky_get(person_id):
        calls["n"] += 1
        if calls["n"] > 1:
            raise asyncpg.PostgresError("read failed")
        return await real_get(person_id)

    store.persons.get = flaky_get

    resp = client.post(f"{BASE}/assign", json={"person_id": person["id"], "team_id": team["id"]})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch updated person"}
    # The save went through even though the response reports a failure.
    assert store.persons.table.rows[person["id"]]["team_id"] == team["id"]


def test_remove_from_team(client, make_person, make_team):
    person = make_person()
    team = make_team()
    client.post(f"{BASE}/assign", json={"person_id": person["id"], "team_id": team["id"]})

    resp = client.post(f"{BASE}/persons/{person['id']}/remove-from-team")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Person removed from team successfully"
    assert body["person"]["team_id"] is None
    assert "team" not in body["person"]


def test_remove_missing_person_from_team_is_404(client):
    resp = client.post(f"{BASE}/persons/5/remove-from-team")
    assert resp.status_code == 404


def test_null_picture_is_stored_as_empty(client):
    resp = client.post(
        f"{BASE}/persons",
        json={"name": "Nil", "email": "nil@example.com", "picture": None},
    )

    assert resp.status_code == 201
    assert resp.json()["picture"] == ""


def test_email_is_stored_as_given(client):
    first = client.post(f"{BASE}/persons", json={"name": "Ann", "email": "Ann@EXAMPLE.com"})
    second = client.post(f"{BASE}/persons", json={"name": "Ann", "email": "Ann@example.com"})

    assert first.status_code == 201
    assert first.json()["email"] == "Ann@EXAMPLE.com"
    assert second.status_code == 201
    assert second.json()["email"] == "Ann@example.com"


def test_display_name_email_form_is_rejected(client):
    resp = client.post(f"{BASE}/persons", json={"name": "Ann", "email": "Ann <ann@example.com>"})
    assert resp.status_code == 400
