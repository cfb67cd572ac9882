"""
API tests for event endpoints
"""
from datetime import timedelta
from uuid import uuid4

from app.utils.datetime_utils import utc_now


def _event_payload(user_id, title, start_in_days=1, community_id=None, **extra):
    start = utc_now() + timedelta(days=start_in_days)
    payload = {
        "title": title,
        "user_id": user_id,
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(hours=2)).isoformat(),
        "location": "Central park",
    }
    if community_id is not None:
        payload["community_id"] = community_id
    payload.update(extra)
    return payload


def test_create_event(client, community, user_id):
    response = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "Night ride", community_id=community["id"]),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["title"] == "Night ride"
    assert data["community_id"] == community["id"]
    assert data["location"] == "Central park"


def test_create_event_without_community(client, user_id):
    response = client.post("/api/v1/events", json=_event_payload(user_id, "Open meetup"))

    assert response.status_code == 201
    assert response.json()["data"]["community_id"] is None


def test_create_event_end_before_start(client, user_id):
    start = utc_now() + timedelta(days=1)
    response = client.post(
        "/api/v1/events",
        json={
            "title": "Backwards",
            "user_id": user_id,
            "start_time": start.isoformat(),
            "end_time": (start - timedelta(hours=1)).isoformat(),
        },
    )
    assert response.status_code == 400


def test_create_event_missing_community(client, user_id):
    response = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "Ghost ride", community_id=str(uuid4())),
    )
    assert response.status_code == 404


def test_event_title_unique_per_community(client, community, user_id):
    client.post("/api/v1/events", json=_event_payload(user_id, "Repair cafe", community_id=community["id"]))

    duplicate = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "REPAIR CAFE", community_id=community["id"]),
    )
    assert duplicate.status_code == 409

    elsewhere = client.post("/api/v1/events", json=_event_payload(user_id, "Repair cafe"))
    assert elsewhere.status_code == 201


def test_list_events_ordered_by_start_time(client, user_id):
    client.post("/api/v1/events", json=_event_payload(user_id, "Later", start_in_days=5))
    client.post("/api/v1/events", json=_event_payload(user_id, "Sooner", start_in_days=2))

    response = client.get("/api/v1/events")

    assert response.status_code == 200
    assert [e["title"] for e in response.json()["data"]] == ["Sooner", "Later"]


def test_list_events_filters(client, community, user_id):
    client.post("/api/v1/events", json=_event_payload(user_id, "Past swap", start_in_days=-3))
    client.post("/api/v1/events", json=_event_payload(user_id, "Future swap", start_in_days=3))
    client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "Club ride", start_in_days=4, community_id=community["id"]),
    )

    upcoming = client.get("/api/v1/events", params={"upcoming": True}).json()["data"]
    assert [e["title"] for e in upcoming] == ["Future swap", "Club ride"]

    by_community = client.get("/api/v1/events", params={"community_id": community["id"]}).json()["data"]
    assert [e["title"] for e in by_community] == ["Club ride"]

    searched = client.get("/api/v1/events", params={"search": "swap"}).json()["data"]
    assert [e["title"] for e in searched] == ["Past swap", "Future swap"]


def test_get_event_not_found(client):
    response = client.get(f"/api/v1/events/{uuid4()}")
    assert response.status_code == 404


def test_update_event_partial(client, user_id):
    event = client.post("/api/v1/events", json=_event_payload(user_id, "Picnic")).json()["data"]

    response = client.put(
        f"/api/v1/events/{event['id']}",
        json={"location": "Riverside", "description": "Bring a blanket"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Picnic"
    assert data["location"] == "Riverside"
    assert data["description"] == "Bring a blanket"


def test_update_event_rejects_end_before_stored_start(client, user_id):
    event = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "Workshop", start_in_days=10),
    ).json()["data"]

    response = client.put(
        f"/api/v1/events/{event['id']}",
        json={"end_time": (utc_now() + timedelta(days=1)).isoformat()},
    )
    assert response.status_code == 400


def test_update_event_title_conflict(client, user_id):
    client.post("/api/v1/events", json=_event_payload(user_id, "Quiz night"))
    other = client.post("/api/v1/events", json=_event_payload(user_id, "Movie night")).json()["data"]

    response = client.put(f"/api/v1/events/{other['id']}", json={"title": "quiz night"})
    assert response.status_code == 409


def test_delete_event(client, user_id):
    event = client.post("/api/v1/events", json=_event_payload(user_id, "Cleanup")).json()["data"]

    response = client.delete(f"/api/v1/events/{event['id']}")

    assert response.status_code == 200
    assert client.get(f"/api/v1/events/{event['id']}").status_code == 404
    assert client.delete(f"/api/v1/events/{event['id']}").status_code == 404


def test_update_event_clears_optional_fields(client, user_id):
    event = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "Repair cafe", description="Bring tools"),
    ).json()["data"]

    response = client.put(
        f"/api/v1/events/{event['id']}",
        json={"description": "  ", "location": "", "end_time": None},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Repair cafe"
    assert data["description"] is None
    assert data["location"] is None
    assert data["end_time"] is None


def test_event_title_conflict_non_ascii_case(client, community, user_id):
    client.post("/api/v1/events", json=_event_payload(user_id, "Émile's ride", community_id=community["id"]))

    response = client.post(
        "/api/v1/events",
        json=_event_payload(user_id, "ÉMILE'S RIDE", community_id=community["id"]),
    )
    assert response.status_code == 409


def test_event_times_returned_as_utc(client, user_id):
    event = client.post("/api/v1/events", json=_event_payload(user_id, "Sunrise ride")).json()["data"]

    data = client.get(f"/api/v1/events/{event['id']}").json()["data"]

    for value in (data["start_time"], data["end_time"], data["created_at"]):
        assert value.endswith("Z") or value.endswith("+00:00")
