import json

import pytest

from festival.api_server import create_app
from festival.config import Settings


@pytest.fixture
def client(engine):
    app = create_app(engine=engine, settings=Settings(ranking_size=2))
    app.config["TESTING"] = True
    return app.test_client()


def _book(client, artist, popularity, start, end, genre="rock"):
    return client.post(
        "/api/performances",
        json={"artist": artist, "genre": genre, "popularity": popularity, "start": start, "end": end},
    )


def test_booking_and_conflict_status_codes(client):
    response = _book(client, "Beyond", 98, 14, 16)
    assert response.status_code == 201
    assert response.get_json() == {"status": "ok", "id": 1}

    clash = _book(client, "NewBand", 60, 15, 17)
    assert clash.status_code == 409
    assert clash.get_json() == {"status": "conflict", "conflictingId": 1}


def test_booking_validation_errors(client):
    missing = client.post("/api/performances", json={"artist": "Beyond"})
    assert missing.status_code == 400
    assert "Missing required fields" in missing.get_json()["error"]

    backwards = _book(client, "Beyond", 98, 16, 14)
    assert backwards.status_code == 400
    assert backwards.get_json()["status"] == "error"

    garbage = _book(client, "Beyond", "very", 14, 16)
    assert garbage.status_code == 400

    fractional = _book(client, "Beyond", 98, 14.9, 15.5)
    assert fractional.status_code == 400
    assert "start must be an integer" in fractional.get_json()["error"]
    assert client.get("/api/timeline").get_json()["count"] == 0

    assert _book(client, "Beyond", 98, "14", "16").status_code == 201


def test_genre_lookup(client):
    _book(client, "Beyond", 98, 14, 16)
    found = client.get("/api/artists/Beyond/genre")
    assert found.status_code == 200
    assert found.get_json()["genre"] == "rock"
    assert client.get("/api/artists/Nobody/genre").status_code == 404


def test_ranking_uses_default_size_and_query_parameter(client):
    for hour, (name, popularity) in enumerate([("C", 95), ("B", 100), ("D", 80)]):
        _book(client, name, popularity, hour, hour + 1)

    default = client.get("/api/ranking").get_json()
    assert [item["popularity"] for item in default["artists"]] == [100, 95]

    wide = client.get("/api/ranking?n=5").get_json()
    assert wide["count"] == 3
    assert wide["artists"][0] == {"name": "B", "genre": "rock", "popularity": 100}


def test_ranking_reports_recorded_popularity_after_rebooking(client):
    _book(client, "Beyond", 100, 10, 11)
    _book(client, "Jay", 90, 11, 12, genre="pop")
    _book(client, "Beyond", 50, 12, 13)

    artists = client.get("/api/ranking?n=3").get_json()["artists"]

    assert [(item["name"], item["popularity"]) for item in artists] == [
        ("Beyond", 100),
        ("Jay", 90),
        ("Beyond", 50),
    ]
    popularities = [item["popularity"] for item in artists]
    assert popularities == sorted(popularities, reverse=True)


def test_reminder_endpoints(client):
    _book(client, "RockStar", 90, 14, 16)
    created = client.post("/api/reminders", json={"fanId": "Fan_001", "artist": "RockStar", "hour": 13})
    assert created.status_code == 201

    unknown = client.post("/api/reminders", json={"fanId": "Fan_002", "artist": "Ghost", "hour": 13})
    assert unknown.status_code == 404

    early = client.post("/api/reminders/process", json={"hour": 12}).get_json()
    assert early["notifications"] == []
    due = client.post("/api/reminders/process", json={"hour": 13}).get_json()
    assert due["notifications"] == [{"fanId": "Fan_001", "artistName": "RockStar"}]


def test_swap_and_remove(client):
    _book(client, "A", 50, 1, 2)
    _book(client, "B", 50, 2, 3)
    _book(client, "C", 50, 3, 4)

    swapped = client.post("/api/performances/swap", json={"first": "A", "second": "C"})
    assert swapped.status_code == 200
    assert [item["artistName"] for item in swapped.get_json()["timeline"]] == ["C", "B", "A"]
    assert client.post("/api/performances/swap", json={"first": "A", "second": "Z"}).status_code == 404
    unhashable = client.post("/api/performances/swap", json={"first": ["A"], "second": {"name": "C"}})
    assert unhashable.status_code == 404
    assert unhashable.get_json()["status"] == "error"

    removed = client.delete("/api/performances/B")
    assert removed.status_code == 200
    assert client.delete("/api/performances/B").status_code == 404

    timeline = client.get("/api/timeline").get_json()
    assert timeline["count"] == 2
    assert [item["artistName"] for item in timeline["timeline"]] == ["C", "A"]


def test_state_matches_published_snapshot(client, broadcaster):
    _book(client, "Beyond", 98, 14, 16)
    response = client.get("/api/state")
    assert response.status_code == 200
    assert response.mimetype == "application/json"
    assert json.loads(response.get_data(as_text=True)) == json.loads(broadcaster.latest)


def test_health_check(client):
    payload = client.get("/api/health").get_json()
    assert payload["status"] == "healthy"
    assert payload["performances"] == 0
