"""Tests for GET /api/slots."""


def test_single_day(client):
    response = client.get("/api/slots", params={"from": "2024-01-02", "to": "2024-01-02"})
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 16
    assert data[0] == {
        "slotId": "2024-01-02T09:00:00.000Z",
        "start": "2024-01-02T09:00:00.000Z",
        "end": "2024-01-02T09:30:00.000Z",
    }
    assert data[-1]["start"] == "2024-01-02T16:30:00.000Z"
    assert data[-1]["end"] == "2024-01-02T17:00:00.000Z"


def test_booked_slot_hidden(client, make_user, make_booking):
    make_booking(make_user(), "2024-01-02T10:00:00.000Z", "2024-01-02T10:30:00.000Z")

    data = client.get("/api/slots", params={"from": "2024-01-02", "to": "2024-01-02"}).json()
    assert len(data) == 15
    assert "2024-01-02T10:00:00.000Z" not in [s["slotId"] for s in data]


def test_missing_params(client):
    response = client.get("/api/slots", params={"from": "2024-01-02"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_unparseable_params(client):
    response = client.get("/api/slots", params={"from": "2024-01-02", "to": "soon"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_reversed_range(client):
    response = client.get("/api/slots", params={"from": "2024-01-05", "to": "2024-01-02"})
    assert response.status_code == 200
    assert response.json() == []


def test_range_too_wide(client):
    response = client.get("/api/slots", params={"from": "0001-01-01", "to": "9999-12-30"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_last_representable_day(client):
    response = client.get("/api/slots", params={"from": "9999-12-31", "to": "9999-12-31"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"
