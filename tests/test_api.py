"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from skyfreight.main import create_app


@pytest.fixture()
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ---- /shipments -----------------------------------------------------------


def test_list_shipments_with_filters(client):
    resp = client.get("/shipments", params={"status": "Pending", "q": "zara"})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["recipient"] == "Zara Store NY"
    assert body[0]["weightKg"] == 120


def test_get_shipment(client):
    assert client.get("/shipments/2").json()["tracking"] == "HM-2025-00002"
    resp = client.get("/shipments/99")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Shipment not found"


def test_create_shipment(client):
    resp = client.post("/shipments", json={"sender": "A", "recipient": "B", "weightKg": 10})
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 4
    assert body["tracking"] == "HM-2025-00004"
    assert body["status"] == "Pending"
    assert len(body["history"]) == 1


def test_create_shipment_without_body(client):
    resp = client.post("/shipments")
    assert resp.status_code == 201
    assert resp.json()["sender"] == "New Sender"


def test_create_shipment_duplicate_tracking(client):
    resp = client.post("/shipments", json={"tracking": "HM-2025-00001"})
    assert resp.status_code == 409


def test_update_backward_status_conflicts(client):
    resp = client.patch("/shipments/3", json={"status": "Pending"})
    assert resp.status_code == 409
    assert client.get("/shipments/3").json()["status"] == "Delivered"


def test_update_shipment(client):
    resp = client.patch("/shipments/1", json={"status": "In Transit", "weightKg": 5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "In Transit"
    assert body["weightKg"] == 5
    assert body["history"][-1]["text"] == "Status changed to In Transit"


def test_update_missing_shipment(client):
    assert client.patch("/shipments/99", json={"sender": "x"}).status_code == 404


def test_delete_shipment(client):
    assert client.delete("/shipments/2").status_code == 204
    assert client.get("/shipments/2").status_code == 404
    assert client.delete("/shipments/2").status_code == 404


# ---- /flights -------------------------------------------------------------


def test_list_and_get_flights(client):
    flights = client.get("/flights").json()
    assert [f["flightNumber"] for f in flights] == ["HM451", "HM412", "HM400"]
    assert client.get("/flights/HM412").json()["status"] == "Upcoming"
    assert client.get("/flights/XX1").status_code == 404


def test_flight_shipments(client):
    body = client.get("/flights/HM451/shipments").json()
    assert [s["id"] for s in body] == [1]
    assert client.get("/flights/XX1/shipments").status_code == 404


def test_create_flight(client):
    resp = client.post("/flights", json={"flightNumber": "HM999"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == "HM999"
    assert body["origin"] == "LHR"
    assert body["destination"] == "CDG"
    assert client.post("/flights", json={"flightNumber": "HM999"}).status_code == 409


def test_create_flight_with_unknown_shipment(client):
    resp = client.post("/flights", json={"flightNumber": "HM998", "assigned": [1, 42]})
    assert resp.status_code == 422
    assert "42" in resp.json()["detail"]
    assert client.get("/flights/HM998").status_code == 404


# ---- /tracking ------------------------------------------------------------


def test_tracking_lookup_starts_simulation(client):
    resp = client.post("/tracking/hm-2025-00001")
    assert resp.status_code == 200
    assert resp.json()["tracking"] == "HM-2025-00001"
    simulator = client.app.state.simulator
    assert simulator.is_running("HM-2025-00001")

    resp = client.delete("/tracking/HM-2025-00001")
    assert resp.json() == {"stopped": True}
    assert not simulator.is_running("HM-2025-00001")


def test_tracking_unknown_code(client):
    resp = client.post("/tracking/HM-0000-00000")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Tracking code not found"


# ---- /dashboard -----------------------------------------------------------


def test_dashboard_stats(client):
    assert client.get("/dashboard/stats").json() == {
        "total_shipments": 3,
        "active_flights": 1,
        "pending_shipments": 1,
        "delivered_shipments": 1,
    }


def test_dashboard_daily(client):
    body = client.get("/dashboard/daily", params={"days": 3}).json()
    assert [d["day"] for d in body] == ["2025-08-10", "2025-08-11", "2025-08-12"]
    assert client.get("/dashboard/daily", params={"days": 0}).status_code == 422


def test_dashboard_activity_feed(client):
    client.post("/shipments")
    client.delete("/shipments/1")
    feed = client.get("/dashboard/activity").json()
    assert [e["text"] for e in feed] == [
        "Shipment HM-2025-00001 deleted",
        "Shipment HM-2025-00004 created",
    ]
    assert client.delete("/dashboard/activity").status_code == 204
    assert client.get("/dashboard/activity").json() == []


# ---- /admin ---------------------------------------------------------------


def test_admin_accessors(client):
    assert len(client.get("/admin/shipments").json()) == 3
    assert len(client.get("/admin/flights").json()) == 3

    record = {
        "id": 20,
        "sender": "S",
        "recipient": "R",
        "tracking": "HM-2025-00020",
        "status": "In Transit",
        "weightKg": 7,
        "history": [],
    }
    resp = client.post("/admin/shipments", json=record)
    assert resp.status_code == 201
    assert resp.json()["status"] == "In Transit"
    assert client.post("/admin/shipments", json=record).status_code == 409

    assert client.delete("/admin/shipments/20").json() == {"deleted": True}
    assert client.delete("/admin/shipments/20").json() == {"deleted": False}


def test_admin_reload(client):
    assert client.post("/admin/reload").json() == {"outcome": "empty"}
    client.post("/shipments")
    assert client.post("/admin/reload").json() == {"outcome": "loaded"}
