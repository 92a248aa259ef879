from dataclasses import replace

import pytest
from flask import Flask
from flask_cors import CORS

from placerelay.core.places import LocationNotFound
from placerelay.jobs import server
from placerelay.models import ContactInfo, Coordinates, EnrichedPlace, PlaceCandidate


@pytest.fixture
def client():
    return server.app.test_client()


def test_health_endpoint(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_scrap_validates_payload(monkeypatch, client):
    def fail(*args, **kwargs):
        raise AssertionError("no outbound call expected")

    monkeypatch.setattr(server.aggregator, "search_nearby", fail)

    assert client.post("/scrap", json={}).status_code == 400
    assert client.post("/scrap", json={"type": "cafe"}).status_code == 400
    assert client.post("/scrap", json={"type": "  ", "location": "Pune"}).status_code == 400
    assert client.post("/scrap", json={"type": "cafe", "location": "Pune", "limit": "bad"}).status_code == 400
    assert client.post("/scrap", json={"type": "cafe", "location": "Pune", "limit": 0}).status_code == 400


def test_scrap_returns_places(monkeypatch, client):
    seen = {}

    def fake_search_nearby(category, location, limit):
        seen.update(category=category, location=location, limit=limit)
        return [
            PlaceCandidate(
                name="Cafe",
                address="FC Road",
                rating=4.5,
                total_ratings=20,
                location=Coordinates(latitude=1.0, longitude=2.0),
                place_id="pid",
            )
        ]

    monkeypatch.setattr(server.aggregator, "search_nearby", fake_search_nearby)

    response = client.post("/scrap", json={"type": "cafe", "location": " Pune "})

    assert response.status_code == 200
    body = response.get_json()
    assert body["count"] == 1
    assert body["places"][0]["place_id"] == "pid"
    assert body["places"][0]["location"] == {"lat": 1.0, "lng": 2.0}
    assert seen == {"category": "cafe", "location": "Pune", "limit": 10}


def test_scrap_location_not_found(monkeypatch, client):
    def not_found(category, location, limit):
        raise LocationNotFound(location, {"status": "ZERO_RESULTS", "results": []})

    monkeypatch.setattr(server.aggregator, "search_nearby", not_found)

    response = client.post("/scrap", json={"type": "cafe", "location": "Atlantis"})

    assert response.status_code == 404
    assert response.get_json() == {
        "error": "Location not found",
        "details": {"status": "ZERO_RESULTS", "results": []},
    }


def test_scrap_upstream_failure_is_generic(monkeypatch, client):
    def boom(category, location, limit):
        raise RuntimeError("secret upstream detail")

    monkeypatch.setattr(server.aggregator, "search_nearby", boom)

    response = client.post("/scrap", json={"type": "cafe", "location": "Pune"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch nearby places"}


def test_scrap_contacts_returns_enriched_results(monkeypatch, client):
    def fake_search(category, location, limit):
        assert limit == 2
        return [
            EnrichedPlace(
                name="Cafe",
                address="FC Road",
                rating=None,
                total_ratings=0,
                location=None,
                place_id="pid",
                open_now=True,
                url="https://maps.google.com/?cid=1",
                contact=ContactInfo(phone="+91 1"),
            )
        ]

    monkeypatch.setattr(server.aggregator, "search_with_contacts", fake_search)

    response = client.post("/scrap/contacts", json={"type": "cafe", "location": "Pune", "limit": 2})

    assert response.status_code == 200
    body = response.get_json()
    assert body["count"] == 1
    result = body["results"][0]
    assert result["phone"] == "+91 1"
    assert result["website"] == "Not available"
    assert result["rating"] == "No rating"


def test_scrap_contacts_failure(monkeypatch, client):
    def boom(category, location, limit):
        raise RuntimeError("down")

    monkeypatch.setattr(server.aggregator, "search_with_contacts", boom)

    assert client.post("/scrap/contacts", json={"type": "cafe", "location": "Pune"}).status_code == 500
    assert client.post("/scrap/contacts", json={"location": "Pune"}).status_code == 400


def test_research_empty_results_returns_401(monkeypatch, client):
    def fail_chat(*args, **kwargs):
        raise AssertionError("chat completion must not be called")

    monkeypatch.setattr(server.narrator.openai_chat, "chat_completion", fail_chat)

    assert client.post("/research", json={"results": []}).status_code == 401
    assert client.post("/research", json={}).status_code == 401


def test_research_rejects_non_list(client):
    assert client.post("/research", json={"results": "cafe"}).status_code == 400


def test_research_returns_diagnostic_payload(monkeypatch, client, settings):
    monkeypatch.setattr(server.narrator, "get_settings", lambda: settings)
    monkeypatch.setattr(server.narrator.openai_chat, "chat_completion", lambda prompt, settings: "not json")

    response = client.post("/research", json={"results": [{"name": "Cafe"}]})

    assert response.status_code == 200
    assert response.get_json() == {
        "response": {"error": "Invalid JSON returned from model", "rawText": "not json"}
    }


def test_research_upstream_failure_is_generic(monkeypatch, client):
    def boom(results):
        raise RuntimeError("rate limited")

    monkeypatch.setattr(server.narrator, "research", boom)

    response = client.post("/research", json={"results": [{"name": "Cafe"}]})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to research places"}


def test_report_requires_body(monkeypatch, client):
    def fail(*args, **kwargs):
        raise AssertionError("generation must not be called")

    monkeypatch.setattr(server.narrator.gemini, "generate_text", fail)

    assert client.post("/report").status_code == 400
    assert client.post("/report", json={}).status_code == 400


def test_report_returns_markdown(monkeypatch, client, settings):
    monkeypatch.setattr(server.narrator, "get_settings", lambda: settings)
    monkeypatch.setattr(server.narrator.gemini, "generate_text", lambda prompt, settings: "# Report")

    response = client.post("/report", json={"results": [{"name": "Cafe"}]})

    assert response.status_code == 200
    assert response.get_json() == {"results": "# Report"}


def test_report_failure_embeds_error(monkeypatch, client):
    def boom(data):
        raise RuntimeError("quota exceeded")

    monkeypatch.setattr(server.narrator, "generate_report", boom)

    response = client.post("/report", json={"x": 1})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to generate report", "details": "quota exceeded"}


def test_listing_rejects_non_object_body(monkeypatch, client):
    def fail(*args, **kwargs):
        raise AssertionError("no outbound call expected")

    monkeypatch.setattr(server.aggregator, "search_nearby", fail)
    monkeypatch.setattr(server.aggregator, "search_with_contacts", fail)

    for path in ("/scrap", "/scrap/contacts"):
        response = client.post(path, json=["cafe", "Pune"])
        assert response.status_code == 400
        assert response.get_json() == {"error": "Missing required fields: type, location"}


def test_research_rejects_non_object_body(monkeypatch, client):
    def fail_chat(*args, **kwargs):
        raise AssertionError("chat completion must not be called")

    monkeypatch.setattr(server.narrator.openai_chat, "chat_completion", fail_chat)

    response = client.post("/research", json=[{"name": "Cafe"}])

    assert response.status_code == 400
    assert "error" in response.get_json()


def test_cors_options_follow_settings(settings):
    options = server.cors_options(replace(settings, frontend_origins=("https://app.example.com",)))
    assert options["origins"] == ["https://app.example.com"]
    assert options["supports_credentials"] is True
    assert "OPTIONS" in options["methods"]


def test_cors_allows_configured_frontend_origin(settings):
    app = Flask(__name__)
    CORS(app, **server.cors_options(replace(settings, frontend_origins=("https://app.example.com",))))
    app.add_url_rule("/healthz", view_func=server.healthcheck)
    client = app.test_client()

    allowed = client.get("/healthz", headers={"Origin": "https://app.example.com"})
    assert allowed.headers["Access-Control-Allow-Origin"] == "https://app.example.com"
    assert allowed.headers["Access-Control-Allow-Credentials"] == "true"

    denied = client.get("/healthz", headers={"Origin": "https://evil.example.com"})
    assert "Access-Control-Allow-Origin" not in denied.headers
