# backend/tests/api/test_relay_endpoints.py
"""
Relay endpoint tests: /api/ai/*, /api/search, /api/outlets, /api/generate.
"""
import json

import httpx

from fakes import FakeProvider, anthropic_reply, google_reply, openai_reply, override_services, serper_reply


def test_anthropic_relay_returns_text(test_client):
    fake = FakeProvider(anthropic_reply("hi"))
    override_services(fake)

    response = test_client.post("/api/ai/anthropic", json={
        "apiKey": "sk-ant", "system": "sys", "prompt": "hello", "useSearch": True,
    })

    assert response.status_code == 200
    assert response.json() == {"text": "hi"}
    body = fake.body()
    assert body["system"] == "sys"
    assert body["tools"][0]["type"] == "web_search_20250305"


def test_relay_missing_fields_is_400_without_provider_call(test_client):
    fake = FakeProvider(openai_reply("never"))
    override_services(fake)

    for path, payload in [
        ("/api/ai/openai", {"prompt": "hi"}),
        ("/api/ai/anthropic", {"apiKey": "k"}),
        ("/api/ai/google", {"apiKey": "", "prompt": "hi"}),
    ]:
        response = test_client.post(path, json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing apiKey or prompt"}

    response = test_client.post("/api/search", json={"apiKey": "k"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing apiKey or query"}
    assert fake.requests == []


def test_relay_forwards_provider_status_and_body(test_client):
    override_services(FakeProvider(httpx.Response(429, text="rate limited")))

    response = test_client.post("/api/ai/google", json={"apiKey": "k", "prompt": "hi"})

    assert response.status_code == 429
    assert response.json() == {"error": "rate limited"}


def test_relay_transport_failure_is_502(test_client):
    def refuse(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    override_services(FakeProvider(refuse))
    response = test_client.post("/api/ai/openai", json={"apiKey": "k", "prompt": "hi"})

    assert response.status_code == 502
    assert "openai" in response.json()["error"]


def test_google_relay_passes_prompt_through(test_client):
    fake = FakeProvider(google_reply("ok"))
    override_services(fake)

    test_client.post("/api/ai/google", json={"apiKey": "k", "prompt": "sys\n\nuser"})

    assert fake.body()["contents"][0]["parts"][0]["text"] == "sys\n\nuser"


def test_search_relay_passes_results_through(test_client):
    override_services(FakeProvider(serper_reply([{"title": "T"}])))

    response = test_client.post("/api/search", json={"apiKey": "k", "query": "wired editors"})

    assert response.status_code == 200
    assert response.json() == {"results": {"organic": [{"title": "T"}]}}


def test_outlets_relay_returns_drafts_with_ids(test_client, sample_profile):
    reply = json.dumps([{"name": "Wired", "type": "publication"}, {"name": "TechCrunch"}])
    fake = FakeProvider(anthropic_reply(reply))
    override_services(fake)

    response = test_client.post("/api/outlets", json={
        "aiConfig": {"provider": "anthropic", "apiKey": "k"},
        "projectProfile": sample_profile.to_json_dict(),
        "existingOutlets": [{"name": "TechCrunch", "id": "o1"}],
        "targetNiches": ["AI"],
    })

    assert response.status_code == 200
    outlets = response.json()["outlets"]
    assert [o["name"] for o in outlets] == ["Wired"]
    assert outlets[0]["id"]
    assert outlets[0]["isDiscovered"] is True
    assert outlets[0]["isUserPicked"] is False


def test_outlets_relay_missing_config_is_400(test_client, sample_profile):
    response = test_client.post("/api/outlets", json={"projectProfile": sample_profile.to_json_dict()})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_generate_relay_returns_drafts_without_storing(test_client, memory_store, sample_profile, sample_contact, sample_outlet):
    override_services(FakeProvider(openai_reply('{"subject": "S", "body": "B"}')))

    response = test_client.post("/api/generate", json={
        "aiConfig": {"provider": "openai", "apiKey": "k"},
        "projectProfile": sample_profile.to_json_dict(),
        "campaignId": "camp-9",
        "contacts": [sample_contact.to_json_dict()],
        "outlets": [sample_outlet.to_json_dict()],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["errors"] == []
    assert sorted(e["type"] for e in data["emails"]) == ["individual", "publication"]
    assert all(e["campaignId"] == "camp-9" for e in data["emails"])
    assert all(e["status"] == "pending_approval" for e in data["emails"])
    assert memory_store.list_emails() == []
