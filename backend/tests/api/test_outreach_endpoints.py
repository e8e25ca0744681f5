# backend/tests/api/test_outreach_endpoints.py
"""
Store API tests (/api/v1): setup, outlets, contacts, campaigns, outbox.
"""
import json

from fakes import FakeProvider, anthropic_reply, google_reply, override_services
from prnow.modules.outreach.models import EmailDraft, OutreachType

API = "/api/v1"


def save_setup(client, sample_profile, provider="anthropic", api_key="sk-ant-secret-key"):
    return client.put(f"{API}/setup", json={
        "aiConfig": {"provider": provider, "apiKey": api_key},
        "projectProfile": sample_profile.to_json_dict(),
        "complete": True,
    })


# ============================================
# SETUP
# ============================================

def test_setup_masks_credentials(test_client, sample_profile):
    response = save_setup(test_client, sample_profile)

    assert response.status_code == 200
    data = response.json()
    assert data["setupComplete"] is True
    assert data["aiConfig"]["apiKeyHint"] == "sk-a" + "*" * (len("sk-ant-secret-key") - 4)
    assert "apiKey" not in data["aiConfig"]
    assert "sk-ant-secret-key" not in response.text


def test_complete_setup_without_profile_is_400(test_client):
    response = test_client.put(f"{API}/setup", json={
        "aiConfig": {"provider": "openai", "apiKey": "k"},
        "complete": True,
    })
    assert response.status_code == 400


def test_style_guide_round_trip(test_client):
    assert test_client.put(f"{API}/style-guide", json={"text": "Be brief."}).json() == {"text": "Be brief."}
    assert test_client.get(f"{API}/style-guide").json() == {"text": "Be brief."}
    assert test_client.delete(f"{API}/style-guide").json()["text"] != "Be brief."


# ============================================
# OUTLETS & CONTACTS
# ============================================

def test_manual_outlet_and_filters(test_client):
    created = test_client.post(f"{API}/outlets", json={"name": "Wired", "niche": "Tech"})

    assert created.status_code == 201
    assert created.json()["isUserPicked"] is True
    assert created.json()["relevanceScore"] == 80
    assert len(test_client.get(f"{API}/outlets", params={"filter": "picked"}).json()["outlets"]) == 1
    assert test_client.get(f"{API}/outlets", params={"filter": "discovered"}).json()["outlets"] == []


def test_discover_then_confirm(test_client, sample_profile):
    save_setup(test_client, sample_profile)
    test_client.post(f"{API}/outlets", json={"name": "TechCrunch"})
    fake = FakeProvider(anthropic_reply(json.dumps([{"name": "Wired"}, {"name": "techcrunch"}])))
    override_services(fake)

    response = test_client.post(f"{API}/outlets/discover", json={"targetNiches": ["AI"]})

    assert response.status_code == 200
    discovered = response.json()["outlets"]
    assert [o["name"] for o in discovered] == ["Wired"]
    assert discovered[0]["isUserPicked"] is False
    assert "Already targeting: TechCrunch" in fake.body()["messages"][0]["content"]

    confirmed = test_client.post(f"{API}/outlets/{discovered[0]['id']}/confirm")
    assert confirmed.json()["isUserPicked"] is True


def test_discover_without_setup_is_400(test_client):
    assert test_client.post(f"{API}/outlets/discover", json={}).status_code == 400


def test_find_contacts_capability_mismatch_is_400(test_client, sample_profile):
    save_setup(test_client, sample_profile, provider="google", api_key="g-key")
    outlet = test_client.post(f"{API}/outlets", json={"name": "Wired"}).json()
    fake = FakeProvider(google_reply("[]"))
    override_services(fake)

    response = test_client.post(f"{API}/outlets/{outlet['id']}/contacts/find")

    assert response.status_code == 400
    assert "Serper" in response.json()["detail"]
    assert fake.requests == []


def test_find_contacts_stores_results(test_client, sample_profile):
    save_setup(test_client, sample_profile)
    outlet = test_client.post(f"{API}/outlets", json={"name": "Wired"}).json()
    override_services(FakeProvider(anthropic_reply(json.dumps([{"name": "Jo Park", "email": "jo@wired.com"}]))))

    response = test_client.post(f"{API}/outlets/{outlet['id']}/contacts/find")

    assert response.status_code == 200
    contacts = test_client.get(f"{API}/contacts", params={"outletId": outlet["id"]}).json()["contacts"]
    assert [(c["name"], c["outlet"]) for c in contacts] == [("Jo Park", "Wired")]


def test_unknown_ids_are_404(test_client):
    assert test_client.post(f"{API}/outlets/nope/confirm").status_code == 404
    assert test_client.delete(f"{API}/contacts/nope").status_code == 404
    assert test_client.post(f"{API}/emails/nope/approve").status_code == 404
    assert test_client.get(f"{API}/campaigns/nope").status_code == 404


# ============================================
# CAMPAIGNS & OUTBOX
# ============================================

def test_campaign_generate_review_and_send_flow(test_client, sample_profile):
    save_setup(test_client, sample_profile)
    outlet = test_client.post(f"{API}/outlets", json={"name": "Wired"}).json()
    test_client.post(f"{API}/contacts", json={"name": "Jo Park", "email": "jo@wired.com", "outletId": outlet["id"]})
    campaign = test_client.post(f"{API}/campaigns", json={"name": "Launch", "targetOutlets": [outlet["id"]]}).json()
    assert campaign["status"] == "draft"
    override_services(FakeProvider(anthropic_reply('{"subject": "Pitch", "body": "Hello"}')))

    generated = test_client.post(f"{API}/campaigns/{campaign['id']}/generate")

    assert generated.status_code == 200
    data = generated.json()
    assert data["successCount"] == 2
    assert data["campaign"]["status"] == "active"
    assert data["campaign"]["stats"]["totalPending"] == 2

    emails = test_client.get(f"{API}/emails", params={"status": "pending_approval"}).json()["emails"]
    individual = next(e for e in emails if e["type"] == "individual")
    publication = next(e for e in emails if e["type"] == "publication")
    assert individual["recipientName"] == "Jo Park"
    assert publication["contactEmail"] == "tips@wired.example.com"

    bulk = test_client.post(f"{API}/emails/bulk-approve", json={"emailIds": [individual["id"], "missing"]}).json()
    assert bulk["updated"] == [individual["id"]]
    assert bulk["skipped"][0]["emailId"] == "missing"

    sent = test_client.patch(f"{API}/emails/{individual['id']}/status", json={"status": "sent"})
    assert sent.json()["sentAt"] is not None

    back = test_client.patch(f"{API}/emails/{individual['id']}/status", json={"status": "approved"})
    assert back.status_code == 409

    test_client.post(f"{API}/emails/{publication['id']}/reject")
    assert test_client.post(f"{API}/emails/{publication['id']}/approve").status_code == 409

    stats = test_client.get(f"{API}/campaigns/{campaign['id']}").json()["stats"]
    assert stats == {"totalSent": 1, "totalApproved": 0, "totalPending": 0}

    dashboard = test_client.get(f"{API}/dashboard").json()
    assert dashboard["emailsSent"] == 1
    assert dashboard["activeCampaigns"] == 1


def test_campaign_toggle_and_paused_generate(test_client, memory_store, sample_profile):
    save_setup(test_client, sample_profile)
    campaign = test_client.post(f"{API}/campaigns", json={"name": "Launch"}).json()

    assert test_client.post(f"{API}/campaigns/{campaign['id']}/toggle").status_code == 409

    memory_store.activate_campaign(campaign["id"])
    paused = test_client.post(f"{API}/campaigns/{campaign['id']}/toggle").json()
    assert paused["status"] == "paused"
    assert test_client.post(f"{API}/campaigns/{campaign['id']}/generate").status_code == 409

    resumed = test_client.post(f"{API}/campaigns/{campaign['id']}/toggle").json()
    assert resumed["status"] == "active"


def test_email_notes_and_delete(test_client, memory_store):
    email = memory_store.add_email(EmailDraft(
        campaign_id="c", contact_name="Jo", type=OutreachType.INDIVIDUAL, subject="s", body="b",
    ))

    noted = test_client.patch(f"{API}/emails/{email.id}/notes", json={"notes": "Replied on Twitter"})
    assert noted.json()["notes"] == "Replied on Twitter"

    assert test_client.delete(f"{API}/emails/{email.id}").status_code == 204
    assert test_client.get(f"{API}/emails").json()["emails"] == []


def test_demo_seed(test_client):
    response = test_client.post(f"{API}/demo")

    assert response.status_code == 200
    assert response.json()["totalCampaigns"] == 1
    assert len(test_client.get(f"{API}/emails").json()["emails"]) == 5


def test_request_id_is_echoed(test_client):
    response = test_client.get("/", headers={"X-Request-ID": "req-test123"})
    assert response.headers["X-Request-ID"] == "req-test123"
