from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from congregation.domain.entities import UserRole


def _event_payload(**fields):
    start = datetime.utcnow() + timedelta(days=7)
    payload = {
        "title": "Sunday Service",
        "description": "Weekly worship",
        "location": "Main hall",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(hours=2)).isoformat(),
        "category": "service",
        "is_published": True,
    }
    payload.update(fields)
    return payload


@pytest.mark.asyncio
async def test_event_lifecycle(client: AsyncClient, church):
    """Event Lifecycle

    Given I am the pastor of a church
    When I create a published event
    Then members of my church see it in the event list
    And can register for it
    And I can see them among the attendees
    """
    created = await client.post(
        "/api/events", json=_event_payload(max_attendees=10), headers=church["pastor_headers"]
    )
    assert created.status_code == 201
    event = created.json()
    assert event["church_id"] == church["church_id"]
    assert event["organizer"] == "Pastor John"

    listed = await client.get("/api/events", headers=church["member_headers"])
    assert listed.status_code == 200
    assert [e["id"] for e in listed.json()["events"]] == [event["id"]]

    registered = await client.post(
        f"/api/events/{event['id']}/register", headers=church["member_headers"]
    )
    assert registered.status_code == 200

    attendees = await client.get(
        f"/api/events/{event['id']}/attendees", headers=church["pastor_headers"]
    )
    assert attendees.status_code == 200
    assert [a["user_name"] for a in attendees.json()["attendees"]] == ["Mary"]

    details = await client.get(f"/api/events/{event['id']}", headers=church["member_headers"])
    assert details.json()["current_attendees"] == 1


@pytest.mark.asyncio
async def test_register_twice_conflicts(client: AsyncClient, church):
    event = (await client.post(
        "/api/events", json=_event_payload(), headers=church["pastor_headers"]
    )).json()
    await client.post(f"/api/events/{event['id']}/register", headers=church["member_headers"])

    response = await client.post(
        f"/api/events/{event['id']}/register", headers=church["member_headers"]
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_full_event_rejects_registration(client: AsyncClient, church, create_user):
    """Given an event with one seat already taken, the next registration is refused"""
    event = (await client.post(
        "/api/events", json=_event_payload(max_attendees=1), headers=church["pastor_headers"]
    )).json()
    await client.post(f"/api/events/{event['id']}/register", headers=church["member_headers"])

    _, latecomer_headers = await create_user()
    await client.post(
        "/api/churches/join",
        json={"church_code": church["church_code"]},
        headers=latecomer_headers,
    )

    response = await client.post(
        f"/api/events/{event['id']}/register", headers=latecomer_headers
    )

    assert response.status_code == 429
    assert response.json()["error"]["message"] == "Event is full"


@pytest.mark.asyncio
async def test_cancel_registration_frees_seat(client: AsyncClient, church):
    event = (await client.post(
        "/api/events", json=_event_payload(max_attendees=1), headers=church["pastor_headers"]
    )).json()
    await client.post(f"/api/events/{event['id']}/register", headers=church["member_headers"])

    cancelled = await client.delete(
        f"/api/events/{event['id']}/register", headers=church["member_headers"]
    )

    assert cancelled.status_code == 200
    details = await client.get(f"/api/events/{event['id']}", headers=church["member_headers"])
    assert details.json()["current_attendees"] == 0


@pytest.mark.asyncio
async def test_member_cannot_create_event(client: AsyncClient, church):
    response = await client.post(
        "/api/events", json=_event_payload(), headers=church["member_headers"]
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_end_before_start_rejected(client: AsyncClient, church):
    start = datetime.utcnow() + timedelta(days=1)

    response = await client.post(
        "/api/events",
        json=_event_payload(
            start_date=start.isoformat(), end_date=(start - timedelta(hours=1)).isoformat()
        ),
        headers=church["pastor_headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "End date must be after start date"


@pytest.mark.asyncio
async def test_unpublished_events_hidden_by_default(client: AsyncClient, church):
    await client.post(
        "/api/events", json=_event_payload(is_published=False), headers=church["pastor_headers"]
    )

    published_only = await client.get("/api/events", headers=church["member_headers"])
    everything = await client.get(
        "/api/events", params={"only_published": False}, headers=church["pastor_headers"]
    )

    assert published_only.json()["events"] == []
    assert len(everything.json()["events"]) == 1


@pytest.mark.asyncio
async def test_other_church_cannot_see_event(client: AsyncClient, church, create_user):
    """Tenant isolation: a pastor of another church cannot read or delete the event"""
    event = (await client.post(
        "/api/events", json=_event_payload(), headers=church["pastor_headers"]
    )).json()

    _, other_pastor_headers = await create_user(UserRole.pastor)
    await client.post("/api/churches", json={"name": "Hope Church"}, headers=other_pastor_headers)

    read = await client.get(f"/api/events/{event['id']}", headers=other_pastor_headers)
    delete = await client.delete(f"/api/events/{event['id']}", headers=other_pastor_headers)

    assert read.status_code == 403
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_update_and_delete_event(client: AsyncClient, church):
    event = (await client.post(
        "/api/events", json=_event_payload(), headers=church["pastor_headers"]
    )).json()

    updated = await client.patch(
        f"/api/events/{event['id']}",
        json={"title": "Easter Service"},
        headers=church["pastor_headers"],
    )
    deleted = await client.delete(f"/api/events/{event['id']}", headers=church["pastor_headers"])
    missing = await client.get(f"/api/events/{event['id']}", headers=church["pastor_headers"])

    assert updated.status_code == 200
    assert updated.json()["title"] == "Easter Service"
    assert deleted.status_code == 200
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_member_cannot_list_attendees(client: AsyncClient, church):
    event = (await client.post(
        "/api/events", json=_event_payload(), headers=church["pastor_headers"]
    )).json()

    response = await client.get(
        f"/api/events/{event['id']}/attendees", headers=church["member_headers"]
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_event_detail_and_registration_payloads(client: AsyncClient, church):
    event = (await client.post(
        "/api/events", json=_event_payload(), headers=church["pastor_headers"]
    )).json()

    details = await client.get(f"/api/events/{event['id']}", headers=church["member_headers"])
    registered = await client.post(
        f"/api/events/{event['id']}/register", headers=church["member_headers"]
    )
    cancelled = await client.delete(
        f"/api/events/{event['id']}/register", headers=church["member_headers"]
    )

    assert details.status_code == 200
    data = details.json()
    assert data["id"] == event["id"]
    assert data["church_id"] == church["church_id"]
    assert data["title"] == "Sunday Service"
    assert data["organizer"] == "Pastor John"
    assert data["organizer_id"] == str(church["pastor"].id)
    assert data["category"] == "service"
    assert data["current_attendees"] == 0
    assert registered.json() == {"message": "Successfully registered for event"}
    assert cancelled.status_code == 200
    assert cancelled.json() == {"message": "Registration cancelled successfully"}
