from datetime import datetime, timedelta, timezone

from conftest import auth_headers
from fellowship.core.constants import ROLE_FAMILY_LEADER, ROLE_SUPER_ADMIN, ROLE_TEAM_LEADER
from fellowship.services.realtime import user_room


def _event_payload(**overrides):
    return {
        "title": "Friday Bible Study",
        "description": "Romans chapter 8",
        "date": (datetime.now(timezone.utc) + timedelta(days=3)).isoformat(),
        "time": "7:00 PM",
        "location": "Room 204",
        **overrides,
    }


async def _create_event(client, organizer, **overrides):
    response = await client.post("/api/events", json=_event_payload(**overrides), headers=auth_headers(organizer))
    assert response.status_code == 201
    return response.json()["event"]


async def test_members_cannot_create_events(client, make_user):
    member = await make_user()

    response = await client.post("/api/events", json=_event_payload(), headers=auth_headers(member))

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. Insufficient permissions."


async def test_leader_creates_event_with_default_type(client, make_user):
    leader = await make_user(role=ROLE_FAMILY_LEADER)

    event = await _create_event(client, leader)

    assert event["eventType"] == "fellowship"
    assert event["organizer"]["id"] == leader.id
    assert event["attendees"] == []


async def test_rsvp_notifies_organizer_and_rejects_repeat(client, make_user, publisher):
    leader = await make_user(role=ROLE_TEAM_LEADER)
    member = await make_user(name="Lydia")
    event = await _create_event(client, leader)

    first = await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(member))
    repeat = await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(member))

    assert first.status_code == 200
    assert first.json()["attendeesCount"] == 1
    assert repeat.status_code == 400
    assert repeat.json()["message"] == "Already RSVPed to this event"

    frames = publisher.for_room(user_room(leader.id))
    assert len(frames) == 1
    assert frames[0][2]["type"] == "rsvp"
    assert frames[0][2]["relatedEventId"] == event["id"]


async def test_full_event_rejects_rsvp(client, make_user):
    leader = await make_user(role=ROLE_TEAM_LEADER)
    first = await make_user()
    second = await make_user()
    event = await _create_event(client, leader, maxAttendees=1)

    accepted = await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(first))
    rejected = await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(second))

    assert accepted.status_code == 200
    assert rejected.status_code == 400
    assert rejected.json()["message"] == "Event is full"


async def test_cancel_rsvp_frees_the_seat(client, make_user):
    leader = await make_user(role=ROLE_TEAM_LEADER)
    member = await make_user()
    event = await _create_event(client, leader, maxAttendees=1)
    await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(member))

    cancelled = await client.delete(f"/api/events/{event['id']}/rsvp", headers=auth_headers(member))
    listed = await client.get("/api/events", headers=auth_headers(member))

    assert cancelled.json()["attendeesCount"] == 0
    assert listed.json()[0]["attendees"] == []


async def test_only_organizer_or_admin_deletes_event(client, make_user):
    organizer = await make_user(role=ROLE_TEAM_LEADER)
    other_leader = await make_user(role=ROLE_FAMILY_LEADER)
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    event = await _create_event(client, organizer)

    forbidden = await client.delete(f"/api/events/{event['id']}", headers=auth_headers(other_leader))
    allowed = await client.delete(f"/api/events/{event['id']}", headers=auth_headers(admin))
    listed = await client.get("/api/events", headers=auth_headers(organizer))
    rsvp = await client.post(f"/api/events/{event['id']}/rsvp", headers=auth_headers(other_leader))

    assert forbidden.status_code == 403
    assert allowed.status_code == 200
    assert listed.json() == []
    assert rsvp.status_code == 404
