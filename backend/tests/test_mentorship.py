from datetime import datetime, timedelta, timezone

from conftest import auth_headers
from fellowship.core.constants import ROLE_FAMILY_LEADER, ROLE_GENERAL_LEADER
from fellowship.services.realtime import user_room


async def _submit(client, member, **overrides):
    payload = {"topic": "Career", "details": "Choosing a major", "preferredTimes": ["Sat AM"], **overrides}
    response = await client.post("/api/mentorship", json=payload, headers=auth_headers(member))
    assert response.status_code == 201
    return response.json()["request"]


async def test_submit_notifies_every_active_leader(client, make_user, publisher):
    member = await make_user()
    leader_a = await make_user(role=ROLE_FAMILY_LEADER)
    leader_b = await make_user(role=ROLE_GENERAL_LEADER)
    await make_user(role=ROLE_GENERAL_LEADER, is_active=False)

    request = await _submit(client, member)

    assert request["status"] == "pending"
    assert request["requester"]["id"] == member.id
    notified = {frame[0] for frame in publisher.frames}
    assert notified == {user_room(leader_a.id), user_room(leader_b.id)}
    assert publisher.frames[0][2]["type"] == "mentorship_submitted"
    assert publisher.frames[0][2]["message"] == "New mentorship/counseling request: Career"


async def test_anonymous_request_hidden_from_leaders(client, make_user, publisher):
    member = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)

    own = await _submit(client, member, isAnonymous=True)
    managed = await client.get("/api/mentorship/manage", headers=auth_headers(leader))

    assert own["requester"]["id"] == member.id
    assert managed.json()["requests"][0]["requester"] is None
    assert publisher.frames[0][2]["message"] == "New anonymous mentorship/counseling request: Career"


async def test_manage_requires_leader_and_filters_status(client, make_user):
    member = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)
    first = await _submit(client, member)
    await _submit(client, member, topic="Relationships")
    await client.put(f"/api/mentorship/{first['id']}/accept", headers=auth_headers(leader))

    forbidden = await client.get("/api/mentorship/manage", headers=auth_headers(member))
    accepted = await client.get("/api/mentorship/manage", params={"status": "accepted"}, headers=auth_headers(leader))

    assert forbidden.status_code == 403
    assert [r["id"] for r in accepted.json()["requests"]] == [first["id"]]


async def test_accept_assigns_leader_and_notifies_requester(client, make_user, publisher):
    member = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)
    request = await _submit(client, member)
    publisher.frames.clear()

    response = await client.put(f"/api/mentorship/{request['id']}/accept", headers=auth_headers(leader))

    body = response.json()
    assert body["message"] == "Accepted"
    assert body["request"]["status"] == "accepted"
    assert body["request"]["assignedLeader"]["id"] == leader.id
    room, _, payload = publisher.frames[0]
    assert room == user_room(member.id)
    assert payload["type"] == "mentorship_updated"


async def test_schedule_sets_time_and_complete_is_silent(client, make_user, publisher):
    member = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)
    request = await _submit(client, member)
    when = datetime.now(timezone.utc) + timedelta(days=2)
    publisher.frames.clear()

    scheduled = await client.put(
        f"/api/mentorship/{request['id']}/schedule",
        json={"scheduledAt": when.isoformat()},
        headers=auth_headers(leader),
    )
    completed = await client.put(f"/api/mentorship/{request['id']}/complete", headers=auth_headers(leader))

    assert scheduled.json()["request"]["status"] == "scheduled"
    assert scheduled.json()["request"]["scheduledAt"] is not None
    assert scheduled.json()["request"]["assignedLeader"]["id"] == leader.id
    assert completed.json()["request"]["status"] == "completed"
    assert len(publisher.frames) == 1


async def test_only_parties_view_a_request(client, make_user):
    member = await make_user()
    outsider = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)
    request = await _submit(client, member)

    own = await client.get(f"/api/mentorship/{request['id']}", headers=auth_headers(member))
    as_leader = await client.get(f"/api/mentorship/{request['id']}", headers=auth_headers(leader))
    as_outsider = await client.get(f"/api/mentorship/{request['id']}", headers=auth_headers(outsider))
    missing = await client.get("/api/mentorship/does-not-exist", headers=auth_headers(member))

    assert own.status_code == 200
    assert as_leader.status_code == 200
    assert as_outsider.status_code == 403
    assert missing.status_code == 404


async def test_private_chat_between_requester_and_leader(client, make_user, publisher):
    member = await make_user()
    leader = await make_user(role=ROLE_FAMILY_LEADER)
    outsider = await make_user()
    request = await _submit(client, member)
    await client.put(f"/api/mentorship/{request['id']}/accept", headers=auth_headers(leader))
    publisher.frames.clear()

    sent = await client.post(
        f"/api/mentorship/{request['id']}/message", json={"content": "When works for you?"}, headers=auth_headers(member)
    )
    reply = await client.post(
        f"/api/mentorship/{request['id']}/message", json={"content": "Saturday"}, headers=auth_headers(leader)
    )
    empty = await client.post(
        f"/api/mentorship/{request['id']}/message", json={"content": "   "}, headers=auth_headers(member)
    )
    intruder = await client.post(
        f"/api/mentorship/{request['id']}/message", json={"content": "Hi"}, headers=auth_headers(outsider)
    )

    assert sent.status_code == 201
    assert [m["content"] for m in reply.json()["chat"]] == ["When works for you?", "Saturday"]
    assert empty.status_code == 400
    assert empty.json()["message"] == "Content required"
    assert intruder.status_code == 403
    assert [frame[0] for frame in publisher.frames] == [user_room(leader.id), user_room(member.id)]


async def test_my_requests_lists_own_only(client, make_user):
    member = await make_user()
    other = await make_user()
    await _submit(client, member)
    await _submit(client, other)

    response = await client.get("/api/mentorship/me", headers=auth_headers(member))

    assert len(response.json()["requests"]) == 1
    assert response.json()["requests"][0]["requester"]["id"] == member.id
