from datetime import datetime, timedelta, timezone

from conftest import auth_headers

NEW_PRAYER = {
    "type": "intercession",
    "title": "For my family",
    "description": "Health and peace at home",
    "duration": 15,
    "tags": [" family ", ""],
}


async def _create(client, user, **overrides):
    response = await client.post("/api/prayers", json={**NEW_PRAYER, **overrides}, headers=auth_headers(user))
    assert response.status_code == 201
    return response.json()


async def test_create_prayer_defaults_private_and_unanswered(client, make_user):
    user = await make_user()

    entry = await _create(client, user)

    assert entry["userId"] == user.id
    assert entry["isPrivate"] is True
    assert entry["isAnswered"] is False
    assert entry["tags"] == ["family"]


async def test_create_prayer_rejects_zero_duration(client, make_user):
    user = await make_user()

    response = await client.post("/api/prayers", json={**NEW_PRAYER, "duration": 0}, headers=auth_headers(user))

    assert response.status_code == 400


async def test_list_is_owner_scoped_and_filterable(client, make_user):
    user = await make_user()
    other = await make_user()
    await _create(client, user)
    await _create(client, user, type="thanksgiving", title="Grateful")
    await _create(client, other)

    everything = await client.get("/api/prayers", headers=auth_headers(user))
    thanks = await client.get("/api/prayers", params={"type": "thanksgiving"}, headers=auth_headers(user))

    assert len(everything.json()) == 2
    assert [e["title"] for e in thanks.json()] == ["Grateful"]


async def test_list_date_range_applies_only_with_both_bounds(client, make_user, add_prayer):
    user = await make_user()
    now = datetime.now(timezone.utc)
    await add_prayer(user, now - timedelta(days=10))
    await add_prayer(user, now)

    window = {
        "start": (now - timedelta(days=1)).isoformat(),
        "end": (now + timedelta(days=1)).isoformat(),
    }
    ranged = await client.get("/api/prayers", params=window, headers=auth_headers(user))
    start_only = await client.get("/api/prayers", params={"start": window["start"]}, headers=auth_headers(user))

    assert len(ranged.json()) == 1
    assert len(start_only.json()) == 2


async def test_answer_prayer_is_one_way(client, make_user):
    user = await make_user()
    entry = await _create(client, user)
    headers = auth_headers(user)

    answered = await client.post(
        f"/api/prayers/{entry['id']}/answer",
        json={"answeredDescription": "Mum recovered"},
        headers=headers,
    )
    assert answered.status_code == 200
    assert answered.json()["isAnswered"] is True
    assert answered.json()["answeredDate"] is not None

    again = await client.post(
        f"/api/prayers/{entry['id']}/answer",
        json={"answeredDescription": "Twice"},
        headers=headers,
    )
    revert = await client.put(f"/api/prayers/{entry['id']}", json={"isAnswered": False}, headers=headers)

    assert again.status_code == 400
    assert revert.status_code == 400


async def test_answer_requires_description(client, make_user):
    user = await make_user()
    entry = await _create(client, user)

    via_answer = await client.post(f"/api/prayers/{entry['id']}/answer", json={}, headers=auth_headers(user))
    via_update = await client.put(
        f"/api/prayers/{entry['id']}", json={"isAnswered": True}, headers=auth_headers(user)
    )

    assert via_answer.status_code == 400
    assert via_update.status_code == 400


async def test_update_changes_only_given_fields(client, make_user):
    user = await make_user()
    entry = await _create(client, user)

    response = await client.put(
        f"/api/prayers/{entry['id']}", json={"title": "Renamed", "duration": 25}, headers=auth_headers(user)
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["duration"] == 25
    assert response.json()["description"] == NEW_PRAYER["description"]


async def test_other_members_cannot_touch_an_entry(client, make_user):
    owner = await make_user()
    stranger = await make_user()
    entry = await _create(client, owner)

    update = await client.put(f"/api/prayers/{entry['id']}", json={"title": "Mine"}, headers=auth_headers(stranger))
    delete = await client.delete(f"/api/prayers/{entry['id']}", headers=auth_headers(stranger))

    assert update.status_code == 404
    assert delete.status_code == 404


async def test_delete_prayer(client, make_user):
    user = await make_user()
    entry = await _create(client, user)

    response = await client.delete(f"/api/prayers/{entry['id']}", headers=auth_headers(user))
    remaining = await client.get("/api/prayers", headers=auth_headers(user))

    assert response.status_code == 200
    assert remaining.json() == []
