import asyncio

from conftest import auth_headers


async def test_upsert_day_replaces_activities(client, make_user):
    user = await make_user()
    headers = auth_headers(user)

    first = await client.post(
        "/api/spiritual-tracker/day",
        json={"date": "2024-05-10T08:30:00Z", "activities": {"prayerMinutes": 15, "notes": "Psalm 1"}},
        headers=headers,
    )
    second = await client.post(
        "/api/spiritual-tracker/day",
        json={"date": "2024-05-10T21:00:00Z", "activities": {"bibleReadingMinutes": 20}},
        headers=headers,
    )
    month = await client.get("/api/spiritual-tracker/month", params={"year": 2024, "month": 5}, headers=headers)

    assert first.status_code == 200
    assert first.json()["log"]["date"] == "2024-05-10"
    assert second.json()["log"]["id"] == first.json()["log"]["id"]
    logs = month.json()["logs"]
    assert len(logs) == 1
    assert logs[0]["activities"] == {
        "prayerMinutes": 0,
        "bibleReadingMinutes": 20,
        "devotionMinutes": 0,
        "notes": "",
    }


async def test_day_is_taken_in_utc(client, make_user):
    user = await make_user()

    response = await client.post(
        "/api/spiritual-tracker/day",
        json={"date": "2024-05-10T23:30:00-05:00", "activities": {"devotionMinutes": 5}},
        headers=auth_headers(user),
    )

    assert response.json()["log"]["date"] == "2024-05-11"


async def test_negative_minutes_clamped(client, make_user):
    user = await make_user()

    response = await client.post(
        "/api/spiritual-tracker/day",
        json={"date": "2024-05-10T12:00:00Z", "activities": {"prayerMinutes": -10}},
        headers=auth_headers(user),
    )

    assert response.json()["log"]["activities"]["prayerMinutes"] == 0


async def test_month_only_returns_own_logs_in_range(client, make_user):
    user = await make_user()
    other = await make_user()
    for day in ("2024-04-30T12:00:00Z", "2024-05-01T12:00:00Z", "2024-05-31T12:00:00Z", "2024-06-01T12:00:00Z"):
        await client.post("/api/spiritual-tracker/day", json={"date": day}, headers=auth_headers(user))
    await client.post("/api/spiritual-tracker/day", json={"date": "2024-05-15T12:00:00Z"}, headers=auth_headers(other))

    response = await client.get(
        "/api/spiritual-tracker/month", params={"year": 2024, "month": 5}, headers=auth_headers(user)
    )

    assert [log["date"] for log in response.json()["logs"]] == ["2024-05-01", "2024-05-31"]


async def test_missing_parameters_rejected(client, make_user):
    headers = auth_headers(await make_user())

    no_month = await client.get("/api/spiritual-tracker/month", params={"year": 2024}, headers=headers)
    no_date = await client.post("/api/spiritual-tracker/day", json={"activities": {}}, headers=headers)

    assert no_month.status_code == 400
    assert no_month.json()["message"] == "year and month are required"
    assert no_date.status_code == 400
    assert no_date.json()["message"] == "date is required"


async def test_concurrent_saves_for_a_new_day_keep_one_log(client, make_user):
    headers = auth_headers(await make_user())

    responses = await asyncio.gather(*[
        client.post(
            "/api/spiritual-tracker/day",
            json={"date": "2024-07-04T09:00:00Z", "activities": {"prayerMinutes": minutes}},
            headers=headers,
        )
        for minutes in (5, 10, 15)
    ])
    month = await client.get("/api/spiritual-tracker/month", params={"year": 2024, "month": 7}, headers=headers)

    assert [r.status_code for r in responses] == [200, 200, 200]
    assert len({r.json()["log"]["id"] for r in responses}) == 1
    logs = month.json()["logs"]
    assert len(logs) == 1
    assert logs[0]["activities"]["prayerMinutes"] in (5, 10, 15)
