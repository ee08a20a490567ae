import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from conftest import PASSWORD, auth_headers
from fellowship.core.constants import ROLE_FAMILY_LEADER, ROLE_SUPER_ADMIN, ROLE_TEAM_LEADER
from fellowship.core.exceptions import InvalidInviteCodeError
from fellowship.crud.invite_crud import invite_code_crud
from fellowship.crud.user_crud import user_crud
from fellowship.models.invite_code import InviteCode
from fellowship.schemas.user import RegisterRequest
from fellowship.services.auth_service import auth_service


async def _insert_invite(session_factory, admin, code, **fields):
    async with session_factory() as session:
        invite = InviteCode(code=code, role=fields.pop("role", ROLE_TEAM_LEADER), created_by_id=admin.id, **fields)
        session.add(invite)
        await session.commit()
        return invite


async def test_register_without_invite_creates_member(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "  Grace  ", "email": "Grace@Example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["token"]
    assert body["user"]["name"] == "Grace"
    assert body["user"]["email"] == "grace@example.com"
    assert body["user"]["role"] == "MEMBER"
    assert body["user"]["fellowshipRole"] == "Member"
    assert "passwordHash" not in body["user"]


async def test_register_with_invite_copies_role_ministry_and_family(client, make_user):
    admin = await make_user(name="Admin", role=ROLE_SUPER_ADMIN)
    created = await client.post(
        "/api/invite-codes",
        json={"code": "lead2024", "role": ROLE_FAMILY_LEADER, "ministry": "Youth", "familyId": "fam-1"},
        headers=auth_headers(admin),
    )
    assert created.status_code == 201
    assert created.json()["inviteCode"]["code"] == "LEAD2024"

    response = await client.post(
        "/api/auth/register",
        json={"name": "Leader", "email": "leader@example.com", "password": "secret123", "inviteCode": "lead2024"},
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["role"] == ROLE_FAMILY_LEADER
    assert user["ministry"] == "Youth"
    assert user["familyId"] == "fam-1"

    invites = await client.get("/api/invite-codes", headers=auth_headers(admin))
    assert invites.json()[0]["usedBy"]["id"] == user["id"]


async def test_used_invite_code_cannot_register_twice(client, make_user, session_factory):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    await _insert_invite(session_factory, admin, "ONCE")

    first = await client.post(
        "/api/auth/register",
        json={"name": "A", "email": "a@example.com", "password": "secret123", "inviteCode": "ONCE"},
    )
    second = await client.post(
        "/api/auth/register",
        json={"name": "B", "email": "b@example.com", "password": "secret123", "inviteCode": "ONCE"},
    )

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["message"] == "Invalid or expired invite code"


async def test_expired_invite_reports_expired(client, make_user, session_factory):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    await _insert_invite(
        session_factory, admin, "OLDCODE",
        expires_at=datetime.now(timezone.utc) - timedelta(days=1),
    )

    response = await client.post(
        "/api/auth/register",
        json={"name": "Late", "email": "late@example.com", "password": "secret123", "inviteCode": "OLDCODE"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invite code has expired"


async def test_used_and_expired_invite_reports_invalid(client, make_user, session_factory):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    await _insert_invite(
        session_factory, admin, "STALE",
        used_by_id=admin.id,
        expires_at=datetime.now(timezone.utc) - timedelta(days=1),
    )

    response = await client.post(
        "/api/auth/register",
        json={"name": "Late", "email": "late@example.com", "password": "secret123", "inviteCode": "STALE"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired invite code"


async def test_register_duplicate_email_rejected(client, make_user):
    await make_user(email="taken@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "TAKEN@example.com", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "User already exists with this email"


async def test_invite_consume_only_succeeds_once(make_user, session_factory):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    other = await make_user()
    await _insert_invite(session_factory, admin, "RACE")

    async with session_factory() as session:
        assert await invite_code_crud.consume(session, "race", admin.id) is True
        assert await invite_code_crud.consume(session, "RACE", other.id) is False
        await session.commit()

    async with session_factory() as session:
        invite = await invite_code_crud.get_by_code(session, "RACE")
        assert invite.used_by_id == admin.id


async def test_simultaneous_registrations_share_one_invite(client, make_user, session_factory):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    await _insert_invite(session_factory, admin, "CAMP")

    responses = await asyncio.gather(*[
        client.post(
            "/api/auth/register",
            json={"name": f"Camper {n}", "email": f"camper{n}@example.com", "password": "secret123", "inviteCode": "CAMP"},
        )
        for n in range(4)
    ])

    statuses = sorted(r.status_code for r in responses)
    assert statuses == [201, 400, 400, 400]
    rejected = [r for r in responses if r.status_code == 400]
    assert all(r.json()["message"] == "Invalid or expired invite code" for r in rejected)

    winner = next(r for r in responses if r.status_code == 201).json()["user"]
    async with session_factory() as session:
        invite = await invite_code_crud.get_by_code(session, "CAMP")
        assert invite.used_by_id == winner["id"]
        accounts = [await user_crud.get_by_email(session, f"camper{n}@example.com") for n in range(4)]
        assert [u.id for u in accounts if u is not None] == [winner["id"]]


async def test_invite_consumed_after_lookup_rolls_back_registration(make_user, session_factory, monkeypatch):
    admin = await make_user(role=ROLE_SUPER_ADMIN)
    invite = await _insert_invite(session_factory, admin, "TAKEN", used_by_id=admin.id)

    async def stale_lookup(db, code):
        # the lookup saw the code before another registration consumed it
        return invite

    monkeypatch.setattr(auth_service, "resolve_invite", stale_lookup)
    data = RegisterRequest(name="Slow", email="slow@example.com", password="secret123", invite_code="TAKEN")

    async with session_factory() as session:
        with pytest.raises(InvalidInviteCodeError):
            await auth_service.register(session, data)

    async with session_factory() as session:
        assert await user_crud.get_by_email(session, "slow@example.com") is None


async def test_login_failures_are_indistinguishable(client, make_user):
    await make_user(email="known@example.com")

    unknown = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
    wrong = await client.post("/api/auth/login", json={"email": "known@example.com", "password": "wrong-pass"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


async def test_login_returns_token_usable_for_me(client, make_user):
    user = await make_user(name="Paul", email="paul@example.com")

    login = await client.post("/api/auth/login", json={"email": "Paul@example.com", "password": PASSWORD})
    assert login.status_code == 200
    token = login.json()["token"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == user.id
    assert "passwordHash" not in me.json()


async def test_deactivated_user_cannot_log_in(client, make_user):
    await make_user(email="gone@example.com", is_active=False)

    response = await client.post("/api/auth/login", json={"email": "gone@example.com", "password": PASSWORD})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


async def test_me_requires_valid_token(client):
    missing = await client.get("/api/auth/me")
    bad = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert missing.status_code == 401
    assert missing.json()["message"] == "No token, authorization denied"
    assert bad.status_code == 401
    assert bad.json()["message"] == "Token is not valid"
