"""
NoteKeep Backend — Notes Endpoint Tests
========================================

What:  HTTP-level tests for /api/notes CRUD, ownership and the owner
       projection.
How:   One AsyncClient per user (separate cookie jars), all sharing the
       per-test in-memory database.

What we test:
    ✅ Full create → list → get → update → delete flow for one user
    ✅ Responses carry the owner summary and never a password or hash
    ✅ The owner always comes from the session, not from the body
    ✅ Another user's note → 403 and the note is left untouched
    ✅ Missing note → 404, no session → 401, deleted account → 404
"""

import pytest

from notekeep.services.user_service import UserService

from conftest import naive, register_and_login


async def _create(client, title="Groceries", content="eggs, milk"):
    response = await client.post("/api/notes", json={"title": title, "content": content})
    assert response.status_code == 200, response.text
    return response.json()


class TestNoteLifecycle:

    @pytest.mark.asyncio
    async def test_alice_session_scenario(self, client, user_data):
        """Register, log in, create a note, log out, and lose access to it."""
        assert (await client.post("/api/auth/register", json=user_data)).status_code == 200
        login = await client.post(
            "/api/auth/login", json={"email": "a@x.com", "password": "secret1"}
        )
        assert login.status_code == 200

        note = await _create(client, title="T", content="C")
        assert note["user"]["username"] == "alice"

        await client.post("/api/auth/logout")

        assert (await client.get(f"/api/notes/{note['id']}")).status_code == 401

    @pytest.mark.asyncio
    async def test_create_list_get_update_delete(self, client, user_data):
        """Register, log in, and walk one note through its whole life."""
        await register_and_login(client, user_data)

        created = await _create(client)
        assert created["title"] == "Groceries"
        assert created["content"] == "eggs, milk"
        assert created["user"]["username"] == "alice"
        note_id = created["id"]

        listed = await client.get("/api/notes")
        assert listed.status_code == 200
        assert [n["id"] for n in listed.json()] == [note_id]

        fetched = await client.get(f"/api/notes/{note_id}")
        assert fetched.status_code == 200
        assert fetched.json()["content"] == "eggs, milk"

        updated = await client.put(
            f"/api/notes/{note_id}", json={"title": "Groceries", "content": "eggs, milk, bread"}
        )
        assert updated.status_code == 200
        assert updated.json()["content"] == "eggs, milk, bread"

        deleted = await client.delete(f"/api/notes/{note_id}")
        assert deleted.status_code == 200

        assert (await client.get(f"/api/notes/{note_id}")).status_code == 404
        assert (await client.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_response_shape(self, client, user_data):
        await register_and_login(client, user_data)

        note = await _create(client)

        assert set(note) == {"id", "title", "content", "createdAt", "updatedAt", "user"}
        assert set(note["user"]) == {"id", "username", "fullName", "email"}
        assert "secret1" not in str(note)

    @pytest.mark.asyncio
    async def test_create_defaults_to_empty_strings(self, client, user_data):
        await register_and_login(client, user_data)

        response = await client.post("/api/notes", json={})
        assert response.status_code == 200
        note = response.json()
        body = (await client.get(f"/api/notes/{note['id']}")).json()

        assert body["title"] == ""
        assert body["content"] == ""

    @pytest.mark.asyncio
    async def test_create_ignores_user_in_body(self, make_client, user_data, second_user_data):
        async with make_client() as alice, make_client() as bob:
            await register_and_login(alice, user_data)
            await register_and_login(bob, second_user_data)
            bob_id = (await bob.get("/api/auth/me")).json()["id"]

            response = await alice.post(
                "/api/notes",
                json={"title": "mine", "content": "", "user": {"id": bob_id}},
            )

            assert response.status_code == 200
            assert response.json()["user"]["username"] == "alice"
            assert (await bob.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, client, user_data):
        await register_and_login(client, user_data)
        for title in ("one", "two", "three"):
            await _create(client, title=title)

        titles = [n["title"] for n in (await client.get("/api/notes")).json()]

        assert titles == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_update_keeps_id_owner_and_created_at(self, client, user_data):
        await register_and_login(client, user_data)
        created = await _create(client)

        response = await client.put(
            f"/api/notes/{created['id']}", json={"title": "New", "content": "body"}
        )

        body = response.json()
        assert body["id"] == created["id"]
        assert body["user"] == created["user"]
        assert naive(body["createdAt"]) == naive(created["createdAt"])
        assert naive(body["updatedAt"]) >= naive(created["updatedAt"])

    @pytest.mark.asyncio
    async def test_update_missing_note(self, client, user_data):
        await register_and_login(client, user_data)

        response = await client.put("/api/notes/9999", json={"title": "x", "content": "y"})

        assert response.status_code == 404
        assert response.json()["message"] == "Note not found"

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, client, user_data):
        await register_and_login(client, user_data)

        assert (await client.delete("/api/notes/9999")).status_code == 404

    @pytest.mark.asyncio
    async def test_non_integer_id_rejected(self, client, user_data):
        await register_and_login(client, user_data)

        assert (await client.get("/api/notes/abc")).status_code == 422


class TestOwnership:

    @pytest.mark.asyncio
    async def test_other_users_note_is_forbidden(self, make_client, user_data, second_user_data):
        async with make_client() as alice, make_client() as bob:
            await register_and_login(alice, user_data)
            await register_and_login(bob, second_user_data)
            note = await _create(alice, title="private", content="alice only")
            url = f"/api/notes/{note['id']}"

            get_resp = await bob.get(url)
            put_resp = await bob.put(url, json={"title": "hacked", "content": ""})
            del_resp = await bob.delete(url)

            for resp in (get_resp, put_resp, del_resp):
                assert resp.status_code == 403
                assert resp.json()["message"] == "Access denied: Note does not belong to user"

            # Untouched after the failed write attempts
            still_there = (await alice.get(url)).json()
            assert still_there["title"] == "private"
            assert still_there["content"] == "alice only"

    @pytest.mark.asyncio
    async def test_lists_are_scoped_to_owner(self, make_client, user_data, second_user_data):
        async with make_client() as alice, make_client() as bob:
            await register_and_login(alice, user_data)
            await register_and_login(bob, second_user_data)
            await _create(alice, title="a")
            await _create(bob, title="b")

            alice_titles = [n["title"] for n in (await alice.get("/api/notes")).json()]
            bob_titles = [n["title"] for n in (await bob.get("/api/notes")).json()]

            assert alice_titles == ["a"]
            assert bob_titles == ["b"]


class TestAuthRequired:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,url",
        [
            ("GET", "/api/notes"),
            ("POST", "/api/notes"),
            ("GET", "/api/notes/1"),
            ("PUT", "/api/notes/1"),
            ("DELETE", "/api/notes/1"),
        ],
    )
    async def test_no_session_is_unauthorized(self, client, method, url):
        kwargs = {"json": {"title": "t", "content": "c"}} if method in ("POST", "PUT") else {}

        response = await client.request(method, url, **kwargs)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_forged_cookie_is_unauthorized(self, client):
        client.cookies.set("notekeep_session", "eyJ1c2VybmFtZSI6ICJhbGljZSJ9.forged.sig")

        response = await client.get("/api/notes")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_deleted_account_session_is_not_found(
        self, client, session_factory, user_data
    ):
        """A session that outlives its account resolves to 404, not 401."""
        await register_and_login(client, user_data)
        await _create(client)

        async with session_factory() as session:
            users = UserService(session)
            alice = await users.find_by_username("alice")
            await users.delete_user(alice.id)
            await session.commit()

        response = await client.get("/api/notes")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"
