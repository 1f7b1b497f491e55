"""Integration tests for /notes endpoints."""

import uuid

import pytest


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _create(test_client, headers, **body):
    payload = {"title": "T", "content": "C", **body}
    response = test_client.post("/notes", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["note"]


class TestCreateNote:

    def test_create_with_defaults(self, test_client, register):
        ann = register()
        response = test_client.post("/notes", json={"title": "T", "content": "C"}, headers=_bearer(ann["token"]))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Note created successfully"
        note = data["note"]
        assert note["owner"] == ann["user"]["id"]
        assert note["title"] == "T"
        assert note["content"] == "C"
        assert note["tags"] == []
        assert note["isPinned"] is False
        assert note["id"]
        assert note["createdAt"] and note["updatedAt"]

    def test_create_with_tags_and_pin(self, test_client, ann_headers):
        note = _create(test_client, ann_headers, tags=[" work ", "ideas"], isPinned=True)
        assert note["tags"] == ["work", "ideas"]
        assert note["isPinned"] is True

    def test_create_ignores_client_supplied_owner(self, test_client, register):
        ann = register()
        bob = register(name="Bob", email="bob@x.com", password="secret2")
        note = _create(test_client, _bearer(ann["token"]), owner=bob["user"]["id"], user_id=bob["user"]["id"])
        assert note["owner"] == ann["user"]["id"]

    def test_create_trims_title_and_content(self, test_client, ann_headers):
        note = _create(test_client, ann_headers, title="  Title  ", content="  Body  ")
        assert note["title"] == "Title"
        assert note["content"] == "Body"

    @pytest.mark.parametrize("body,field", [
        ({"content": "C"}, "title"),
        ({"title": "T"}, "content"),
        ({"title": "x" * 101, "content": "C"}, "title"),
        ({"title": "T", "content": "x" * 10_001}, "content"),
        ({"title": "   ", "content": "C"}, "title"),
        ({"title": "T", "content": "C", "tags": "not-an-array"}, "tags"),
        ({"title": "T", "content": "C", "tags": ["x" * 21]}, "tags"),
        ({"title": "T", "content": "C", "isPinned": "yes"}, "isPinned"),
    ])
    def test_validation_errors(self, test_client, ann_headers, body, field):
        response = test_client.post("/notes", json=body, headers=ann_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation failed"
        assert [e["field"] for e in data["errors"]] == [field]

    def test_tags_not_array_message(self, test_client, ann_headers):
        response = test_client.post("/notes", json={"title": "T", "content": "C", "tags": "a"}, headers=ann_headers)
        assert response.json()["errors"] == [{"field": "tags", "message": "Tags must be an array"}]

    def test_all_violated_fields_reported(self, test_client, ann_headers):
        response = test_client.post("/notes", json={"tags": ["x" * 21]}, headers=ann_headers)
        assert response.status_code == 400
        assert sorted(e["field"] for e in response.json()["errors"]) == ["content", "tags", "title"]

    def test_create_without_token(self, test_client):
        response = test_client.post("/notes", json={"title": "T", "content": "C"})
        assert response.status_code == 401
        assert response.json() == {"message": "Access denied. No token provided."}


class TestListNotes:

    def test_list_own_notes(self, test_client, ann_headers):
        _create(test_client, ann_headers, title="One")
        _create(test_client, ann_headers, title="Two")

        response = test_client.get("/notes", headers=ann_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Notes retrieved successfully"
        assert {n["title"] for n in data["notes"]} == {"One", "Two"}

    def test_empty_list(self, test_client, ann_headers):
        response = test_client.get("/notes", headers=ann_headers)
        assert response.status_code == 200
        assert response.json()["notes"] == []

    def test_list_excludes_other_users_notes(self, test_client, ann_headers, bob_headers):
        _create(test_client, ann_headers, title="Ann's")
        _create(test_client, bob_headers, title="Bob's")

        titles = [n["title"] for n in test_client.get("/notes", headers=bob_headers).json()["notes"]]
        assert titles == ["Bob's"]

    def test_pinned_note_listed_first(self, test_client, ann_headers):
        first = _create(test_client, ann_headers, title="First")
        second = _create(test_client, ann_headers, title="Second")
        third = _create(test_client, ann_headers, title="Third")

        response = test_client.put(
            f"/notes/{second['id']}",
            json={"title": "Second", "content": "C", "isPinned": True},
            headers=ann_headers,
        )
        assert response.status_code == 200

        ids = [n["id"] for n in test_client.get("/notes", headers=ann_headers).json()["notes"]]
        assert ids == [second["id"], third["id"], first["id"]]


class TestGetNote:

    def test_get_own_note(self, test_client, ann_headers):
        note = _create(test_client, ann_headers)

        response = test_client.get(f"/notes/{note['id']}", headers=ann_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Note retrieved successfully"
        assert response.json()["note"] == note

    def test_get_nonexistent_note(self, test_client, ann_headers):
        response = test_client.get(f"/notes/{uuid.uuid4()}", headers=ann_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}

    def test_malformed_id_is_plain_not_found(self, test_client, ann_headers):
        response = test_client.get("/notes/not-a-valid-id", headers=ann_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}

    def test_get_without_token(self, test_client):
        assert test_client.get(f"/notes/{uuid.uuid4()}").status_code == 401


class TestUpdateNote:

    def test_update_own_note(self, test_client, ann_headers):
        note = _create(test_client, ann_headers, tags=["old"])

        response = test_client.put(
            f"/notes/{note['id']}",
            json={"title": "Updated", "content": "New body", "tags": ["new"], "isPinned": True},
            headers=ann_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Note updated successfully"
        updated = data["note"]
        assert updated["id"] == note["id"]
        assert updated["owner"] == note["owner"]
        assert updated["title"] == "Updated"
        assert updated["content"] == "New body"
        assert updated["tags"] == ["new"]
        assert updated["isPinned"] is True
        assert updated["createdAt"] == note["createdAt"]
        assert updated["updatedAt"] >= note["updatedAt"]

    def test_update_cannot_change_owner(self, test_client, register):
        ann = register()
        bob = register(name="Bob", email="bob@x.com", password="secret2")
        note = _create(test_client, _bearer(ann["token"]))

        response = test_client.put(
            f"/notes/{note['id']}",
            json={"title": "T", "content": "C", "owner": bob["user"]["id"]},
            headers=_bearer(ann["token"]),
        )

        assert response.json()["note"]["owner"] == ann["user"]["id"]
        assert test_client.get("/notes", headers=_bearer(bob["token"])).json()["notes"] == []

    def test_update_nonexistent_note(self, test_client, ann_headers):
        response = test_client.put(f"/notes/{uuid.uuid4()}", json={"title": "T", "content": "C"}, headers=ann_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}

    def test_update_invalid_data(self, test_client, ann_headers):
        note = _create(test_client, ann_headers)
        response = test_client.put(f"/notes/{note['id']}", json={"title": "", "content": ""}, headers=ann_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_update_without_token(self, test_client):
        response = test_client.put(f"/notes/{uuid.uuid4()}", json={"title": "T", "content": "C"})
        assert response.status_code == 401


class TestDeleteNote:

    def test_delete_own_note(self, test_client, ann_headers):
        note = _create(test_client, ann_headers)

        response = test_client.delete(f"/notes/{note['id']}", headers=ann_headers)

        assert response.status_code == 204
        assert response.content == b""

    def test_deleted_note_is_not_found_everywhere(self, test_client, ann_headers):
        note = _create(test_client, ann_headers)
        test_client.delete(f"/notes/{note['id']}", headers=ann_headers)

        assert test_client.get(f"/notes/{note['id']}", headers=ann_headers).status_code == 404
        assert test_client.put(
            f"/notes/{note['id']}", json={"title": "T", "content": "C"}, headers=ann_headers
        ).status_code == 404
        assert test_client.delete(f"/notes/{note['id']}", headers=ann_headers).status_code == 404
        assert test_client.get("/notes", headers=ann_headers).json()["notes"] == []

    def test_delete_nonexistent_note(self, test_client, ann_headers):
        response = test_client.delete(f"/notes/{uuid.uuid4()}", headers=ann_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}

    def test_delete_without_token(self, test_client):
        assert test_client.delete(f"/notes/{uuid.uuid4()}").status_code == 401


class TestOwnershipIsolation:
    """Another user's note is byte-for-byte indistinguishable from a missing one."""

    @pytest.fixture
    def anns_note(self, test_client, ann_headers):
        return _create(test_client, ann_headers, title="Ann's secret")

    def _request(self, test_client, method, note_id, headers):
        if method == "put":
            return test_client.put(f"/notes/{note_id}", json={"title": "X", "content": "X"}, headers=headers)
        return getattr(test_client, method)(f"/notes/{note_id}", headers=headers)

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_foreign_note_matches_missing_note(self, test_client, anns_note, ann_headers, bob_headers, method):
        foreign = self._request(test_client, method, anns_note["id"], bob_headers)
        missing = self._request(test_client, method, str(uuid.uuid4()), bob_headers)

        assert foreign.status_code == missing.status_code == 404
        assert foreign.content == missing.content
        assert foreign.json() == {"message": "Note not found"}

        # Ann's note is untouched.
        still_there = test_client.get(f"/notes/{anns_note['id']}", headers=ann_headers).json()["note"]
        assert still_there == anns_note

    def test_token_grants_access_only_to_own_notes(self, test_client, register):
        ann = register()
        bob = register(name="Bob", email="bob@x.com", password="secret2")
        ann_note = _create(test_client, _bearer(ann["token"]))
        bob_note = _create(test_client, _bearer(bob["token"]))

        ann_ids = [n["id"] for n in test_client.get("/notes", headers=_bearer(ann["token"])).json()["notes"]]
        assert ann_ids == [ann_note["id"]]
        assert test_client.get(f"/notes/{bob_note['id']}", headers=_bearer(ann["token"])).status_code == 404


class TestCredentialSecrecy:

    def test_no_response_contains_password_or_hash(self, test_client, register):
        responses = []
        responses.append(test_client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "secret1"}))
        responses.append(test_client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "secret1"}))
        responses.append(test_client.post("/auth/login", json={"email": "ann@x.com", "password": "secret1"}))
        responses.append(test_client.post("/auth/login", json={"email": "ann@x.com", "password": "badpass"}))
        headers = _bearer(responses[0].json()["token"])
        note = _create(test_client, headers)
        responses.append(test_client.get("/notes", headers=headers))
        responses.append(test_client.get(f"/notes/{note['id']}", headers=headers))
        responses.append(test_client.get(f"/notes/{uuid.uuid4()}", headers=headers))

        for response in responses:
            assert "secret1" not in response.text
            assert "password" not in response.text.lower()
            assert "$2b$" not in response.text
