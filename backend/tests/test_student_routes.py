"""
Student API — Student Route Tests
==================================

What we test:
    ✅ Public reads: list, get, 400 on malformed id, 404 on unknown id
    ✅ Writes need a bearer token: 401 "No token provided" / "Invalid token"
    ✅ Unauthenticated PUT/DELETE leave the store untouched
    ✅ Presence validation, 201/204 success codes
    ✅ Field values are stored and returned exactly as sent
    ✅ Undecodable JSON → 400, storage failure → 500 with detail
"""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError


async def _create(test_client, auth_headers, student_data) -> str:
    response = await test_client.post("/students", json=student_data, headers=auth_headers)
    assert response.status_code == 201
    return response.json()["id"]


class TestReads:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        """An empty collection lists as []."""
        response = await test_client.get("/students")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_returns_stored_fields(self, test_client, auth_headers, student_data):
        """GET by id returns every submitted field plus _id and createdAt."""
        student_id = await _create(test_client, auth_headers, student_data)

        response = await test_client.get(f"/students/{student_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == student_id
        for key, value in student_data.items():
            assert body[key] == value
        assert body["createdAt"] is not None

    @pytest.mark.asyncio
    async def test_list_returns_created(self, test_client, auth_headers, student_data):
        """A created student shows up in the list."""
        student_id = await _create(test_client, auth_headers, student_data)

        response = await test_client.get("/students")

        assert [student["_id"] for student in response.json()] == [student_id]

    @pytest.mark.asyncio
    async def test_malformed_id_returns_400(self, test_client):
        """A path id that is not an ObjectId is a client error."""
        response = await test_client.get("/students/not-an-id")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid student id"}

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, test_client):
        """A well-formed id with no document is a 404."""
        response = await test_client.get(f"/students/{ObjectId()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Student not found"}


class TestAuthGate:

    @pytest.mark.asyncio
    async def test_create_without_token(self, test_client, memory_store, student_data):
        """POST without Authorization is rejected before anything is written."""
        response = await test_client.post("/students", json=student_data)

        assert response.status_code == 401
        assert response.json() == {"message": "No token provided"}
        assert memory_store.students.documents == {}

    @pytest.mark.asyncio
    async def test_create_with_invalid_token(self, test_client, memory_store, student_data):
        """A token that fails verification is rejected as invalid."""
        response = await test_client.post(
            "/students", json=student_data, headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid token"}
        assert memory_store.students.documents == {}

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_counts_as_missing(self, test_client, student_data):
        """Basic credentials are not a bearer token."""
        response = await test_client.post(
            "/students", json=student_data, headers={"Authorization": "Basic dXNlcjpwdw=="}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_put_and_delete_without_token_do_not_mutate(
        self, test_client, memory_store, auth_headers, student_data
    ):
        """Unauthenticated PUT and DELETE leave the stored document alone."""
        student_id = await _create(test_client, auth_headers, student_data)
        before = dict(memory_store.students.documents)

        put = await test_client.put(f"/students/{student_id}", json={**student_data, "year": 4})
        delete = await test_client.delete(f"/students/{student_id}")

        assert put.status_code == 401
        assert delete.status_code == 401
        assert memory_store.students.documents == before


class TestWrites:

    @pytest.mark.asyncio
    async def test_create_returns_201(self, test_client, auth_headers, student_data):
        """Create answers 201 with the success message."""
        response = await test_client.post("/students", json=student_data, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["message"] == "Student created successfully"

    @pytest.mark.asyncio
    async def test_create_missing_year(self, test_client, memory_store, auth_headers, student_data):
        """A missing field is a 400 and nothing is stored."""
        del student_data["year"]

        response = await test_client.post("/students", json=student_data, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}
        assert memory_store.students.documents == {}

    @pytest.mark.asyncio
    async def test_create_with_undecodable_json(self, test_client, auth_headers):
        """A body that is not JSON is a 400."""
        response = await test_client.post(
            "/students",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_replace_returns_204(self, test_client, memory_store, auth_headers, student_data):
        """Replace answers 204 with no body and stores the new values."""
        student_id = await _create(test_client, auth_headers, student_data)

        response = await test_client.put(
            f"/students/{student_id}", json={**student_data, "year": 3}, headers=auth_headers
        )

        assert response.status_code == 204
        assert response.content == b""
        assert memory_store.students.documents[ObjectId(student_id)]["year"] == 3

    @pytest.mark.asyncio
    async def test_replace_unknown_id(self, test_client, auth_headers, student_data):
        """Replacing a document that does not exist is a 404."""
        response = await test_client.put(
            f"/students/{ObjectId()}", json=student_data, headers=auth_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_replace_malformed_id(self, test_client, auth_headers, student_data):
        """Replacing with a malformed id is a 400."""
        response = await test_client.put("/students/123", json=student_data, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid student id"}

    @pytest.mark.asyncio
    async def test_replace_missing_field(self, test_client, auth_headers, student_data):
        """An empty string counts as missing on replace too."""
        student_id = await _create(test_client, auth_headers, student_data)

        response = await test_client.put(
            f"/students/{student_id}", json={**student_data, "lastName": ""}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}

    @pytest.mark.asyncio
    async def test_delete_returns_204_then_404(self, test_client, auth_headers, student_data):
        """The first delete succeeds, the second finds nothing."""
        student_id = await _create(test_client, auth_headers, student_data)

        first = await test_client.delete(f"/students/{student_id}", headers=auth_headers)
        second = await test_client.delete(f"/students/{student_id}", headers=auth_headers)

        assert first.status_code == 204
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, test_client, auth_headers):
        """Deleting with a malformed id is a 400."""
        response = await test_client.delete("/students/xyz", headers=auth_headers)

        assert response.status_code == 400


class TestStoredValues:

    @pytest.mark.asyncio
    async def test_boolean_kept_as_boolean(
        self, test_client, memory_store, auth_headers, student_data
    ):
        """`true` is stored and returned as true, not coerced to 1."""
        student_id = await _create(test_client, auth_headers, {**student_data, "year": True})

        stored = memory_store.students.documents[ObjectId(student_id)]
        body = (await test_client.get(f"/students/{student_id}")).json()

        assert stored["year"] is True
        assert body["year"] is True

    @pytest.mark.asyncio
    async def test_numeric_string_kept_as_string(self, test_client, auth_headers, student_data):
        """Numeric strings stay strings and floats stay floats."""
        student_id = await _create(
            test_client, auth_headers, {**student_data, "year": "2", "registrationNumber": 2.5}
        )

        body = (await test_client.get(f"/students/{student_id}")).json()

        assert body["year"] == "2"
        assert body["registrationNumber"] == 2.5

    @pytest.mark.asyncio
    async def test_nested_value_passed_through(self, test_client, auth_headers, student_data):
        """Objects and arrays are stored as sent."""
        course = {"name": "CS", "modules": ["algorithms", "networks"]}
        student_id = await _create(test_client, auth_headers, {**student_data, "course": course})

        body = (await test_client.get(f"/students/{student_id}")).json()

        assert body["course"] == course

    @pytest.mark.asyncio
    async def test_false_counts_as_missing(
        self, test_client, memory_store, auth_headers, student_data
    ):
        """`false` is present but falsy, so it is rejected like an empty field."""
        response = await test_client.post(
            "/students", json={**student_data, "year": False}, headers=auth_headers
        )

        assert response.status_code == 400
        assert memory_store.students.documents == {}


class TestStorageFailure:

    @pytest.mark.asyncio
    async def test_list_failure_returns_500_with_detail(self, test_client, memory_store):
        """A driver error surfaces as a 500 echoing the driver message."""
        memory_store.students.find_all = AsyncMock(
            side_effect=ServerSelectionTimeoutError("No servers found yet")
        )

        response = await test_client.get("/students")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal server error",
            "error": "No servers found yet",
        }
