"""
Student API — Course Route Tests
=================================

Courses share the student pipeline; these tests cover the course-specific
fields, messages and the full CRUD cycle.
"""

import pytest
from bson import ObjectId


class TestCourses:

    @pytest.mark.asyncio
    async def test_crud_cycle(self, test_client, auth_headers, course_data):
        """Create, read, replace and delete a course end to end."""
        created = await test_client.post("/courses", json=course_data, headers=auth_headers)
        assert created.status_code == 201
        assert created.json()["message"] == "Course created successfully"
        course_id = created.json()["id"]

        fetched = await test_client.get(f"/courses/{course_id}")
        assert fetched.status_code == 200
        assert fetched.json()["code"] == "CS201"
        assert fetched.json()["credits"] == 4

        replaced = await test_client.put(
            f"/courses/{course_id}", json={**course_data, "semester": "Spring"}, headers=auth_headers
        )
        assert replaced.status_code == 204
        assert (await test_client.get(f"/courses/{course_id}")).json()["semester"] == "Spring"

        deleted = await test_client.delete(f"/courses/{course_id}", headers=auth_headers)
        assert deleted.status_code == 204

        gone = await test_client.get(f"/courses/{course_id}")
        assert gone.status_code == 404
        assert gone.json() == {"message": "Course not found"}

    @pytest.mark.asyncio
    async def test_list(self, test_client, auth_headers, course_data):
        """Created courses appear in the list."""
        await test_client.post("/courses", json=course_data, headers=auth_headers)

        response = await test_client.get("/courses")

        assert response.status_code == 200
        assert [course["name"] for course in response.json()] == ["Algorithms"]

    @pytest.mark.asyncio
    async def test_missing_department(self, test_client, memory_store, auth_headers, course_data):
        """A missing course field is a 400 and stores nothing."""
        del course_data["department"]

        response = await test_client.post("/courses", json=course_data, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}
        assert memory_store.courses.documents == {}

    @pytest.mark.asyncio
    async def test_create_requires_token(self, test_client, course_data):
        """POST /courses without a token is a 401."""
        response = await test_client.post("/courses", json=course_data)

        assert response.status_code == 401
        assert response.json() == {"message": "No token provided"}

    @pytest.mark.asyncio
    async def test_put_and_delete_require_token(self, test_client, course_data):
        """PUT and DELETE on a course need a token."""
        course_id = str(ObjectId())

        put = await test_client.put(f"/courses/{course_id}", json=course_data)
        delete = await test_client.delete(f"/courses/{course_id}")

        assert put.status_code == 401
        assert delete.status_code == 401

    @pytest.mark.asyncio
    async def test_malformed_and_unknown_ids(self, test_client):
        """Malformed course ids are a 400, unknown ones a 404."""
        malformed = await test_client.get("/courses/nope")
        unknown = await test_client.get(f"/courses/{ObjectId()}")

        assert malformed.status_code == 400
        assert malformed.json() == {"message": "Invalid course id"}
        assert unknown.status_code == 404
