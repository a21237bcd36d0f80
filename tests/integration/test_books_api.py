"""
Integration tests for the book endpoints, end to end through SQLite.
"""

import uuid

import pytest

pytestmark = pytest.mark.asyncio


async def create(client, payload) -> str:
    """POST a book and return the Location path."""
    response = await client.post("/api/books", json=payload)
    assert response.status_code == 201
    return response.headers["location"]


class TestSystemEndpoints:
    """Tests for root and health endpoints."""

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["books"] == "/api/books"

    async def test_health_reports_database_component(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("healthy", "degraded")
        assert "database" in data["components"]


class TestBooksEndpoints:
    """Tests for book CRUD endpoints."""

    async def test_empty_catalog_lists_empty_array(self, client):
        response = await client.get("/api/books")

        assert response.status_code == 200
        assert response.json() == []

    async def test_created_book_is_retrievable_at_location(self, client, sample_book_data):
        location = await create(client, sample_book_data)

        response = await client.get(location)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == location.rsplit("/", 1)[-1]
        for field in ("title", "author", "isbn", "publisher", "publish_date", "description", "copies"):
            assert data[field] == sample_book_data[field]
        assert data["created_at"] == data["updated_at"]
        assert "deleted_at" not in data

    async def test_client_supplied_id_is_ignored(self, client, sample_book_data):
        supplied = str(uuid.uuid4())

        location = await create(client, {**sample_book_data, "id": supplied})

        assert not location.endswith(supplied)

    async def test_list_contains_created_books(self, client, sample_book_data):
        await create(client, sample_book_data)
        await create(client, {**sample_book_data, "isbn": "9780060512750"})

        response = await client.get("/api/books")

        assert response.status_code == 200
        assert len(response.json()) == 2

    async def test_duplicate_isbn_is_storage_failure(self, client, sample_book_data):
        await create(client, sample_book_data)

        response = await client.post("/api/books", json=sample_book_data)

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_ERROR"

    async def test_put_is_full_replace(self, client, sample_book_data):
        location = await create(client, sample_book_data)
        original = (await client.get(location)).json()
        replacement = {
            "title": "The Dispossessed",
            "author": "Ursula K. Le Guin",
            "isbn": "9780061054884",
            "publisher": "Harper & Row",
            "publish_date": "1974-05-01",
            "copies": 0,
        }

        response = await client.put(location, json=replacement)

        assert response.status_code == 200
        assert response.content == b""
        updated = (await client.get(location)).json()
        assert updated["title"] == "The Dispossessed"
        assert updated["copies"] == 0
        assert updated["description"] == ""
        assert updated["id"] == original["id"]
        assert updated["created_at"] == original["created_at"]
        assert updated["updated_at"] >= original["updated_at"]

    async def test_put_to_taken_isbn_is_storage_failure(self, client, sample_book_data):
        await create(client, sample_book_data)
        location = await create(client, {**sample_book_data, "isbn": "9780060512750"})

        response = await client.put(location, json=sample_book_data)

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_ERROR"
        assert (await client.get(location)).json()["isbn"] == "9780060512750"

    async def test_oversized_copies_rejected_before_storage(self, client, sample_book_data):
        response = await client.post("/api/books", json={**sample_book_data, "copies": 10**20})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert (await client.get("/api/books")).json() == []

    async def test_delete_then_get_is_404(self, client, sample_book_data):
        location = await create(client, sample_book_data)

        response = await client.delete(location)

        assert response.status_code == 204
        assert (await client.get(location)).status_code == 404
        assert (await client.delete(location)).status_code == 404

    async def test_deleted_isbn_can_be_reused(self, client, sample_book_data):
        location = await create(client, sample_book_data)
        await client.delete(location)

        await create(client, sample_book_data)


class TestUnknownBook:
    """Well-formed ids with no matching row."""

    async def test_get_is_404(self, client):
        response = await client.get(f"/api/books/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "book not found"

    async def test_put_is_404(self, client, sample_book_data):
        response = await client.put(f"/api/books/{uuid.uuid4()}", json=sample_book_data)

        assert response.status_code == 404

    async def test_delete_is_404(self, client):
        response = await client.delete(f"/api/books/{uuid.uuid4()}")

        assert response.status_code == 404

    async def test_malformed_id_is_400(self, client):
        response = await client.get("/api/books/12345")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid book ID"
