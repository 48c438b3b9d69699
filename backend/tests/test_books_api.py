"""
Bookshelf Backend — /books API Tests
======================================

What:  End-to-end tests through the FastAPI app (middleware, dependencies,
       exception handlers, repository, in-memory SQLite).
Why:   Status codes and error bodies are the public contract of the service.
How:   HTTPX AsyncClient over ASGITransport; the session dependency is
       overridden in conftest so every test starts with an empty table.

What we test:
    ✅ Create → get → update → delete → 404 lifecycle
    ✅ 400 bodies for bad ids, page/limit, JSON and schema violations
    ✅ Pagination and empty pages
    ✅ Missing book on update/delete (500 default, 404 strict)
    ✅ Store failures and unexpected exceptions → 500 without details
    ✅ X-Request-ID propagation, unknown routes, health check
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from bookshelf.config import settings
from bookshelf.routes.deps import get_book_repository, get_book_service


class TestBookLifecycle:
    """The full CRUD round trip against a real store."""

    @pytest.mark.asyncio
    async def test_create_get_update_delete(self, test_client, sample_book_payload):
        created = await test_client.post("/books", json=sample_book_payload)
        assert created.status_code == 201
        book = created.json()
        assert isinstance(book["id"], int)
        assert book["title"] == "T"
        assert book["publishedDate"] == "2023-11-21T00:00:00.000Z"

        fetched = await test_client.get(f"/books/{book['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == book

        updated = await test_client.put(f"/books/{book['id']}", json={"title": "U"})
        assert updated.status_code == 200
        assert updated.json() == {**book, "title": "U"}

        deleted = await test_client.delete(f"/books/{book['id']}")
        assert deleted.status_code == 204
        assert deleted.content == b""

        gone = await test_client.get(f"/books/{book['id']}")
        assert gone.status_code == 404
        assert gone.json() == {"error": "Book not found"}

    @pytest.mark.asyncio
    async def test_published_date_is_normalized_to_utc(self, test_client, sample_book_payload):
        payload = {**sample_book_payload, "publishedDate": "2024-01-01T10:30:00+02:00"}

        created = await test_client.post("/books", json=payload)
        fetched = await test_client.get(f"/books/{created.json()['id']}")

        assert created.json()["publishedDate"] == "2024-01-01T08:30:00.000Z"
        assert fetched.json()["publishedDate"] == "2024-01-01T08:30:00.000Z"

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, test_client, sample_book_payload):
        first = await test_client.post("/books", json={**sample_book_payload, "id": 500})
        assert first.status_code == 201
        assert first.json()["id"] != 500

    @pytest.mark.asyncio
    async def test_update_with_null_and_empty_body_changes_nothing(
        self, test_client, sample_book_payload
    ):
        book = (await test_client.post("/books", json=sample_book_payload)).json()

        with_null = await test_client.put(f"/books/{book['id']}", json={"title": None})
        empty = await test_client.put(f"/books/{book['id']}", json={})

        assert with_null.status_code == 200
        assert with_null.json() == book
        assert empty.json() == book

    @pytest.mark.asyncio
    async def test_update_date_and_pages(self, test_client, sample_book_payload):
        book = (await test_client.post("/books", json=sample_book_payload)).json()

        response = await test_client.put(
            f"/books/{book['id']}",
            json={"publishedDate": "1999-12-31", "pages": 321},
        )

        assert response.status_code == 200
        assert response.json()["publishedDate"] == "1999-12-31T00:00:00.000Z"
        assert response.json()["pages"] == 321
        assert response.json()["title"] == "T"


class TestListBooks:
    """GET /books with and without pagination."""

    @pytest.mark.asyncio
    async def test_empty_store(self, test_client):
        response = await test_client.get("/books")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_pagination(self, test_client, sample_book_payload):
        for n in range(3):
            await test_client.post("/books", json={**sample_book_payload, "title": f"B{n}"})

        all_books = await test_client.get("/books")
        page_two = await test_client.get("/books", params={"page": 2, "limit": 2})
        past_end = await test_client.get("/books", params={"page": 5, "limit": 2})

        assert [b["title"] for b in all_books.json()] == ["B0", "B1", "B2"]
        assert [b["title"] for b in page_two.json()] == ["B2"]
        assert past_end.status_code == 200
        assert past_end.json() == []

    @pytest.mark.asyncio
    async def test_default_limit(self, test_client, sample_book_payload):
        for n in range(settings.default_page_size + 2):
            await test_client.post("/books", json={**sample_book_payload, "title": f"B{n}"})

        response = await test_client.get("/books")

        assert len(response.json()) == settings.default_page_size

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query,message", [
        ({"page": "0"}, "Invalid page parameter. Must be a positive integer."),
        ({"page": "abc"}, "Invalid page parameter. Must be a positive integer."),
        ({"limit": "-5"}, "Invalid limit parameter. Must be a positive integer."),
        ({"page": "2", "limit": "0"}, "Invalid limit parameter. Must be a positive integer."),
    ])
    async def test_invalid_paging(self, test_client, query, message):
        response = await test_client.get("/books", params=query)
        assert response.status_code == 400
        assert response.json() == {"error": message}


class TestRequestValidation:
    """400 responses produced before the store is touched."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    async def test_invalid_id_never_reaches_store(self, app, test_client, mock_repository, method):
        app.dependency_overrides[get_book_repository] = lambda: mock_repository
        kwargs = {"json": {"title": "U"}} if method == "put" else {}

        response = await getattr(test_client, method)("/books/abc", **kwargs)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ID parameter. Must be a positive integer."}
        mock_repository.get_by_id.assert_not_awaited()
        mock_repository.update.assert_not_awaited()
        mock_repository.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_reports_every_violation(self, test_client, sample_book_payload):
        payload = {**sample_book_payload, "title": "", "isbn": "123", "pages": 0}

        response = await test_client.post("/books", json=payload)

        assert response.status_code == 400
        assert response.json() == {"errors": [
            "title should not be empty",
            "isbn must be an ISBN",
            "pages must not be less than 1",
        ]}

    @pytest.mark.asyncio
    async def test_create_with_empty_body(self, test_client):
        response = await test_client.post("/books")
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 12

    @pytest.mark.asyncio
    async def test_invalid_body_creates_nothing(self, test_client, sample_book_payload):
        await test_client.post("/books", json={**sample_book_payload, "isbn": "978-3-16-148410-1"})
        assert (await test_client.get("/books")).json() == []

    @pytest.mark.asyncio
    async def test_update_with_invalid_field(self, test_client, sample_book_payload):
        book = (await test_client.post("/books", json=sample_book_payload)).json()

        response = await test_client.put(f"/books/{book['id']}", json={"pages": "many"})

        assert response.status_code == 400
        assert response.json() == {"errors": [
            "pages must not be less than 1",
            "pages must be an integer number",
        ]}
        assert (await test_client.get(f"/books/{book['id']}")).json() == book

    @pytest.mark.asyncio
    async def test_bad_id_is_reported_before_bad_body(self, test_client):
        response = await test_client.put("/books/x1", json={"pages": 0})
        assert response.json() == {"error": "Invalid ID parameter. Must be a positive integer."}

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/books",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Malformed JSON body"}

    @pytest.mark.asyncio
    async def test_body_must_be_an_object(self, test_client):
        response = await test_client.post("/books", json=["title"])
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be a JSON object"}


class TestMissingBookOnWrite:
    """Update/delete of an id that does not exist."""

    @pytest.mark.asyncio
    async def test_update_missing_is_500(self, test_client):
        response = await test_client.put("/books/999", json={"title": "U"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update book"}

    @pytest.mark.asyncio
    async def test_delete_missing_is_500(self, test_client):
        response = await test_client.delete("/books/999")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete book"}

    @pytest.mark.asyncio
    async def test_strict_not_found(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)

        updated = await test_client.put("/books/999", json={"title": "U"})
        deleted = await test_client.delete("/books/999")

        assert updated.status_code == 404
        assert deleted.status_code == 404
        assert deleted.json() == {"error": "Book not found"}


class TestOutOfRangeInput:
    """Well-formed values that exceed what the store or the calendar can hold."""

    HUGE = "99999999999999999999"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("published", [
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:59:59-01:00",
    ])
    async def test_date_outside_utc_calendar(self, test_client, sample_book_payload, published):
        payload = {**sample_book_payload, "publishedDate": published}

        created = await test_client.post("/books", json=payload)

        assert created.status_code == 400
        assert created.json() == {"errors": ["publishedDate must be a valid ISO 8601 date string"]}

    @pytest.mark.asyncio
    async def test_date_outside_utc_calendar_on_update(self, test_client, sample_book_payload):
        book = (await test_client.post("/books", json=sample_book_payload)).json()

        response = await test_client.put(
            f"/books/{book['id']}", json={"publishedDate": "0001-01-01T00:00:00+01:00"}
        )

        assert response.status_code == 400
        assert response.json() == {"errors": ["publishedDate must be a valid ISO 8601 date string"]}

    @pytest.mark.asyncio
    async def test_last_utc_second_is_accepted(self, test_client, sample_book_payload):
        payload = {**sample_book_payload, "publishedDate": "9999-12-31T23:59:59Z"}

        created = await test_client.post("/books", json=payload)

        assert created.status_code == 201
        assert created.json()["publishedDate"] == "9999-12-31T23:59:59.000Z"

    @pytest.mark.asyncio
    async def test_huge_page_is_empty(self, test_client, sample_book_payload):
        await test_client.post("/books", json=sample_book_payload)

        response = await test_client.get("/books", params={"page": self.HUGE})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_huge_limit_returns_everything(self, test_client, sample_book_payload):
        for _ in range(2):
            await test_client.post("/books", json=sample_book_payload)

        response = await test_client.get("/books", params={"limit": self.HUGE})

        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_huge_id_is_not_found(self, test_client):
        response = await test_client.get(f"/books/{self.HUGE}")
        assert response.status_code == 404
        assert response.json() == {"error": "Book not found"}

    @pytest.mark.asyncio
    async def test_huge_id_on_write(self, test_client):
        updated = await test_client.put(f"/books/{self.HUGE}", json={"title": "U"})
        deleted = await test_client.delete(f"/books/{self.HUGE}")

        assert updated.json() == {"error": "Failed to update book"}
        assert deleted.json() == {"error": "Failed to delete book"}

    @pytest.mark.asyncio
    async def test_huge_id_on_write_strict(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "strict_not_found", True)

        updated = await test_client.put(f"/books/{self.HUGE}", json={"title": "U"})
        deleted = await test_client.delete(f"/books/{self.HUGE}")

        assert updated.status_code == 404
        assert deleted.status_code == 404


class TestServerErrors:
    """Failures inside the store or the handlers."""

    @pytest.mark.asyncio
    async def test_store_failure_hides_details(self, app, test_client, mock_repository):
        mock_repository.list.side_effect = OperationalError(
            "SELECT", {}, Exception("password authentication failed")
        )
        app.dependency_overrides[get_book_repository] = lambda: mock_repository

        response = await test_client.get("/books")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch books"}
        assert "password" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, app):
        service = MagicMock()
        service.get_book = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_book_service] = lambda: service

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/books/1")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}


class TestCrossCutting:
    """Middleware, unknown routes and the health check."""

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/books")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_is_echoed_on_errors(self, test_client):
        response = await test_client.get("/books/abc", headers={"X-Request-ID": "trace-123"})
        assert response.status_code == 400
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/authors")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, test_client):
        response = await test_client.patch("/books/1", json={})
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"
