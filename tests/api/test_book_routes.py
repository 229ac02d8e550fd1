"""Book Routes — create/update integrity checks, listings, pagination, deletion.

Invariants:
    - Missing required field -> 400; duplicate title -> 409; unknown genre -> 404
    - Failed checks persist nothing
    - totalPages == ceil(total / limit); out-of-range page is empty with correct total
    - Partial update touches only the fields present
    - A unique violation that slips past the pre-check is still a 409
"""

import math
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm.exc import StaleDataError

from library_api.infrastructure.repositories import SqlBookRepository
from library_api.models import Book


async def _count_books(test_db) -> int:
    return await test_db.scalar(select(func.count()).select_from(Book))


async def test_create_book_without_genre_succeeds(client):
    res = await client.post("/api/books", json={
        "title": "Dune", "writer": "Frank Herbert", "publisher": "Chilton",
        "publication_year": 1965, "price": 12.5,
    })
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["title"] == "Dune"
    assert data["genreId"] is None
    assert data["genre"] is None
    assert data["stock_quantity"] == 0
    assert data["price"] == 12.5


async def test_create_book_with_genre_embeds_genre(client, create_genre):
    genre = await create_genre("Sci-Fi")
    res = await client.post("/api/books", json={
        "title": "Foundation", "author": "Isaac Asimov", "publisher": "Gnome",
        "publication_year": 1951, "price": 9, "stock": 4, "genre_id": genre["id"],
    })
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["writer"] == "Isaac Asimov"
    assert data["stock_quantity"] == 4
    assert data["genreId"] == genre["id"]
    assert data["genre"]["name"] == "Sci-Fi"


async def test_create_book_without_writer_uses_title(client):
    res = await client.post("/api/books", json={
        "title": "Anonymous Tales", "publisher": "P", "publication_year": 1900,
        "price": 1,
    })
    assert res.status_code == 201
    assert res.json()["data"]["writer"] == "Anonymous Tales"


@pytest.mark.parametrize("missing", ["title", "publisher", "publication_year", "price"])
async def test_create_book_missing_required_field_returns_400(client, missing):
    payload = {
        "title": "T", "publisher": "P", "publication_year": 2000, "price": 1,
    }
    payload.pop(missing)
    res = await client.post("/api/books", json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert any(missing in d["field"] for d in body["errors"])


async def test_create_book_negative_price_returns_400(client):
    res = await client.post("/api/books", json={
        "title": "T", "publisher": "P", "publication_year": 2000, "price": -1,
    })
    assert res.status_code == 400


async def test_create_book_unknown_genre_returns_404_and_persists_nothing(
    client, test_db,
):
    res = await client.post("/api/books", json={
        "title": "Orphan", "publisher": "P", "publication_year": 2000,
        "price": 1, "genreId": str(uuid4()),
    })
    assert res.status_code == 404
    assert res.json()["message"] == "Genre not found"
    assert await _count_books(test_db) == 0


async def test_create_duplicate_title_returns_409_and_keeps_one(
    client, create_book, test_db,
):
    await create_book("Emma")
    res = await client.post("/api/books", json={
        "title": "Emma", "publisher": "P", "publication_year": 1815, "price": 3,
    })
    assert res.status_code == 409
    assert await _count_books(test_db) == 1


async def test_duplicate_title_checked_before_genre(client, create_book):
    await create_book("Persuasion")
    res = await client.post("/api/books", json={
        "title": "Persuasion", "publisher": "P", "publication_year": 1817,
        "price": 3, "genreId": str(uuid4()),
    })
    assert res.status_code == 409


async def test_get_book_detail(client, create_book):
    book = await create_book("Ulysses")
    res = await client.get(f"/api/books/{book['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["title"] == "Ulysses"


async def test_get_unknown_book_returns_404(client):
    res = await client.get(f"/api/books/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["success"] is False


async def test_get_book_with_malformed_id_returns_400(client):
    res = await client.get("/api/books/not-a-uuid")
    assert res.status_code == 400


async def test_list_books_pagination(client, create_book):
    for i in range(7):
        await create_book(f"Book {i}")

    res = await client.get("/api/books", params={"page": 2, "limit": 3})
    assert res.status_code == 200
    data = res.json()["data"]
    assert len(data["books"]) == 3
    assert data["pagination"] == {
        "page": 2, "limit": 3, "total": 7, "totalPages": math.ceil(7 / 3),
    }


async def test_list_books_page_beyond_range_is_empty(client, create_book):
    for i in range(3):
        await create_book(f"Book {i}")
    res = await client.get("/api/books", params={"page": 5, "limit": 2})
    data = res.json()["data"]
    assert data["books"] == []
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["totalPages"] == 2


async def test_list_books_defaults_and_limit_cap(client, create_book):
    await create_book("Solo")
    res = await client.get("/api/books")
    assert res.json()["data"]["pagination"]["page"] == 1
    assert res.json()["data"]["pagination"]["limit"] == 10

    res = await client.get("/api/books", params={"limit": 5000})
    assert res.json()["data"]["pagination"]["limit"] == 100


async def test_list_books_non_integer_page_returns_400(client):
    res = await client.get("/api/books", params={"page": "abc"})
    assert res.status_code == 400


async def test_list_books_filters_case_insensitive(client, create_book, create_genre):
    horror = await create_genre("Horror")
    await create_book("The Shining", writer="Stephen King", genreId=horror["id"])
    await create_book("It", writer="Stephen King")
    await create_book("Emma", writer="Jane Austen")

    res = await client.get("/api/books", params={"title": "shin"})
    assert [b["title"] for b in res.json()["data"]["books"]] == ["The Shining"]

    res = await client.get("/api/books", params={"writer": "KING"})
    assert res.json()["data"]["pagination"]["total"] == 2

    res = await client.get("/api/books", params={"genre": "horr"})
    assert [b["title"] for b in res.json()["data"]["books"]] == ["The Shining"]


async def test_list_books_filter_treats_wildcards_literally(client, create_book):
    await create_book("100% Pure")
    await create_book("Plain")
    res = await client.get("/api/books", params={"title": "%"})
    assert [b["title"] for b in res.json()["data"]["books"]] == ["100% Pure"]


async def test_books_by_genre(client, create_book, create_genre):
    poetry = await create_genre("Poetry")
    await create_book("Leaves of Grass", genreId=poetry["id"])
    await create_book("Ariel", genreId=poetry["id"])
    await create_book("Unrelated")

    res = await client.get(f"/api/books/genre/{poetry['id']}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["genre"]["name"] == "Poetry"
    assert {b["title"] for b in data["books"]} == {"Leaves of Grass", "Ariel"}
    assert data["pagination"]["total"] == 2

    res = await client.get(
        f"/api/books/genre/{poetry['id']}", params={"title": "ari"},
    )
    assert [b["title"] for b in res.json()["data"]["books"]] == ["Ariel"]


async def test_books_by_unknown_genre_returns_404(client):
    res = await client.get(f"/api/books/genre/{uuid4()}")
    assert res.status_code == 404


async def test_update_book_partial_fields(client, create_book):
    book = await create_book("Middlemarch", price=20, description="Long")
    res = await client.patch(
        f"/api/books/{book['id']}", json={"stock_quantity": 0, "description": ""},
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["stock_quantity"] == 0
    assert data["description"] == ""
    assert data["price"] == 20
    assert data["title"] == "Middlemarch"


async def test_update_book_zero_price_is_applied(client, create_book):
    book = await create_book("Freebie", price=5)
    res = await client.patch(f"/api/books/{book['id']}", json={"price": 0})
    assert res.json()["data"]["price"] == 0


async def test_update_book_explicit_null_title_returns_400(client, create_book):
    book = await create_book("Nullable?")
    res = await client.patch(f"/api/books/{book['id']}", json={"title": None})
    assert res.status_code == 400


async def test_update_book_same_title_is_not_a_conflict(client, create_book):
    book = await create_book("Same")
    res = await client.patch(
        f"/api/books/{book['id']}", json={"title": "Same", "price": 2},
    )
    assert res.status_code == 200


async def test_update_book_to_taken_title_returns_409(client, create_book):
    await create_book("Taken")
    other = await create_book("Other")
    res = await client.patch(f"/api/books/{other['id']}", json={"title": "Taken"})
    assert res.status_code == 409


async def test_update_book_genre_assign_and_clear(client, create_book, create_genre):
    genre = await create_genre("Drama")
    book = await create_book("Hamlet")

    res = await client.patch(f"/api/books/{book['id']}", json={"genreId": genre["id"]})
    assert res.json()["data"]["genre"]["name"] == "Drama"

    res = await client.patch(f"/api/books/{book['id']}", json={"genreId": None})
    assert res.json()["data"]["genreId"] is None
    assert res.json()["data"]["genre"] is None


async def test_update_book_unknown_genre_returns_404(client, create_book):
    book = await create_book("Macbeth")
    res = await client.patch(
        f"/api/books/{book['id']}", json={"genreId": str(uuid4())},
    )
    assert res.status_code == 404


async def test_update_unknown_book_returns_404(client):
    res = await client.patch(f"/api/books/{uuid4()}", json={"price": 1})
    assert res.status_code == 404


async def test_delete_book(client, create_book):
    book = await create_book("Ephemeral")
    res = await client.delete(f"/api/books/{book['id']}")
    assert res.status_code == 200
    assert res.json() == {
        "success": True, "message": "Book deleted successfully", "data": None,
    }
    assert (await client.get(f"/api/books/{book['id']}")).status_code == 404


async def test_delete_unknown_book_returns_404(client):
    res = await client.delete(f"/api/books/{uuid4()}")
    assert res.status_code == 404


async def test_store_unique_violation_on_title_returns_409(
    client, create_book, test_db, monkeypatch,
):
    await create_book("Race")

    async def _no_match(self, title):
        return None

    monkeypatch.setattr(SqlBookRepository, "get_by_title", _no_match)
    res = await client.post("/api/books", json={
        "title": "Race", "publisher": "P", "publication_year": 2001, "price": 1,
    })
    assert res.status_code == 409
    assert res.json()["message"] == "Data already exists"
    assert res.json()["errors"] == {"code": "CONFLICT"}
    assert await _count_books(test_db) == 1


async def test_row_vanishing_during_delete_returns_404(
    client, create_book, monkeypatch,
):
    book = await create_book("Vanishing")

    async def _stale(self, book):
        raise StaleDataError("DELETE statement on table 'books' expected 1 row")

    monkeypatch.setattr(SqlBookRepository, "delete", _stale)
    res = await client.delete(f"/api/books/{book['id']}")
    assert res.status_code == 404
    assert res.json()["message"] == "Data not found"


async def test_list_books_huge_page_is_empty_not_an_error(client, create_book):
    await create_book("Only One")
    res = await client.get("/api/books", params={"page": 10**18})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["books"] == []
    assert data["pagination"]["total"] == 1
    assert data["pagination"]["totalPages"] == 1


async def test_create_book_oversized_stock_returns_400(client):
    res = await client.post("/api/books", json={
        "title": "Warehouse", "publisher": "P", "publication_year": 2000,
        "price": 1, "stock": 10**19,
    })
    assert res.status_code == 400
