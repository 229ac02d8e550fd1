"""Genre Routes — CRUD, name uniqueness, nested books, delete semantics.

Invariants:
    - Duplicate name -> 409 (create and rename)
    - List sorted by name ascending
    - Deleting a genre keeps its books with genreId = null
"""

from uuid import uuid4

from library_api.infrastructure.repositories import SqlGenreRepository


async def test_create_genre(client):
    res = await client.post(
        "/api/genres", json={"name": "Fantasy", "description": "Dragons"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Genre created successfully"
    assert body["data"]["name"] == "Fantasy"
    assert body["data"]["description"] == "Dragons"
    assert "createdAt" in body["data"]
    assert "updatedAt" in body["data"]


async def test_create_genre_strips_name(client):
    res = await client.post("/api/genres", json={"name": "  Mystery  "})
    assert res.json()["data"]["name"] == "Mystery"


async def test_create_genre_missing_name_returns_400(client):
    res = await client.post("/api/genres", json={"description": "no name"})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"


async def test_create_genre_blank_name_returns_400(client):
    res = await client.post("/api/genres", json={"name": "   "})
    assert res.status_code == 400


async def test_create_duplicate_genre_returns_409(client, create_genre):
    await create_genre("Romance")
    res = await client.post("/api/genres", json={"name": "Romance"})
    assert res.status_code == 409
    assert res.json()["message"] == "Genre already exists"

    listing = await client.get("/api/genres")
    assert len(listing.json()["data"]) == 1


async def test_list_genres_sorted_by_name(client, create_genre):
    for name in ("Western", "Biography", "Horror"):
        await create_genre(name)
    res = await client.get("/api/genres")
    assert res.status_code == 200
    assert [g["name"] for g in res.json()["data"]] == [
        "Biography", "Horror", "Western",
    ]


async def test_list_genres_empty(client):
    res = await client.get("/api/genres")
    assert res.json()["data"] == []


async def test_genre_detail_nests_books(client, create_genre, create_book):
    genre = await create_genre("Classics")
    await create_book("Moby Dick", price=15, genreId=genre["id"])
    await create_book("Unrelated")

    res = await client.get(f"/api/genres/{genre['id']}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["name"] == "Classics"
    assert [b["title"] for b in data["books"]] == ["Moby Dick"]
    assert data["books"][0]["price"] == 15


async def test_genre_detail_unknown_returns_404(client):
    res = await client.get(f"/api/genres/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["message"] == "Genre not found"


async def test_update_genre_fields(client, create_genre):
    genre = await create_genre("Sci-Fi", "Space")
    res = await client.patch(
        f"/api/genres/{genre['id']}", json={"description": None},
    )
    assert res.status_code == 200
    assert res.json()["data"]["description"] is None
    assert res.json()["data"]["name"] == "Sci-Fi"

    res = await client.patch(
        f"/api/genres/{genre['id']}", json={"name": "Science Fiction"},
    )
    assert res.json()["data"]["name"] == "Science Fiction"


async def test_update_genre_keeping_own_name_is_allowed(client, create_genre):
    genre = await create_genre("Poetry")
    res = await client.patch(
        f"/api/genres/{genre['id']}", json={"name": "Poetry", "description": "x"},
    )
    assert res.status_code == 200


async def test_update_genre_to_taken_name_returns_409(client, create_genre):
    await create_genre("Thriller")
    other = await create_genre("Crime")
    res = await client.patch(f"/api/genres/{other['id']}", json={"name": "Thriller"})
    assert res.status_code == 409


async def test_update_genre_null_name_returns_400(client, create_genre):
    genre = await create_genre("Humor")
    res = await client.patch(f"/api/genres/{genre['id']}", json={"name": None})
    assert res.status_code == 400


async def test_update_unknown_genre_returns_404(client):
    res = await client.patch(f"/api/genres/{uuid4()}", json={"name": "x"})
    assert res.status_code == 404


async def test_delete_genre_keeps_books_unassigned(client, create_genre, create_book):
    genre = await create_genre("Satire")
    book = await create_book("Candide", genreId=genre["id"])

    res = await client.delete(f"/api/genres/{genre['id']}")
    assert res.status_code == 200
    assert res.json()["data"] is None

    res = await client.get(f"/api/books/{book['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["genreId"] is None
    assert res.json()["data"]["genre"] is None

    assert (await client.get(f"/api/genres/{genre['id']}")).status_code == 404


async def test_delete_unknown_genre_returns_404(client):
    res = await client.delete(f"/api/genres/{uuid4()}")
    assert res.status_code == 404


async def test_store_unique_violation_on_name_returns_409(
    client, create_genre, monkeypatch,
):
    await create_genre("Dup")

    async def _no_match(self, name):
        return None

    monkeypatch.setattr(SqlGenreRepository, "get_by_name", _no_match)
    res = await client.post("/api/genres", json={"name": "Dup"})
    assert res.status_code == 409
    assert res.json()["message"] == "Data already exists"

    listing = await client.get("/api/genres")
    assert [g["name"] for g in listing.json()["data"]] == ["Dup"]
