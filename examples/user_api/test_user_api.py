"""Tests for the user API example — CRUD, groups, binding, validation."""

from mows.testing import TestClient


class TestIndex:
    async def test_welcome(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.json() == {"message": "Welcome to MOWS API"}


class TestUsers:
    async def test_create_and_fetch(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            created = await client.post(
                "/api/users", json={"name": "Ada", "email": "ada@example.com"}
            )
            assert created.status == 201
            user = created.json()
            assert user == {"id": "1", "name": "Ada", "email": "ada@example.com"}

            fetched = await client.get("/api/users/1")
            assert fetched.json() == user

            listed = await client.get("/api/users")
            assert listed.json() == [user]

    async def test_validation_failure(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            response = await client.post("/api/users", json={"name": "Al", "email": "nope"})
            assert response.status == 400
            assert response.json()["error"].startswith("validation failed: User.name")

    async def test_update(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            await client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})
            response = await client.put(
                "/api/users/1", json={"name": "Grace", "email": "grace@example.com"}
            )
            assert response.status == 200
            assert response.json()["name"] == "Grace"

    async def test_delete(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            await client.post("/api/users", json={"name": "Ada", "email": "ada@example.com"})
            deleted = await client.delete("/api/users/1")
            assert deleted.status == 204

            missing = await client.get("/api/users/1")
            assert missing.status == 400
            assert missing.json() == {"error": "user not found"}

    async def test_unknown_route(self, example_engine) -> None:
        async with TestClient(example_engine) as client:
            response = await client.get("/api/nothing/here/at/all")
            assert response.status == 404
