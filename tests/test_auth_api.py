"""Tests for registration, login and profiles."""
import pytest


async def register(client, email="a@b.com", password="secret123", user_type="client", name="Ana"):
    return await client.post("/api/register", json={
        "name": name,
        "email": email,
        "password": password,
        "userType": user_type,
    })


@pytest.mark.asyncio
async def test_register(client):
    response = await register(client)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "a@b.com"
    assert body["userType"] == "client"
    assert "password" not in body and "hashedPassword" not in body


@pytest.mark.asyncio
async def test_duplicate_email_keeps_first_user(client):
    first = await register(client, password="first-pass")
    second = await register(client, password="second-pass", name="Outra")

    assert second.status_code == 400
    assert second.json()["message"] == "Email already registered"

    response = await client.post("/api/auth/login", json={
        "email": "a@b.com", "password": "first-pass", "userType": "client"
    })
    assert response.status_code == 200
    assert response.json()["user"]["id"] == first.json()["id"]
    assert response.json()["user"]["name"] == "Ana"


@pytest.mark.asyncio
async def test_admin_cannot_self_register(client):
    response = await register(client, user_type="admin")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_register_validation(client):
    response = await client.post("/api/register", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


@pytest.mark.asyncio
async def test_login_returns_profile_and_token(client, graph):
    response = await client.post("/api/auth/login", json={
        "email": "joao@cliente.com", "password": "secret123", "userType": "client"
    })

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["client"]["id"] == graph.client.id

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "joao@cliente.com"


@pytest.mark.asyncio
@pytest.mark.parametrize("password, user_type", [
    ("wrong-password", "client"),
    ("secret123", "provider"),
])
async def test_login_mismatch(client, graph, password, user_type):
    response = await client.post("/api/auth/login", json={
        "email": "joao@cliente.com", "password": password, "userType": user_type
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_valid_token(client):
    response = await client.get("/api/auth/me")
    assert response.status_code in (401, 403)

    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_profile(client, graph):
    response = await client.get(f"/api/auth/profile/{graph.provider_user.id}")
    assert response.status_code == 200
    assert response.json()["user"]["provider"]["id"] == graph.provider.id

    response = await client.get("/api/auth/profile/unknown")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_profiles(client):
    client_user = (await register(client, email="cli@x.com")).json()
    provider_user = (await register(client, email="pro@x.com", user_type="provider")).json()

    response = await client.post("/api/clients", json={"userId": client_user["id"], "address": "Rua A"})
    assert response.status_code == 201
    assert response.json()["client"]["address"] == "Rua A"

    response = await client.post("/api/clients", json={"userId": client_user["id"]})
    assert response.status_code == 400

    response = await client.post("/api/providers", json={"userId": client_user["id"]})
    assert response.status_code == 400

    response = await client.post("/api/providers", json={
        "userId": provider_user["id"], "specialties": ["Perfuração"]
    })
    assert response.status_code == 201
    assert response.json()["provider"]["specialties"] == ["Perfuração"]

    response = await client.post("/api/clients", json={"userId": "missing"})
    assert response.status_code == 404
