from conftest import register

from money_manager.crud.category import DEFAULT_CATEGORIES


async def test_new_user_gets_default_categories(client, auth_headers) -> None:
    response = await client.get("/api/v1/categories", headers=auth_headers)

    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == len(DEFAULT_CATEGORIES) == 12
    assert all(c["isDefault"] for c in categories)
    names = [c["name"] for c in categories]
    assert names == sorted(names)


async def test_type_filter_includes_both(client, auth_headers) -> None:
    created = await client.post(
        "/api/v1/categories", json={"name": "Gifts", "type": "both"}, headers=auth_headers
    )
    assert created.status_code == 201

    income = (await client.get("/api/v1/categories", params={"type": "income"}, headers=auth_headers)).json()

    assert {c["name"] for c in income} == {"Salary", "Freelance", "Investment", "Gifts"}


async def test_create_applies_defaults_and_rejects_duplicates(client, auth_headers) -> None:
    created = await client.post("/api/v1/categories", json={"name": " Pets "}, headers=auth_headers)
    assert created.status_code == 201
    body = created.json()
    assert body["name"] == "Pets"
    assert body["type"] == "both"
    assert body["icon"] == "📁"
    assert body["color"] == "#6366f1"
    assert body["isDefault"] is False

    duplicate = await client.post("/api/v1/categories", json={"name": "Pets"}, headers=auth_headers)
    assert duplicate.status_code == 409


async def test_invalid_color_is_rejected(client, auth_headers) -> None:
    response = await client.post(
        "/api/v1/categories", json={"name": "Odd", "color": "red"}, headers=auth_headers
    )

    assert response.status_code == 422


async def test_rename_onto_existing_name_conflicts(client, auth_headers) -> None:
    pets = (await client.post("/api/v1/categories", json={"name": "Pets"}, headers=auth_headers)).json()

    clash = await client.put(f"/api/v1/categories/{pets['id']}", json={"name": "Food"}, headers=auth_headers)
    ok = await client.put(
        f"/api/v1/categories/{pets['id']}", json={"name": "Animals", "color": "#000000"}, headers=auth_headers
    )

    assert clash.status_code == 409
    assert ok.status_code == 200
    assert ok.json()["name"] == "Animals"
    assert ok.json()["color"] == "#000000"


async def test_default_categories_cannot_be_deleted(client, auth_headers) -> None:
    food = next(
        c for c in (await client.get("/api/v1/categories", headers=auth_headers)).json() if c["name"] == "Food"
    )

    response = await client.delete(f"/api/v1/categories/{food['id']}", headers=auth_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Default categories cannot be deleted"


async def test_custom_category_can_be_deleted(client, auth_headers) -> None:
    pets = (await client.post("/api/v1/categories", json={"name": "Pets"}, headers=auth_headers)).json()

    deleted = await client.delete(f"/api/v1/categories/{pets['id']}", headers=auth_headers)
    fetched = await client.get(f"/api/v1/categories/{pets['id']}", headers=auth_headers)

    assert deleted.status_code == 204
    assert fetched.status_code == 404


async def test_other_users_categories_are_invisible(client, auth_headers) -> None:
    pets = (await client.post("/api/v1/categories", json={"name": "Pets"}, headers=auth_headers)).json()
    bob = await register(client, email="bob@example.com", name="Bob")
    bob_headers = {"Authorization": f"Bearer {bob['token']}"}

    assert (await client.get(f"/api/v1/categories/{pets['id']}", headers=bob_headers)).status_code == 404
    assert (await client.delete(f"/api/v1/categories/{pets['id']}", headers=bob_headers)).status_code == 404
    names = {c["name"] for c in (await client.get("/api/v1/categories", headers=bob_headers)).json()}
    assert "Pets" not in names
