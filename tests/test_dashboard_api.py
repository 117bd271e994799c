from money_manager.utils.periods import local_now

TODAY = {"category": "Food", "division": "personal", "description": "Today"}


async def _create(client, headers, **values) -> dict:
    response = await client.post("/api/v1/transactions", json={**TODAY, **values}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_overview_for_current_period(client, auth_headers) -> None:
    await _create(client, auth_headers, type="income", amount=5000, category="Salary", division="office")
    await _create(client, auth_headers, type="expense", amount=150)
    await _create(client, auth_headers, type="expense", amount=999, date="2001-01-01T00:00:00")

    response = await client.get("/api/v1/dashboard/overview", params={"period": "daily"}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "daily"
    assert body["summary"] == {
        "income": 5000.0,
        "expense": 150.0,
        "balance": 4850.0,
        "incomeCount": 1,
        "expenseCount": 1,
    }
    assert body["dateRange"]["startDate"].startswith(local_now().date().isoformat())
    assert body["categoryBreakdown"][0]["category"] == "Salary"
    assert {(row["division"], row["type"]) for row in body["divisionBreakdown"]} == {
        ("office", "income"),
        ("personal", "expense"),
    }


async def test_unknown_period_resolves_as_monthly(client, auth_headers) -> None:
    response = await client.get(
        "/api/v1/dashboard/overview", params={"period": "fortnightly"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["period"] == "monthly"
    assert response.json()["summary"]["balance"] == 0


async def test_trends_for_current_year(client, auth_headers) -> None:
    await _create(client, auth_headers, type="expense", amount=20)
    await _create(client, auth_headers, type="expense", amount=5)

    response = await client.get("/api/v1/dashboard/trends", params={"period": "yearly"}, headers=auth_headers)

    body = response.json()
    bucket = local_now().strftime("%Y-%m")
    assert body["trends"] == [{"date": bucket, "type": "expense", "total": 25.0, "count": 2}]
    assert body["series"] == [{"date": bucket, "income": 0.0, "expense": 25.0}]


async def test_recent_is_limited_and_newest_first(client, auth_headers) -> None:
    for day in range(1, 6):
        await _create(client, auth_headers, type="expense", amount=day, date=f"2024-02-0{day}T09:00:00")

    response = await client.get("/api/v1/dashboard/recent", params={"limit": 3}, headers=auth_headers)
    too_many = await client.get("/api/v1/dashboard/recent", params={"limit": 101}, headers=auth_headers)

    assert [tx["amount"] for tx in response.json()["transactions"]] == [5, 4, 3]
    assert too_many.status_code == 422


async def test_accounts_cover_all_time(client, auth_headers) -> None:
    await _create(client, auth_headers, type="income", amount=1000, account="bank", date="2015-06-01T00:00:00")
    await _create(client, auth_headers, type="expense", amount=300, account="bank")
    await _create(client, auth_headers, type="expense", amount=20, account="cash")

    accounts = (await client.get("/api/v1/dashboard/accounts", headers=auth_headers)).json()["accounts"]

    assert accounts == [
        {"account": "bank", "income": 1000.0, "expense": 300.0, "balance": 700.0, "transactionCount": 2},
        {"account": "cash", "income": 0.0, "expense": 20.0, "balance": -20.0, "transactionCount": 1},
    ]


async def test_statistics_with_range(client, auth_headers) -> None:
    await _create(client, auth_headers, type="expense", amount=10, date="2024-03-01T00:00:00")
    await _create(client, auth_headers, type="expense", amount=50, date="2024-03-31T22:00:00", category="Fuel")
    await _create(client, auth_headers, type="expense", amount=70, date="2024-04-01T00:00:00")

    response = await client.get(
        "/api/v1/dashboard/statistics",
        params={"startDate": "2024-03-01", "endDate": "2024-03-31"},
        headers=auth_headers,
    )

    body = response.json()
    assert body["overall"] == [
        {"type": "expense", "total": 60.0, "count": 2, "average": 30.0, "max": 50.0, "min": 10.0}
    ]
    assert [row["category"] for row in body["byCategory"]] == ["Fuel", "Food"]
    assert body["byDivision"] == [{"division": "personal", "type": "expense", "total": 60.0, "count": 2}]


async def test_dashboard_is_scoped_to_the_caller(client, auth_headers) -> None:
    await _create(client, auth_headers, type="income", amount=100)
    other = await client.post(
        "/api/v1/auth/register", json={"name": "Bob", "email": "bob@example.com", "password": "secret123"}
    )
    bob_headers = {"Authorization": f"Bearer {other.json()['token']}"}

    summary = (await client.get("/api/v1/dashboard/overview", headers=bob_headers)).json()["summary"]
    accounts = (await client.get("/api/v1/dashboard/accounts", headers=bob_headers)).json()["accounts"]

    assert summary["income"] == 0
    assert accounts == []
