def test_deposit_and_withdraw_envelopes(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "5000.00")

    r = client.post(
        "/api/transactions/deposit",
        json={"accountId": acc.id, "amount": 3000.00, "description": "Salary"},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Deposit successful"
    tx = body["data"]["transaction"]
    assert tx["direction"] == "CREDIT"
    assert tx["amount"] == "3000.00"
    assert tx["balanceAfter"] == "8000.00"
    assert tx["description"] == "Salary"
    assert tx["accountId"] == acc.id
    assert body["data"]["account"]["balance"] == "8000.00"

    r = client.post(
        "/api/transactions/withdraw",
        json={"accountId": acc.id, "amount": "1500.50"},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Withdrawal successful"
    assert body["data"]["transaction"]["description"] == "Withdrawal"
    assert body["data"]["transaction"]["balanceAfter"] == "6499.50"
    assert body["data"]["account"]["balance"] == "6499.50"


def test_insufficient_funds_is_400(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "100.00")

    r = client.post("/api/transactions/withdraw", json={"accountId": acc.id, "amount": 100.01}, headers=headers)

    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Insufficient funds"}


def test_non_positive_amount_is_400(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "100.00")

    for amount in (0, -5):
        r = client.post("/api/transactions/deposit", json={"accountId": acc.id, "amount": amount}, headers=headers)
        assert r.status_code == 400
        assert r.json()["message"] == "Amount must be greater than 0"


def test_oversized_amount_is_400_not_500(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "100.00")

    r = client.post("/api/transactions/deposit", json={"accountId": acc.id, "amount": "1e26"}, headers=headers)

    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["message"].startswith("Amount must not exceed")


def test_withdrawing_the_remaining_cents_empties_the_account(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "1.00")

    r = client.post("/api/transactions/withdraw", json={"accountId": acc.id, "amount": "0.90"}, headers=headers)
    assert r.json()["data"]["account"]["balance"] == "0.10"

    r = client.post("/api/transactions/withdraw", json={"accountId": acc.id, "amount": "0.10"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["transaction"]["balanceAfter"] == "0.00"


def test_foreign_and_missing_accounts_are_404(client, register, make_account):
    owner_id, _ = register("owner@example.com")
    _, intruder_headers = register("intruder@example.com")
    acc = make_account(owner_id, "100.00")

    foreign = client.post(
        "/api/transactions/deposit", json={"accountId": acc.id, "amount": 10}, headers=intruder_headers
    )
    missing = client.post(
        "/api/transactions/deposit", json={"accountId": "nope", "amount": 10}, headers=intruder_headers
    )

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"success": False, "message": "Account not found"}


def test_missing_fields_are_validation_errors(client, register):
    _, headers = register()
    r = client.post("/api/transactions/deposit", json={"amount": 10}, headers=headers)

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert any(e["field"] == "accountId" for e in body["errors"])


def test_postings_require_a_token(client):
    r = client.post("/api/transactions/deposit", json={"accountId": "x", "amount": 10})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "No token provided"}

    r = client.post(
        "/api/transactions/deposit",
        json={"accountId": "x", "amount": 10},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_transactions_show_up_in_account_history(client, register, make_account):
    user_id, headers = register()
    acc = make_account(user_id, "100.00")
    client.post("/api/transactions/deposit", json={"accountId": acc.id, "amount": 5}, headers=headers)
    client.post("/api/transactions/withdraw", json={"accountId": acc.id, "amount": 3}, headers=headers)

    r = client.get(f"/api/accounts/{acc.id}/transactions", headers=headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert [t["direction"] for t in data["transactions"]] == ["DEBIT", "CREDIT"]
    assert [t["sequence"] for t in data["transactions"]] == [2, 1]
    assert data["pagination"] == {"total": 2, "limit": 20, "offset": 0, "hasMore": False}

    r = client.get(f"/api/accounts/{acc.id}/transactions?type=CREDIT", headers=headers)
    assert [t["amount"] for t in r.json()["data"]["transactions"]] == ["5.00"]


def test_unexpected_errors_are_500_without_details(client, register, monkeypatch):
    _, headers = register()

    class _Broken:
        def deposit(self, *args, **kwargs):
            raise RuntimeError("boom")

    monkeypatch.setattr("bankapp.api.routes.transactions.get_transaction_service", lambda: _Broken())

    r = client.post("/api/transactions/deposit", json={"accountId": "x", "amount": 10}, headers=headers)
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Internal Server Error"}
