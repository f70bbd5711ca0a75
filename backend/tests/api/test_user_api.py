def test_profile_get_and_partial_update(client, register):
    _, headers = register()

    r = client.get("/api/user/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["firstName"] == "Ada"

    r = client.put("/api/user/profile", json={"address": "1 Main St"}, headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["address"] == "1 Main St"
    assert body["data"]["firstName"] == "Ada"


def test_profile_update_validation(client, register):
    _, headers = register()

    r = client.put("/api/user/profile", json={"phoneNumber": "not a phone"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "phoneNumber"

    r = client.put("/api/user/profile", json={"dateOfBirth": "2999-01-01"}, headers=headers)
    assert r.status_code == 400


def test_change_password_flow(client, register, password):
    _, headers = register("ada@example.com")

    mismatch = client.put(
        "/api/user/password",
        json={"currentPassword": password, "newPassword": "N3w!Password", "confirmPassword": "Other!Pass1"},
        headers=headers,
    )
    assert mismatch.status_code == 400

    wrong = client.put(
        "/api/user/password",
        json={"currentPassword": "Wrong!Pass1", "newPassword": "N3w!Password", "confirmPassword": "N3w!Password"},
        headers=headers,
    )
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Current password is incorrect"

    ok = client.put(
        "/api/user/password",
        json={"currentPassword": password, "newPassword": "N3w!Password", "confirmPassword": "N3w!Password"},
        headers=headers,
    )
    assert ok.status_code == 200
    assert ok.json() == {"success": True, "message": "Password changed successfully"}

    login = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "N3w!Password"})
    assert login.status_code == 200
