"""User CRUD through the API."""
from rbac_admin.core.security import verify_password
from rbac_admin.models import Role, User


def new_user(client, headers, username, **extra):
    payload = {
        "username": username,
        "password": "secret1",
        "realname": username.title(),
        "email": f"{username}@example.com",
    }
    payload.update(extra)
    return client.post("/api/users", headers=headers, json=payload)


class TestUserList:
    def test_page_payload_shape(self, client, auth_headers):
        resp = client.get("/api/users", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert set(data) == {"list", "total", "page", "pageSize"}
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["pageSize"] == 10
        assert data["list"][0]["username"] == "admin"
        assert "hashed_password" not in data["list"][0]
        assert "password" not in data["list"][0]

    def test_pagination_respects_page_and_size(self, client, auth_headers):
        for i in range(6):
            assert new_user(client, auth_headers, f"user{i}").status_code == 200

        first = client.get("/api/users?page=1&pageSize=3", headers=auth_headers).json()["data"]
        second = client.get("/api/users?page=2&pageSize=3", headers=auth_headers).json()["data"]
        third = client.get("/api/users?page=3&pageSize=3", headers=auth_headers).json()["data"]

        assert first["total"] == second["total"] == third["total"] == 7
        assert [u["username"] for u in first["list"]] == ["admin", "user0", "user1"]
        assert [u["username"] for u in second["list"]] == ["user2", "user3", "user4"]
        assert [u["username"] for u in third["list"]] == ["user5"]

    def test_out_of_range_paging_is_clamped(self, client, auth_headers):
        data = client.get("/api/users?page=0&pageSize=1000", headers=auth_headers).json()["data"]
        assert data["page"] == 1
        assert data["pageSize"] == 100

    def test_page_past_end_is_empty(self, client, auth_headers):
        data = client.get("/api/users?page=5&pageSize=10", headers=auth_headers).json()["data"]
        assert data["list"] == []
        assert data["total"] == 1

    def test_keyword_and_status_filters(self, client, auth_headers, db_session):
        new_user(client, auth_headers, "bob")
        new_user(client, auth_headers, "carol")
        db_session.query(User).filter(User.username == "carol").update({"status": 0})
        db_session.commit()

        data = client.get("/api/users?keyword=bo", headers=auth_headers).json()["data"]
        assert [u["username"] for u in data["list"]] == ["bob"]

        data = client.get("/api/users?status=0", headers=auth_headers).json()["data"]
        assert [u["username"] for u in data["list"]] == ["carol"]


class TestUserCreate:
    def test_create_hashes_password(self, client, auth_headers, db_session):
        resp = new_user(client, auth_headers, "dave")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["username"] == "dave"
        assert data["status"] == 1
        assert data["role"] is None

        stored = db_session.query(User).filter(User.username == "dave").one()
        assert stored.hashed_password != "secret1"
        assert verify_password("secret1", stored.hashed_password)

    def test_created_user_can_log_in(self, client, auth_headers):
        new_user(client, auth_headers, "erin")
        resp = client.post("/api/auth/login", json={"username": "erin", "password": "secret1"})
        assert resp.status_code == 200

    def test_duplicate_username_rejected(self, client, auth_headers, db_session):
        assert new_user(client, auth_headers, "frank").status_code == 200
        resp = new_user(client, auth_headers, "frank", realname="Other")
        assert resp.status_code == 409
        assert resp.json()["code"] == 409
        assert db_session.query(User).filter(User.username == "frank").count() == 1

    def test_create_with_role(self, client, auth_headers, db_session):
        role = db_session.query(Role).filter(Role.code == "user").one()
        resp = new_user(client, auth_headers, "gina", role_id=role.id)
        assert resp.json()["data"]["role"]["code"] == "user"

    def test_create_with_unknown_role(self, client, auth_headers):
        resp = new_user(client, auth_headers, "hank", role_id=9999)
        assert resp.status_code == 404

    def test_invalid_email(self, client, auth_headers):
        resp = new_user(client, auth_headers, "ivan", email="not-an-email")
        assert resp.status_code == 400

    def test_missing_required_field(self, client, auth_headers):
        resp = client.post("/api/users", headers=auth_headers, json={"username": "jo", "password": "x"})
        assert resp.status_code == 400

    def test_password_limit_counts_bytes(self, client, auth_headers):
        # 40 two-byte characters: 40 chars but 80 bytes
        resp = new_user(client, auth_headers, "olga", password="\u00e9" * 40)
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == 400
        assert "password" in body["msg"]

    def test_password_of_exactly_72_bytes(self, client, auth_headers):
        password = "\u00e9" * 36
        assert new_user(client, auth_headers, "pia", password=password).status_code == 200
        login = client.post("/api/auth/login", json={"username": "pia", "password": password})
        assert login.status_code == 200


class TestUserGetUpdateDelete:
    def test_get_user(self, client, auth_headers, admin_user):
        resp = client.get(f"/api/users/{admin_user.id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["role"]["code"] == "admin"

    def test_get_missing_user(self, client, auth_headers):
        resp = client.get("/api/users/99999", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["code"] == 404

    def test_partial_update_leaves_other_fields(self, client, auth_headers):
        user_id = new_user(client, auth_headers, "kim").json()["data"]["id"]
        resp = client.put(f"/api/users/{user_id}", headers=auth_headers, json={"realname": "Kim Lee"})
        data = resp.json()["data"]
        assert data["realname"] == "Kim Lee"
        assert data["email"] == "kim@example.com"
        assert data["username"] == "kim"

    def test_empty_strings_are_ignored(self, client, auth_headers):
        user_id = new_user(client, auth_headers, "lena").json()["data"]["id"]
        data = client.put(
            f"/api/users/{user_id}", headers=auth_headers, json={"username": "", "realname": ""},
        ).json()["data"]
        assert data["username"] == "lena"
        assert data["realname"] == "Lena"

    def test_update_password_is_rehashed(self, client, auth_headers):
        user_id = new_user(client, auth_headers, "mia").json()["data"]["id"]
        client.put(f"/api/users/{user_id}", headers=auth_headers, json={"password": "newpass"})
        bad = client.post("/api/auth/login", json={"username": "mia", "password": "secret1"})
        good = client.post("/api/auth/login", json={"username": "mia", "password": "newpass"})
        assert bad.status_code == 401
        assert good.status_code == 200

    def test_disable_and_assign_role(self, client, auth_headers, db_session):
        role = db_session.query(Role).filter(Role.code == "user").one()
        user_id = new_user(client, auth_headers, "nick").json()["data"]["id"]
        data = client.put(
            f"/api/users/{user_id}", headers=auth_headers, json={"status": 0, "role_id": role.id},
        ).json()["data"]
        assert data["status"] == 0
        assert data["role_id"] == role.id

        data = client.put(f"/api/users/{user_id}", headers=auth_headers, json={"role_id": None}).json()["data"]
        assert data["role_id"] is None
        assert data["status"] == 0

    def test_rename_onto_existing_username(self, client, auth_headers):
        user_id = new_user(client, auth_headers, "olga").json()["data"]["id"]
        resp = client.put(f"/api/users/{user_id}", headers=auth_headers, json={"username": "admin"})
        assert resp.status_code == 409

    def test_update_missing_user(self, client, auth_headers):
        resp = client.put("/api/users/99999", headers=auth_headers, json={"realname": "X"})
        assert resp.status_code == 404

    def test_delete_user(self, client, auth_headers, db_session):
        user_id = new_user(client, auth_headers, "paul").json()["data"]["id"]
        resp = client.delete(f"/api/users/{user_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"code": 200, "msg": "success"}
        assert db_session.query(User).filter(User.id == user_id).first() is None

    def test_delete_missing_user(self, client, auth_headers):
        assert client.delete("/api/users/99999", headers=auth_headers).status_code == 404

    def test_cannot_delete_self(self, client, auth_headers, admin_user):
        resp = client.delete(f"/api/users/{admin_user.id}", headers=auth_headers)
        assert resp.status_code == 400

    def test_batch_delete(self, client, auth_headers, db_session):
        ids = [new_user(client, auth_headers, f"batch{i}").json()["data"]["id"] for i in range(3)]
        resp = client.post("/api/users/batch-delete", headers=auth_headers, json={"ids": ids[:2] + [99999]})
        assert resp.status_code == 200
        assert resp.json()["data"] == {"deleted": 2}
        remaining = {u.username for u in db_session.query(User).all()}
        assert remaining == {"admin", "batch2"}

    def test_batch_delete_refuses_self(self, client, auth_headers, admin_user):
        resp = client.post("/api/users/batch-delete", headers=auth_headers, json={"ids": [admin_user.id]})
        assert resp.status_code == 400

    def test_update_password_limit_counts_bytes(self, client, auth_headers):
        user_id = new_user(client, auth_headers, "quinn").json()["data"]["id"]
        resp = client.put(f"/api/users/{user_id}", headers=auth_headers, json={"password": "é" * 40})
        assert resp.status_code == 400
        login = client.post("/api/auth/login", json={"username": "quinn", "password": "secret1"})
        assert login.status_code == 200


class TestUserInputBounds:
    def test_huge_page_is_clamped(self, client, auth_headers):
        resp = client.get("/api/users?page=9223372036854775807", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["list"] == []
        assert data["total"] == 1
        assert data["page"] == 9223372036854775807 // 10

    def test_id_beyond_integer_range(self, client, auth_headers):
        for method in ("get", "delete"):
            resp = getattr(client, method)("/api/users/99999999999999999999", headers=auth_headers)
            assert resp.status_code == 400
            assert resp.json()["code"] == 400

    def test_role_id_beyond_integer_range(self, client, auth_headers):
        resp = new_user(client, auth_headers, "rob", role_id=2**63)
        assert resp.status_code == 400

    def test_batch_delete_id_beyond_integer_range(self, client, auth_headers):
        resp = client.post("/api/users/batch-delete", headers=auth_headers, json={"ids": [2**64]})
        assert resp.status_code == 400

    def test_status_filter_beyond_integer_range(self, client, auth_headers):
        resp = client.get(f"/api/users?status={2**63}", headers=auth_headers)
        assert resp.status_code == 400
