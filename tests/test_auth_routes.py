from conftest import auth, create_family


class TestAdminLogin:
    def test_login_returns_token_and_admin(self, client, family):
        response = client.post("/auth/admin/login", json={"email": "admin@x.com", "password": "pw123"})

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["admin"] == {
            "id": family["admin"]["id"],
            "email": "admin@x.com",
            "familyId": family["family"]["id"],
        }

    def test_wrong_password(self, client, family):
        response = client.post("/auth/admin/login", json={"email": "admin@x.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email(self, client, family):
        response = client.post("/auth/admin/login", json={"email": "ghost@x.com", "password": "pw123"})

        assert response.status_code == 401

    def test_missing_fields(self, client):
        assert client.post("/auth/admin/login", json={"email": "admin@x.com"}).status_code == 400
        assert client.post("/auth/admin/login", json={"email": "  ", "password": "pw"}).status_code == 400

    def test_same_email_in_two_families_picks_the_matching_password(self, client, family):
        other = create_family(client, name="Second Home", email="admin@x.com", password="other-pw")

        response = client.post("/auth/admin/login", json={"email": "admin@x.com", "password": "other-pw"})

        assert response.status_code == 200
        assert response.json()["admin"]["familyId"] == other["family"]["id"]

    def test_malformed_body_is_a_bad_request(self, client):
        response = client.post("/auth/admin/login", json=["admin@x.com", "pw123"])

        assert response.status_code == 400
        assert isinstance(response.json()["detail"], str)


class TestMemberLogin:
    def test_login_with_email_only(self, client, family_id, person):
        response = client.post("/auth/user/login", json={"email": "jo@x.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["person"] == {
            "id": person["id"],
            "name": "Jo",
            "email": "jo@x.com",
            "familyId": family_id,
        }

    def test_unknown_email(self, client, family):
        response = client.post("/auth/user/login", json={"email": "nobody@x.com"})

        assert response.status_code == 404
        assert response.json()["detail"] == "No account found with that email address"

    def test_missing_email(self, client):
        assert client.post("/auth/user/login", json={}).status_code == 400


class TestGuard:
    def test_missing_token(self, client, family_id):
        response = client.get(f"/families/{family_id}")

        assert response.status_code == 401
        assert response.json()["detail"] == "Access token required"

    def test_invalid_token(self, client, family_id):
        response = client.get(f"/families/{family_id}", headers=auth("garbage"))

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_other_family_is_forbidden(self, client, family_id, other_family):
        response = client.get(f"/families/{family_id}", headers=auth(other_family["token"]))

        assert response.status_code == 403

    def test_member_can_read_but_not_write(self, client, family_id, member_headers):
        assert client.get(f"/families/{family_id}", headers=member_headers).status_code == 200
        assert client.get(f"/chores/family/{family_id}", headers=member_headers).status_code == 200

        response = client.post(f"/chores/family/{family_id}", json={"label": "Mop"}, headers=member_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"
