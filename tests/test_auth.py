from datetime import timedelta

from flask_jwt_extended import create_access_token

from farmconnect.models import User
from tests.base import ApiTestCase


class RegisterTestCase(ApiTestCase):
    def test_register_returns_token_and_sanitized_user(self):
        token, data = self.register(role="FARMER", email="farmer@example.com")
        self.assertTrue(token)
        self.assertEqual(data["email"], "farmer@example.com")
        self.assertEqual(data["role"], "FARMER")
        self.assertNotIn("password", data)

        stored = User.query.filter_by(email="farmer@example.com").one()
        self.assertNotEqual(stored.password, "secret123")

    def test_duplicate_email_is_a_conflict(self):
        self.register(email="dup@example.com")
        resp = self.client.post("/api/auth/register", json={
            "email": "dup@example.com",
            "full_name": "Someone Else",
            "role": "RETAILER",
            "password": "pw",
        })
        self.assertEqual(resp.status_code, 409)
        body = resp.get_json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "Email already exists")

    def test_missing_fields_rejected(self):
        resp = self.client.post("/api/auth/register", json={"email": "a@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("required", resp.get_json()["message"])

    def test_unknown_role_rejected(self):
        resp = self.client.post("/api/auth/register", json={
            "email": "a@example.com",
            "full_name": "A",
            "role": "ADMIN",
            "password": "pw",
        })
        self.assertEqual(resp.status_code, 400)
        self.assertIn("INSTITUTIONAL_BUYER", resp.get_json()["message"])


class LoginTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.register(role="WHOLESALER", email="buyer@example.com", phone="5550001", password="right")

    def test_login_with_email(self):
        resp = self.client.post("/api/auth/login", json={"identifier": "buyer@example.com", "password": "right"})
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertTrue(body["token"])
        self.assertEqual(body["data"]["role"], "WHOLESALER")
        self.assertNotIn("password", body["data"])

    def test_login_with_phone(self):
        resp = self.client.post("/api/auth/login", json={"identifier": "5550001", "password": "right"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["data"]["email"], "buyer@example.com")

    def test_wrong_password_and_unknown_user_look_the_same(self):
        wrong = self.client.post("/api/auth/login", json={"identifier": "buyer@example.com", "password": "nope"})
        unknown = self.client.post("/api/auth/login", json={"identifier": "ghost@example.com", "password": "right"})
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.get_json(), unknown.get_json())
        self.assertEqual(wrong.get_json()["message"], "Invalid credentials")

    def test_missing_identifier(self):
        resp = self.client.post("/api/auth/login", json={"password": "right"})
        self.assertEqual(resp.status_code, 400)


class TokenTestCase(ApiTestCase):
    def test_profile_requires_token(self):
        resp = self.client.get("/api/auth/profile/1")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json(), {"success": False, "message": "No token provided"})

    def test_garbage_token_rejected(self):
        resp = self.client.get("/api/auth/profile/1", headers=self.auth("not-a-jwt"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json()["message"], "Invalid token")

    def test_expired_token_rejected(self):
        _, user = self.register()
        expired = create_access_token(
            identity=str(user["id"]),
            additional_claims={"email": user["email"], "role": user["role"]},
            expires_delta=timedelta(seconds=-10),
        )
        resp = self.client.get(f"/api/auth/profile/{user['id']}", headers=self.auth(expired))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json()["message"], "Token expired")

    def test_profile_lookup(self):
        token, user = self.register(role="RETAILER")
        resp = self.client.get(f"/api/auth/profile/{user['id']}", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["data"]["email"], user["email"])
        self.assertNotIn("password", resp.get_json()["data"])

        missing = self.client.get("/api/auth/profile/9999", headers=self.auth(token))
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.get_json()["message"], "User not found")

    def test_role_gate_forbids_non_farmers(self):
        token, _ = self.register(role="CUSTOMER")
        resp = self.client.post("/api/products", json={"name": "x"}, headers=self.auth(token))
        self.assertEqual(resp.status_code, 403)
        self.assertIn("FARMER", resp.get_json()["message"])
