import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from main import app
from core.config_loader import settings
from core.database import get_db
from core.errors import Unauthenticated


class AuthRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)
        self.user = Obj(id=5, employee_id=None, email="dana@example.com", full_name="Dana",
                        created_at=datetime(2025, 6, 1, tzinfo=timezone.utc))

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    @patch("auth.routes.auth_router.auth_service.login")
    def test_login_sets_cookie_and_returns_token(self, mock_login):
        mock_login.return_value = (self.user, "tok")
        resp = self.client.post("/api/auth/login", json={
            "email": "dana@example.com", "full_name": "Dana", "passcode": "x",
        })
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["access_token"], "tok")
        self.assertEqual(resp.json()["user"]["id"], 5)
        self.assertEqual(resp.cookies.get(settings.SESSION_COOKIE_NAME), "tok")

    def test_login_requires_valid_email(self):
        resp = self.client.post("/api/auth/login", json={"email": "nope", "full_name": "Dana", "passcode": "x"})
        self.assertEqual(resp.status_code, 422)

    @patch("auth.routes.auth_router.auth_service.login")
    def test_login_bad_passcode_401(self, mock_login):
        mock_login.side_effect = Unauthenticated("Invalid pass code")
        resp = self.client.post("/api/auth/login", json={
            "email": "dana@example.com", "full_name": "Dana", "passcode": "x",
        })
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Invalid pass code")

    def test_logout(self):
        resp = self.client.post("/api/auth/logout")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Logged out"})

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.json(), {"health": "true"})
        self.assertIn("X-Request-ID", resp.headers)


if __name__ == "__main__":
    unittest.main()
