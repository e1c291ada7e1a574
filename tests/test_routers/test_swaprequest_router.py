import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from core.errors import NotFound, Conflict, Forbidden
from auth.services.auth_service import get_current_active_user
from shift.timewindow import today_local
from swaprequest.rules import SameDay, DateList, AnyTime, ExactStart, EndNotAfter, WantType, TimeRuleKind


class SwapRequestRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=7, email="w@example.com")
        self.client = TestClient(app)

        today = today_local()
        self.day = lambda n: (today + timedelta(days=n)).isoformat()
        self.shift = Obj(id=3, user_id=8, date=self.day(2), start="09:00", end="13:00", duration_hours=4)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    def _row(self, **over):
        data = dict(
            id=11, requester_user_id=7, have_shift_id=3, want_type=WantType.SAME_DAY, want_dates=None,
            time_rule=TimeRuleKind.ANY, time_value=None, note=None, is_active=True,
            created_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
        )
        data.update(over)
        return Obj(**data)

    # ---------- CREATE ----------
    @patch("swaprequest.router.service.create_request")
    def test_create_same_day(self, mock_create):
        mock_create.return_value = self._row()
        resp = self.client.post("/api/swap-requests", json={"have_shift_id": 3, "want_type": "SAME_DAY"})
        self.assertEqual(resp.status_code, 201, resp.text)
        dto = mock_create.call_args.args[1]
        self.assertEqual(dto.requester_user_id, 7)
        self.assertEqual(dto.want, SameDay())
        self.assertEqual(dto.time_rule, AnyTime())

    @patch("swaprequest.router.service.create_request")
    def test_create_date_list_builds_variants(self, mock_create):
        dates = [self.day(3), self.day(5), self.day(3)]
        mock_create.return_value = self._row(want_type=WantType.DATE_LIST, want_dates=dates[:2],
                                             time_rule=TimeRuleKind.EXACT_START, time_value="09:00")
        resp = self.client.post("/api/swap-requests", json={
            "have_shift_id": 3, "want_type": "DATE_LIST", "want_dates": dates,
            "time_rule": "EXACT_START", "time_value": "09:00",
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        dto = mock_create.call_args.args[1]
        self.assertEqual(dto.want, DateList((self.day(3), self.day(5))))
        self.assertEqual(dto.time_rule, ExactStart("09:00"))

    @patch("swaprequest.router.service.create_request")
    def test_same_day_drops_stray_dates(self, mock_create):
        mock_create.return_value = self._row(time_rule=TimeRuleKind.END_NOT_AFTER, time_value="18:00")
        resp = self.client.post("/api/swap-requests", json={
            "have_shift_id": 3, "want_type": "SAME_DAY", "want_dates": [self.day(3)],
            "time_rule": "END_NOT_AFTER", "time_value": "18:00",
        })
        self.assertEqual(resp.status_code, 201, resp.text)
        dto = mock_create.call_args.args[1]
        self.assertEqual(dto.want, SameDay())
        self.assertEqual(dto.time_rule, EndNotAfter("18:00"))

    @patch("swaprequest.router.service.create_request")
    def test_date_list_without_dates_422(self, mock_create):
        resp = self.client.post("/api/swap-requests", json={"have_shift_id": 3, "want_type": "DATE_LIST"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["detail"], "Want dates are required when want type is DATE_LIST")
        mock_create.assert_not_called()

    @patch("swaprequest.router.service.create_request")
    def test_time_rule_without_value_422(self, mock_create):
        resp = self.client.post("/api/swap-requests", json={
            "have_shift_id": 3, "want_type": "SAME_DAY", "time_rule": "EXACT_START",
        })
        self.assertEqual(resp.status_code, 422)
        self.assertIn("EXACT_START", resp.json()["detail"])
        mock_create.assert_not_called()

    @patch("swaprequest.router.service.create_request")
    def test_want_date_in_past_422(self, mock_create):
        resp = self.client.post("/api/swap-requests", json={
            "have_shift_id": 3, "want_type": "DATE_LIST", "want_dates": [self.day(-2)],
        })
        self.assertEqual(resp.status_code, 422)
        self.assertIn("past", resp.json()["detail"])

    @patch("swaprequest.router.service.create_request")
    def test_note_too_long_422(self, mock_create):
        resp = self.client.post("/api/swap-requests", json={
            "have_shift_id": 3, "want_type": "SAME_DAY", "note": "x" * 501,
        })
        self.assertEqual(resp.status_code, 422)

    @patch("swaprequest.router.service.create_request")
    def test_create_conflict_409(self, mock_create):
        mock_create.side_effect = Conflict("You already have an active swap request for this shift")
        resp = self.client.post("/api/swap-requests", json={"have_shift_id": 3, "want_type": "SAME_DAY"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["kind"], "conflict")

    @patch("swaprequest.router.service.create_request")
    def test_create_not_owner_404(self, mock_create):
        mock_create.side_effect = NotFound("Shift not found or not owned by user")
        resp = self.client.post("/api/swap-requests", json={"have_shift_id": 3, "want_type": "SAME_DAY"})
        self.assertEqual(resp.status_code, 404)

    # ---------- BROWSE ----------
    @patch("swaprequest.router.sweeper")
    @patch("swaprequest.router.service.list_browsable_requests")
    def test_browse(self, mock_list, mock_sweeper):
        mock_list.return_value = [{
            "id": 11, "requester": Obj(id=8, email="bob@example.com", full_name="Bob"),
            "have_shift": self.shift, "want_type": WantType.SAME_DAY, "want_dates": None,
            "time_rule": TimeRuleKind.ANY, "time_value": None, "note": "pls",
            "created_at": None, "has_my_interest": True, "my_interest_id": 5, "interest_count": 2,
        }]
        resp = self.client.get("/api/swap-requests")
        self.assertEqual(resp.status_code, 200, resp.text)
        row = resp.json()[0]
        self.assertEqual(row["requester"]["full_name"], "Bob")
        self.assertTrue(row["has_my_interest"])
        self.assertEqual(row["interest_count"], 2)
        self.assertNotIn("interests", row)
        mock_sweeper.run_if_due.assert_called_once()
        self.assertEqual(mock_list.call_args.args[1], 7)

    # ---------- OWN ----------
    @patch("swaprequest.router.sweeper")
    @patch("swaprequest.router.service.list_own_requests")
    def test_own_requests(self, mock_list, mock_sweeper):
        mock_list.return_value = [{
            "id": 11, "have_shift": self.shift, "want_type": WantType.SAME_DAY, "want_dates": None,
            "time_rule": TimeRuleKind.ANY, "time_value": None, "note": None, "created_at": None,
            "interests": [Obj(
                id=5, created_at=None,
                interested_user=Obj(id=9, email="carol@example.com", full_name="Carol"),
                offered_shift=Obj(id=4, user_id=9, date=self.day(2), start="14:00", end="18:00", duration_hours=4),
            )],
        }]
        resp = self.client.get("/api/user/swap-requests")
        self.assertEqual(resp.status_code, 200, resp.text)
        interest = resp.json()[0]["interests"][0]
        self.assertEqual(interest["interested_user"]["email"], "carol@example.com")
        self.assertEqual(interest["offered_shift"]["start"], "14:00")
        mock_sweeper.run_if_due.assert_called_once()

    # ---------- ELIGIBLE SHIFTS ----------
    @patch("swaprequest.router.service.list_eligible_shifts")
    def test_eligible_shifts(self, mock_list):
        mock_list.return_value = [self.shift]
        resp = self.client.get("/api/swap-requests/11/eligible-shifts")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["id"], 3)
        self.assertEqual(mock_list.call_args.args[1:], (11, 7))

    @patch("swaprequest.router.service.list_eligible_shifts")
    def test_eligible_shifts_own_request_403(self, mock_list):
        mock_list.side_effect = Forbidden("Cannot offer a shift against your own swap request")
        resp = self.client.get("/api/swap-requests/11/eligible-shifts")
        self.assertEqual(resp.status_code, 403)

    # ---------- DELETE ----------
    @patch("swaprequest.router.service.delete_request")
    def test_delete(self, mock_delete):
        resp = self.client.delete("/api/swap-requests/11")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(mock_delete.call_args.args[1:], (11, 7))

    @patch("swaprequest.router.service.delete_request")
    def test_delete_404(self, mock_delete):
        mock_delete.side_effect = NotFound("Swap request not found or not owned by user")
        resp = self.client.delete("/api/swap-requests/11")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Swap request not found or not owned by user")


if __name__ == "__main__":
    unittest.main()
