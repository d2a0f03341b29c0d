# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
HTTP tests for the Registration Service.
Row store is swapped for an in-memory copy of the demo sheet; auth uses a
test-only admin account.
"""

from unittest.mock import MagicMock

import jwt
import pytest
from fastapi.testclient import TestClient

from main import app
from registration.core.config import Settings, settings
from registration.core.dependencies import build_auth_service, get_auth_service, get_row_store
from registration.core.exceptions import RowStoreError
from registration.repositories.memory_repository import DEMO_ROWS, InMemoryRowStore
from registration.services.auth_service import AuthService
from registration.services.message_formatter import (
    INCOMPLETE_ZONES_FOOTER,
    UNREGISTERED_FOOTER,
)

ADMIN_USER = "admin@example.org"
ADMIN_PASSWORD = "s3cret-pass"
JWT_SECRET = "test-secret"

store = InMemoryRowStore()
auth = AuthService(username=ADMIN_USER, password=ADMIN_PASSWORD, secret=JWT_SECRET)
client = TestClient(app)


def auth_headers() -> dict:
    return {"Authorization": f"Bearer {auth.issue_token(ADMIN_USER)}"}


def use_row_store(row_store) -> None:
    app.dependency_overrides[get_row_store] = lambda: row_store


# ============================================
# Fixtures
# ============================================
@pytest.fixture(autouse=True)
def reset_state():
    """Reload the demo sheet and wire the test doubles before each test."""
    store.load(DEMO_ROWS)
    use_row_store(store)
    app.dependency_overrides[get_auth_service] = lambda: auth
    yield
    app.dependency_overrides.clear()


# ============================================
# Health & Metrics
# ============================================
class TestHealth:
    def test_health_returns_ok(self):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert data["version"] == settings.SERVICE_VERSION
        assert "timestamp" in data

    def test_readiness_with_reachable_store(self):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_returns_503_when_store_unreachable(self):
        broken = MagicMock()
        broken.ping.side_effect = RowStoreError("spreadsheet not found")
        use_row_store(broken)
        response = client.get("/health/ready")
        assert response.status_code == 503
        assert "spreadsheet not found" in response.json()["detail"]


class TestRequestID:
    def test_response_has_request_id_header(self):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")

    def test_request_id_propagated(self):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


class TestMetrics:
    def test_metrics_exposes_registration_counters(self):
        client.get("/api/data")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert (
            'registration_requests_total{method="GET",endpoint="/api/data",status="200"}'
            in response.text
        )
        assert "registration_row_store_operations_total" in response.text

    def test_unmatched_paths_share_one_label(self):
        client.get("/api/no-such-route/12345")
        text = client.get("/metrics").text
        assert 'endpoint="unmatched"' in text
        assert "no-such-route" not in text


# ============================================
# Public form
# ============================================
class TestFormData:
    def test_lists_unregistered_active_members(self):
        response = client.get("/api/data")
        assert response.status_code == 200
        assert response.json() == [
            {"mandalam": "Tirur", "name": "Abdul Rahman"},
            {"mandalam": "Tirur", "name": "Muhammed Ali"},
            {"mandalam": "Kottakkal", "name": "Rasheed V"},
            {"mandalam": "Malappuram", "name": "Ashraf T"},
        ]

    def test_leave_members_are_hidden(self):
        names = [m["name"] for m in client.get("/api/data").json()]
        assert "Shameer P" not in names

    def test_empty_sheet_returns_empty_list(self):
        store.clear()
        response = client.get("/api/data")
        assert response.status_code == 200
        assert response.json() == []

    def test_store_failure_returns_500(self):
        broken = MagicMock()
        broken.fetch_rows.side_effect = RowStoreError("quota exceeded")
        use_row_store(broken)
        response = client.get("/api/data")
        assert response.status_code == 500
        assert response.json() == {"error": "Error fetching data: quota exceeded"}


class TestRegister:
    def _register(self, **overrides):
        payload = {
            "mandalam": "Tirur",
            "name": "Abdul Rahman",
            "mobile": "9999999999",
            "participated": "yes",
        }
        payload.update(overrides)
        return client.post("/api/register", json=payload)

    def test_register_success(self):
        response = self._register()
        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "Registration updated successfully",
        }
        assert store.rows[0][2:5] == ["9999999999", "yes", "Success"]

    def test_registered_member_leaves_the_form_list(self):
        self._register()
        names = [m["name"] for m in client.get("/api/data").json()]
        assert "Abdul Rahman" not in names

    def test_lookup_ignores_case_and_whitespace(self):
        response = self._register(mandalam="  tirur ", name="ABDUL rahman ")
        assert response.status_code == 200
        assert store.rows[0][4] == "Success"

    def test_repeat_registration_overwrites(self):
        self._register(mobile="1111111111")
        response = self._register(mobile="2222222222", participated="no")
        assert response.status_code == 200
        assert store.rows[0][2:5] == ["2222222222", "no", "Success"]

    def test_boolean_participated_is_written_as_yes_no(self):
        self._register(participated=True)
        assert store.rows[0][3] == "Yes"
        self._register(participated=False)
        assert store.rows[0][3] == "No"

    def test_only_registration_columns_change(self):
        self._register()
        assert store.rows[0][:2] == ["Tirur", "Abdul Rahman"]
        assert store.rows[0][5:7] == ["Yes", "Yes"]

    def test_unknown_member_returns_404(self):
        response = self._register(name="Nobody")
        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "User not found in the list"}

    def test_name_in_other_zone_returns_404(self):
        response = self._register(mandalam="Kottakkal")
        assert response.status_code == 404

    def test_empty_sheet_returns_404(self):
        store.clear()
        response = self._register()
        assert response.status_code == 404
        assert response.json()["message"] == "No data found in sheet"

    def test_write_failure_returns_500(self):
        broken = MagicMock()
        broken.fetch_rows.return_value = [["Tirur", "Abdul Rahman"]]
        broken.write_row.side_effect = RowStoreError("quota exceeded")
        use_row_store(broken)
        response = self._register()
        assert response.status_code == 500
        assert response.json() == {
            "status": "error",
            "message": "Error saving data: quota exceeded",
        }

    def test_write_targets_matched_sheet_row(self):
        broken = MagicMock()
        broken.fetch_rows.return_value = [["Tirur", "A"], ["Tirur", "Abdul Rahman"]]
        use_row_store(broken)
        self._register()
        broken.write_row.assert_called_once_with(3, "C", "E", ["9999999999", "yes", "Success"])


# ============================================
# Auth
# ============================================
class TestLogin:
    def test_login_success(self):
        response = client.post(
            "/api/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"] == {"username": ADMIN_USER, "role": "admin"}
        assert auth.verify_token(data["token"])["sub"] == ADMIN_USER

    def test_login_accepts_email_field(self):
        response = client.post(
            "/api/auth/login", json={"email": ADMIN_USER, "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200

    def test_wrong_password_returns_401(self):
        response = client.post(
            "/api/auth/login", json={"username": ADMIN_USER, "password": "nope"}
        )
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    def test_issued_token_opens_dashboard(self):
        token = client.post(
            "/api/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD}
        ).json()["token"]
        response = client.get(
            "/api/dashboard/stats", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200


class TestBearerGuard:
    @pytest.mark.parametrize("path", [
        "/api/dashboard/stats",
        "/api/dashboard/zones",
        "/api/dashboard/members",
        "/api/dashboard/role-stats",
        "/api/dashboard/messages/unregistered?zone=Tirur",
        "/api/dashboard/messages/incomplete-zones",
    ])
    def test_dashboard_requires_token(self, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_call_status_requires_token(self):
        response = client.post(
            "/api/call-status", json={"zone": "Tirur", "name": "Abdul Rahman"}
        )
        assert response.status_code == 401

    def test_garbage_token_rejected(self):
        response = client.get(
            "/api/dashboard/stats", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_expired_token_rejected(self):
        stale = AuthService(ADMIN_USER, ADMIN_PASSWORD, JWT_SECRET, expires_hours=-1)
        response = client.get(
            "/api/dashboard/stats",
            headers={"Authorization": f"Bearer {stale.issue_token(ADMIN_USER)}"},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}

    def test_token_signed_with_other_secret_rejected(self):
        forged = AuthService(ADMIN_USER, ADMIN_PASSWORD, "other-secret")
        response = client.get(
            "/api/dashboard/stats",
            headers={"Authorization": f"Bearer {forged.issue_token(ADMIN_USER)}"},
        )
        assert response.status_code == 401

    def test_non_admin_role_rejected(self):
        token = jwt.encode({"sub": "viewer", "role": "viewer"}, JWT_SECRET, algorithm="HS256")
        response = client.get(
            "/api/dashboard/stats", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Insufficient role"}

    def test_unset_secret_rejects_token_signed_with_placeholder(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
        config = Settings()
        assert config.JWT_SECRET == ""
        wired = build_auth_service(config)
        app.dependency_overrides[get_auth_service] = lambda: wired
        forged = jwt.encode({"sub": "attacker", "role": "admin"}, "change-me", algorithm="HS256")
        response = client.get(
            "/api/dashboard/members", headers={"Authorization": f"Bearer {forged}"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_unset_admin_password_disables_login(self, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "admin")
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
        wired = build_auth_service(Settings())
        app.dependency_overrides[get_auth_service] = lambda: wired
        response = client.post("/api/auth/login", json={"username": "admin", "password": ""})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}


# ============================================
# Dashboard
# ============================================
class TestDashboardStats:
    def test_overall_stats(self):
        response = client.get("/api/dashboard/stats", headers=auth_headers())
        assert response.status_code == 200
        assert response.json() == {
            "total": 7,
            "registered": 3,
            "notRegistered": 4,
            "percentageRegistered": 42.86,
        }

    def test_empty_sheet_has_zero_percentage(self):
        store.clear()
        data = client.get("/api/dashboard/stats", headers=auth_headers()).json()
        assert data["total"] == 0
        assert data["percentageRegistered"] == 0

    def test_store_failure_returns_500(self):
        broken = MagicMock()
        broken.fetch_rows.side_effect = RowStoreError("timeout")
        use_row_store(broken)
        response = client.get("/api/dashboard/stats", headers=auth_headers())
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch statistics", "detail": "timeout"}


class TestDashboardZones:
    def test_zone_counts_in_sheet_order(self):
        response = client.get("/api/dashboard/zones", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["zones"] == [
            {"name": "Tirur", "total": 3, "registered": 1, "notRegistered": 2},
            {"name": "Kottakkal", "total": 2, "registered": 1, "notRegistered": 1},
            {"name": "Malappuram", "total": 2, "registered": 1, "notRegistered": 1},
        ]

    def test_zone_made_only_of_leave_members_is_absent(self):
        store.load([
            ["A", "P", "", "", ""],
            ["A", "Q", "", "", "Success"],
            ["B", "R", "", "", "Leave"],
        ])
        zones = client.get("/api/dashboard/zones", headers=auth_headers()).json()["zones"]
        assert zones == [{"name": "A", "total": 2, "registered": 1, "notRegistered": 1}]

    def test_zone_spellings_merge(self):
        store.load([
            ["Tirur", "P", "", "", "Success"],
            ["tirur ", "Q", "", "", ""],
        ])
        zones = client.get("/api/dashboard/zones", headers=auth_headers()).json()["zones"]
        assert zones == [{"name": "Tirur", "total": 2, "registered": 1, "notRegistered": 1}]
        members = client.get(
            "/api/dashboard/members", params={"zone": "tirur"}, headers=auth_headers()
        ).json()["members"]
        assert [m["name"] for m in members] == ["P", "Q"]

    def test_zone_totals_add_up(self):
        zones = client.get("/api/dashboard/zones", headers=auth_headers()).json()["zones"]
        for zone in zones:
            assert zone["registered"] + zone["notRegistered"] == zone["total"]


class TestDashboardMembers:
    def _names(self, **params):
        response = client.get("/api/dashboard/members", params=params, headers=auth_headers())
        assert response.status_code == 200
        return [m["name"] for m in response.json()["members"]]

    def test_all_active_members(self):
        names = self._names()
        assert len(names) == 7
        assert "Shameer P" not in names

    def test_member_shape_is_camel_case(self):
        response = client.get(
            "/api/dashboard/members", params={"zone": "Malappuram"}, headers=auth_headers()
        )
        ashraf = response.json()["members"][0]
        assert ashraf == {
            "zone": "Malappuram",
            "name": "Ashraf T",
            "mobile": "",
            "participated": "",
            "status": "",
            "isSecretariat": True,
            "isExecutive": True,
            "registered": False,
            "callStatus": "No Answer",
            "callRemarks": "",
        }

    def test_fallback_mobile_used_when_primary_blank(self):
        response = client.get(
            "/api/dashboard/members", params={"zone": "Kottakkal"}, headers=auth_headers()
        )
        rasheed = [m for m in response.json()["members"] if m["name"] == "Rasheed V"][0]
        assert rasheed["mobile"] == "9846000003"

    def test_zone_filter_is_case_insensitive(self):
        assert self._names(zone="tirur") == ["Abdul Rahman", "Fathima Beevi", "Muhammed Ali"]

    def test_zone_all_means_no_filter(self):
        assert len(self._names(zone="all")) == 7

    def test_role_filter_with_zone(self):
        assert self._names(zone="Tirur", role="Secretariat") == ["Abdul Rahman"]

    def test_role_filter_ignored_without_zone(self):
        assert len(self._names(role="Secretariat")) == 7

    def test_status_filters(self):
        assert self._names(status="registered") == ["Fathima Beevi", "Haris K", "Jaseena M"]
        assert self._names(status="not_registered") == [
            "Abdul Rahman", "Muhammed Ali", "Rasheed V", "Ashraf T",
        ]

    def test_filters_combine(self):
        names = self._names(zone="Kottakkal", role="Executive", status="not_registered")
        assert names == ["Rasheed V"]


class TestDashboardRoleStats:
    def test_role_stats_per_zone(self):
        response = client.get("/api/dashboard/role-stats", headers=auth_headers())
        assert response.status_code == 200
        stats = {s["name"]: s for s in response.json()["stats"]}
        assert list(stats) == ["Tirur", "Kottakkal", "Malappuram"]
        assert stats["Tirur"]["secretariat"] == {
            "total": 1, "registered": 0, "percentage": "0.0", "isComplete": False,
        }
        assert stats["Tirur"]["executive"] == {
            "total": 3, "registered": 1, "percentage": "33.3", "isComplete": False,
        }
        assert stats["Kottakkal"]["secretariat"]["isComplete"] is True
        assert stats["Kottakkal"]["secretariat"]["percentage"] == "100.0"

    def test_role_without_members_reports_zero(self):
        store.load([["A", "P", "", "", "", "", "Yes"]])
        stats = client.get("/api/dashboard/role-stats", headers=auth_headers()).json()["stats"]
        assert stats[0]["secretariat"] == {
            "total": 0, "registered": 0, "percentage": "0", "isComplete": False,
        }


class TestUnregisteredMessage:
    def test_message_for_zone(self):
        response = client.get(
            "/api/dashboard/messages/unregistered",
            params={"zone": "Tirur"},
            headers=auth_headers(),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["role"] == "All"
        lines = data["message"].split("\n")
        assert lines[0].startswith("Tirur ")
        assert lines[1:5] == ["", "1. Abdul Rahman", "2. Muhammed Ali", ""]
        assert lines[5] == UNREGISTERED_FOOTER

    def test_role_narrows_the_list(self):
        data = client.get(
            "/api/dashboard/messages/unregistered",
            params={"zone": "Tirur", "role": "Secretariat"},
            headers=auth_headers(),
        ).json()
        assert data["count"] == 1
        assert "1. Abdul Rahman" in data["message"]
        assert "Muhammed Ali" not in data["message"]

    def test_no_zone_gives_empty_message(self):
        data = client.get(
            "/api/dashboard/messages/unregistered",
            params={"role": "Secretariat"},
            headers=auth_headers(),
        ).json()
        assert data == {"zone": None, "role": "All", "count": 0, "message": ""}

    def test_header_uses_zone_as_spelled_in_sheet(self):
        data = client.get(
            "/api/dashboard/messages/unregistered",
            params={"zone": "tirur"},
            headers=auth_headers(),
        ).json()
        assert data["message"].startswith("Tirur ")
        assert data["count"] == 2

    def test_fully_registered_selection_gives_empty_message(self):
        data = client.get(
            "/api/dashboard/messages/unregistered",
            params={"zone": "Kottakkal", "role": "Secretariat"},
            headers=auth_headers(),
        ).json()
        assert data["count"] == 0
        assert data["message"] == ""


class TestIncompleteZonesMessage:
    def _get(self, role=None):
        params = {"role": role} if role else {}
        response = client.get(
            "/api/dashboard/messages/incomplete-zones", params=params, headers=auth_headers()
        )
        assert response.status_code == 200
        return response.json()

    def test_secretariat_ties_keep_sheet_order(self):
        data = self._get("Secretariat")
        assert data["count"] == 2
        assert data["message"].split("\n") == [
            "Zones with pending Secretariat registrations",
            "",
            "1. Tirur - 0/1",
            "2. Malappuram - 0/1",
            "",
            INCOMPLETE_ZONES_FOOTER,
        ]

    def test_executive_sorted_by_percentage(self):
        lines = self._get("Executive")["message"].split("\n")
        assert lines[2:5] == [
            "1. Kottakkal - 1/2",
            "2. Malappuram - 1/2",
            "3. Tirur - 1/3",
        ]

    def test_all_roles_lists_pending_sub_roles(self):
        data = self._get()
        assert data["role"] == "All"
        lines = data["message"].split("\n")
        assert lines[2:5] == [
            "1. Kottakkal - Executive 1/2",
            "2. Malappuram - Secretariat 0/1 Executive 1/2",
            "3. Tirur - Secretariat 0/1 Executive 1/3",
        ]

    def test_unknown_role_falls_back_to_all(self):
        assert self._get("Treasurer")["role"] == "All"

    def test_everyone_registered_gives_empty_message(self):
        store.load([["A", "P", "1", "Yes", "Success", "Yes", "Yes"]])
        data = self._get()
        assert data == {"role": "All", "count": 0, "message": ""}


# ============================================
# Call campaign
# ============================================
class TestCallStatus:
    def _post(self, **overrides):
        payload = {
            "zone": "Tirur",
            "name": "Abdul Rahman",
            "callStatus": "Not Attending",
            "remarks": "Out of station",
        }
        payload.update(overrides)
        return client.post("/api/call-status", json=payload, headers=auth_headers())

    def test_set_call_status(self):
        response = self._post()
        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "Call status updated successfully",
        }
        assert store.rows[0][8:10] == ["Not Attending", "Out of station"]

    def test_registration_columns_untouched(self):
        self._post()
        assert store.rows[0][2:5] == ["", "", ""]

    def test_status_can_be_cleared(self):
        response = self._post(zone="Malappuram", name="Ashraf T", callStatus="", remarks="")
        assert response.status_code == 200
        assert store.rows[6][8:10] == ["", ""]

    def test_status_visible_in_member_list(self):
        self._post(callStatus="Attending", remarks="")
        members = client.get(
            "/api/dashboard/members", params={"zone": "Tirur"}, headers=auth_headers()
        ).json()["members"]
        assert members[0]["callStatus"] == "Attending"

    def test_unknown_status_rejected(self):
        response = self._post(callStatus="Maybe")
        assert response.status_code == 422

    def test_missing_name_rejected(self):
        response = client.post(
            "/api/call-status", json={"zone": "Tirur"}, headers=auth_headers()
        )
        assert response.status_code == 422

    def test_unknown_member_returns_404(self):
        response = self._post(name="Nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found in the list"

    def test_write_failure_returns_500(self):
        broken = MagicMock()
        broken.fetch_rows.return_value = [["Tirur", "Abdul Rahman"]]
        broken.write_row.side_effect = RowStoreError("quota exceeded")
        use_row_store(broken)
        response = self._post()
        assert response.status_code == 500
        assert "quota exceeded" in response.json()["message"]
