"""
HTTP tests for the referral endpoints and the cross-cutting middleware.
"""
import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.testclient import TestClient

from referral_api.core.exceptions import StoreUnavailableError, StoreConstraintViolationError
from referral_api.deps import get_mailer
from referral_api.infrastructure.repositories import ReferralRepository
from referral_api.main import create_app
from referral_api.services.referral_service import ReferralService

from .conftest import FakeMailer, VALID_PAYLOAD


def _total(client) -> int:
    return client.get("/api/referral-stats").json()["totalReferrals"]


class TestSubmitReferral:

    def test_valid_submission(self, client, mailer):
        response = client.post("/api/refer", json=VALID_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Referral submitted successfully"
        referral = body["referral"]
        assert set(referral) == {"id", "referrerName", "refereeName", "course", "createdAt"}
        assert isinstance(referral["id"], int)
        assert referral["createdAt"]
        assert referral["referrerName"] == "Alice"
        assert referral["refereeName"] == "Bob"
        assert referral["course"] == "CS101"

        assert _total(client) == 1
        assert mailer.sent == [{
            "to": "bob@x.com",
            "subject": "You've been referred!",
            "body": "Alice has referred you for the CS101 course.",
        }]

    def test_referee_email_not_returned(self, client):
        response = client.post("/api/refer", json=VALID_PAYLOAD)
        assert "bob@x.com" not in response.text

    def test_values_round_trip_verbatim(self, client):
        payload = dict(VALID_PAYLOAD, referrerName="  aLiCe ", refereeName="Bob  Smith", course=" cs 101")

        referral = client.post("/api/refer", json=payload).json()["referral"]

        assert referral["referrerName"] == "  aLiCe "
        assert referral["refereeName"] == "Bob  Smith"
        assert referral["course"] == " cs 101"

    @pytest.mark.parametrize("field", list(VALID_PAYLOAD))
    def test_missing_field(self, client, mailer, field):
        payload = {k: v for k, v in VALID_PAYLOAD.items() if k != field}

        response = client.post("/api/refer", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}
        assert _total(client) == 0
        assert mailer.sent == []

    @pytest.mark.parametrize("body", [b"", b"{not json", b"[1, 2]"])
    def test_unusable_body_is_missing_fields(self, client, body):
        response = client.post("/api/refer", content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}

    @pytest.mark.parametrize("field", ["referrerEmail", "refereeEmail"])
    def test_invalid_email(self, client, mailer, field):
        payload = dict(VALID_PAYLOAD, **{field: "not-an-email"})

        response = client.post("/api/refer", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid email format"}
        assert _total(client) == 0
        assert mailer.sent == []

    def test_email_failure_still_created(self, settings):
        failing = FakeMailer(fail=True)
        app = create_app(settings)
        app.dependency_overrides[get_mailer] = lambda: failing

        with TestClient(app) as client:
            response = client.post("/api/refer", json=VALID_PAYLOAD)

            assert response.status_code == 201
            assert response.json()["referral"]["refereeName"] == "Bob"
            assert _total(client) == 1
        assert len(failing.sent) == 1

    @pytest.mark.parametrize("error", [
        StoreUnavailableError("could not connect to server: Connection refused"),
        StoreConstraintViolationError("value too long for type character varying(255)"),
    ])
    def test_store_failure(self, client, mailer, error):
        with patch.object(ReferralRepository, "create", AsyncMock(side_effect=error)):
            response = client.post("/api/refer", json=VALID_PAYLOAD)

        assert response.status_code == 500
        assert response.json() == {"error": "An error occurred while processing your request"}
        assert mailer.sent == []


class TestReferralStats:

    def test_empty(self, client):
        response = client.get("/api/referral-stats")

        assert response.status_code == 200
        assert response.json() == {"totalReferrals": 0, "recentReferrals": []}

    def test_counts_and_recent(self, client):
        for n in range(7):
            payload = dict(VALID_PAYLOAD, referrerName=f"Alice {n}", course=f"CS10{n}")
            assert client.post("/api/refer", json=payload).status_code == 201

        body = client.get("/api/referral-stats").json()

        assert body["totalReferrals"] == 7
        recent = body["recentReferrals"]
        assert [item["referrerName"] for item in recent] == [
            "Alice 6", "Alice 5", "Alice 4", "Alice 3", "Alice 2",
        ]
        assert recent[0]["course"] == "CS106"
        for item in recent:
            assert set(item) == {"referrerName", "course", "createdAt"}

    def test_store_failure(self, client):
        error = StoreUnavailableError("could not connect to server")
        with patch.object(ReferralRepository, "count", AsyncMock(side_effect=error)):
            response = client.get("/api/referral-stats")

        assert response.status_code == 500
        assert response.json() == {"error": "An error occurred while fetching referral statistics"}


class TestCrossCutting:

    def test_unhandled_error_is_generic(self, app):
        with patch.object(ReferralService, "get_stats", AsyncMock(side_effect=RuntimeError("secret detail"))):
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/api/referral-stats")

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}
        assert "secret detail" not in response.text

    def test_unknown_route_uses_error_shape(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_security_headers(self, client):
        response = client.get("/api/referral-stats")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "Strict-Transport-Security" in response.headers

    def test_cors_allows_any_origin(self, client):
        response = client.get("/api/referral-stats", headers={"Origin": "https://courses.example.org"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_rate_limit(self, settings, mailer):
        app = create_app(settings, rate_limit="2/minute")
        app.dependency_overrides[get_mailer] = lambda: mailer

        with TestClient(app) as client:
            assert client.get("/api/referral-stats").status_code == 200
            assert client.get("/api/referral-stats").status_code == 200
            response = client.get("/api/referral-stats")

        assert response.status_code == 429
        assert response.text == "Too many requests"

    def test_rate_limit_covers_submissions(self, settings, mailer):
        app = create_app(settings, rate_limit="1/minute")
        app.dependency_overrides[get_mailer] = lambda: mailer

        with TestClient(app) as client:
            assert client.post("/api/refer", json=VALID_PAYLOAD).status_code == 201
            response = client.post("/api/refer", json=VALID_PAYLOAD)

        assert response.status_code == 429
        assert len(mailer.sent) == 1

    def test_default_rate_limit_from_settings(self, settings, mailer):
        settings.RATE_LIMIT = "3 per 15 minutes"
        app = create_app(settings)
        app.dependency_overrides[get_mailer] = lambda: mailer

        with TestClient(app) as client:
            statuses = [client.get("/healthz").status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 429]

    def test_new_app_starts_with_fresh_counters(self, settings, mailer):
        for _ in range(2):
            app = create_app(settings, rate_limit="1/minute")
            app.dependency_overrides[get_mailer] = lambda: mailer
            with TestClient(app) as client:
                assert client.get("/api/referral-stats").status_code == 200

    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"db": "ok"}

    def test_healthz_reports_database_error(self, client):
        error = OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))
        with patch.object(AsyncSession, "scalar", AsyncMock(side_effect=error)):
            response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"db": "error"}
