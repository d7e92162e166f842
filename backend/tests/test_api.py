"""
HTTP tests: routing, status codes, camelCase bodies and error mapping
"""
from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from main import app
from core.database import get_db
from domain.enums import SubscriptionTier, UserRole
from infrastructure.security.jwt_service import JwtService
from infrastructure.security.password_hasher import BcryptPasswordHasher
from application.services.notifications import NotificationDispatcher
from presentation.api.v1 import container


JOB_BODY = {
    "title": "Cleaner",
    "description": "Daily cleaning",
    "category": "Cleaning",
    "location": "Ikeja, Lagos",
    "jobType": "Full-time",
    "salaryMin": 5000,
    "salaryMax": 10000,
}


@pytest.fixture
def jwt_service():
    return JwtService(secret_key="api-test-secret")


@pytest.fixture
def client(market, jwt_service):
    overrides = {
        container.get_user_repository: lambda: market.users,
        container.get_job_repository: lambda: market.jobs,
        container.get_application_repository: lambda: market.applications,
        container.get_offer_repository: lambda: market.offers,
        container.get_interview_repository: lambda: market.interviews,
        container.get_verification_repository: lambda: market.verifications,
        container.get_transition_repository: lambda: market.transitions,
        container.get_job_history_repository: lambda: market.job_history,
        container.get_notification_dispatcher: lambda: NotificationDispatcher(
            market.mailer, enabled=True, backoff_seconds=0, deferred=True
        ),
        get_db: lambda: market.session,
        container.get_password_hasher: lambda: BcryptPasswordHasher(rounds=4),
        container.get_jwt_service: lambda: jwt_service,
    }
    app.dependency_overrides.update(overrides)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth(jwt_service):
    def headers(actor):
        token = jwt_service.create_access_token(actor.id, actor.user.role)
        return {"Authorization": f"Bearer {token}"}
    return headers


class TestAuthEndpoints:

    def test_register_returns_user_and_token(self, client):
        response = client.post("/api/auth/register", json={
            "email": "kemi@example.com",
            "password": "s3cret-pass",
            "firstName": "Kemi",
            "lastName": "Bello",
            "age": 19,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["firstName"] == "Kemi"
        assert body["user"]["role"] == "applicant"
        assert "passwordHash" not in body["user"]

    def test_duplicate_registration_conflicts(self, client):
        payload = {"email": "kemi@example.com", "password": "s3cret-pass", "firstName": "Kemi", "lastName": "Bello"}
        client.post("/api/auth/register", json=payload)

        assert client.post("/api/auth/register", json=payload).status_code == 409

    def test_login_and_current_user(self, client):
        client.post("/api/auth/register", json={
            "email": "kemi@example.com", "password": "s3cret-pass", "firstName": "Kemi", "lastName": "Bello",
        })

        login = client.post("/api/auth/login", json={"email": "kemi@example.com", "password": "s3cret-pass"})
        assert login.status_code == 200

        me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {login.json()['token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "kemi@example.com"

    def test_bad_password_is_401(self, client):
        client.post("/api/auth/register", json={
            "email": "kemi@example.com", "password": "s3cret-pass", "firstName": "Kemi", "lastName": "Bello",
        })
        response = client.post("/api/auth/login", json={"email": "kemi@example.com", "password": "nope-nope"})
        assert response.status_code == 401

    def test_missing_or_bad_token(self, client):
        assert client.get("/api/auth/user").status_code == 401
        response = client.get("/api/auth/user", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_body_is_400_with_field(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "s3cret-pass",
                                                           "firstName": "Kemi", "lastName": "Bello"})
        assert response.status_code == 400
        assert response.json()["field"] == "email"


class TestJobEndpoints:

    def test_create_get_and_filter(self, client, market, auth):
        employer = market.employer()

        created = client.post("/api/jobs", json=JOB_BODY, headers=auth(employer))
        assert created.status_code == 201
        job_id = created.json()["id"]

        fetched = client.get(f"/api/jobs/{job_id}").json()
        for key, value in JOB_BODY.items():
            assert fetched[key] == value
        assert fetched["isActive"] is True

        assert len(client.get("/api/jobs", params={"jobType": "Full-time", "location": "lagos"}).json()) == 1
        assert client.get("/api/jobs", params={"jobType": "Contract"}).json() == []

    def test_free_tier_limit_is_409(self, client, market, auth):
        employer = market.employer(tier=SubscriptionTier.FREE)
        response = client.post("/api/jobs", json=JOB_BODY, headers=auth(employer))
        assert response.status_code == 409

    def test_inverted_salary_is_400(self, client, market, auth):
        response = client.post("/api/jobs", json=dict(JOB_BODY, salaryMin=20000), headers=auth(market.employer()))
        assert response.status_code == 400
        assert response.json()["field"] == "salaryMax"

    def test_other_employer_cannot_edit_or_delete(self, client, market, auth):
        owner = market.employer()
        job_id = client.post("/api/jobs", json=JOB_BODY, headers=auth(owner)).json()["id"]
        intruder = auth(market.employer())

        assert client.patch(f"/api/jobs/{job_id}", json={"title": "Mine"}, headers=intruder).status_code == 403
        assert client.delete(f"/api/jobs/{job_id}", headers=intruder).status_code == 403
        assert client.get(f"/api/jobs/{job_id}").json()["title"] == "Cleaner"

    def test_owner_deletes(self, client, market, auth):
        owner = market.employer()
        job_id = client.post("/api/jobs", json=JOB_BODY, headers=auth(owner)).json()["id"]

        assert client.delete(f"/api/jobs/{job_id}", headers=auth(owner)).status_code == 204
        assert client.get(f"/api/jobs/{job_id}").status_code == 404

    @pytest.mark.parametrize("field", ["salaryMin", "jobType", "isActive", "gender", "title"])
    def test_null_on_required_field_is_400(self, client, market, auth, field):
        owner = market.employer()
        job_id = client.post("/api/jobs", json=JOB_BODY, headers=auth(owner)).json()["id"]

        response = client.patch(f"/api/jobs/{job_id}", json={field: None}, headers=auth(owner))

        assert response.status_code == 400
        assert response.json()["field"] == field
        assert client.get(f"/api/jobs/{job_id}").json()["isActive"] is True

    def test_subscription_status(self, client, market, auth):
        employer = market.employer(tier=SubscriptionTier.STANDARD)
        client.post("/api/jobs", json=JOB_BODY, headers=auth(employer))

        body = client.get("/api/subscription/status", headers=auth(employer)).json()
        assert body == {
            "tier": "standard",
            "jobLimit": 3,
            "activeJobs": 1,
            "remaining": 2,
            "canPost": True,
            "subscriptionEndDate": None,
        }


class TestApplicationEndpoints:

    def _post_job(self, client, auth, employer):
        return client.post("/api/jobs", json=JOB_BODY, headers=auth(employer)).json()["id"]

    def test_hiring_flow(self, client, market, auth):
        employer = market.employer()
        applicant = market.applicant(age=20)
        job_id = self._post_job(client, auth, employer)

        applied = client.post("/api/applications", json={"jobId": job_id}, headers=auth(applicant))
        assert applied.status_code == 201
        application_id = applied.json()["id"]
        assert applied.json()["status"] == "pending"

        offer = client.post(f"/api/applications/{application_id}/offers", json={"salary": 8000},
                            headers=auth(employer))
        assert offer.status_code == 201

        decision = client.post(f"/api/offers/{offer.json()['id']}/respond", json={"accept": True},
                               headers=auth(applicant))
        assert decision.status_code == 200
        assert decision.json()["offer"]["status"] == "accepted"
        assert decision.json()["application"]["status"] == "accepted"

        history = client.get(f"/api/applications/{application_id}/history", headers=auth(applicant)).json()
        assert [h["toStatus"] for h in history] == ["pending", "offered", "accepted"]

    def test_underage_apply_is_403(self, client, market, auth):
        job_id = self._post_job(client, auth, market.employer())

        response = client.post("/api/applications", json={"jobId": job_id}, headers=auth(market.applicant(age=15)))

        assert response.status_code == 403
        assert "16" in response.json()["detail"]
        assert market.applications.applications == {}

    def test_duplicate_apply_is_409(self, client, market, auth):
        applicant = market.applicant()
        job_id = self._post_job(client, auth, market.employer())
        client.post("/api/applications", json={"jobId": job_id}, headers=auth(applicant))

        assert client.post("/api/applications", json={"jobId": job_id}, headers=auth(applicant)).status_code == 409

    def test_offer_without_salary_names_field(self, client, market, auth):
        employer = market.employer()
        job_id = self._post_job(client, auth, employer)
        application_id = client.post("/api/applications", json={"jobId": job_id},
                                     headers=auth(market.applicant())).json()["id"]

        response = client.post(f"/api/applications/{application_id}/offers", json={}, headers=auth(employer))

        assert response.status_code == 400
        assert response.json()["field"] == "salary"

    def test_other_employer_status_update_is_403(self, client, market, auth):
        job_id = self._post_job(client, auth, market.employer())
        application_id = client.post("/api/applications", json={"jobId": job_id},
                                     headers=auth(market.applicant())).json()["id"]

        response = client.patch(f"/api/applications/{application_id}", json={"status": "rejected"},
                                headers=auth(market.employer()))

        assert response.status_code == 403
        assert market.applications.applications[application_id].status.value == "pending"

    def test_employer_lists_applicants(self, client, market, auth):
        employer = market.employer()
        job_id = self._post_job(client, auth, employer)
        client.post("/api/applications", json={"jobId": job_id},
                    headers=auth(market.applicant(first_name="Emeka")))

        listed = client.get(f"/api/jobs/{job_id}/applications", headers=auth(employer)).json()
        assert listed[0]["applicant"]["firstName"] == "Emeka"
        assert listed[0]["job"]["title"] == "Cleaner"

    def test_cancel_without_body(self, client, market, auth):
        applicant = market.applicant(is_verified=True)
        job_id = self._post_job(client, auth, market.employer())
        application_id = client.post("/api/applications", json={"jobId": job_id},
                                     headers=auth(applicant)).json()["id"]

        response = client.post(f"/api/applications/{application_id}/cancel", headers=auth(applicant))

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

    def test_interview_needs_meeting_link(self, client, market, auth):
        employer = market.employer()
        job_id = self._post_job(client, auth, employer)
        application_id = client.post("/api/applications", json={"jobId": job_id},
                                     headers=auth(market.applicant())).json()["id"]

        response = client.post(f"/api/applications/{application_id}/interviews", json={
            "interviewDate": "2026-03-01",
            "interviewTime": "10:00",
            "interviewType": "video",
        }, headers=auth(employer))

        assert response.status_code == 400
        assert response.json()["field"] == "meetingLink"

    def test_malformed_job_id(self, client, market, auth):
        response = client.post("/api/applications", json={"jobId": "abc"}, headers=auth(market.applicant()))
        assert response.status_code == 400
        assert response.json()["field"] == "jobId"

    def test_unknown_application_is_404(self, client, market, auth):
        assert client.get("/api/applications/999", headers=auth(market.admin())).status_code == 404


class TestVerificationAndAdminEndpoints:

    def test_submit_and_approve(self, client, market, auth):
        applicant = market.applicant()
        admin = market.admin()

        submitted = client.post("/api/verification/submit", json={"idType": "NIN", "idNumber": "123"},
                                headers=auth(applicant))
        assert submitted.status_code == 201

        decided = client.patch(f"/api/admin/verification-requests/{submitted.json()['id']}",
                               json={"status": "approved"}, headers=auth(admin))
        assert decided.status_code == 200

        status = client.get("/api/verification/status", headers=auth(applicant)).json()
        assert status["isVerified"] is True
        assert status["request"]["status"] == "approved"

    def test_submit_without_id_number(self, client, market, auth):
        response = client.post("/api/verification/submit", json={"idType": "NIN"}, headers=auth(market.applicant()))
        assert response.status_code == 400
        assert response.json()["field"] == "idNumber"

    def test_admin_routes_require_admin(self, client, market, auth):
        assert client.get("/api/admin/stats", headers=auth(market.employer())).status_code == 403
        assert client.get("/api/admin/stats", headers=auth(market.admin())).status_code == 200

    def test_admin_updates_subscription(self, client, market, auth):
        employer = market.employer(tier=SubscriptionTier.FREE)

        response = client.patch(f"/api/admin/subscriptions/{employer.id}",
                                json={"subscriptionStatus": "enterprise"}, headers=auth(market.admin()))

        assert response.status_code == 200
        assert response.json()["subscriptionTier"] == "enterprise"

    def test_profile_edit_cannot_change_role(self, client, market, auth):
        applicant = market.applicant()

        response = client.patch("/api/users/me", json={"bio": "Reliable", "role": "admin"},
                                headers=auth(applicant))

        assert response.status_code == 200
        assert response.json()["bio"] == "Reliable"
        assert response.json()["role"] == "applicant"

    def test_token_of_demoted_user_uses_stored_role(self, client, market, auth):
        admin = market.admin()
        headers = auth(admin)
        market.users.add(replace(admin.user, role=UserRole.EMPLOYER))

        assert client.get("/api/admin/stats", headers=headers).status_code == 403


class TestRequestTransaction:

    def _application(self, client, market, auth):
        employer = market.employer()
        job_id = client.post("/api/jobs", json=JOB_BODY, headers=auth(employer)).json()["id"]
        application_id = client.post("/api/applications", json={"jobId": job_id},
                                     headers=auth(market.applicant())).json()["id"]
        market.mailer.sent.clear()
        return employer, application_id

    def test_mail_goes_out_after_commit(self, client, market, auth):
        employer, application_id = self._application(client, market, auth)
        commits_at_send = []
        market.mailer.send_email = AsyncMock(side_effect=lambda *args: commits_at_send.append(market.session.commits))
        commits_before = market.session.commits

        response = client.post(f"/api/applications/{application_id}/offers", json={"salary": 8000},
                               headers=auth(employer))

        assert response.status_code == 201
        assert market.session.commits == commits_before + 1
        assert commits_at_send == [commits_before + 1]

    def test_failed_commit_is_500_and_sends_nothing(self, client, market, auth):
        employer, application_id = self._application(client, market, auth)
        market.session.error = OperationalError("COMMIT", {}, Exception("connection lost"))

        response = client.post(f"/api/applications/{application_id}/offers", json={"salary": 8000},
                               headers=auth(employer))

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"
        assert market.mailer.sent == []

    def test_reads_do_not_commit(self, client, market, auth):
        client.get("/api/jobs")
        assert market.session.commits == 0


class TestAccountEndpoints:

    def _register(self, client):
        response = client.post("/api/auth/register", json={
            "email": "kemi@example.com", "password": "s3cret-pass", "firstName": "Kemi", "lastName": "Bello",
        })
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    def _stored(self, market):
        return next(u for u in market.users.users.values() if str(u.email) == "kemi@example.com")

    def test_change_password(self, client, market):
        _, headers = self._register(client)

        response = client.post("/api/auth/change-password", json={
            "currentPassword": "s3cret-pass", "newPassword": "even-better-pass",
        }, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Password changed successfully"}
        login = client.post("/api/auth/login", json={"email": "kemi@example.com", "password": "even-better-pass"})
        assert login.status_code == 200

    def test_change_password_with_wrong_current_is_400(self, client, market):
        _, headers = self._register(client)

        response = client.post("/api/auth/change-password", json={
            "currentPassword": "guessing", "newPassword": "even-better-pass",
        }, headers=headers)

        assert response.status_code == 400
        assert response.json()["field"] == "currentPassword"

    def test_registration_code_verifies_email(self, client, market):
        _, headers = self._register(client)
        code = self._stored(market).email_verification_code
        assert market.mailer.recipients() == ["kemi@example.com"]
        assert code in market.mailer.sent[0]["html"]

        response = client.post("/api/auth/verify-email", json={"code": code}, headers=headers)

        assert response.status_code == 200
        assert response.json()["emailVerified"] is True
        again = client.post("/api/auth/send-verification", headers=headers)
        assert again.json() == {"message": "Email already verified"}

    def test_send_verification_mails_new_code(self, client, market):
        _, headers = self._register(client)
        market.mailer.sent.clear()

        response = client.post("/api/auth/send-verification", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Verification code sent"}
        assert self._stored(market).email_verification_code in market.mailer.sent[0]["html"]

    def test_verify_email_code_must_be_six_characters(self, client, market):
        _, headers = self._register(client)
        response = client.post("/api/auth/verify-email", json={"code": "123"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["field"] == "code"

    def test_job_history(self, client, market, auth):
        applicant = market.applicant()

        created = client.post("/api/job-history", json={
            "jobTitle": "Driver", "company": "Bolt", "startDate": "2022-01", "isCurrent": True,
        }, headers=auth(applicant))
        assert created.status_code == 201
        assert created.json()["isCurrent"] is True

        listed = client.get("/api/job-history", headers=auth(applicant)).json()
        assert [e["jobTitle"] for e in listed] == ["Driver"]
        assert client.get("/api/job-history", headers=auth(market.applicant())).json() == []

        entry_id = created.json()["id"]
        assert client.delete(f"/api/job-history/{entry_id}", headers=auth(market.applicant())).status_code == 404
        assert client.delete(f"/api/job-history/{entry_id}", headers=auth(applicant)).status_code == 204
        assert client.get("/api/job-history", headers=auth(applicant)).json() == []

    def test_job_history_without_company_names_field(self, client, market, auth):
        response = client.post("/api/job-history", json={"jobTitle": "Driver"}, headers=auth(market.applicant()))
        assert response.status_code == 400
        assert response.json()["field"] == "company"


class TestHealth:

    def test_health(self, client):
        with patch("main.database_health_check", new=AsyncMock(return_value=True)):
            response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] is True

    def test_health_degraded(self, client):
        with patch("main.database_health_check", new=AsyncMock(return_value=False)):
            response = client.get("/health")
        assert response.status_code == 503
