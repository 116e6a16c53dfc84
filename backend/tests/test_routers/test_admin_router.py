"""Integration tests for /api/admin endpoints."""

from datetime import datetime, timedelta, timezone

import pytest

import repositories.db_models as db_models


class TestAdminAccess:
    @pytest.mark.parametrize(
        "path", ["/api/admin/stats", "/api/admin/contacts", "/api/admin/residents"]
    )
    def test_residents_are_forbidden(self, client, auth_headers, path):
        response = client.get(path, headers=auth_headers)
        assert response.status_code == 403

    def test_anonymous_is_unauthorized(self, client):
        response = client.get("/api/admin/stats")
        assert response.status_code == 401


class TestAdminReports:
    def test_update_status_and_urgent(self, client, admin_auth_headers, test_report):
        response = client.patch(
            f"/api/admin/reports/{test_report.id}/status",
            json={"status": "in_progress", "is_urgent": True},
            headers=admin_auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "in_progress"
        assert response.json()["is_urgent"] is True

    def test_set_urgent_only(self, client, admin_auth_headers, test_report):
        response = client.patch(
            f"/api/admin/reports/{test_report.id}/urgent",
            json={"is_urgent": True},
            headers=admin_auth_headers,
        )

        assert response.json()["is_urgent"] is True
        assert response.json()["status"] == "pending"

    def test_update_missing_report(self, client, admin_auth_headers):
        response = client.patch(
            "/api/admin/reports/99999/status",
            json={"status": "resolved"},
            headers=admin_auth_headers,
        )
        assert response.status_code == 404

    def test_delete_report(self, client, admin_auth_headers, test_report):
        response = client.delete(
            f"/api/admin/reports/{test_report.id}", headers=admin_auth_headers
        )
        assert response.status_code == 204
        assert client.get(f"/api/reports/{test_report.id}").status_code == 404


class TestAdminAnnouncements:
    def test_create_list_delete(self, client, admin_auth_headers):
        created = client.post(
            "/api/admin/announcements",
            json={
                "title_en": "Borehole repairs",
                "title_sw": "Matengenezo ya kisima",
                "message_en": "No water on Friday.",
                "priority": "pinned",
                "target_ward": "Makina",
            },
            headers=admin_auth_headers,
        )
        assert created.status_code == 201
        announcement_id = created.json()["id"]

        listed = client.get("/api/admin/announcements", headers=admin_auth_headers)
        assert [a["id"] for a in listed.json()] == [announcement_id]

        deleted = client.delete(
            f"/api/admin/announcements/{announcement_id}", headers=admin_auth_headers
        )
        assert deleted.status_code == 204


class TestAdminContacts:
    def test_triage_contact(self, client, admin_auth_headers):
        created = client.post(
            "/api/contacts",
            json={
                "full_name": "Amina Otieno",
                "email": "amina@example.com",
                "subject": "Noise",
                "message": "Loud music every night.",
            },
        )
        contact_id = created.json()["id"]

        response = client.patch(
            f"/api/admin/contacts/{contact_id}",
            json={"status": "replied", "admin_notes": "Spoke to the bar owner"},
            headers=admin_auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "replied"
        listed = client.get("/api/admin/contacts", headers=admin_auth_headers)
        assert listed.json()[0]["admin_notes"] == "Spoke to the bar owner"


class TestAdminStats:
    def test_report_stats(self, client, admin_auth_headers, make_report):
        now = datetime.now(timezone.utc)
        make_report(created_at=now - timedelta(days=1))
        make_report(created_at=now - timedelta(days=8))
        make_report(created_at=now - timedelta(days=9))

        response = client.get("/api/admin/stats/reports", headers=admin_auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["new_7d"] == 1
        assert data["new_7d_change_pct"] == -50.0

    def test_overview_and_breakdowns(self, client, admin_auth_headers, make_report):
        make_report(ward="Makina", category=db_models.ReportCategory.HEALTH)

        overview = client.get("/api/admin/stats", headers=admin_auth_headers)
        by_ward = client.get("/api/admin/stats/by-ward", headers=admin_auth_headers)
        by_category = client.get(
            "/api/admin/stats/by-category", headers=admin_auth_headers
        )
        over_time = client.get(
            "/api/admin/stats/over-time", params={"days": 7}, headers=admin_auth_headers
        )
        contacts = client.get("/api/admin/stats/contacts", headers=admin_auth_headers)

        assert overview.json()["total_reports"] == 1
        assert by_ward.json() == [{"ward": "Makina", "count": 1}]
        assert by_category.json() == [{"category": "health", "count": 1}]
        assert sum(d["count"] for d in over_time.json()) == 1
        assert contacts.json()["total"] == 0

    def test_over_time_rejects_zero_days(self, client, admin_auth_headers):
        response = client.get(
            "/api/admin/stats/over-time", params={"days": 0}, headers=admin_auth_headers
        )
        assert response.status_code == 422


class TestAdminResidents:
    def test_suspend_then_vote_is_blocked(
        self, client, admin_auth_headers, other_user, other_auth_headers, test_report
    ):
        response = client.patch(
            f"/api/admin/residents/{other_user.id}/status",
            json={"status": "suspended"},
            headers=admin_auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "suspended"

        vote = client.post(
            f"/api/reports/{test_report.id}/vote", headers=other_auth_headers
        )
        assert vote.status_code == 403

    def test_list_residents_by_ward(
        self, client, admin_auth_headers, test_user, other_user
    ):
        response = client.get(
            "/api/admin/residents", params={"ward": "Makina"}, headers=admin_auth_headers
        )
        assert [u["id"] for u in response.json()] == [other_user.id]
