"""Integration tests for /api/admin endpoints."""

import repositories.db_models as db_models


class TestAdminReads:
    """Test cases for admin console reads."""

    def test_stats(self, client, make_report, admin_headers):
        make_report(status=db_models.ReportStatus.NEW)
        make_report(status=db_models.ReportStatus.IN_PROGRESS)
        make_report(status=db_models.ReportStatus.RESOLVED)

        response = client.get("/api/admin/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total_reports": 3,
            "new_reports": 1,
            "active_cases": 1,
            "resolved_reports": 1,
        }

    def test_stats_forbidden_for_citizens(self, client, auth_headers):
        response = client.get("/api/admin/stats", headers=auth_headers)

        assert response.status_code == 403
        assert "correlation_id" in response.json()

    def test_stats_requires_auth(self, client):
        assert client.get("/api/admin/stats").status_code == 401

    def test_officials_can_read(self, client, official_headers):
        response = client.get("/api/admin/reports", headers=official_headers)
        assert response.status_code == 200

    def test_report_list_status_all(self, client, make_report, admin_headers):
        make_report(status=db_models.ReportStatus.NEW)
        make_report(status=db_models.ReportStatus.REJECTED)

        everything = client.get(
            "/api/admin/reports", params={"status": "all"}, headers=admin_headers
        ).json()
        rejected = client.get(
            "/api/admin/reports", params={"status": "rejected"}, headers=admin_headers
        ).json()

        assert everything["total"] == 2
        assert rejected["total"] == 1
        assert rejected["reports"][0]["status"] == "rejected"

    def test_report_list_rejects_unknown_status(self, client, admin_headers):
        response = client.get(
            "/api/admin/reports", params={"status": "archived"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_report_list_pages(self, client, make_report, admin_headers):
        for i in range(21):
            make_report(title=f"Report {i}")

        data = client.get(
            "/api/admin/reports", params={"page": 2}, headers=admin_headers
        ).json()

        assert data["page"] == 2
        assert data["page_size"] == 20
        assert data["total_pages"] == 2
        assert len(data["reports"]) == 1

    def test_report_detail_includes_contact(self, client, test_report, admin_headers):
        data = client.get(
            f"/api/admin/reports/{test_report.id}", headers=admin_headers
        ).json()
        assert data["contact_email"] == "reporter@example.com"

    def test_users_lists_citizens(self, client, test_user, admin_headers):
        data = client.get("/api/admin/users", headers=admin_headers).json()

        assert data["total"] == 1
        assert data["users"][0]["username"] == test_user.username

    def test_users_admin_only(self, client, official_headers):
        response = client.get("/api/admin/users", headers=official_headers)
        assert response.status_code == 403


class TestWorkflowEndpoints:
    """Test cases for status, priority and official updates."""

    def test_status_change(self, client, make_report, admin_headers):
        report = make_report(status=db_models.ReportStatus.UNDER_REVIEW)

        response = client.put(
            f"/api/admin/reports/{report.id}/status",
            json={"status": "resolved", "note": ""},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["changed"] is True
        assert data["report"]["status"] == "resolved"
        assert data["update"]["message"] == "Status changed from under_review to resolved"

    def test_status_change_same_status(self, client, test_report, official_headers):
        response = client.put(
            f"/api/admin/reports/{test_report.id}/status",
            json={"status": "new"},
            headers=official_headers,
        )

        assert response.status_code == 200
        assert response.json()["changed"] is False
        assert response.json()["update"] is None

    def test_status_change_forbidden_for_citizen(
        self, client, db_session, test_report, auth_headers
    ):
        response = client.put(
            f"/api/admin/reports/{test_report.id}/status",
            json={"status": "closed"},
            headers=auth_headers,
        )

        db_session.refresh(test_report)
        assert response.status_code == 403
        assert test_report.status == db_models.ReportStatus.NEW

    def test_status_change_requires_auth(self, client, test_report):
        response = client.put(
            f"/api/admin/reports/{test_report.id}/status", json={"status": "closed"}
        )
        assert response.status_code == 401

    def test_status_change_on_compliment(self, client, compliment_report, admin_headers):
        response = client.put(
            f"/api/admin/reports/{compliment_report.id}/status",
            json={"status": "resolved"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "Compliments" in response.json()["detail"]

    def test_status_change_unknown_report(self, client, admin_headers):
        response = client.put(
            "/api/admin/reports/99999/status",
            json={"status": "closed"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_priority_change(self, client, test_report, official_headers):
        response = client.put(
            f"/api/admin/reports/{test_report.id}/priority",
            json={"priority": "urgent"},
            headers=official_headers,
        )

        assert response.status_code == 200
        assert response.json()["priority"] == "urgent"
        assert response.json()["updates_count"] == 0

    def test_priority_cleared(self, client, make_report, admin_headers):
        report = make_report(priority=db_models.ReportPriority.LOW)

        response = client.put(
            f"/api/admin/reports/{report.id}/priority",
            json={"priority": None},
            headers=admin_headers,
        )

        assert response.json()["priority"] is None

    def test_priority_forbidden_for_citizen(self, client, test_report, auth_headers):
        response = client.put(
            f"/api/admin/reports/{test_report.id}/priority",
            json={"priority": "high"},
            headers=auth_headers,
        )
        assert response.status_code == 403

    def test_official_update(self, client, test_report, official_headers):
        response = client.post(
            f"/api/admin/reports/{test_report.id}/updates",
            json={"message": "Crew dispatched."},
            headers=official_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["update_type"] == "official_update"
        assert data["is_official"] is True
        assert data["author_role"] == "official"

    def test_official_update_forbidden_for_citizen(
        self, client, test_report, auth_headers
    ):
        response = client.post(
            f"/api/admin/reports/{test_report.id}/updates",
            json={"message": "Fake news"},
            headers=auth_headers,
        )
        assert response.status_code == 403

    def test_detail_shows_workflow_history(self, client, test_report, admin_headers):
        client.put(
            f"/api/admin/reports/{test_report.id}/status",
            json={"status": "under_review"},
            headers=admin_headers,
        )
        client.post(
            f"/api/admin/reports/{test_report.id}/updates",
            json={"message": "Inspector assigned."},
            headers=admin_headers,
        )

        data = client.get(f"/api/reports/{test_report.id}").json()

        assert [entry["update_type"] for entry in data["updates"]] == [
            "status_change",
            "official_update",
        ]
        assert data["updates_count"] == 2
