"""Integration tests for /api/catalog."""


class TestCatalogRouter:
    def test_catalog_public(self, client):
        response = client.get("/api/catalog")

        assert response.status_code == 200
        data = response.json()
        assert [item["key"] for item in data["report_types"]] == [
            "issue",
            "compliment",
            "suggestion",
            "request",
        ]
        assert len(data["categories"]) == 28
        assert {item["key"] for item in data["statuses"]} == {
            "new",
            "under_review",
            "in_progress",
            "resolved",
            "closed",
            "rejected",
        }

    def test_priority_entries_have_colors(self, client):
        data = client.get("/api/catalog").json()
        assert all(item["color"] for item in data["priorities"])
