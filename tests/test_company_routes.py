"""
Test suite for company endpoints.

Tests cover:
- Admin-only writes
- Filtering through query parameters
- Error status mapping
"""


class TestCreateCompany:

    NEW_COMPANY = {
        "handle": "new",
        "name": "New",
        "logoUrl": "http://new.img",
        "description": "DescNew",
        "numEmployees": 10,
    }

    def test_works_for_admin(self, client, admin_headers):
        response = client.post("/companies", json=self.NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": self.NEW_COMPANY}

    def test_fails_for_regular_user(self, client, user_headers):
        response = client.post("/companies", json=self.NEW_COMPANY, headers=user_headers)

        assert response.status_code == 401

    def test_fails_for_anonymous(self, client):
        assert client.post("/companies", json=self.NEW_COMPANY).status_code == 401

    def test_bad_token(self, client):
        response = client.post("/companies", json=self.NEW_COMPANY, headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_missing_data(self, client, admin_headers):
        response = client.post("/companies", json={"handle": "new", "numEmployees": 10}, headers=admin_headers)

        assert response.status_code == 400

    def test_invalid_data(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={**self.NEW_COMPANY, "numEmployees": "10"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_duplicate(self, client, admin_headers):
        response = client.post("/companies", json={**self.NEW_COMPANY, "handle": "c1"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_duplicate_name(self, client, admin_headers):
        response = client.post("/companies", json={**self.NEW_COMPANY, "name": "C1"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_description_is_optional(self, client, admin_headers):
        response = client.post(
            "/companies",
            json={"handle": "c9", "name": "C9", "numEmployees": 1},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["company"]["description"] is None


class TestListCompanies:

    def test_anonymous(self, client):
        response = client.get("/companies")

        assert response.status_code == 200
        assert response.json()["companies"] == [
            {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
            {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
            {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"},
        ]

    def test_filters(self, client):
        response = client.get("/companies", params={"minEmployees": 2, "name": "3"})

        assert [c["handle"] for c in response.json()["companies"]] == ["c3"]

    def test_unknown_filters_are_ignored(self, client):
        response = client.get("/companies", params={"color": "red"})

        assert response.status_code == 200
        assert len(response.json()["companies"]) == 3

    def test_min_above_max(self, client):
        response = client.get("/companies", params={"minEmployees": 3, "maxEmployees": 1})

        assert response.status_code == 400


class TestGetCompany:

    def test_with_jobs(self, client, job_ids):
        response = client.get("/companies/c1")

        assert response.status_code == 200
        assert response.json() == {
            "company": {
                "handle": "c1",
                "name": "C1",
                "description": "Desc1",
                "numEmployees": 1,
                "logoUrl": "http://c1.img",
                "jobs": [{"id": job_ids[0], "title": "job1", "salary": 999, "equity": 0}],
            }
        }

    def test_not_found(self, client):
        response = client.get("/companies/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestUpdateCompany:

    def test_works_for_admin(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["company"]["name"] == "C1-new"
        assert response.json()["company"]["numEmployees"] == 1

    def test_fails_for_regular_user(self, client, user_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=user_headers)

        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        response = client.patch("/companies/nope", json={"name": "x"}, headers=admin_headers)

        assert response.status_code == 404

    def test_handle_change_rejected(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_empty_body_rejected(self, client, admin_headers):
        response = client.patch("/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400

    def test_name_taken_by_other_company(self, client, admin_headers):
        response = client.patch("/companies/c2", json={"name": "C1"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_null_name_rejected(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"name": None}, headers=admin_headers)

        assert response.status_code == 400

    def test_null_description_allowed(self, client, admin_headers):
        response = client.patch("/companies/c1", json={"description": None}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["company"]["description"] is None


class TestDeleteCompany:

    def test_works_for_admin(self, client, admin_headers):
        response = client.delete("/companies/c1", headers=admin_headers)

        assert response.json() == {"deleted": "c1"}
        assert client.delete("/companies/c1", headers=admin_headers).status_code == 404

    def test_fails_for_regular_user(self, client, user_headers):
        assert client.delete("/companies/c1", headers=user_headers).status_code == 401
