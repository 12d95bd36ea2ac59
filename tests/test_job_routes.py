"""
Tests for /jobs routes.
"""

import pytest


def auth(token):
    return {"authorization": f"Bearer {token}"}


NEW_JOB = {"title": "new", "salary": 100000, "equity": "0.1", "companyHandle": "c1"}


class TestCreateJob:
    def test_ok_for_admin(self, client, admin_token):
        resp = client.post("/jobs", json=NEW_JOB, headers=auth(admin_token))

        assert resp.status_code == 201
        body = resp.json()
        assert isinstance(body["job"]["id"], int)
        assert body == {"job": {**NEW_JOB, "id": body["job"]["id"]}}

    def test_unauth_for_non_admin(self, client, u1_token):
        resp = client.post("/jobs", json=NEW_JOB, headers=auth(u1_token))
        assert resp.status_code == 401

    def test_unauth_for_anon(self, client):
        assert client.post("/jobs", json=NEW_JOB).status_code == 401

    def test_non_admin_gets_401_even_with_bad_body(self, client, u1_token):
        resp = client.post("/jobs", json={"title": "x"}, headers=auth(u1_token))
        assert resp.status_code == 401

    @pytest.mark.parametrize("body", [
        {"title": "new", "salary": 100000},
        {**NEW_JOB, "equity": "not-a-number"},
        {**NEW_JOB, "equity": "1.1"},
        {**NEW_JOB, "salary": -5},
        {**NEW_JOB, "salary": 10**20},
        {**NEW_JOB, "id": 1},
    ])
    def test_bad_request(self, client, admin_token, body):
        resp = client.post("/jobs", json=body, headers=auth(admin_token))
        assert resp.status_code == 400

    def test_unknown_company(self, client, admin_token):
        resp = client.post("/jobs", json={**NEW_JOB, "companyHandle": "nope"}, headers=auth(admin_token))
        assert resp.status_code == 404


class TestListJobs:
    def test_ok_for_anon(self, client, job_ids):
        resp = client.get("/jobs")

        assert resp.status_code == 200
        assert resp.json() == {
            "jobs": [
                {"id": job_ids[0], "title": "Job1", "salary": 100000, "equity": "0.1", "companyHandle": "c1"},
                {"id": job_ids[1], "title": "Job2", "salary": 200000, "equity": "0.2", "companyHandle": "c1"},
                {"id": job_ids[2], "title": "Job3", "salary": 300000, "equity": "0", "companyHandle": "c2"},
            ]
        }

    def test_invalid_token_is_treated_as_anon(self, client):
        resp = client.get("/jobs", headers=auth("garbage"))
        assert resp.status_code == 200

    def test_filters(self, client, job_ids):
        resp = client.get("/jobs", params={"minSalary": 150000, "hasEquity": "true"})
        assert [j["id"] for j in resp.json()["jobs"]] == [job_ids[1]]

    def test_title_filter_is_case_insensitive(self, client):
        resp = client.get("/jobs", params={"title": "jOb1"})
        assert [j["title"] for j in resp.json()["jobs"]] == ["Job1"]

    def test_no_match_is_empty_list(self, client):
        resp = client.get("/jobs", params={"title": "nothing"})
        assert resp.status_code == 200
        assert resp.json() == {"jobs": []}

    def test_empty_title_matches_everything(self, client, job_ids):
        resp = client.get("/jobs", params={"title": ""})
        assert resp.status_code == 200
        assert [j["id"] for j in resp.json()["jobs"]] == job_ids

    @pytest.mark.parametrize("params", [
        {"minSalary": 300000, "maxSalary": 100000},
        {"minSalary": -1},
        {"minSalary": "lots"},
        {"minSalary": 10**20},
        {"hasEquity": "maybe"},
    ])
    def test_bad_filters(self, client, params):
        assert client.get("/jobs", params=params).status_code == 400


class TestGetJob:
    def test_works_for_anon(self, client, job_ids):
        resp = client.get(f"/jobs/{job_ids[0]}")
        assert resp.json() == {
            "job": {"id": job_ids[0], "title": "Job1", "salary": 100000, "equity": "0.1", "companyHandle": "c1"}
        }

    def test_not_found(self, client):
        assert client.get("/jobs/9999").status_code == 404

    def test_id_too_large_for_the_store(self, client):
        assert client.get("/jobs/99999999999999999999").status_code == 404

    def test_non_integer_id(self, client):
        assert client.get("/jobs/abc").status_code == 400


class TestUpdateJob:
    def test_works_for_admin(self, client, admin_token, job_ids):
        resp = client.patch(f"/jobs/{job_ids[0]}", json={"title": "Job1-new"}, headers=auth(admin_token))

        assert resp.status_code == 200
        assert resp.json() == {
            "job": {"id": job_ids[0], "title": "Job1-new", "salary": 100000, "equity": "0.1", "companyHandle": "c1"}
        }

    def test_unauth_for_non_admin(self, client, u1_token, job_ids):
        resp = client.patch(f"/jobs/{job_ids[0]}", json={"title": "Job1-new"}, headers=auth(u1_token))
        assert resp.status_code == 401

    def test_not_found(self, client, admin_token):
        resp = client.patch("/jobs/9999", json={"title": "new nope"}, headers=auth(admin_token))
        assert resp.status_code == 404

    def test_id_too_large_for_the_store(self, client, admin_token):
        resp = client.patch("/jobs/99999999999999999999", json={"title": "x"}, headers=auth(admin_token))
        assert resp.status_code == 404

    @pytest.mark.parametrize("body", [
        {"equity": "not-a-number"},
        {"companyHandle": "c2"},
        {"salary": 2**31},
        {},
    ])
    def test_bad_request(self, client, admin_token, job_ids, body):
        resp = client.patch(f"/jobs/{job_ids[0]}", json=body, headers=auth(admin_token))
        assert resp.status_code == 400

    def test_id_change_rejected_even_if_unchanged(self, client, admin_token, job_ids):
        resp = client.patch(f"/jobs/{job_ids[0]}", json={"id": job_ids[0]}, headers=auth(admin_token))
        assert resp.status_code == 400


class TestDeleteJob:
    def test_works_for_admin(self, client, admin_token, job_ids):
        resp = client.delete(f"/jobs/{job_ids[0]}", headers=auth(admin_token))

        assert resp.status_code == 200
        assert resp.json() == {"deleted": job_ids[0]}
        assert client.get(f"/jobs/{job_ids[0]}").status_code == 404

    def test_unauth_for_non_admin(self, client, u1_token, job_ids):
        resp = client.delete(f"/jobs/{job_ids[0]}", headers=auth(u1_token))
        assert resp.status_code == 401

    def test_not_found(self, client, admin_token):
        assert client.delete("/jobs/9999", headers=auth(admin_token)).status_code == 404

    def test_id_too_large_for_the_store(self, client, admin_token):
        resp = client.delete("/jobs/99999999999999999999", headers=auth(admin_token))
        assert resp.status_code == 404
