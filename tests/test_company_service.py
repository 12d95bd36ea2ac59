"""
Tests for services/company_service.py.
"""

import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.services.company_service import CompanyService
from jobly.services.job_service import JobService


@pytest.fixture
def service(db):
    return CompanyService(db)


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCreate:
    def test_create(self, service):
        assert service.create(NEW_COMPANY) == NEW_COMPANY
        assert service.get("new")["name"] == "New"

    def test_duplicate_handle(self, service):
        with pytest.raises(BadRequestError) as exc:
            service.create({**NEW_COMPANY, "handle": "c1"})
        assert exc.value.message == "Duplicate company: c1"

    def test_duplicate_name_is_reported_as_name(self, service):
        with pytest.raises(BadRequestError) as exc:
            service.create({**NEW_COMPANY, "name": "C1"})
        assert exc.value.message == "Duplicate company name: C1"

    def test_num_employees_must_fit_an_integer_column(self, service):
        with pytest.raises(BadRequestError):
            service.create({**NEW_COMPANY, "numEmployees": 2**31})

    def test_missing_description(self, service):
        with pytest.raises(BadRequestError):
            service.create({"handle": "x", "name": "X"})


class TestFindAll:
    def test_no_filter(self, service):
        assert [c["handle"] for c in service.find_all()] == ["c1", "c2", "c3"]

    @pytest.mark.parametrize("filters, handles", [
        ({"name": "c2"}, ["c2"]),
        ({"minEmployees": 2}, ["c2", "c3"]),
        ({"maxEmployees": 2}, ["c1", "c2"]),
        ({"minEmployees": 2, "maxEmployees": 2}, ["c2"]),
        ({"name": "c", "minEmployees": 3}, ["c3"]),
        ({"name": "nope"}, []),
    ])
    def test_filters(self, service, filters, handles):
        assert [c["handle"] for c in service.find_all(filters)] == handles

    def test_inverted_range(self, service):
        with pytest.raises(BadRequestError):
            service.find_all({"minEmployees": 3, "maxEmployees": 1})


class TestGet:
    def test_includes_jobs(self, service, job_ids):
        company = service.get("c1")

        assert company["handle"] == "c1"
        assert company["numEmployees"] == 1
        assert company["logoUrl"] == "http://c1.img"
        assert [j["id"] for j in company["jobs"]] == job_ids[:2]

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get("nope")


class TestUpdate:
    def test_update(self, service):
        company = service.update("c1", {"name": "New", "logoUrl": None})

        assert company == {
            "handle": "c1",
            "name": "New",
            "numEmployees": 1,
            "description": "Desc1",
            "logoUrl": None,
        }

    def test_handle_rejected(self, service):
        with pytest.raises(BadRequestError):
            service.update("c1", {"handle": "c1"})

    def test_duplicate_name(self, service):
        with pytest.raises(BadRequestError):
            service.update("c1", {"name": "C2"})

    def test_empty(self, service):
        with pytest.raises(BadRequestError):
            service.update("c1", {})

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.update("nope", {"name": "x"})


class TestRemove:
    def test_remove_cascades_to_jobs(self, service, db, job_ids):
        service.remove("c1")

        with pytest.raises(NotFoundError):
            service.get("c1")
        with pytest.raises(NotFoundError):
            JobService(db).get(job_ids[0])

    def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.remove("nope")
