"""Unit tests for the SQL the services send, using a mocked Database (no DB)."""
from unittest.mock import MagicMock

import pytest

from jobly.core.errors import NotFoundError, ValidationError
from jobly.services.companies import Company
from jobly.services.jobs import Job
from jobly.services.users import User


@pytest.fixture
def db():
    mock = MagicMock()
    mock.query.return_value = []
    return mock


class TestCompanyQueries:
    def test_min_over_max_makes_no_db_call(self, db):
        with pytest.raises(ValidationError):
            Company.find_all(db, {"minEmployees": 4, "maxEmployees": 2})
        db.query.assert_not_called()

    def test_find_all_without_filters_has_no_where(self, db):
        Company.find_all(db)
        sql, values = db.query.call_args.args
        assert "WHERE" not in sql
        assert sql.rstrip().endswith("ORDER BY name")
        assert values == []

    def test_find_all_with_name(self, db):
        Company.find_all(db, {"name": "1"})
        sql, values = db.query.call_args.args
        assert "WHERE name ILIKE $1" in sql
        assert values == ["%1%"]

    def test_update_places_handle_after_values(self, db):
        db.query.return_value = [{"handle": "c1"}]
        Company.update(db, "c1", {"name": "New", "numEmployees": 10})
        sql, values = db.query.call_args.args
        assert '"name"=$1, "num_employees"=$2' in sql
        assert "WHERE handle = $3" in sql
        assert values == ["New", 10, "c1"]

    def test_update_with_no_data_makes_no_db_call(self, db):
        with pytest.raises(ValidationError):
            Company.update(db, "c1", {})
        db.query.assert_not_called()

    def test_update_missing_row(self, db):
        with pytest.raises(NotFoundError):
            Company.update(db, "nope", {"name": "New"})


class TestJobQueries:
    def test_has_equity(self, db):
        Job.find_all(db, {"hasEquity": True})
        sql, values = db.query.call_args.args
        assert "WHERE equity > 0" in sql
        assert values == []

    def test_find_for_company_numbers_after_handle(self, db):
        Job.find_for_company(db, "c1", {"title": "j", "minSalary": 5})
        sql, values = db.query.call_args.args
        assert "WHERE company_handle = $1 AND title ILIKE $2 AND salary >= $3" in sql
        assert values == ["c1", "%j%", 5]

    def test_update_aliases_company_handle(self, db):
        db.query.return_value = [{"id": 7}]
        Job.update(db, 7, {"salary": 50, "companyHandle": "c2"})
        sql, values = db.query.call_args.args
        assert '"salary"=$1, "company_handle"=$2' in sql
        assert "WHERE id = $3" in sql
        assert values == [50, "c2", 7]


class TestUserQueries:
    def test_update_hashes_password(self, db):
        db.query.return_value = [{"username": "u1"}]
        User.update(db, "u1", {"firstName": "New", "password": "secret99"})
        sql, values = db.query.call_args.args
        assert '"first_name"=$1, "password"=$2' in sql
        assert values[0] == "New"
        assert values[1] != "secret99"
        assert values[2] == "u1"

    def test_update_does_not_mutate_payload(self, db):
        db.query.return_value = [{"username": "u1"}]
        payload = {"password": "secret99"}
        User.update(db, "u1", payload)
        assert payload == {"password": "secret99"}
