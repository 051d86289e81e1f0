"""Integration tests for the User data-access class. Requires Postgres DATABASE_URL."""
import pytest

from jobly.core.errors import DuplicateError, NotFoundError, UnauthorizedError, ValidationError
from jobly.services.users import User

U1 = {"username": "u1", "firstName": "U1F", "lastName": "U1L", "email": "u1@email.com", "isAdmin": False}
U2 = {"username": "u2", "firstName": "U2F", "lastName": "U2L", "email": "u2@email.com", "isAdmin": True}


class TestAuthenticate:
    def test_works(self, db):
        assert User.authenticate(db, "u1", "password1") == U1

    def test_unknown_user(self, db):
        with pytest.raises(UnauthorizedError):
            User.authenticate(db, "nope", "password")

    def test_wrong_password(self, db):
        with pytest.raises(UnauthorizedError):
            User.authenticate(db, "u1", "wrong")


class TestRegister:
    new_user = {
        "username": "new",
        "password": "password",
        "firstName": "Test",
        "lastName": "Tester",
        "email": "test@test.com",
    }

    def test_works(self, db):
        user = User.register(db, self.new_user)
        assert user == {
            "username": "new",
            "firstName": "Test",
            "lastName": "Tester",
            "email": "test@test.com",
            "isAdmin": False,
        }
        stored = db.query("SELECT password FROM users WHERE username = 'new'")[0]["password"]
        assert stored != "password"
        assert User.authenticate(db, "new", "password") == user

    def test_admin(self, db):
        assert User.register(db, {**self.new_user, "isAdmin": True})["isAdmin"] is True

    def test_duplicate(self, db):
        with pytest.raises(DuplicateError):
            User.register(db, {**self.new_user, "username": "u1"})


class TestFindAllAndGet:
    def test_find_all(self, db):
        assert User.find_all(db) == [U1, U2]

    def test_get_with_applications(self, db, job_ids):
        assert User.get(db, "u1") == {**U1, "applications": [job_ids["j2"]]}

    def test_get_without_applications(self, db):
        assert User.get(db, "u2")["applications"] == []

    def test_get_not_found(self, db):
        with pytest.raises(NotFoundError):
            User.get(db, "nope")


class TestUpdate:
    def test_works(self, db):
        assert User.update(db, "u1", {"firstName": "New", "email": "new@email.com"}) == {
            **U1,
            "firstName": "New",
            "email": "new@email.com",
        }

    def test_password(self, db):
        User.update(db, "u1", {"password": "newpassword"})
        assert User.authenticate(db, "u1", "newpassword")["username"] == "u1"

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            User.update(db, "nope", {"firstName": "x"})

    def test_no_data(self, db):
        with pytest.raises(ValidationError):
            User.update(db, "u1", {})


class TestRemove:
    def test_works(self, db):
        User.remove(db, "u1")
        assert db.query("SELECT username FROM users WHERE username = 'u1'") == []

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            User.remove(db, "nope")


class TestApply:
    def test_works(self, db, job_ids):
        User.apply_to_job(db, "u2", job_ids["j1"])
        assert User.get(db, "u2")["applications"] == [job_ids["j1"]]

    def test_twice(self, db, job_ids):
        with pytest.raises(DuplicateError):
            User.apply_to_job(db, "u1", job_ids["j2"])

    def test_unknown_job(self, db):
        with pytest.raises(NotFoundError):
            User.apply_to_job(db, "u1", 0)

    def test_unknown_user(self, db, job_ids):
        with pytest.raises(NotFoundError):
            User.apply_to_job(db, "nope", job_ids["j1"])
