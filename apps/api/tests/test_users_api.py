"""User creation, uniqueness and field validation tests."""

from __future__ import annotations

import asyncio
from base64 import b64encode
import os
import unittest

from fastapi.testclient import TestClient

from courses_api.adapters.auth import BcryptPasswordHasher
from courses_api.core.config import Settings, get_settings
from courses_api.main import create_app
from courses_api.repositories.models import UserRecord
from courses_api.routes.dependencies import get_password_hasher


def _basic(name: str, secret: str) -> dict[str, str]:
    token = b64encode(f"{name}:{secret}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


class _LoopRecordingHasher(BcryptPasswordHasher):
    def __init__(self) -> None:
        super().__init__(rounds=4)
        self.calls_on_event_loop: list[bool] = []

    def _record(self) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.calls_on_event_loop.append(False)
        else:
            self.calls_on_event_loop.append(True)

    def hash(self, secret: str) -> str:
        self._record()
        return super().hash(secret)

    def verify(self, secret: str, stored_hash: str) -> bool:
        self._record()
        return super().verify(secret, stored_hash)


def _user_payload(**overrides: str) -> dict[str, str]:
    payload = {
        "firstName": "Sally",
        "lastName": "Jones",
        "emailAddress": "sally@jones.com",
        "password": "sallypassword",
    }
    payload.update(overrides)
    return payload


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "DATABASE_URL",
        "BCRYPT_ROUNDS",
        "ENABLE_GLOBAL_ERROR_LOGGING",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["DATABASE_URL"] = "sqlite://"
        os.environ["BCRYPT_ROUNDS"] = "4"
        os.environ["ENABLE_GLOBAL_ERROR_LOGGING"] = "false"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class UserApiTests(_SettingsEnvCase):
    def setUp(self) -> None:
        super().setUp()
        self.app = create_app()
        self.client = self.enterContext(TestClient(self.app))

    def _stored_users(self) -> list[UserRecord]:
        with self.app.state.database.session() as session:
            return session.query(UserRecord).all()

    def test_create_user_returns_201_with_location_and_empty_body(self) -> None:
        response = self.client.post("/api/users", json=_user_payload())

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.headers["Location"], "/")
        self.assertEqual(response.content, b"")
        self.assertEqual(len(self._stored_users()), 1)

    def test_password_is_stored_as_hash_and_never_returned(self) -> None:
        self.client.post("/api/users", json=_user_payload())

        stored = self._stored_users()[0]
        self.assertNotEqual(stored.password, "sallypassword")
        self.assertTrue(BcryptPasswordHasher(rounds=4).verify("sallypassword", stored.password))

        response = self.client.get("/api/users", headers=_basic("sally@jones.com", "sallypassword"))
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("password", response.json())
        self.assertNotIn("sallypassword", response.text)
        self.assertNotIn(stored.password, response.text)

    def test_get_users_returns_only_the_authenticated_user(self) -> None:
        self.client.post("/api/users", json=_user_payload())
        self.client.post(
            "/api/users",
            json=_user_payload(firstName="Joe", lastName="Smith", emailAddress="joe@smith.com", password="joepassword"),
        )

        response = self.client.get("/api/users", headers=_basic("joe@smith.com", "joepassword"))

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body.keys()), {"id", "firstName", "lastName", "emailAddress"})
        self.assertEqual(body["emailAddress"], "joe@smith.com")

    def test_duplicate_email_is_uniqueness_conflict_400(self) -> None:
        first = self.client.post("/api/users", json=_user_payload())
        second = self.client.post("/api/users", json=_user_payload(firstName="Other"))
        differently_cased = self.client.post("/api/users", json=_user_payload(emailAddress="SALLY@jones.com"))

        self.assertEqual(first.status_code, 201)
        for label, response in (("exact", second), ("case_folded", differently_cased)):
            with self.subTest(duplicate=label):
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(),
                    {"message": "User.emailAddress property must be unique to each user", "error": {}},
                )
        self.assertEqual(len(self._stored_users()), 1)

    def test_missing_first_name_reports_only_its_required_message(self) -> None:
        payload = _user_payload()
        del payload["firstName"]

        response = self.client.post("/api/users", json=payload)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], ["User.firstName property is required"])
        self.assertEqual(response.json()["error"], {})
        self.assertEqual(self._stored_users(), [])

    def test_every_violated_rule_is_reported_in_field_order(self) -> None:
        response = self.client.post("/api/users", json={"lastName": "  ", "emailAddress": "not-an-email"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["errors"],
            [
                "User.firstName property is required",
                "User.lastName property is required",
                "User.emailAddress property must be a valid email address",
                "User.password property is required",
            ],
        )

    def test_empty_email_reports_required_not_format(self) -> None:
        response = self.client.post("/api/users", json=_user_payload(emailAddress=""))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], ["User.emailAddress property is required"])

    def test_wrongly_typed_field_is_a_400_validation_failure(self) -> None:
        response = self.client.post("/api/users", json=_user_payload(firstName=123))  # type: ignore[arg-type]

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], {})
        self.assertTrue(response.json()["errors"])

    def test_get_users_without_credentials_is_denied(self) -> None:
        response = self.client.get("/api/users")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "access denied", "error": {}})

    def test_password_hashing_and_checks_run_off_the_event_loop(self) -> None:
        hasher = _LoopRecordingHasher()
        self.app.dependency_overrides[get_password_hasher] = lambda: hasher

        created = self.client.post("/api/users", json=_user_payload())
        fetched = self.client.get("/api/users", headers=_basic("sally@jones.com", "sallypassword"))

        self.assertEqual(created.status_code, 201)
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(hasher.calls_on_event_loop, [False, False])


class FactorySettingsTests(unittest.TestCase):
    def test_settings_passed_to_factory_reach_request_dependencies(self) -> None:
        old_rounds = os.environ.get("BCRYPT_ROUNDS")
        os.environ["BCRYPT_ROUNDS"] = "5"
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)
        if old_rounds is None:
            self.addCleanup(os.environ.pop, "BCRYPT_ROUNDS", None)
        else:
            self.addCleanup(os.environ.__setitem__, "BCRYPT_ROUNDS", old_rounds)

        app = create_app(Settings(database_url="sqlite://", bcrypt_rounds=4))
        with TestClient(app) as client:
            response = client.post("/api/users", json=_user_payload())
            self.assertEqual(response.status_code, 201)
            with app.state.database.session() as session:
                stored = session.query(UserRecord).one()

        self.assertEqual(stored.password.split("$")[2], "04")
        self.assertEqual(app.state.settings.bcrypt_rounds, 4)


class RootRouteTests(_SettingsEnvCase):
    def test_welcome_and_route_not_found(self) -> None:
        with TestClient(create_app()) as client:
            welcome = client.get("/")
            self.assertEqual(welcome.status_code, 200)
            self.assertEqual(welcome.json(), {"message": "Welcome to the REST API project!"})

            missing = client.get("/api/nothing-here")
            self.assertEqual(missing.status_code, 404)
            self.assertEqual(missing.json(), {"message": "Route Not Found"})

            wrong_method = client.patch("/api/courses")
            self.assertEqual(wrong_method.status_code, 404)
            self.assertEqual(wrong_method.json(), {"message": "Route Not Found"})


if __name__ == "__main__":
    unittest.main()
