"""Pruebas del cliente HTTP y del repositorio de usuarios."""

import json
import socket
from urllib.error import HTTPError, URLError

import pytest

from gestor_usuarios.config import AppConfig
from gestor_usuarios.core.session import SessionContext
from gestor_usuarios.infrastructure import api_client as api_client_module
from gestor_usuarios.infrastructure.api_client import APIClient, NetworkError
from gestor_usuarios.infrastructure.repositories import UserRepository
from gestor_usuarios.models.user import UserUpdate

PAGE_PAYLOAD = {
    "page": 1,
    "per_page": 2,
    "total": 4,
    "total_pages": 2,
    "data": [
        {
            "id": 1,
            "email": "george.bluth@reqres.in",
            "first_name": "George",
            "last_name": "Bluth",
            "avatar": "https://reqres.in/img/faces/1-image.jpg",
        },
        {
            "id": 2,
            "email": "janet.weaver@reqres.in",
            "first_name": "Janet",
            "last_name": "Weaver",
            "avatar": "https://reqres.in/img/faces/2-image.jpg",
        },
    ],
}


class FakeResponse:
    def __init__(self, status, body=b""):
        self.status = status
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeTransport:
    """Sustituye ``urlopen`` y registra las peticiones enviadas."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, status=200, body=None, raw=None):
        if raw is None:
            raw = json.dumps(body).encode("utf-8") if body is not None else b""
        self.responses.append(FakeResponse(status, raw))

    def queue_error(self, exc):
        self.responses.append(exc)

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(api_client_module, "urlopen", fake)
    return fake


@pytest.fixture
def session():
    return SessionContext()


@pytest.fixture
def client(session):
    return APIClient(AppConfig(api_base="https://reqres.in/api/"), session)


@pytest.fixture
def repository(client):
    return UserRepository(client)


class TestHeaders:
    def test_no_token_means_no_authorization(self, client, transport):
        transport.queue(body=PAGE_PAYLOAD)
        client.obtener_usuarios(1)

        request = transport.requests[0]
        assert request.get_header("Content-type") == "application/json"
        assert request.get_header("Authorization") is None

    def test_token_is_attached_as_bearer(self, client, session, transport):
        session.start("QpwL5tke4Pnpja7X4")
        transport.queue(body=PAGE_PAYLOAD)
        client.obtener_usuarios(1)

        assert transport.requests[0].get_header("Authorization") == "Bearer QpwL5tke4Pnpja7X4"

    def test_url_is_built_from_base(self, client, transport):
        transport.queue(body=PAGE_PAYLOAD)
        client.obtener_usuarios(3)

        assert transport.requests[0].full_url == "https://reqres.in/api/users?page=3"
        assert transport.requests[0].get_method() == "GET"


class TestErrors:
    def test_http_error_becomes_network_error(self, client, transport):
        transport.queue_error(HTTPError("https://reqres.in/api/users/23", 404, "Not Found", None, None))
        with pytest.raises(NetworkError) as info:
            client.obtener_usuario(23)
        assert info.value.status == 404

    def test_connection_error(self, client, transport):
        transport.queue_error(URLError("connection refused"))
        with pytest.raises(NetworkError):
            client.obtener_usuarios(1)

    def test_timeout(self, client, transport):
        transport.queue_error(URLError(socket.timeout("timed out")))
        with pytest.raises(NetworkError, match="timeout"):
            client.obtener_usuarios(1)

    def test_invalid_json(self, client, transport):
        transport.queue(raw=b"<html>")
        with pytest.raises(NetworkError):
            client.obtener_usuarios(1)

    def test_unexpected_shape(self, client, transport):
        transport.queue(body=[1, 2, 3])
        with pytest.raises(NetworkError):
            client.obtener_usuarios(1)


class TestRepository:
    def test_list_users_builds_page(self, repository, transport):
        transport.queue(body=PAGE_PAYLOAD)
        page = repository.list_users(1)

        assert page.page_number == 1
        assert page.total_pages == 2
        assert [u.first_name for u in page.items] == ["George", "Janet"]

    def test_list_users_with_bad_record(self, repository, transport):
        transport.queue(body={"page": 1, "total_pages": 1, "data": [{"email": "x@y"}]})
        with pytest.raises(NetworkError):
            repository.list_users(1)

    def test_get_user_unwraps_data(self, repository, transport):
        transport.queue(body={"data": PAGE_PAYLOAD["data"][1]})
        user = repository.get_user(2)

        assert user.full_name == "Janet Weaver"
        assert transport.requests[0].full_url.endswith("/users/2")

    def test_update_sends_only_given_fields(self, repository, transport):
        transport.queue(body={"first_name": "Jan", "updatedAt": "2026-10-18T10:00:00Z"})
        echo = repository.update_user(2, UserUpdate(first_name="Jan"))

        request = transport.requests[0]
        assert request.get_method() == "PUT"
        assert json.loads(request.data) == {"first_name": "Jan"}
        assert echo["first_name"] == "Jan"

    def test_delete_success_on_204(self, repository, transport):
        transport.queue(status=204)
        assert repository.delete_user(2) is True
        assert transport.requests[0].get_method() == "DELETE"

    def test_delete_other_2xx_is_not_confirmed(self, repository, transport):
        transport.queue(status=200, body={})
        assert repository.delete_user(2) is False

    def test_delete_failure_raises(self, repository, transport):
        transport.queue_error(HTTPError("https://reqres.in/api/users/2", 500, "Boom", None, None))
        with pytest.raises(NetworkError):
            repository.delete_user(2)

    def test_login_returns_token(self, repository, transport):
        transport.queue(body={"token": "QpwL5tke4Pnpja7X4"})
        token = repository.login("eve.holt@reqres.in", "cityslicka")

        assert token == "QpwL5tke4Pnpja7X4"
        assert json.loads(transport.requests[0].data) == {
            "email": "eve.holt@reqres.in",
            "password": "cityslicka",
        }

    def test_login_without_token(self, repository, transport):
        transport.queue(body={"error": "Missing password"})
        with pytest.raises(NetworkError):
            repository.login("eve.holt@reqres.in", "x")
