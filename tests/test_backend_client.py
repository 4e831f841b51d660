from unittest.mock import MagicMock

import pytest
import requests

from conftest import make_response
from helpers.backend_client import BackendAPIError, BackendClient, error_message


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return BackendClient(base_url="http://backend.test/api/", timeout=5, session=http)


def test_list_reports_sends_bearer_token(client, http):
    http.request.return_value = make_response(200, [{"_id": "1"}])
    assert client.list_reports("tok") == [{"_id": "1"}]

    method, url = http.request.call_args.args
    kwargs = http.request.call_args.kwargs
    assert method == "GET"
    assert url == "http://backend.test/api/reports"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 5


def test_login_posts_credentials_without_auth_header(client, http):
    http.request.return_value = make_response(200, {"token": "abc"})
    assert client.login("a@b.co", "pw") == {"token": "abc"}
    kwargs = http.request.call_args.kwargs
    assert kwargs["json"] == {"email": "a@b.co", "password": "pw"}
    assert "Authorization" not in kwargs["headers"]


def test_reset_password_payload(client, http):
    http.request.return_value = make_response(200, {"message": "ok"})
    client.reset_password("a@b.co", "123456", "secret1")
    assert http.request.call_args.kwargs["json"] == {
        "email": "a@b.co", "resetCode": "123456", "newPassword": "secret1"
    }


def test_create_report_is_multipart(client, http):
    http.request.return_value = make_response(201, {"_id": "new"})
    photo = ("photo.jpg", b"img", "image/jpeg")
    assert client.create_report("tok", {"latitude": "1.0"}, photo) == {"_id": "new"}
    kwargs = http.request.call_args.kwargs
    assert kwargs["data"] == {"latitude": "1.0"}
    assert kwargs["files"] == {"photo": photo}


def test_get_user_unwraps_data(client, http):
    http.request.return_value = make_response(200, {"data": {"firstName": "Ana"}})
    assert client.get_user("tok", "u1") == {"firstName": "Ana"}
    assert http.request.call_args.args[1] == "http://backend.test/api/users/u1"


def test_non_2xx_raises_with_upstream_message(client, http):
    http.request.return_value = make_response(400, {"msg": "User already exists"})
    with pytest.raises(BackendAPIError) as exc:
        client.register("Ana", "a@b.co", "pw")
    assert exc.value.status_code == 400
    assert exc.value.message == "User already exists"
    assert exc.value.payload == {"msg": "User already exists"}
    assert not exc.value.is_network_error


def test_network_failure_raises(client, http):
    http.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(BackendAPIError) as exc:
        client.list_reports("tok")
    assert exc.value.is_network_error


def test_non_json_success_is_malformed(client, http):
    http.request.return_value = make_response(200, text="<html>oops</html>")
    with pytest.raises(BackendAPIError):
        client.list_reports("tok")


def test_empty_success_body(client, http):
    http.request.return_value = make_response(204)
    assert client.forgot_password("a@b.co") is None


@pytest.mark.parametrize("payload,expected", [
    ({"message": "m", "msg": "x", "error": "e"}, "m"),
    ({"msg": "x", "error": "e"}, "x"),
    ({"error": "e"}, "e"),
    ({}, "fallback"),
    ("plain text", "fallback"),
])
def test_error_message_precedence(payload, expected):
    assert error_message(payload, "fallback") == expected
