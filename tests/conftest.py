# Copyright 2021 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

import http.client
import io
import json
import tempfile
import urllib.parse

import crowdin
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytest
import requests  # type: ignore


# Set environment variables to change this configuration.
# Example: export CROWDIN_SERVER_URL=http://localhost:3000
#          export CROWDIN_PROJECT_IDENTIFIER=my-project
#
# The HTTP transport is mocked in these tests, so the defaults never reach a
# real server; they only show up in the requests the tests inspect.
class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CROWDIN_")

    server_url: str = "https://crowdin.test"
    api_key: str = "test-api-key"
    login: str = "test-login"
    account_key: str = "test-account-key"
    project_identifier: str = "test-project"


@pytest.fixture
def config():
    return Config()


def _make_client(config, **kwargs):
    """Returns a crowdin.Client for the given config fixture, authenticated
    with the project API key unless credentials are given in kwargs."""
    if "login" not in kwargs and "api_key" not in kwargs:
        kwargs["api_key"] = config.api_key
    return crowdin.Client(
        config.project_identifier, server_url=config.server_url, **kwargs
    )


@pytest.fixture
def client(config):
    """Returns a crowdin.Client to use in all tests taking a parameter
    'client'."""
    with _make_client(config) as client:
        yield client


@pytest.fixture
def account_client(config):
    """Returns a crowdin.Client authenticated with login and account key."""
    with _make_client(
        config, login=config.login, account_key=config.account_key
    ) as client:
        yield client


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "example.json"
    path.write_text('{"hello": "Hello, world!"}')
    return path


def build_response(
    status_code: int = 200,
    body=b'{"success": true}',
    content_type: str = "application/json",
):
    """Builds a requests.Response as returned by HTTPAdapter.send, with the
    given body bytes (or JSON-serializable object) as raw content."""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response.reason = http.client.responses.get(status_code, "Unknown")
    response.raw = io.BytesIO(body)
    response.headers["Content-Type"] = content_type
    response.headers["Content-Length"] = str(len(body))
    response.url = "https://crowdin.test/api/"
    return response


def sent_request(mock_send, index: int = -1) -> requests.PreparedRequest:
    """Returns the prepared request passed to the mocked HTTPAdapter.send."""
    return mock_send.call_args_list[index][0][0]


def sent_path(request: requests.PreparedRequest) -> str:
    return urllib.parse.urlsplit(request.url).path


def sent_query(request: requests.PreparedRequest) -> dict:
    query = urllib.parse.urlsplit(request.url).query
    return dict(urllib.parse.parse_qsl(query))


def sent_form(request: requests.PreparedRequest) -> list:
    body = request.body or ""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return urllib.parse.parse_qsl(body)


service_error = {
    "success": False,
    "error": {"code": 8, "message": "Project was not found"},
}


@pytest.fixture(autouse=True)
def download_dir(tmp_path, monkeypatch):
    """Makes downloads create their temporary files in a directory of the
    test, removed with it."""
    path = tmp_path / "downloads"
    path.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(path))
    return path
