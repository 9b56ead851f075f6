# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import logging

from .conftest import (
    build_response,
    sent_form,
    sent_path,
    sent_query,
    sent_request,
    service_error,
)
from unittest.mock import patch
import crowdin
import pytest
import requests  # type: ignore

# (function name, arguments factory taking an example file path, HTTP
# method, path below the project)
JSON_OPERATIONS = [
    (
        "add_file",
        lambda f: (({"strings/example.json": f},), {}),
        "POST",
        "add-file",
    ),
    (
        "update_file",
        lambda f: (({"strings/example.json": f},), {}),
        "POST",
        "update-file",
    ),
    (
        "delete_file",
        lambda f: (("strings/example.json",), {}),
        "POST",
        "delete-file",
    ),
    (
        "upload_translation",
        lambda f: (({"strings/example.json": f}, "de"), {}),
        "POST",
        "upload-translation",
    ),
    ("translation_status", lambda f: ((), {}), "POST", "status"),
    ("language_status", lambda f: (("de",), {}), "POST", "language-status"),
    ("project_info", lambda f: ((), {}), "POST", "info"),
    ("reported_issues", lambda f: ((), {}), "GET", "issues"),
    ("export_translations", lambda f: ((), {}), "GET", "export"),
    ("translation_export_status", lambda f: ((), {}), "GET", "export-status"),
    (
        "pre_translate",
        lambda f: ((["de"], ["strings/example.json"]), {}),
        "POST",
        "pre-translate",
    ),
    (
        "edit_project",
        lambda f: ((), {"name": "Renamed"}),
        "POST",
        "edit-project",
    ),
    ("delete_project", lambda f: ((), {}), "POST", "delete-project"),
    ("create_directory", lambda f: (("docs",), {}), "POST", "add-directory"),
    (
        "change_directory",
        lambda f: (("docs",), {}),
        "POST",
        "change-directory",
    ),
    (
        "delete_directory",
        lambda f: (("docs",), {}),
        "POST",
        "delete-directory",
    ),
    ("upload_glossary", lambda f: ((f,), {}), "POST", "upload-glossary"),
    ("upload_translation_memory", lambda f: ((f,), {}), "POST", "upload-tm"),
    ("pseudo_export", lambda f: ((), {}), "GET", "pseudo-export"),
    (
        "export_costs_estimation_report",
        lambda f: (("de",), {}),
        "POST",
        "reports/costs-estimation/export",
    ),
    (
        "export_translation_costs_report",
        lambda f: ((), {}),
        "POST",
        "reports/translation-costs/export",
    ),
    (
        "export_top_members_report",
        lambda f: ((), {}),
        "POST",
        "reports/top-members/export",
    ),
]

JSON_OPERATION_NAMES = [operation[0] for operation in JSON_OPERATIONS]


def test_version():
    assert "1.0.0" == crowdin.__version__


def test_construction_requires_credentials(config):
    with pytest.raises(ValueError, match="credentials"):
        crowdin.Client(config.project_identifier)


def test_construction_rejects_both_credential_forms(config):
    with pytest.raises(ValueError, match="not both"):
        crowdin.Client(
            config.project_identifier,
            api_key=config.api_key,
            login=config.login,
            account_key=config.account_key,
        )


@pytest.mark.parametrize(
    "credentials",
    [{"login": "someone"}, {"account_key": "secret"}],
)
def test_construction_rejects_half_account_pair(config, credentials):
    with pytest.raises(ValueError, match="together"):
        crowdin.Client(config.project_identifier, **credentials)


def test_construction_requires_project_identifier(config):
    with pytest.raises(ValueError, match="project_identifier"):
        crowdin.Client("", api_key=config.api_key)


def test_construction_with_one_credential_form(config):
    with crowdin.Client("my-project", api_key=config.api_key) as client:
        assert client.project_identifier == "my-project"
        assert client.server_url == "https://api.crowdin.com"
        assert not client.config.uses_account_key

    with crowdin.Client(
        "my-project",
        login=config.login,
        account_key=config.account_key,
        server_url="https://crowdin.example.com/",
    ) as client:
        assert client.server_url == "https://crowdin.example.com"
        assert client.config.uses_account_key
        assert client.config.login == config.login


@pytest.mark.parametrize(
    "name,make_args,method,path", JSON_OPERATIONS, ids=JSON_OPERATION_NAMES
)
@patch("requests.adapters.HTTPAdapter.send")
def test_json_operation_request(
    mock_send, name, make_args, method, path, client, config, example_file
):
    body = {"success": True, "data": {"nested": [1, 2]}, "extra": None}
    mock_send.return_value = build_response(body=body)
    args, kwargs = make_args(example_file)

    result = getattr(client, name)(*args, **kwargs)

    assert result == body
    request = sent_request(mock_send)
    assert request.method == method
    assert sent_path(request) == (
        f"/api/project/{config.project_identifier}/{path}"
    )
    query = sent_query(request)
    assert query["json"] == "true"
    assert query["key"] == config.api_key
    assert "login" not in query


@pytest.mark.parametrize(
    "name,make_args,method,path", JSON_OPERATIONS, ids=JSON_OPERATION_NAMES
)
@pytest.mark.parametrize("status_code", [200, 404])
@patch("requests.adapters.HTTPAdapter.send")
def test_json_operation_service_error(
    mock_send, status_code, name, make_args, method, path, client, example_file
):
    mock_send.return_value = build_response(status_code, body=service_error)
    args, kwargs = make_args(example_file)

    with pytest.raises(crowdin.ServiceException) as exc_info:
        getattr(client, name)(*args, **kwargs)

    assert "8" in str(exc_info.value)
    assert "Project was not found" in str(exc_info.value)
    assert exc_info.value.code == 8
    assert exc_info.value.message == "Project was not found"
    assert exc_info.value.http_status_code == status_code


@patch("requests.adapters.HTTPAdapter.send")
def test_supported_languages(mock_send, client, config):
    languages = [{"name": "German", "crowdin_code": "de", "locale": "de-DE"}]
    mock_send.return_value = build_response(body=languages)

    assert client.supported_languages() == languages
    request = sent_request(mock_send)
    assert request.method == "GET"
    assert sent_path(request) == "/api/supported-languages"
    assert sent_query(request) == {"json": "true", "key": config.api_key}


@patch("requests.adapters.HTTPAdapter.send")
def test_account_credentials(mock_send, account_client, config):
    mock_send.return_value = build_response()

    account_client.project_info()

    query = sent_query(sent_request(mock_send))
    assert query == {
        "json": "true",
        "login": config.login,
        "account-key": config.account_key,
    }


@patch("requests.adapters.HTTPAdapter.send")
def test_credentials_cannot_be_overridden(mock_send, client, config):
    mock_send.return_value = build_response()

    client.reported_issues(key="other-key", json="false", language="de")

    query = sent_query(sent_request(mock_send))
    assert query["key"] == config.api_key
    assert query["json"] == "true"
    assert query["language"] == "de"


@patch("requests.adapters.HTTPAdapter.send")
def test_form_parameters(mock_send, client):
    mock_send.return_value = build_response()

    client.pre_translate(
        ["de", "fr"],
        ["strings/example.json"],
        method=crowdin.PreTranslateMethod.MACHINE_TRANSLATION,
        engine="deepl",
        approve_translated=True,
        import_duplicates=False,
        perfect_match=None,
    )

    assert sent_form(sent_request(mock_send)) == [
        ("method", "mt"),
        ("engine", "deepl"),
        ("approve_translated", "1"),
        ("import_duplicates", "0"),
        ("languages[]", "de"),
        ("languages[]", "fr"),
        ("files[]", "strings/example.json"),
    ]


@patch("requests.adapters.HTTPAdapter.send")
def test_upload_translation_sends_language(mock_send, client, example_file):
    mock_send.return_value = build_response()

    client.upload_translation(
        {"strings/example.json": example_file},
        "de",
        auto_approve_imported=True,
    )

    body = sent_request(mock_send).body
    assert b'name="language"\r\n\r\nde' in body
    assert b'name="auto_approve_imported"\r\n\r\n1' in body
    assert b'name="files[strings/example.json]"' in body


@patch("requests.adapters.HTTPAdapter.send")
def test_unexpected_params_are_passed_through(mock_send, client):
    mock_send.return_value = build_response()

    client.export_translation_costs_report(
        unit=crowdin.ReportUnit.WORDS,
        regular_rates=[{"mode": "tm_match", "value": 0.1}],
        undocumented_option="yes",
    )

    assert sent_form(sent_request(mock_send)) == [
        ("unit", "words"),
        ("regular_rates[0][mode]", "tm_match"),
        ("regular_rates[0][value]", "0.1"),
        ("undocumented_option", "yes"),
    ]


@pytest.mark.parametrize(
    "call",
    [
        lambda client: client.delete_file(""),
        lambda client: client.language_status(""),
        lambda client: client.add_file({}),
        lambda client: client.pre_translate([], ["strings/example.json"]),
        lambda client: client.pre_translate(None, ["strings/example.json"]),
        lambda client: client.pre_translate(["de"], None),
        lambda client: client.pre_translate([""], ["strings/example.json"]),
        lambda client: client.pre_translate(["de"], ["a.json", None]),
        lambda client: client.download_translations(""),
        lambda client: client.download_top_members_report(""),
    ],
)
@patch("requests.adapters.HTTPAdapter.send")
def test_required_arguments(mock_send, call, client):
    with pytest.raises(ValueError, match="must not be empty"):
        call(client)
    mock_send.assert_not_called()


@patch("requests.adapters.HTTPAdapter.send")
def test_success_false_without_error_object(mock_send, client):
    mock_send.return_value = build_response(body={"success": False})

    with pytest.raises(crowdin.ServiceException):
        client.project_info()


@patch("requests.adapters.HTTPAdapter.send")
def test_invalid_json(mock_send, client):
    mock_send.return_value = build_response(
        body=b"<html>maintenance</html>", content_type="text/html"
    )

    with pytest.raises(crowdin.CrowdinException, match="Invalid JSON") as e:
        client.project_info()
    assert e.value.http_status_code == 200


@pytest.mark.parametrize(
    "body",
    [
        b"Internal Server Error",
        b'{"success": false, "message": "no error object"}',
        b'{"error": {"code": 1, "message": "no success flag"}}',
    ],
)
@patch("requests.adapters.HTTPAdapter.send")
def test_http_error_is_not_masked(mock_send, body, client):
    response = build_response(500, body=body)
    mock_send.return_value = response

    with pytest.raises(requests.exceptions.HTTPError) as exc_info:
        client.translation_status()
    assert exc_info.value.response is response


@patch("requests.adapters.HTTPAdapter.send")
def test_connection_error_is_not_masked(mock_send, client):
    error = requests.exceptions.ConnectionError("connection refused")
    mock_send.side_effect = error

    with pytest.raises(requests.exceptions.ConnectionError) as exc_info:
        client.project_info()
    assert exc_info.value is error


@patch("requests.adapters.HTTPAdapter.send")
def test_timeout_is_passed_to_transport(mock_send, config):
    mock_send.return_value = build_response()
    with crowdin.Client(
        config.project_identifier,
        api_key=config.api_key,
        server_url=config.server_url,
        timeout=12.5,
    ) as client:
        client.project_info()
    assert mock_send.call_args[1]["timeout"] == 12.5


@patch("requests.adapters.HTTPAdapter.send")
def test_user_agent(mock_send, client):
    mock_send.return_value = build_response()
    client.project_info()
    ua_header = sent_request(mock_send).headers["User-agent"]
    assert ua_header.startswith("crowdin-api-python/")
    assert "requests/" in ua_header
    assert " python/" in ua_header


@patch("requests.adapters.HTTPAdapter.send")
def test_user_agent_opt_out_with_app_info(mock_send, config):
    mock_send.return_value = build_response()
    with crowdin.Client(
        config.project_identifier,
        api_key=config.api_key,
        send_platform_info=False,
    ).set_app_info("sample_python_plugin", "1.0.2") as client:
        client.project_info()
    ua_header = sent_request(mock_send).headers["User-agent"]
    assert "requests/" not in ua_header
    assert "(" not in ua_header
    assert ua_header.endswith(" sample_python_plugin/1.0.2")


@patch("requests.adapters.HTTPAdapter.send")
def test_credentials_are_not_logged(mock_send, client, config, caplog):
    mock_send.return_value = build_response()

    with caplog.at_level(logging.DEBUG, logger="crowdin"):
        client.delete_file("strings/example.json", branch="main")

    assert "Request to Crowdin API" in caplog.text
    assert "status_code=200" in caplog.text
    assert config.api_key not in caplog.text
