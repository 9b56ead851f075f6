# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import json as json_module
import os
import platform
import tempfile
import traceback
from abc import abstractmethod
from functools import lru_cache
from typing import (
    Any,
    BinaryIO,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import requests  # type: ignore
from requests.structures import CaseInsensitiveDict

from crowdin.api_data import (
    ClientConfig,
    IssueStatus,
    IssueType,
    MachineTranslationEngine,
    PreTranslateMethod,
    ReportFormat,
    ReportGroupBy,
    ReportMode,
    ReportUnit,
)
from . import util
from . import version
from .exceptions import CrowdinException, ServiceException, StreamingException
from .util import FileSource

# Query parameters owned by the client, callers cannot override them.
_RESERVED_QUERY_PARAMS = frozenset(["json", "key", "login", "account-key"])


class HttpRequest:
    """
    HttpRequest contains information to construct an HTTP request,
    implementations of IHttpClient should implement prepare_request to
    convert it into their implementation-specific model of requests.

    :param method: HTTP method e.g. "GET".
    :param url: Request URL without query string, e.g.
        "https://api.crowdin.com/api/project/my-project/info"
    :param headers: HTTP headers.
    :param params: Query string fields as (name, value) pairs.
    :param data: If not None, form fields as (name, value) pairs.
    :param files: If not None, binary streams to include as multipart-form
    :param stream_chunks: If set, the response body should be streamed to the
        given callable, whatever the response status.
    """

    def __init__(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        params: List[Tuple[str, str]],
        data: Optional[List[Tuple[str, str]]],
        files: Optional[Dict[str, BinaryIO]],
        stream_chunks: Optional[Callable[[bytes], Any]],
    ):
        self.method = method
        self.url = url
        self.headers = headers
        self.params = params
        self.data = data
        self.files = files
        self.stream_chunks = stream_chunks


class HttpResponse:
    def __init__(
        self,
        status_code: int,
        text: Optional[str],
        headers: Mapping[str, str],
    ):
        self._status_code = status_code
        self._text = text
        self._headers = CaseInsensitiveDict(headers)

        try:
            self._json = json_module.loads(self._text) if self._text else None
        except json_module.JSONDecodeError:
            self._json = None

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def text(self) -> Optional[str]:
        return self._text

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self._headers

    @property
    def json(self) -> Optional[Any]:
        return self._json

    @abstractmethod
    def raise_for_status(self) -> None:
        """
        Implementations should raise the HTTP error of the underlying HTTP
        library if the status code indicates an error.
        """
        raise NotImplementedError()


class BaseContext:
    """
    Used by ClientBase to include extra context among pre- and post-request
    functions.

    :param opened: Streams opened for the request, closed by release().
    """

    def __init__(self, opened: Optional[List[BinaryIO]] = None):
        self.opened = opened if opened is not None else []

    def release(self):
        """Closes the resources held for the request. Called once the request
        completed, whether successfully or not."""
        for stream in self.opened:
            stream.close()
        self.opened = []


class DownloadContext(BaseContext):
    """Context of a file download, owning the temporary file that receives
    the response body.

    :param path: Path of the temporary file.
    :param output: Binary stream writing to the temporary file.
    """

    def __init__(self, path: str, output: BinaryIO):
        super().__init__()
        self.path = path
        self.output = output

    def release(self):
        self.output.close()
        super().release()


class ClientBase:
    """
    Base class for synchronous and asynchronous Crowdin clients.
    Handles synchronous preparation of HTTP requests and interpretation of
    HTTP responses.
    """

    def __init__(
        self,
        project_identifier: str,
        *,
        api_key: Optional[str] = None,
        login: Optional[str] = None,
        account_key: Optional[str] = None,
        server_url: Optional[str] = None,
        send_platform_info: bool = True,
    ):
        self._config = ClientConfig(
            project_identifier,
            api_key=api_key,
            login=login,
            account_key=account_key,
            server_url=server_url,
        )
        self.headers: Dict[str, str] = {}

        self._send_platform_info = send_platform_info
        self._set_user_agent(None, None)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def server_url(self) -> str:
        return self._config.server_url

    @property
    def project_identifier(self) -> str:
        return self._config.project_identifier

    def _project_path(self, path: str) -> str:
        return f"project/{self._config.project_identifier}/{path}"

    def _prepare_http_request(
        self,
        path: str,
        method: str = "POST",
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Dict[str, BinaryIO]] = None,
        stream_chunks: Optional[Callable[[bytes], Any]] = None,
    ) -> HttpRequest:
        url = f"{self._config.server_url}/api/{path}"
        query = [
            (name, value)
            for name, value in util.flatten_params(params)
            if name not in _RESERVED_QUERY_PARAMS
        ]
        query.extend(self._config.query_params())

        form = util.flatten_params(data) if data is not None else None
        return HttpRequest(
            method,
            url,
            dict(self.headers),
            query,
            form,
            files,
            stream_chunks,
        )

    def _json_request(
        self,
        path: str,
        method: str = "POST",
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, FileSource]] = None,
        file: Optional[FileSource] = None,
    ) -> Tuple[HttpRequest, BaseContext]:
        context = BaseContext()
        try:
            form_files = (
                util.pack_files(files, context.opened) if files else {}
            )
            if file is not None:
                form_files["file"] = util.open_file(file, context.opened)
        except BaseException:
            context.release()
            raise
        request = self._prepare_http_request(
            self._project_path(path),
            method=method,
            params=params,
            data=data,
            files=form_files or None,
        )
        return request, context

    def _download_request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        suffix: str = "",
    ) -> Tuple[HttpRequest, DownloadContext]:
        fd, temp_path = tempfile.mkstemp(prefix="crowdin", suffix=suffix)
        output = os.fdopen(fd, "wb")
        context = DownloadContext(temp_path, output)
        request = self._prepare_http_request(
            self._project_path(path),
            method="GET",
            params=params,
            stream_chunks=output.write,
        )
        return request, context

    @staticmethod
    def _service_error(
        json: Any, status_code: int
    ) -> Optional[ServiceException]:
        """Returns the ServiceException described by a Crowdin error body, or
        None if the body is not a Crowdin error."""
        if not isinstance(json, dict) or json.get("success") is not False:
            return None
        error = json.get("error")
        if not isinstance(error, dict):
            return None
        return ServiceException(
            error.get("code"),
            error.get("message"),
            http_status_code=status_code,
        )

    def _json_response_post(
        self, response: HttpResponse, context: BaseContext
    ) -> Any:
        status_code = response.status_code
        if status_code >= 400:
            error = self._service_error(response.json, status_code)
            if error is not None:
                raise error
            response.raise_for_status()

        try:
            json = json_module.loads(response.text or "")
        except ValueError as e:
            raise CrowdinException(
                f"Invalid JSON in response, status code {status_code}: {e}",
                http_status_code=status_code,
            ) from e

        if isinstance(json, dict) and json.get("success") is False:
            error = json.get("error")
            if not isinstance(error, dict):
                error = {}
            raise ServiceException(
                error.get("code"),
                error.get("message"),
                http_status_code=status_code,
            )
        return json

    def _download_post(
        self, response: HttpResponse, context: DownloadContext
    ) -> str:
        status_code = response.status_code
        if status_code < 400:
            return context.path

        try:
            with open(context.path, "r", encoding="utf-8") as body_file:
                body = body_file.read()
        except (OSError, UnicodeDecodeError) as e:
            util.log_warning(
                "Error reading body file", path=context.path, error=e
            )
        else:
            try:
                json = json_module.loads(body)
            except ValueError as e:
                util.log_warning("Error parsing body", error=e)
                util.log_debug("Body details", body=body)
            else:
                error = self._service_error(json, status_code)
                if error is not None:
                    raise error
                util.log_warning(
                    "Body is not a Crowdin error", status_code=status_code
                )
        raise StreamingException(status_code)

    def _set_user_agent(
        self, app_info_name: Optional[str], app_info_version: Optional[str]
    ):
        self.headers["User-Agent"] = _generate_user_agent(
            self._send_platform_info,
            app_info_name,
            app_info_version,
        )

    def set_app_info(self, app_info_name: str, app_info_version: str):
        self._set_user_agent(app_info_name, app_info_version)
        return self

    def _add_file_pre(
        self,
        files: Mapping[str, FileSource],
        *,
        type: Optional[str] = None,
        first_line_contains_header: Optional[bool] = None,
        scheme: Optional[str] = None,
        titles: Optional[Mapping[str, str]] = None,
        export_patterns: Optional[Mapping[str, str]] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(files, "files")
        data = {
            "type": type,
            "first_line_contains_header": first_line_contains_header,
            "scheme": scheme,
            "titles": titles,
            "export_patterns": export_patterns,
            "branch": branch,
            **params,
        }
        return self._json_request("add-file", data=data, files=files)

    def _update_file_pre(
        self,
        files: Mapping[str, FileSource],
        *,
        update_option: Optional[str] = None,
        titles: Optional[Mapping[str, str]] = None,
        export_patterns: Optional[Mapping[str, str]] = None,
        first_line_contains_header: Optional[bool] = None,
        scheme: Optional[str] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(files, "files")
        data = {
            "update_option": update_option,
            "titles": titles,
            "export_patterns": export_patterns,
            "first_line_contains_header": first_line_contains_header,
            "scheme": scheme,
            "branch": branch,
            **params,
        }
        return self._json_request("update-file", data=data, files=files)

    def _delete_file_pre(
        self, file: str, *, branch: Optional[str] = None
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(file, "file")
        return self._json_request(
            "delete-file", data={"file": file, "branch": branch}
        )

    def _upload_translation_pre(
        self,
        files: Mapping[str, FileSource],
        language: str,
        *,
        import_duplicates: Optional[bool] = None,
        import_eq_suggestions: Optional[bool] = None,
        auto_approve_imported: Optional[bool] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(files, "files")
        _require(language, "language")
        data = {
            "language": language,
            "import_duplicates": import_duplicates,
            "import_eq_suggestions": import_eq_suggestions,
            "auto_approve_imported": auto_approve_imported,
            "branch": branch,
            **params,
        }
        return self._json_request(
            "upload-translation", data=data, files=files
        )

    def _translation_status_pre(self) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request("status")

    def _language_status_pre(
        self, language: str
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(language, "language")
        return self._json_request(
            "language-status", data={"language": language}
        )

    def _project_info_pre(self) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request("info")

    def _reported_issues_pre(
        self,
        *,
        type: Union[str, IssueType, None] = None,
        status: Union[str, IssueStatus, None] = None,
        file: Optional[str] = None,
        language: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        query = {
            "type": type,
            "status": status,
            "file": file,
            "language": language,
            "date_from": date_from,
            "date_to": date_to,
            **params,
        }
        return self._json_request("issues", method="GET", params=query)

    def _export_file_pre(
        self,
        file: str,
        language: str,
        *,
        branch: Optional[str] = None,
        format: Optional[str] = None,
        export_translated_only: Optional[bool] = None,
        export_approved_only: Optional[bool] = None,
        **params,
    ) -> Tuple[HttpRequest, DownloadContext]:
        _require(file, "file")
        _require(language, "language")
        query = {
            "branch": branch,
            "format": format,
            "export_translated_only": export_translated_only,
            "export_approved_only": export_approved_only,
            **params,
            "file": file,
            "language": language,
        }
        suffix = f".{format}" if format else os.path.splitext(file)[1]
        return self._download_request("export-file", query, suffix=suffix)

    def _download_translations_pre(
        self, language: str, *, branch: Optional[str] = None
    ) -> Tuple[HttpRequest, DownloadContext]:
        _require(language, "language")
        return self._download_request(
            f"download/{language}.zip", {"branch": branch}, suffix=".zip"
        )

    def _download_all_translations_pre(
        self, *, branch: Optional[str] = None
    ) -> Tuple[HttpRequest, DownloadContext]:
        return self._download_request(
            "download/all.zip", {"branch": branch}, suffix=".zip"
        )

    def _export_translations_pre(
        self, *, branch: Optional[str] = None, **params
    ) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request(
            "export", method="GET", params={"branch": branch, **params}
        )

    def _translation_export_status_pre(
        self, *, branch: Optional[str] = None
    ) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request(
            "export-status", method="GET", params={"branch": branch}
        )

    def _pre_translate_pre(
        self,
        languages: Iterable[str],
        files: Iterable[str],
        *,
        method: Union[str, PreTranslateMethod, None] = None,
        engine: Union[str, MachineTranslationEngine, None] = None,
        approve_translated: Optional[bool] = None,
        auto_approve_option: Optional[int] = None,
        import_duplicates: Optional[bool] = None,
        apply_untranslated_strings_only: Optional[bool] = None,
        perfect_match: Optional[bool] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        languages = _as_list(languages, "languages")
        files = _as_list(files, "files")
        data = {
            "method": method,
            "engine": engine,
            "approve_translated": approve_translated,
            "auto_approve_option": auto_approve_option,
            "import_duplicates": import_duplicates,
            "apply_untranslated_strings_only": apply_untranslated_strings_only,
            "perfect_match": perfect_match,
            **params,
            "languages": languages,
            "files": files,
        }
        return self._json_request("pre-translate", data=data)

    def _edit_project_pre(self, **params) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request("edit-project", data=params)

    def _delete_project_pre(self) -> Tuple[HttpRequest, BaseContext]:
        return self._json_request("delete-project")

    def _create_directory_pre(
        self,
        name: str,
        *,
        is_branch: Optional[bool] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(name, "name")
        data = {"is_branch": is_branch, "branch": branch, **params}
        data["name"] = name
        return self._json_request("add-directory", data=data)

    def _change_directory_pre(
        self,
        name: str,
        *,
        new_name: Optional[str] = None,
        title: Optional[str] = None,
        export_pattern: Optional[str] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(name, "name")
        data = {
            "new_name": new_name,
            "title": title,
            "export_pattern": export_pattern,
            "branch": branch,
            **params,
        }
        data["name"] = name
        return self._json_request("change-directory", data=data)

    def _delete_directory_pre(
        self, name: str, *, branch: Optional[str] = None
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(name, "name")
        return self._json_request(
            "delete-directory", data={"name": name, "branch": branch}
        )

    def _download_glossary_pre(
        self, **params
    ) -> Tuple[HttpRequest, DownloadContext]:
        return self._download_request(
            "download-glossary", params, suffix=".tbx"
        )

    def _upload_glossary_pre(
        self, file: FileSource
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(file, "file")
        return self._json_request("upload-glossary", file=file)

    def _download_translation_memory_pre(
        self, **params
    ) -> Tuple[HttpRequest, DownloadContext]:
        return self._download_request("download-tm", params, suffix=".tmx")

    def _upload_translation_memory_pre(
        self, file: FileSource
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(file, "file")
        return self._json_request("upload-tm", file=file)

    def _supported_languages_pre(self) -> Tuple[HttpRequest, BaseContext]:
        return (
            self._prepare_http_request("supported-languages", method="GET"),
            BaseContext(),
        )

    def _pseudo_export_pre(
        self,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        length_transformation: Optional[int] = None,
        char_transformation: Optional[str] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        query = {
            "prefix": prefix,
            "suffix": suffix,
            "length_transformation": length_transformation,
            "char_transformation": char_transformation,
            **params,
        }
        return self._json_request("pseudo-export", method="GET", params=query)

    def _pseudo_download_pre(self) -> Tuple[HttpRequest, DownloadContext]:
        return self._download_request("pseudo-download", suffix=".zip")

    def _export_costs_estimation_report_pre(
        self,
        language: str,
        *,
        unit: Union[str, ReportUnit, None] = None,
        mode: Union[str, ReportMode, None] = None,
        calculate_internal_fuzzy_matches: Optional[bool] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        regular_rates: Optional[List[Dict[str, Any]]] = None,
        individual_rates: Optional[List[Dict[str, Any]]] = None,
        currency: Optional[str] = None,
        format: Union[str, ReportFormat, None] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        _require(language, "language")
        data = {
            "unit": unit,
            "mode": mode,
            "calculate_internal_fuzzy_matches": (
                calculate_internal_fuzzy_matches
            ),
            "date_from": date_from,
            "date_to": date_to,
            "regular_rates": regular_rates,
            "individual_rates": individual_rates,
            "currency": currency,
            "format": format,
            **params,
        }
        data["language"] = language
        return self._json_request(
            "reports/costs-estimation/export", data=data
        )

    def _download_costs_estimation_report_pre(
        self, hash: str
    ) -> Tuple[HttpRequest, DownloadContext]:
        _require(hash, "hash")
        return self._download_request(
            "reports/costs-estimation/download", {"hash": hash}
        )

    def _export_translation_costs_report_pre(
        self,
        *,
        unit: Union[str, ReportUnit, None] = None,
        mode: Union[str, ReportMode, None] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        regular_rates: Optional[List[Dict[str, Any]]] = None,
        individual_rates: Optional[List[Dict[str, Any]]] = None,
        currency: Optional[str] = None,
        format: Union[str, ReportFormat, None] = None,
        role_based_costs: Optional[bool] = None,
        group_by: Union[str, ReportGroupBy, None] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        data = {
            "unit": unit,
            "mode": mode,
            "date_from": date_from,
            "date_to": date_to,
            "regular_rates": regular_rates,
            "individual_rates": individual_rates,
            "currency": currency,
            "format": format,
            "role_based_costs": role_based_costs,
            "group_by": group_by,
            **params,
        }
        return self._json_request(
            "reports/translation-costs/export", data=data
        )

    def _download_translation_costs_report_pre(
        self, hash: str
    ) -> Tuple[HttpRequest, DownloadContext]:
        _require(hash, "hash")
        return self._download_request(
            "reports/translation-costs/download", {"hash": hash}
        )

    def _export_top_members_report_pre(
        self,
        *,
        unit: Union[str, ReportUnit, None] = None,
        language: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        format: Union[str, ReportFormat, None] = None,
        **params,
    ) -> Tuple[HttpRequest, BaseContext]:
        data = {
            "unit": unit,
            "language": language,
            "date_from": date_from,
            "date_to": date_to,
            "format": format,
            **params,
        }
        return self._json_request("reports/top-members/export", data=data)

    def _download_top_members_report_pre(
        self, hash: str
    ) -> Tuple[HttpRequest, DownloadContext]:
        _require(hash, "hash")
        return self._download_request(
            "reports/top-members/download", {"hash": hash}
        )

    # Every operation ends in one of the two normalizers.
    _add_file_post = _json_response_post
    _update_file_post = _json_response_post
    _delete_file_post = _json_response_post
    _upload_translation_post = _json_response_post
    _translation_status_post = _json_response_post
    _language_status_post = _json_response_post
    _project_info_post = _json_response_post
    _reported_issues_post = _json_response_post
    _export_file_post = _download_post
    _download_translations_post = _download_post
    _download_all_translations_post = _download_post
    _export_translations_post = _json_response_post
    _translation_export_status_post = _json_response_post
    _pre_translate_post = _json_response_post
    _edit_project_post = _json_response_post
    _delete_project_post = _json_response_post
    _create_directory_post = _json_response_post
    _change_directory_post = _json_response_post
    _delete_directory_post = _json_response_post
    _download_glossary_post = _download_post
    _upload_glossary_post = _json_response_post
    _download_translation_memory_post = _download_post
    _upload_translation_memory_post = _json_response_post
    _supported_languages_post = _json_response_post
    _pseudo_export_post = _json_response_post
    _pseudo_download_post = _download_post
    _export_costs_estimation_report_post = _json_response_post
    _download_costs_estimation_report_post = _download_post
    _export_translation_costs_report_post = _json_response_post
    _download_translation_costs_report_post = _download_post
    _export_top_members_report_post = _json_response_post
    _download_top_members_report_post = _download_post


def _require(value: Any, name: str) -> None:
    if value is None or (
        isinstance(value, (str, Mapping, list, tuple)) and not value
    ):
        raise ValueError(f"{name} must not be empty")


def _as_list(values: Union[str, Iterable[str]], name: str) -> List[str]:
    _require(values, name)
    values = [values] if isinstance(values, str) else list(values)
    if not values or not all(values):
        raise ValueError(f"{name} must not be empty")
    return values


@lru_cache(maxsize=4)
def _generate_user_agent(
    send_platform_info: bool,
    app_info_name: Optional[str],
    app_info_version: Optional[str],
):
    library_info_str = f"crowdin-api-python/{version.VERSION}"
    if send_platform_info:
        try:
            library_info_str += (
                f" ({platform.platform()}) "
                f"python/{platform.python_version()} "
                f"requests/{requests.__version__}"
            )
        except Exception:
            util.log_info(
                "Exception when querying platform information:\n"
                + traceback.format_exc()
            )
    if app_info_name and app_info_version:
        library_info_str += f" {app_info_name}/{app_info_version}"
    return library_info_str
