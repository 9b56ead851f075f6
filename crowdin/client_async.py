# Copyright 2024 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import functools
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Union,
)

from .api_data import (
    IssueStatus,
    IssueType,
    MachineTranslationEngine,
    PreTranslateMethod,
    ReportFormat,
    ReportGroupBy,
    ReportMode,
    ReportUnit,
)
from .aiohttp_http_client import AioHttpHttpClient
from .client_base import ClientBase
from .iasync_http_client import IAsyncHttpClient
from .util import FileSource


def with_base_pre_and_post(func):
    pre_func = getattr(ClientBase, f"_{func.__name__}_pre")
    post_func = getattr(ClientBase, f"_{func.__name__}_post")

    @functools.wraps(func)
    async def wrapped(self: "AsyncClient", *args, **kwargs):
        request, context = pre_func(self, *args, **kwargs)
        try:
            response = await self._client.request_async(
                request, timeout=self._timeout
            )
        finally:
            context.release()
        return post_func(self, response, context)

    return wrapped


class AsyncClient(ClientBase):
    """Async wrapper for the Crowdin API of a single project.

    Offers the same functions as Client, as coroutines. Calls may run
    concurrently; every download writes to its own temporary file.

    :param project_identifier: Identifier of the Crowdin project.
    :param api_key: (Optional) Project API key.
    :param login: (Optional) Crowdin account login, requires account_key.
    :param account_key: (Optional) Crowdin account API key, requires login.
    :param server_url: (Optional) Base URL of the Crowdin server, can be
        overridden e.g. for testing purposes.
    :param proxy: (Optional) Proxy server URL string, or dictionary containing
        URL strings for the 'http' and 'https' keys of which the 'https' one
        is used.
    :param verify_ssl: (Optional) False to skip certificate verification, or
        path of a CA bundle to verify certificates with.
    :param timeout: (Optional) Total timeout in seconds for each request.
    :param send_platform_info: (Optional) boolean that indicates if the client
        library can send basic platform info (python version, OS, http library
        version) in the User-Agent header.

    All functions may raise ServiceException if Crowdin reports an error,
    StreamingException if a download fails without a Crowdin error, and the
    exceptions of aiohttp on connection failures or HTTP errors.
    """

    def __init__(
        self,
        project_identifier: str,
        *,
        api_key: Optional[str] = None,
        login: Optional[str] = None,
        account_key: Optional[str] = None,
        server_url: Optional[str] = None,
        proxy: Union[Dict, str, None] = None,
        verify_ssl: Union[bool, str, None] = None,
        timeout: Optional[float] = None,
        send_platform_info: bool = True,
    ):
        super().__init__(
            project_identifier,
            api_key=api_key,
            login=login,
            account_key=account_key,
            server_url=server_url,
            send_platform_info=send_platform_info,
        )
        self._timeout = timeout
        self._client: IAsyncHttpClient = AioHttpHttpClient(proxy, verify_ssl)

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self):
        if hasattr(self, "_client"):
            await self._client.close()

    @with_base_pre_and_post
    async def add_file(
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
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def update_file(
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
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def delete_file(
        self, file: str, *, branch: Optional[str] = None
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def upload_translation(
        self,
        files: Mapping[str, FileSource],
        language: str,
        *,
        import_duplicates: Optional[bool] = None,
        import_eq_suggestions: Optional[bool] = None,
        auto_approve_imported: Optional[bool] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def translation_status(self) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def language_status(self, language: str) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def project_info(self) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def reported_issues(
        self,
        *,
        type: Union[str, IssueType, None] = None,
        status: Union[str, IssueStatus, None] = None,
        file: Optional[str] = None,
        language: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def export_file(
        self,
        file: str,
        language: str,
        *,
        branch: Optional[str] = None,
        format: Optional[str] = None,
        export_translated_only: Optional[bool] = None,
        export_approved_only: Optional[bool] = None,
        **params,
    ) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_translations(
        self, language: str, *, branch: Optional[str] = None
    ) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_all_translations(
        self, *, branch: Optional[str] = None
    ) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def export_translations(
        self, *, branch: Optional[str] = None, **params
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def translation_export_status(
        self, *, branch: Optional[str] = None
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def pre_translate(
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
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def edit_project(self, **params) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def delete_project(self) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def create_directory(
        self,
        name: str,
        *,
        is_branch: Optional[bool] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def change_directory(
        self,
        name: str,
        *,
        new_name: Optional[str] = None,
        title: Optional[str] = None,
        export_pattern: Optional[str] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def delete_directory(
        self, name: str, *, branch: Optional[str] = None
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_glossary(self, **params) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def upload_glossary(self, file: FileSource) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_translation_memory(self, **params) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def upload_translation_memory(self, file: FileSource) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def supported_languages(self) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def pseudo_export(
        self,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        length_transformation: Optional[int] = None,
        char_transformation: Optional[str] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def pseudo_download(self) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def export_costs_estimation_report(
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
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_costs_estimation_report(self, hash: str) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def export_translation_costs_report(
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
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_translation_costs_report(self, hash: str) -> str:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def export_top_members_report(
        self,
        *,
        unit: Union[str, ReportUnit, None] = None,
        language: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        format: Union[str, ReportFormat, None] = None,
        **params,
    ) -> Any:
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    async def download_top_members_report(self, hash: str) -> str:
        raise NotImplementedError("replaced by decorator")
