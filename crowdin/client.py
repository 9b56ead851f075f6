# Copyright 2022 The crowdin-api-python Authors
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
from .client_base import ClientBase
from .ihttp_client import IHttpClient
from .requests_http_client import RequestsHttpClient
from .util import FileSource


def with_base_pre_and_post(func):
    pre_func = getattr(ClientBase, f"_{func.__name__}_pre")
    post_func = getattr(ClientBase, f"_{func.__name__}_post")

    @functools.wraps(func)
    def wrapped(self: "Client", *args, **kwargs):
        request, context = pre_func(self, *args, **kwargs)
        try:
            response = self._client.request(request, timeout=self._timeout)
        finally:
            context.release()
        return post_func(self, response, context)

    return wrapped


class Client(ClientBase):
    """Wrapper for the Crowdin API of a single project.

    You must create an instance of Client to use the Crowdin API. Credentials
    are given either as the project API key, or as the login and account key
    of a Crowdin account; exactly one of the two forms is required.

    :param project_identifier: Identifier of the Crowdin project.
    :param api_key: (Optional) Project API key.
    :param login: (Optional) Crowdin account login, requires account_key.
    :param account_key: (Optional) Crowdin account API key, requires login.
    :param server_url: (Optional) Base URL of the Crowdin server, can be
        overridden e.g. for testing purposes.
    :param proxy: (Optional) Proxy server URL string or dictionary containing
        URL strings for the 'http' and 'https' keys. This is passed to the
        underlying requests session, see the requests proxy documentation for
        more information.
    :param verify_ssl: (Optional) Controls how requests verifies SSL
        certificates. This is passed to the underlying requests session, see
        the requests verify documentation for more information.
    :param timeout: (Optional) Timeout in seconds for each request, by default
        requests waits indefinitely.
    :param send_platform_info: (Optional) boolean that indicates if the client
        library can send basic platform info (python version, OS, http library
        version) in the User-Agent header. True = send info, False = only send
        client library version

    Functions returning JSON give back the parsed response unchanged. Download
    functions return the path of a temporary file holding the downloaded
    content; the caller is responsible for moving or deleting it.

    All functions may raise ServiceException if Crowdin reports an error,
    StreamingException if a download fails without a Crowdin error, and the
    exceptions of the requests library on connection failures or HTTP errors.
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
        self._client: IHttpClient = RequestsHttpClient(proxy, verify_ssl)

    def __del__(self):
        self.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self):
        if hasattr(self, "_client"):
            self._client.close()

    @with_base_pre_and_post
    def add_file(
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
        """Add new files to the project.

        :param files: Mapping of file paths in the project (e.g.
            "strings/main.json") to local file paths or binary streams. At
            most 20 files may be uploaded per call.
        :param type: (Optional) File type, by default detected from the file
            extension.
        :param first_line_contains_header: (Optional) For CSV files, whether
            the first line holds column titles.
        :param scheme: (Optional) For CSV files, the column scheme.
        :param titles: (Optional) Mapping of project file paths to titles
            shown to translators.
        :param export_patterns: (Optional) Mapping of project file paths to
            the naming pattern of their translated files.
        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def update_file(
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
        """Upload the latest version of existing project files.

        :param files: Mapping of file paths in the project to local file paths
            or binary streams. At most 20 files may be uploaded per call.
        :param update_option: (Optional) How translations of changed strings
            are kept, "update_as_unapproved" or "update_without_changes".
        :param titles: (Optional) Mapping of project file paths to titles.
        :param export_patterns: (Optional) Mapping of project file paths to
            the naming pattern of their translated files.
        :param first_line_contains_header: (Optional) For CSV files, whether
            the first line holds column titles.
        :param scheme: (Optional) For CSV files, the column scheme.
        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def delete_file(self, file: str, *, branch: Optional[str] = None) -> Any:
        """Delete a file from the project. All its translations are lost
        without the ability to restore them.

        :param file: Path of the file in the project.
        :param branch: (Optional) Name of the version branch.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def upload_translation(
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
        """Upload existing translations of project files.

        :param files: Mapping of source file paths in the project to local
            translated files or binary streams.
        :param language: Crowdin code of the language of the translations. A
            single call uploads translations for one language only.
        :param import_duplicates: (Optional) Add translations even if the same
            translation already exists.
        :param import_eq_suggestions: (Optional) Add translations equal to the
            source string.
        :param auto_approve_imported: (Optional) Mark uploaded translations as
            approved.
        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def translation_status(self) -> Any:
        """Get the translation progress of the project by language."""
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def language_status(self, language: str) -> Any:
        """Get the detailed translation progress for one language.

        :param language: Crowdin language code.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def project_info(self) -> Any:
        """Get the project details: languages, files and directories."""
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def reported_issues(
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
        """Get the issues reported in the Editor.

        :param type: (Optional) Issue type, see IssueType.
        :param status: (Optional) Issue resolution status, see IssueStatus.
        :param file: (Optional) Path of the file the issues belong to.
        :param language: (Optional) Language the issues belong to.
        :param date_from: (Optional) Issues added from, in ISO 8601 format
            YYYY-MM-DD±hh:mm.
        :param date_to: (Optional) Issues added up to, in ISO 8601 format.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def export_file(
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
        """Download a single translated file.

        :param file: Path of the file in the project.
        :param language: Crowdin language code.
        :param branch: (Optional) Name of the version branch.
        :param format: (Optional) "xliff" to export in XLIFF format.
        :param export_translated_only: (Optional) Only export translated
            strings.
        :param export_approved_only: (Optional) Only export approved
            translations.
        :param params: Further parameters passed to the API as is.
        :return: Path of the temporary file holding the translated file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_translations(
        self, language: str, *, branch: Optional[str] = None
    ) -> str:
        """Download the ZIP archive with translations into one language.

        :param language: Crowdin language code.
        :param branch: (Optional) Name of the version branch.
        :return: Path of the temporary ZIP file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_all_translations(
        self, *, branch: Optional[str] = None
    ) -> str:
        """Download the ZIP archive with translations into all languages.

        :param branch: (Optional) Name of the version branch.
        :return: Path of the temporary ZIP file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def export_translations(
        self, *, branch: Optional[str] = None, **params
    ) -> Any:
        """Build the ZIP archive with the latest translations.

        Crowdin builds at most once per 30 minutes (no limit for organization
        plans) and skips the build if nothing changed since the previous
        export; the "status" of the response is "built" or "skipped".

        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def translation_export_status(
        self, *, branch: Optional[str] = None
    ) -> Any:
        """Get the status of the translations export.

        :param branch: (Optional) Name of the version branch.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def pre_translate(
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
        """Pre-translate project files.

        :param languages: Crowdin codes of the languages to pre-translate.
        :param files: Paths of the files in the project to pre-translate.
        :param method: (Optional) Pre-translation method, see
            PreTranslateMethod.
        :param engine: (Optional) Machine translation engine, see
            MachineTranslationEngine.
        :param approve_translated: (Optional) Approve the added translations.
        :param auto_approve_option: (Optional) Which translation memory
            translations are approved automatically.
        :param import_duplicates: (Optional) Add translations even if the same
            translation already exists.
        :param apply_untranslated_strings_only: (Optional) Only pre-translate
            untranslated strings.
        :param perfect_match: (Optional) Only apply translation memory matches
            with identical source text and context.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def edit_project(self, **params) -> Any:
        """Change project settings, e.g. name=..., languages=[...].

        :param params: Project settings passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def delete_project(self) -> Any:
        """Delete the project with all translations."""
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def create_directory(
        self,
        name: str,
        *,
        is_branch: Optional[bool] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Any:
        """Add a directory to the project.

        :param name: Directory name, with path for nested directories.
        :param is_branch: (Optional) Create a version branch instead.
        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def change_directory(
        self,
        name: str,
        *,
        new_name: Optional[str] = None,
        title: Optional[str] = None,
        export_pattern: Optional[str] = None,
        branch: Optional[str] = None,
        **params,
    ) -> Any:
        """Rename a directory or change its attributes. A rename cannot move
        the directory, new_name is a name only.

        :param name: Full path of the directory, e.g. "/MainPage/AboutUs".
        :param new_name: (Optional) New directory name.
        :param title: (Optional) Directory title shown to translators.
        :param export_pattern: (Optional) Naming pattern of translated files.
        :param branch: (Optional) Name of the version branch.
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def delete_directory(
        self, name: str, *, branch: Optional[str] = None
    ) -> Any:
        """Delete a directory with all nested files and directories.

        :param name: Directory path, or name for a directory in the root.
        :param branch: (Optional) Name of the version branch.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_glossary(self, **params) -> str:
        """Download the project glossary as TBX file.

        :return: Path of the temporary TBX file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def upload_glossary(self, file: FileSource) -> Any:
        """Upload a glossary in TBX format.

        :param file: Local file path or binary stream.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_translation_memory(self, **params) -> str:
        """Download the project translation memory as TMX file.

        :return: Path of the temporary TMX file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def upload_translation_memory(self, file: FileSource) -> Any:
        """Upload a translation memory in TMX format.

        :param file: Local file path or binary stream.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def supported_languages(self) -> Any:
        """Get the languages supported by Crowdin, with Crowdin codes mapped
        to locale names and standard codes."""
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def pseudo_export(
        self,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        length_transformation: Optional[int] = None,
        char_transformation: Optional[str] = None,
        **params,
    ) -> Any:
        """Generate pseudo-translation files for the whole project.

        :param prefix: (Optional) Characters added at the beginning of each
            string, showing where messages were concatenated.
        :param suffix: (Optional) Characters added at the end of each string.
        :param length_transformation: (Optional) Percentage by which strings
            are made longer or shorter.
        :param char_transformation: (Optional) Script the characters are
            transformed to, e.g. "cyrillic".
        :param params: Further parameters passed to the API as is.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def pseudo_download(self) -> str:
        """Download the ZIP archive with pseudo-translations.

        :return: Path of the temporary ZIP file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def export_costs_estimation_report(
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
        """Generate the Costs Estimation report, the approximate cost of
        translating the currently untranslated strings.

        :param language: Language the report is generated for.
        :param unit: (Optional) Report unit, see ReportUnit.
        :param mode: (Optional) Report mode, see ReportMode.
        :param calculate_internal_fuzzy_matches: (Optional) Fuzzy mode only.
        :param date_from: (Optional) Strings added from.
        :param date_to: (Optional) Strings added up to.
        :param regular_rates: (Optional) List of {"mode": ..., "value": ...}
            rates per category.
        :param individual_rates: (Optional) List of rates for specific
            languages, with "languages" and "rates" keys.
        :param currency: (Optional) Currency code of the report.
        :param format: (Optional) File format, see ReportFormat.
        :param params: Further parameters passed to the API as is.
        :return: Response containing the hash to download the report with.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_costs_estimation_report(self, hash: str) -> str:
        """Download a Costs Estimation report generated before.

        :param hash: Hash returned by export_costs_estimation_report().
        :return: Path of the temporary report file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def export_translation_costs_report(
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
        """Generate the Translation Costs report, the real cost of the work
        done by translators and proofreaders.

        :param unit: (Optional) Report unit, see ReportUnit.
        :param mode: (Optional) Report mode, see ReportMode.
        :param date_from: (Optional) Strings added from.
        :param date_to: (Optional) Strings added up to.
        :param regular_rates: (Optional) Rates per category.
        :param individual_rates: (Optional) Rates for specific languages.
        :param currency: (Optional) Currency code of the report.
        :param format: (Optional) File format, see ReportFormat.
        :param role_based_costs: (Optional) Calculate costs from the role in
            the project instead of the contributions.
        :param group_by: (Optional) Group by user (default) or language.
        :param params: Further parameters passed to the API as is.
        :return: Response containing the hash to download the report with.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_translation_costs_report(self, hash: str) -> str:
        """Download a Translation Costs report generated before.

        :param hash: Hash returned by export_translation_costs_report().
        :return: Path of the temporary report file.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def export_top_members_report(
        self,
        *,
        unit: Union[str, ReportUnit, None] = None,
        language: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        format: Union[str, ReportFormat, None] = None,
        **params,
    ) -> Any:
        """Generate the Top Members report, who contributed the most during
        the given date range.

        :param unit: (Optional) Report unit, see ReportUnit.
        :param language: (Optional) Language the report is generated for.
        :param date_from: (Optional) Contributions from.
        :param date_to: (Optional) Contributions up to.
        :param format: (Optional) File format, see ReportFormat.
        :param params: Further parameters passed to the API as is.
        :return: Response containing the hash to download the report with.
        """
        raise NotImplementedError("replaced by decorator")

    @with_base_pre_and_post
    def download_top_members_report(self, hash: str) -> str:
        """Download a Top Members report generated before.

        :param hash: Hash returned by export_top_members_report().
        :return: Path of the temporary report file.
        """
        raise NotImplementedError("replaced by decorator")
