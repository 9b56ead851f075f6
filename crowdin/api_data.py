# Copyright 2023 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

from enum import Enum
from typing import List, Optional, Tuple


class ClientConfig:
    """Connection settings of a client: server URL, credentials and project.

    Exactly one form of credentials must be given: either the project API key,
    or the login and account key of a Crowdin account.

    :param project_identifier: Identifier of the Crowdin project.
    :param api_key: (Optional) Project API key.
    :param login: (Optional) Crowdin account login.
    :param account_key: (Optional) Crowdin account API key.
    :param server_url: Base URL of the Crowdin server.

    :raises ValueError: If no credentials, both forms of credentials, or only
        half of the login/account key pair are given, or if the project
        identifier is empty.
    """

    DEFAULT_SERVER_URL = "https://api.crowdin.com"

    def __init__(
        self,
        project_identifier: str,
        *,
        api_key: Optional[str] = None,
        login: Optional[str] = None,
        account_key: Optional[str] = None,
        server_url: Optional[str] = None,
    ):
        if not project_identifier:
            raise ValueError("project_identifier must not be empty")

        has_account = bool(login) or bool(account_key)
        if api_key and has_account:
            raise ValueError(
                "specify either api_key or login and account_key, not both"
            )
        if not api_key and not has_account:
            raise ValueError(
                "Please specify Crowdin credentials: either api_key, or login "
                "and account_key"
            )
        if has_account and not (login and account_key):
            raise ValueError("login and account_key must be given together")

        self._project_identifier = project_identifier
        self._api_key = api_key or None
        self._login = login or None
        self._account_key = account_key or None
        self._server_url = (server_url or self.DEFAULT_SERVER_URL).rstrip("/")

    def __repr__(self):
        return (
            f"ClientConfig(project_identifier={self._project_identifier!r}, "
            f"server_url={self._server_url!r}, "
            f"uses_account_key={self.uses_account_key})"
        )

    @property
    def project_identifier(self) -> str:
        return self._project_identifier

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def login(self) -> Optional[str]:
        return self._login

    @property
    def uses_account_key(self) -> bool:
        """True if authenticating with login and account key, False if
        authenticating with the project API key."""
        return self._api_key is None

    def query_params(self) -> List[Tuple[str, str]]:
        """Returns the query string fields sent with every request: the JSON
        response flag and the credentials."""
        if self.uses_account_key:
            credentials = [
                ("login", self._login),
                ("account-key", self._account_key),
            ]
        else:
            credentials = [("key", self._api_key)]
        return [("json", "true")] + credentials  # type: ignore[operator]


class PreTranslateMethod(Enum):
    """Options for the method parameter of pre-translation."""

    TRANSLATION_MEMORY = "tm"
    """Pre-translate using the project's translation memory."""

    MACHINE_TRANSLATION = "mt"
    """Pre-translate using a machine translation engine."""

    def __str__(self):
        return self.value


class MachineTranslationEngine(Enum):
    """Options for the engine parameter of machine pre-translation."""

    GOOGLE = "google"
    MICROSOFT = "microsoft"
    DEEPL = "deepl"

    def __str__(self):
        return self.value


class IssueType(Enum):
    """Options for the type parameter of reported_issues()."""

    ALL = "all"
    GENERAL_QUESTION = "general_question"
    TRANSLATION_MISTAKE = "translation_mistake"
    CONTEXT_REQUEST = "context_request"
    SOURCE_MISTAKE = "source_mistake"

    def __str__(self):
        return self.value


class IssueStatus(Enum):
    """Options for the status parameter of reported_issues()."""

    ALL = "all"
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"

    def __str__(self):
        return self.value


class ReportUnit(Enum):
    """Options for the unit parameter of reports."""

    STRINGS = "strings"
    WORDS = "words"
    CHARS = "chars"
    CHARS_WITH_SPACES = "chars_with_spaces"

    def __str__(self):
        return self.value


class ReportMode(Enum):
    """Options for the mode parameter of cost reports.

    - SIMPLE: every string costs the regular rate.
    - FUZZY: strings with translation memory matches are charged according to
      the match percentage.
    """

    SIMPLE = "simple"
    FUZZY = "fuzzy"

    def __str__(self):
        return self.value


class ReportFormat(Enum):
    """Options for the format parameter of reports."""

    XLSX = "xlsx"
    CSV = "csv"
    JSON = "json"

    def __str__(self):
        return self.value


class ReportGroupBy(Enum):
    """Options for the group_by parameter of the translation costs report."""

    USER = "user"
    LANGUAGE = "language"

    def __str__(self):
        return self.value
