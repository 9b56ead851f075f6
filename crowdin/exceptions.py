# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

from typing import Optional, Union


class CrowdinException(Exception):
    """Base class for crowdin module exceptions.

    Transport failures (connection errors, timeouts, HTTP errors without a
    Crowdin error body) are not wrapped: the exception raised by the
    underlying HTTP library reaches the caller unchanged.

    :param message: Message describing the error that occurred.
    :param http_status_code: The HTTP status code in the response, if
        applicable, otherwise None.
    """

    def __init__(
        self,
        message: str,
        http_status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.http_status_code = http_status_code


class ServiceException(CrowdinException):
    """Crowdin answered with an error object, for example because the API key
    is not valid or the project does not exist.

    :param code: Error code reported by Crowdin, verbatim.
    :param message: Error message reported by Crowdin, verbatim.
    :param http_status_code: The HTTP status code in the response.
    """

    def __init__(
        self,
        code: Union[int, str, None],
        message: Optional[str],
        http_status_code: Optional[int] = None,
    ):
        super().__init__(
            f"Error code {code}: {message}", http_status_code=http_status_code
        )
        self.code = code
        self.message = message


class StreamingException(CrowdinException):
    """A file download failed and the response body did not contain a Crowdin
    error object."""

    def __init__(self, http_status_code: int):
        super().__init__(
            f"Error streaming from Crowdin: {http_status_code}",
            http_status_code=http_status_code,
        )
