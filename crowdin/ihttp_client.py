# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
from abc import abstractmethod, ABC
from typing import Optional

from . import util
from .client_base import HttpRequest, HttpResponse


class IPreparedRequest(ABC):
    def __init__(self, request: HttpRequest):
        self.request = request


class IHttpClient(ABC):
    @abstractmethod
    def prepare_request(self, request: HttpRequest) -> IPreparedRequest:
        """
        Implementations should prepare the given request suitable for their
        purposes. Any exceptions can be thrown, they will be rethrown.
        """
        pass

    @abstractmethod
    def send_request(
        self, prepared_request: IPreparedRequest, timeout: Optional[float]
    ) -> HttpResponse:
        """
        Implementations should send the given prepared request, respecting the
        given timeout. The response should be stored as an HttpResponse.

        If the request has stream_chunks set, every chunk of the response body
        must be passed to it as it arrives, whatever the status code.

        Failures of the underlying HTTP library must not be wrapped: callers
        distinguish infrastructure failures from Crowdin errors by the
        exception type.
        """
        pass

    @abstractmethod
    def close(self):
        pass

    def request(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        """Makes API request and returns response. There are no retries:
        exactly one HTTP request is sent per call."""

        self._log_request(request)
        prepared_request = self.prepare_request(request)
        response = self.send_request(prepared_request, timeout=timeout)
        self._log_response(request, response)
        return response

    def _log_request(self, request: HttpRequest):
        util.log_info(
            "Request to Crowdin API", method=request.method, url=request.url
        )
        util.log_debug(
            "Request details",
            data=request.data,
            files=list(request.files) if request.files else None,
        )

    def _log_response(self, request: HttpRequest, response: HttpResponse):
        util.log_info(
            "Crowdin API response",
            url=request.url,
            status_code=response.status_code,
        )
        if response.text is not None:
            util.log_debug("Response details", content=response.text)
