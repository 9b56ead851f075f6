# Copyright 2024 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
from abc import ABC, abstractmethod
from typing import Optional

from .ihttp_client import IHttpClient, IPreparedRequest
from .client_base import HttpRequest, HttpResponse


class IAsyncHttpClient(IHttpClient, ABC):
    @abstractmethod
    async def send_request_async(
        self, prepared_request: IPreparedRequest, timeout: Optional[float]
    ) -> HttpResponse:
        """
        Async implementations should this instead of send_request.
        """
        pass

    @abstractmethod
    async def prepare_request(self, request: HttpRequest) -> IPreparedRequest:
        """
        Implementations should prepare the given request suitable for their
        purposes. Any exceptions can be thrown, they will be rethrown.
        """
        pass

    @abstractmethod
    async def close(self):
        """
        Async implementations may implement this, e.g. to clean up sessions.
        """
        pass

    async def request_async(
        self, request: HttpRequest, timeout: Optional[float] = None
    ) -> HttpResponse:
        """
        Makes API request and returns response, without retries.
        """

        self._log_request(request)
        prepared_request = await self.prepare_request(request)
        response = await self.send_request_async(
            prepared_request, timeout=timeout
        )
        self._log_response(request, response)
        return response

    def request(self, request: HttpRequest, timeout: Optional[float] = None):
        raise NotImplementedError(
            "IAsyncHttpClient implements request_async instead of request"
        )

    def send_request(
        self, prepared_request: IPreparedRequest, timeout: Optional[float]
    ) -> HttpResponse:
        raise NotImplementedError(
            "IAsyncHttpClient implements send_request_async instead of "
            "send_request"
        )
