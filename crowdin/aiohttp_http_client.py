# Copyright 2024 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import os
import ssl
from typing import Union, Dict, Optional, Mapping

from .client_base import HttpRequest, HttpResponse
from .iasync_http_client import IAsyncHttpClient
from .ihttp_client import IPreparedRequest

try:
    import aiohttp
except ImportError as import_error:
    aiohttp = None
    aiohttp_import_error = import_error

_DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _guess_filename(file, default: str) -> str:
    name = getattr(file, "name", None)
    if isinstance(name, str) and name and name[0] != "<":
        return os.path.basename(name)
    return default


class AioHttpPreparedRequest(IPreparedRequest):
    def __init__(self, request: HttpRequest):
        super().__init__(request)

        if request.files:
            self.data = aiohttp.FormData(request.data or [])
            for key, file in request.files.items():
                # aiohttp closes IO payloads once sent, send contents instead
                self.data.add_field(
                    key, file.read(), filename=_guess_filename(file, key)
                )
        elif request.data is not None:
            self.data = aiohttp.FormData(request.data)
        else:
            self.data = None
        self.headers = request.headers


class AioHttpResponse(HttpResponse):
    def raise_for_status(self) -> None:
        self._raw_response.raise_for_status()

    def __init__(
        self,
        status: int,
        text: Optional[str],
        headers: Mapping[str, str],
        raw_response: "aiohttp.ClientResponse",
    ):
        super().__init__(status, text, dict(headers))
        self._raw_response = raw_response


class AioHttpHttpClient(IAsyncHttpClient):
    def __init__(
        self,
        proxy: Union[Dict, str, None] = None,
        verify_ssl: Union[bool, str, None] = None,
    ):
        if aiohttp is None:
            raise ImportError(
                "aiohttp import failed, cannot use aiohttp client"
            ) from aiohttp_import_error

        if isinstance(proxy, dict):
            proxy = proxy.get("https") or proxy.get("http")
        if proxy is not None and not isinstance(proxy, str):
            raise ValueError(
                "proxy may be specified as a URL string or dictionary "
                "containing URL strings for the http and https keys."
            )
        self._proxy = proxy

        self._ssl: Union[bool, ssl.SSLContext] = True
        if isinstance(verify_ssl, str):
            self._ssl = ssl.create_default_context(cafile=verify_ssl)
        elif verify_ssl is not None:
            self._ssl = verify_ssl

        # Created on first use, a session must belong to a running loop.
        self._session: Optional["aiohttp.ClientSession"] = None

        super().__init__()

    async def close(self):
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def prepare_request(self, request: HttpRequest) -> IPreparedRequest:
        return AioHttpPreparedRequest(request)

    async def send_request_async(
        self, prepared_request: IPreparedRequest, timeout: Optional[float]
    ) -> HttpResponse:
        prepared_request: AioHttpPreparedRequest
        if self._session is None:
            self._session = aiohttp.ClientSession()

        request = prepared_request.request
        response = await self._session.request(
            request.method,
            request.url,
            params=request.params,
            headers=prepared_request.headers,
            data=prepared_request.data,
            proxy=self._proxy,
            ssl=self._ssl,
            timeout=aiohttp.ClientTimeout(total=timeout),
        )
        text = None
        if request.stream_chunks:
            try:
                chunks = response.content.iter_chunked(_DOWNLOAD_CHUNK_SIZE)
                async for chunk in chunks:
                    request.stream_chunks(chunk)
            finally:
                response.close()
        else:
            try:
                text = await response.text(
                    encoding="utf-8", errors="replace"
                )
            finally:
                response.close()
        return AioHttpResponse(
            response.status, text, response.headers, response
        )
