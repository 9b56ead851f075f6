# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

from typing import Union, Dict, Optional

import requests

from .ihttp_client import IHttpClient, IPreparedRequest
from .client_base import HttpResponse, HttpRequest

_DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _session_proxies(proxy: Union[Dict, str]) -> Dict[str, str]:
    if isinstance(proxy, str):
        return {"http": proxy, "https": proxy}
    if isinstance(proxy, dict):
        return proxy
    raise ValueError(
        "proxy may be specified as a URL string or dictionary containing URL "
        "strings for the http and https keys."
    )


class RequestPreparedRequest(IPreparedRequest):
    """Request converted into a requests.PreparedRequest; query fields are
    appended to the URL and form fields are multipart-encoded when files are
    attached."""

    def __init__(self, request: HttpRequest):
        super().__init__(request)
        self.prepared_request = requests.Request(
            request.method,
            request.url,
            params=request.params,
            data=request.data,
            headers=request.headers,
            files=request.files,
        ).prepare()
        self.stream = request.stream_chunks is not None


class RequestsResponse(HttpResponse):
    def __init__(self, response: requests.Response, body_consumed: bool):
        self._raw_response = response
        text = None
        if not body_consumed:
            with response:
                response.encoding = "UTF-8"
                text = response.text
        super().__init__(response.status_code, text, response.headers)

    def raise_for_status(self) -> None:
        self._raw_response.raise_for_status()


class RequestsHttpClient(IHttpClient):
    """HTTP client based on a requests.Session, used by Client.

    :param proxy: (Optional) Proxy server URL string, or dictionary of URL
        strings keyed by scheme.
    :param verify_ssl: (Optional) Passed to requests as Session.verify.
    """

    def __init__(
        self,
        proxy: Union[Dict, str, None] = None,
        verify_ssl: Union[bool, str, None] = None,
    ):
        self._session = requests.Session()
        if proxy:
            self._session.proxies.update(_session_proxies(proxy))
        if verify_ssl is not None:
            self._session.verify = verify_ssl

        super().__init__()

    def close(self):
        self._session.close()

    def prepare_request(self, request: HttpRequest) -> IPreparedRequest:
        return RequestPreparedRequest(request)

    def send_request(
        self, prepared_request: IPreparedRequest, timeout: Optional[float]
    ) -> HttpResponse:
        prepared_request: RequestPreparedRequest
        response = self._session.send(
            prepared_request.prepared_request,
            stream=prepared_request.stream,
            timeout=timeout,
        )

        write_chunk = prepared_request.request.stream_chunks
        if write_chunk is None:
            return RequestsResponse(response, body_consumed=False)

        with response:
            for chunk in response.iter_content(_DOWNLOAD_CHUNK_SIZE):
                write_chunk(chunk)
        return RequestsResponse(response, body_consumed=True)
