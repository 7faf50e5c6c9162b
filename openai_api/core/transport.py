"""HTTP transport built on a shared ``requests.Session``.

The transport does one thing per call: send the request and hand back a
:class:`Response`, or raise. It never retries and never mutates its own
configuration after construction.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import os
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from .. import __version__
from ..config import ClientConfig
from .errors import (
    ConfigurationError,
    DecodeError,
    RequestTimeoutError,
    TransportError,
    status_error_class,
)

logger = logging.getLogger(__name__)


def flatten_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Lowercase header names; a repeated header keeps its last value."""
    headers = {}
    for name, value in pairs:
        headers[name.lower()] = value
    return headers


def file_part(file_info: Any, name: str = "file") -> Tuple[str, bytes, str]:
    """Normalize an upload into ``(filename, data, content_type)``.

    Accepts a path, raw bytes, a ``(filename, data[, content_type])`` tuple
    or a readable file object.
    """
    if isinstance(file_info, tuple):
        filename, file_data = file_info[0], file_info[1]
        content_type = file_info[2] if len(file_info) > 2 else "application/octet-stream"
    elif isinstance(file_info, (bytes, bytearray)):
        filename = name
        file_data = bytes(file_info)
        content_type = "application/octet-stream"
    elif isinstance(file_info, (str, os.PathLike)):
        path = os.fspath(file_info)
        filename = os.path.basename(path)
        try:
            with open(path, "rb") as f:
                file_data = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read upload {path}: {e}")
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    else:
        filename = getattr(file_info, "name", name)
        if isinstance(filename, str):
            filename = os.path.basename(filename)
        file_data = file_info.read()
        content_type = mimetypes.guess_type(str(filename))[0] or "application/octet-stream"

    if isinstance(file_data, str):
        file_data = file_data.encode("utf-8")
    return filename, file_data, content_type


def _form_value(value):
    """Form encoding: lists become repeated keys, bools are lowercase."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_form_value(item) for item in value]
    return str(value)


class Response:
    """Status, headers and body of one HTTP exchange."""

    def __init__(self, status_code: int, headers: Dict[str, str], content: bytes, url: str = None):
        self.status_code = status_code
        self.headers = headers
        self.content = content
        self.url = url

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        try:
            return json.loads(self.content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Response body is not valid JSON: {e}", body=self.text)

    @classmethod
    def from_requests(cls, response: requests.Response) -> "Response":
        raw_headers = getattr(response.raw, "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "iteritems"):
            # urllib3 keeps repeated headers apart; requests joins them with ", "
            pairs = raw_headers.iteritems()
        else:
            pairs = response.headers.items()
        return cls(
            status_code=response.status_code,
            headers=flatten_headers(pairs),
            content=response.content,
            url=response.url,
        )

    def __repr__(self):
        return f"Response(status_code={self.status_code}, url={self.url!r})"


class HTTPTransport:
    """Low-level HTTP transport using requests."""

    def __init__(self, config: ClientConfig, session: requests.Session = None):
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update(self._build_headers())
        if config.proxy:
            self._session.proxies.update({"http": config.proxy, "https": config.proxy})
        self._session.verify = config.verify_ssl

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _build_headers(self) -> dict:
        headers = {
            "User-Agent": f"openai-api-python/{__version__}",
            "Accept": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        if self._config.organization:
            headers["OpenAI-Organization"] = self._config.organization
        headers.update(self._config.default_headers)
        return headers

    def _raise_for_status(self, response: Response):
        """Raise the matching HttpStatusError for a non-2xx response."""
        body = response.text
        try:
            error_body = json.loads(body)
            error = error_body.get("error", body) if isinstance(error_body, dict) else body
            message = error.get("message", body) if isinstance(error, dict) else str(error)
        except json.JSONDecodeError:
            message = body or f"HTTP {response.status_code}"

        error_class = status_error_class(response.status_code)
        raise error_class(message=message, status_code=response.status_code, body=body)

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict = None,
        files: dict = None,
        data: dict = None,
        timeout: float = None,
    ) -> Response:
        """Send one request and return the response; non-2xx statuses raise."""
        url = f"{self._config.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug("%s %s", method.upper(), url)
        try:
            raw = self._session.request(
                method=method.upper(),
                url=url,
                json=body,
                params=params or None,
                files=files,
                data=data,
                timeout=timeout if timeout is not None else self._config.timeout,
            )
        except requests.Timeout as e:
            raise RequestTimeoutError(f"Request to {url} timed out: {e}")
        except requests.RequestException as e:
            raise TransportError(f"Connection error: {e}")

        response = Response.from_requests(raw)
        logger.debug("%s %s -> %s", method.upper(), url, response.status_code)
        if not response.ok:
            self._raise_for_status(response)
        return response

    def get(self, path: str, params: dict = None, **kwargs) -> Response:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, body: Any = None, **kwargs) -> Response:
        return self.request("POST", path, body=body, **kwargs)

    def delete(self, path: str, **kwargs) -> Response:
        return self.request("DELETE", path, **kwargs)

    def post_multipart(self, path: str, fields: dict, files: dict, **kwargs) -> Response:
        """POST a multipart/form-data body; ``None`` fields are skipped."""
        data = {k: _form_value(v) for k, v in fields.items() if v is not None}
        return self.request("POST", path, data=data, files=files, **kwargs)

    def close(self):
        self._session.close()
