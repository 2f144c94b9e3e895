from __future__ import annotations

import enum
import json
import logging
import re
from typing import Any, Mapping
from urllib.parse import urlencode

import httpx

from .config_types import ClientConfig
from .errors import (
    ApiError,
    AuthError,
    BadRequestError,
    ConfigError,
    DecodeError,
    MethodNotAllowedError,
    NetworkError,
    PreconditionFailedError,
    RateLimitedError,
    ServerError,
)

logger = logging.getLogger(__name__)

INVALID_API_KEY = "Invalid API key"

_API_KEY_RE = re.compile(r"([?&]api_key=)[^&]*")

Params = Mapping[str, "str | int | None"]


class ResultShape(enum.Enum):
    PAYLOAD = "payload"
    STATUS_CODE = "status_code"


_STATUS_ERRORS: dict[int, tuple[type[ApiError], str]] = {
    400: (BadRequestError, "Invalid API location. Check the URL that you are using"),
    403: (
        AuthError,
        "Invalid or missing API key. Check that your API key is present and matches your assigned key",
    ),
    405: (
        MethodNotAllowedError,
        "Invalid HTTP method. Check that the method (POST|GET) matches what the documentation indicates",
    ),
    500: (ServerError, "Internal server error. Try again at a later time"),
    503: (
        RateLimitedError,
        "Rate limit hit. API requests are limited to an average of 2/s. Try your request again later.",
    ),
}


def _clean_params(params: Params | None) -> dict[str, str]:
    if not params:
        return {}
    return {str(k): str(v) for k, v in params.items() if v is not None}


def mask_api_key(url: str) -> str:
    """Replace the api_key query value so URLs can be logged."""
    return _API_KEY_RE.sub(r"\1***", url)


class Transport:
    def __init__(self, cfg: ClientConfig):
        if not isinstance(cfg.token, str) or not cfg.token:
            raise ConfigError("Invalid token.")
        self._cfg = cfg
        base_url = cfg.base_url.strip()
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._headers = {
            "User-Agent": cfg.user_agent,
            "Accept": "application/json",
        }

    def build_url(self, path: str, query: Params | None = None) -> str:
        url = f"{self._base_url}{path.lstrip('/')}?{urlencode({'api_key': self._cfg.token})}"
        extra = _clean_params(query)
        if extra:
            url += "&" + urlencode(extra)
        return url

    def _log(self, msg: str, *args: Any) -> None:
        logger.log(logging.INFO if self._cfg.debug else logging.DEBUG, msg, *args)

    def dispatch(
            self,
            method: str,
            path: str,
            params: Params | None = None,
            *,
            shape: ResultShape = ResultShape.PAYLOAD,
    ) -> Any:
        """Perform one round trip and return the decoded body or the status code.

        GET params travel in the query string after ``api_key``; POST params
        are sent form-encoded in the body. Status errors are raised as
        ``ApiError`` subclasses unless ``shape`` asks for the status code.
        """
        method = method.upper()
        if method == "GET":
            url = self.build_url(path, params)
            content = None
            headers = self._headers
        elif method == "POST":
            url = self.build_url(path)
            content = urlencode(_clean_params(params))
            headers = {**self._headers, "Content-Type": "application/x-www-form-urlencoded"}
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")

        self._log("%s %s", method, mask_api_key(url))
        try:
            # One connection per call; nothing is pooled between requests.
            with httpx.Client(
                    timeout=self._cfg.timeout_s,
                    verify=self._cfg.verify_tls,
                    follow_redirects=True,
                    transport=self._cfg.transport,
            ) as client:
                r = client.request(method, url, content=content, headers=headers)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        status = r.status_code
        text = r.text
        self._log("%s %s -> %s", method, path, status)

        if text.strip() == INVALID_API_KEY:
            raise AuthError(status, INVALID_API_KEY, text)

        if shape is ResultShape.STATUS_CODE:
            return int(status)

        self._raise_for_status(method, path, status, text)

        if not text.strip():
            raise DecodeError(status, f"{method} {path} returned an empty body")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(
                status,
                f"{method} {path} returned invalid JSON: {e.msg} at position {e.pos}",
                text[:1000],
            ) from None
        if not isinstance(data, (dict, list)):
            raise DecodeError(
                status,
                f"{method} {path} returned a JSON scalar, expected an object or array",
                text[:1000],
            )
        return data

    @staticmethod
    def _raise_for_status(method: str, path: str, status: int, text: str) -> None:
        if status < 400:
            return
        details = text[:1000] if text else None
        if status == 412:
            raise PreconditionFailedError(status, f"Request failed: {text.strip()}", details)
        known = _STATUS_ERRORS.get(status)
        if known is not None:
            exc_type, msg = known
            raise exc_type(status, msg, details)
        raise ApiError(status, f"{method} {path} failed with {status}", details)
