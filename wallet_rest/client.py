from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request

from wallet_rest.config import API_BASE, DEFAULT_TIMEOUT
from wallet_rest.errors import HttpError

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    data: Any = None


def _decode_body(r: requests.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


class WalletClient:
    """
    Thin authenticated wrapper around the Wallet REST API.

    Every call is sent once, with the bearer token from the service account
    credentials. Non-2xx responses and transport failures raise HttpError.
    """

    def __init__(
        self,
        credentials,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        api_base: str = API_BASE,
    ) -> None:
        self._credentials = credentials
        self._session = session or requests.Session()
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.api_base}/{path.lstrip('/')}"

    def _access_token(self) -> str:
        if not self._credentials.valid:
            try:
                self._credentials.refresh(
                    functools.partial(Request(self._session), timeout=self.timeout)
                )
            except google_auth_exceptions.GoogleAuthError as e:
                raise HttpError(
                    f"Access token refresh failed: {e}",
                    method="POST",
                    url=TOKEN_URI,
                ) from e
        return self._credentials.token

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token()}",
            "Content-Type": "application/json",
        }

    def request(self, method: str, path: str, payload: Optional[Any] = None) -> ApiResponse:
        url = self.url(path)
        headers = self._headers()
        logger.debug("%s %s", method, url)
        try:
            r = self._session.request(
                method,
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise HttpError(f"{method} {url} failed: {e}", method=method, url=url) from e

        body = _decode_body(r)
        if not 200 <= r.status_code < 300:
            raise HttpError(
                f"{method} {url} failed {r.status_code}: {r.text[:2000]}",
                method=method,
                url=url,
                status_code=r.status_code,
                body=body,
            )
        logger.debug("%s %s -> %s", method, url, r.status_code)
        return ApiResponse(status_code=r.status_code, data=body)

    def get(self, path: str) -> ApiResponse:
        return self.request("GET", path)

    def post(self, path: str, payload: Any) -> ApiResponse:
        return self.request("POST", path, payload)

    def put(self, path: str, payload: Any) -> ApiResponse:
        return self.request("PUT", path, payload)

    def close(self) -> None:
        self._session.close()
