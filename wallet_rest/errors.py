from __future__ import annotations

from typing import Any, Optional


class WalletError(RuntimeError):
    pass


class ConfigError(WalletError):
    pass


class CredentialLoadError(WalletError):
    """The service account key file is missing, unreadable or malformed."""


class HttpError(WalletError):
    """
    A Wallet API call failed.

    status_code is None when the request never got a response
    (connection refused, DNS failure, timeout).
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
