from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from google.oauth2 import service_account

from wallet_rest.client import WalletClient
from wallet_rest.config import DEFAULT_TIMEOUT, SCOPES
from wallet_rest.errors import CredentialLoadError

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("client_email", "private_key")


@dataclass(frozen=True)
class Credential:
    """A service account key, as downloaded from the Google Cloud Console."""

    client_email: str
    private_key: str
    private_key_id: Optional[str] = None
    info: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_info(cls, info: Dict[str, Any]) -> "Credential":
        missing = [k for k in _REQUIRED_KEYS if not info.get(k)]
        if missing:
            raise CredentialLoadError(f"Service account key is missing: {', '.join(missing)}")
        return cls(
            client_email=info["client_email"],
            private_key=info["private_key"],
            private_key_id=info.get("private_key_id"),
            info=dict(info),
        )


def load_credential(path: str) -> Credential:
    try:
        with open(path, "r", encoding="utf-8") as f:
            info = json.load(f)
    except FileNotFoundError:
        raise CredentialLoadError(f"Service account keyfile not found: {path}") from None
    except OSError as e:
        raise CredentialLoadError(f"Could not read service account keyfile {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CredentialLoadError(f"Service account keyfile {path} is not valid JSON: {e}") from e

    if not isinstance(info, dict):
        raise CredentialLoadError(f"Service account keyfile {path} must contain a JSON object")

    credential = Credential.from_info(info)
    logger.debug("Loaded service account %s from %s", credential.client_email, path)
    return credential


def authorize(
    credential: Credential,
    scopes: Sequence[str] = SCOPES,
    timeout: float = DEFAULT_TIMEOUT,
) -> WalletClient:
    """Create an authenticated Wallet API client from a loaded credential."""
    try:
        creds = service_account.Credentials.from_service_account_info(
            credential.info, scopes=list(scopes)
        )
    except ValueError as e:
        raise CredentialLoadError(f"Invalid service account key: {e}") from e
    return WalletClient(creds, timeout=timeout)
