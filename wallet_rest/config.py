from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from wallet_rest.errors import ConfigError

API_BASE = "https://walletobjects.googleapis.com/walletobjects/v1"
SCOPES = ["https://www.googleapis.com/auth/wallet_object.issuer"]
SAVE_URL_BASE = "https://pay.google.com/gp/v/save/"

OBJECT_TYPES = (
    "generic",
    "loyalty",
    "offer",
    "giftCard",
    "eventTicket",
    "flight",
    "transit",
)

DEFAULT_KEYFILE_PATH = "/path/to/key.json"
DEFAULT_ISSUER_ID = "issuer-id"
DEFAULT_USER_ID = "user-id"
DEFAULT_OBJECT_TYPE = "generic"
DEFAULT_ORIGINS = ("www.example.com",)
DEFAULT_TIMEOUT = 30.0


def default_class_id(object_type: str) -> str:
    return f"test-{object_type}-class-id"


def check_object_type(object_type: str) -> str:
    if object_type not in OBJECT_TYPES:
        raise ConfigError(
            f"Unknown object type {object_type!r}, expected one of: {', '.join(OBJECT_TYPES)}"
        )
    return object_type


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the wallet workflow.

    Every value has a literal default so the template runs end to end once
    a real key file and issuer ID are supplied:
      - key_file_path: GOOGLE_APPLICATION_CREDENTIALS
      - issuer_id:     WALLET_ISSUER_ID
      - class_id:      WALLET_CLASS_ID (default: test-<object_type>-class-id)
      - user_id:       WALLET_USER_ID, e.g. an email address
      - object_type:   WALLET_OBJECT_TYPE
      - origins:       WALLET_ORIGINS, comma separated
      - timeout:       WALLET_HTTP_TIMEOUT, seconds per request
    """

    key_file_path: str = DEFAULT_KEYFILE_PATH
    issuer_id: str = DEFAULT_ISSUER_ID
    class_id: str = default_class_id(DEFAULT_OBJECT_TYPE)
    user_id: str = DEFAULT_USER_ID
    object_type: str = DEFAULT_OBJECT_TYPE
    origins: Tuple[str, ...] = field(default=DEFAULT_ORIGINS)
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        object_type = check_object_type(env.get("WALLET_OBJECT_TYPE") or DEFAULT_OBJECT_TYPE)

        raw_origins = env.get("WALLET_ORIGINS")
        if raw_origins:
            origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())
        else:
            origins = DEFAULT_ORIGINS

        raw_timeout = env.get("WALLET_HTTP_TIMEOUT") or str(DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"WALLET_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if not timeout > 0:
            raise ConfigError(f"WALLET_HTTP_TIMEOUT must be greater than 0, got {raw_timeout!r}")

        return cls(
            key_file_path=env.get("GOOGLE_APPLICATION_CREDENTIALS") or DEFAULT_KEYFILE_PATH,
            issuer_id=env.get("WALLET_ISSUER_ID") or DEFAULT_ISSUER_ID,
            class_id=env.get("WALLET_CLASS_ID") or default_class_id(object_type),
            user_id=env.get("WALLET_USER_ID") or DEFAULT_USER_ID,
            object_type=object_type,
            origins=origins,
            timeout=timeout,
        )

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the non-None values in `changes` applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "object_type" in changes:
            check_object_type(changes["object_type"])
            if "class_id" not in changes and self.class_id == default_class_id(self.object_type):
                changes["class_id"] = default_class_id(changes["object_type"])
        return replace(self, **changes)
