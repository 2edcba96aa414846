"""
Issuer account management.

Both calls are one-shot: no idempotency, no partial failure handling.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Union

from wallet_rest.client import ApiResponse, WalletClient

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    READER = "READER"
    WRITER = "WRITER"
    OWNER = "OWNER"


@dataclass(frozen=True)
class Permission:
    email_address: str
    role: Union[Role, str]

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role.upper()))

    def to_payload(self) -> Dict[str, str]:
        return {"emailAddress": self.email_address, "role": self.role.value}


def create_issuer(client: WalletClient, name: str, email: str) -> ApiResponse:
    payload = {
        "name": name,
        "contactInfo": {"email": email},
    }
    response = client.post("issuer", payload)
    logger.info("Created issuer %r (%s)", name, response.status_code)
    return response


def update_permissions(
    client: WalletClient, issuer_id: str, permissions: Iterable[Permission]
) -> ApiResponse:
    """
    Replace the permission list of an existing issuer.

    This is a full replacement, not a merge: any account left out of
    `permissions` loses its access. Pass every email address that should
    keep access, including the owners.
    """
    entries: List[Dict[str, Any]] = [p.to_payload() for p in permissions]
    payload = {
        "issuerId": issuer_id,
        "permissions": entries,
    }
    response = client.put(f"permissions/{issuer_id}", payload)
    logger.info("Replaced %d permission(s) on issuer %s", len(entries), issuer_id)
    return response
