from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from wallet_rest.client import ApiResponse, WalletClient
from wallet_rest.config import check_object_type
from wallet_rest.errors import HttpError
from wallet_rest.ids import qualified_class_id

logger = logging.getLogger(__name__)


class OutcomeKind(str, enum.Enum):
    FOUND = "found"
    CREATED = "created"
    FETCH_FAILED = "fetch_failed"


@dataclass(frozen=True)
class ObjectOutcome:
    kind: OutcomeKind
    response: Optional[ApiResponse] = None
    error: Optional[HttpError] = None

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FETCH_FAILED

    @property
    def data(self) -> Any:
        if self.response is not None:
            return self.response.data
        return self.error.body if self.error is not None else None


def object_path(object_type: str) -> str:
    return f"{check_object_type(object_type)}Object/"


def default_object_payload(issuer_id: str, class_id: str, object_id: str) -> Dict[str, Any]:
    return {
        "id": object_id,
        "classId": qualified_class_id(issuer_id, class_id),
        "state": "ACTIVE",
    }


def ensure_object(
    client: WalletClient,
    object_type: str,
    object_id: str,
    payload: Mapping[str, Any],
) -> ObjectOutcome:
    """
    Get the object by ID, creating it if the API says it does not exist.

    - 2xx on GET: FOUND, no create request is sent.
    - 404 on GET: the payload is POSTed once, CREATED. A failing POST raises.
    - anything else on GET: FETCH_FAILED carrying the HttpError.
    """
    path = object_path(object_type)
    try:
        found = client.get(f"{path}{object_id}")
    except HttpError as e:
        if not e.is_not_found:
            logger.warning("Fetching %s object %s failed: %s", object_type, object_id, e)
            return ObjectOutcome(OutcomeKind.FETCH_FAILED, error=e)
    else:
        logger.info("%s object %s already exists", object_type, object_id)
        return ObjectOutcome(OutcomeKind.FOUND, response=found)

    # Object does not yet exist
    created = client.post(path, dict(payload))
    logger.info("Created %s object %s (%s)", object_type, object_id, created.status_code)
    return ObjectOutcome(OutcomeKind.CREATED, response=created)
