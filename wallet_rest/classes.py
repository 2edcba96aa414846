from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from wallet_rest.client import ApiResponse, WalletClient
from wallet_rest.config import check_object_type
from wallet_rest.ids import qualified_class_id

logger = logging.getLogger(__name__)


def class_path(object_type: str) -> str:
    return f"{check_object_type(object_type)}Class/"


def default_class_payload(issuer_id: str, class_id: str) -> Dict[str, Any]:
    return {"id": qualified_class_id(issuer_id, class_id)}


def create_class(client: WalletClient, object_type: str, payload: Mapping[str, Any]) -> ApiResponse:
    """
    POST a new wallet class.

    The server response is returned unchanged. Creating a class that already
    exists is not special-cased: the API answers 409 and HttpError propagates.
    """
    response = client.post(class_path(object_type), dict(payload))
    logger.info("Created %s class %s (%s)", object_type, payload.get("id"), response.status_code)
    return response
