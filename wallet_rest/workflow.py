from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from wallet_rest.auth import Credential, authorize, load_credential
from wallet_rest.classes import create_class, default_class_payload
from wallet_rest.client import ApiResponse, WalletClient
from wallet_rest.config import Settings
from wallet_rest.ids import make_object_id
from wallet_rest.objects import ObjectOutcome, default_object_payload, ensure_object
from wallet_rest.save_link import SaveLink, mint_save_link

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkflowResult:
    object_id: str
    class_response: ApiResponse
    object_outcome: ObjectOutcome
    save_link: SaveLink


class WalletObjectWorkflow:
    """
    Create a class, get or create the user's object, then mint a Save link.

    The steps always run in that order and each call finishes before the
    next one starts.
    """

    def __init__(self, client: WalletClient, credential: Credential, settings: Settings) -> None:
        self.client = client
        self.credential = credential
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "WalletObjectWorkflow":
        credential = load_credential(settings.key_file_path)
        client = authorize(credential, timeout=settings.timeout)
        return cls(client, credential, settings)

    @property
    def object_id(self) -> str:
        s = self.settings
        return make_object_id(s.issuer_id, s.user_id, s.class_id)

    def ensure_user_object(
        self, object_id: str, object_payload: Optional[Mapping[str, Any]] = None
    ) -> ObjectOutcome:
        s = self.settings
        if object_payload is None:
            object_payload = default_object_payload(s.issuer_id, s.class_id, object_id)
        return ensure_object(self.client, s.object_type, object_id, object_payload)

    def mint(self, object_id: str) -> SaveLink:
        s = self.settings
        return mint_save_link(self.credential, s.object_type, object_id, s.origins)

    def run(
        self,
        class_payload: Optional[Mapping[str, Any]] = None,
        object_payload: Optional[Mapping[str, Any]] = None,
    ) -> WorkflowResult:
        s = self.settings
        object_id = self.object_id

        if class_payload is None:
            class_payload = default_class_payload(s.issuer_id, s.class_id)
        class_response = create_class(self.client, s.object_type, class_payload)

        outcome = self.ensure_user_object(object_id, object_payload)
        save_link = self.mint(object_id)
        logger.info("Minted save link for %s (object %s)", object_id, outcome.kind.value)

        return WorkflowResult(
            object_id=object_id,
            class_response=class_response,
            object_outcome=outcome,
            save_link=save_link,
        )
