"""Google Wallet REST API helpers: classes, objects, save links, issuers."""

from wallet_rest.auth import Credential, authorize, load_credential
from wallet_rest.client import ApiResponse, WalletClient
from wallet_rest.config import Settings
from wallet_rest.errors import ConfigError, CredentialLoadError, HttpError, WalletError
from wallet_rest.ids import make_object_id, sanitize_user_id
from wallet_rest.objects import ObjectOutcome, OutcomeKind, ensure_object
from wallet_rest.save_link import SaveLink, mint_save_link
from wallet_rest.workflow import WalletObjectWorkflow, WorkflowResult

__all__ = [
    "ApiResponse",
    "ConfigError",
    "Credential",
    "CredentialLoadError",
    "HttpError",
    "ObjectOutcome",
    "OutcomeKind",
    "SaveLink",
    "Settings",
    "WalletClient",
    "WalletError",
    "WalletObjectWorkflow",
    "WorkflowResult",
    "authorize",
    "ensure_object",
    "load_credential",
    "make_object_id",
    "mint_save_link",
    "sanitize_user_id",
]
