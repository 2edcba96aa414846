from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable

from google.auth import crypt
from google.auth import jwt as google_jwt

from wallet_rest.auth import Credential
from wallet_rest.config import DEFAULT_ORIGINS, SAVE_URL_BASE, check_object_type


@dataclass(frozen=True)
class SaveLink:
    token: str
    url: str


def build_save_claims(
    credential: Credential,
    object_type: str,
    object_id: str,
    origins: Iterable[str] = DEFAULT_ORIGINS,
) -> Dict[str, Any]:
    # No iat/exp: the save link does not expire on our side.
    return {
        "iss": credential.client_email,
        "aud": "google",
        "origins": list(origins),
        "typ": "savetowallet",
        "payload": {
            f"{check_object_type(object_type)}Objects": [{"id": object_id}],
        },
    }


def mint_save_link(
    credential: Credential,
    object_type: str,
    object_id: str,
    origins: Iterable[str] = DEFAULT_ORIGINS,
) -> SaveLink:
    """Sign an RS256 "savetowallet" JWT for the object and build its Save URL."""
    claims = build_save_claims(credential, object_type, object_id, origins)

    signer = crypt.RSASigner.from_string(credential.private_key, key_id=credential.private_key_id)
    signed = google_jwt.encode(signer, claims)
    if isinstance(signed, bytes):
        signed = signed.decode("utf-8")

    return SaveLink(token=signed, url=f"{SAVE_URL_BASE}{signed}")
