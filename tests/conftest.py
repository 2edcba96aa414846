import json

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from wallet_rest.auth import Credential
from wallet_rest.client import WalletClient
from wallet_rest.config import Settings

ISSUER_ID = "3388000000022141777"


def make_response(status_code, body=None):
    r = requests.Response()
    r.status_code = status_code
    if body is None:
        r._content = b""
    elif isinstance(body, (dict, list)):
        r._content = json.dumps(body).encode("utf-8")
    else:
        r._content = str(body).encode("utf-8")
    r.encoding = "utf-8"
    return r


class FakeSession:
    """Records requests and answers from a queue of (status, body) or exceptions."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.closed = False

    def request(self, method, url, headers=None, json=None, data=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "json": json, "data": data, "timeout": timeout}
        )
        if not self.replies:
            raise AssertionError(f"unexpected request {method} {url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        return make_response(status, body)

    def close(self):
        self.closed = True


class FakeCredentials:
    def __init__(self, valid=True):
        self.valid = valid
        self.token = "test-token" if valid else None
        self.refreshed = 0

    def refresh(self, request):
        self.refreshed += 1
        self.valid = True
        self.token = "refreshed-token"


@pytest.fixture(scope="session")
def private_key_pem():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def key_info(private_key_pem):
    return {
        "type": "service_account",
        "project_id": "wallet-test",
        "private_key_id": "abc123",
        "private_key": private_key_pem,
        "client_email": "wallet@wallet-test.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture
def key_file(tmp_path, key_info):
    path = tmp_path / "key.json"
    path.write_text(json.dumps(key_info), encoding="utf-8")
    return str(path)


@pytest.fixture
def credential(key_info):
    return Credential.from_info(key_info)


@pytest.fixture
def settings(key_file):
    return Settings(
        key_file_path=key_file,
        issuer_id=ISSUER_ID,
        class_id="test-loyalty-class-id",
        user_id="user name!",
        object_type="loyalty",
    )


@pytest.fixture
def make_client():
    def _make(*replies):
        session = FakeSession(*replies)
        return WalletClient(FakeCredentials(), session=session), session

    return _make
