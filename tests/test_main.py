import json

import pytest

from wallet_rest import main as cli
from wallet_rest.workflow import WalletObjectWorkflow


@pytest.fixture
def env(monkeypatch, key_file):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", key_file)
    monkeypatch.setenv("WALLET_ISSUER_ID", "3388000000022141777")
    monkeypatch.setenv("WALLET_OBJECT_TYPE", "loyalty")
    monkeypatch.setenv("WALLET_USER_ID", "user name!")
    monkeypatch.delenv("WALLET_CLASS_ID", raising=False)
    monkeypatch.delenv("WALLET_ORIGINS", raising=False)
    monkeypatch.delenv("WALLET_HTTP_TIMEOUT", raising=False)


@pytest.fixture
def fake_client(monkeypatch, make_client):
    def _install(*replies):
        client, session = make_client(*replies)
        monkeypatch.setattr(cli, "authorize", lambda credential, timeout: client)
        monkeypatch.setattr(
            WalletObjectWorkflow,
            "from_settings",
            classmethod(lambda cls, s: cls(client, cli.load_credential(s.key_file_path), s)),
        )
        return session

    return _install


def test_run_prints_save_link(env, fake_client, capsys):
    session = fake_client((200, {"id": "c"}), (200, {"id": "o"}))

    assert cli.main(["run"]) == 0

    out = capsys.readouterr().out
    assert "class POST response:" in out
    assert "object GET or POST response (found):" in out
    assert out.strip().splitlines()[-1].startswith("https://pay.google.com/gp/v/save/")
    assert session.calls[1]["url"].endswith("loyaltyObject/3388000000022141777.user_name_-test-loyalty-class-id")


def test_run_with_payload_files(env, fake_client, tmp_path):
    class_file = tmp_path / "class.json"
    class_file.write_text(json.dumps({"id": "3388000000022141777.beans"}), encoding="utf-8")
    session = fake_client((200, {}), (200, {}))

    assert cli.main(["run", "--class-payload", str(class_file), "--class-id", "beans"]) == 0
    assert session.calls[0]["json"] == {"id": "3388000000022141777.beans"}
    assert session.calls[1]["url"].endswith("-beans")


def test_create_issuer(env, fake_client, capsys):
    session = fake_client((200, {"issuerId": "99"}))

    assert cli.main(["create-issuer", "Coffee", "owner@example.com"]) == 0

    assert session.calls[0]["json"] == {"name": "Coffee", "contactInfo": {"email": "owner@example.com"}}
    assert "issuer POST response:" in capsys.readouterr().out


def test_update_permissions(env, fake_client):
    session = fake_client((200, {}))

    assert cli.main(["update-permissions", "a@example.com:owner", "b@example.com:READER"]) == 0

    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["json"]["permissions"] == [
        {"emailAddress": "a@example.com", "role": "OWNER"},
        {"emailAddress": "b@example.com", "role": "READER"},
    ]


def test_bad_permission_argument_exits(env):
    with pytest.raises(SystemExit):
        cli.main(["update-permissions", "a@example.com:ADMIN"])


def test_http_error_exits_with_status_1(env, fake_client, capsys):
    fake_client((409, {"error": {"code": 409}}))
    assert cli.main(["run"]) == 1
    assert "409" in capsys.readouterr().err


def test_missing_key_file_exits_with_status_1(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "missing.json"))
    assert cli.main(["create-issuer", "n", "e"]) == 1
    assert "not found" in capsys.readouterr().err


def test_run_reports_fetch_failure_and_still_prints_link(env, fake_client, capsys):
    session = fake_client((200, {}), (403, {"error": {"code": 403}}))

    assert cli.main(["run"]) == 0

    captured = capsys.readouterr()
    assert "object GET or POST response (fetch_failed):" in captured.out
    assert captured.out.strip().splitlines()[-1].startswith("https://pay.google.com/gp/v/save/")
    assert "[!]" in captured.err and "403" in captured.err
    assert len(session.calls) == 2
    assert session.closed


def test_create_issuer_closes_client(env, fake_client):
    session = fake_client((500, "boom"))
    assert cli.main(["create-issuer", "Coffee", "owner@example.com"]) == 1
    assert session.closed
