from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask, current_app, jsonify, request

from wallet_rest.config import Settings
from wallet_rest.errors import WalletError
from wallet_rest.ids import make_object_id
from wallet_rest.objects import OutcomeKind
from wallet_rest.workflow import WalletObjectWorkflow

logger = logging.getLogger(__name__)


def _workflow() -> WalletObjectWorkflow:
    # The key file is read on first use, not at import time.
    workflow = current_app.extensions.get("wallet_workflow")
    if workflow is None:
        workflow = WalletObjectWorkflow.from_settings(current_app.config["WALLET_SETTINGS"])
        current_app.extensions["wallet_workflow"] = workflow
    return workflow


def create_app(
    settings: Optional[Settings] = None,
    workflow: Optional[WalletObjectWorkflow] = None,
) -> Flask:
    app = Flask(__name__)
    app.config["WALLET_SETTINGS"] = settings or (workflow.settings if workflow else Settings.from_env())
    if workflow is not None:
        app.extensions["wallet_workflow"] = workflow

    @app.get("/health")
    def health():
        return jsonify(ok=True)

    @app.post("/issue")
    def issue():
        """
        Get or create the user's object and return a Save URL.

        Accepts JSON:
          - user_id (required), e.g. an email address
          - object_payload (optional; defaults to a minimal ACTIVE object)
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        user_id = data.get("user_id") or ""
        if not isinstance(user_id, str):
            return jsonify(ok=False, error="user_id must be a string"), 400
        user_id = user_id.strip()
        if not user_id:
            return jsonify(ok=False, error="missing user_id"), 400
        object_payload = data.get("object_payload")
        if object_payload is not None and not isinstance(object_payload, dict):
            return jsonify(ok=False, error="object_payload must be an object"), 400

        try:
            workflow = _workflow()
            s = workflow.settings
            object_id = make_object_id(s.issuer_id, user_id, s.class_id)

            outcome = workflow.ensure_user_object(object_id, object_payload)
            if outcome.kind is OutcomeKind.FETCH_FAILED:
                return (
                    jsonify(
                        ok=False,
                        object_id=object_id,
                        outcome=outcome.kind.value,
                        status=outcome.error.status_code,
                        error=str(outcome.error),
                    ),
                    502,
                )

            save_link = workflow.mint(object_id)
        except WalletError as e:
            logger.exception("Issuing a save link for %s failed", user_id)
            return jsonify(ok=False, error=str(e)), 500

        return jsonify(
            ok=True,
            object_id=object_id,
            outcome=outcome.kind.value,
            save_url=save_link.url,
        )

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "8080"))
    create_app().run(host="0.0.0.0", port=port)
