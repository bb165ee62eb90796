# web/chat.py
from __future__ import annotations

import logging
import threading
from typing import Callable

from flask import Blueprint, jsonify, request

from runner.orchestrator import augment_text, execute_directives
from runner.registry import Registry
from scribe.session import Session
from scribe.turn import TurnResult

logger = logging.getLogger(__name__)


def create_chat_blueprint(
    *,
    registry: Registry,
    session: Session,
    run_turn: Callable[[str], TurnResult],
) -> Blueprint:
    """
    Build the 'chat' blueprint, wiring in all non-HTTP dependencies via DI.
    """
    bp = Blueprint("chat", __name__)
    # One shared session; requests that touch it run one at a time
    session_lock = threading.Lock()

    @bp.route("/api/chat", methods=["POST"])
    def api_chat():
        """
        One round trip:
          user -> generator -> tool calls -> reply with rendered results.
        """
        data = request.get_json(silent=True) or {}
        message = str(data.get("message") or "").strip()
        if not message:
            return jsonify({"status": "error", "error": "I didn't receive any message."}), 400

        with session_lock:
            result = run_turn(message)
        status_code = 504 if result.status == "timeout" else 200
        return jsonify(result.to_dict()), status_code

    @bp.route("/api/tools", methods=["GET"])
    def api_tools():
        return jsonify({"tools": registry.catalogue()})

    @bp.route("/api/tools/run", methods=["POST"])
    def api_tools_run():
        """
        Execute the directives embedded in caller-supplied text, without
        calling the model.
        """
        data = request.get_json(silent=True) or {}
        text = str(data.get("text") or "")
        with session_lock:
            outcomes = execute_directives(text, registry, session)
        return jsonify(
            {
                "text": augment_text(text, outcomes),
                "results": [o.to_dict() for o in outcomes],
            }
        )

    @bp.route("/api/session", methods=["GET"])
    def api_session():
        with session_lock:
            summary = session.summary()
        return jsonify(summary)

    return bp
