# web/health.py
from __future__ import annotations

from flask import Blueprint, jsonify

from runner.registry import Registry


def create_health_blueprint(registry: Registry) -> Blueprint:
    bp = Blueprint("health", __name__)

    @bp.route("/api/ping")
    def ping():
        return jsonify({"status": "ok", "tools": len(registry)})

    return bp
