# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, jsonify

from credential_service.shared.logging import logger


class MiscController:
    def __init__(self, *, check_database: Callable[[], bool] | None = None) -> None:
        self._check_database = check_database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        if self._check_database is None:
            status["database"] = "disabled"
            return jsonify(status)
        try:
            self._check_database()
            status["database"] = "ok"
        except Exception as exc:
            logger.error(f"health: database check failed ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status)
