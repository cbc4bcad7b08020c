from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    BulkConflictError,
    LockTimeoutError,
    NotFoundError,
    ScheduleConflictError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map domain exceptions to JSON responses ``{"message": ...}``."""

    @app.errorhandler(ScheduleConflictError)
    def _schedule_conflict(e: ScheduleConflictError):
        return jsonify({"message": str(e), "conflicts": [c.to_dict() for c in e.conflicts]}), 400

    @app.errorhandler(BulkConflictError)
    def _bulk_conflict(e: BulkConflictError):
        items = [
            {"scheduleId": schedule_id, "conflicts": [c.to_dict() for c in conflicts]}
            for schedule_id, conflicts in e.items
        ]
        return jsonify({"message": str(e), "conflicts": items}), 400

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(LockTimeoutError)
    def _locked(e: LockTimeoutError):
        return jsonify({"message": str(e)}), 409

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code or 500

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error")
        body = {"message": "Internal server error"}
        if app.config.get("DEBUG"):
            body["error"] = f"{type(e).__name__}: {e}"
        return jsonify(body), 500
