from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import isoformat_utc
from ..common.validators import require_non_empty
from ..core.exceptions import DomainError, NotEligible, RetryExhausted, StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

_STATUS_BY_CODE = {
    ValidationError.code: 400,
    NotEligible.code: 422,
    RetryExhausted.code: 409,
    StoreError.code: 503,
}


def _error(code: str, message: str):
    return jsonify({"error": code, "message": message}), _STATUS_BY_CODE.get(code, 500)


def register(app: Flask, container: Container) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return _error(e.code, str(e))

    def _org_from(value) -> str:
        return require_non_empty(value or current_app.config.get("ORG_ID"), "org")

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/status", methods=["GET"], endpoint="status")
    def status():
        org_id = _org_from(request.args.get("org"))

        try:
            board = container.kiosk_service.board(org_id)
        except DomainError:
            raise
        except Exception:
            # Kiosks keep showing the last board they rendered until a refresh succeeds.
            logger.exception("Unexpected failure loading board for org %s", org_id)
            return _error(StoreError.code, "Attendance service unavailable")

        return jsonify(
            [
                {
                    "employeeId": s.employee_id,
                    "name": s.name,
                    "direction": s.direction.value,
                    "since": isoformat_utc(s.since),
                }
                for s in board
            ]
        )

    @app.route("/toggle", methods=["POST"], endpoint="toggle")
    def toggle():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object body")

        employee_id = require_non_empty(data.get("employeeId"), "employeeId")
        org_id = _org_from(data.get("orgId"))

        try:
            event = container.kiosk_service.toggle(employee_id, org_id)
        except DomainError:
            raise
        except Exception:
            # The store write is the commit point, so the kiosk can simply retry.
            logger.exception("Unexpected failure toggling employee %s", employee_id)
            return _error(StoreError.code, "Attendance service unavailable")

        return (
            jsonify(
                {
                    "employeeId": event.employee_id,
                    "direction": event.direction.value,
                    "createdAt": isoformat_utc(event.created_at),
                }
            ),
            201,
        )
