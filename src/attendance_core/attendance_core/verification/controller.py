from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..extensions import limiter


def register(app: Flask, container: Container) -> None:
    service = container.verification_service
    limits = container.settings.rate_limits

    @app.route("/api/verification/send", methods=["POST"], endpoint="send_verification_code")
    @limiter.limit(lambda: limits.get("send_code", "5/minute"))
    def send_verification_code():
        data = request.get_json(silent=True) or {}
        result = service.issue(data.get("uid"), data.get("email"))
        body = {"success": result.success}
        if result.message:
            body["message"] = result.message
        return jsonify(body), (200 if result.success else 502)

    @app.route("/api/verification/verify", methods=["POST"], endpoint="verify_code")
    @limiter.limit(lambda: limits.get("verify_code", "20/minute"))
    def verify_code():
        data = request.get_json(silent=True) or {}
        result = service.verify(data.get("uid") or "", data.get("code") or "")
        return jsonify(result.to_dict()), (200 if result.success else 400)
