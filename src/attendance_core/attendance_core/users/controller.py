from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..extensions import limiter


def register(app: Flask, container: Container) -> None:
    accounts = container.account_service
    gate = container.gate
    limits = container.settings.rate_limits

    @app.route("/api/auth/request-code", methods=["POST"], endpoint="request_login_code")
    @limiter.limit(lambda: limits.get("send_code", "5/minute"))
    def request_login_code():
        data = request.get_json(silent=True) or {}
        result = accounts.request_code(data.get("uid"))
        body = {"success": result.success}
        if result.message:
            body["message"] = result.message
        return jsonify(body), (200 if result.success else 502)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @limiter.limit(lambda: limits.get("login", "10/minute"))
    def login():
        data = request.get_json(silent=True) or {}
        result = accounts.login_with_code(data.get("uid"), data.get("code") or "")
        if not result.verification.success:
            return jsonify(result.verification.to_dict()), 401

        resp = jsonify({"success": True, "role": result.role.value})
        gate.start_session(resp, result.uid, result.role)
        return resp

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        resp = jsonify({"success": True, "message": "Logged out successfully"})
        gate.end_session(resp)
        return resp

    @app.route("/api/auth/session", methods=["GET"], endpoint="current_session")
    def current_session():
        claims = gate.require_auth()
        return jsonify(
            {
                "uid": claims.subject_id,
                "role": claims.role.value,
                "expiresAt": claims.expires_at.isoformat(),
            }
        )

    @app.route("/api/auth/password-reset", methods=["POST"], endpoint="password_reset")
    @limiter.limit(lambda: limits.get("verify_code", "20/minute"))
    def password_reset():
        data = request.get_json(silent=True) or {}
        result = accounts.reset_password(data.get("uid"), data.get("code") or "", data.get("newPassword") or "")
        if not result.success:
            return jsonify(result.to_dict()), 400
        return jsonify({"success": True, "message": "Password updated"})
