from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.whitelist_service
    gate = container.gate

    @app.route("/api/whitelist/check", methods=["POST"], endpoint="whitelist_check")
    def whitelist_check():
        data = request.get_json(silent=True) or {}
        result = service.check_whitelist(data.get("studentId"), data.get("fullName", ""))
        body = {"allowed": result.allowed}
        if result.name:
            body["name"] = result.name
        if result.error:
            body["error"] = result.error
        return jsonify(body)

    @app.route("/api/whitelist", methods=["GET"], endpoint="whitelist_list")
    def whitelist_list():
        entries = service.list_entries(gate.current_session())
        return jsonify(
            {
                "success": True,
                "entries": [{"id": e.identity_id, "name": e.display_name} for e in entries],
            }
        )

    @app.route("/api/whitelist", methods=["POST"], endpoint="whitelist_add")
    def whitelist_add():
        data = request.get_json(silent=True) or {}
        count = service.add_entries(gate.current_session(), data.get("entries"), actor_name=data.get("actorName"))
        return jsonify({"success": True, "message": f"Successfully whitelisted {count} students"})

    @app.route("/api/whitelist", methods=["DELETE"], endpoint="whitelist_delete")
    def whitelist_delete():
        data = request.get_json(silent=True) or {}
        ids = data.get("ids")
        service.delete_entries(gate.current_session(), ids, actor_name=data.get("actorName"))
        return jsonify({"success": True, "message": f"Successfully removed {len(ids)} IDs"})

    @app.route("/api/whitelist", methods=["PATCH"], endpoint="whitelist_update")
    def whitelist_update():
        data = request.get_json(silent=True) or {}
        service.update_entry(
            gate.current_session(),
            data.get("oldId"),
            new_id=data.get("newId"),
            name=data.get("name"),
            actor_name=data.get("actorName"),
        )
        return jsonify({"success": True, "message": "Successfully updated entry"})
