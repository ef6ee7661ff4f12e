from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, write_result
from ..container import Container


def register(app: Flask, container: Container) -> None:
    coordinator = container.coordinator
    auth = container.auth_service

    @app.route("/api/status", methods=["GET"], endpoint="status")
    def status():
        user = auth.current_user()
        if not auth.validate_session():
            coordinator.notices.error(f'Employee "{user.name}" was removed from the system.')
            user = None

        return jsonify(
            {
                "status": coordinator.status.value,
                "method": coordinator.method.value,
                "roster": coordinator.roster,
                "current_user": user.to_dict() if user else None,
                "notices": [notice.to_dict() for notice in coordinator.notices.recent],
            }
        )

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        return jsonify({"employees": coordinator.roster})

    @app.route("/api/employees", methods=["POST"], endpoint="employees_add")
    async def employees_add():
        auth.require_admin()
        ok = await coordinator.add_employee(str(json_body().get("name", "")))
        return write_result(container, ok, employees=coordinator.roster)

    @app.route("/api/employees/<name>", methods=["DELETE"], endpoint="employees_remove")
    async def employees_remove(name: str):
        auth.require_admin()
        ok = await coordinator.remove_employee(name)
        return write_result(container, ok, employees=coordinator.roster)

    @app.route("/api/session/admin", methods=["POST"], endpoint="login_admin")
    def login_admin():
        user = auth.login_admin(str(json_body().get("passphrase", "")))
        return jsonify({"ok": True, "user": user.to_dict()})

    @app.route("/api/session/employee", methods=["POST"], endpoint="identify_employee")
    def identify_employee():
        user = auth.identify_employee(str(json_body().get("name", "")))
        return jsonify({"ok": True, "user": user.to_dict()})

    @app.route("/api/session", methods=["DELETE"], endpoint="logout")
    def logout():
        auth.logout()
        return jsonify({"ok": True})

    @app.route("/api/admin/passphrase", methods=["PUT"], endpoint="change_passphrase")
    async def change_passphrase():
        auth.require_admin()
        ok = await container.attendance_service.change_admin_passphrase(str(json_body().get("passphrase", "")))
        return write_result(container, ok)
