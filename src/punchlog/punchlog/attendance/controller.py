from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, parse_date_arg, parse_instant_arg, parse_time_arg, write_result
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    service = container.attendance_service

    def _target_employee(body: dict) -> str:
        """Employees act for themselves; the admin may act for anyone."""
        user = auth.require_user()
        if user.is_admin:
            return str(body.get("employee", ""))
        requested = body.get("employee")
        if requested and requested != user.name:
            raise AuthorizationError("You can only record your own attendance")
        return user.name

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    async def checkin():
        ok = await service.check_in(_target_employee(json_body()))
        return write_result(container, ok)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    async def checkout():
        ok = await service.check_out(_target_employee(json_body()))
        return write_result(container, ok)

    @app.route("/api/attendance/retro", methods=["POST"], endpoint="retro_shift")
    async def retro_shift():
        auth.require_admin()
        body = json_body()
        if not all(body.get(k) for k in ("employee", "date", "checkin", "checkout")):
            raise ValidationError("Please fill in all fields")

        ok = await service.add_retro_shift(
            str(body["employee"]),
            work_date=parse_date_arg(str(body["date"]), default=None),
            checkin_time=parse_time_arg(body["checkin"], "Check-in time"),
            checkout_time=parse_time_arg(body["checkout"], "Check-out time"),
        )
        return write_result(container, ok)

    @app.route("/api/attendance/cancel", methods=["POST"], endpoint="cancel_shift")
    async def cancel_shift():
        auth.require_admin()
        body = json_body()
        ok = await service.cancel_shift(str(body.get("employee", "")), parse_instant_arg(body.get("checkin"), "checkin"))
        return write_result(container, ok)

    @app.route("/api/wages", methods=["GET"], endpoint="wages_get")
    def wages_get():
        auth.require_admin()
        return jsonify({"wages": service.get_wages()})

    @app.route("/api/wages", methods=["PUT"], endpoint="wages_put")
    def wages_put():
        auth.require_admin()
        body = json_body()
        wages = body.get("wages")
        if not isinstance(wages, dict):
            raise ValidationError("wages must be an object of employee -> hourly wage")
        return jsonify({"ok": True, "wages": service.save_wages(wages)})
