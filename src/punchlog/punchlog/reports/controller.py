from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import now_utc
from ..common.web import json_body, parse_date_arg
from ..container import Container
from ..core.enums import CalculationMethod, Granularity
from ..core.exceptions import AuthorizationError, ValidationError
from .csv_export import render_report_csv, report_filename
from .window import can_advance


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    coordinator = container.coordinator
    reports = container.report_service

    def _build(employee: str):
        user = auth.require_user()
        if not user.is_admin and user.name != employee:
            raise AuthorizationError("You can only view your own report")

        try:
            granularity = Granularity(request.args.get("granularity", Granularity.MONTH.value))
        except ValueError:
            raise ValidationError("granularity must be day, week or month")

        today = now_utc().astimezone(container.tz).date()
        reference = parse_date_arg(request.args.get("date"), default=today)
        return reports.build_report(employee=employee, reference=reference, granularity=granularity), today

    @app.route("/api/reports/<employee>", methods=["GET"], endpoint="report")
    def report(employee: str):
        data, today = _build(employee)
        body = reports.to_dict(data)
        body["can_advance"] = can_advance(data.reference, data.granularity, today)
        return jsonify(body)

    @app.route("/api/reports/<employee>/export.csv", methods=["GET"], endpoint="report_csv")
    def report_csv(employee: str):
        data, _ = _build(employee)
        text = render_report_csv(data, tz=container.tz, currency=container.currency)
        return send_file(
            io.BytesIO(text.encode("utf-8")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=report_filename(data),
        )

    @app.route("/api/settings/calculation-method", methods=["PUT"], endpoint="calculation_method")
    def calculation_method():
        auth.require_admin()
        try:
            method = CalculationMethod(str(json_body().get("method", "")))
        except ValueError:
            raise ValidationError("method must be first_last or pairs")
        coordinator.set_calculation_method(method)
        return jsonify({"ok": True, "method": coordinator.method.value, "status": coordinator.status.value})
