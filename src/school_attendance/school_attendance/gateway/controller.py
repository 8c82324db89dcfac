from __future__ import annotations

import csv
import io
import logging
from datetime import date, timedelta
from functools import wraps

from flask import Flask, g, jsonify, request, session
from werkzeug.utils import secure_filename

from ..access.identity import caller_from_session
from ..common.datetime_utils import coerce_date
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import ErrorKind
from ..core.exceptions import DomainError
from ..container import Container
from .result import GatewayResult

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    ErrorKind.AUTHORIZATION_DENIED: 403,
    ErrorKind.UNKNOWN_STUDENT_IN_CLASS: 422,
    ErrorKind.INVALID_DATE: 400,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.STORE_UNAVAILABLE: 503,
}

_REPORT_FIELDS = [
    "student_id",
    "student_name",
    "total_days",
    "present",
    "absent",
    "late",
    "excused",
    "attendance_rate",
    "standing",
]


def register(app: Flask, container: Container) -> None:
    gateway = container.ledger_gateway

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            caller = caller_from_session(session)
            if caller is None:
                return jsonify({"success": False, "error": "unauthenticated", "message": "Please sign in"}), 401
            g.caller = caller
            return view(*args, **kwargs)

        return wrapper

    def _failure(result: GatewayResult):
        return jsonify(result.error_dict()), _STATUS_BY_ERROR.get(result.error, 400)

    def _invalid_request(message: str):
        return jsonify({
            "success": False,
            "error": ErrorKind.INVALID_REQUEST.value,
            "message": message,
            "retryable": False,
        }), 400

    def _respond(result: GatewayResult, to_json):
        if not result.ok:
            return _failure(result)
        return jsonify(to_json(result.data)), 200

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return _failure(GatewayResult.failure(exc))

    @app.route("/api/attendance", methods=["GET"], endpoint="get_attendance")
    @login_required
    def get_attendance():
        result = gateway.get_attendance(g.caller, request.args.get("classId", ""), request.args.get("date"))
        return _respond(result, lambda data: {sid: status.value for sid, status in data.items()})

    @app.route("/api/attendance", methods=["POST"], endpoint="save_attendance")
    @login_required
    def save_attendance():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return _invalid_request("Request body must be a JSON object")

        records = body.get("records") or {}
        if not isinstance(records, dict):
            return _invalid_request("records must be an object of studentId -> status")

        clear = body.get("clear", False)
        if not isinstance(clear, bool):
            return _invalid_request("clear must be true or false")
        # An empty submission wipes the day, so the client has to ask for it.
        if not records and not clear:
            return _invalid_request("No attendance submitted; send clear: true to clear the day")
        if records and clear:
            return _invalid_request("Cannot clear the day and submit records in the same request")

        # markedBy in the body is ignored: the marker is always the signed-in caller.
        result = gateway.save_attendance(
            g.caller,
            str(body.get("classId") or ""),
            body.get("date"),
            records,
        )
        return _respond(result, lambda data: {"success": True, **data.to_dict()})

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="get_student_attendance")
    @login_required
    def get_student_attendance(student_id: str):
        result = gateway.get_student_attendance(
            g.caller,
            student_id,
            start=request.args.get("start"),
            end=request.args.get("end"),
        )
        return _respond(result, lambda data: [r.to_dict() for r in data])

    @app.route("/api/attendance/student/<student_id>/summary", methods=["GET"], endpoint="get_student_summary")
    @login_required
    def get_student_summary(student_id: str):
        result = gateway.get_student_summary(
            g.caller,
            student_id,
            start=request.args.get("start"),
            end=request.args.get("end"),
        )
        return _respond(result, lambda data: data.to_dict())

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="get_class_summary")
    @login_required
    def get_class_summary():
        result = gateway.get_class_summary(g.caller, request.args.get("classId", ""), request.args.get("date"))
        return _respond(result, lambda data: data.to_dict())

    @app.route("/api/attendance/dashboard", methods=["GET"], endpoint="attendance_dashboard")
    @login_required
    def attendance_dashboard():
        on_date = request.args.get("date") or date.today().isoformat()
        return _respond(gateway.get_dashboard(g.caller, on_date), lambda data: data)

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    @login_required
    def attendance_report_csv():
        today = date.today()
        end = coerce_date(request.args.get("end") or today.isoformat())
        start = coerce_date(request.args.get("start") or (end - timedelta(days=DEFAULT_REPORT_DAYS)).isoformat())
        class_id = request.args.get("classId", "")

        result = gateway.export_class_report(g.caller, class_id, start, end)
        if not result.ok:
            return _failure(result)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_REPORT_FIELDS)
        writer.writeheader()
        for row in result.data.rows:
            writer.writerow(row)

        filename = secure_filename(
            f"attendance_{class_id}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        )
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
