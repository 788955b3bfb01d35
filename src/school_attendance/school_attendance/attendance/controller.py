from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.datetime_utils import format_iso_date, today_local
from ..common.web import (
    capability_required,
    current_role,
    current_user_id,
    json_ok,
    request_data,
)
from ..container import Container
from ..core.constants import ADMIN_USER_ID, ADMIN_USER_NAME
from ..core.policy import Capability
from ..students.controller import XLSX_MIMETYPE, student_to_dict
from .export import build_register_workbook
from .model import AttendanceRecord


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "student_id": record.student_id,
        "date": format_iso_date(record.date),
        "session_id": record.session_id,
        "status": record.status.value,
        "marked_by": record.marked_by,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @capability_required(Capability.MARK_ATTENDANCE)
    def api_attendance():
        att_date = request.args.get("date") or format_iso_date(today_local())
        rows = container.attendance_service.roster(
            class_id=request.args.get("class_id", ""),
            att_date=att_date,
            session_id=request.args.get("session_id", ""),
        )
        roster = [
            {"student": student_to_dict(r.student), "status": r.status.value, "marked": r.marked}
            for r in rows
        ]
        return json_ok(date=att_date, roster=roster)

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_mark")
    @capability_required(Capability.MARK_ATTENDANCE)
    def api_attendance_mark():
        data = request_data()
        record = container.attendance_service.mark(
            current_role=current_role(),
            current_user_id=current_user_id(),
            student_id=str(data.get("student_id", "")),
            att_date=data.get("date") or today_local(),
            session_id=data.get("session_id"),
            status=str(data.get("status", "")),
        )
        return json_ok(record=record_to_dict(record))

    @app.route("/api/attendance/register.xlsx", methods=["GET"], endpoint="api_attendance_register")
    @capability_required(Capability.VIEW_DASHBOARD)
    def api_attendance_register():
        names = {t.user_id: t.name for t in container.teacher_service.list_teachers()}
        names[ADMIN_USER_ID] = ADMIN_USER_NAME
        content = build_register_workbook(
            container.attendance_service.list_records(),
            container.students_repo.list_all(),
            container.classes_repo.list_all(),
            teacher_names=names,
        )
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"attendance_register_{format_iso_date(today_local())}.xlsx",
        )
