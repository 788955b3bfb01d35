from __future__ import annotations

import io
import logging
from dataclasses import asdict

from flask import Flask, request, send_file

from ..common.web import (
    capability_required,
    current_role,
    json_error,
    json_ok,
    login_required,
    request_data,
)
from ..container import Container
from ..core.policy import Capability
from .model import Student, StudentDraft
from .spreadsheet import build_template_workbook, read_student_workbook

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def student_to_dict(student: Student) -> dict:
    data = asdict(student)
    data["id"] = data.pop("student_id")
    data["full_name"] = student.full_name
    return data


def register(app: Flask, container: Container) -> None:
    def _ids_from_body():
        ids = request_data().get("ids") or []
        return ids if isinstance(ids, list) else None

    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    @login_required
    def api_students():
        students = container.student_service.list_students(
            class_id=request.args.get("class_id") or None,
            search=request.args.get("q") or None,
        )
        return json_ok(students=[student_to_dict(s) for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="api_students_create")
    @capability_required(Capability.MANAGE_STUDENTS)
    def api_students_create():
        draft = StudentDraft.from_mapping(request_data())
        student = container.student_service.add_student(current_role=current_role(), draft=draft)
        return json_ok(student=student_to_dict(student)), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="api_students_update")
    @capability_required(Capability.MANAGE_STUDENTS)
    def api_students_update(student_id: str):
        draft = StudentDraft.from_mapping(request_data())
        student = container.student_service.update_student(
            current_role=current_role(),
            student_id=student_id,
            draft=draft,
        )
        return json_ok(student=student_to_dict(student))

    @app.route("/api/students/delete-preview", methods=["POST"], endpoint="api_students_delete_preview")
    @capability_required(Capability.MANAGE_STUDENTS)
    def api_students_delete_preview():
        ids = _ids_from_body()
        if ids is None:
            return json_error("ids must be a list", 400)
        impact = container.student_service.preview_deletion(ids)
        return json_ok(
            students=[student_to_dict(s) for s in impact.students],
            attendance_records=impact.attendance_records,
        )

    @app.route("/api/students/delete", methods=["POST"], endpoint="api_students_delete")
    @capability_required(Capability.MANAGE_STUDENTS)
    def api_students_delete():
        ids = _ids_from_body()
        if ids is None:
            return json_error("ids must be a list", 400)
        impact = container.student_service.delete_students(current_role=current_role(), student_ids=ids)
        return json_ok(deleted=len(impact.students), attendance_records_removed=impact.attendance_records)

    @app.route("/api/students/template.xlsx", methods=["GET"], endpoint="api_students_template")
    @capability_required(Capability.IMPORT_STUDENTS)
    def api_students_template():
        content = build_template_workbook(
            container.classes_repo.list_all(),
            school_name=app.config.get("SCHOOL_NAME", ""),
            town=app.config.get("SCHOOL_TOWN", ""),
            school_year=app.config.get("SCHOOL_YEAR", ""),
        )
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="student_lists_template.xlsx",
        )

    @app.route("/api/students/import", methods=["POST"], endpoint="api_students_import")
    @capability_required(Capability.IMPORT_STUDENTS)
    def api_students_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return json_error("Please choose an .xlsx file", 400)

        drafts = read_student_workbook(io.BytesIO(upload.read()), container.classes_repo.list_all())
        result = container.student_service.import_students(current_role=current_role(), drafts=drafts)
        logger.info("workbook imported file=%s imported=%d", upload.filename, result.imported)
        return json_ok(
            imported=result.imported,
            rejected=[{"row": index, "message": message} for index, message in result.rejected],
        )
