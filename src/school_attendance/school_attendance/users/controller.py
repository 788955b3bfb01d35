from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.web import (
    capability_required,
    current_role,
    json_error,
    json_ok,
    login_required,
    request_data,
)
from ..container import Container
from ..core.policy import Capability, can
from .model import User

logger = logging.getLogger(__name__)


def teacher_to_dict(user: User, *, assigned_sessions: int | None = None) -> dict:
    data = {"id": user.user_id, "name": user.name, "role": user.role.value, "subject": user.subject}
    if assigned_sessions is not None:
        data["assigned_sessions"] = assigned_sessions
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()
        s_user = container.auth_service.login_as(str(data.get("role", "")))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["subject"] = s_user.subject

        logger.info("login role=%s user=%s", s_user.role.value, s_user.user_id)
        return json_ok(user=_session_user())

    @app.route("/logout", methods=["POST", "GET"], endpoint="logout")
    def logout():
        session.clear()
        return json_ok()

    def _session_user() -> dict:
        role = current_role()
        return {
            "id": session.get("user_id"),
            "name": session.get("name"),
            "role": role.value if role else None,
            "subject": session.get("subject"),
            "capabilities": [c.value for c in Capability if can(role, c)],
        }

    @app.route("/api/me", endpoint="api_me")
    @login_required
    def api_me():
        return json_ok(user=_session_user())

    @app.route("/api/teachers", methods=["GET"], endpoint="api_teachers")
    @capability_required(Capability.MANAGE_TEACHERS)
    def api_teachers():
        svc = container.teacher_service
        teachers = [teacher_to_dict(t, assigned_sessions=svc.assigned_sessions(t.user_id)) for t in svc.list_teachers()]
        return json_ok(teachers=teachers)

    @app.route("/api/teachers", methods=["POST"], endpoint="api_teachers_create")
    @capability_required(Capability.MANAGE_TEACHERS)
    def api_teachers_create():
        data = request_data()
        teacher = container.teacher_service.create_teacher(
            current_role=current_role(),
            name=data.get("name", ""),
            subject=data.get("subject", ""),
        )
        return json_ok(teacher=teacher_to_dict(teacher)), 201

    @app.route("/api/teachers/<teacher_id>", methods=["PUT"], endpoint="api_teachers_update")
    @capability_required(Capability.MANAGE_TEACHERS)
    def api_teachers_update(teacher_id: str):
        data = request_data()
        teacher = container.teacher_service.update_teacher(
            current_role=current_role(),
            teacher_id=teacher_id,
            name=data.get("name", ""),
            subject=data.get("subject", ""),
        )
        return json_ok(teacher=teacher_to_dict(teacher))

    @app.route("/api/teachers/delete-preview", methods=["POST"], endpoint="api_teachers_delete_preview")
    @capability_required(Capability.MANAGE_TEACHERS)
    def api_teachers_delete_preview():
        ids = request_data().get("ids") or []
        if not isinstance(ids, list):
            return json_error("ids must be a list", 400)
        impact = container.teacher_service.preview_deletion(ids)
        return json_ok(
            teachers=[teacher_to_dict(t) for t in impact.teachers],
            schedule_items=impact.schedule_items,
        )

    @app.route("/api/teachers/delete", methods=["POST"], endpoint="api_teachers_delete")
    @capability_required(Capability.MANAGE_TEACHERS)
    def api_teachers_delete():
        ids = request_data().get("ids") or []
        if not isinstance(ids, list):
            return json_error("ids must be a list", 400)
        impact = container.teacher_service.delete_teachers(current_role=current_role(), teacher_ids=ids)
        return json_ok(deleted=len(impact.teachers), schedule_items_cleared=impact.schedule_items)
