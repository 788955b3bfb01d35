from __future__ import annotations

from typing import Optional

from flask import Flask

from ..common.web import capability_required, current_role, json_ok, login_required, request_data
from ..container import Container
from ..core.policy import Capability
from ..sessions.catalog import list_sessions
from .model import ScheduleItem


def item_to_dict(item: Optional[ScheduleItem], teacher_names: dict[str, str]) -> Optional[dict]:
    if item is None:
        return None
    return {
        "id": item.item_id,
        "class_id": item.class_id,
        "teacher_id": item.teacher_id,
        "teacher_name": teacher_names.get(item.teacher_id, ""),
        "day": item.day,
        "session_id": item.session_id,
        "room": item.room,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["GET"], endpoint="api_sessions")
    @login_required
    def api_sessions():
        sessions = [
            {"id": s.session_id, "start": s.start_time, "end": s.end_time, "morning": s.is_morning, "label": s.label}
            for s in list_sessions()
        ]
        return json_ok(sessions=sessions)

    @app.route("/api/schedule/<class_id>", methods=["GET"], endpoint="api_schedule")
    @login_required
    def api_schedule(class_id: str):
        grid = container.schedule_service.grid_for_class(class_id)
        names = {t.user_id: t.name for t in container.teacher_service.list_teachers()}
        payload = {
            day: {str(sid): item_to_dict(item, names) for sid, item in slots.items()}
            for day, slots in grid.items()
        }
        return json_ok(class_id=class_id, grid=payload)

    @app.route("/api/schedule/<class_id>", methods=["POST"], endpoint="api_schedule_assign")
    @capability_required(Capability.MANAGE_SCHEDULE)
    def api_schedule_assign(class_id: str):
        data = request_data()
        item = container.schedule_service.assign(
            current_role=current_role(),
            class_id=class_id,
            day=data.get("day"),
            session_id=data.get("session_id"),
            teacher_id=data.get("teacher_id"),
            room=data.get("room"),
        )
        names = {t.user_id: t.name for t in container.teacher_service.list_teachers()}
        return json_ok(item=item_to_dict(item, names))

    @app.route("/api/schedule/<class_id>", methods=["DELETE"], endpoint="api_schedule_clear")
    @capability_required(Capability.MANAGE_SCHEDULE)
    def api_schedule_clear(class_id: str):
        data = request_data()
        removed = container.schedule_service.clear(
            current_role=current_role(),
            class_id=class_id,
            day=data.get("day"),
            session_id=data.get("session_id"),
        )
        return json_ok(removed=removed)
