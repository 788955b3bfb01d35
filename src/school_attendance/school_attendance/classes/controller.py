from __future__ import annotations

from flask import Flask

from ..common.web import capability_required, current_role, json_ok, login_required, request_data
from ..container import Container
from ..core.policy import Capability


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    @login_required
    def api_classes():
        classes = [
            {"id": c.class_id, "name": c.name, "student_count": c.student_count}
            for c in container.class_service.list_classes()
        ]
        return json_ok(classes=classes)

    @app.route("/api/classes", methods=["POST"], endpoint="api_classes_create")
    @capability_required(Capability.MANAGE_CLASSES)
    def api_classes_create():
        c = container.class_service.create_class(current_role=current_role(), name=request_data().get("name", ""))
        return json_ok(**{"class": {"id": c.class_id, "name": c.name}}), 201

    @app.route("/api/classes/<class_id>", methods=["PUT"], endpoint="api_classes_update")
    @capability_required(Capability.MANAGE_CLASSES)
    def api_classes_update(class_id: str):
        c = container.class_service.rename_class(
            current_role=current_role(),
            class_id=class_id,
            name=request_data().get("name", ""),
        )
        return json_ok(**{"class": {"id": c.class_id, "name": c.name}})

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="api_classes_delete")
    @capability_required(Capability.MANAGE_CLASSES)
    def api_classes_delete(class_id: str):
        cleared = container.class_service.delete_class(current_role=current_role(), class_id=class_id)
        return json_ok(schedule_items_cleared=cleared)
