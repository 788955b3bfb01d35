from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..common.web import capability_required, json_ok
from ..container import Container
from ..core.policy import Capability


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @capability_required(Capability.VIEW_DASHBOARD)
    def api_dashboard():
        snap = container.dashboard_service.snapshot()
        return json_ok(
            counts=container.dashboard_service.counts(),
            attendance_rate=snap.attendance_rate,
            unique_absences=snap.unique_absences,
            unique_lates=snap.unique_lates,
            class_ranking=[asdict(c) for c in snap.class_ranking],
            alerts=[asdict(a) for a in snap.alerts],
        )

    @app.route("/api/dashboard/insight", methods=["GET"], endpoint="api_dashboard_insight")
    @capability_required(Capability.VIEW_DASHBOARD)
    def api_dashboard_insight():
        view = container.dashboard_service.insight()
        return json_ok(text=view.text, loading=view.loading)

    @app.route("/api/dashboard/insight", methods=["POST"], endpoint="api_dashboard_insight_refresh")
    @capability_required(Capability.VIEW_DASHBOARD)
    def api_dashboard_insight_refresh():
        container.dashboard_service.refresh_insight()
        view = container.dashboard_service.insight()
        return json_ok(text=view.text, loading=view.loading)
