from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.insights.gemini_generator import GeminiInsightGenerator
from .analytics.insights.generator import InsightGenerator
from .analytics.insights.requester import InsightRequester
from .analytics.service import DashboardService
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.memory_class_repository import InMemoryClassRepository
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_ALERT_STREAK_THRESHOLD, DEFAULT_CLASS_RANKING_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .schedules.memory_schedule_repository import InMemoryScheduleRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .students.memory_student_repository import InMemoryStudentRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, TeacherService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    schedules_repo: ScheduleRepository

    insight_requester: InsightRequester

    auth_service: AuthService
    teacher_service: TeacherService
    class_service: ClassService
    student_service: StudentService
    attendance_service: AttendanceService
    schedule_service: ScheduleService
    dashboard_service: DashboardService


def build_container(
    *,
    storage: str = "memory",
    db_config: Optional[dict] = None,
    insight_generator: Optional[InsightGenerator] = None,
    insight_settings: Optional[dict] = None,
    alert_threshold: int = DEFAULT_ALERT_STREAK_THRESHOLD,
    ranking_limit: int = DEFAULT_CLASS_RANKING_LIMIT,
) -> Container:
    insight_settings = dict(insight_settings or {})

    conn: Optional[DatabaseConnection] = None
    if storage == "mysql":
        if not db_config:
            raise ValueError("STORAGE=mysql requires DB_CONFIG")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        users_repo = MySQLUserRepository(conn)
        classes_repo = MySQLClassRepository(conn)
        students_repo = MySQLStudentRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        schedules_repo = MySQLScheduleRepository(conn)
    elif storage == "memory":
        users_repo = InMemoryUserRepository()
        classes_repo = InMemoryClassRepository()
        students_repo = InMemoryStudentRepository()
        attendance_repo = InMemoryAttendanceRepository()
        schedules_repo = InMemoryScheduleRepository()
    else:
        raise ValueError(f"Unknown STORAGE backend: {storage}")

    generator = insight_generator or GeminiInsightGenerator(
        api_key=str(insight_settings.get("api_key") or ""),
        model=str(insight_settings.get("model") or "gemini-2.5-flash"),
        endpoint=str(insight_settings.get("endpoint") or "https://generativelanguage.googleapis.com/v1beta"),
        timeout_seconds=float(insight_settings.get("timeout_seconds") or 20),
    )
    insight_requester = InsightRequester(generator, language=str(insight_settings.get("language") or "English"))

    dashboard_service = DashboardService(
        attendance_repo,
        students_repo,
        classes_repo,
        users_repo,
        insight_requester,
        alert_threshold=alert_threshold,
        ranking_limit=ranking_limit,
    )
    auth_service = AuthService(users_repo)
    teacher_service = TeacherService(users_repo, schedules_repo)
    class_service = ClassService(classes_repo, students_repo, schedules_repo)
    student_service = StudentService(
        students_repo,
        classes_repo,
        attendance_repo,
        on_change=dashboard_service.refresh_insight,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        on_change=dashboard_service.refresh_insight,
    )
    schedule_service = ScheduleService(schedules_repo, classes_repo, users_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        insight_requester=insight_requester,
        auth_service=auth_service,
        teacher_service=teacher_service,
        class_service=class_service,
        student_service=student_service,
        attendance_service=attendance_service,
        schedule_service=schedule_service,
        dashboard_service=dashboard_service,
    )
