"""Example: drive the service layer without Flask.

Loads the demo roster into memory, marks one absence and prints the dashboard figures.
"""

from datetime import date

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.constants import ADMIN_USER_ID
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.database.seed import seed_demo_data


def main():
    container = build_container(storage="memory")
    seed_demo_data(container)

    student = container.student_service.list_students()[0]
    container.attendance_service.mark(
        current_role=Role.ADMIN,
        current_user_id=ADMIN_USER_ID,
        student_id=student.student_id,
        att_date=date.today(),
        session_id=1,
        status=AttendanceStatus.ABSENT,
    )

    print(container.dashboard_service.counts())
    print(container.dashboard_service.snapshot())
    container.insight_requester.shutdown()


if __name__ == "__main__":
    main()
