"""School Attendance package.

This package is organized by feature modules (students, attendance, schedules,
analytics, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
