"""Example: drive the attendance and leave services without Flask.

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import date, datetime, timedelta

from src.employee_admin.employee_admin.attendance.model import ClockEvent
from src.employee_admin.employee_admin.container import build_memory_container
from src.employee_admin.employee_admin.core.enums import LeaveType
from src.employee_admin.employee_admin.leaves.model import NewLeaveRequest


def main():
    container = build_memory_container(employee_ids=[1])

    day = datetime(2026, 3, 2)
    container.attendance_service.clock_in(ClockEvent(1, day.replace(hour=8), "on site"))
    view = container.attendance_service.clock_out(ClockEvent(1, day.replace(hour=19)))
    print(view.to_dict())

    start = date.today() + timedelta(days=30)
    leave = container.leave_service.create(
        NewLeaveRequest(employee_id=1, leave_type=LeaveType.ANNUAL, start_date=start, end_date=start + timedelta(days=6))
    )
    print(leave.to_dict())
    print(container.leave_service.balance(1, start.year).to_dict())


if __name__ == "__main__":
    main()
