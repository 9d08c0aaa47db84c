from .user import User, ROLES, STAFF_ROLES
from .catalog import Operation, Color, Size
from .job import Job, JobItem
from .attendance import Attendance, DailyTask
from .bulk import IncomingJob, OutgoingJob
from .expense import Expense
from .payroll import PayrollRecord

__all__ = [
    "User", "ROLES", "STAFF_ROLES",
    "Operation", "Color", "Size",
    "Job", "JobItem",
    "Attendance", "DailyTask",
    "IncomingJob", "OutgoingJob",
    "Expense",
    "PayrollRecord",
]
