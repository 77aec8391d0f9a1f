from .role import Role
from .teacher import Teacher, TeacherStatus
from .student import Student

__all__ = [
    "Role",
    "Teacher",
    "TeacherStatus",
    "Student",
]
