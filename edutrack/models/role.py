import enum


class Role(str, enum.Enum):
    TEACHER = "teacher"
    STUDENT = "student"
    ADMIN = "admin"

    @property
    def label(self) -> str:
        """Tag used in activity entries"""
        return {
            Role.TEACHER: "FACULTY",
            Role.STUDENT: "STUDENT",
            Role.ADMIN: "ADMIN",
        }[self]
