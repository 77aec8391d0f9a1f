from typing import Dict, List, Optional, Type
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from ..core.errors import ValidationError
from ..models import Role, Student, Teacher


class AccountRepository:
    """Statements against one account collection. Subclasses pick the model."""

    model: Type = None
    # Columns an admin edit may overwrite besides full_name/email/password
    profile_fields: tuple = ()

    async def get_by_email(self, db: AsyncSession, email: str):
        result = await db.execute(select(self.model).filter(self.model.email == email))
        return result.scalar_one_or_none()

    async def get_by_id(self, db: AsyncSession, account_id: int):
        result = await db.execute(select(self.model).filter(self.model.id == account_id))
        return result.scalar_one_or_none()

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        result = await db.execute(select(self.model.id).filter(self.model.email == email))
        return result.first() is not None

    async def list_all(self, db: AsyncSession) -> List:
        result = await db.execute(
            select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return list(result.scalars().all())

    async def add(self, db: AsyncSession, **values):
        account = self.model(**values)
        db.add(account)
        await db.commit()
        await db.refresh(account)
        return account

    async def update_by_id(self, db: AsyncSession, account_id: int, **values) -> int:
        result = await db.execute(
            update(self.model).where(self.model.id == account_id).values(**values)
        )
        await db.commit()
        return result.rowcount

    async def delete_by_id(self, db: AsyncSession, account_id: int) -> int:
        result = await db.execute(delete(self.model).where(self.model.id == account_id))
        await db.commit()
        return result.rowcount


class TeacherRepository(AccountRepository):
    model = Teacher


class StudentRepository(AccountRepository):
    model = Student
    profile_fields = ("course", "year_level")


teachers = TeacherRepository()
students = StudentRepository()

# Admins are teacher rows identified by email
REPOSITORIES: Dict[Role, AccountRepository] = {
    Role.TEACHER: teachers,
    Role.ADMIN: teachers,
    Role.STUDENT: students,
}


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid user role specified.")


def repository_for(role: Role) -> AccountRepository:
    return REPOSITORIES[role]
