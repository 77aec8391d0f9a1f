"""
Account operations behind the registration, login and admin endpoints.

Every function takes the request's ``AsyncSession`` and either returns a
``{"success": ..., "message": ...}`` style payload or raises an
``AppError`` subclass.  Unexpected store failures are logged, the session
is rolled back and a ``StoreError`` with a generic message is raised.
"""
import secrets
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ..core.activity import activity_log
from ..core.config import settings
from ..core.errors import (
    AppError, AuthError, ConflictError, ForbiddenError,
    NotFoundError, StoreError, ValidationError,
)
from ..models import Role, TeacherStatus
from .repositories import parse_role, repository_for, students, teachers
import logging

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "This email is already registered."
INVALID_CREDENTIALS = "Invalid credentials or account not found."


def _missing(*values) -> bool:
    return any(value is None or value == "" for value in values)


def _passwords_match(supplied: str, stored: str) -> bool:
    return secrets.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))


def _is_admin_email(email: str) -> bool:
    return email == settings.admin_email


# Registration

async def register_teacher(db: AsyncSession, full_name: Optional[str], email: Optional[str],
                           password: Optional[str]) -> Dict[str, Any]:
    if _missing(full_name, email, password):
        raise ValidationError("All fields are required.")

    try:
        if await teachers.email_exists(db, email):
            raise ConflictError(DUPLICATE_EMAIL)

        await teachers.add(db, full_name=full_name, email=email, password=password,
                           status=TeacherStatus.PENDING.value)
        logger.info(f"DB Insert: Teacher {email} registered.")
    except AppError:
        raise
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_EMAIL)
    except Exception as e:
        logger.error(f"Teacher registration DB error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Server failed to process registration.")

    activity_log.record(f"New faculty registration: {full_name} ({email}) is awaiting approval.")
    return {"success": True, "message": "Registration received. Account pending admin approval."}


async def register_student(db: AsyncSession, full_name: Optional[str], email: Optional[str],
                           password: Optional[str], course: Optional[str],
                           year_level: Optional[str]) -> Dict[str, Any]:
    if _missing(full_name, email, password, course, year_level):
        raise ValidationError("Missing required fields (Name, Email, Password, Course, Year).")

    try:
        if await students.email_exists(db, email):
            raise ConflictError(DUPLICATE_EMAIL)

        await students.add(db, full_name=full_name, email=email, password=password,
                           course=course, year_level=year_level)
        logger.info(f"DB Insert: Student {email} registered.")
    except AppError:
        raise
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_EMAIL)
    except Exception as e:
        logger.error(f"Student registration DB error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Server failed to process registration.")

    activity_log.record(f"New student registered: {full_name} ({email}), {course} {year_level}.")
    return {"success": True, "message": "Registration successful. You may now log in."}


# Authentication

async def login(db: AsyncSession, identifier: Optional[str], password: Optional[str],
                role: Optional[str]) -> Dict[str, Any]:
    if _missing(identifier, password, role):
        raise ValidationError("Missing credentials.")
    role = parse_role(role)
    repository = repository_for(role)

    try:
        account = await repository.get_by_email(db, identifier)
    except Exception as e:
        logger.error(f"Login DB error: {e}", exc_info=True)
        raise StoreError("Server failed during login process.")

    # Same message for unknown identifier and wrong password
    if account is None or not _passwords_match(password, account.password):
        logger.warning(f"Failed login attempt for {identifier} as {role.value}")
        raise AuthError(INVALID_CREDENTIALS)

    if repository is teachers:
        if account.status == TeacherStatus.PENDING.value:
            logger.warning(f"Login refused for pending account {identifier}")
            raise ForbiddenError("Account pending admin approval.")
        redirect = settings.admin_redirect if _is_admin_email(account.email) else settings.teacher_redirect
    else:
        redirect = settings.student_redirect

    logger.info(f"Login successful: {identifier} as {role.value}")
    return {
        "success": True,
        "message": "Login successful",
        "full_name": account.full_name,
        "redirect": redirect,
    }


# Admin listing

async def list_teachers(db: AsyncSession) -> List:
    try:
        return await teachers.list_all(db)
    except Exception as e:
        logger.error(f"Fetch teachers error: {e}", exc_info=True)
        raise StoreError("Failed to retrieve teacher list.")


async def list_students(db: AsyncSession) -> List:
    try:
        return await students.list_all(db)
    except Exception as e:
        logger.error(f"Fetch students error: {e}", exc_info=True)
        raise StoreError("Failed to retrieve student list.")


# Admin status transition

async def set_teacher_status(db: AsyncSession, teacher_id: Optional[int],
                             status: Optional[str]) -> Dict[str, Any]:
    if teacher_id is None or status not in (TeacherStatus.ACTIVE.value, TeacherStatus.INACTIVE.value):
        raise ValidationError("Invalid request parameters.")

    try:
        teacher = await teachers.get_by_id(db, teacher_id)
        affected = await teachers.update_by_id(db, teacher_id, status=status)
    except Exception as e:
        logger.error(f"Update teacher status error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Failed to update teacher status.")

    if not affected:
        logger.warning(f"Status change for missing teacher ID {teacher_id}")
        return {"success": False, "message": f"Teacher ID {teacher_id} not found. No changes made."}

    name = teacher.full_name if teacher else f"ID {teacher_id}"
    if status == TeacherStatus.ACTIVE.value:
        activity_log.record(f"Approved faculty account: {name}.")
    else:
        activity_log.record(f"Deactivated faculty account: {name}.")
    return {"success": True, "message": f"Teacher ID {teacher_id} status updated to {status}."}


# Admin-driven account creation

async def admin_create_account(db: AsyncSession, role: Optional[str], full_name: Optional[str],
                               email: Optional[str], password: Optional[str],
                               course: Optional[str] = None,
                               year_level: Optional[str] = None) -> Dict[str, Any]:
    if _missing(role, full_name, email, password):
        raise ValidationError("Missing required fields (Role, Name, Email, Password).")
    role = parse_role(role)
    if role is Role.STUDENT and _missing(course, year_level):
        raise ValidationError("Course and year level are required for student accounts.")

    repository = repository_for(role)
    values = {"full_name": full_name, "email": email, "password": password}
    if role is Role.STUDENT:
        values.update(course=course, year_level=year_level)
    else:
        # Admin-created faculty skip the approval queue
        values["status"] = TeacherStatus.ACTIVE.value

    try:
        if await repository.email_exists(db, email):
            raise ConflictError(DUPLICATE_EMAIL)
        await repository.add(db, **values)
        logger.info(f"DB Insert: admin created {role.value} {email}.")
    except AppError:
        raise
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_EMAIL)
    except Exception as e:
        logger.error(f"Admin account creation DB error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Server failed to create the account.")

    activity_log.record(f"Admin created {role.label} account: {full_name} ({email}).")
    return {"success": True, "message": f"{role.label.title()} account created successfully."}


# Admin edit

async def update_user(db: AsyncSession, account_id: Optional[int], role: Optional[str],
                      full_name: Optional[str], email: Optional[str],
                      password: Optional[str] = None, meta1: Optional[str] = None,
                      meta2: Optional[str] = None) -> Dict[str, Any]:
    if _missing(account_id, role, full_name, email):
        raise ValidationError("Missing required user fields (ID, role, name, or email).")
    role = parse_role(role)
    repository = repository_for(role)

    values = {"full_name": full_name, "email": email}
    # meta1/meta2 carry course/year_level for students; blank keeps the stored value
    for field, value in zip(repository.profile_fields, (meta1, meta2)):
        if not _missing(value):
            values[field] = value
    if password:
        values["password"] = password

    try:
        affected = await repository.update_by_id(db, account_id, **values)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Update failed: That email is already in use by another account.")
    except Exception as e:
        logger.error(f"Update user DB error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Server failed to update user.")

    if not affected:
        raise NotFoundError(f"{role.value} with ID {account_id} not found.")

    logger.info(f"DB Update: {role.value} ID {account_id} updated.")
    activity_log.record(f"Updated {role.label} account: {full_name} ({email}).")
    return {"success": True, "message": f"{role.value} account updated successfully."}


# Admin deletion

async def delete_user(db: AsyncSession, account_id: Optional[int], role: Optional[str]) -> Dict[str, Any]:
    role = parse_role(role)
    if role is Role.ADMIN:
        logger.warning(f"Refused to delete admin account (ID {account_id})")
        raise ForbiddenError("The admin account cannot be deleted.")
    if _missing(account_id):
        raise ValidationError("Missing user ID.")

    repository = repository_for(role)
    try:
        account = await repository.get_by_id(db, account_id)
        if account is None:
            raise NotFoundError(f"{role.value} with ID {account_id} not found.")
        if repository is teachers and _is_admin_email(account.email):
            logger.warning(f"Refused to delete admin account via role {role.value} (ID {account_id})")
            raise ForbiddenError("The admin account cannot be deleted.")

        full_name, email = account.full_name, account.email
        removed = await repository.delete_by_id(db, account_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Delete user DB error: {e}", exc_info=True)
        await db.rollback()
        raise StoreError("Server failed to delete user.")

    if not removed:
        raise NotFoundError(f"{role.value} with ID {account_id} not found.")

    logger.info(f"DB Delete: {role.value} ID {account_id} removed.")
    activity_log.record(f"Removed {role.label} account: {full_name} ({email}).")
    return {"success": True, "message": f"{role.value} account deleted successfully."}


# Activity retrieval

def list_activities() -> List[Dict[str, str]]:
    return activity_log.entries()
