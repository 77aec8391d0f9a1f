from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from ..core.database import get_db
from ..services import accounts
from .auth import MessageResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


class TeacherResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    status: str
    created_at: Optional[datetime] = None


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    course: str
    year_level: str
    created_at: Optional[datetime] = None


class TeacherListResponse(BaseModel):
    success: bool = True
    teachers: List[TeacherResponse]


class StudentListResponse(BaseModel):
    success: bool = True
    students: List[StudentResponse]


class ActivityResponse(BaseModel):
    timestamp: str
    description: str


class ActivityListResponse(BaseModel):
    success: bool = True
    activities: List[ActivityResponse]


class TeacherStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    teacher_id: Optional[int] = Field(default=None, alias="teacherId")
    status: Optional[str] = None


class AccountCreateRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    role: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None


class AccountUpdateRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[int] = None
    role: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    meta1: Optional[str] = None
    meta2: Optional[str] = None


class AccountDeleteRequest(BaseModel):
    id: Optional[int] = None
    role: Optional[str] = None


@router.get("/teachers", response_model=TeacherListResponse)
async def get_teachers(db: AsyncSession = Depends(get_db)):
    """All faculty accounts (pending, active and inactive), newest first"""
    teachers = await accounts.list_teachers(db)
    return TeacherListResponse(teachers=[TeacherResponse.model_validate(t) for t in teachers])


@router.get("/students", response_model=StudentListResponse)
async def get_students(db: AsyncSession = Depends(get_db)):
    students = await accounts.list_students(db)
    return StudentListResponse(students=[StudentResponse.model_validate(s) for s in students])


@router.post("/teacher-status", response_model=MessageResponse)
async def update_teacher_status(request: TeacherStatusRequest, db: AsyncSession = Depends(get_db)):
    """Approve (active) or deny/deactivate (inactive) a teacher"""
    return await accounts.set_teacher_status(db, request.teacher_id, request.status)


@router.post("/register-user", response_model=MessageResponse)
async def register_user(request: AccountCreateRequest, db: AsyncSession = Depends(get_db)):
    """Create an account directly; faculty and admins start active"""
    return await accounts.admin_create_account(
        db, request.role, request.full_name, request.email, request.password,
        course=request.course, year_level=request.year_level
    )


@router.post("/update-user", response_model=MessageResponse)
async def update_user(request: AccountUpdateRequest, db: AsyncSession = Depends(get_db)):
    return await accounts.update_user(
        db, request.id, request.role, request.full_name, request.email,
        password=request.password, meta1=request.meta1, meta2=request.meta2
    )


@router.post("/delete-user", response_model=MessageResponse)
async def delete_user(request: AccountDeleteRequest, db: AsyncSession = Depends(get_db)):
    return await accounts.delete_user(db, request.id, request.role)


@router.get("/activities", response_model=ActivityListResponse)
async def get_activities():
    """Recent admin-relevant events, most recent first"""
    return ActivityListResponse(activities=accounts.list_activities())
