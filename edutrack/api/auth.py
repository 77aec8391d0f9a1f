from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, ConfigDict
from typing import Optional
from ..core.database import get_db
from ..services import accounts
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


# Fields are optional so that missing values surface as a 400 with our message
class TeacherRegisterRequest(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class StudentRegisterRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None


class LoginRequest(BaseModel):
    identifier: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool
    message: str


class LoginResponse(MessageResponse):
    full_name: str
    redirect: str


@router.post("/register/teacher", response_model=MessageResponse)
async def register_teacher(request: TeacherRegisterRequest, db: AsyncSession = Depends(get_db)):
    """Self-registration for faculty; the account waits for admin approval"""
    logger.info(f"Teacher registration attempt for email: {request.email}")
    return await accounts.register_teacher(db, request.full_name, request.email, request.password)


@router.post("/register/student", response_model=MessageResponse)
async def register_student(request: StudentRegisterRequest, db: AsyncSession = Depends(get_db)):
    """Self-registration for students; usable immediately"""
    logger.info(f"Student registration attempt for email: {request.email}")
    return await accounts.register_student(
        db, request.name, request.email, request.password, request.course, request.year_level
    )


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """
    Check credentials against the collection for the given role and
    return the dashboard the client should open
    """
    logger.info(f"Login attempt for {request.identifier} as {request.role}")
    return await accounts.login(db, request.identifier, request.password, request.role)
