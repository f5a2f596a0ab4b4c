from pydantic import EmailStr, Field
from typing import Optional
from schoolquiz.models.quiz import CamelModel

STUDENT = "student"
TEACHER = "teacher"


class UserProfile(CamelModel):
    id: str = Field(alias="_id")
    username: str
    email: str
    role: str = STUDENT
    created_at: Optional[str] = None


class ProfileUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
