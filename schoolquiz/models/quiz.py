from pydantic import BaseModel, ConfigDict, Field, AliasChoices, StrictInt
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request bodies. Fields are optional here and checked in the quiz service
# so that missing values produce the service's own messages.

class QuestionInput(CamelModel):
    text: Optional[str] = Field(None, validation_alias=AliasChoices("text", "question"))
    options: Optional[List[str]] = None
    correct_answer: Optional[StrictInt] = None
    points: Optional[StrictInt] = None


class QuizCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    subject: Optional[str] = None
    time_limit: Optional[int] = None  # minutes
    questions: Optional[List[QuestionInput]] = None


class QuizUpdate(CamelModel):
    """Only fields that are not None are applied"""
    title: Optional[str] = None
    description: Optional[str] = None
    subject: Optional[str] = None
    time_limit: Optional[int] = None
    is_active: Optional[bool] = None
    questions: Optional[List[QuestionInput]] = None


# Projections

class Question(CamelModel):
    text: str
    options: List[str]
    correct_answer: int
    points: int = 1


class QuestionStudentView(CamelModel):
    text: str
    options: List[str]
    points: int = 1


class OwnerRef(CamelModel):
    id: str = Field(alias="_id")
    username: Optional[str] = None


class QuizBase(CamelModel):
    id: str = Field(alias="_id")
    title: str
    description: Optional[str] = None
    subject: str
    time_limit: int
    is_active: bool
    created_by: OwnerRef
    created_at: Optional[str] = None


class QuizTeacherView(QuizBase):
    questions: List[Question]


class QuizStudentView(QuizBase):
    questions: List[QuestionStudentView]


class MessageResponse(BaseModel):
    message: str
