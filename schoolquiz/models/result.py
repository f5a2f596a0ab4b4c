from pydantic import Field
from typing import Any, List, Optional
from schoolquiz.models.quiz import CamelModel, Question


class SubmitAnswersRequest(CamelModel):
    # Left untyped so the scoring service can reject non-lists itself
    answers: Any = None
    time_spent: Optional[int] = None  # seconds


class SubmitResponse(CamelModel):
    id: str = Field(alias="_id")
    score: int
    correct_count: int
    total_questions: int
    time_spent: int


class ResultSummary(CamelModel):
    id: str = Field(alias="_id")
    quiz_id: str
    quiz_title: Optional[str] = None
    quiz_subject: Optional[str] = None
    student_name: str
    student_id: Optional[str] = None
    score: int
    answers: List[Optional[int]]
    time_spent: int = 0
    date: Optional[str] = None


class ResultDetail(ResultSummary):
    questions: List[Question] = []
