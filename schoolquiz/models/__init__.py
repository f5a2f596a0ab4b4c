from .quiz import (
    QuestionInput, QuizCreate, QuizUpdate, Question, QuestionStudentView,
    OwnerRef, QuizTeacherView, QuizStudentView, MessageResponse,
)
from .result import SubmitAnswersRequest, SubmitResponse, ResultSummary, ResultDetail
from .user import UserProfile, ProfileUpdate, STUDENT, TEACHER

__all__ = [
    "QuestionInput", "QuizCreate", "QuizUpdate", "Question", "QuestionStudentView",
    "OwnerRef", "QuizTeacherView", "QuizStudentView", "MessageResponse",
    "SubmitAnswersRequest", "SubmitResponse", "ResultSummary", "ResultDetail",
    "UserProfile", "ProfileUpdate", "STUDENT", "TEACHER",
]
