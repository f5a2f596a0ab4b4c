"""Quiz authoring and retrieval.

Rows in the ``quizzes`` table keep their questions as a JSON list of
``{text, options, correct_answer, points}`` objects. Callers never see a row
directly: reads go through :class:`QuizTeacherView` or
:class:`QuizStudentView`, and only the teacher projection carries answer keys.
"""
from schoolquiz.config import Settings, settings
from schoolquiz.database import Database, QUIZZES, USERS
from schoolquiz.errors import ValidationError, NotFound, Forbidden
from schoolquiz.models.quiz import (
    QuestionInput, QuizCreate, QuizUpdate, Question, QuestionStudentView,
    OwnerRef, QuizTeacherView, QuizStudentView,
)
from schoolquiz.models.user import TEACHER
from schoolquiz.utils.time_utils import timestamp
from typing import Dict, Iterable, List, Optional
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


def validate_questions(questions: Optional[List[QuestionInput]]) -> List[dict]:
    """Check every question and return them in storage shape"""
    validated = []
    for question in questions or []:
        if not question.text or not question.options or len(question.options) < 2:
            raise ValidationError("Each question must have a question text and at least 2 options")

        answer = question.correct_answer
        if answer is None or answer < 0 or answer >= len(question.options):
            raise ValidationError("Each question must have a valid correct answer")

        if question.points is not None and question.points < 1:
            raise ValidationError("Question points must be a positive integer")

        validated.append(Question(
            text=question.text,
            options=question.options,
            correct_answer=answer,
            points=question.points or 1,
        ).model_dump())
    return validated


def owner_names(db: Database, rows: Iterable[dict]) -> Dict[str, str]:
    """Map creator ids to usernames for a batch of quiz rows"""
    ids = {str(row["created_by"]) for row in rows if row.get("created_by")}
    users = db.select_in(USERS, "id", ids, columns="id,username")
    return {str(user["id"]): user.get("username") for user in users}


def _base_fields(row: dict, names: Dict[str, str], config: Settings) -> dict:
    owner_id = str(row["created_by"])
    return {
        "id": str(row["id"]),
        "title": row["title"],
        "description": row.get("description"),
        "subject": row["subject"],
        "time_limit": row.get("time_limit") or config.default_time_limit,
        "is_active": bool(row.get("is_active", True)),
        "created_by": OwnerRef(id=owner_id, username=names.get(owner_id)),
        "created_at": row.get("created_at"),
    }


def questions_of(row: dict) -> List[Question]:
    return [Question(**q) for q in row.get("questions") or []]


def to_teacher_view(row: dict, names: Dict[str, str], config: Settings = settings) -> QuizTeacherView:
    return QuizTeacherView(questions=questions_of(row), **_base_fields(row, names, config))


def to_student_view(row: dict, names: Dict[str, str], config: Settings = settings) -> QuizStudentView:
    questions = [
        QuestionStudentView(text=q.text, options=q.options, points=q.points)
        for q in questions_of(row)
    ]
    return QuizStudentView(questions=questions, **_base_fields(row, names, config))


def find_quiz(db: Database, quiz_id: str) -> dict:
    quizzes = db.select(QUIZZES, "*", {"id": quiz_id})
    if not quizzes:
        raise NotFound("Quiz not found")
    return quizzes[0]


# Read service

def list_quizzes(db: Database, active_only: bool = False, config: Settings = settings) -> List[QuizStudentView]:
    filters = {"is_active": True} if active_only else None
    rows = db.select(QUIZZES, "*", filters)
    names = owner_names(db, rows)
    return [to_student_view(row, names, config) for row in rows]


def get_quiz(db: Database, quiz_id: str, caller_role: str, config: Settings = settings):
    row = find_quiz(db, quiz_id)
    names = owner_names(db, [row])
    if caller_role == TEACHER:
        return to_teacher_view(row, names, config)
    return to_student_view(row, names, config)


# Write service

def create_quiz(db: Database, data: QuizCreate, caller: dict, config: Settings = settings) -> QuizTeacherView:
    if not (data.title or "").strip() or not data.subject or not data.questions:
        raise ValidationError("Please provide title, subject, and at least one question")

    if data.time_limit is not None and data.time_limit < 0:
        raise ValidationError("Time limit must be a positive number of minutes")

    questions = validate_questions(data.questions)

    quiz = {
        "id": str(uuid4()),
        "title": data.title.strip(),
        "description": (data.description or "").strip(),
        "subject": data.subject,
        "time_limit": data.time_limit or config.default_time_limit,
        "is_active": True,
        "created_by": caller["id"],
        "questions": questions,
        "created_at": timestamp(config.timezone),
    }

    created = db.insert(QUIZZES, quiz) or quiz
    logger.info(f"Quiz {created['id']} created by {caller['id']}")
    return to_teacher_view(created, {caller["id"]: caller.get("username")}, config)


def _owned_quiz(db: Database, quiz_id: str, caller_id: str, action: str) -> dict:
    quiz = find_quiz(db, quiz_id)
    if str(quiz["created_by"]) != str(caller_id):
        raise Forbidden(f"Not authorized to {action} this quiz")
    return quiz


def update_quiz(db: Database, quiz_id: str, data: QuizUpdate, caller_id: str, config: Settings = settings) -> QuizTeacherView:
    quiz = _owned_quiz(db, quiz_id, caller_id, "update")

    changes = {}
    if data.title is not None:
        if not data.title.strip():
            raise ValidationError("Title cannot be empty")
        changes["title"] = data.title.strip()
    if data.description is not None:
        changes["description"] = data.description.strip()
    if data.subject is not None:
        if not data.subject:
            raise ValidationError("Subject cannot be empty")
        changes["subject"] = data.subject
    if data.time_limit is not None:
        if data.time_limit < 1:
            raise ValidationError("Time limit must be a positive number of minutes")
        changes["time_limit"] = data.time_limit
    if data.is_active is not None:
        changes["is_active"] = data.is_active
    if data.questions is not None:
        if not data.questions:
            raise ValidationError("A quiz must have at least one question")
        changes["questions"] = validate_questions(data.questions)

    if changes:
        updated = db.update(QUIZZES, changes, {"id": quiz_id})
        quiz = updated or {**quiz, **changes}

    return to_teacher_view(quiz, owner_names(db, [quiz]), config)


def delete_quiz(db: Database, quiz_id: str, caller_id: str):
    """Remove a quiz. Results that reference it are kept."""
    _owned_quiz(db, quiz_id, caller_id, "delete")
    db.delete(QUIZZES, {"id": quiz_id})
    logger.info(f"Quiz {quiz_id} deleted by {caller_id}")
