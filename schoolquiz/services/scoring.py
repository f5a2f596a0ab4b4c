"""Scoring of quiz submissions.

Each question is worth its ``points``. An answer earns the points when it is
exactly the question's correct option index; a missing answer counts as -1
and never matches. The stored score is the earned share of the maximum
points as an integer percentage, rounded half-up.
"""
from pydantic import BaseModel
from schoolquiz.config import Settings, settings
from schoolquiz.database import Database, RESULTS
from schoolquiz.errors import ValidationError, InvalidState
from schoolquiz.models.quiz import Question
from schoolquiz.models.result import SubmitResponse
from schoolquiz.models.user import TEACHER
from schoolquiz.services.quiz_service import find_quiz, questions_of
from schoolquiz.utils.time_utils import timestamp
from typing import Any, List, Optional
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)

UNANSWERED = -1


class ScoreBreakdown(BaseModel):
    total_points: int
    max_points: int
    correct_count: int
    total_questions: int
    score: int
    correct: List[bool]


def percentage(earned: int, maximum: int) -> int:
    """round(earned / maximum * 100) with halves rounded up, in integers"""
    if maximum <= 0:
        return 0
    return (200 * earned + maximum) // (2 * maximum)


def _is_option_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_answers(answers: Any) -> List[Optional[int]]:
    if not isinstance(answers, list):
        raise ValidationError("Please provide answers")
    for answer in answers:
        if answer is not None and not _is_option_index(answer):
            raise ValidationError("Answers must be option indexes")
    return answers


def score_answers(questions: List[Question], answers: List[Optional[int]]) -> ScoreBreakdown:
    total_points = 0
    max_points = 0
    correct = []

    for index, question in enumerate(questions):
        answer = answers[index] if index < len(answers) else UNANSWERED
        is_correct = answer == question.correct_answer
        if is_correct:
            total_points += question.points
        max_points += question.points
        correct.append(is_correct)

    return ScoreBreakdown(
        total_points=total_points,
        max_points=max_points,
        correct_count=sum(correct),
        total_questions=len(questions),
        score=percentage(total_points, max_points),
        correct=correct,
    )


def submit_quiz(
    db: Database, quiz_id: str, answers: Any, time_spent: Optional[int], caller: dict,
    config: Settings = settings,
) -> SubmitResponse:
    quiz = find_quiz(db, quiz_id)

    # Teachers may try out quizzes that are not yet published
    if not quiz.get("is_active", True) and caller.get("role") != TEACHER:
        raise InvalidState("This quiz is not active")

    answers = validate_answers(answers)
    if time_spent is not None and time_spent < 0:
        raise ValidationError("Time spent cannot be negative")

    breakdown = score_answers(questions_of(quiz), answers)

    result = {
        "id": str(uuid4()),
        "user_id": caller["id"],
        "quiz_id": quiz["id"],
        "answers": answers,
        "score": breakdown.score,
        "time_spent": time_spent or 0,
        "created_at": timestamp(config.timezone),
    }
    created = db.insert(RESULTS, result) or result
    logger.info(f"User {caller['id']} scored {breakdown.score} on quiz {quiz['id']}")

    return SubmitResponse(
        id=str(created["id"]),
        score=breakdown.score,
        correct_count=breakdown.correct_count,
        total_questions=breakdown.total_questions,
        time_spent=created.get("time_spent") or 0,
    )
