from schoolquiz.database import Database, QUIZZES, RESULTS, USERS, rows_by_id
from schoolquiz.errors import NotFound, Forbidden
from schoolquiz.models.result import ResultSummary, ResultDetail
from schoolquiz.models.user import TEACHER
from schoolquiz.services.quiz_service import questions_of
from typing import Dict, List, Optional

ANONYMOUS = "Anonymous"


def _summary_fields(result: dict, quiz: Optional[dict], user: Optional[dict]) -> dict:
    return {
        "id": str(result["id"]),
        "quiz_id": str(result["quiz_id"]),
        "quiz_title": quiz["title"] if quiz else None,
        "quiz_subject": quiz.get("subject") if quiz else None,
        "student_name": (user.get("username") or ANONYMOUS) if user else ANONYMOUS,
        "student_id": str(user["id"]) if user else None,
        "score": result["score"],
        "answers": result.get("answers") or [],
        "time_spent": result.get("time_spent") or 0,
        "date": result.get("created_at"),
    }


def _summaries(results: List[dict], quizzes: Dict[str, dict], users: Dict[str, dict]) -> List[ResultSummary]:
    summaries = [
        ResultSummary(**_summary_fields(
            result,
            quizzes.get(str(result["quiz_id"])),
            users.get(str(result["user_id"])),
        ))
        for result in results
    ]
    summaries.sort(key=lambda s: s.date or "", reverse=True)
    return summaries


def list_results(db: Database, caller: dict) -> List[ResultSummary]:
    """Teachers see results for the quizzes they own, students their own"""
    if caller.get("role") == TEACHER:
        quizzes = rows_by_id(db.select(QUIZZES, "id,title,subject", {"created_by": caller["id"]}))
        results = db.select_in(RESULTS, "quiz_id", quizzes.keys())
        user_ids = {str(result["user_id"]) for result in results}
        users = rows_by_id(db.select_in(USERS, "id", user_ids, columns="id,username"))
    else:
        results = db.select(RESULTS, "*", {"user_id": caller["id"]})
        quiz_ids = {str(result["quiz_id"]) for result in results}
        quizzes = rows_by_id(db.select_in(QUIZZES, "id", quiz_ids, columns="id,title,subject"))
        users = {caller["id"]: caller}

    return _summaries(results, quizzes, users)


def get_result(db: Database, result_id: str, caller: dict) -> ResultDetail:
    results = db.select(RESULTS, "*", {"id": result_id})
    if not results:
        raise NotFound("Result not found")
    result = results[0]

    quizzes = db.select(QUIZZES, "*", {"id": result["quiz_id"]})
    quiz = quizzes[0] if quizzes else None

    is_owner = str(result["user_id"]) == str(caller["id"])
    is_quiz_creator = quiz is not None and str(quiz["created_by"]) == str(caller["id"])
    if not (caller.get("role") == TEACHER and is_quiz_creator) and not is_owner:
        raise Forbidden("Not authorized to access this result")

    users = db.select(USERS, "id,username", {"id": result["user_id"]})
    user = users[0] if users else None

    return ResultDetail(
        questions=questions_of(quiz) if quiz else [],
        **_summary_fields(result, quiz, user),
    )
