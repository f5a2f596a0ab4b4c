from fastapi import APIRouter, Depends, status
from schoolquiz.config import Settings, get_settings
from schoolquiz.database import Database, get_db
from schoolquiz.errors import AppError, InternalError
from schoolquiz.models.quiz import (
    QuizCreate, QuizUpdate, QuizTeacherView, QuizStudentView, MessageResponse,
)
from schoolquiz.models.result import SubmitAnswersRequest, SubmitResponse
from schoolquiz.services import quiz_service, scoring
from schoolquiz.utils.auth_utils import get_current_user, require_teacher
from typing import List
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[QuizStudentView])
async def get_all_quizzes(current_user: dict = Depends(get_current_user), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """List every quiz without answer keys"""
    try:
        return quiz_service.list_quizzes(db, config=config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch quizzes: {e}")
        raise InternalError(f"Failed to fetch quizzes: {str(e)}")

@router.get("/active", response_model=List[QuizStudentView])
async def get_active_quizzes(current_user: dict = Depends(get_current_user), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """List quizzes open for submission"""
    try:
        return quiz_service.list_quizzes(db, active_only=True, config=config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch active quizzes: {e}")
        raise InternalError(f"Failed to fetch active quizzes: {str(e)}")

@router.get("/{quiz_id}", response_model=None)
async def get_quiz_by_id(quiz_id: str, current_user: dict = Depends(get_current_user), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """Get one quiz; students never receive the answer key"""
    try:
        return quiz_service.get_quiz(db, quiz_id, current_user["role"], config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get quiz {quiz_id}: {e}")
        raise InternalError(f"Failed to get quiz: {str(e)}")

@router.post("", response_model=QuizTeacherView, status_code=status.HTTP_201_CREATED)
async def create_quiz(quiz_data: QuizCreate, current_user: dict = Depends(require_teacher), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """Create a new quiz"""
    try:
        return quiz_service.create_quiz(db, quiz_data, current_user, config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create quiz: {e}")
        raise InternalError(f"Failed to create quiz: {str(e)}")

@router.put("/{quiz_id}", response_model=QuizTeacherView)
async def update_quiz(quiz_id: str, quiz_data: QuizUpdate, current_user: dict = Depends(require_teacher), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """Update a quiz owned by the caller"""
    try:
        return quiz_service.update_quiz(db, quiz_id, quiz_data, current_user["id"], config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update quiz {quiz_id}: {e}")
        raise InternalError(f"Failed to update quiz: {str(e)}")

@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(quiz_id: str, current_user: dict = Depends(require_teacher), db: Database = Depends(get_db)):
    """Delete a quiz owned by the caller"""
    try:
        quiz_service.delete_quiz(db, quiz_id, current_user["id"])
        return {"message": "Quiz removed"}
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete quiz {quiz_id}: {e}")
        raise InternalError(f"Failed to delete quiz: {str(e)}")

@router.post("/{quiz_id}/submit", response_model=SubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_quiz(quiz_id: str, submission: SubmitAnswersRequest, current_user: dict = Depends(get_current_user), db: Database = Depends(get_db), config: Settings = Depends(get_settings)):
    """Submit answers and record the scored result"""
    try:
        return scoring.submit_quiz(db, quiz_id, submission.answers, submission.time_spent, current_user, config)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to submit quiz {quiz_id}: {e}")
        raise InternalError(f"Failed to submit quiz: {str(e)}")
