from fastapi import APIRouter, Depends
from schoolquiz.database import Database, get_db
from schoolquiz.errors import AppError, InternalError
from schoolquiz.models.result import ResultSummary, ResultDetail
from schoolquiz.models.user import UserProfile, ProfileUpdate
from schoolquiz.services import result_service, user_service
from schoolquiz.utils.auth_utils import get_current_user
from typing import List
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/profile", response_model=UserProfile)
async def get_user_profile(current_user: dict = Depends(get_current_user), db: Database = Depends(get_db)):
    """Get current user's profile"""
    try:
        return user_service.get_profile(db, current_user["id"])
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get profile: {e}")
        raise InternalError(f"Failed to get profile: {str(e)}")

@router.put("/profile", response_model=UserProfile)
async def update_user_profile(profile_data: ProfileUpdate, current_user: dict = Depends(get_current_user), db: Database = Depends(get_db)):
    """Update current user's profile"""
    try:
        return user_service.update_profile(db, current_user["id"], profile_data)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update profile: {e}")
        raise InternalError(f"Failed to update profile: {str(e)}")

@router.get("/results", response_model=List[ResultSummary])
async def get_quiz_results(current_user: dict = Depends(get_current_user), db: Database = Depends(get_db)):
    """Students get their own results, teachers the results of their quizzes"""
    try:
        return result_service.list_results(db, current_user)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get results: {e}")
        raise InternalError(f"Failed to get results: {str(e)}")

@router.get("/results/{result_id}", response_model=ResultDetail)
async def get_quiz_result_by_id(result_id: str, current_user: dict = Depends(get_current_user), db: Database = Depends(get_db)):
    """Get one result with its questions for review"""
    try:
        return result_service.get_result(db, result_id, current_user)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to get result {result_id}: {e}")
        raise InternalError(f"Failed to get result: {str(e)}")
