from schoolquiz.database import Database, USERS
from schoolquiz.errors import NotFound, ValidationError
from schoolquiz.models.user import UserProfile, ProfileUpdate, STUDENT
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _profile(user: dict) -> UserProfile:
    return UserProfile(
        id=str(user["id"]),
        username=user["username"],
        email=user["email"],
        role=user.get("role") or STUDENT,
        created_at=user.get("created_at"),
    )


def get_profile(db: Database, user_id: str) -> UserProfile:
    users = db.select(USERS, "id,username,email,role,created_at", {"id": user_id})
    if not users:
        raise NotFound("User not found")
    return _profile(users[0])


def update_profile(db: Database, user_id: str, data: ProfileUpdate) -> UserProfile:
    users = db.select(USERS, "*", {"id": user_id})
    if not users:
        raise NotFound("User not found")
    user = users[0]

    changes = {}
    if data.username:
        changes["username"] = data.username.strip()
    if data.email:
        changes["email"] = data.email.strip().lower()

    # Credentials live in Supabase Auth, never in the users table
    auth_changes = {}
    if data.password:
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        auth_changes["password"] = data.password
    if "email" in changes:
        auth_changes["email"] = changes["email"]

    # Write the row before Supabase Auth; roll the row back if Auth rejects the change
    previous = {key: user.get(key) for key in changes}
    if changes:
        updated = db.update(USERS, changes, {"id": user_id})
        user = updated or {**user, **changes}

    if auth_changes:
        try:
            db.update_auth_user(user_id, auth_changes)
        except Exception:
            if changes:
                logger.warning(f"Auth update failed for user {user_id}, restoring profile row")
                db.update(USERS, previous, {"id": user_id})
            raise
        logger.info(f"Updated auth credentials for user {user_id}")

    return _profile(user)
