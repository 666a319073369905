"""Achievement catalog and awards."""
import logging
from typing import List

from database import MemoryDatabase
from errors import NotFoundError
from schemas import Achievement, UserAchievement, UserAchievementWithDetails
from users import change_credits, get_user

logger = logging.getLogger(__name__)

RECENT_LIMIT = 3


def list_achievements(db: MemoryDatabase) -> List[Achievement]:
    return list(db.achievements.values())


def award(db: MemoryDatabase, user_id: str, achievement_id: str) -> bool:
    """
    Give a user an achievement and its credit reward.

    Idempotent: returns False and changes nothing if the user already holds
    it. Nothing in the API calls this on its own; rule evaluation lives with
    whoever decides an achievement was earned.
    """
    achievement = db.achievements.get(achievement_id)
    if achievement is None:
        raise NotFoundError("Achievement not found")

    with db.user_lock(user_id):
        user = get_user(db, user_id)
        held = db.get_documents("user_achievement", {"user_id": user_id, "achievement_id": achievement_id})
        if held:
            return False
        db.create_document("user_achievement", UserAchievement(
            user_id=user_id,
            achievement_id=achievement_id,
            earned_at=db.now(),
        ))
        change_credits(db, user, achievement.credits_reward, f"achievement:{achievement_id}")

    logger.info(f"{user_id} earned {achievement_id}")
    return True


def list_user_achievements(db: MemoryDatabase, user_id: str) -> List[UserAchievementWithDetails]:
    get_user(db, user_id)
    result = []
    for record in db.get_documents("user_achievement", {"user_id": user_id}):
        achievement = db.achievements.get(record.achievement_id)
        if achievement is None:
            continue
        result.append(UserAchievementWithDetails(achievement=achievement, **record.model_dump()))
    return result


def recent_achievements(db: MemoryDatabase, user_id: str,
                        limit: int = RECENT_LIMIT) -> List[UserAchievementWithDetails]:
    return list_user_achievements(db, user_id)[-limit:]
