"""Course catalog and per-user lesson progress."""
import logging
from typing import List, Tuple

from database import MemoryDatabase, new_id
from errors import AlreadyCompleted, AlreadyStarted, ModuleNotFoundOrNotStarted, NotFoundError
from schemas import LearningModule, UserProgress, UserProgressWithModule
from users import change_credits, get_user

logger = logging.getLogger(__name__)


def list_modules(db: MemoryDatabase) -> List[LearningModule]:
    return list(db.learning_modules.values())


def get_module(db: MemoryDatabase, module_id: str) -> LearningModule:
    module = db.learning_modules.get(module_id)
    if module is None:
        raise NotFoundError("Module not found")
    return module


def credits_per_lesson(module: LearningModule) -> int:
    # Floor division: the remainder of a non-divisible reward is never paid out.
    return module.credits_reward // module.lessons_count


def list_progress(db: MemoryDatabase, user_id: str) -> List[UserProgress]:
    get_user(db, user_id)
    return [p for (owner, _), p in db.user_progress.items() if owner == user_id]


def list_progress_with_modules(db: MemoryDatabase, user_id: str) -> List[UserProgressWithModule]:
    result = []
    for progress in list_progress(db, user_id):
        module = db.learning_modules.get(progress.module_id)
        if module is None:
            continue
        result.append(UserProgressWithModule(module=module, **progress.model_dump()))
    return result


def start_module(db: MemoryDatabase, user_id: str, module_id: str) -> UserProgress:
    module = get_module(db, module_id)
    with db.user_lock(user_id):
        get_user(db, user_id)
        if (user_id, module.id) in db.user_progress:
            raise AlreadyStarted()
        progress = UserProgress(
            id=new_id(),
            user_id=user_id,
            module_id=module.id,
            current_lesson=1,
            started_at=db.now(),
        )
        db.user_progress[(user_id, module.id)] = progress
    logger.info(f"{user_id} started {module.id}")
    return progress


def continue_module(db: MemoryDatabase, user_id: str, module_id: str) -> Tuple[UserProgress, int]:
    """
    Complete the next lesson of a started module.

    Returns the updated progress record and the credits paid for the lesson.
    The user's balance and learning streak move with every lesson.
    """
    module = db.learning_modules.get(module_id)
    with db.user_lock(user_id):
        user = get_user(db, user_id)
        progress = db.user_progress.get((user_id, module_id))
        if module is None or progress is None:
            raise ModuleNotFoundOrNotStarted()
        if progress.completed:
            raise AlreadyCompleted()

        earned = credits_per_lesson(module)
        change_credits(db, user, earned, f"lesson:{module.id}")
        user.learning_streak += 1

        completed_lessons = min(progress.completed_lessons + 1, module.lessons_count)
        progress.completed_lessons = completed_lessons
        progress.current_lesson = completed_lessons + 1
        progress.progress = round(100 * completed_lessons / module.lessons_count)
        progress.credits_earned += earned
        if completed_lessons == module.lessons_count:
            progress.completed = True
            progress.completed_at = db.now()

    logger.info(f"{user_id} finished lesson {completed_lessons}/{module.lessons_count} of {module.id}")
    return progress, earned
