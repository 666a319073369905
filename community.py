"""Community feed, weekly contributor ranking and headline stats."""
import logging
from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List, Optional, get_args

from database import MemoryDatabase
from errors import ValidationError
from schemas import CommunityPost, CommunityPostWithUser, CommunityStats, PostType, TopContributor
from users import get_user

logger = logging.getLogger(__name__)

TOP_CONTRIBUTORS = 3
CONTRIBUTION_WINDOW = timedelta(days=7)


def list_posts(db: MemoryDatabase) -> List[CommunityPostWithUser]:
    """Newest first, each post with its author attached."""
    posts = sorted(db.get_documents("community_post"), key=lambda p: p.created_at, reverse=True)
    result = []
    for post in posts:
        author = db.users.get(post.user_id)
        if author is None:
            continue
        result.append(CommunityPostWithUser(user=author, **post.model_dump()))
    return result


def create_post(db: MemoryDatabase, user_id: str, title: str, content: str,
                post_type: str = "success_story",
                metrics: Optional[Dict[str, Any]] = None) -> CommunityPost:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content or post_type not in get_args(PostType):
        raise ValidationError("Invalid post data")

    with db.user_lock(user_id):
        get_user(db, user_id)
        post = CommunityPost(
            user_id=user_id,
            title=title,
            content=content,
            type=post_type,
            metrics=metrics,
            created_at=db.now(),
        )
        db.create_document("community_post", post)

    logger.info(f"{user_id} posted {post.id} ({post_type})")
    return post


def top_contributors(db: MemoryDatabase, limit: int = TOP_CONTRIBUTORS) -> List[TopContributor]:
    """Users ranked by credits earned over the last week."""
    since = db.now() - CONTRIBUTION_WINDOW
    earned = Counter()
    for tx in db.get_documents("credit_transaction"):
        if tx.amount > 0 and tx.created_at >= since:
            earned[tx.user_id] += tx.amount

    ranking = []
    for user_id, total in earned.most_common():
        user = db.users.get(user_id)
        if user is not None:
            ranking.append(TopContributor(user=user, weekly_credits=total))
        if len(ranking) == limit:
            break
    return ranking


def community_stats(db: MemoryDatabase) -> CommunityStats:
    now = db.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    earned_today = sum(
        tx.amount for tx in db.get_documents("credit_transaction")
        if tx.amount > 0 and tx.created_at >= midnight
    )
    return CommunityStats(
        active_farmers=len(db.users),
        success_stories=len(db.get_documents("community_post", {"type": "success_story"})),
        credits_earned_today=earned_today,
        equipment_redeemed=len(db.get_documents("user_purchase")),
    )
