"""Equipment catalog and credit redemption."""
import logging
from typing import List

from database import MemoryDatabase
from errors import InsufficientCredits, NotFoundError, OutOfStock
from schemas import Equipment, UserPurchase
from users import change_credits, get_user

logger = logging.getLogger(__name__)


def list_equipment(db: MemoryDatabase) -> List[Equipment]:
    return list(db.equipment.values())


def purchase(db: MemoryDatabase, user_id: str, equipment_id: str) -> UserPurchase:
    """Redeem credits for an item. Stock levels are not tracked, only the flag."""
    item = db.equipment.get(equipment_id)
    if item is None:
        raise NotFoundError("Equipment not found")
    if not item.in_stock:
        raise OutOfStock()

    with db.user_lock(user_id):
        user = get_user(db, user_id)
        if user.sustaina_credits < item.credits_required:
            raise InsufficientCredits()
        change_credits(db, user, -item.credits_required, f"purchase:{item.id}")
        record = UserPurchase(
            user_id=user_id,
            equipment_id=item.id,
            credits_used=item.credits_required,
            purchase_price=item.price,
            purchased_at=db.now(),
        )
        db.create_document("user_purchase", record)

    logger.info(f"{user_id} redeemed {item.id} for {item.credits_required} credits")
    return record


def list_purchases(db: MemoryDatabase, user_id: str) -> List[UserPurchase]:
    return db.get_documents("user_purchase", {"user_id": user_id})
