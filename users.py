"""User lookup, signup and the credit ledger."""
import logging
from typing import Optional

from database import MemoryDatabase, new_id
from errors import InsufficientCredits, NotFoundError, UsernameTaken
from schemas import CreditTransaction, User

logger = logging.getLogger(__name__)


def get_user(db: MemoryDatabase, user_id: str) -> User:
    user = db.users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: MemoryDatabase, username: str) -> Optional[User]:
    return next((u for u in db.users.values() if u.username == username), None)


def create_user(db: MemoryDatabase, username: str, email: str, first_name: str,
                last_name: str, location: Optional[str] = None) -> User:
    if get_user_by_username(db, username) is not None:
        raise UsernameTaken()
    user = User(
        id=new_id(),
        username=username,
        email=email,
        first_name=first_name,
        last_name=last_name,
        location=location,
        created_at=db.now(),
    )
    db.users[user.id] = user
    logger.info(f"Created user {user.id} ({username})")
    return user


def change_credits(db: MemoryDatabase, user: User, amount: int, reason: str) -> User:
    """
    Apply a signed change to a user's balance and record it in the ledger.

    Callers hold the user's lock. A debit larger than the balance raises
    InsufficientCredits and leaves the balance alone.
    """
    if user.sustaina_credits + amount < 0:
        raise InsufficientCredits()
    user.sustaina_credits += amount
    db.create_document("credit_transaction", CreditTransaction(
        user_id=user.id,
        amount=amount,
        reason=reason,
        created_at=db.now(),
    ))
    logger.info(f"Credits {amount:+d} for {user.id} ({reason}), balance {user.sustaina_credits}")
    return user
