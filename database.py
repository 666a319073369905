"""
In-memory store for the AgriVenture API.

Catalog and keyed records live in plain dicts: plots are keyed by
``(user_id, plot_index)`` and progress records by ``(user_id, module_id)``.
Append-only records (purchases, awards, posts, the credit ledger) go through
``create_document`` / ``get_documents``. Nothing survives a restart.
"""
import logging
import threading
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel

from errors import NotFoundError
from schemas import (
    Achievement,
    Equipment,
    FarmPlot,
    LearningModule,
    User,
    UserProgress,
    WeatherData,
)
from seed import seed_all

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class MemoryDatabase:
    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utcnow
        self.users: Dict[str, User] = {}
        self.farm_plots: Dict[Tuple[str, int], FarmPlot] = {}
        self.learning_modules: Dict[str, LearningModule] = {}
        self.user_progress: Dict[Tuple[str, str], UserProgress] = {}
        self.equipment: Dict[str, Equipment] = {}
        self.achievements: Dict[str, Achievement] = {}
        self.weather: Optional[WeatherData] = None
        self._documents: Dict[str, List[BaseModel]] = defaultdict(list)
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def now(self) -> datetime:
        return self.clock()

    def user_lock(self, user_id: str) -> threading.RLock:
        """Lock serializing read-modify-write operations on one user's records."""
        if user_id not in self.users:
            raise NotFoundError("User not found")
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[user_id] = lock
            return lock

    def create_document(self, collection_name: str, data: BaseModel) -> str:
        """Append a record to a collection, assigning an id if it has none."""
        if getattr(data, "id", None) is None:
            data.id = new_id()
        self._documents[collection_name].append(data)
        return data.id

    def get_documents(self, collection_name: str, filter_dict: Optional[dict] = None,
                      limit: Optional[int] = None) -> List[BaseModel]:
        docs = self._documents.get(collection_name, [])
        if filter_dict:
            docs = [
                d for d in docs
                if all(getattr(d, key, None) == value for key, value in filter_dict.items())
            ]
        else:
            docs = list(docs)
        if limit is not None:
            docs = docs[:limit]
        return docs

    def collection_counts(self) -> Dict[str, int]:
        counts = {
            "user": len(self.users),
            "farm_plot": len(self.farm_plots),
            "learning_module": len(self.learning_modules),
            "user_progress": len(self.user_progress),
            "equipment": len(self.equipment),
            "achievement": len(self.achievements),
        }
        for name, docs in sorted(self._documents.items()):
            counts[name] = len(docs)
        return counts


def create_database(clock: Optional[Clock] = None, seeded: bool = True,
                    farmer_id: Optional[str] = None) -> MemoryDatabase:
    database = MemoryDatabase(clock=clock)
    if seeded:
        seed_all(database, farmer_id)
        logger.info(f"Seeded store: {database.collection_counts()}")
    return database


db = create_database()
