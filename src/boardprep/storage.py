import json
import logging
import time
from typing import Callable, Dict, List, Optional

import redis
from pydantic import TypeAdapter, ValidationError

from .config import settings
from .models import AttemptDraft, QuizAttempt

logger = logging.getLogger(__name__)

_history_adapter = TypeAdapter(List[QuizAttempt])
_manifest_adapter = TypeAdapter(List[str])

# Failures that must never reach the quiz flow.
STORAGE_ERRORS = (redis.RedisError, ValidationError, ValueError, TypeError)


def now_ms() -> int:
    return int(time.time() * 1000)


# --- Service Layer: Attempt History ---
class AttemptStore:
    """Bounded, newest-first quiz history for one user, kept in Redis.

    Every key lives under ``{prefix}:{user_id}:`` so histories of different
    users on the same store never mix. Besides the history list per category,
    the store keeps a "latest" copy of the newest attempt and a manifest of
    categories that have history, so listing a user's progress never scans
    the key space.

    Storage problems are logged and turned into empty results. Losing quiz
    history must not stop anyone from taking the next quiz.
    """

    def __init__(
        self,
        client: redis.Redis,
        user_id: Optional[str],
        max_attempts: int = settings.MAX_ATTEMPTS,
        prefix: str = settings.KEY_PREFIX,
        clock: Callable[[], int] = now_ms,
    ):
        self.client = client
        self.user_id = user_id.strip() if user_id and user_id.strip() else None
        self.max_attempts = max_attempts
        self.prefix = prefix
        self.clock = clock

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None

    # --- Keys ---
    def _user_prefix(self) -> str:
        return f"{self.prefix}:{self.user_id}"

    def history_key(self, category: str) -> str:
        return f"{self._user_prefix()}:attempts:{category}"

    def latest_key(self, category: str) -> str:
        return f"{self._user_prefix()}:latest:{category}"

    def manifest_key(self) -> str:
        return f"{self._user_prefix()}:categories"

    # --- Writes ---
    def append(self, category: str, draft: AttemptDraft) -> Optional[QuizAttempt]:
        """Stamp ``draft`` and put it at the front of the category history.

        Returns the stored attempt, or None when nothing was written.
        """
        if not self.authenticated:
            logger.info(f"Not saving attempt for {category}: no user.")
            return None

        attempt = draft.stamp(self.clock())
        # Unreadable history is replaced rather than blocking the write.
        history = ([attempt] + self.get_attempts(category))[: self.max_attempts]
        try:
            manifest = self._read_manifest()
        except STORAGE_ERRORS as e:
            # Rewriting it would forget the other categories; leave it alone.
            logger.warning(f"Category list for {self.user_id} unreadable, not updating it: {e}")
            manifest = None
        try:
            pipe = self.client.pipeline(transaction=True)
            pipe.set(self.history_key(category), _history_adapter.dump_json(history))
            pipe.set(self.latest_key(category), attempt.model_dump_json())
            if manifest is not None and category not in manifest:
                pipe.set(self.manifest_key(), json.dumps(manifest + [category]))
            pipe.execute()
        except STORAGE_ERRORS as e:
            logger.error(f"Could not save attempt for {self.user_id}/{category}: {e}")
            return None

        logger.info(
            f"Saved attempt for {self.user_id}/{category}: "
            f"{attempt.score}/{attempt.total_questions}"
        )
        return attempt

    def clear(self) -> None:
        """Drop every key this user owns."""
        if not self.authenticated:
            return
        keys = [self.manifest_key()]
        for category in self.get_categories():
            keys.extend([self.history_key(category), self.latest_key(category)])
        try:
            self.client.delete(*keys)
        except STORAGE_ERRORS as e:
            logger.error(f"Could not clear history for {self.user_id}: {e}")

    # --- Reads ---
    def get_attempts(self, category: str) -> List[QuizAttempt]:
        if not self.authenticated:
            return []
        try:
            return self._read_history(category)
        except STORAGE_ERRORS as e:
            logger.error(f"Could not read history for {self.user_id}/{category}: {e}")
            return []

    def get_attempt(self, category: str, index: int) -> Optional[QuizAttempt]:
        attempts = self.get_attempts(category)
        if 0 <= index < len(attempts):
            return attempts[index]
        return None

    def get_latest_attempt(self, category: str) -> Optional[QuizAttempt]:
        if not self.authenticated:
            return None
        try:
            raw = self.client.get(self.latest_key(category))
            if raw:
                return QuizAttempt.model_validate_json(raw)
        except STORAGE_ERRORS as e:
            logger.warning(f"Latest attempt for {self.user_id}/{category} unreadable: {e}")

        attempts = self.get_attempts(category)
        return attempts[0] if attempts else None

    def get_categories(self) -> List[str]:
        """Categories this user has history for, in first-attempt order."""
        if not self.authenticated:
            return []
        try:
            return self._read_manifest()
        except STORAGE_ERRORS as e:
            logger.error(f"Could not read categories for {self.user_id}: {e}")
            return []

    def get_all_attempts_for_user(self) -> Dict[str, List[QuizAttempt]]:
        result = {}
        for category in self.get_categories():
            attempts = self.get_attempts(category)
            if attempts:
                result[category] = attempts
        return result

    def _read_history(self, category: str) -> List[QuizAttempt]:
        raw = self.client.get(self.history_key(category))
        if not raw:
            return []
        return _history_adapter.validate_json(raw)

    def _read_manifest(self) -> List[str]:
        raw = self.client.get(self.manifest_key())
        if not raw:
            return []
        return _manifest_adapter.validate_json(raw)
