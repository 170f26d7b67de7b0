"""Event id generation."""

import logging
import os
import time
import uuid

from flatlog.core.errors import IdGenerationError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 1000
RETRY_DELAY_SECONDS = 0.1


def generate_id(
    attempts: int = MAX_ATTEMPTS, retry_delay: float = RETRY_DELAY_SECONDS
) -> str:
    """Return a random RFC 4122 version 4 UUID string.

    Reading the OS randomness source is retried up to ``attempts`` times,
    sleeping ``retry_delay`` seconds between failures.

    Raises:
        IdGenerationError: Every attempt failed.
    """
    for attempt in range(attempts):
        try:
            raw = os.urandom(16)
        except (OSError, NotImplementedError) as exc:
            logger.debug("randomness read failed (attempt %d): %s", attempt + 1, exc)
            time.sleep(retry_delay)
            continue
        return str(uuid.UUID(bytes=raw, version=4))
    raise IdGenerationError("failed to create uuid")
