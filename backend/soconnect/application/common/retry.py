"""Retry policy for idempotent reads against the external store."""

import logging
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from soconnect.config.settings import Config
from soconnect.domain.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

# Reads only. Appends must not go through this: a blind retry could
# store the same message twice.
read_retry = retry(
    retry=retry_if_exception_type(TransientStoreError),
    stop=stop_after_attempt(Config.STORE_READ_ATTEMPTS),
    wait=wait_exponential(multiplier=Config.STORE_RETRY_BACKOFF, max=4),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
