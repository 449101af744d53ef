"""Library settings — environment variables over code defaults.

Priority chain (highest to lowest):
  1. Init kwargs  — passed by the embedding service
  2. Env vars     — ``API_RESPONSE_*`` prefix
  3. Code defaults — baked in below

Uses Pydantic Settings v2. :func:`get_settings` caches one instance per
process; :func:`reset_settings` drops it (tests, reconfiguration).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for encoding and logging, frozen after construction.

    Attributes:
        include_debug_message: Emit ``debugMessage`` in encoded errors.
            Services exposed to untrusted clients usually turn this off.
        verbose: Enable DEBUG-level library logging.
        log_json: Render log records as JSON lines instead of console text.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "API_RESPONSE_",
    }

    include_debug_message: bool = True
    verbose: bool = False
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings() -> None:
    get_settings.cache_clear()
