"""
Environment file loading for the settings object.

``ENVIRONMENT`` picks the most specific file; ``.env.local`` and ``.env`` fill
whatever it leaves unset. Variables already in the process environment win.
"""

import os
import logging
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Dev servers a local frontend is usually served from
LOCAL_FRONTEND_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def load_env_files(env: Optional[str] = None) -> List[str]:
    env = env or os.getenv("ENVIRONMENT", "development")
    loaded = []
    for env_file in (f".env.{env}", ".env.local", ".env"):
        if os.path.exists(env_file):
            load_dotenv(env_file, override=False)
            loaded.append(env_file)
            logger.info(f"Loaded configuration from: {env_file}")
    return loaded


def cors_origins_for(frontend_url: str) -> List[str]:
    origins = [frontend_url.rstrip("/")]
    if "localhost" in frontend_url or "127.0.0.1" in frontend_url:
        origins.extend(o for o in LOCAL_FRONTEND_ORIGINS if o not in origins)
    return origins


loaded_env_files = load_env_files()
