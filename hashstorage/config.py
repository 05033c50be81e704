"""
Environment configuration.

Environment Variables:
    HASHSTORAGE_API_ROOT: Remote service root - default: http://localhost:8000
    HASHSTORAGE_HOME: Directory for the local store - default: ~/.hashstorage
    HASHSTORAGE_VERSION_PREFIX: Version record prefix - default: hslsvc
    HASHSTORAGE_TIMEOUT: HTTP timeout in seconds - default: 10
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .block.version_guard import DEFAULT_PREFIX
from .remote.http_store import DEFAULT_TIMEOUT

DEFAULT_API_ROOT = "http://localhost:8000"
LOCAL_STORE_FILENAME = "local.json"


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    val = env.get(key)
    if not val:
        return default
    try:
        parsed = float(val)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    """
    Client settings.

    Fields:
        api_root: Remote service root URL
        home: Directory holding the file local store
        version_prefix: Namespace prefix of version records
        timeout: HTTP timeout (seconds)
    """
    api_root: str = DEFAULT_API_ROOT
    home: str = str(Path.home() / ".hashstorage")
    version_prefix: str = DEFAULT_PREFIX
    timeout: float = DEFAULT_TIMEOUT

    @property
    def local_store_path(self) -> str:
        return os.path.join(self.home, LOCAL_STORE_FILENAME)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from the environment (os.environ by default)."""
        env = os.environ if env is None else env
        return cls(
            api_root=env.get("HASHSTORAGE_API_ROOT") or DEFAULT_API_ROOT,
            home=env.get("HASHSTORAGE_HOME") or str(Path.home() / ".hashstorage"),
            version_prefix=env.get("HASHSTORAGE_VERSION_PREFIX") or DEFAULT_PREFIX,
            timeout=_env_float(env, "HASHSTORAGE_TIMEOUT", DEFAULT_TIMEOUT),
        )
