"""Configuration settings for the catalog sync job."""
import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from catalog_sync.exceptions import ConfigurationError
from catalog_sync.matching import MatchPolicy

REQUIRED_KEYS = ("MONGO_URI", "WEAVIATE_HOST", "WEAVIATE_API_KEY")


class SyncSettings:
    """Settings for one sync run, read from environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ

        # Connection settings (required)
        self.MONGO_URI: str = env.get("MONGO_URI", "")
        self.WEAVIATE_HOST: str = env.get("WEAVIATE_HOST", "")
        self.WEAVIATE_API_KEY: str = env.get("WEAVIATE_API_KEY", "")

        # MongoDB Configuration
        self.MONGO_DATABASE: Optional[str] = env.get("MONGO_DATABASE") or None
        self.PRODUCT_COLLECTION: str = env.get("PRODUCT_COLLECTION", "products")
        self.CROSS_REF_FIELD: str = env.get("CROSS_REF_FIELD", "weaviateId")
        self.NAME_FIELD: str = env.get("NAME_FIELD", "name")

        # Weaviate Configuration
        self.WEAVIATE_SCHEME: str = env.get("WEAVIATE_SCHEME", "https")
        self.WEAVIATE_CLASS: str = env.get("WEAVIATE_CLASS", "Product")
        self.WEAVIATE_TIMEOUT: Optional[float] = _optional_float(env, "WEAVIATE_TIMEOUT")

        # Matching
        self.MATCH_POLICY: str = env.get("MATCH_POLICY", MatchPolicy.FIRST.value)
        self.MATCH_LIMIT: int = _int(env, "MATCH_LIMIT", 100)

        # Logging Configuration
        self.LOG_LEVEL: str = env.get("LOG_LEVEL", "INFO")
        self.LOG_FILE: Optional[str] = env.get("LOG_FILE") or None

    @classmethod
    def from_env(cls, env_file: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None) -> "SyncSettings":
        """Load a .env file (if any) and build validated settings.

        Variables already present in the environment win over the file.
        """
        if environ is None:
            if env_file and not os.path.isfile(env_file):
                raise ConfigurationError(f"env file {env_file} not found")
            load_dotenv(env_file or os.path.join(os.getcwd(), ".env"), override=False)
        settings = cls(environ)
        settings.validate()
        return settings

    def missing_keys(self) -> List[str]:
        return [key for key in REQUIRED_KEYS if not getattr(self, key)]

    @property
    def match_policy(self) -> MatchPolicy:
        return MatchPolicy.parse(self.MATCH_POLICY)

    def validate(self) -> bool:
        """Validate required settings, raising ConfigurationError on the first problem."""
        missing = self.missing_keys()
        if missing:
            raise ConfigurationError(
                f"You must set {', '.join(REQUIRED_KEYS)} in the environment or .env "
                f"(missing: {', '.join(missing)})",
                missing=missing,
            )
        try:
            self.match_policy
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        if self.MATCH_LIMIT < 1:
            raise ConfigurationError(f"MATCH_LIMIT must be at least 1, got {self.MATCH_LIMIT}")
        return True

    def __repr__(self) -> str:
        return (
            f"SyncSettings(host={self.WEAVIATE_HOST!r}, class={self.WEAVIATE_CLASS!r}, "
            f"collection={self.PRODUCT_COLLECTION!r}, policy={self.MATCH_POLICY!r})"
        )


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e


def _optional_float(env: Mapping[str, str], key: str) -> Optional[float]:
    raw = env.get(key)
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}") from e
