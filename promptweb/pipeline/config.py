"""
Pipeline configuration constants.
================================
Centralizes step ids, limits, runtime options and credentials.
"""
import os
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidInput


class StepIds:
    """Stable step identifiers, in execution order."""
    ANALYZE = "analyze"
    REPO = "repo"
    SETUP = "setup"
    DATABASE = "database"
    STRUCTURE = "structure"
    GENERATE = "generate"
    COMMIT = "commit"
    DEPLOY = "deploy"


class FileNames:
    """Standard file names for local artifacts."""
    ANALYSIS = "analysis.json"
    FILES_DIR = "files"


class Limits:
    """Pipeline limits and thresholds."""
    MAX_BLOB_CONCURRENCY = 8
    HTTP_TIMEOUT = 60.0
    LLM_TIMEOUT = 300.0
    LLM_MAX_TOKENS = 32000
    SHORT_SHA_LENGTH = 7


class Defaults:
    LLM_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
    LLM_MODEL = "gemini-2.5-flash"
    BRANCH = "main"
    SUPABASE_REGION = "ap-southeast-1"


@dataclass
class PipelineConfig:
    """Runtime options for one pipeline run."""
    private_repository: bool = False
    include_scaffold: bool = False
    fallback_on_error: bool = False
    output_dir: Optional[str] = None
    branch: Optional[str] = None
    verbose: bool = True


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "t", "y", "yes")


@dataclass
class Settings:
    """Credentials and endpoints, normally read from the environment."""
    github_token: str = ""
    gemini_api_key: str = ""
    vercel_token: str = ""
    supabase_token: str = ""
    llm_base_url: str = Defaults.LLM_BASE_URL
    llm_model: str = Defaults.LLM_MODEL
    supabase_region: str = Defaults.SUPABASE_REGION
    http_timeout: float = Limits.HTTP_TIMEOUT
    log_level: str = "INFO"
    private_repository: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = os.getenv("HTTP_TIMEOUT")
        try:
            http_timeout = float(timeout) if timeout else Limits.HTTP_TIMEOUT
        except ValueError as e:
            raise InvalidInput(f"HTTP_TIMEOUT must be a number, got {timeout!r}") from e

        return cls(
            github_token=os.getenv("GITHUB_TOKEN", "").strip(),
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            vercel_token=os.getenv("VERCEL_TOKEN", "").strip(),
            supabase_token=os.getenv("SUPABASE_TOKEN", "").strip(),
            llm_base_url=os.getenv("LLM_BASE_URL") or Defaults.LLM_BASE_URL,
            llm_model=os.getenv("LLM_MODEL") or Defaults.LLM_MODEL,
            supabase_region=os.getenv("SUPABASE_REGION") or Defaults.SUPABASE_REGION,
            http_timeout=http_timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            private_repository=_get_bool_env("PRIVATE_REPOSITORY"),
        )

    @property
    def database_configured(self) -> bool:
        return bool(self.supabase_token)

    @property
    def deployment_configured(self) -> bool:
        return bool(self.vercel_token)

    def validate(self):
        """Raises InvalidInput naming the first missing required credential."""
        if not self.github_token:
            raise InvalidInput("GITHUB_TOKEN is not set")
        if not self.gemini_api_key:
            raise InvalidInput("GEMINI_API_KEY is not set")
