from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Load .env from project root ---
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_PATH, case_sensitive=True, extra="ignore")

    # General
    PROJECT_NAME: str = "RideAlert"
    PORT: int = 3000

    # Data store (managed Postgres + its auth endpoint); all three are required
    DATABASE_URL: str
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # UmoIQ transit API
    UMO_API_KEY: Optional[str] = None
    UMOIQ_BASE_URL: str = "https://webservices.umoiq.com/api/pub/v1"
    AGENCY: str = "unitrans"
    AGENCY_KEYWORDS: str = "unitrans,davis"
    SEARCH_RESULT_LIMIT: int = 10
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @field_validator("SUPABASE_URL", "UMOIQ_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.strip().upper()

    def agency_keywords(self) -> List[str]:
        """Lower-cased locality keywords used to pick the agency out of /agencies."""
        raw = self.AGENCY_KEYWORDS.strip()
        if raw.startswith("["):
            import json
            try:
                return [str(k).strip().lower() for k in json.loads(raw) if str(k).strip()]
            except json.JSONDecodeError:
                raw = raw.strip("[]")
        return [k.strip().lower() for k in raw.split(",") if k.strip()]


# Initialize singleton; a missing DATABASE_URL / SUPABASE_* aborts startup here
settings = Settings()
