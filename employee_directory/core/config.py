import sys
from pathlib import Path

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    API_BASE_URL: str = "http://localhost:5000/api"
    API_TIMEOUT_SECONDS: float = 30.0

    SESSION_FILE: Path = Path.home() / ".employee-directory" / "session.json"

    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
