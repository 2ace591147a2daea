from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration, read from the environment at construction."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("CARDIO_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("CARDIO_DB_PATH") or (self.data_root / "cardiohealth.db")
        ).expanduser()
        # In production you MUST set CARDIO_JWT_SECRET. The fallback only exists for local runs.
        self.jwt_secret: str = os.environ.get("CARDIO_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("CARDIO_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("CARDIO_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.log_level: str = (os.environ.get("CARDIO_LOG_LEVEL") or "INFO").strip().upper()

        cors = os.environ.get("CARDIO_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
