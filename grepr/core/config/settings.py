# File: grepr/core/config/settings.py

import os


class Settings:
    # --- Search ---
    RECURSIVE_FLAG: str = "-r"

    # --- Worker Pool ---
    # Parsed on access; SearchOrchestrator reports bad values
    @property
    def WORKER_COUNT(self) -> int:
        return int(os.getenv("GREPR_WORKERS", "4"))

    # 0 means unbounded
    @property
    def QUEUE_DEPTH(self) -> int:
        return int(os.getenv("GREPR_QUEUE_DEPTH", "0"))

    @property
    def POLL_INTERVAL_SECONDS(self) -> float:
        return float(os.getenv("GREPR_POLL_INTERVAL", "0.1"))

    # "pooled" or "sequential"
    EXECUTION_MODE: str = os.getenv("GREPR_EXECUTION_MODE", "pooled").lower()

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("GREPR_LOG_LEVEL", "WARNING").upper()

    # --- Job History ---
    RECORD_HISTORY: bool = os.getenv("GREPR_RECORD_HISTORY", "false").lower() == "true"

    @property
    def DATABASE_URL(self) -> str:
        return os.getenv("GREPR_DATABASE_URL", "sqlite:///./grepr_history.db")


settings = Settings()
