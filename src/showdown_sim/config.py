"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


# Simulation size
NUM_GAMES = int(os.getenv("SHOWDOWN_NUM_GAMES", "1000000"))
NUM_PLAYERS = int(os.getenv("SHOWDOWN_NUM_PLAYERS", "6"))

# Parallelism: 0 means one worker per CPU
WORKERS = int(os.getenv("SHOWDOWN_WORKERS", "0"))
BATCH_SIZE = int(os.getenv("SHOWDOWN_BATCH_SIZE", "10000"))

# Reproducibility
SEED = _optional_int("SHOWDOWN_SEED")

# Logging
LOG_LEVEL = os.getenv("SHOWDOWN_LOG_LEVEL", "WARNING")


def resolve_workers(workers: int) -> int:
    """Map the 0 sentinel to the machine's CPU count."""
    if workers == 0:
        return os.cpu_count() or 1
    return workers
