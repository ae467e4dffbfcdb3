import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_MAX_ROUNDS = 100


class Settings(BaseModel):
    max_rounds: int = Field(default=DEFAULT_MAX_ROUNDS, gt=0)
    rank_exam_scores: bool = True
    equivalents_path: Optional[str] = None


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    """Load minimizer settings from the environment (and `.env`, if present).

    Raises:
        ValueError: if MINIMIZE_MAX_ROUNDS is not a positive integer
    """
    load_dotenv()

    raw_rounds = os.getenv("MINIMIZE_MAX_ROUNDS")
    max_rounds = DEFAULT_MAX_ROUNDS
    if raw_rounds:
        try:
            max_rounds = int(raw_rounds)
        except ValueError:
            raise ValueError(
                f"MINIMIZE_MAX_ROUNDS must be an integer, got: {raw_rounds}"
            )
        if max_rounds <= 0:
            raise ValueError("MINIMIZE_MAX_ROUNDS must be a positive integer")

    return Settings(
        max_rounds=max_rounds,
        rank_exam_scores=_env_flag("RANK_EXAM_SCORES", True),
        equivalents_path=os.getenv("EQUIVALENTS_PATH") or None,
    )
