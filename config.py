# config.py
from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


# =========================
# Scoring
# =========================

MAX_SCORE: int = 20  # both sides of a pairing always sum to this
NEUTRAL_SCORE: int = 10
ROSTER_SIZE: int = 5
PAIRINGS_PER_ROUND: int = 2  # one defender + one attacker per side


# =========================
# Simulation
# =========================

SIM_GAMES: int = int(os.getenv("PAIRING_SIM_GAMES", "200"))
_seed = os.getenv("PAIRING_SIM_SEED", "")
SIM_SEED: Optional[int] = int(_seed) if _seed.strip() else None


# =========================
# Logging
# =========================

LOG_LEVEL: str = os.getenv("PAIRING_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
