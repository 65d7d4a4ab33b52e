# procareer/awards.py
from __future__ import annotations

from typing import List, Sequence

from .rng import SimRNG
from .types import Player, SeasonStats

PUSKAS_CHANCE: float = 0.001
GOLDEN_BOOT_MIN_MATCHES: int = 20
GOLDEN_BOOT_BASE: int = 25
POTY_RATING: float = 7.8
BALLON_DOR_RATING: float = 7.8
BALLON_DOR_SCORE: float = 160.0

# trophy name -> score bonus toward the Ballon d'Or
TROPHY_BONUSES = {
    "Champions League Winner": 30,
    "World Cup Winner": 50,
}


def ballon_dor_score(rating: float, trophies: Sequence[str]) -> float:
    return rating * 10 + sum(bonus for name, bonus in TROPHY_BONUSES.items() if name in trophies)


def calculate_awards(player: Player, stats: SeasonStats, trophies: Sequence[str], *, rng: SimRNG) -> List[str]:
    """Individual honours for one season. Any number may land at once."""
    awards: List[str] = []
    total, league = stats.total, stats.league
    elite = player.current_club.tier == 1

    if rng.uniform() < PUSKAS_CHANCE and total.goals > 0:
        awards.append("Puskas Award")

    if elite and league.matches > GOLDEN_BOOT_MIN_MATCHES:
        if league.goals >= GOLDEN_BOOT_BASE + rng.rand_int(-5, 8):
            awards.append("League Golden Boot")
        if league.rating >= POTY_RATING:
            awards.append("League Player of the Year")

    if elite and total.rating > BALLON_DOR_RATING and ballon_dor_score(total.rating, trophies) > BALLON_DOR_SCORE:
        awards.append("Ballon d'Or")
        awards.append("World Player of the Year")
    return awards
