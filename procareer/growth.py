# procareer/growth.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .config import HIGH_LOAD, MAJOR_INJURY_MARKERS, RECOVERY_EVENT_MARKERS
from .generator import clamp, round_half_up
from .rng import SimRNG
from .types import Player, SeasonLevel, StatSet

logger = logging.getLogger(__name__)

MATCH_LOAD_PER_GAME: float = 0.6
FITNESS_LOAD_DIVISOR: float = 250.0
MATCH_FACTOR_CAP: int = 40
BASE_RECOVERY: float = 7.0
FACILITY_RECOVERY = {1: 3.0, 2: 1.5}
LIFESTYLE_RECOVERY: float = 5.0
RECOVERY_AGE: int = 29


@dataclass(frozen=True)
class GrowthResult:
    new_ability: int
    new_fatigue: int
    growth_log: str


def is_major_injury(description: str) -> bool:
    return any(m in description for m in MAJOR_INJURY_MARKERS)


def had_lifestyle_change(events: Iterable[str]) -> bool:
    return any(m in e for e in events for m in RECOVERY_EVENT_MARKERS)


def match_load(matches: int, natural_fitness: float) -> float:
    return matches * MATCH_LOAD_PER_GAME * (1 - natural_fitness / FITNESS_LOAD_DIVISOR)


def recovery(player: Player, events: Sequence[str]) -> float:
    """Off-season recovery; negative for old enough players with poor fitness."""
    amount = BASE_RECOVERY + player.natural_fitness / 20
    amount += FACILITY_RECOVERY.get(player.current_club.tier, 0.0)
    if had_lifestyle_change(events):
        amount += LIFESTYLE_RECOVERY
    if player.age > RECOVERY_AGE:
        amount -= player.age - RECOVERY_AGE
    return amount


def _age_curve(player: Player, stats: StatSet, level: SeasonLevel, rng: SimRNG) -> tuple[float, str]:
    rating_factor = (stats.rating - 6.0) * 2
    match_factor = min(stats.matches, MATCH_FACTOR_CAP) / MATCH_FACTOR_CAP
    age = player.age

    if age < 21:
        growth = (rng.rand_int(2, 5) + rating_factor) * match_factor
        if level is SeasonLevel.SENIOR and stats.matches > 10:
            growth *= 1.5
        elif level.is_age_group:
            growth *= 0.8
        return growth, "Developing well."
    if age < 28:
        return (rng.rand_int(0, 3) + rating_factor) * match_factor, "Entering prime years."
    if age < 32:
        return rating_factor * 0.5 - rng.rand_int(0, 2), "Maintaining fitness."
    return -rng.rand_int(2, 5) + rating_factor * 0.5, "Physical decline."


def calculate_growth(
    player: Player,
    stats: StatSet,
    level: SeasonLevel,
    events: Sequence[str] = (),
    injuries: Sequence[str] = (),
    *,
    rng: SimRNG,
) -> GrowthResult:
    """
    Plain-English:
      - `stats` is everything the player played this season (senior, youth and
        international together), so benched youngsters still pick up load.
      - Free agents lose 2-4 ability and pile on stress with no recovery.
      - Everyone else grows on an age curve scaled by rating and games played,
        then recovers in the off-season (less so past 29).
      - Ability stays within [1, potential]; fatigue never drops below 0 and has no cap.
    """
    fatigue = float(player.fatigue)
    notes: List[str] = []

    if level is SeasonLevel.FREE_AGENT:
        growth = float(-rng.rand_int(2, 4))
        fatigue_gain = 8 + fatigue * 0.1
        notes.append("Attributes declining without a club.")
    else:
        growth, note = _age_curve(player, stats, level, rng)
        notes.append(note)
        if fatigue > HIGH_LOAD:
            growth -= 2
            notes.append("High body load hindering progress.")
        if player.current_club.tier == 1:
            growth += 1
        fatigue_gain = match_load(stats.matches, player.natural_fitness)

    for injury in injuries:
        if is_major_injury(injury):
            fatigue_gain += rng.rand_int(5, 10)
            growth -= 1
            notes.append("Major injury setback.")
        else:
            fatigue_gain += 1

    ceiling = min(player.potential_ability, 99)
    new_ability = clamp(player.current_ability + growth, 1, max(1, ceiling))

    new_fatigue = fatigue + fatigue_gain
    if level is not SeasonLevel.FREE_AGENT:
        if had_lifestyle_change(events):
            notes.append("Lifestyle improvements aiding recovery.")
        new_fatigue = max(0.0, new_fatigue - recovery(player, events))

    ability_out = int(clamp(round_half_up(new_ability), 1, max(1, ceiling)))
    fatigue_out = max(0, round_half_up(new_fatigue))
    diff = ability_out - player.current_ability
    log = f"{'+' if diff > 0 else ''}{diff} Ability. " + " ".join(notes)

    logger.debug("growth %s age=%s: %s -> %s, fatigue %s -> %s",
                 player.name, player.age, player.current_ability, ability_out, player.fatigue, fatigue_out)
    return GrowthResult(new_ability=ability_out, new_fatigue=fatigue_out, growth_log=log)
