# procareer/generator.py
from __future__ import annotations

import math
from typing import Dict, Tuple

from .rng import SimRNG
from .types import Position, StatSet, require

# ---------- tuning constants ----------
RATING_BASE: float = 6.4
RATING_BOUNDS: Tuple[float, float] = (5.5, 9.9)
MOTM_RATING_GATE: float = 8.2

# Output per effective match, multiplied by per-game performance.
# (goals, assists, clean sheets)
PRODUCTION: Dict[Position, Tuple[float, float, float]] = {
    Position.FWD: (0.7, 0.25, 0.0),
    Position.MID: (0.25, 0.5, 0.2),
    Position.DEF: (0.06, 0.1, 0.45),
    Position.GK: (0.0, 0.0, 0.55),
}
GK_ASSIST_RATE: float = 0.02   # per effective match, not scaled by performance

# Rating bonus per unit of per-match (goals, assists, clean sheets).
# Rare contributions are weighted up (a defender's goal beats a forward's).
RATING_WEIGHTS: Dict[Position, Tuple[float, float, float]] = {
    Position.FWD: (2.2, 1.2, 0.0),
    Position.MID: (1.6, 1.6, 0.4),
    Position.DEF: (2.5, 1.4, 1.8),
    Position.GK: (0.0, 3.0, 2.2),
}


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _floor_count(x: float) -> int:
    return max(0, int(math.floor(x)))


def start_ratio(matches: int, rng: SimRNG) -> float:
    if matches > 25:
        ratio = 0.9
    elif matches < 5:
        ratio = 0.2
    else:
        ratio = 0.6
    return clamp(ratio + rng.between(-0.1, 0.1), 0.1, 1.0)


def _production(position: Position, effective_matches: float, per_game: float, rng: SimRNG) -> Tuple[int, int, int]:
    g_w, a_w, cs_w = PRODUCTION[position]
    unit = effective_matches * per_game
    if position is Position.FWD:
        goals = _floor_count(unit * g_w * (rng.uniform() + 0.4))
    else:
        goals = _floor_count(unit * g_w)
    if position is Position.GK:
        assists = _floor_count(effective_matches * GK_ASSIST_RATE)
    else:
        assists = _floor_count(unit * a_w)
    clean_sheets = _floor_count(unit * cs_w)
    return goals, assists, clean_sheets


def _rating(position: Position, matches: int, goals: int, assists: int, clean_sheets: int,
            advantage: float, rng: SimRNG) -> float:
    g_w, a_w, cs_w = RATING_WEIGHTS[position]
    bonus = (goals / matches) * g_w + (assists / matches) * a_w + (clean_sheets / matches) * cs_w
    diff_bonus = advantage / 25
    variance = rng.uniform() * 0.8 - 0.1
    lo, hi = RATING_BOUNDS
    return clamp(RATING_BASE + bonus + diff_bonus + variance, lo, hi)


def _motm(matches: int, rating: float, rng: SimRNG) -> int:
    if rating <= MOTM_RATING_GATE:
        return 0
    motm = int(math.floor(matches * 0.15 * (rating - 7.5)))
    if motm < 1 and matches > 0 and rng.uniform() < 0.3:
        motm = 1
    return min(motm, matches)


def generate_stat_set(matches: int, ability: float, position: Position, opponent_strength: float,
                      *, rng: SimRNG, is_cup: bool = False) -> StatSet:
    """
    Procedural output for `matches` appearances against opposition of a given strength.

    Zero appearances is always the exact zero record. Otherwise: roll a form
    multiplier, derive per-game performance from ability and the advantage over
    the opponent, split starts/subs, turn minutes into full-match equivalents,
    floor the per-position production, then rate it.
    `is_cup` is accepted for call-site symmetry; cups use the same formulas.
    """
    require(matches >= 0, f"appearances must be >= 0, got {matches}")
    require(ability >= 0, f"ability must be >= 0, got {ability}")
    if matches == 0:
        return StatSet()

    form = rng.between(0.90, 1.10)
    effective_ability = ability * form
    advantage = effective_ability - opponent_strength
    per_game = (effective_ability + advantage / 2) / 100

    starts = round_half_up(matches * start_ratio(matches, rng))
    subs = matches - starts
    minutes = starts * rng.rand_int(75, 90) + subs * rng.rand_int(10, 35)
    effective_matches = minutes / 90

    goals, assists, clean_sheets = _production(position, effective_matches, per_game, rng)
    rating = _rating(position, matches, goals, assists, clean_sheets, advantage, rng)
    motm = _motm(matches, rating, rng)

    return StatSet(
        matches=matches,
        starts=starts,
        minutes=minutes,
        goals=goals,
        assists=assists,
        clean_sheets=clean_sheets,
        rating=round(rating, 2),
        motm=motm,
    )
