# procareer/stats.py
from __future__ import annotations

from typing import Dict, Iterable, Mapping

from .types import Position, StatSet

EMPTY = StatSet()

# ---------- merging ----------

def _weighted_rating(parts: Iterable[StatSet]) -> float:
    played = [s for s in parts if s.matches > 0]
    if not played:
        return 0.0
    if len(played) == 1:
        return played[0].rating
    num = sum(s.rating * s.matches for s in played)
    den = sum(s.matches for s in played)
    return num / den


def merge_many(*parts: StatSet) -> StatSet:
    """
    Sum every count field and take the matches-weighted mean rating.
    Zero-match records carry no weight, so StatSet() is the identity.
    """
    return StatSet(
        matches=sum(s.matches for s in parts),
        starts=sum(s.starts for s in parts),
        minutes=sum(s.minutes for s in parts),
        goals=sum(s.goals for s in parts),
        assists=sum(s.assists for s in parts),
        clean_sheets=sum(s.clean_sheets for s in parts),
        rating=_weighted_rating(parts),
        motm=sum(s.motm for s in parts),
    )


def merge(a: StatSet, b: StatSet) -> StatSet:
    return merge_many(a, b)


def merge_breakdowns(a: Mapping[str, StatSet], b: Mapping[str, StatSet]) -> Dict[str, StatSet]:
    out: Dict[str, StatSet] = dict(a)
    for key, val in b.items():
        out[key] = merge(out[key], val) if key in out else val
    return out


# ---------- per-match ratios ----------

def per_match(s: StatSet) -> Dict[str, float]:
    if s.matches == 0:
        return {"goals": 0.0, "assists": 0.0, "clean_sheets": 0.0, "motm": 0.0}
    m = float(s.matches)
    return {
        "goals": s.goals / m,
        "assists": s.assists / m,
        "clean_sheets": s.clean_sheets / m,
        "motm": s.motm / m,
    }


# ---------- form ----------

def calculate_form(stats: StatSet, position: Position) -> int:
    """
    Momentum score 1..99 for the coming season.
    6.5 rating is neutral (50); every rating point is worth 25 form points,
    then position output and MOTM share nudge it.
    """
    if stats.matches == 0:
        return 50

    base = 50.0 + (stats.rating - 6.5) * 25
    r = per_match(stats)
    g, a, cs = r["goals"], r["assists"], r["clean_sheets"]

    if position is Position.FWD:
        if g > 0.8:
            base += 10
        elif g > 0.5:
            base += 5
        if g < 0.2:
            base -= 5
    elif position is Position.MID:
        if a > 0.4:
            base += 10
        elif a > 0.2:
            base += 5
        if g > 0.25:
            base += 5
    elif position is Position.DEF:
        if cs > 0.4:
            base += 8
        if g > 0.1:
            base += 5
    elif position is Position.GK:
        if cs > 0.45:
            base += 10

    base += r["motm"] * 20
    return max(1, min(99, int(round(base))))
