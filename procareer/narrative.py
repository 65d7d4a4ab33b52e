# procareer/narrative.py
from __future__ import annotations

from typing import Sequence

from .rng import SimRNG
from .types import SeasonStats


def season_narrative(stats: SeasonStats, trophies: Sequence[str], club_name: str, *, rng: SimRNG) -> str:
    """One line for the season summary card, from the senior totals."""
    total = stats.total
    rating = total.rating

    if total.matches < 5:
        return rng.pick([
            f"A quiet season at {club_name} with limited opportunities.",
            f"Struggled to break into the first team at {club_name}.",
            f"Spent most of the season on the bench at {club_name}.",
        ])
    if rating >= 8.0:
        return rng.pick([
            f"A sensational campaign for {club_name}, dominating the league with a {rating:.2f} rating!",
            f"World-class performances throughout the season at {club_name}.",
            f"The fans at {club_name} are calling you a legend after this season.",
        ])
    if rating >= 7.5:
        return rng.pick([
            f"An excellent season at {club_name}, establishing yourself as a key player.",
            f"Consistently high-level performances for {club_name}.",
            f"A breakout year at {club_name} where you showed your true quality.",
        ])
    if total.goals > 20:
        return f"A goal-scoring masterclass, netting {total.goals} times for {club_name}."
    if total.assists > 15:
        return f"The creative engine of {club_name}, providing {total.assists} assists this season."
    if trophies:
        return f"A successful, trophy-winning season at {club_name}."
    if rating >= 7.0:
        return f"A solid, dependable season of development at {club_name}."
    if rating >= 6.0:
        return f"A mixed season at {club_name} with some ups and downs."
    return f"A difficult season at {club_name}, struggling to find consistent form."
