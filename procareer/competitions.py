# procareer/competitions.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Dict, Sequence, Tuple

from .config import (
    ADVANCE_BASE_PROB, ADVANCE_STRENGTH_COEF, CONTINENTAL_COMPETITIONS,
    CONTINENTAL_ROUNDS, CUP_ENTRY_ROUND, CUP_ROUNDS, MID_SEASON_ROUNDS_LEFT,
)
from .rng import SimRNG
from .types import Club, ContinentalTier, require


class CompetitionState(Enum):
    NOT_ENTERED = auto()
    ACTIVE = auto()
    ELIMINATED = auto()
    WINNER = auto()


@dataclass(frozen=True)
class CompetitionProgress:
    """
    Where a club stands in one knockout competition.
    Decisions read `state`; the display string only comes out of label().
    """
    rounds: Tuple[str, ...]
    state: CompetitionState = CompetitionState.NOT_ENTERED
    round_index: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.state in (CompetitionState.ELIMINATED, CompetitionState.WINNER)

    @property
    def is_live(self) -> bool:
        return self.state is CompetitionState.ACTIVE

    @property
    def current_round(self) -> str:
        return self.rounds[self.round_index]

    def label(self) -> str:
        if self.state is CompetitionState.WINNER:
            return "Winner"
        if self.state is CompetitionState.ELIMINATED:
            return f"Eliminated in {self.current_round}"
        if self.state is CompetitionState.ACTIVE:
            return f"{self.current_round} (Active)"
        return "Not Qualified"

    def to_dict(self) -> Dict[str, Any]:
        return {"rounds": list(self.rounds), "state": self.state.name, "round_index": self.round_index}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CompetitionProgress":
        return cls(
            rounds=tuple(d["rounds"]),
            state=CompetitionState[d.get("state", "NOT_ENTERED")],
            round_index=int(d.get("round_index", 0)),
        )


def enter(rounds: Sequence[str], at_round: str) -> CompetitionProgress:
    """Enter a competition at a named round."""
    rounds = tuple(rounds)
    require(len(rounds) >= 2, "a competition needs at least one round before 'Winner'")
    require(at_round in rounds[:-1], f"unknown entry round {at_round!r}")
    return CompetitionProgress(rounds=rounds, state=CompetitionState.ACTIVE, round_index=rounds.index(at_round))


def not_entered(rounds: Sequence[str]) -> CompetitionProgress:
    return CompetitionProgress(rounds=tuple(rounds))


def advance_probability(team_strength: float) -> float:
    return ADVANCE_BASE_PROB + team_strength * ADVANCE_STRENGTH_COEF


def advance(progress: CompetitionProgress, team_strength: float, *, mid_season: bool, rng: SimRNG) -> CompetitionProgress:
    """
    Play rounds until the club is knocked out or lifts the trophy.
    In the first half, stop with the club still alive once it reaches the
    fourth-from-last label. Terminal and never-entered progress is returned as is.
    """
    if progress.state is not CompetitionState.ACTIVE:
        return progress

    rounds = progress.rounds
    last = len(rounds) - 1
    cap = len(rounds) - MID_SEASON_ROUNDS_LEFT
    p = advance_probability(team_strength)

    idx = progress.round_index
    while idx < last:
        if mid_season and idx >= cap:
            return replace(progress, round_index=idx)
        if rng.uniform() < p:
            idx += 1
            if idx == last:
                return replace(progress, state=CompetitionState.WINNER, round_index=idx)
        else:
            return replace(progress, state=CompetitionState.ELIMINATED, round_index=idx)
    return replace(progress, state=CompetitionState.WINNER, round_index=last)


# ---------- the two club competitions ----------

def domestic_cup() -> CompetitionProgress:
    return enter(CUP_ROUNDS, CUP_ENTRY_ROUND)


def continental_cup(club: Club) -> CompetitionProgress:
    if club.continental_tier is ContinentalTier.NONE:
        return not_entered(CONTINENTAL_ROUNDS)
    # qualifying is skipped for clubs already placed in a continental tier
    return enter(CONTINENTAL_ROUNDS, CONTINENTAL_ROUNDS[1])


def continental_name(club: Club) -> str:
    return CONTINENTAL_COMPETITIONS.get(int(club.continental_tier), "Continental Cup")
