# procareer/config.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

# -------- League / Season --------
LEAGUE_SIZE: int = 20                # teams per simulated league
GAMES_FULL_SEASON: int = 38          # double round robin of 20
GAMES_HALF_SEASON: int = 19
SENIOR_BASE_GAMES: int = 38          # league games a senior regular can play
YOUTH_BASE_GAMES: int = 20           # youth/reserve fixtures per season
APPEARANCE_SCALE: int = 45           # role apps are out of 45

# Points (W-D-L = 3-1-0)
POINTS_WIN: int = 3
POINTS_DRAW: int = 1

# Baseline strength per tier; 40 for anything unmodeled
TIER_BASE_STRENGTH: Dict[int, int] = {1: 82, 2: 72, 3: 62, 4: 52, 5: 42}
TIER_BASE_FALLBACK: int = 40

TIER_NAMES: Dict[int, str] = {
    1: "Premier Division",
    2: "Championship Division",
    3: "League One / Tier 3",
    4: "League Two / Tier 4",
    5: "National / Tier 5",
}

# Table win/lose probability: 0.35 +/- (strength - baseline) * 0.015, clamped
TABLE_BASE_PROB: float = 0.35
TABLE_STRENGTH_COEF: float = 0.015
TABLE_PROB_BOUNDS: Tuple[float, float] = (0.1, 0.8)

# Zone tags / progression thresholds
PROMOTION_SPOTS: int = 3
CONTINENTAL_SPOTS: int = 4
RELEGATION_FROM: int = 18
STRENGTH_BOUNDS: Tuple[int, int] = (20, 99)
FILLER_STRENGTH_BOUNDS: Tuple[int, int] = (10, 99)

# -------- Competitions --------
CUP_ROUNDS: List[str] = [
    "Round 1", "Round 2", "Round 3", "Round 4",
    "Quarter Final", "Semi Final", "Final", "Winner",
]
CONTINENTAL_ROUNDS: List[str] = [
    "Qualifying", "Group Stage", "Round of 16",
    "Quarter Final", "Semi Final", "Final", "Winner",
]
CUP_ENTRY_ROUND: str = "Round 3"
ADVANCE_BASE_PROB: float = 0.35
ADVANCE_STRENGTH_COEF: float = 0.004
# a first-half run stops this many labels before the end of the list
MID_SEASON_ROUNDS_LEFT: int = 4

CONTINENTAL_COMPETITIONS: Dict[int, str] = {
    1: "Conference League",
    2: "Europa League",
    3: "Champions League",
}

# -------- Injuries --------
# (severity roll strictly above, weeks out, description, headline event or None)
INJURY_TABLE: List[Tuple[float, int, str, Optional[str]]] = [
    (0.92, 24, "ACL Tear (6 months)", "Serious Injury: ACL Tear"),
    (0.80, 12, "Broken Foot (3 months)", None),
    (0.50, 4, "Hamstring Strain (1 month)", None),
    (-1.0, 2, "Ankle Sprain (2 weeks)", None),
]
INJURY_ROLL_SCALE: float = 1000.0
INJURY_PRONE_WEIGHT: float = 0.5
INJURY_FATIGUE_WEIGHT: float = 0.8
INJURY_HIGH_LOAD_MULT: float = 1.5
MID_SEASON_MAX_WEEKS_OUT: int = 12
AVAILABILITY_WINDOW_WEEKS: int = 24
MAJOR_INJURY_MARKERS: Tuple[str, ...] = ("ACL", "Broken", "Tear")

# -------- Fatigue / body load --------
HIGH_LOAD: int = 85
MODERATE_LOAD: int = 60
FORCED_RETIREMENT_LOAD: int = 110

# -------- Life events --------
LIFE_EVENT_CHANCE: float = 0.2
RECOVERY_EVENTS: List[str] = ["Hired private physio", "Adopted new diet", "Started yoga"]
RECOVERY_EVENT_MARKERS: Tuple[str, ...] = ("physio", "yoga", "diet")

# -------- International --------
ELITE_NATIONS: Tuple[str, ...] = (
    "Argentina", "Brazil", "England", "France", "Germany",
    "Italy", "Portugal", "Spain", "Netherlands",
)
ELITE_NATION_STRENGTH: int = 88
NATION_STRENGTH: int = 70
SELECTION_ABILITY: int = 60
U21_SELECTION_ABILITY: int = 50

# -------- RNG / Seeds --------
DEFAULT_SEED: int = 1337
START_YEAR: int = 2024

# -------- Saves --------
SAVE_DIR = "saves"
SCHEMA_VERSION: int = 1


@dataclass
class Modifiers:
    """Career-wide rule switches picked at creation."""
    no_transfers: bool = False
    no_starts_under_21: bool = False       # "strict youth": non-loaned under-21s play U21
    force_move_every_year: bool = False
    random_life_events: bool = True
    injuries_off: bool = False
    disliked_teams: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "Modifiers":
        d = dict(d or {})
        d["disliked_teams"] = list(d.get("disliked_teams", []))
        return cls(**d)
