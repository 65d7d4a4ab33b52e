# procareer package marker
# procareer/__init__.py
from .awards import calculate_awards
from .career import Career, SeasonOutcome, finalize_season, must_retire, new_player
from .growth import GrowthResult, calculate_growth
from .market import classify_role, estimated_appearances, is_surplus, market_value
from .rng import SimRNG, child_rng, mix
from .roster import ClubRoster, FREE_AGENT_CLUB
from .save import save_career, load_career
from .season import SeasonPerformance, simulate_season_performance
from .stats import merge, merge_many
from .types import Club, Contract, Player, Position, Role, SeasonHalf, SeasonLevel, SeasonStats, StatSet

__all__ = [
    "Career", "SeasonOutcome", "finalize_season", "must_retire", "new_player",
    "SeasonPerformance", "simulate_season_performance",
    "GrowthResult", "calculate_growth",
    "calculate_awards",
    "classify_role", "estimated_appearances", "is_surplus", "market_value",
    "merge", "merge_many",
    "SimRNG", "child_rng", "mix",
    "ClubRoster", "FREE_AGENT_CLUB",
    "save_career", "load_career",
    "Club", "Contract", "Player", "Position", "Role", "SeasonHalf", "SeasonLevel", "SeasonStats", "StatSet",
]
