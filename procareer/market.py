# procareer/market.py
from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from .roster import is_free_agent
from .types import ContractType, Player, Position, Role, SeasonStats, require

# ---------- squad role ----------

# (minimum ability - club strength, role); first match wins
ROLE_THRESHOLDS: List[Tuple[int, Role]] = [
    (5, Role.STAR),
    (-2, Role.IMPORTANT),
    (-8, Role.REGULAR),
    (-15, Role.ROTATION),
    (-25, Role.BACKUP),
]

# Expected appearances out of 45 for each role
ROLE_APPEARANCES: Dict[Role, int] = {
    Role.STAR: 45,
    Role.IMPORTANT: 38,
    Role.REGULAR: 30,
    Role.ROTATION: 18,
    Role.BACKUP: 8,
    Role.YOUTH: 0,
}


def classify_role(ability: float, club_strength: float) -> Role:
    diff = ability - club_strength
    for floor, role in ROLE_THRESHOLDS:
        if diff >= floor:
            return role
    return Role.YOUTH


def estimated_appearances(role: Role) -> int:
    return ROLE_APPEARANCES.get(role, 0)


# ---------- market value ----------

VALUE_FLOOR: int = 25_000
VALUE_STEP: int = 10_000
VALUE_BASE_COEF: int = 18

CONTRACT_MULTIPLIERS: Dict[int, float] = {2: 0.85, 3: 1.0, 4: 1.15}


def age_multiplier(age: int, ability: float, potential: float) -> float:
    if age < 22:
        return 1.5 + (potential - ability) / 40
    if age > 30:
        return 0.8 - (age - 30) * 0.15
    return 1.0


def contract_multiplier(years_left: int) -> float:
    if years_left <= 1:
        return 0.6
    if years_left >= 5:
        return 1.3
    return CONTRACT_MULTIPLIERS[int(years_left)]


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def market_value(ability: float, age: int, potential: float, position: Position, contract_years_left: int) -> int:
    """
    ability^3 * 18, scaled by age (youth premium / veteran decay) and contract length.
    Always a multiple of 10,000 and never under the 25,000 floor.
    Position is part of the signature for callers but does not change the price.
    """
    require(ability >= 0, f"ability must be >= 0, got {ability}")
    require(potential >= 0, f"potential must be >= 0, got {potential}")
    require(contract_years_left >= 0, f"contract years must be >= 0, got {contract_years_left}")

    base = (ability ** 3) * VALUE_BASE_COEF
    value = base * age_multiplier(age, ability, potential) * contract_multiplier(contract_years_left)
    value = max(float(VALUE_FLOOR), value)
    return _round_half_up(value / VALUE_STEP) * VALUE_STEP


def player_market_value(player: Player) -> int:
    return market_value(
        player.current_ability, player.age, player.potential_ability,
        player.position, player.contract.years_left,
    )


# ---------- surplus / stars ----------

def is_surplus(player: Player, stats: Optional[SeasonStats] = None) -> bool:
    """Does the club want this player gone?"""
    club = player.current_club
    if is_free_agent(club):
        return False

    if player.contract.type is ContractType.PROFESSIONAL:
        diff = club.strength - player.current_ability
        if diff > 15 and player.age > 21:
            return True
        if diff > 25:
            return True

    if stats is not None and stats.total.matches > 10 and stats.total.rating < 5.8:
        return True
    return False


STAR_BANDS: List[Tuple[int, float]] = [
    (40, 0.5), (50, 1.0), (60, 1.5), (70, 2.0), (75, 2.5),
    (80, 3.0), (85, 3.5), (90, 4.0), (95, 4.5),
]


def star_rating(score: float) -> float:
    for upper, stars in STAR_BANDS:
        if score < upper:
            return stars
    return 5.0
