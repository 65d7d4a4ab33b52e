# procareer/transfers.py
from __future__ import annotations

import logging
from typing import List, Optional

from .generator import round_half_up
from .market import classify_role, is_surplus, player_market_value
from .rng import SimRNG
from .roster import FREE_AGENT_CLUB, ClubRoster, is_free_agent
from .types import (
    Club, Contract, ContractType, Offer, OfferType, Player, Role, SeasonStats, require,
)

logger = logging.getLogger(__name__)

OFFER_PITCHES: List[str] = [
    "We have been tracking your progress and believe you are ready for the first team.",
    "You are exactly the profile of player we are looking to rebuild around.",
    "We need reinforcement in your position immediately.",
    "Our scouts have identified you as a top prospect.",
    "We can offer you the game time you need to develop.",
    "We admire your style of play.",
    "Your recent form has caught our eye.",
]

# (effective ability strictly above, tier); else tier 5
TARGET_TIERS = [(82, 1), (72, 2), (62, 3), (52, 4)]
TIER_WAGE_FLOORS = {1: 5000, 2: 2000}
MIN_WAGE: int = 300
BIG_SPENDER_LEAGUES = ("Saudi Pro League",)
SCOUTING_VALUE_FLOOR: int = 500_000
SQUAD_OFFER_COUNT: int = 6
FREE_AGENT_WAGE: int = 500


def effective_ability(ability: float, form: float, age: int, potential: float) -> float:
    """Ability as scouts see it: form swings it, young potential inflates it."""
    eff = ability + (form - 50) / 4
    if age < 23 and potential > ability:
        eff += (potential - ability) * 0.4
    return eff


def target_tier(eff: float) -> int:
    for floor, tier in TARGET_TIERS:
        if eff > floor:
            return tier
    return 5


def offer_wage(market_value: int, ability: float, age: int, club: Club, *, rng: SimRNG) -> int:
    base = max(MIN_WAGE, round_half_up(market_value * 0.004))
    if age > 29:
        # veteran floor: wage on ability alone
        shadow_value = (ability ** 3) * 18 * 1.2
        base = max(base, round_half_up(shadow_value * 0.0045))
    base = max(TIER_WAGE_FLOORS.get(club.tier, 0), base)

    if club.league in BIG_SPENDER_LEAGUES:
        mult = 3.0 + rng.uniform() * 3.0
    else:
        mult = 0.8 + rng.uniform() * 0.5
    return round_half_up(base * mult)


def _excluded(player: Player, club: Club) -> bool:
    return club.name == player.current_club.name or club.name in player.modifiers.disliked_teams


def generate_transfer_offers(player: Player, roster: ClubRoster, *, rng: SimRNG, year: int = 0) -> List[Offer]:
    """
    Scouted permanent-transfer offers (1 to 3) from clubs around the player's level.
    Nothing comes in when the career forbids transfers.
    """
    if player.modifiers.no_transfers:
        return []

    ability = player.current_ability
    eff = effective_ability(ability, player.form, player.age, player.potential_ability)
    tier = target_tier(eff)

    pool = [c for c in roster if not _excluded(player, c)]
    candidates = [c for c in pool if abs(c.tier - tier) <= 1 and ability - 15 < c.strength < eff + 20]
    if not candidates:
        candidates = [c for c in pool if c.tier == tier]
    if not candidates:
        candidates = pool

    value = player.market_value
    offers: List[Offer] = []
    for idx, club in enumerate(rng.shuffled(candidates)[:rng.rand_int(1, 3)]):
        offers.append(Offer(
            id=f"offer-{year}-{idx}",
            type=OfferType.TRANSFER,
            club=club,
            wage=offer_wage(value, ability, player.age, club, rng=rng),
            years=rng.rand_int(2, 5),
            transfer_fee=round_half_up(value * (0.9 + rng.uniform() * 0.3)),
            description=rng.pick(OFFER_PITCHES),
            negotiable=True,
            promised_role=classify_role(ability, club.strength),
            yearly_wage_rise=float(rng.rand_int(0, 10)),
        ))
    logger.debug("scouted %s offers for %s (effective %.1f, tier %s)", len(offers), player.name, eff, tier)
    return offers


# ---------- pre-season window ----------

def _squad_pool(player: Player, roster: ClubRoster, force_loan: bool) -> List[Club]:
    tier = player.current_club.tier
    if force_loan:
        lo, hi = min(tier, 4), min(tier + 3, 5)
        return [c for c in roster if lo <= c.tier <= hi and not _excluded(player, c)]
    if is_free_agent(player.current_club):
        return [c for c in roster if c.tier >= 3 and not _excluded(player, c)]
    return [c for c in roster if c.tier == min(tier + 1, 4) and not _excluded(player, c)]


def preseason_offers(player: Player, roster: ClubRoster, *, rng: SimRNG, year: int = 0,
                     last_stats: Optional[SeasonStats] = None, force_loan: bool = False) -> List[Offer]:
    """
    Everything on the table before a season: loans or cheap transfers for
    players short of minutes, plus scouted offers once the player is worth
    something. One offer per club.
    """
    if player.modifiers.no_transfers:
        return []

    free_agent = is_free_agent(player.current_club)
    out_of_contract = player.contract.years_left <= 0
    forced_out = not free_agent and is_surplus(player, last_stats)
    role = classify_role(player.current_ability, player.current_club.strength)
    can_loan = not (out_of_contract or free_agent or forced_out)

    offers: List[Offer] = []
    wants_move = force_loan or forced_out or out_of_contract or free_agent or role in (Role.YOUTH, Role.BACKUP)
    if wants_move and (can_loan or not force_loan):
        kind = OfferType.LOAN if can_loan else OfferType.TRANSFER
        clubs = rng.shuffled(_squad_pool(player, roster, force_loan))[:SQUAD_OFFER_COUNT]
        for i, club in enumerate(clubs):
            transfer = kind is OfferType.TRANSFER
            offers.append(Offer(
                id=f"offer-{year}-squad-{i}",
                type=kind,
                club=club,
                wage=FREE_AGENT_WAGE if free_agent else player.contract.wage,
                years=2 if transfer else 1,
                transfer_fee=0,
                description="We can give you a fresh start." if transfer else "We can offer you the game time you need.",
                negotiable=transfer,
                promised_role=classify_role(player.current_ability, club.strength),
            ))

    if (not force_loan or out_of_contract or free_agent) and player.market_value > SCOUTING_VALUE_FLOOR:
        offers.extend(generate_transfer_offers(player, roster, rng=rng, year=year))

    seen = set()
    unique: List[Offer] = []
    for o in offers:
        if o.club.name not in seen:
            seen.add(o.club.name)
            unique.append(o)
    return unique


def renewal_offer(player: Player, last_stats: Optional[SeasonStats] = None) -> Optional[Offer]:
    """The current (or parent) club's renewal terms, or None when the board won't talk."""
    if is_free_agent(player.current_club) or player.contract.years_left >= 4:
        return None
    if is_surplus(player, last_stats):
        return None
    club = player.parent_club or player.current_club
    return Offer(
        id="renew",
        type=OfferType.RENEWAL,
        club=club,
        wage=player.contract.wage,
        years=1,
        transfer_fee=0,
        description="Renewal",
        negotiable=True,
        promised_role=classify_role(player.current_ability, club.strength),
        yearly_wage_rise=player.contract.yearly_wage_rise,
    )


def loan_extension_offer(player: Player) -> Optional[Offer]:
    if not player.on_loan:
        return None
    return Offer(
        id="extend-loan",
        type=OfferType.EXTENSION,
        club=player.current_club,
        wage=player.contract.wage,
        years=1,
        transfer_fee=0,
        description="Extend loan for another season",
        negotiable=False,
        promised_role=player.contract.promised_role,
    )


def accept_offer(player: Player, offer: Offer, *, year: int, wage: Optional[int] = None,
                 years: Optional[int] = None, wage_rise: Optional[float] = None) -> Player:
    """
    Apply an agreed offer to the player in place. Negotiated terms override the
    offer's own when given. Market value is refreshed afterwards.
    """
    wage = offer.wage if wage is None else wage
    years = offer.years if years is None else years
    wage_rise = offer.yearly_wage_rise if wage_rise is None else wage_rise
    require(wage >= 0, f"wage must be >= 0, got {wage}")
    require(years >= 0, f"contract years must be >= 0, got {years}")

    if offer.type is OfferType.TRANSFER:
        require(not player.modifiers.no_transfers, "transfers are disabled for this career")
        player.current_club = offer.club
        player.parent_club = None
        player.contract = Contract(
            wage=wage, years_left=years, expiry_year=year + years,
            type=ContractType.PROFESSIONAL, promised_role=offer.promised_role, yearly_wage_rise=wage_rise,
        )
    elif offer.type is OfferType.LOAN:
        require(not player.on_loan, "player is already out on loan")
        player.parent_club = player.current_club
        player.current_club = offer.club
        player.contract.promised_role = offer.promised_role
    elif offer.type is OfferType.RENEWAL:
        player.contract = Contract(
            wage=wage, years_left=years, expiry_year=year + years,
            type=ContractType.PROFESSIONAL, promised_role=offer.promised_role, yearly_wage_rise=wage_rise,
        )
    # a loan extension keeps everything as it is

    player.is_surplus = False
    player.market_value = player_market_value(player)
    logger.debug("%s accepted %s from %s", player.name, offer.type.value, offer.club.name)
    return player


def release_to_free_agency(player: Player) -> Player:
    player.current_club = FREE_AGENT_CLUB
    player.parent_club = None
    player.contract = Contract(
        wage=0, years_left=0, expiry_year=0, type=ContractType.PROFESSIONAL,
        promised_role=player.contract.promised_role,
    )
    player.is_surplus = False
    player.market_value = player_market_value(player)
    return player
