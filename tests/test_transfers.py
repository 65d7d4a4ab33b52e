import pytest

from procareer.config import Modifiers
from procareer.market import player_market_value
from procareer.rng import SimRNG
from procareer.roster import FREE_AGENT_CLUB
from procareer.transfers import (
    accept_offer, effective_ability, generate_transfer_offers, loan_extension_offer,
    preseason_offers, release_to_free_agency, renewal_offer, target_tier,
)
from procareer.types import ContractType, Offer, OfferType, Role

def _offer(club, kind=OfferType.TRANSFER, wage=4000, years=4, role=Role.REGULAR):
    return Offer(id="t", type=kind, club=club, wage=wage, years=years, transfer_fee=0,
                 description="", negotiable=True, promised_role=role, yearly_wage_rise=5.0)

def test_no_transfers_means_no_offers(make_player, roster):
    p = make_player(modifiers=Modifiers(no_transfers=True), market_value=5_000_000)
    assert generate_transfer_offers(p, roster, rng=SimRNG(1)) == []
    assert preseason_offers(p, roster, rng=SimRNG(1)) == []

def test_scouted_offers_skip_current_and_disliked_clubs(make_player, roster):
    disliked = ["Harbour Athletic", "Eastvale Rovers"]
    p = make_player(modifiers=Modifiers(disliked_teams=disliked), market_value=5_000_000)
    for seed in range(30):
        offers = generate_transfer_offers(p, roster, rng=SimRNG(seed), year=2025)
        assert 1 <= len(offers) <= 3
        for o in offers:
            assert o.type is OfferType.TRANSFER
            assert o.club.name not in disliked
            assert o.club.name != p.current_club.name
            assert 2 <= o.years <= 5
            assert o.wage >= 300

def test_preseason_offers_are_one_per_club(make_player, roster):
    p = make_player(age=17, current_ability=45, market_value=2_000_000)
    for seed in range(20):
        names = [o.club.name for o in preseason_offers(p, roster, rng=SimRNG(seed))]
        assert len(names) == len(set(names))

def test_backup_gets_loan_offers_from_a_tier_below(make_player, roster):
    p = make_player(current_ability=58)       # backup at strength 80
    offers = preseason_offers(p, roster, rng=SimRNG(4))
    loans = [o for o in offers if o.type is OfferType.LOAN]
    assert loans
    assert all(o.club.tier == 2 for o in loans)

def test_free_agent_gets_transfer_offers_only(make_player, roster):
    p = make_player(current_club=FREE_AGENT_CLUB)
    offers = preseason_offers(p, roster, rng=SimRNG(2))
    assert offers and all(o.type is OfferType.TRANSFER for o in offers)

def test_effective_ability_and_tiers():
    assert effective_ability(70, 50, 25, 90) == 70
    assert effective_ability(70, 70, 20, 80) == 70 + 5 + 4
    assert target_tier(83) == 1
    assert target_tier(82) == 2
    assert target_tier(40) == 5

def test_accept_transfer(make_player, clubs):
    p = make_player()
    accept_offer(p, _offer(clubs["harbour"]), year=2025)
    assert p.current_club.name == "Harbour Athletic"
    assert p.contract.type is ContractType.PROFESSIONAL
    assert p.contract.years_left == 4 and p.contract.expiry_year == 2029
    assert p.contract.wage == 4000 and p.contract.yearly_wage_rise == 5.0
    assert p.market_value == player_market_value(p)

def test_negotiated_terms_override_the_offer(make_player, clubs):
    p = make_player()
    accept_offer(p, _offer(clubs["millford"]), year=2025, wage=6000, years=2)
    assert p.contract.wage == 6000 and p.contract.expiry_year == 2027

def test_transfer_blocked_when_disabled(make_player, clubs):
    p = make_player(modifiers=Modifiers(no_transfers=True))
    with pytest.raises(ValueError):
        accept_offer(p, _offer(clubs["harbour"]), year=2025)

def test_accept_loan_then_extension(make_player, clubs):
    p = make_player(is_surplus=True)
    accept_offer(p, _offer(clubs["kestrel"], OfferType.LOAN, role=Role.STAR), year=2025)
    assert p.on_loan
    assert p.parent_club.name == "Northbridge City"
    assert p.current_club.name == "Kestrel FC"
    assert p.contract.promised_role is Role.STAR
    assert p.is_surplus is False
    with pytest.raises(ValueError):
        accept_offer(p, _offer(clubs["oakham"], OfferType.LOAN), year=2025)

    ext = loan_extension_offer(p)
    assert ext.type is OfferType.EXTENSION and ext.club.name == "Kestrel FC"
    accept_offer(p, ext, year=2025)
    assert p.current_club.name == "Kestrel FC" and p.on_loan

def test_renewal_terms(make_player, clubs):
    p = make_player()
    offer = renewal_offer(p)
    assert offer.type is OfferType.RENEWAL and offer.club.name == "Northbridge City"
    accept_offer(p, offer, year=2025, years=4)
    assert p.contract.years_left == 4
    assert renewal_offer(p) is None      # four years left is long enough

def test_release(make_player):
    p = make_player()
    release_to_free_agency(p)
    assert p.current_club.name == "Free Agent"
    assert p.contract.years_left == 0
    assert renewal_offer(p) is None
    assert loan_extension_offer(p) is None
