# procareer/types.py
from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import Modifiers


def require(cond: bool, msg: str) -> None:
    """Contract check for programmer errors (bad inputs), never for game outcomes."""
    if not cond:
        raise ValueError(msg)


# --------- Enums (values are the display strings used in saves) ---------

class Position(str, Enum):
    GK = "Goalkeeper"
    DEF = "Defender"
    MID = "Midfielder"
    FWD = "Forward"


class Role(str, Enum):
    STAR = "Star Player"
    IMPORTANT = "Important Starter"
    REGULAR = "Regular Starter"
    ROTATION = "Rotation"
    BACKUP = "Backup"
    YOUTH = "Youth/Prospect"


class ContractType(str, Enum):
    YOUTH = "Youth"
    PROFESSIONAL = "Professional"


class ContinentalTier(int, Enum):
    NONE = 0
    CONFERENCE = 1
    EUROPA = 2
    CHAMPIONS = 3


class SeasonLevel(str, Enum):
    SENIOR = "Senior"
    U21 = "U21"
    U18 = "U18"
    YOUTH_RESERVES = "Youth/Reserves"
    FREE_AGENT = "Free Agent"

    @property
    def is_age_group(self) -> bool:
        return self in (SeasonLevel.U18, SeasonLevel.U21)


class SeasonHalf(str, Enum):
    FIRST = "first"      # autumn, ends at the winter window
    SECOND = "second"    # spring, ends the season
    FULL = "full"        # whole season in one call

    @property
    def portion(self) -> float:
        return 1.0 if self is SeasonHalf.FULL else 0.5

    @property
    def is_mid_season(self) -> bool:
        return self is SeasonHalf.FIRST


class ZoneTag(str, Enum):
    PRO = "PRO"
    REL = "REL"
    UCL = "UCL"
    UEL = "UEL"
    UECL = "UECL"


class OfferType(str, Enum):
    TRANSFER = "TRANSFER"
    LOAN = "LOAN"
    RENEWAL = "RENEWAL"
    EXTENSION = "LOAN EXTENSION"


# --------- Stat records ---------

@dataclass(frozen=True)
class StatSet:
    matches: int = 0
    starts: int = 0
    minutes: int = 0
    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    rating: float = 0.0
    motm: int = 0

    def __post_init__(self) -> None:
        require(self.matches >= 0, f"matches must be >= 0, got {self.matches}")
        require(0 <= self.starts <= self.matches, f"starts must be in [0, matches], got {self.starts}/{self.matches}")

    @property
    def is_empty(self) -> bool:
        return self.matches == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "StatSet":
        if not d:
            return cls()
        return cls(**d)


def _breakdown_from(d: Optional[Dict[str, Any]]) -> Dict[str, StatSet]:
    return {k: StatSet.from_dict(v) for k, v in (d or {}).items()}


@dataclass
class SeasonStats:
    """
    One season (or half) of output for one player.
      - total is SENIOR only (league + cup + continental + international)
      - youth is kept apart and only feeds growth/fatigue
    """
    total: StatSet = field(default_factory=StatSet)
    youth: StatSet = field(default_factory=StatSet)
    league: StatSet = field(default_factory=StatSet)
    cup: StatSet = field(default_factory=StatSet)
    europe: StatSet = field(default_factory=StatSet)
    international: StatSet = field(default_factory=StatSet)
    international_breakdown: Dict[str, StatSet] = field(default_factory=dict)
    level: SeasonLevel = SeasonLevel.SENIOR
    injuries: List[str] = field(default_factory=list)
    weeks_out: int = 0
    cup_status: str = ""
    europe_status: str = ""
    europe_competition: Optional[str] = None
    awards: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total.to_dict(),
            "youth": self.youth.to_dict(),
            "league": self.league.to_dict(),
            "cup": self.cup.to_dict(),
            "europe": self.europe.to_dict(),
            "international": self.international.to_dict(),
            "international_breakdown": {k: v.to_dict() for k, v in self.international_breakdown.items()},
            "level": self.level.value,
            "injuries": list(self.injuries),
            "weeks_out": self.weeks_out,
            "cup_status": self.cup_status,
            "europe_status": self.europe_status,
            "europe_competition": self.europe_competition,
            "awards": list(self.awards),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SeasonStats":
        return cls(
            total=StatSet.from_dict(d.get("total")),
            youth=StatSet.from_dict(d.get("youth")),
            league=StatSet.from_dict(d.get("league")),
            cup=StatSet.from_dict(d.get("cup")),
            europe=StatSet.from_dict(d.get("europe")),
            international=StatSet.from_dict(d.get("international")),
            international_breakdown=_breakdown_from(d.get("international_breakdown")),
            level=SeasonLevel(d.get("level", SeasonLevel.SENIOR.value)),
            injuries=list(d.get("injuries", [])),
            weeks_out=int(d.get("weeks_out", 0)),
            cup_status=d.get("cup_status", ""),
            europe_status=d.get("europe_status", ""),
            europe_competition=d.get("europe_competition"),
            awards=list(d.get("awards", [])),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, s: str) -> "SeasonStats":
        return cls.from_dict(json.loads(s))


# --------- League ---------

@dataclass
class LeagueRow:
    position: int
    name: str
    played: int
    won: int
    drawn: int
    lost: int
    gd: int
    points: int
    is_player_club: bool = False
    status: Optional[ZoneTag] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["status"] = self.status.value if self.status else None
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LeagueRow":
        d = dict(d)
        d["status"] = ZoneTag(d["status"]) if d.get("status") else None
        return cls(**d)


WorldTables = Dict[str, List[LeagueRow]]


def world_tables_to_dict(tables: WorldTables) -> Dict[str, List[Dict[str, Any]]]:
    return {league: [r.to_dict() for r in rows] for league, rows in tables.items()}


def world_tables_from_dict(d: Optional[Dict[str, List[Dict[str, Any]]]]) -> WorldTables:
    return {league: [LeagueRow.from_dict(r) for r in rows] for league, rows in (d or {}).items()}


@dataclass
class Club:
    name: str
    league: str
    country: str
    tier: int               # 1 (elite) .. 5
    strength: int           # 10..99, drives every roll
    prestige: int = 50
    continental_tier: ContinentalTier = ContinentalTier.NONE
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            self.id = self.name.replace(" ", "-").lower()

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["continental_tier"] = int(self.continental_tier)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Club":
        d = dict(d)
        d["continental_tier"] = ContinentalTier(int(d.get("continental_tier", 0)))
        return cls(**d)


# --------- Contracts / offers ---------

@dataclass
class Contract:
    wage: int                       # weekly
    years_left: int
    expiry_year: int
    type: ContractType = ContractType.PROFESSIONAL
    promised_role: Role = Role.ROTATION
    yearly_wage_rise: float = 0.0   # percent, applied each season while years remain

    def __post_init__(self) -> None:
        require(self.years_left >= 0, f"contract years_left must be >= 0, got {self.years_left}")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        d["promised_role"] = self.promised_role.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Contract":
        d = dict(d)
        d["type"] = ContractType(d["type"])
        d["promised_role"] = Role(d["promised_role"])
        return cls(**d)


@dataclass
class Offer:
    id: str
    type: OfferType
    club: Club
    wage: int
    years: int
    transfer_fee: int
    description: str
    negotiable: bool
    promised_role: Role
    yearly_wage_rise: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        d["club"] = self.club.to_dict()
        d["promised_role"] = self.promised_role.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Offer":
        d = dict(d)
        d["type"] = OfferType(d["type"])
        d["club"] = Club.from_dict(d["club"])
        d["promised_role"] = Role(d["promised_role"])
        return cls(**d)


# --------- Career records ---------

@dataclass
class SeasonRecord:
    year: int
    age: int
    club: Club
    is_loan: bool
    stats: SeasonStats
    trophies: List[str] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    league_position: int = 10
    world_state: Optional[WorldTables] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "age": self.age,
            "club": self.club.to_dict(),
            "is_loan": self.is_loan,
            "stats": self.stats.to_dict(),
            "trophies": list(self.trophies),
            "events": list(self.events),
            "league_position": self.league_position,
            "world_state": world_tables_to_dict(self.world_state) if self.world_state is not None else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SeasonRecord":
        ws = d.get("world_state")
        return cls(
            year=int(d["year"]),
            age=int(d["age"]),
            club=Club.from_dict(d["club"]),
            is_loan=bool(d.get("is_loan", False)),
            stats=SeasonStats.from_dict(d["stats"]),
            trophies=list(d.get("trophies", [])),
            events=list(d.get("events", [])),
            league_position=int(d.get("league_position", 10)),
            world_state=world_tables_from_dict(ws) if ws is not None else None,
        )


@dataclass
class GameConfig:
    starting_ability: Optional[int] = None
    potential_ability: Optional[int] = None
    injury_proneness: Optional[int] = None
    starting_club: Optional[Club] = None
    modifiers: Modifiers = field(default_factory=Modifiers)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "starting_ability": self.starting_ability,
            "potential_ability": self.potential_ability,
            "injury_proneness": self.injury_proneness,
            "starting_club": self.starting_club.to_dict() if self.starting_club else None,
            "modifiers": self.modifiers.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "GameConfig":
        d = d or {}
        club = d.get("starting_club")
        return cls(
            starting_ability=d.get("starting_ability"),
            potential_ability=d.get("potential_ability"),
            injury_proneness=d.get("injury_proneness"),
            starting_club=Club.from_dict(club) if club else None,
            modifiers=Modifiers.from_dict(d.get("modifiers")),
        )


@dataclass
class Player:
    """
    Plain-English:
      - The one mutable root of a career: identity, hidden attributes, club ties, history.
      - current_ability never passes potential_ability once growth has run.
      - fatigue is a body-load counter with no ceiling; past 110 the body is done.
    """
    name: str
    nationality: str
    age: int
    position: Position
    current_club: Club
    contract: Contract
    current_ability: int = 50
    potential_ability: int = 70
    natural_fitness: int = 75
    injury_prone: int = 8
    form: int = 50
    fatigue: float = 0
    is_surplus: bool = False
    parent_club: Optional[Club] = None   # set only while on loan
    market_value: int = 0
    history: List[SeasonRecord] = field(default_factory=list)
    trophy_cabinet: List[str] = field(default_factory=list)
    awards_cabinet: List[str] = field(default_factory=list)
    cash: int = 0
    config: GameConfig = field(default_factory=GameConfig)

    def __post_init__(self) -> None:
        require(self.current_ability >= 0, f"current_ability must be >= 0, got {self.current_ability}")
        require(self.potential_ability >= 0, f"potential_ability must be >= 0, got {self.potential_ability}")
        require(self.fatigue >= 0, f"fatigue must be >= 0, got {self.fatigue}")

    @property
    def on_loan(self) -> bool:
        return self.parent_club is not None

    @property
    def modifiers(self) -> Modifiers:
        return self.config.modifiers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "nationality": self.nationality,
            "age": self.age,
            "position": self.position.value,
            "current_club": self.current_club.to_dict(),
            "contract": self.contract.to_dict(),
            "current_ability": self.current_ability,
            "potential_ability": self.potential_ability,
            "natural_fitness": self.natural_fitness,
            "injury_prone": self.injury_prone,
            "form": self.form,
            "fatigue": self.fatigue,
            "is_surplus": self.is_surplus,
            "parent_club": self.parent_club.to_dict() if self.parent_club else None,
            "market_value": self.market_value,
            "history": [r.to_dict() for r in self.history],
            "trophy_cabinet": list(self.trophy_cabinet),
            "awards_cabinet": list(self.awards_cabinet),
            "cash": self.cash,
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Player":
        parent = d.get("parent_club")
        return cls(
            name=d["name"],
            nationality=d["nationality"],
            age=int(d["age"]),
            position=Position(d["position"]),
            current_club=Club.from_dict(d["current_club"]),
            contract=Contract.from_dict(d["contract"]),
            current_ability=d["current_ability"],
            potential_ability=d["potential_ability"],
            natural_fitness=d.get("natural_fitness", 75),
            injury_prone=d.get("injury_prone", 8),
            form=d.get("form", 50),
            fatigue=d.get("fatigue", 0),
            is_surplus=bool(d.get("is_surplus", False)),
            parent_club=Club.from_dict(parent) if parent else None,
            market_value=int(d.get("market_value", 0)),
            history=[SeasonRecord.from_dict(r) for r in d.get("history", [])],
            trophy_cabinet=list(d.get("trophy_cabinet", [])),
            awards_cabinet=list(d.get("awards_cabinet", [])),
            cash=int(d.get("cash", 0)),
            config=GameConfig.from_dict(d.get("config")),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, s: str) -> "Player":
        return cls.from_dict(json.loads(s))
