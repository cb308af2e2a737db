"""Data models for the odds engine.

Everything here is created fresh per calculation and discarded once the
quote has been returned; the engine keeps no mutable state of its own.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Union

from src.odds_engine import config as C
from src.odds_engine.errors import ConfigurationError

FactionId = Union[str, int]


@dataclass(frozen=True)
class FactionSnapshot:
    """Faction attributes as supplied by the lookup collaborator.

    Numeric fields may be ``None`` (or non-positive); the power rating
    calculator substitutes documented defaults for those.
    """

    id: FactionId
    name: str = "Unknown Faction"
    respect: Optional[float] = None
    rank: Optional[str] = None
    members: Optional[int] = None
    position: Optional[int] = None


@dataclass
class PowerRatingBreakdown:
    """The four sub-scores behind a faction's power rating."""

    respect_score: float
    rank_multiplier: float
    position_multiplier: float
    member_efficiency: float
    power_rating: float


@dataclass
class WinProbability:
    """Complementary true win probabilities for a matchup."""

    prob_a: float
    prob_b: float
    raw_prob_a: float = 0.5  # Before variance and clamping
    variance: float = 0.0
    clamped: bool = False


@dataclass
class HouseEdgeResult:
    """Implied probabilities after the overround has been applied."""

    implied_a: float
    implied_b: float
    realized_edge: float
    scaled: bool = False  # True when the implied ceiling forced a rescale


@dataclass
class BettingExample:
    stake: int
    total_return: int
    profit: int
    is_approximate: bool = False
    cash_stake: int = 0
    cash_return: int = 0
    description: str = ""


@dataclass
class Payout:
    stake: float
    total_return: int
    profit: float
    odds: float


@dataclass
class SideQuote:
    """One faction's side of an :class:`OddsQuote`."""

    faction_id: FactionId
    name: str
    decimal_odds: float
    implied_probability: float
    true_probability: float
    power_rating: Optional[float] = None
    betting_examples: List[BettingExample] = field(default_factory=list)


@dataclass
class OddsQuote:
    """Published odds for a two-faction matchup."""

    faction_a: SideQuote
    faction_b: SideQuote
    target_house_edge: float
    house_edge: float  # Realized, may fall short of the target after scaling
    confidence: int
    odds_mode: str
    profile: str = C.DEFAULT_PROFILE
    power_ratio: Optional[float] = None
    fallback: bool = False
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def total_implied_probability(self) -> float:
        return self.faction_a.implied_probability + self.faction_b.implied_probability

    @property
    def odds_overround(self) -> float:
        """Overround encoded by the displayed (rounded or snapped) odds."""
        return (1 / self.faction_a.decimal_odds + 1 / self.faction_b.decimal_odds) - 1

    def to_dict(self) -> Dict:
        """JSON-ready view keyed by faction id, plus a ``metadata`` block."""
        out: Dict = {}
        for side in (self.faction_a, self.faction_b):
            side_dict = asdict(side)
            side_dict["format"] = "decimal"
            if self.fallback:
                side_dict["fallback"] = True
            out[str(side.faction_id)] = side_dict
        out["metadata"] = {
            "house_edge": self.house_edge,
            "target_house_edge": self.target_house_edge,
            "total_implied_probability": self.total_implied_probability,
            "odds_overround": self.odds_overround,
            "confidence": self.confidence,
            "power_ratio": self.power_ratio,
            "odds_mode": self.odds_mode,
            "profile": self.profile,
            "fallback": self.fallback,
            "timestamp": self.timestamp,
            "version": C.ENGINE_VERSION,
        }
        return out


@dataclass
class EngineConfig:
    """Validated engine configuration.

    Invalid combinations raise :class:`ConfigurationError` on construction
    so a misconfigured engine never gets to quote a matchup.
    """

    house_edge: float = C.DEFAULT_HOUSE_EDGE
    probability_floor: float = C.DEFAULT_PROBABILITY_FLOOR
    probability_ceiling: float = C.DEFAULT_PROBABILITY_CEILING
    implied_ceiling: float = C.DEFAULT_IMPLIED_CEILING
    max_variance: float = C.DEFAULT_MAX_VARIANCE
    default_respect: float = C.DEFAULT_RESPECT
    respect_exponent: float = 1.0
    rank_multipliers: Dict[str, float] = field(
        default_factory=lambda: dict(C.RANK_MULTIPLIERS)
    )
    position_breakpoints: Tuple[Tuple[int, float], ...] = C.POSITION_BREAKPOINTS
    deep_position_multiplier: float = C.DEEP_POSITION_MULTIPLIER
    default_position: int = C.DEFAULT_POSITION
    member_efficiency_steps: Tuple[Tuple[int, float], ...] = C.MEMBER_EFFICIENCY_STEPS
    small_roster_base: float = C.SMALL_ROSTER_BASE
    small_roster_slope: float = C.SMALL_ROSTER_SLOPE
    empty_roster_efficiency: float = C.EMPTY_ROSTER_EFFICIENCY
    odds_mode: str = C.ODDS_MODE_PRECISE
    clean_odds_ladder: Tuple[float, ...] = C.CLEAN_ODDS_LADDER
    stake_sizes: Tuple[int, ...] = C.STAKE_SIZES
    stake_unit: str = C.STAKE_UNIT
    unit_value: float = C.UNIT_VALUE
    max_examples: int = C.MAX_EXAMPLES
    profile: str = "custom"

    def __post_init__(self):
        if self.house_edge < 0:
            raise ConfigurationError(
                f"house_edge must be non-negative, got {self.house_edge}"
            )
        if not 0 < self.probability_floor < 1 or not 0 < self.probability_ceiling < 1:
            raise ConfigurationError(
                "Probability bounds must lie inside (0, 1), got "
                f"[{self.probability_floor}, {self.probability_ceiling}]"
            )
        if self.probability_floor >= self.probability_ceiling:
            raise ConfigurationError(
                f"probability_floor ({self.probability_floor}) must be below "
                f"probability_ceiling ({self.probability_ceiling})"
            )
        if not 0 < self.implied_ceiling < 1:
            raise ConfigurationError(
                f"implied_ceiling must lie in (0, 1), got {self.implied_ceiling}"
            )
        widest = max(self.probability_ceiling, 1 - self.probability_floor)
        if self.implied_ceiling < widest:
            # Rescaling below the clamped true probability would make the
            # realized edge negative.
            raise ConfigurationError(
                f"implied_ceiling ({self.implied_ceiling}) must be at least "
                f"the widest true probability ({widest})"
            )
        if self.max_variance < 0:
            raise ConfigurationError(
                f"max_variance must be non-negative, got {self.max_variance}"
            )
        if self.default_respect <= 0 or self.respect_exponent <= 0:
            raise ConfigurationError("default_respect and respect_exponent must be positive")
        if C.UNRANKED not in self.rank_multipliers:
            raise ConfigurationError(f"rank_multipliers must define {C.UNRANKED!r}")
        if self.odds_mode not in C.ODDS_MODES:
            raise ConfigurationError(
                f"Invalid odds_mode: {self.odds_mode!r}. "
                f"Must be one of {', '.join(C.ODDS_MODES)}."
            )
        self.clean_odds_ladder = tuple(sorted(self.clean_odds_ladder))
        if self.odds_mode == C.ODDS_MODE_LADDER and not self.clean_odds_ladder:
            raise ConfigurationError("clean_odds_ladder cannot be empty in ladder mode")
        if any(odds <= 1.0 for odds in self.clean_odds_ladder):
            raise ConfigurationError("clean_odds_ladder entries must all exceed 1.0")
        if not self.stake_sizes or any(stake <= 0 for stake in self.stake_sizes):
            raise ConfigurationError("stake_sizes must be a non-empty set of positive stakes")
        if self.max_examples <= 0:
            raise ConfigurationError(
                f"max_examples must be positive, got {self.max_examples}"
            )

    @classmethod
    def from_profile(cls, name: str = C.DEFAULT_PROFILE, **overrides) -> "EngineConfig":
        """Build a config from a named profile, with optional overrides."""
        if name not in C.PROFILES:
            raise ConfigurationError(
                f"Unknown profile: {name!r}. "
                f"Must be one of {', '.join(sorted(C.PROFILES))}."
            )
        settings = dict(C.PROFILES[name])
        settings.update(overrides)
        settings.setdefault("profile", name)
        return cls(**settings)
