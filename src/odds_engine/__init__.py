from src.odds_engine.calculator import FactionSource, OddsCalculator, calculate_odds
from src.odds_engine.errors import (
    ConfigurationError,
    ContractViolationError,
    OddsEngineError,
)
from src.odds_engine.house_edge import apply_house_edge
from src.odds_engine.models import (
    BettingExample,
    EngineConfig,
    FactionSnapshot,
    HouseEdgeResult,
    OddsQuote,
    Payout,
    PowerRatingBreakdown,
    SideQuote,
    WinProbability,
)
from src.odds_engine.power_rating import PowerRatingCalculator, compute_power_rating
from src.odds_engine.quantizer import (
    calculate_payout,
    generate_betting_examples,
    snap_to_ladder,
    to_decimal_odds,
)
from src.odds_engine.win_probability import (
    FixedRandomSource,
    RandomSource,
    SystemRandomSource,
    WinProbabilityEstimator,
)

__all__ = [
    "BettingExample",
    "ConfigurationError",
    "ContractViolationError",
    "EngineConfig",
    "FactionSnapshot",
    "FactionSource",
    "FixedRandomSource",
    "HouseEdgeResult",
    "OddsCalculator",
    "OddsEngineError",
    "OddsQuote",
    "Payout",
    "PowerRatingBreakdown",
    "PowerRatingCalculator",
    "RandomSource",
    "SideQuote",
    "SystemRandomSource",
    "WinProbability",
    "WinProbabilityEstimator",
    "apply_house_edge",
    "calculate_odds",
    "calculate_payout",
    "compute_power_rating",
    "generate_betting_examples",
    "snap_to_ladder",
    "to_decimal_odds",
]
