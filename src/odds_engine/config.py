ENGINE_VERSION = "5.0"

# House edge (overround) applied on top of the true probabilities
DEFAULT_HOUSE_EDGE = 0.06

# Win probability clamp band for side A (side B is always 1 - A)
DEFAULT_PROBABILITY_FLOOR = 0.15
DEFAULT_PROBABILITY_CEILING = 0.85

# Largest implied probability allowed after the house edge is applied
DEFAULT_IMPLIED_CEILING = 0.90

# Market noise: +/- 1.5 percentage points
DEFAULT_MAX_VARIANCE = 0.015

# Respect is scaled into millions
RESPECT_SCALE = 1_000_000
DEFAULT_RESPECT = 1_000_000

# Upper bound on a power rating, keeps ratios and sums finite
MAX_POWER_RATING = 1e9

# Rank tier multipliers (higher = stronger), monotone with tier
RANK_MULTIPLIERS = {
    "Unranked": 0.02,
    "Bronze": 0.03,
    "Bronze I": 0.05,
    "Bronze II": 0.08,
    "Bronze III": 0.10,
    "Silver": 0.15,
    "Silver I": 0.20,
    "Silver II": 0.25,
    "Silver III": 0.30,
    "Gold": 0.40,
    "Gold I": 0.45,
    "Gold II": 0.50,
    "Gold III": 0.60,
    "Platinum": 0.80,
    "Platinum I": 0.85,
    "Platinum II": 0.90,
    "Platinum III": 1.00,
    "Diamond": 1.20,
    "Diamond I": 1.30,
    "Diamond II": 1.40,
    "Diamond III": 1.50,
}
UNRANKED = "Unranked"

# Leaderboard position -> multiplier, as (max_position, multiplier)
POSITION_BREAKPOINTS = (
    (20, 1.20),    # Elite
    (50, 1.10),    # Top tier
    (100, 1.05),   # Strong
    (200, 1.00),   # Average
    (500, 0.95),   # Below average
    (1000, 0.85),  # Weak
)
DEEP_POSITION_MULTIPLIER = 0.70
DEFAULT_POSITION = 2000

# Member efficiency, as (min_members, efficiency), checked top-down
FULL_ROSTER = 100
MEMBER_EFFICIENCY_STEPS = (
    (FULL_ROSTER, 1.00),
    (90, 0.95),
    (80, 0.90),
    (70, 0.85),
    (50, 0.80),
)
SMALL_ROSTER_BASE = 0.60
SMALL_ROSTER_SLOPE = 0.20
EMPTY_ROSTER_EFFICIENCY = 0.10

# Odds output modes
ODDS_MODE_PRECISE = "precise"
ODDS_MODE_LADDER = "ladder"
ODDS_MODES = (ODDS_MODE_PRECISE, ODDS_MODE_LADDER)

MIN_DECIMAL_ODDS = 1.01
EVEN_MONEY = 2.00

# Odds that pay whole units on small whole-unit stakes
CLEAN_ODDS_LADDER = (
    1.20,  # 5 -> 6
    1.25,  # 4 -> 5
    1.33,  # 3 -> 4
    1.50,  # 2 -> 3
    1.67,  # 3 -> 5
    2.00,  # 1 -> 2
    2.50,  # 2 -> 5
    3.00,  # 1 -> 3
    4.00,  # 1 -> 4
    5.00,  # 1 -> 5
)

# Finer ladder used by the "decimal" profile
WHOLE_UNIT_LADDER = (
    1.25, 1.33, 1.50, 1.67, 1.75, 1.80, 1.90, 2.00, 2.10, 2.20, 2.30,
    2.40, 2.50, 2.60, 2.70, 2.80, 2.90, 3.00, 3.25, 3.50, 4.00, 5.00,
)

# Betting examples
STAKE_SIZES = (1, 2, 3, 5, 10)
STAKE_UNIT = "Xanax"
UNIT_VALUE = 744_983  # Cash value of one stake unit
MAX_EXAMPLES = 3
WHOLE_RETURN_TOLERANCE = 0.01

# Confidence = |ln(power ratio)| * CONFIDENCE_SCALE, capped at 100
CONFIDENCE_SCALE = 30

DEFAULT_PROFILE = "balanced"

# Named pricing profiles
PROFILES = {
    "balanced": {
        "probability_floor": 0.15,
        "probability_ceiling": 0.85,
        "odds_mode": ODDS_MODE_PRECISE,
    },
    "professional": {
        "probability_floor": 0.05,
        "probability_ceiling": 0.95,
        "implied_ceiling": 0.99,
        "odds_mode": ODDS_MODE_PRECISE,
    },
    "decimal": {
        "probability_floor": 0.20,
        "probability_ceiling": 0.80,
        "implied_ceiling": 0.85,
        "odds_mode": ODDS_MODE_LADDER,
        "clean_odds_ladder": WHOLE_UNIT_LADDER,
        "respect_exponent": 1 / 3,
    },
}
