"""League Elo modules."""

from domain.elo.calculator import (
    DEFAULT_PARAMETERS,
    EloParameters,
    LeagueEloCalculator,
    calculate_expected_score,
    compute_rating_delta,
    k_factor_for,
)
from domain.elo.config import EloSystemConfig, load_elo_system_config, load_elo_system_configs

__all__ = [
    "DEFAULT_PARAMETERS",
    "EloParameters",
    "EloSystemConfig",
    "LeagueEloCalculator",
    "calculate_expected_score",
    "compute_rating_delta",
    "k_factor_for",
    "load_elo_system_config",
    "load_elo_system_configs",
]
