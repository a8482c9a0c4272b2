"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_seed() -> int | None:
    """Parse BJSIM_SEED; unset or empty means an unseeded shoe."""
    seed = os.getenv("BJSIM_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class SimulationConfig:
    """Options recognized by a simulation run."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("BJSIM_DECKS", "3")))
    num_hands: int = field(default_factory=lambda: int(os.getenv("BJSIM_HANDS", "100")))
    blackjack_payout: float = field(
        default_factory=lambda: float(os.getenv("BJSIM_BLACKJACK_PAYOUT", "0.0"))
    )
    min_bet: int = 100
    seed: int | None = field(default_factory=_parse_seed)

    def __post_init__(self) -> None:
        """Validate option combinations."""
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if self.num_hands < 0:
            raise ValueError("num_hands cannot be negative")
        if self.blackjack_payout < 0:
            raise ValueError("blackjack_payout cannot be negative")
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
