"""Data models for the showdown simulator."""

from showdown_sim.models.card import Card, Rank, Suit
from showdown_sim.models.simulation import (
    SimulationConfig, Player, ShowdownResult, SimulationResult
)

__all__ = [
    "Card", "Rank", "Suit",
    "SimulationConfig", "Player", "ShowdownResult", "SimulationResult",
]
