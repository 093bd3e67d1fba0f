"""Showdown simulation module."""

from showdown_sim.simulation.deck import Deck
from showdown_sim.simulation.evaluator import (
    HandCategory, HandEvaluator, HandRank, evaluate_five_card_hand, evaluate_hand
)
from showdown_sim.simulation.engine import ShowdownSimulator, simulate_game
from showdown_sim.simulation.runner import TrialRunner, run_simulation

__all__ = [
    "Deck",
    "HandCategory", "HandEvaluator", "HandRank",
    "evaluate_five_card_hand", "evaluate_hand",
    "ShowdownSimulator", "simulate_game",
    "TrialRunner", "run_simulation",
]
