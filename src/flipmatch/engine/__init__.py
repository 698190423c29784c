"""Deterministic, headless rules engine for FlipMatch.

IMPORTANT: This package must never import pygame.
"""

from .events import EventBus
from .game import GameConfig, MemoryGame
from .generator import PairGenerator, RandomPairGenerator, generate_pairs
from .layouts import LAYOUT_PRESETS, parse_layout
from .ledger import LedgerState, ScoreLedger, ScoringConfig
from .queue import MatchQueue, Outcome
from .session import GameSession
from .snapshot import Snapshot, capture, restore
from .types import CardState, CorruptSaveData, InvalidConfiguration, InvalidInput, SessionState

__all__ = [
    "CardState",
    "CorruptSaveData",
    "EventBus",
    "GameConfig",
    "GameSession",
    "InvalidConfiguration",
    "InvalidInput",
    "LAYOUT_PRESETS",
    "LedgerState",
    "MatchQueue",
    "MemoryGame",
    "Outcome",
    "PairGenerator",
    "RandomPairGenerator",
    "ScoreLedger",
    "ScoringConfig",
    "SessionState",
    "Snapshot",
    "capture",
    "generate_pairs",
    "parse_layout",
    "restore",
]
