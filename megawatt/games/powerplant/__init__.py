"""
Power Plant Auction - The first game on the engine.

Players bid for power plants, buy commodities to run them, build on a
city map and get paid in repeating four-phase rounds.

This module contains:
- Static tables (plant deck, map, refill rates)
- Board, Player and AuctionState
- The event reducer, phase hooks and command table
- The concrete Engine and its setup factory
"""

from .enums import Resource, RoundPhase, MajorPhase, MoveName, GameEventName, PLAYER_COLORS
from .plants import Plant, PLANTS, get_plant
from .board import Board, REFILL
from .player import Player
from .auction import AuctionState
from .options import GameOptions
from .engine import Engine
from .setup import setup_powerplant_game

__all__ = [
    "Resource",
    "RoundPhase",
    "MajorPhase",
    "MoveName",
    "GameEventName",
    "PLAYER_COLORS",
    "Plant",
    "PLANTS",
    "get_plant",
    "Board",
    "REFILL",
    "Player",
    "AuctionState",
    "GameOptions",
    "Engine",
    "setup_powerplant_game",
]
