"""Enumerations for the power plant game."""

from __future__ import annotations
from enum import Enum


class Resource(str, Enum):
    """Commodities burned by power plants."""
    COAL = "coal"
    OIL = "oil"
    GARBAGE = "garbage"
    URANIUM = "uranium"


class RoundPhase(str, Enum):
    """The four stages of every round, in play order."""
    PLANT_AUCTION = "plantauction"
    COMMODITIES_TRADING = "commoditiestrading"
    CONSTRUCTION = "construction"
    BUREAUCRACY = "bureaucracy"


class MajorPhase(str, Enum):
    """Game era; drives refill rates and market size."""
    STEP1 = "step1"
    STEP2 = "step2"
    STEP3 = "step3"


class MoveName(str, Enum):
    PASS = "pass"
    AUCTION = "auction"
    BID = "bid"
    BUY_RESOURCE = "buyresource"


class GameEventName(str, Enum):
    GAME_START = "gamestart"
    ROUND_START = "roundstart"
    TURN_ORDER = "turnorder"
    PHASE_CHANGE = "phasechange"
    MAJOR_PHASE_CHANGE = "majorphasechange"
    CURRENT_PLAYER = "currentplayer"
    AUCTION_START = "auctionstart"
    AUCTION_BID = "auctionbid"
    AUCTION_PASS = "auctionpass"
    ACQUIRE_PLANT = "acquireplant"
    DRAW_PLANT = "drawplant"
    ACQUIRE_RESOURCES = "acquireresources"
    FILL_RESOURCES = "fillresources"
    GAME_END = "gameend"


# Selectable player colors; the turn order is a seeded shuffle of these
PLAYER_COLORS = ["red", "blue", "green", "yellow", "purple", "black"]
