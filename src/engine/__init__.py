"""
3D三目並べのゲームエンジン - パッケージ初期化
"""

from .position import Position
from .piece import Piece, Player
from .board import Board, BOARD_SIZE, LINE_DIRECTIONS, Line
from .card import Card, ActionContext, DECK, FREEZE_TURNS
from .game import Game, ScoredLine, DEFAULT_PIECE_CAP, DEFAULT_TURN_LIMIT, CARD_OFFER_START_ROUND

__all__ = [
    'Position',
    'Piece',
    'Player',
    'Board',
    'BOARD_SIZE',
    'LINE_DIRECTIONS',
    'Line',
    'Card',
    'ActionContext',
    'DECK',
    'FREEZE_TURNS',
    'Game',
    'ScoredLine',
    'DEFAULT_PIECE_CAP',
    'DEFAULT_TURN_LIMIT',
    'CARD_OFFER_START_ROUND',
]
