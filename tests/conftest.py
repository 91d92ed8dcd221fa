"""
pytest共通設定とフィクスチャ
"""

import random
import sys
from pathlib import Path

import pytest

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from src.engine import Board
    return Board()


@pytest.fixture
def alice():
    """先手プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player("Alice")


@pytest.fixture
def bob():
    """後手プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player("Bob")


@pytest.fixture
def game(alice, bob):
    """2人対戦・駒数上限5・30ラウンドのゲームを提供するフィクスチャ"""
    from src.engine import Game
    return Game([alice, bob], piece_cap=5, turn_limit=30, rng=random.Random(42))
