"""
プレイヤーと駒を定義するモジュール
"""

from collections import deque
from typing import TYPE_CHECKING, Deque, List, Optional

from .position import Position

if TYPE_CHECKING:
    from .card import Card


class Player:
    """
    プレイヤー
    名前・得点・盤上にある自分の駒のFIFOキュー（先頭が最古）を持つ
    """

    def __init__(self, name: str):
        self.name = name
        self.score = 0
        self.pieces_on_board: Deque['Piece'] = deque()
        self.hand: List['Card'] = []

    def __repr__(self):
        return f"Player({self.name!r}, score={self.score})"

    @property
    def initial(self) -> str:
        """盤面表示用の一文字（名前が空なら '?'）"""
        return self.name[:1].upper() if self.name else "?"

    def add_score(self, delta: int):
        self.score += delta

    def add_to_hand(self, card: 'Card'):
        self.hand.append(card)

    def remove_from_hand(self, index: int) -> 'Card':
        return self.hand.pop(index)

    def to_dict(self) -> dict:
        """プレイヤーを辞書形式に変換（API用）"""
        return {
            "name": self.name,
            "score": self.score,
            "pieces_on_board": [
                piece.position.to_dict() if piece.position else None
                for piece in self.pieces_on_board
            ],
            "hand": [card.display_name for card in self.hand],
        }


class Piece:
    """盤上に置かれた一つの駒"""

    def __init__(self, owner: Player, placement_index: int):
        self.owner = owner
        self.placement_index = placement_index  # 生成されたラウンド番号
        self.empowered = False
        self.age_turns = 0
        # 盤面のマスと常に一致させる（Board.set_piece / remove_piece でのみ更新）
        self.position: Optional[Position] = None

    def __str__(self):
        """駒の文字列表現（例: 'A', 'B*'）"""
        return self.owner.initial + ("*" if self.empowered else "")

    def __repr__(self):
        return (
            f"Piece(owner={self.owner.name!r}, position={self.position}, "
            f"empowered={self.empowered}, age={self.age_turns})"
        )

    def increment_age(self):
        self.age_turns += 1

    def reset_age(self):
        self.age_turns = 0

    def turns_life_remaining(self, limit: int) -> int:
        """
        残り寿命（表示用）
        エンジンは年齢で駒を除去しない。除去は駒数上限によるFIFOのみ
        """
        return max(0, limit - self.age_turns)

    def to_dict(self) -> dict:
        """駒を辞書形式に変換（API用）"""
        return {
            "owner": self.owner.name,
            "empowered": self.empowered,
            "age_turns": self.age_turns,
            "placement_index": self.placement_index,
        }
