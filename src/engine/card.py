"""
パワーカードを定義するモジュール
"""

from enum import Enum
from typing import Optional

from .board import Board
from .piece import Piece, Player
from .position import Position

# 凍結カードで凍結するラウンド数
FREEZE_TURNS = 2


class ActionContext:
    """
    カード一枚を使うためのパラメータ
    カードごとに必要なフィールドだけが読まれる
    """

    def __init__(
        self,
        layer: int = 0,
        pos: Optional[Position] = None,
        target: Optional[Position] = None,
        piece: Optional[Piece] = None
    ):
        self.layer = layer    # レイヤーシフト用
        self.pos = pos        # 凍結するマス
        self.target = target  # 捕獲先（将来のカード用）
        self.piece = piece    # 強化・巻き戻しの対象駒

    def __repr__(self):
        return (
            f"ActionContext(layer={self.layer}, pos={self.pos}, "
            f"target={self.target}, piece={self.piece!r})"
        )


class Card(Enum):
    """カードの種類（値は表示名）"""
    EMPOWER = "Empower"
    LAYER_SHIFT_UP = "Layer Shift Up"
    LAYER_SHIFT_DOWN = "Layer Shift Down"
    TIME_REWIND = "Time Rewind"
    FREEZE = "Freeze"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def rescores(self) -> bool:
        """使用後に得点判定をやり直すカードか（ラインを完成させうるもの）"""
        return self in (Card.EMPOWER, Card.LAYER_SHIFT_UP, Card.LAYER_SHIFT_DOWN)

    @staticmethod
    def from_name(name: str) -> 'Card':
        """列挙名（'EMPOWER'）または表示名（'Layer Shift Up'）からカードを取得"""
        for card in Card:
            if name in (card.name, card.value):
                return card
        raise ValueError(f"Unknown card: {name}")

    def apply(self, board: Board, player: Player, ctx: ActionContext):
        """
        カードの効果を適用する
        対象の妥当性（所有者など）はここでは確認しない
        """
        if self is Card.EMPOWER:
            if ctx.piece is None:
                return
            ctx.piece.empowered = True

        elif self is Card.LAYER_SHIFT_UP:
            board.shift_layer_up(ctx.layer)

        elif self is Card.LAYER_SHIFT_DOWN:
            board.shift_layer_down(ctx.layer)

        elif self is Card.TIME_REWIND:
            if ctx.piece is None:
                return
            ctx.piece.reset_age()
            # キューの末尾（最も新しい位置）へ移動
            queue = player.pieces_on_board
            if ctx.piece in queue:
                queue.remove(ctx.piece)
            queue.append(ctx.piece)

        elif self is Card.FREEZE:
            if ctx.pos is None:
                return
            board.freeze_cell(ctx.pos, FREEZE_TURNS)


# 山札（固定の5種類）
DECK = tuple(Card)
