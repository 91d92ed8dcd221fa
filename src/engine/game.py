"""
ゲーム進行を管理するモジュール
配置・捕獲・カード・ラウンド進行の唯一の入口
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .board import Board, Line
from .card import DECK, ActionContext, Card
from .piece import Piece, Player
from .position import Position

logger = logging.getLogger(__name__)

# 1人あたりの盤上の駒数上限
DEFAULT_PIECE_CAP = 5
# ラウンド数の上限
DEFAULT_TURN_LIMIT = 30
# カードの提示が始まるラウンド（以後1ラウンドおき）
CARD_OFFER_START_ROUND = 3


class ScoredLine:
    """得点になったライン（どのプレイヤーが完成させたか）"""

    def __init__(self, player: Player, positions: Line):
        self.player = player
        self.positions = tuple(positions)

    def __repr__(self):
        return f"ScoredLine({self.player.name!r}, {[str(p) for p in self.positions]})"

    def to_dict(self) -> dict:
        return {
            "player": self.player.name,
            "positions": [pos.to_dict() for pos in self.positions],
        }


class Game:
    """3D三目並べのゲーム全体を管理するクラス"""

    def __init__(
        self,
        players: Sequence[Player],
        piece_cap: int = DEFAULT_PIECE_CAP,
        turn_limit: int = DEFAULT_TURN_LIMIT,
        rng: Optional[random.Random] = None
    ):
        if not players:
            raise ValueError("At least one player is required")
        if piece_cap < 1:
            raise ValueError(f"piece_cap must be positive: {piece_cap}")
        if turn_limit < 1:
            raise ValueError(f"turn_limit must be positive: {turn_limit}")

        self.board = Board()
        self.players: Tuple[Player, ...] = tuple(players)
        self.piece_cap = piece_cap
        self.turn_limit = turn_limit
        self.rng = rng if rng is not None else random.Random()
        self.current_round = 1
        # 得点済みのライン（ゲーム中は減らない）
        self.scored_lines: Dict[Player, Set[Line]] = {p: set() for p in self.players}
        self.last_completed_lines: List[ScoredLine] = []

    # ---- 参照用 ----

    def get_board(self) -> Board:
        return self.board

    def get_current_round(self) -> int:
        return self.current_round

    def get_current_turn(self) -> int:
        return self.current_round

    def get_turn_limit(self) -> int:
        return self.turn_limit

    def get_players(self) -> Tuple[Player, ...]:
        return self.players

    def current_player(self) -> Player:
        """1ラウンドに1人ずつ手番を回すドライバ向けの手番プレイヤー"""
        return self.players[(self.current_round - 1) % len(self.players)]

    def is_game_over(self) -> bool:
        return self.current_round > self.turn_limit

    def get_last_completed_lines(self) -> Tuple[ScoredLine, ...]:
        """直近の得点判定で完成したライン（ハイライト表示用）"""
        return tuple(self.last_completed_lines)

    # ---- 配置と得点 ----

    def place_piece(self, player: Player, pos: Position) -> bool:
        """
        駒を置く
        盤外・凍結中・使用中のマスなら何もせずFalse
        駒数が上限に達していれば最も古い駒を取り除いてから置く
        """
        if not self.board.in_bounds(pos) or self.board.is_frozen(pos) or not self.board.is_empty(pos):
            logger.debug("%s cannot place at %s", player.name, pos)
            return False

        self._enforce_piece_cap(player)
        piece = Piece(player, self.current_round)
        self.board.set_piece(pos, piece)
        player.pieces_on_board.append(piece)
        logger.debug("%s placed at %s (round %d)", player.name, pos, self.current_round)

        self.score_new_lines(player)
        return True

    def _enforce_piece_cap(self, player: Player):
        if len(player.pieces_on_board) < self.piece_cap:
            return
        oldest = player.pieces_on_board.popleft()
        if oldest.position is not None:
            logger.debug("%s's oldest piece at %s evicted", player.name, oldest.position)
            self.board.remove_piece(oldest.position)

    def _scored_set(self, player: Player) -> Set[Line]:
        return self.scored_lines.setdefault(player, set())

    def score_new_lines(self, player: Player) -> int:
        """
        プレイヤーが新たに揃えたラインを得点にする
        一度得点したラインは、崩れて再び揃っても二度と得点にならない
        返り値: 今回増えた得点
        """
        self.last_completed_lines.clear()
        already_scored = self._scored_set(player)
        gained = 0

        for line in self.board.list_all_lines():
            if line in already_scored:
                continue
            if all(self._owned_by(pos, player) for pos in line):
                already_scored.add(line)
                player.add_score(1)
                self.last_completed_lines.append(ScoredLine(player, line))
                gained += 1

        if gained:
            logger.debug("%s completed %d new line(s), score=%d", player.name, gained, player.score)
        return gained

    def _owned_by(self, pos: Position, player: Player) -> bool:
        piece = self.board.get_piece(pos)
        return piece is not None and piece.owner is player

    # ---- ラウンド進行 ----

    def advance_round(self):
        """ラウンドを進める（凍結カウンタと駒の年齢を更新）"""
        self.current_round += 1
        self.board.tick_freezes()
        for player in self.players:
            for piece in player.pieces_on_board:
                piece.increment_age()
        logger.debug("advanced to round %d", self.current_round)

    # ---- 捕獲 ----

    def empowered_capture(self, player: Player, piece: Optional[Piece], target: Position) -> bool:
        """
        強化された自分の駒で隣接する敵の駒を取る
        得点判定は取った側のプレイヤーのみやり直す（得点は減らない）
        """
        if piece is None or piece.owner is not player:
            return False

        origin = piece.position
        captured = self.board.empowered_capture(piece, target)
        if captured is None:
            logger.debug("%s capture from %s to %s rejected", player.name, origin, target)
            return False

        former_owner = captured.owner
        if captured in former_owner.pieces_on_board:
            former_owner.pieces_on_board.remove(captured)
        logger.debug("%s captured %s's piece at %s", player.name, former_owner.name, target)

        self.score_new_lines(player)
        return True

    # ---- カード ----

    def should_offer_card(self) -> bool:
        """カードの提示はラウンド3から1ラウンドおき（3, 5, 7, ...）"""
        return self.current_round >= CARD_OFFER_START_ROUND and self.current_round % 2 == 1

    def offer_cards(self) -> List[Card]:
        """山札から重複なしで2枚を無作為に選ぶ"""
        first = self.rng.randrange(len(DECK))
        second = self.rng.randrange(len(DECK))
        while second == first:
            second = self.rng.randrange(len(DECK))
        return [DECK[first], DECK[second]]

    def use_card(self, card: Card, player: Player, ctx: ActionContext) -> bool:
        """
        カードを使う
        レイヤーシフトと強化の後は得点判定をやり直す
        返り値: 得点が増えたか
        """
        previous_score = player.score
        card.apply(self.board, player, ctx)
        logger.debug("%s used %s", player.name, card.display_name)
        if card.rescores:
            self.score_new_lines(player)
        return player.score != previous_score

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換（API用）"""
        return {
            "board": self.board.to_dict(),
            "players": [player.to_dict() for player in self.players],
            "current_round": self.current_round,
            "turn_limit": self.turn_limit,
            "piece_cap": self.piece_cap,
            "should_offer_card": self.should_offer_card(),
            "game_over": self.is_game_over(),
            "last_completed_lines": [line.to_dict() for line in self.last_completed_lines],
        }
