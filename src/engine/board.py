"""
3D三目並べの盤面を管理するモジュール
"""

from typing import List, Optional, Set, Tuple

from .piece import Piece, Player
from .position import Position

# 盤面サイズ（3x3x3）
BOARD_SIZE = 3

# 勝ちラインの方向ベクトル（対向する方向は片方のみ）
LINE_DIRECTIONS: Tuple[Tuple[int, int, int], ...] = (
    (1, 0, 0), (0, 1, 0), (0, 0, 1),
    (1, 1, 0), (1, 0, 1), (0, 1, 1),
    (1, -1, 0), (1, 0, -1), (0, 1, -1),
    (1, 1, 1), (1, 1, -1), (1, -1, 1),
    (1, -1, -1),
)

Line = Tuple[Position, Position, Position]


def _in_bounds(pos: Position) -> bool:
    return (0 <= pos.x < BOARD_SIZE
            and 0 <= pos.y < BOARD_SIZE
            and 0 <= pos.z < BOARD_SIZE)


def _is_canonical_start(start: Position, direction: Tuple[int, int, int]) -> bool:
    """一歩戻ると盤外になる場合のみ、そのマスをラインの始点とみなす"""
    return not _in_bounds(start.translate(-direction[0], -direction[1], -direction[2]))


def _enumerate_lines() -> Tuple[Line, ...]:
    lines: List[Line] = []
    for x in range(BOARD_SIZE):
        for y in range(BOARD_SIZE):
            for z in range(BOARD_SIZE):
                start = Position(x, y, z)
                for direction in LINE_DIRECTIONS:
                    if not _is_canonical_start(start, direction):
                        continue
                    candidate = []
                    cursor = start
                    for _ in range(BOARD_SIZE):
                        if not _in_bounds(cursor):
                            break
                        candidate.append(cursor)
                        cursor = cursor.translate(*direction)
                    if len(candidate) == BOARD_SIZE:
                        lines.append(tuple(candidate))
    return tuple(lines)


# 3x3x3では49本。起動時に一度だけ計算し、以後は同じオブジェクトを返す
ALL_LINES: Tuple[Line, ...] = _enumerate_lines()


class Board:
    """3x3x3のゲームボード。駒と凍結カウンタを保持する"""

    def __init__(self):
        self.grid: List[List[List[Optional[Piece]]]] = [
            [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]
        self.frozen_turns: List[List[List[int]]] = [
            [[0 for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]

    def in_bounds(self, pos: Position) -> bool:
        """位置が盤面内か確認"""
        return _in_bounds(pos)

    def _require_in_bounds(self, pos: Position):
        if not self.in_bounds(pos):
            raise ValueError(f"Invalid position: {pos}")

    def get_piece(self, pos: Position) -> Optional[Piece]:
        """指定位置の駒を取得"""
        self._require_in_bounds(pos)
        return self.grid[pos.x][pos.y][pos.z]

    def is_empty(self, pos: Position) -> bool:
        return self.get_piece(pos) is None

    def is_frozen(self, pos: Position) -> bool:
        return self.frozen_turns_remaining(pos) > 0

    def frozen_turns_remaining(self, pos: Position) -> int:
        """凍結の残りラウンド数"""
        self._require_in_bounds(pos)
        return self.frozen_turns[pos.x][pos.y][pos.z]

    def freeze_cell(self, pos: Position, turns: int):
        """
        マスを凍結する
        既存の凍結より短くはならない。盤外なら何もしない
        """
        if not self.in_bounds(pos):
            return
        current = self.frozen_turns[pos.x][pos.y][pos.z]
        self.frozen_turns[pos.x][pos.y][pos.z] = max(current, turns)

    def tick_freezes(self):
        """すべての凍結カウンタを1減らす（0未満にはならない）"""
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                for z in range(BOARD_SIZE):
                    if self.frozen_turns[x][y][z] > 0:
                        self.frozen_turns[x][y][z] -= 1

    def set_piece(self, pos: Position, piece: Piece):
        """
        指定位置に駒を置く（低レベルAPI）
        空きマスか・凍結中かは呼び出し側が確認済みであること
        """
        self._require_in_bounds(pos)
        self.grid[pos.x][pos.y][pos.z] = piece
        piece.position = pos

    def remove_piece(self, pos: Position) -> Optional[Piece]:
        """指定位置の駒を取り除いて返す（低レベルAPI）"""
        self._require_in_bounds(pos)
        piece = self.grid[pos.x][pos.y][pos.z]
        self.grid[pos.x][pos.y][pos.z] = None
        if piece is not None:
            piece.position = None
        return piece

    def shift_layer_up(self, layer: int):
        """指定レイヤーを一つ上のレイヤーと入れ替える"""
        self._swap_layers(layer, layer + 1)

    def shift_layer_down(self, layer: int):
        """指定レイヤーを一つ下のレイヤーと入れ替える"""
        self._swap_layers(layer, layer - 1)

    def _swap_layers(self, layer: int, other: int):
        """
        2つのレイヤーの駒と凍結カウンタを入れ替える
        どちらかが存在しないレイヤーなら何もしない
        """
        if not (0 <= layer < BOARD_SIZE and 0 <= other < BOARD_SIZE):
            return
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                column = self.grid[x][y]
                frozen = self.frozen_turns[x][y]
                column[layer], column[other] = column[other], column[layer]
                frozen[layer], frozen[other] = frozen[other], frozen[layer]
                if column[layer] is not None:
                    column[layer].position = Position(x, y, layer)
                if column[other] is not None:
                    column[other].position = Position(x, y, other)

    def empowered_capture(self, piece: Optional[Piece], target: Position) -> Optional[Piece]:
        """
        強化された駒で隣接する敵の駒を取る
        返り値: 取った駒。条件を満たさなければ盤面を変更せずNone
        """
        if piece is None or not piece.empowered or piece.position is None:
            return None
        if not self.in_bounds(target) or self.is_frozen(target):
            return None

        current = piece.position
        if current.manhattan_distance(target) != 1:
            return None

        occupant = self.get_piece(target)
        if occupant is None or occupant.owner is piece.owner:
            return None

        self.remove_piece(current)
        self.remove_piece(target)
        piece.empowered = False
        self.set_piece(target, piece)
        return occupant

    def list_all_lines(self) -> Tuple[Line, ...]:
        """49本の勝ちライン（毎回同じオブジェクト）"""
        return ALL_LINES

    def positions_of(self, player: Player) -> Set[Position]:
        """指定プレイヤーの駒がある位置の集合"""
        owned: Set[Position] = set()
        for x in range(BOARD_SIZE):
            for y in range(BOARD_SIZE):
                for z in range(BOARD_SIZE):
                    piece = self.grid[x][y][z]
                    if piece is not None and piece.owner is player:
                        owned.add(Position(x, y, z))
        return owned

    def __str__(self):
        """盤面の文字列表現（上のレイヤーから順に表示）"""
        result = []
        for z in range(BOARD_SIZE - 1, -1, -1):
            result.append(f"Layer z={z}:")
            for y in range(BOARD_SIZE):
                row_str = ""
                for x in range(BOARD_SIZE):
                    piece = self.grid[x][y][z]
                    if piece is not None:
                        cell = str(piece)
                    elif self.frozen_turns[x][y][z] > 0:
                        cell = f"F{self.frozen_turns[x][y][z]}"
                    else:
                        cell = "."
                    row_str += f"{cell:>3}"
                result.append(row_str)
            result.append("")
        return "\n".join(result)

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（API用）。board[x][y][z] の順"""
        board_data = []
        for x in range(BOARD_SIZE):
            plane = []
            for y in range(BOARD_SIZE):
                column = []
                for z in range(BOARD_SIZE):
                    piece = self.grid[x][y][z]
                    column.append({
                        "piece": piece.to_dict() if piece else None,
                        "frozen_turns": self.frozen_turns[x][y][z],
                    })
                plane.append(column)
            board_data.append(plane)
        return {"size": BOARD_SIZE, "board": board_data}
