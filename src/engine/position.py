"""
3次元盤面上の座標を表現するモジュール
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """盤面上の座標 (x, y, z)。値で比較・ハッシュされる不変オブジェクト"""
    x: int
    y: int
    z: int

    def translate(self, dx: int, dy: int, dz: int) -> 'Position':
        """
        オフセットを加えた新しい座標を返す
        範囲チェックは行わない（盤面側の責務）
        """
        return Position(self.x + dx, self.y + dy, self.z + dz)

    def manhattan_distance(self, other: 'Position') -> int:
        """マンハッタン距離"""
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)

    def __str__(self):
        return f"({self.x}, {self.y}, {self.z})"

    def to_dict(self) -> dict:
        """座標を辞書形式に変換（API用）"""
        return {"x": self.x, "y": self.y, "z": self.z}
