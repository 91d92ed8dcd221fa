"""
単体テスト: 座標のテスト
"""

from src.engine import Position


class TestPosition:
    """座標の値オブジェクトとしての振る舞いを確認"""

    def test_equality_by_value(self):
        """同じ座標は等しく、同じハッシュを持つ"""
        assert Position(1, 2, 0) == Position(1, 2, 0)
        assert hash(Position(1, 2, 0)) == hash(Position(1, 2, 0))
        assert len({Position(0, 0, 0), Position(0, 0, 0)}) == 1

    def test_translate_has_no_bounds_check(self):
        """translateは範囲外の座標もそのまま返す"""
        assert Position(0, 0, 0).translate(-1, 0, 5) == Position(-1, 0, 5)

    def test_translate_returns_new_object(self):
        """元の座標は変わらない"""
        origin = Position(1, 1, 1)
        moved = origin.translate(1, 0, 0)
        assert origin == Position(1, 1, 1)
        assert moved == Position(2, 1, 1)

    def test_manhattan_distance(self):
        assert Position(0, 0, 0).manhattan_distance(Position(0, 0, 1)) == 1
        assert Position(0, 0, 0).manhattan_distance(Position(1, 1, 0)) == 2

    def test_str(self):
        assert str(Position(0, 1, 2)) == "(0, 1, 2)"
