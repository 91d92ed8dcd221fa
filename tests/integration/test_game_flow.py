"""
統合テスト: ゲームフロー全体のテスト
ドライバと同じ手順（カード提示→配置→ラウンド進行）でゲームを最後まで進める
"""

import random

from src.engine import ActionContext, Card, Game, Player, Position


def choose_context(game, player, card):
    """カードごとに、ドライバが選ぶような対象を組み立てる"""
    board = game.get_board()
    own = sorted(board.positions_of(player))
    if card in (Card.EMPOWER, Card.TIME_REWIND):
        piece = board.get_piece(own[0]) if own else None
        return ActionContext(piece=piece)
    if card == Card.FREEZE:
        return ActionContext(pos=Position(1, 1, 1))
    return ActionContext(layer=1)


class TestGameFlow:
    """ゲーム全体の流れをテストするクラス"""

    def test_example_scenario(self):
        """Aliceが縦一列を揃え、その後レイヤーを上にシフトする"""
        alice, bob = Player("Alice"), Player("Bob")
        game = Game([alice, bob], piece_cap=5, turn_limit=30, rng=random.Random(7))

        for y in range(3):
            assert game.place_piece(alice, Position(0, y, 0))

        assert alice.score == 1
        assert [line.positions for line in game.get_last_completed_lines()] == [
            (Position(0, 0, 0), Position(0, 1, 0), Position(0, 2, 0))
        ]

        game.use_card(Card.LAYER_SHIFT_UP, alice, ActionContext(layer=0))

        assert game.board.positions_of(alice) == {
            Position(0, 0, 1), Position(0, 1, 1), Position(0, 2, 1)
        }
        # (0,y,1)の列は別のラインなので得点になる
        assert alice.score == 2
        for y in range(3):
            assert game.board.is_empty(Position(0, y, 0))

    def test_full_game_to_terminal(self):
        """ターン上限まで進めても不変条件が保たれる"""
        players = [Player("Alice"), Player("Bob")]
        game = Game(players, piece_cap=4, turn_limit=12, rng=random.Random(2024))
        rng = random.Random(99)
        cells = [Position(x, y, z) for x in range(3) for y in range(3) for z in range(3)]
        previous_scores = [0, 0]

        while not game.is_game_over():
            for player in game.get_players():
                if game.should_offer_card():
                    offer = game.offer_cards()
                    assert len(set(offer)) == 2
                    card = offer[0]
                    game.use_card(card, player, choose_context(game, player, card))

                free = [c for c in cells
                        if game.board.is_empty(c) and not game.board.is_frozen(c)]
                if free:
                    assert game.place_piece(player, rng.choice(free))

                assert len(player.pieces_on_board) <= game.piece_cap

            game.advance_round()

            for i, player in enumerate(game.get_players()):
                assert player.score >= previous_scores[i], "得点が減っています"
                previous_scores[i] = player.score
                for piece in player.pieces_on_board:
                    assert piece.position is not None
                    assert game.board.get_piece(piece.position) is piece

        assert game.get_current_round() == 13
        assert game.is_game_over()
