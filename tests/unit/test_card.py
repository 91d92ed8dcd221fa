"""
単体テスト: パワーカードのテスト
"""

import pytest

from src.engine import ActionContext, Board, Card, DECK, Piece, Position


class TestCard:
    """各カードの効果を確認"""

    def test_deck_has_five_distinct_cards(self):
        assert len(DECK) == 5
        assert set(DECK) == set(Card)

    def test_display_names(self):
        assert [card.display_name for card in DECK] == [
            "Empower", "Layer Shift Up", "Layer Shift Down", "Time Rewind", "Freeze"
        ]

    @pytest.mark.parametrize("name, expected", [
        ("EMPOWER", Card.EMPOWER),
        ("Layer Shift Up", Card.LAYER_SHIFT_UP),
        ("TIME_REWIND", Card.TIME_REWIND),
    ])
    def test_from_name(self, name, expected):
        assert Card.from_name(name) is expected

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            Card.from_name("Teleport")

    def test_empower(self, empty_board, alice):
        piece = Piece(alice, 1)
        empty_board.set_piece(Position(0, 0, 0), piece)

        Card.EMPOWER.apply(empty_board, alice, ActionContext(piece=piece))

        assert piece.empowered

    def test_empower_without_piece_is_noop(self, empty_board, alice):
        Card.EMPOWER.apply(empty_board, alice, ActionContext())

    def test_layer_shift_cards(self, empty_board, alice):
        piece = Piece(alice, 1)
        empty_board.set_piece(Position(0, 0, 1), piece)

        Card.LAYER_SHIFT_UP.apply(empty_board, alice, ActionContext(layer=1))
        assert piece.position == Position(0, 0, 2)

        Card.LAYER_SHIFT_DOWN.apply(empty_board, alice, ActionContext(layer=2))
        assert piece.position == Position(0, 0, 1)

    def test_time_rewind_moves_piece_to_back(self, empty_board, alice):
        pieces = []
        for i in range(3):
            piece = Piece(alice, i + 1)
            empty_board.set_piece(Position(i, 0, 0), piece)
            alice.pieces_on_board.append(piece)
            pieces.append(piece)
        pieces[0].age_turns = 4

        Card.TIME_REWIND.apply(empty_board, alice, ActionContext(piece=pieces[0]))

        assert pieces[0].age_turns == 0
        assert list(alice.pieces_on_board) == [pieces[1], pieces[2], pieces[0]]

    def test_freeze(self, empty_board, alice):
        pos = Position(2, 2, 2)
        Card.FREEZE.apply(empty_board, alice, ActionContext(pos=pos))

        assert empty_board.frozen_turns_remaining(pos) == 2

    def test_freeze_without_position_is_noop(self, alice):
        board = Board()
        Card.FREEZE.apply(board, alice, ActionContext())
        assert "F" not in str(board)

    def test_rescoring_cards(self):
        assert {card for card in Card if card.rescores} == {
            Card.EMPOWER, Card.LAYER_SHIFT_UP, Card.LAYER_SHIFT_DOWN
        }
