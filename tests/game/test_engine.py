"""Tests for GameEngine: setup, moves, promotion, turns and winning."""

from collections.abc import Callable

import pytest

from checkie.core.enums import Color, PieceType
from checkie.core.events import PieceCaptured, PiecePromoted, TurnChanged
from checkie.core.move_generator import MoveGenerator
from checkie.core.notation import layout_to_text
from checkie.core.piece import Piece
from checkie.core.player import Player
from checkie.core.types import Position
from checkie.game.engine import FIRST_COLOR, GameEngine
from checkie.game.interfaces import GamePhase, MoveRejection

P = Position
EngineFactory = Callable[..., GameEngine]

# (5,0) has a double jump, (1,2) a single one, (3,0) only steps.
SIDE_WIDE = """
. . . b . b . .
. . . . . . w .
. b . . . . . .
. . w . . . w .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
"""

# Black man one step from promotion, a white king far away.
NEAR_PROMOTION = """
. . . . . . . W
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. b . . . . . .
. . . . . . . .
"""

# The chain touches row 7 on (2,7) but finishes on (4,5).
THROUGH_PROMOTION_ROW = """
. . . . . . . W
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
b . . . . . . .
. w . w . . . .
. . . . . . . .
"""

# The chain finishes on the promotion row at (4,7).
ENDS_ON_PROMOTION_ROW = """
. . . . . . . W
. . . . . . . .
. . . . . . . .
b . . . . . . .
. w . . . . . .
. . . . . . . .
. . . w . . . .
. . . . . . . .
"""

# Black's only man cannot step or jump.
BLACK_BLOCKED = """
. . . . . . . .
b . . . . . . .
. w . . . . . .
. . w . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
"""

# Black takes White's last piece.
LAST_PIECE = """
. . . . . . . .
. . . . . . . .
. b . . . . . .
. . w . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
"""


def snapshot(engine: GameEngine) -> tuple[str, Player, dict[Color, list[int]]]:
    pieces = {
        player.color: sorted(p.id for p in plist)
        for player, plist in engine.player_pieces().items()
    }
    return layout_to_text(engine.board), engine.current_player, pieces


# ── Construction & start ─────────────────────────────────────────────────────


class TestConstruction:
    def test_requires_two_players(self) -> None:
        with pytest.raises(ValueError):
            GameEngine([Player(Color.BLACK)])

    def test_requires_distinct_colors(self) -> None:
        with pytest.raises(ValueError):
            GameEngine([Player(Color.BLACK), Player(Color.BLACK)])

    @pytest.mark.parametrize("size", [2, 7])
    def test_rejects_bad_board_size(self, players: tuple[Player, Player], size: int) -> None:
        with pytest.raises(ValueError):
            GameEngine(players, board_size=size)

    def test_not_started(self, players: tuple[Player, Player]) -> None:
        engine = GameEngine(players)
        assert engine.phase == GamePhase.NOT_STARTED
        assert engine.winner is None
        assert engine.check_win() is None


class TestStart:
    def test_initial_position(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        counts = {p.color: len(pieces) for p, pieces in engine.player_pieces().items()}
        assert counts == {Color.BLACK: 12, Color.WHITE: 12}
        assert engine.current_player.color == FIRST_COLOR
        assert engine.phase == GamePhase.AWAITING_MOVE

    def test_initial_movers(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        movable = engine.movable_pieces(engine.current_player)
        assert [pos for _, pos in movable] == [P(1, 2), P(3, 2), P(5, 2), P(7, 2)]
        for piece, _ in movable:
            assert all(len(path) == 1 for path in engine.legal_moves(piece))

    def test_edge_man_single_path(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        piece = engine.piece_at(P(7, 2))
        assert piece is not None
        assert engine.legal_moves(piece) == [(P(6, 3),)]

    def test_piece_sets_match_board(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        for player, pieces in engine.player_pieces().items():
            on_board = [p for p, _ in engine.board.pieces(player.color)]
            assert {id(p) for p in pieces} == {id(p) for p in on_board}

    def test_custom_layout_and_side_to_move(self, make_engine: EngineFactory) -> None:
        engine = make_engine(SIDE_WIDE, to_move=Color.WHITE)
        assert engine.current_player.color == Color.WHITE
        assert layout_to_text(engine.board) == SIDE_WIDE.strip()

    def test_layout_size_mismatch(self, players: tuple[Player, Player]) -> None:
        engine = GameEngine(players, board_size=10)
        with pytest.raises(ValueError):
            engine.start(SIDE_WIDE)

    def test_ten_by_ten(self, make_engine: EngineFactory) -> None:
        engine = make_engine(board_size=10)
        assert engine.board.count(Color.BLACK) == 20
        assert engine.board.count(Color.WHITE) == 20

    def test_restart_rebuilds_pieces(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        old = engine.piece_at(P(1, 2))
        assert old is not None
        engine.move_piece(old, [P(0, 3)])

        engine.start()
        assert engine.current_player.color == Color.BLACK
        assert engine.piece_at(P(0, 3)) is None
        counts = [len(pieces) for pieces in engine.player_pieces().values()]
        assert counts == [12, 12]
        fresh = engine.piece_at(P(1, 2))
        assert fresh is not None and fresh is not old
        assert engine.validate_move(old, [P(2, 3)]) == MoveRejection.INVALID_PIECE_REFERENCE


# ── Forced capture ───────────────────────────────────────────────────────────


class TestForcedCapture:
    def test_only_longest_chain_piece_movable(self, make_engine: EngineFactory) -> None:
        engine = make_engine(SIDE_WIDE)
        movable = engine.movable_pieces(engine.current_player)
        assert [pos for _, pos in movable] == [P(5, 0)]
        piece = movable[0][0]
        assert engine.legal_moves(piece) == [(P(7, 2), P(5, 4))]

    def test_shorter_capture_refused(self, make_engine: EngineFactory) -> None:
        engine = make_engine(SIDE_WIDE)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        assert engine.legal_moves(piece) == []
        assert engine.validate_move(piece, [P(3, 4)]) == MoveRejection.ILLEGAL_PATH

    def test_normal_move_refused_while_capture_exists(
        self, make_engine: EngineFactory
    ) -> None:
        engine = make_engine(SIDE_WIDE)
        piece = engine.piece_at(P(3, 0))
        assert piece is not None
        assert engine.move_piece(piece, [P(2, 1)]) == []
        assert engine.validate_move(piece, [P(2, 1)]) == MoveRejection.ILLEGAL_PATH

    def test_every_listed_path_is_accepted(self, make_engine: EngineFactory) -> None:
        engine = make_engine(SIDE_WIDE)
        for piece, _ in engine.movable_pieces(engine.current_player):
            for path in engine.legal_moves(piece):
                assert engine.validate_move(piece, path) is None

    def test_double_capture_removes_both(self, make_engine: EngineFactory) -> None:
        engine = make_engine(SIDE_WIDE)
        piece = engine.piece_at(P(5, 0))
        assert piece is not None
        events = engine.move_piece(piece, [P(7, 2), P(5, 4)])

        assert [type(e) for e in events] == [PieceCaptured, PieceCaptured, TurnChanged]
        assert [e.position for e in events[:2]] == [P(6, 1), P(6, 3)]
        assert engine.piece_at(P(6, 1)) is None
        assert engine.piece_at(P(6, 3)) is None
        assert engine.board.position_of(piece) == P(5, 4)
        white = engine.player_pieces()[engine.opponent_of(engine.players[0])]
        assert len(white) == 1


# ── Normal moves & turns ─────────────────────────────────────────────────────


class TestMovePiece:
    def test_step_switches_turn(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        events = engine.move_piece(piece, [P(2, 3)])

        assert events == [TurnChanged(engine.players[1])]
        assert engine.current_player.color == Color.WHITE
        assert engine.piece_at(P(2, 3)) is piece
        assert engine.piece_at(P(1, 2)) is None

    def test_piece_identity_persists(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        engine.move_piece(piece, (P(0, 3),))
        assert engine.piece_at(P(0, 3)) is piece
        assert piece.id == 9

    def test_turns_alternate(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        black = engine.piece_at(P(1, 2))
        white = engine.piece_at(P(0, 5))
        assert black is not None and white is not None
        engine.move_piece(black, [P(2, 3)])
        engine.move_piece(white, [P(1, 4)])
        assert engine.current_player.color == Color.BLACK

    def test_switch_player(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        seen: list[TurnChanged] = []
        engine.events.on_turn_changed.append(seen.append)
        event = engine.switch_player()
        assert event.player.color == Color.WHITE
        assert seen == [event]

    def test_movable_set_computed_once_per_board(
        self, make_engine: EngineFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        engine = make_engine()
        calls: list[Color] = []
        original = MoveGenerator.movable_pieces

        def counting(gen: MoveGenerator, color: Color) -> list[tuple[Piece, Position]]:
            calls.append(color)
            return original(gen, color)

        monkeypatch.setattr(MoveGenerator, "movable_pieces", counting)
        for piece, _ in engine.movable_pieces(engine.current_player):
            assert engine.legal_moves(piece)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        engine.move_piece(piece, [P(0, 3)])
        engine.validate_move(piece, [P(1, 4)])

        assert calls == [Color.BLACK, Color.WHITE]

    def test_movable_set_refreshed_after_move(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        black = engine.players[0]
        before = engine.movable_pieces(black)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        engine.move_piece(piece, [P(0, 3)])

        after = engine.movable_pieces(black)
        assert P(0, 3) in [pos for _, pos in after]
        assert P(0, 3) not in [pos for _, pos in before]


class TestRejections:
    def test_rejected_moves_change_nothing(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        before = snapshot(engine)
        black = engine.piece_at(P(1, 2))
        white = engine.piece_at(P(0, 5))
        assert black is not None and white is not None

        attempts = [
            (white, [P(1, 4)]),
            (Piece(99, Color.BLACK), [P(2, 3)]),
            (black, [P(-1, 3)]),
            (black, [P(1, 3)]),
            (black, []),
            (black, [P(2, 3), P(3, 4)]),
        ]
        for piece, path in attempts:
            assert engine.move_piece(piece, path) == []
            assert engine.move_piece(piece, path) == []
        assert snapshot(engine) == before

    @pytest.mark.parametrize(
        "square,path,reason",
        [
            (P(0, 5), [P(1, 4)], MoveRejection.WRONG_TURN),
            (P(1, 2), [P(8, 3)], MoveRejection.OUT_OF_BOUNDS),
            (P(1, 2), [P(1, 3)], MoveRejection.ILLEGAL_PATH),
            (P(1, 2), [], MoveRejection.ILLEGAL_PATH),
            (P(0, 1), [P(1, 2)], MoveRejection.ILLEGAL_PATH),
        ],
    )
    def test_rejection_reason(
        self,
        make_engine: EngineFactory,
        square: Position,
        path: list[Position],
        reason: MoveRejection,
    ) -> None:
        engine = make_engine()
        piece = engine.piece_at(square)
        assert piece is not None
        assert engine.validate_move(piece, path) == reason

    def test_impostor_piece(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        real = engine.piece_at(P(1, 2))
        assert real is not None
        impostor = Piece(real.id, real.color)
        assert engine.validate_move(impostor, [P(0, 3)]) == MoveRejection.INVALID_PIECE_REFERENCE

    def test_before_start(self, players: tuple[Player, Player]) -> None:
        engine = GameEngine(players)
        piece = Piece(1, Color.BLACK)
        assert engine.validate_move(piece, [P(0, 3)]) == MoveRejection.GAME_NOT_IN_PROGRESS
        assert engine.move_piece(piece, [P(0, 3)]) == []
        assert engine.legal_moves(piece) == []

    def test_after_game_over(self, make_engine: EngineFactory) -> None:
        engine = make_engine(LAST_PIECE)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        engine.move_piece(piece, [P(3, 4)])
        assert engine.phase == GamePhase.GAME_OVER
        assert engine.legal_moves(piece) == []
        assert engine.validate_move(piece, [P(2, 5)]) == MoveRejection.GAME_NOT_IN_PROGRESS


# ── Promotion ────────────────────────────────────────────────────────────────


class TestPromotion:
    def test_step_onto_last_row(self, make_engine: EngineFactory) -> None:
        engine = make_engine(NEAR_PROMOTION)
        piece = engine.piece_at(P(1, 6))
        assert piece is not None
        events = engine.move_piece(piece, [P(0, 7)])

        assert events == [PiecePromoted(piece, P(0, 7)), TurnChanged(engine.players[1])]
        assert piece.piece_type == PieceType.KING

    def test_passing_through_does_not_promote(self, make_engine: EngineFactory) -> None:
        engine = make_engine(THROUGH_PROMOTION_ROW)
        piece = engine.piece_at(P(0, 5))
        assert piece is not None
        assert engine.legal_moves(piece) == [(P(2, 7), P(4, 5))]

        events = engine.move_piece(piece, [P(2, 7), P(4, 5)])
        assert [type(e) for e in events] == [PieceCaptured, PieceCaptured, TurnChanged]
        assert piece.piece_type == PieceType.MAN

    def test_chain_ending_on_last_row(self, make_engine: EngineFactory) -> None:
        engine = make_engine(ENDS_ON_PROMOTION_ROW)
        piece = engine.piece_at(P(0, 3))
        assert piece is not None
        events = engine.move_piece(piece, [P(2, 5), P(4, 7)])

        assert [type(e) for e in events] == [
            PieceCaptured,
            PieceCaptured,
            PiecePromoted,
            TurnChanged,
        ]
        assert events[2] == PiecePromoted(piece, P(4, 7))
        assert piece.is_king

    def test_king_not_promoted_again(self, make_engine: EngineFactory) -> None:
        engine = make_engine(NEAR_PROMOTION)
        piece = engine.piece_at(P(1, 6))
        assert piece is not None
        engine.move_piece(piece, [P(0, 7)])
        white_king = engine.piece_at(P(7, 0))
        assert white_king is not None
        engine.move_piece(white_king, [P(6, 1)])

        events = engine.move_piece(piece, [P(1, 6)])
        assert not any(isinstance(e, PiecePromoted) for e in events)


# ── Winning ──────────────────────────────────────────────────────────────────


class TestCheckWin:
    def test_blocked_side_loses(self, make_engine: EngineFactory) -> None:
        engine = make_engine(BLACK_BLOCKED, to_move=Color.BLACK)
        winner = engine.check_win()
        assert winner is not None and winner.color == Color.WHITE
        assert engine.winner is winner
        assert engine.phase == GamePhase.GAME_OVER

    def test_capturing_last_piece_wins(self, make_engine: EngineFactory) -> None:
        engine = make_engine(LAST_PIECE)
        winners: list[Player] = []
        engine.events.on_game_over.append(winners.append)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None

        engine.move_piece(piece, [P(3, 4)])

        black = engine.players[0]
        assert engine.winner is black
        assert winners == [black]
        assert engine.player_pieces()[engine.players[1]] == []

    def test_game_over_fires_once(self, make_engine: EngineFactory) -> None:
        engine = make_engine(BLACK_BLOCKED)
        winners: list[Player] = []
        engine.events.on_game_over.append(winners.append)
        engine.check_win()
        engine.check_win()
        assert len(winners) == 1

    def test_no_winner_in_opening(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        assert engine.check_win() is None
        assert engine.phase == GamePhase.AWAITING_MOVE


# ── Callbacks ────────────────────────────────────────────────────────────────


class TestCallbacks:
    def test_dispatched_in_event_order(self, make_engine: EngineFactory) -> None:
        engine = make_engine(ENDS_ON_PROMOTION_ROW)
        log: list[str] = []
        engine.events.on_piece_captured.append(lambda e: log.append(f"x{e.position}"))
        engine.events.on_piece_promoted.append(lambda e: log.append("king"))
        engine.events.on_turn_changed.append(lambda e: log.append(str(e.player.color)))
        piece = engine.piece_at(P(0, 3))
        assert piece is not None

        engine.move_piece(piece, [P(2, 5), P(4, 7)])
        assert log == ["x(1,4)", "x(3,6)", "king", "white"]

    def test_game_over_after_move_events(self, make_engine: EngineFactory) -> None:
        engine = make_engine(LAST_PIECE)
        log: list[str] = []
        engine.events.on_piece_captured.append(lambda e: log.append("captured"))
        engine.events.on_turn_changed.append(lambda e: log.append("turn"))
        engine.events.on_game_over.append(lambda w: log.append("over"))
        piece = engine.piece_at(P(1, 2))
        assert piece is not None

        engine.move_piece(piece, [P(3, 4)])
        assert log == ["captured", "turn", "over"]

    def test_rejected_move_emits_nothing(self, make_engine: EngineFactory) -> None:
        engine = make_engine()
        log: list[object] = []
        engine.events.on_turn_changed.append(log.append)
        piece = engine.piece_at(P(1, 2))
        assert piece is not None
        engine.move_piece(piece, [P(1, 3)])
        assert log == []


# ── Whole games ──────────────────────────────────────────────────────────────


class TestSelfPlay:
    @pytest.mark.parametrize("pick", [0, -1])
    def test_listed_moves_always_accepted(self, make_engine: EngineFactory, pick: int) -> None:
        engine = make_engine()
        for _ in range(150):
            if engine.phase == GamePhase.GAME_OVER:
                break
            movable = engine.movable_pieces(engine.current_player)
            assert movable
            piece = movable[pick][0]
            paths = engine.legal_moves(piece)
            assert paths

            events = engine.move_piece(piece, paths[pick])
            assert events
            assert isinstance(events[-1], TurnChanged)

            for player, pieces in engine.player_pieces().items():
                assert len(pieces) == engine.board.count(player.color)
