"""Turn engine, game phases and move rejection reasons.

Quick start::

    from checkie.core import Color, Player
    from checkie.game import GameEngine

    engine = GameEngine([Player(Color.BLACK, "Alice"), Player(Color.WHITE, "Bob")])
    engine.start()
    piece, _ = engine.movable_pieces(engine.current_player)[0]
    events = engine.move_piece(piece, engine.legal_moves(piece)[0])
"""

from checkie.game.engine import FIRST_COLOR, GameEngine, GameEvents
from checkie.game.interfaces import GamePhase, IGameEngine, MoveRejection

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameEngine",
    "MoveRejection",
    # Concrete
    "FIRST_COLOR",
    "GameEngine",
    "GameEvents",
]
