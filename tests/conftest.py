import pytest

from falling_blocks.game import FallingBlocksGame, GameConfig, Piece, TetrominoType


@pytest.fixture
def game():
    return FallingBlocksGame(GameConfig(random_seed=1234))


@pytest.fixture
def place():
    """Replace the active piece of a game with a fresh piece of the given type."""

    def _place(game, kind: TetrominoType, **kwargs) -> Piece:
        piece = Piece.spawn(kind)
        for key, value in kwargs.items():
            setattr(piece, key, value)
        game.current_piece = piece
        return piece

    return _place
