import numpy as np

from falling_blocks.game import BOARD_HEIGHT, BOARD_WIDTH, Board, Piece, TetrominoType


def test_empty_board_dimensions():
    board = Board()
    assert board.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH) == (20, 10)
    assert not board.grid.any()
    assert board.lines_cleared == 0


def test_collides_with_side_walls():
    board = Board()
    assert board.collides(Piece(TetrominoType.I, x=-1, y=0))
    assert board.collides(Piece(TetrominoType.I, x=7, y=0))
    assert not board.collides(Piece(TetrominoType.I, x=6, y=0))
    assert board.collides(Piece(TetrominoType.I, x=0, y=0), -1, 0)
    assert board.collides(Piece(TetrominoType.I, x=6, y=0), 1, 0)


def test_collides_with_floor():
    board = Board()
    piece = Piece(TetrominoType.O, x=0, y=18)
    assert not board.collides(piece)
    assert board.collides(piece, 0, 1)


def test_collides_with_filled_cells():
    board = Board()
    board.grid[19, 4] = 3
    piece = Piece(TetrominoType.T, x=3, y=17)
    assert not board.collides(piece)
    assert board.collides(piece, 0, 1)


def test_cells_above_board_are_exempt():
    board = Board()
    board.grid[0, :] = 1
    piece = Piece(TetrominoType.T, x=3, y=-5)
    assert not board.collides(piece)
    assert not board.collides(piece, 0, 1)
    assert not board.collides(piece, 0, 2)
    assert board.collides(piece, 0, 4)


def test_merge_writes_color_and_skips_cells_above():
    board = Board()
    piece = Piece(TetrominoType.J, x=0, y=-1)
    board.merge(piece)
    assert list(board.grid[0, :4]) == [int(TetrominoType.J)] * 3 + [0]
    assert int(np.count_nonzero(board.grid)) == 3


def test_merge_skips_cells_beside_the_board():
    board = Board()
    board.merge(Piece(TetrominoType.I, x=-2, y=0))
    board.merge(Piece(TetrominoType.I, x=8, y=5))
    color = int(TetrominoType.I)
    assert list(board.grid[1]) == [color, color] + [0] * 8
    assert list(board.grid[6]) == [0] * 8 + [color, color]
    assert int(np.count_nonzero(board.grid)) == 4


def test_clear_lines_on_partial_row_changes_nothing():
    board = Board()
    board.grid[19, :9] = 1
    before = board.snapshot()
    result = board.clear_lines()
    assert result.cleared == 0
    assert result.total == 0
    assert result.rows == ()
    assert np.array_equal(board.grid, before)


def test_clear_two_separate_rows():
    board = Board()
    board.grid[2, :] = 1
    board.grid[5, :] = 2
    board.grid[0, 9] = 5
    board.grid[3, 0] = 6
    board.grid[4, 1] = 7
    board.grid[10, 2] = 4
    board.lines_cleared = 3

    result = board.clear_lines()

    assert result.cleared == 2
    assert result.total == 5
    assert result.rows == (2, 5)
    assert board.lines_cleared == 5
    assert board.grid.shape == (20, 10)
    assert not board.grid[0].any()
    assert not board.grid[1].any()
    assert board.grid[2, 9] == 5
    assert board.grid[4, 0] == 6
    assert board.grid[5, 1] == 7
    assert board.grid[10, 2] == 4
    assert int(np.count_nonzero(board.grid)) == 4


def test_clear_four_stacked_rows():
    board = Board()
    board.grid[16:, :] = 1
    board.grid[15, 3] = 2
    result = board.clear_lines()
    assert result.cleared == 4
    assert result.rows == (16, 17, 18, 19)
    assert board.grid[19, 3] == 2
    assert int(np.count_nonzero(board.grid)) == 1


def test_is_game_over_only_looks_at_top_row():
    board = Board()
    assert not board.is_game_over()
    board.grid[1, :] = 1
    assert not board.is_game_over()
    board.grid[0, 5] = 1
    assert board.is_game_over()


def test_reset_clears_grid_and_counter():
    board = Board()
    board.grid[19, :] = 1
    board.clear_lines()
    board.grid[10, 3] = 2
    board.reset()
    assert not board.grid.any()
    assert board.lines_cleared == 0


def test_height_and_holes():
    board = Board()
    assert board.get_max_height() == 0
    board.grid[17, 0] = 1
    board.grid[19, 0] = 1
    assert board.get_max_height() == 3
    assert board.count_holes() == 1
