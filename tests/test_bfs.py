"""Tests for the breadth-first search engine."""

from collections import deque

import pytest
from omegaconf import OmegaConf

from liquid_sort.core.board import Board
from liquid_sort.core.data_models import ColorKey, Move
from liquid_sort.search.bfs import (
    BFSSearcher, SearchConfig, SearchNode, create_bfs_searcher, solve
)
from liquid_sort.search.heuristics import excavation_score, is_solved
from liquid_sort.search.result_packager import (
    BUDGET_ERROR, BUDGET_WARNING, EXHAUSTED_ERROR, EXHAUSTED_WARNING, SearchOutcome
)

U = ColorKey.UNKNOWN
R = ColorKey.D_RED
B = ColorKey.D_BLUE
G = ColorKey.L_GREEN
Y = ColorKey.YELLOW


def make_board(*tubes, tube_count=14):
    rows = [list(t) for t in tubes]
    rows += [[U] * 4 for _ in range(tube_count - len(rows))]
    return Board.from_tubes(rows)


def final_board(board, steps):
    """Board reached by replaying ``steps`` from ``board``."""
    final = board
    for final in board.replay(steps):
        pass
    return final


def shortest_solution_length(board):
    """Plain BFS over every legal pour, with no pruning and no budget."""
    def legal_moves(b):
        for i in range(b.tube_count):
            top = b.top_index(i)
            if top is None:
                continue
            for j in range(b.tube_count):
                dest_top = b.top_index(j)
                room = b.slot_count if dest_top is None else dest_top
                if i == j or room == 0:
                    continue
                if dest_top is not None and b.top_color(j) != b.top_color(i):
                    continue
                yield Move(i, j, b.top_color(i), min(b.run_length(i), room))

    seen = {board.canonical_key()}
    queue = deque([(board, 0)])
    while queue:
        current, depth = queue.popleft()
        if is_solved(current):
            return depth
        for move in legal_moves(current):
            nxt = current.apply_move(move)
            key = nxt.canonical_key()
            if key not in seen:
                seen.add(key)
                queue.append((nxt, depth + 1))
    return None


class TestSearchNode:
    """Test SearchNode path reconstruction."""

    def test_root_has_empty_path(self):
        node = SearchNode(board=Board.empty(), score=0)
        assert node.get_path() == []
        assert node.depth == 0

    def test_path_reconstruction(self):
        m1 = Move(0, 1, R, 1)
        m2 = Move(1, 2, R, 1)
        root = SearchNode(board=Board.empty(), score=0)
        child = SearchNode(board=Board.empty(), score=0, parent=root, action=m1, depth=1)
        grandchild = SearchNode(board=Board.empty(), score=0, parent=child, action=m2, depth=2)
        assert grandchild.get_path() == [m1, m2]


class TestSearchConfig:
    """Test search configuration."""

    def test_defaults(self):
        config = SearchConfig()
        assert config.max_iterations == 15000
        assert config.prune_cosmetic_moves is True

    def test_from_config(self):
        cfg = OmegaConf.create({'search': {'max_iterations': 250, 'prune_cosmetic_moves': False}})
        config = SearchConfig.from_config(cfg)
        assert config.max_iterations == 250
        assert config.prune_cosmetic_moves is False

    def test_from_missing_config(self):
        assert SearchConfig.from_config(None) == SearchConfig()
        assert SearchConfig.from_config(OmegaConf.create({})) == SearchConfig()

    def test_factory(self):
        searcher = create_bfs_searcher(max_iterations=10, prune_cosmetic_moves=False)
        assert searcher.config.max_iterations == 10
        assert searcher.config.prune_cosmetic_moves is False


class TestScenarios:
    """End-to-end solve scenarios."""

    def test_masked_board_is_trivially_solved(self):
        result = solve(Board.empty())
        assert result.steps == []
        assert result.error is None
        assert result.warning is None
        assert result.solved

    def test_single_pure_tube_is_already_solved(self):
        result = solve(make_board([R, R, R, R]))
        assert result.steps == []
        assert result.error is None
        assert result.solved

    def test_two_tube_swap(self):
        board = make_board([R, R, B, B], [B, B, R, R])
        result = solve(board)

        assert result.solved
        assert result.error is None
        assert result.warning is None  # four of each color
        assert len(result.steps) == 3
        assert len(result.steps) == shortest_solution_length(board)

        final = final_board(board, result.steps)
        assert is_solved(final)
        tubes = {final.tube(i) for i in range(final.tube_count)}
        assert (R, R, R, R) in tubes
        assert (B, B, B, B) in tubes

    def test_parity_advisory_attached_without_solution(self):
        # Two revealed units of each color: the pair can be merged but the
        # board cannot be solved without revealing more content.
        board = make_board([U, U, R, B], [U, U, B, R])
        result = solve(board, SearchConfig(max_iterations=2000))

        assert not result.solved
        assert result.advisory is not None
        assert "D_RED x2" in result.advisory
        assert "D_BLUE x2" in result.advisory
        assert result.advisory in (result.warning or "")

    def test_single_revealed_unit_is_never_a_success(self):
        board = make_board([G, U, U, U])
        result = solve(board)

        assert not result.solved
        assert result.outcome == SearchOutcome.EXHAUSTED.value
        assert result.warning.startswith(EXHAUSTED_WARNING)
        assert "L_GREEN x1" in result.warning
        # First board to reach the new minimum wins
        assert result.steps == [Move(0, 1, G, 1)]

    def test_fallback_replay_lowers_score(self):
        board = make_board([G, U, U, U])
        result = solve(board)
        final = final_board(board, result.steps)
        assert excavation_score(final) < excavation_score(board)


class TestBFSMinimality:
    """The first solved board dequeued has a minimum-length path."""

    @pytest.mark.parametrize("tubes", [
        [[R, R, B, B], [B, B, R, R]],
        [[R, B, R, B], [B, R, B, R]],
        [[Y, R, R, Y], [R, Y, Y, R]],
        [[U, R, B, R], [R, B, R, B], [U, U, U, B]],
    ])
    def test_matches_exhaustive_bfs(self, tubes):
        board = make_board(*tubes, tube_count=5)
        expected = shortest_solution_length(board)
        result = solve(board, SearchConfig(max_iterations=100000))

        if expected is None:
            assert not result.solved
        else:
            assert result.solved
            assert len(result.steps) == expected
            assert is_solved(final_board(board, result.steps))


class TestBudgetAndExhaustion:
    """Test the non-success terminal states."""

    def test_budget_exceeded_without_progress(self):
        board = make_board([R, R, B, B], [B, B, R, R])
        result = create_bfs_searcher(max_iterations=5).solve(board)

        assert result.outcome == SearchOutcome.BUDGET_EXCEEDED.value
        assert result.steps == []
        assert result.error == BUDGET_ERROR

    def test_budget_exceeded_with_progress(self):
        board = make_board([R, R, U, U], [B, U, U, U])
        result = create_bfs_searcher(max_iterations=3).solve(board)

        assert result.outcome == SearchOutcome.BUDGET_EXCEEDED.value
        assert result.error is None
        assert result.warning.startswith(BUDGET_WARNING)
        assert result.steps == [Move(0, 2, R, 2)]

    def test_exhausted_without_progress(self):
        board = make_board([R, R, B, B], [B, B, R, R], tube_count=2)
        result = solve(board)

        assert result.outcome == SearchOutcome.EXHAUSTED.value
        assert result.steps == []
        assert result.error == EXHAUSTED_ERROR

    @pytest.mark.parametrize("budget", [1, 10, 50])
    def test_terminates_within_budget(self, budget):
        board = make_board([R, B, G, Y], [Y, G, B, R], [G, R, Y, B], [B, Y, R, G])
        report = create_bfs_searcher(max_iterations=budget).search(board)
        assert report.statistics['iterations'] <= budget + 1


class TestSearcherBehaviour:
    """Test purity and reuse of the searcher."""

    def test_input_board_is_not_modified(self):
        board = make_board([R, R, B, B], [B, B, R, R])
        snapshot = board.cells.copy()
        solve(board)
        assert (board.cells == snapshot).all()

    def test_searcher_is_reusable(self):
        searcher = BFSSearcher()
        board = make_board([R, R, B, B], [B, B, R, R])
        first = searcher.solve(board)
        second = searcher.solve(board)
        assert first.steps == second.steps
        assert first.stats['iterations'] == second.stats['iterations']

    def test_statistics_reported(self):
        result = solve(make_board([R, R, B, B], [B, B, R, R]))
        stats = result.stats
        assert stats['iterations'] >= 1
        assert stats['visited'] >= stats['iterations']
        assert stats['max_depth'] >= 3
        assert stats['generated'] == stats['visited'] - 1 + stats['duplicates']

    def test_statistics_keys(self):
        stats = solve(make_board([G, U, U, U])).stats
        assert {'iterations', 'visited', 'generated', 'duplicates', 'max_depth'} <= set(stats)
