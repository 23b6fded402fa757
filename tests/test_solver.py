"""
Test script for solver validation

Covers:
1. Solver strategies on small boards
2. Retry and deep retry search order
3. Cancellation and visualization hooks
4. BoardManager stability
5. Settings persistence

Usage:
    python tests/test_solver.py
"""

import json
import random
import sys
import tempfile
import time
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tilematch.board_manager import BoardManager
from tilematch.settings import DEFAULT_SETTINGS, load_settings, save_settings
from tilematch.solver import (
    BoardState,
    DeepRetryStrategy,
    RetryStrategy,
    Severity,
    Solution,
    SolutionContext,
    SolutionMetrics,
    SolveStatus,
    StepKind,
    Trip,
    create_strategy,
    find_all_effective_moves,
    find_all_eliminate_blocks,
    get_default_strategy_name,
    get_strategy_info,
)
from tilematch.solver.strategies.deep_retry import next_prefix
from tilematch.solver.strategies.retry import next_candidate


# Two pairs, each already eliminable across a hole column
PAIRS_BOARD = [
    [1, 0, 1],
    [2, 0, 2],
]

# Needs one slide before anything can be eliminated
ONE_MOVE_BOARD = [
    [1, 0],
    [0, 1],
]

# Nothing can move and nothing matches
DEAD_BOARD = [
    [1, 2],
    [2, 1],
]


def banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"TEST: {title}")
    print("=" * 60)


def strategy_names():
    return [info["name"] for info in get_strategy_info()]


def make_context(grid, **kwargs) -> SolutionContext:
    return SolutionContext(board=BoardState.from_2d_list(grid), **kwargs)


def test_strategy_registry():
    """All strategies are registered and retry is the default."""
    banner("Strategy Registry")

    names = strategy_names()
    print(f"  Strategies: {names}")
    assert {"first_move", "retry", "deep_retry"} <= set(names)
    assert get_default_strategy_name() == "retry"

    with pytest.raises(ValueError):
        create_strategy("does_not_exist")

    print("  [PASS] Strategy registry tests")


def test_solve_without_moves():
    """Pairs that are already eliminable are cleared in row-major order."""
    banner("Solve Without Moves")

    for name in strategy_names():
        solution = create_strategy(name).solve(make_context(PAIRS_BOARD))
        print(f"  {name}: {solution.status.name}, {len(solution.steps)} steps")

        assert solution.status is SolveStatus.SOLVED
        assert solution.final_board.is_solved()
        assert [s.kind for s in solution.steps] == [StepKind.ELIMINATE, StepKind.ELIMINATE]
        assert solution.eliminates[0].value == 1
        assert solution.trips == []
        assert solution.attempts == 1
        assert solution.total_cleared == 4
        assert solution.metrics.strategy_name == name

    print("  [PASS] Solve without moves tests")


def test_solve_with_one_move():
    """A single slide followed by an elimination clears the board."""
    banner("Solve With One Move")

    board = BoardState.from_2d_list(ONE_MOVE_BOARD)
    assert find_all_eliminate_blocks(board) == []
    assert len(find_all_effective_moves(board)) == 4

    solution = create_strategy("first_move").solve(SolutionContext(board=board))

    assert solution.status is SolveStatus.SOLVED
    assert [s.kind for s in solution.steps] == [StepKind.MOVE, StepKind.ELIMINATE]
    assert solution.trips == [Trip(index=0, count=4, choose=0)]
    assert solution.move_count == 1
    assert solution.get_board_after_step(0).to_list() == [[1, 1], [0, 0]]
    assert solution.initial_board == board

    print("  [PASS] Solve with one move tests")


def test_dead_board():
    """A board with no eliminations and no effective moves is stuck."""
    banner("Dead Board")

    for name in strategy_names():
        solution = create_strategy(name).solve(make_context(DEAD_BOARD))
        assert solution.status is SolveStatus.STUCK
        assert not solution.has_steps
        assert solution.attempts == 1
        assert solution.metrics.retries == 0

    print("  [PASS] Dead board tests")


def random_grid(rng: random.Random):
    """Small board with values 1-3 and about a third of the cells empty."""
    rows, cols = rng.randint(2, 5), rng.randint(2, 5)
    return [
        [0 if rng.random() < 0.35 else rng.randint(1, 3) for _ in range(cols)]
        for _ in range(rows)
    ]


def stuck_boards(seed: int, count: int):
    """Seeded random boards on which the first-move pass gets stuck, with that pass."""
    rng = random.Random(seed)
    for _ in range(count):
        board = BoardState.from_2d_list(random_grid(rng))
        first = create_strategy("first_move").solve(SolutionContext(board=board))
        if first.status is SolveStatus.STUCK:
            yield board, first


def test_forward_pass_terminates():
    """Every move is followed by an elimination, so passes always end."""
    banner("Forward Pass Termination")

    rng = random.Random(99)
    for _ in range(25):
        board = BoardState.from_2d_list(random_grid(rng))

        start = time.time()
        solution = create_strategy("first_move").solve(SolutionContext(board=board))

        assert solution.status in (SolveStatus.SOLVED, SolveStatus.STUCK)
        assert len(solution.eliminates) >= solution.move_count
        assert find_all_eliminate_blocks(solution.final_board) == []
        assert find_all_effective_moves(solution.final_board) == []
        assert (solution.status is SolveStatus.SOLVED) == solution.final_board.is_solved()
        assert time.time() - start < 5.0

    print("  [PASS] Forward pass termination tests")


def test_next_candidate():
    """Retry candidates walk alternatives backwards from the last decision."""
    banner("Retry Candidates")

    trips = [Trip(0, 2, 0), Trip(1, 3, 0), Trip(2, 1, 0)]

    assert next_candidate(trips, 2, 0) == (1, 1)
    assert next_candidate(trips, 1, 1) == (1, 2)
    assert next_candidate(trips, 1, 2) == (0, 1)
    assert next_candidate(trips, 0, 1) is None
    assert next_candidate([], -1, 0) is None

    print("  [PASS] Retry candidate tests")


def test_next_prefix():
    """Deep retry keeps earlier decisions and bumps the deepest open one."""
    banner("Deep Retry Prefix")

    assert next_prefix([Trip(0, 2, 0), Trip(1, 2, 0)]) == {0: 0, 1: 1}
    assert next_prefix([Trip(0, 2, 0), Trip(1, 2, 1)]) == {0: 1}
    assert next_prefix([Trip(0, 2, 1), Trip(1, 1, 0)]) is None
    assert next_prefix([]) is None

    print("  [PASS] Deep retry prefix tests")


class ScriptedPasses:
    """
    Stand-in for _forward_pass that answers from a decision tree.

    Every pass makes `depth` decisions with `width` choices each and ends
    SOLVED only when the decisions taken equal `winning`. Stuck passes
    leave fewer tiles the larger their first decision.
    """

    def __init__(self, depth: int, width: int, winning=None):
        self.depth = depth
        self.width = width
        self.winning = winning
        self.calls = []

    def __call__(self, board, context, choices=None):
        choices = dict(choices or {})
        self.calls.append(choices)

        taken = [choices.get(i, 0) for i in range(self.depth)]
        trips = [Trip(index=i, count=self.width, choose=c) for i, c in enumerate(taken)]

        if taken == self.winning:
            status, final = SolveStatus.SOLVED, BoardState.empty(1, 4)
        else:
            status = SolveStatus.STUCK
            tiles = max(1, 4 - taken[0])
            final = BoardState.from_2d_list([[1] * tiles + [0] * (4 - tiles)])

        return Solution(
            board_states=[board, final],
            trips=trips,
            status=status,
            attempts=1,
            metrics=SolutionMetrics(states_explored=self.depth + 1),
        )


def test_retry_order():
    """Retry changes one decision per replay, latest decision first."""
    banner("Retry Order")

    strategy = RetryStrategy()
    strategy._forward_pass = ScriptedPasses(depth=2, width=2, winning=None)

    solution = strategy.solve(make_context([[1, 1, 1, 1]], retry_budget=20))
    print(f"  Replays: {strategy._forward_pass.calls}")

    assert strategy._forward_pass.calls == [{}, {1: 1}, {0: 1}]
    assert solution.status is SolveStatus.STUCK
    assert solution.attempts == 3
    assert solution.metrics.retries == 2
    assert solution.metrics.states_explored == 9
    # The replay with the larger first decision left the fewest tiles
    assert solution.trips[0].choose == 1

    print("  [PASS] Retry order tests")


def test_retry_budget():
    """Retry stops after its budget and stops early once solved."""
    banner("Retry Budget")

    strategy = RetryStrategy(retry_budget=1)
    strategy._forward_pass = ScriptedPasses(depth=2, width=3)
    solution = strategy.solve(make_context([[1, 1, 1, 1]]))
    assert strategy._forward_pass.calls == [{}, {1: 1}]
    assert solution.attempts == 2

    strategy = RetryStrategy()
    strategy._forward_pass = ScriptedPasses(depth=2, width=3, winning=[0, 2])
    solution = strategy.solve(make_context([[1, 1, 1, 1]]))
    assert strategy._forward_pass.calls == [{}, {1: 1}, {1: 2}]
    assert solution.status is SolveStatus.SOLVED
    assert solution.attempts == 3

    # Single-decision replays never combine alternatives
    strategy = RetryStrategy()
    strategy._forward_pass = ScriptedPasses(depth=2, width=2, winning=[1, 1])
    solution = strategy.solve(make_context([[1, 1, 1, 1]]))
    assert solution.status is SolveStatus.STUCK

    print("  [PASS] Retry budget tests")


def test_deep_retry_order():
    """Deep retry explores combined decisions depth first."""
    banner("Deep Retry Order")

    strategy = DeepRetryStrategy()
    strategy._forward_pass = ScriptedPasses(depth=2, width=2, winning=[1, 1])

    solution = strategy.solve(make_context([[1, 1, 1, 1]]))
    print(f"  Replays: {strategy._forward_pass.calls}")

    assert strategy._forward_pass.calls == [{}, {0: 0, 1: 1}, {0: 1}, {0: 1, 1: 1}]
    assert solution.status is SolveStatus.SOLVED
    assert solution.attempts == 4
    assert solution.metrics.retries == 3

    strategy = DeepRetryStrategy(retry_budget=2)
    strategy._forward_pass = ScriptedPasses(depth=2, width=2, winning=[1, 1])
    solution = strategy.solve(make_context([[1, 1, 1, 1]]))
    assert solution.status is SolveStatus.STUCK
    assert len(strategy._forward_pass.calls) == 3

    print("  [PASS] Deep retry order tests")


def test_choice_overrides():
    """A replay takes the requested move at one decision and the first move elsewhere before it."""
    banner("Choice Overrides")

    strategy = create_strategy("first_move")
    replays = 0

    for board, first in stuck_boards(seed=7, count=200):
        for trip in first.trips:
            for choose in range(1, trip.count):
                replay = strategy._forward_pass(board, SolutionContext(board=board),
                                                {trip.index: choose})
                replays += 1

                assert replay.trips[:trip.index] == first.trips[:trip.index]
                assert replay.trips[trip.index] == Trip(trip.index, trip.count, choose)
                assert replay.status in (SolveStatus.SOLVED, SolveStatus.STUCK)

        if first.trips:
            # Out of range requests fall back to the first move
            trip = first.trips[0]
            replay = strategy._forward_pass(board, SolutionContext(board=board),
                                            {0: trip.count})
            assert replay.trips == first.trips
            assert replay.final_board == first.final_board

    print(f"  Replays checked: {replays}")
    assert replays > 0

    print("  [PASS] Choice override tests")


def test_retry_rescues_stuck_boards():
    """Retry solves some boards that first-move play leaves stuck, never doing worse."""
    banner("Retry Rescue")

    rescued = 0
    for board, first in stuck_boards(seed=7, count=400):
        retried = create_strategy("retry").solve(SolutionContext(board=board))

        assert retried.status in (SolveStatus.SOLVED, SolveStatus.STUCK)
        assert retried.final_board.count_cells() <= first.final_board.count_cells()
        assert retried.attempts == 1 + retried.metrics.retries

        if retried.status is SolveStatus.SOLVED:
            rescued += 1
            assert retried.attempts > 1
            assert retried.final_board.is_solved()

            # The winning replay changed exactly one decision of the first pass
            changed = [trip for trip in retried.trips if trip.choose != 0]
            assert len(changed) == 1
            index = changed[0].index
            assert retried.trips[:index] == first.trips[:index]
            assert changed[0].count == first.trips[index].count

    print(f"  Boards rescued: {rescued}")
    assert rescued > 0

    print("  [PASS] Retry rescue tests")


def test_cancel_before_start():
    """A run that is already cancelled stops without touching the board."""
    banner("Cancel Before Start")

    for name in strategy_names():
        context = make_context(PAIRS_BOARD)
        context.cancel()
        solution = create_strategy(name).solve(context)

        assert solution.status is SolveStatus.STOPPED
        assert solution.was_cancelled
        assert not solution.has_steps
        assert solution.final_board == context.board

    print("  [PASS] Cancel before start tests")


def test_cancel_from_hook():
    """A cancel during a step lets that step finish, then stops."""
    banner("Cancel From Hook")

    context = make_context(PAIRS_BOARD)
    context.highlight_callback = lambda p1, p2, ms: context.cancel()

    solution = create_strategy("retry").solve(context)

    assert solution.status is SolveStatus.STOPPED
    assert len(solution.steps) == 1
    assert solution.final_board.to_list() == [[0, 0, 0], [2, 0, 2]]

    print("  [PASS] Cancel from hook tests")


def test_highlight_hook():
    """The hook sees each committed step with its configured duration."""
    banner("Highlight Hook")

    calls = []
    context = make_context(
        ONE_MOVE_BOARD,
        highlight_callback=lambda p1, p2, ms: calls.append((p1, p2, ms)),
        move_highlight_ms=500,
        moved_highlight_ms=200,
        eliminate_highlight_ms=150,
    )
    create_strategy("first_move").solve(context)

    print(f"  Calls: {calls}")
    assert calls == [
        ((1, 1), (1, 1), 500),
        ((0, 1), (0, 1), 200),
        ((0, 0), (0, 1), 150),
    ]

    print("  [PASS] Highlight hook tests")


def test_board_manager_auto_solve():
    """Manager keeps a backup, updates its board and notifies the outcome."""
    banner("BoardManager Auto-solve")

    notices = []
    manager = BoardManager(
        board=BoardState.from_2d_list(ONE_MOVE_BOARD),
        notify_callback=lambda severity, message: notices.append((severity, message)),
    )
    assert manager.status is None
    assert manager.get_state_string() == "Idle (2 tiles)"

    solution = manager.auto_solve()

    assert solution.status is SolveStatus.SOLVED
    assert manager.status is SolveStatus.SOLVED
    assert manager.is_solved
    assert manager.backup.to_list() == ONE_MOVE_BOARD
    assert notices == [(Severity.SUCCESS, "All tiles eliminated")]
    assert manager.get_state_string() == "Solved (0 tiles)"

    assert manager.restore_backup()
    assert manager.board.to_list() == ONE_MOVE_BOARD
    assert manager.status is None

    manager.set_board(DEAD_BOARD)
    manager.auto_solve()
    assert manager.status is SolveStatus.STUCK
    assert notices[-1] == (Severity.ERROR, "Dead end: 4 tiles left")

    print("  [PASS] BoardManager auto-solve tests")


def test_board_manager_stop():
    """Stopping from the hook ends the run with a warning."""
    banner("BoardManager Stop")

    notices = []
    manager = BoardManager(
        board=BoardState.from_2d_list(PAIRS_BOARD),
        notify_callback=lambda severity, message: notices.append((severity, message)),
    )
    manager.highlight_callback = lambda p1, p2, ms: manager.stop()

    solution = manager.auto_solve()

    assert solution.status is SolveStatus.STOPPED
    assert manager.status is SolveStatus.STOPPED
    assert manager.board.count_cells() == 2
    assert notices == [(Severity.WARNING, "Stopped by user")]

    # The next run clears the previous stop request
    manager.highlight_callback = None
    assert manager.auto_solve().status is SolveStatus.SOLVED

    print("  [PASS] BoardManager stop tests")


def test_board_manager_interactive():
    """Player-chosen moves and eliminations update the current board."""
    banner("BoardManager Interactive")

    manager = BoardManager()
    with pytest.raises(RuntimeError):
        manager.eliminates

    manager.set_board(ONE_MOVE_BOARD)
    assert manager.eliminates == []

    move = manager.moves[0]
    manager.execute_move(move)
    assert manager.board.to_list() == [[1, 1], [0, 0]]

    block = manager.eliminates[0]
    assert manager.execute_eliminate(block)
    assert manager.is_solved
    assert not manager.execute_eliminate(block)

    manager.set_board(PAIRS_BOARD)
    assert manager.execute_eliminate_all() == 2
    assert manager.is_solved

    manager.reset()
    assert manager.board is None
    assert manager.get_state_string() == "Idle"

    print("  [PASS] BoardManager interactive tests")


def test_board_manager_hooks():
    """Manager hooks get each highlight duration and progress after every move."""
    banner("BoardManager Hooks")

    calls, progress = [], []
    manager = BoardManager(
        board=BoardState.from_2d_list(ONE_MOVE_BOARD),
        strategy_name="first_move",
        highlight_callback=lambda p1, p2, ms: calls.append((p1, p2, ms)),
        progress_callback=lambda fraction, message: progress.append((fraction, message)),
        move_highlight_ms=500,
        moved_highlight_ms=300,
        eliminate_highlight_ms=100,
    )

    manager.auto_solve()
    print(f"  Calls: {calls}")
    print(f"  Progress: {progress}")
    assert calls == [
        ((1, 1), (1, 1), 500),
        ((0, 1), (0, 1), 300),
        ((0, 0), (0, 1), 100),
    ]
    assert progress == [(0.0, "1 moves, 0 tiles cleared")]

    # Player-chosen steps use the same durations
    manager.set_board(ONE_MOVE_BOARD)
    calls.clear()
    manager.execute_move(manager.moves[0])
    assert calls == [((1, 1), (1, 1), 500), ((0, 1), (0, 1), 300)]

    # A pair from an older board is rejected before anything is highlighted
    block = manager.eliminates[0]
    manager.set_board(DEAD_BOARD)
    calls.clear()
    assert not manager.execute_eliminate(block)
    assert calls == []
    assert manager.board.to_list() == DEAD_BOARD

    print("  [PASS] BoardManager hook tests")


def test_settings_round_trip():
    """Settings survive a save/load and fall back to defaults when broken."""
    banner("Settings")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"

        assert load_settings(path) == DEFAULT_SETTINGS

        save_settings({"strategy_name": "deep_retry", "retry_budget": 5}, path)
        settings = load_settings(path)
        assert settings["strategy_name"] == "deep_retry"
        assert settings["retry_budget"] == 5
        assert settings["rows"] == 14 and settings["cols"] == 10

        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    print("  [PASS] Settings tests")


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# SOLVER VALIDATION TESTS")
    print("#" * 60)

    tests = [
        ("Strategy Registry", test_strategy_registry),
        ("Solve Without Moves", test_solve_without_moves),
        ("Solve With One Move", test_solve_with_one_move),
        ("Dead Board", test_dead_board),
        ("Forward Pass Termination", test_forward_pass_terminates),
        ("Retry Candidates", test_next_candidate),
        ("Deep Retry Prefix", test_next_prefix),
        ("Retry Order", test_retry_order),
        ("Retry Budget", test_retry_budget),
        ("Deep Retry Order", test_deep_retry_order),
        ("Choice Overrides", test_choice_overrides),
        ("Retry Rescue", test_retry_rescues_stuck_boards),
        ("Cancel Before Start", test_cancel_before_start),
        ("Cancel From Hook", test_cancel_from_hook),
        ("Highlight Hook", test_highlight_hook),
        ("BoardManager Auto-solve", test_board_manager_auto_solve),
        ("BoardManager Stop", test_board_manager_stop),
        ("BoardManager Interactive", test_board_manager_interactive),
        ("BoardManager Hooks", test_board_manager_hooks),
        ("Settings", test_settings_round_trip),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, passed in results:
        print(f"  {name}: [{'PASS' if passed else 'FAIL'}]")

    return 0 if all(passed for _, passed in results) else 1


if __name__ == "__main__":
    sys.exit(main())
