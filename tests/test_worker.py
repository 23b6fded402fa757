"""
Test script for the background solver worker and command line

Covers:
1. SolverWorker signals for a solved, stuck and failing run
2. Command line board loading and exit codes

Usage:
    python tests/test_worker.py
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main as cli
from tilematch.solver import BoardState, InvalidGridError, SolveStatus

try:
    from PyQt5.QtCore import QCoreApplication
    from tilematch.solver_worker import SolverWorker
    HAS_QT = True
except ImportError:
    HAS_QT = False

requires_qt = pytest.mark.skipif(not HAS_QT, reason="PyQt5 not installed")


def banner(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"TEST: {title}")
    print("=" * 60)


def run_worker(grid):
    """Run a worker synchronously and collect everything it emits."""
    app = QCoreApplication.instance() or QCoreApplication([])  # noqa: F841

    worker = SolverWorker(
        BoardState.from_2d_list(grid),
        strategy_name="first_move",
        move_highlight_ms=0,
        moved_highlight_ms=0,
        eliminate_highlight_ms=0,
    )
    emitted = {
        "highlight": [], "notification": [], "board": [], "status": [], "error": [], "progress": [],
    }
    worker.highlight_requested.connect(lambda p1, p2, ms: emitted["highlight"].append((p1, p2, ms)))
    worker.notification.connect(lambda severity, message: emitted["notification"].append((severity, message)))
    worker.board_changed.connect(emitted["board"].append)
    worker.status_changed.connect(emitted["status"].append)
    worker.error_occurred.connect(emitted["error"].append)
    worker.progress_updated.connect(lambda fraction, message: emitted["progress"].append((fraction, message)))

    # Run in the calling thread so signals are delivered directly
    worker.run()
    return worker, emitted


@requires_qt
def test_worker_solves():
    """A solved run emits highlights, the final board and a success notice."""
    banner("Worker Solves")

    worker, emitted = run_worker([[1, 0], [0, 1]])

    assert emitted["highlight"] == [
        ((1, 1), (1, 1), 0),
        ((0, 1), (0, 1), 0),
        ((0, 0), (0, 1), 0),
    ]
    assert emitted["progress"] == [(0.0, "1 moves, 0 tiles cleared")]
    assert emitted["notification"] == [("success", "All tiles eliminated")]
    assert emitted["board"][0].is_solved()
    assert emitted["status"] == ["Running", "Solved (0 tiles)"]
    assert emitted["error"] == []
    assert worker.manager.status is SolveStatus.SOLVED

    print("  [PASS] Worker solves tests")


@requires_qt
def test_worker_stuck():
    """A dead end is reported as an error notification, not an exception."""
    banner("Worker Stuck")

    _, emitted = run_worker([[1, 2], [2, 1]])

    assert emitted["notification"] == [("error", "Dead end: 4 tiles left")]
    assert emitted["status"][-1] == "Stuck (4 tiles)"
    assert emitted["error"] == []

    print("  [PASS] Worker stuck tests")


@requires_qt
def test_worker_error():
    """Exceptions inside the run are reported through error_occurred."""
    banner("Worker Error")

    app = QCoreApplication.instance() or QCoreApplication([])  # noqa: F841
    worker = SolverWorker(BoardState.from_2d_list([[1, 0, 1]]), move_highlight_ms=0,
                          eliminate_highlight_ms=0)
    worker.manager.reset()

    errors, statuses = [], []
    worker.error_occurred.connect(errors.append)
    worker.status_changed.connect(statuses.append)
    worker.run()

    assert errors == ["No board set"]
    assert statuses == ["Running", "Error"]

    print("  [PASS] Worker error tests")


def test_cli_load_board():
    """Boards load from JSON; unrecognized tiles are rejected."""
    banner("CLI Board Loading")

    assert cli.load_board(None, 14, 10).rows == 14

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "board.json"

        path.write_text(json.dumps([[3, 0, 3]]), encoding="utf-8")
        assert cli.load_board(str(path), 14, 10).to_list() == [[3, 0, 3]]

        path.write_text(json.dumps([[3, -1, 3]]), encoding="utf-8")
        with pytest.raises(InvalidGridError):
            cli.load_board(str(path), 14, 10)

    print("  [PASS] CLI board loading tests")


def test_cli_exit_codes(monkeypatch):
    """The command line exits 0 when solved or listing, 1 otherwise."""
    banner("CLI Exit Codes")

    with tempfile.TemporaryDirectory() as tmp:
        monkeypatch.chdir(tmp)
        solvable = Path(tmp) / "solvable.json"
        solvable.write_text(json.dumps([[1, 0], [0, 1]]), encoding="utf-8")
        dead = Path(tmp) / "dead.json"
        dead.write_text(json.dumps([[1, 2], [2, 1]]), encoding="utf-8")

        assert cli.main([str(solvable), "--strategy", "first_move"]) == 0
        assert cli.main([str(dead)]) == 1
        assert cli.main([str(dead), "--list"]) == 0
        assert cli.main([str(Path(tmp) / "missing.json")]) == 1

        # An unknown strategy in config.json is reported, not raised
        Path(tmp, "config.json").write_text(json.dumps({"strategy_name": "bogus"}), encoding="utf-8")
        assert cli.main([str(dead), "--list"]) == 1
        assert cli.main([str(solvable), "--strategy", "first_move"]) == 0

    print("  [PASS] CLI exit code tests")


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# WORKER AND CLI TESTS")
    print("#" * 60)

    tests = [("CLI Board Loading", test_cli_load_board)]
    if HAS_QT:
        tests += [
            ("Worker Solves", test_worker_solves),
            ("Worker Stuck", test_worker_stuck),
            ("Worker Error", test_worker_error),
        ]
    else:
        print("  PyQt5 not installed, skipping worker tests")

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
