import json
import os
import subprocess
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _play(keys: str, *args: str, timeout: float = 30) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    env.pop("TILE2048_SEED", None)
    return subprocess.run(
        [sys.executable, "-m", "tile2048", "--no-clear", *args],
        input=keys,
        capture_output=True,
        text=True,
        cwd=str(PROJECT_ROOT),
        env=env,
        timeout=timeout,
    )


@pytest.fixture(scope="session")
def seeded_run():
    return _play("x\nwasd\nq\n", "--seed", "2048")


def test_quit_exits_cleanly(seeded_run):
    assert seeded_run.returncode == 0, seeded_run.stderr
    assert "Invalid input: must be either w, a, s, d, or q" in seeded_run.stdout
    assert seeded_run.stdout.rstrip().endswith("Game Quit")


def test_seed_makes_runs_repeatable(seeded_run):
    again = _play("x\nwasd\nq\n", "--seed", "2048")
    assert again.stdout == seeded_run.stdout


def test_json_mode_reports_every_turn():
    result = _play("dddd q", "--seed", "7", "--json")
    assert result.returncode == 0, result.stderr

    payloads = [json.loads(line) for line in result.stdout.splitlines()]
    assert payloads, result.stdout
    assert "outcome" not in payloads[0]
    assert payloads[-1]["outcome"] == "QUIT"
    # quitting never touches the board
    assert payloads[-1]["grid"] == payloads[-2]["grid"]

    first = payloads[0]["grid"]
    assert sum(1 for row in first for cell in row if cell) == 2
    for payload in payloads:
        assert payload["best_score"] == max(max(row) for row in payload["grid"])


def test_random_play_reaches_game_over():
    # Hammering all four directions eventually fills the board.
    result = _play("wasd" * 5000, "--seed", "1", "--json", timeout=120)
    assert result.returncode == 0, result.stderr

    last = json.loads(result.stdout.splitlines()[-1])
    assert last["outcome"] == "GAME_OVER"
    assert all(cell != 0 for row in last["grid"] for cell in row), "Board not full at game over"
    assert result.stderr.rstrip().endswith("Game Over")


def test_log_level_goes_to_stderr():
    result = _play("q\n", "--seed", "3", "--log-level", "debug")
    assert result.returncode == 0
    assert "session started" in result.stderr
    assert "session started" not in result.stdout
