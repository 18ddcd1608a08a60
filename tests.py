"""
Run the test suite, then a short seeded smoke match at both table sizes.

Usage (from project root):

    python tests.py                 # install .[dev] if needed, pytest, smoke match
    python tests.py -k bidding      # extra arguments go straight to pytest
    python tests.py --no-smoke -x
"""
from __future__ import annotations

import importlib.util
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
REQUIRED_MODULES = ("pytest", "numpy", "twentyeight")


def missing_modules() -> list[str]:
    return [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]


def install_dev_extra() -> None:
    print(f"Missing {', '.join(missing_modules())}; installing .[dev] ...")
    subprocess.check_call([sys.executable, "-m", "pip", "install", "-e", ".[dev]"], cwd=str(ROOT))


def run_smoke_matches() -> None:
    for players in (4, 6):
        subprocess.check_call(
            [
                sys.executable, "-m", "twentyeight.play_random",
                "--players", str(players),
                "--rounds", "3",
                "--policy", "mixed",
                "--log-level", "WARNING",
            ],
            cwd=str(ROOT),
        )


def main(argv: list[str]) -> int:
    smoke = "--no-smoke" not in argv
    pytest_args = [a for a in argv if a != "--no-smoke"]

    if missing_modules():
        install_dev_extra()

    result = subprocess.call([sys.executable, "-m", "pytest", *pytest_args], cwd=str(ROOT))
    if result != 0:
        return result
    if smoke:
        run_smoke_matches()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
