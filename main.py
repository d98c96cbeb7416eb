"""Command-line Entry Point - Root Module.

Runs the map renderer from the repository root.
It imports from the src package.
"""

from src.main import main, run

__all__ = [
    "main",
    "run",
]


if __name__ == "__main__":
    main()
