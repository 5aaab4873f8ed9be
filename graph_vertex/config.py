r"""
Program configuration and defaults.

Per-program defaults:
    - reachability: 1000 iterations, scheduler on
    - knn: 1000 iterations, 100 sampling runs, k=10

Environment overrides use the GRAPH_VERTEX_ prefix and may be placed
in a .env file in the working directory.

    from graph_vertex.config import get_defaults, get_env_int

    defaults = get_defaults("knn")
    workers = get_env_int("WORKERS", default=1)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

__all__ = [
    "PROGRAM_DEFAULTS",
    "ProgramDefaults",
    "get_defaults",
    "get_env",
    "get_env_int",
    "ENV_PREFIX",
]

# Look for .env in current dir, then next to the package
_env_file = Path(".env")
if not _env_file.exists():
    _env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

ENV_PREFIX = "GRAPH_VERTEX_"


@dataclass(frozen=True, slots=True)
class ProgramDefaults:
    """Default run parameters for a program.

    Attributes:
        name: Program name.
        niters: Iteration budget.
        use_scheduler: Whether selective scheduling is enabled.
        max_runs: Cap on sampling runs (sampling programs only).
        k: Number of nearest vertices to report (sampling programs only).
    """

    name: str
    niters: int
    use_scheduler: bool = True
    max_runs: int = 0
    k: int = 0


PROGRAM_DEFAULTS: dict[str, ProgramDefaults] = {
    "reachability": ProgramDefaults(name="reachability", niters=1000),
    "knn": ProgramDefaults(name="knn", niters=1000, max_runs=100, k=10),
}


def get_defaults(name: str) -> ProgramDefaults:
    """Get default run parameters for a program.

    Args:
        name: Program name (reachability, knn).

    Returns:
        ProgramDefaults for the requested program.

    Raises:
        ValueError: If program name is not recognized.
    """
    if name not in PROGRAM_DEFAULTS:
        valid = ", ".join(PROGRAM_DEFAULTS.keys())
        msg = f"Unknown program '{name}'. Valid programs: {valid}"
        raise ValueError(msg)
    return PROGRAM_DEFAULTS[name]


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with GRAPH_VERTEX_ prefix.

    Args:
        key: Variable name without prefix (e.g., "WORKERS").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def get_env_int(key: str, *, default: int | None = None) -> int | None:
    """Get integer environment variable with GRAPH_VERTEX_ prefix.

    Raises:
        ValueError: If the variable is set but not an integer.
    """
    value = get_env(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        msg = f"{ENV_PREFIX}{key} must be an integer, got '{value}'"
        raise ValueError(msg) from None
