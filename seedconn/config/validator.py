"""Checks for seed connectivity run settings."""

from pathlib import Path
from typing import Any, List, Sequence

from seedconn.utils.exceptions import ConfigurationError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Collect problems with run settings and report them together.

    Each ``check_*`` method records a message for every problem it finds
    and returns whether the value passed, so one run reports every bad
    setting instead of stopping at the first.

    Attributes:
        errors: Messages collected so far
    """

    def __init__(self):
        self.errors: List[str] = []

    def check_mode(self, mode: Any, modes: Sequence[str]) -> bool:
        if mode not in modes:
            self.errors.append(f"mode must be one of {list(modes)}, got {mode!r}")
            return False
        return True

    def check_seeds(self, seeds: Any) -> bool:
        """Seeds are label substrings; empty strings would match every label."""
        if not isinstance(seeds, (list, tuple)):
            self.errors.append(f"seeds must be a list of labels, got {type(seeds).__name__}")
            return False

        bad = [s for s in seeds if not isinstance(s, str) or not s]
        if bad:
            self.errors.append(f"seeds must be non-empty strings, got {bad!r}")
            return False
        return True

    def check_indices(self, indices: Any) -> bool:
        if not isinstance(indices, (list, tuple)):
            self.errors.append(f"indices must be a list of integers, got {type(indices).__name__}")
            return False

        bad = [i for i in indices if not _is_int(i) or i < 0]
        if bad:
            self.errors.append(f"indices must be 0-based non-negative integers, got {bad!r}")
            return False
        return True

    def check_flag(self, value: Any, name: str) -> bool:
        if not isinstance(value, bool):
            self.errors.append(f"{name} must be true or false, got {value!r}")
            return False
        return True

    def check_workers(self, n_jobs: Any, chunk_size: Any) -> bool:
        """n_jobs follows joblib (negative counts back from all cores, 0 is invalid)."""
        ok = True
        if not _is_int(n_jobs) or n_jobs == 0:
            self.errors.append(f"n_jobs must be a non-zero integer, got {n_jobs!r}")
            ok = False
        if chunk_size is not None and (not _is_int(chunk_size) or chunk_size <= 0):
            self.errors.append(f"chunk_size must be a positive integer, got {chunk_size!r}")
            ok = False
        return ok

    def check_input_file(self, path: Any, name: str) -> bool:
        if path is None:
            return True
        if not Path(path).is_file():
            self.errors.append(f"{name} file not found: {path}")
            return False
        return True

    def raise_if_errors(self) -> None:
        """Raise one ConfigurationError listing every collected problem."""
        if self.errors:
            raise ConfigurationError(
                "Invalid seed connectivity settings:\n"
                + "\n".join(f"  - {error}" for error in self.errors)
            )
