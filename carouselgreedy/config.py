"""
Configuration module for carouselgreedy.

This module provides the library-wide defaults used when a solver is
created without explicit parameters.

Configuration can be set via:
1. Environment variables (CAROUSELGREEDY_*)
2. Config file (./carouselgreedy.toml or ~/.carouselgreedy/config.toml)
3. Programmatic API

Example:
    >>> from carouselgreedy.config import config
    >>> print(config.alpha)
    10
    >>> config.beta = 0.1
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from carouselgreedy.solver.carousel_greedy import SolverConfig


_TRUE_STRINGS = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    return float(value) if value else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if not value:
        return default
    return value.strip().lower() in _TRUE_STRINGS


@dataclass
class CarouselGreedyConfig:
    """
    Library-wide defaults for Carousel Greedy solvers.

    Attributes:
        alpha: Default iterative-phase multiplier
        beta: Default fraction removed in the removal phase
        seed: Default RNG seed
        random_tie_break: Default tie-break policy
        verbose: Print progress information by default
    """

    alpha: int = field(default_factory=lambda: _env_int("CAROUSELGREEDY_ALPHA", 10))
    beta: float = field(default_factory=lambda: _env_float("CAROUSELGREEDY_BETA", 0.2))
    seed: int = field(default_factory=lambda: _env_int("CAROUSELGREEDY_SEED", 42))
    random_tie_break: bool = field(
        default_factory=lambda: _env_bool("CAROUSELGREEDY_RANDOM_TIE_BREAK", True)
    )
    verbose: bool = field(default_factory=lambda: _env_bool("CAROUSELGREEDY_VERBOSE", False))

    # =========================================================================
    # Solver helpers
    # =========================================================================

    def solver_config(self, **overrides: Any) -> 'SolverConfig':
        """
        Build a validated SolverConfig from these defaults.

        Args:
            **overrides: Fields to override (None values are ignored)

        Returns:
            Validated SolverConfig

        Raises:
            InvalidConfiguration: If a resulting value is out of range
        """
        from carouselgreedy.solver.carousel_greedy import SolverConfig

        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SolverConfig(**values).validate()

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "alpha": self.alpha,
            "beta": self.beta,
            "seed": self.seed,
            "random_tie_break": self.random_tie_break,
            "verbose": self.verbose,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'CarouselGreedyConfig':
        """Create config from dictionary; missing keys keep their defaults."""
        defaults = cls()
        return cls(
            alpha=int(d.get("alpha", defaults.alpha)),
            beta=float(d.get("beta", defaults.beta)),
            seed=int(d.get("seed", defaults.seed)),
            random_tie_break=_as_bool(d.get("random_tie_break", defaults.random_tie_break)),
            verbose=_as_bool(d.get("verbose", defaults.verbose)),
        )

    def save(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Path to save to (default: ./carouselgreedy.toml)
        """
        if path is None:
            path = Path("carouselgreedy.toml")

        # Simple TOML-like format (no dependency needed)
        lines = [
            "# carouselgreedy configuration",
            "",
            "[solver]",
            f"alpha = {self.alpha}",
            f"beta = {self.beta}",
            f"seed = {self.seed}",
            f"random_tie_break = {str(self.random_tie_break).lower()}",
            "",
            "[general]",
            f"verbose = {str(self.verbose).lower()}",
        ]

        Path(path).write_text("\n".join(lines) + "\n")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'CarouselGreedyConfig':
        """
        Load configuration from a TOML file.

        Args:
            path: Path to load from (default: ./carouselgreedy.toml or
                ~/.carouselgreedy/config.toml)

        Returns:
            Loaded configuration (or default if file not found)
        """
        if path is None:
            # Try local config first, then user config
            local_config = Path("carouselgreedy.toml")
            user_config = Path.home() / ".carouselgreedy" / "config.toml"

            if local_config.exists():
                path = local_config
            elif user_config.exists():
                path = user_config
            else:
                return cls()

        path = Path(path)
        if not path.exists():
            return cls()

        # Simple TOML-like parsing (sections are informational only)
        config_dict: dict[str, Any] = {}

        for line in path.read_text().splitlines():
            line = line.split("#", 1)[0].strip()
            if not line or (line.startswith("[") and line.endswith("]")):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                config_dict[key.strip()] = value.strip().strip('"')

        return cls.from_dict(config_dict)


def _as_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_STRINGS


# Global configuration instance
config = CarouselGreedyConfig()


def set_verbose(verbose: bool) -> None:
    """
    Turn progress output on or off for solvers created afterwards.

    Args:
        verbose: New default verbosity
    """
    config.verbose = verbose


def get_default_seed() -> int:
    """Get the current default RNG seed."""
    return config.seed
