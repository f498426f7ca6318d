from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

# One wall sample per three cells
DEFAULT_WALL_DENSITY = Fraction(1, 3)

Density = Union[Fraction, float]


class ConfigurationError(ValueError):
    """Raised when a maze cannot be built from the given parameters."""


@dataclass
class MazeConfig:
    size: int
    wall_density: Density = DEFAULT_WALL_DENSITY
    checkpoint_count: Optional[int] = None  # None -> size // 2
    seed: Optional[int] = None

    def __post_init__(self):
        # Keep densities exact so saved seeds regenerate the same wall count
        if not isinstance(self.wall_density, Fraction):
            try:
                self.wall_density = Fraction(str(self.wall_density))
            except ValueError:
                raise ConfigurationError(f"Invalid wall density: {self.wall_density!r}")

    def validate(self) -> "MazeConfig":
        if self.size <= 0:
            raise ConfigurationError(f"Maze size must be positive, got {self.size}")
        if not (0 <= self.wall_density < 1):
            raise ConfigurationError(
                f"Wall density must be in [0, 1), got {self.wall_density}"
            )
        if self.checkpoint_count is not None and self.checkpoint_count < 0:
            raise ConfigurationError(
                f"Checkpoint count cannot be negative, got {self.checkpoint_count}"
            )
        return self

    @property
    def wall_samples(self) -> int:
        # int() floors for non-negative values; Fraction keeps N*N/3 exact
        return int(self.size * self.size * self.wall_density)

    @property
    def checkpoint_samples(self) -> int:
        if self.checkpoint_count is None:
            return self.size // 2
        return self.checkpoint_count

    def as_meta(self) -> dict:
        """Plain-JSON form stored alongside saved mazes."""
        return {
            "size": self.size,
            "wall_density": str(self.wall_density),
            "checkpoint_count": self.checkpoint_count,
            "seed": self.seed,
        }

    @classmethod
    def from_meta(cls, meta: dict) -> "MazeConfig":
        density = meta.get("wall_density")
        return cls(
            size=meta["size"],
            wall_density=DEFAULT_WALL_DENSITY if density is None else density,
            checkpoint_count=meta.get("checkpoint_count"),
            seed=meta.get("seed"),
        ).validate()
