"""Weight tables for the heuristic move evaluator.

Everything here is built once (``default_engine_config`` or
``load_engine_config``) and handed to the evaluator explicitly. The tables
are frozen: dataclasses are immutable, the mapping is a read-only proxy and
the positional array is flagged non-writeable.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
import yaml

from baduk.core.state import BOARD_SIZE


class ConfigError(ValueError):
    pass


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigError(f"Unknown difficulty {value!r}.") from None


@dataclass(frozen=True)
class DifficultyWeights:
    capture: float
    defense: float
    connection: float
    territory: float
    influence: float
    center: float
    randomness: float
    top_k: int = 1
    advanced: bool = False
    # only read when ``advanced`` is set
    pattern: float = 5.0
    shape: float = 4.0
    potential: float = 3.0
    global_position: float = 4.0


DEFAULT_DIFFICULTY_WEIGHTS: Mapping[Difficulty, DifficultyWeights] = MappingProxyType(
    {
        Difficulty.EASY: DifficultyWeights(
            capture=5, defense=3, connection=2, territory=1, influence=1, center=1,
            randomness=0.3, top_k=5,
        ),
        Difficulty.MEDIUM: DifficultyWeights(
            capture=8, defense=6, connection=4, territory=3, influence=2, center=2,
            randomness=0.15, top_k=3,
        ),
        Difficulty.HARD: DifficultyWeights(
            capture=10, defense=8, connection=6, territory=5, influence=4, center=3,
            randomness=0.05, top_k=1, advanced=True,
        ),
    }
)


@dataclass(frozen=True)
class PositionalTable:
    base: float = 1.0
    star_point: float = 5.0
    star_neighbour: float = 3.0
    centre: float = 6.0
    centre_neighbour: float = 4.0


def star_offset(size: int) -> int:
    return 3 if size >= 13 else 2


def positional_weights(size: int = BOARD_SIZE, table: PositionalTable = PositionalTable()) -> np.ndarray:
    """Static per-point weights favouring the corner star points and the centre."""
    weights = np.full((size, size), table.base, dtype=np.float64)
    offset = star_offset(size)
    lines = sorted({offset, size - 1 - offset})
    for row in lines:
        for col in lines:
            if not (0 <= row < size and 0 <= col < size):
                continue
            weights[row, col] = table.star_point
            for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                r, c = row + dr, col + dc
                if 0 <= r < size and 0 <= c < size:
                    weights[r, c] = table.star_neighbour

    centre = size // 2
    weights[centre, centre] = table.centre
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = centre + dr, centre + dc
        if 0 <= r < size and 0 <= c < size:
            weights[r, c] = table.centre_neighbour
    weights.flags.writeable = False
    return weights


@dataclass(frozen=True, eq=False)
class EngineConfig:
    board_size: int = BOARD_SIZE
    positional: np.ndarray = field(default_factory=positional_weights)
    difficulties: Mapping[Difficulty, DifficultyWeights] = field(
        default_factory=lambda: DEFAULT_DIFFICULTY_WEIGHTS
    )

    def __post_init__(self) -> None:
        if self.positional.shape != (self.board_size, self.board_size):
            raise ConfigError(
                f"Positional table shape {self.positional.shape} does not match board size {self.board_size}."
            )

    def weights_for(self, difficulty: Union[str, Difficulty]) -> DifficultyWeights:
        return self.difficulties[Difficulty.parse(difficulty)]


def default_engine_config(size: int = BOARD_SIZE) -> EngineConfig:
    return EngineConfig(board_size=size, positional=positional_weights(size))


def _override(base: Any, overrides: Optional[Dict[str, Any]], section: str) -> Any:
    if not overrides:
        return base
    known = {f.name for f in fields(base)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown keys in {section}: {sorted(unknown)}")
    return replace(base, **overrides)


def engine_config_from_dict(cfg: Dict[str, Any]) -> EngineConfig:
    unknown = set(cfg) - {"board_size", "positional", "difficulties"}
    if unknown:
        raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")
    size = int(cfg.get("board_size", BOARD_SIZE))
    if size < 1:
        raise ConfigError("board_size must be positive.")
    table = _override(PositionalTable(), cfg.get("positional"), "positional")

    difficulties = dict(DEFAULT_DIFFICULTY_WEIGHTS)
    for name, overrides in (cfg.get("difficulties") or {}).items():
        difficulty = Difficulty.parse(name)
        difficulties[difficulty] = _override(difficulties[difficulty], overrides, f"difficulties.{name}")
    for difficulty, weights in difficulties.items():
        if weights.top_k < 1:
            raise ConfigError(f"top_k for {difficulty.value} must be at least 1.")

    return EngineConfig(
        board_size=size,
        positional=positional_weights(size, table),
        difficulties=MappingProxyType(difficulties),
    )


def load_engine_config(path: Union[str, Path]) -> EngineConfig:
    cfg_path = Path(path)
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{cfg_path} must contain a mapping.")
    return engine_config_from_dict(cfg)
