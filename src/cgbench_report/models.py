"""Pydantic v2 models for benchmark statistics.

An Encounter is the games-played/games-won record of one (code, enemy)
pair. Stats is the aggregate root of a report run: a flat mapping keyed
by ``(code, enemy)`` plus the order in which codes were discovered.
Dataset is the chart-ready view of one code, serialized with the
camelCase keys the charting library expects.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Encounter(BaseModel):
    """Accumulated results of one code against one enemy."""

    total_played_games: int = Field(default=0, ge=0)
    total_won_games: float = Field(default=0.0, ge=0.0)
    """Half-unit precision; derived from a reported win-rate percentage."""

    @classmethod
    def from_win_rate(cls, played_games: int, win_rate: float) -> Encounter:
        """Build an encounter from a played-games count and a percentage.

        The won-games count is rounded (half up) to the nearest half game
        so merged results never carry fractional-game artifacts.

        ``from_win_rate(100, 55.0)`` → ``Encounter(100, 55.0)``
        """
        won = math.floor(2 * (win_rate / 100.0) * played_games + 0.5) / 2.0
        return cls(total_played_games=played_games, total_won_games=won)

    def add(self, other: Encounter) -> None:
        """Accumulate another encounter's totals into this one."""
        self.total_played_games += other.total_played_games
        self.total_won_games += other.total_won_games

    @property
    def win_rate(self) -> float | None:
        """Win rate in percent, or None when no games were played."""
        if self.total_played_games <= 0:
            return None
        return 100.0 * self.total_won_games / self.total_played_games


class Dataset(BaseModel):
    """One chart series: a code's win rates along the global enemy axis."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    label: str
    data: list[float | None] = Field(default_factory=list)
    border_color: str
    background_color: str
    point_radius: list[int] = Field(default_factory=list)
    point_hover_radius: list[int] = Field(default_factory=list)
    fill: bool = False
    point_background_color: str = "rgba(0, 0, 0, 0.1)"


class CodeSummary(BaseModel):
    """Totals for one code across every enemy it met."""

    code: str
    played_games: int
    won_games: float
    win_rate: float | None = None


class Stats:
    """Aggregate root: encounters keyed by ``(code, enemy)``.

    Adding an encounter for a pair that already exists merges it into the
    stored one, so the totals do not depend on the order files are read.
    """

    def __init__(self) -> None:
        self._encounters: dict[tuple[str, str], Encounter] = {}
        self._codes: list[str] = []

    def add(self, code: str, enemy: str, encounter: Encounter) -> None:
        key = (code, enemy)
        existing = self._encounters.get(key)
        if existing is None:
            if code not in self._codes:
                self._codes.append(code)
            self._encounters[key] = encounter.model_copy()
        else:
            existing.add(encounter)

    def get(self, code: str, enemy: str) -> Encounter | None:
        return self._encounters.get((code, enemy))

    @property
    def codes(self) -> list[str]:
        """Codes in the order they were first seen."""
        return list(self._codes)

    def enemies(self) -> list[str]:
        """Every enemy seen by any code, sorted and without duplicates."""
        return sorted({enemy for _, enemy in self._encounters})

    def encounters_for(self, code: str) -> dict[str, Encounter]:
        return {
            enemy: enc
            for (c, enemy), enc in self._encounters.items()
            if c == code
        }

    def max_played_games(self) -> int:
        return max(
            (enc.total_played_games for enc in self._encounters.values()),
            default=0,
        )

    def items(self) -> Iterator[tuple[tuple[str, str], Encounter]]:
        return iter(self._encounters.items())

    def __len__(self) -> int:
        return len(self._encounters)

    def __contains__(self, key: object) -> bool:
        return key in self._encounters
