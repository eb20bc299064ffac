"""Tests for Encounter, Stats and Dataset models."""

from __future__ import annotations

import itertools

import pytest
from pydantic import ValidationError

from cgbench_report.models import Dataset, Encounter, Stats


class TestEncounter:
    def test_from_win_rate(self) -> None:
        e = Encounter.from_win_rate(100, 55.0)
        assert e.total_played_games == 100
        assert e.total_won_games == 55.0

    def test_rounds_to_half_game(self) -> None:
        assert Encounter.from_win_rate(3, 50.0).total_won_games == 1.5
        assert Encounter.from_win_rate(7, 33.3).total_won_games == 2.5

    def test_rounds_half_up(self) -> None:
        # 25% of one game is exactly a quarter, which rounds up to a half
        assert Encounter.from_win_rate(1, 25.0).total_won_games == 0.5

    def test_add_accumulates(self) -> None:
        e = Encounter.from_win_rate(100, 55.0)
        e.add(Encounter.from_win_rate(100, 55.0))
        assert e.total_played_games == 200
        assert e.total_won_games == 110.0
        assert e.win_rate == pytest.approx(55.0)

    def test_win_rate_without_games(self) -> None:
        assert Encounter().win_rate is None

    def test_won_never_exceeds_played(self) -> None:
        for played in range(0, 60):
            for rate in (0.0, 12.5, 33.3, 50.0, 99.9, 100.0):
                e = Encounter.from_win_rate(played, rate)
                assert e.total_won_games <= e.total_played_games

    def test_negative_played_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Encounter(total_played_games=-1, total_won_games=0.0)


class TestStats:
    def test_first_add_inserts(self) -> None:
        stats = Stats()
        stats.add("BotA", "Enemy_1", Encounter.from_win_rate(50, 60.0))
        enc = stats.get("BotA", "Enemy_1")
        assert enc is not None
        assert enc.total_played_games == 50
        assert enc.total_won_games == 30.0
        assert ("BotA", "Enemy_1") in stats
        assert len(stats) == 1

    def test_repeated_pair_merges(self) -> None:
        stats = Stats()
        stats.add("BotA", "Enemy_1", Encounter.from_win_rate(50, 60.0))
        stats.add("BotA", "Enemy_1", Encounter.from_win_rate(50, 40.0))
        enc = stats.get("BotA", "Enemy_1")
        assert enc.total_played_games == 100
        assert enc.total_won_games == 50.0
        assert enc.win_rate == pytest.approx(50.0)
        assert len(stats) == 1

    def test_added_encounter_not_mutated_by_merge(self) -> None:
        stats = Stats()
        first = Encounter.from_win_rate(10, 50.0)
        stats.add("BotA", "Enemy_1", first)
        stats.add("BotA", "Enemy_1", Encounter.from_win_rate(10, 50.0))
        assert first.total_played_games == 10

    def test_merge_is_order_independent(self) -> None:
        encounters = [
            ("BotA", "Enemy_1", Encounter.from_win_rate(50, 60.0)),
            ("BotA", "Enemy_1", Encounter.from_win_rate(30, 33.3)),
            ("BotA", "Other_2", Encounter.from_win_rate(20, 75.0)),
            ("BotB", "Enemy_1", Encounter.from_win_rate(40, 12.5)),
        ]
        results = set()
        for perm in itertools.permutations(encounters):
            stats = Stats()
            for code, enemy, enc in perm:
                stats.add(code, enemy, enc)
            results.add(tuple(sorted(
                (key, e.total_played_games, e.total_won_games)
                for key, e in stats.items()
            )))
        assert len(results) == 1

    def test_codes_keep_discovery_order(self) -> None:
        stats = Stats()
        stats.add("Zeta", "E_1", Encounter.from_win_rate(1, 100.0))
        stats.add("Alpha", "E_1", Encounter.from_win_rate(1, 100.0))
        stats.add("Zeta", "E_2", Encounter.from_win_rate(1, 100.0))
        assert stats.codes == ["Zeta", "Alpha"]

    def test_enemies_sorted_unique(self) -> None:
        stats = Stats()
        for code in ("A", "B"):
            for enemy in ("b_1", "a_2", "c[x]_3"):
                stats.add(code, enemy, Encounter.from_win_rate(1, 0.0))
        assert stats.enemies() == ["a_2", "b_1", "c[x]_3"]

    def test_max_played_games(self) -> None:
        stats = Stats()
        assert stats.max_played_games() == 0
        stats.add("A", "E_1", Encounter.from_win_rate(10, 0.0))
        stats.add("B", "E_1", Encounter.from_win_rate(70, 0.0))
        assert stats.max_played_games() == 70

    def test_encounters_for(self) -> None:
        stats = Stats()
        stats.add("A", "E_1", Encounter.from_win_rate(10, 0.0))
        stats.add("B", "E_2", Encounter.from_win_rate(10, 0.0))
        assert set(stats.encounters_for("A")) == {"E_1"}
        assert stats.encounters_for("missing") == {}


class TestDataset:
    def test_serializes_camel_case(self) -> None:
        ds = Dataset(label="BotA", border_color="#000000", background_color="#000000")
        dumped = ds.model_dump(by_alias=True)
        assert set(dumped) == {
            "label", "data", "borderColor", "backgroundColor",
            "pointRadius", "pointHoverRadius", "fill", "pointBackgroundColor",
        }
        assert dumped["fill"] is False
        assert dumped["pointBackgroundColor"] == "rgba(0, 0, 0, 0.1)"
