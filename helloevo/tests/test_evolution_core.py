"""Unit tests for evolution core modules."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from helloevo.errors import InternalInvariantViolation, InvalidConfiguration
from helloevo.evolution.alphabet import CHARACTER_SET, random_letter, random_string
from helloevo.evolution.convergence import has_converged
from helloevo.evolution.distance import levenshtein
from helloevo.evolution.individual import Individual
from helloevo.evolution.operators import GeneticOperators
from helloevo.evolution.population import generate_seeds, rank_generation
from helloevo.evolution.random_source import RandomSource
from helloevo.evolution.selection import Selection


class ScriptedRandom:
    """Random source replaying fixed integer and float sequences."""

    def __init__(self, integers=(0,), floats=(0.0,)) -> None:
        self._integers = list(integers)
        self._floats = list(floats)
        self._i = 0
        self._f = 0

    def integers(self, low: int, high: int) -> int:
        value = self._integers[self._i % len(self._integers)]
        self._i += 1
        return low + value % (high - low)

    def random(self) -> float:
        value = self._floats[self._f % len(self._floats)]
        self._f += 1
        return value


@pytest.fixture
def rng() -> Generator:
    """Seeded random generator."""

    return np.random.default_rng(seed=42)


def _generation(goal: str, strings: list[str]) -> list[Individual]:
    return rank_generation(Individual.create(s, goal) for s in strings)


class TestDistance:
    """Tests for levenshtein."""

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ("", "", 0),
            ("abc", "", 3),
            ("", "abc", 3),
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("cat", "ccc", 2),
            ("hello world", "hello world", 0),
            ("abc", "cab", 2),
            ("intention", "execution", 5),
        ],
    )
    def test_known_values(self, first: str, second: str, expected: int) -> None:
        assert levenshtein(first, second) == expected

    def test_metric_properties(self, rng: Generator) -> None:
        strings = [random_string(6, rng) for _ in range(30)]
        for a in strings:
            assert levenshtein(a, a) == 0
            for b in strings:
                d = levenshtein(a, b)
                assert d >= 0
                assert d == levenshtein(b, a)
                assert (d == 0) == (a == b)

    def test_bounded_by_length(self, rng: Generator) -> None:
        for _ in range(50):
            a = random_string(int(rng.integers(0, 8)), rng)
            b = random_string(int(rng.integers(0, 8)), rng)
            d = levenshtein(a, b)
            assert abs(len(a) - len(b)) <= d <= max(len(a), len(b))


class TestAlphabet:
    """Tests for the character set helpers."""

    def test_character_set(self) -> None:
        assert len(CHARACTER_SET) == 27
        assert CHARACTER_SET[0] == "a"
        assert CHARACTER_SET[-1] == " "

    def test_random_letter_uses_index(self) -> None:
        assert random_letter(ScriptedRandom(integers=[2])) == "c"
        assert random_letter(ScriptedRandom(integers=[26])) == " "

    def test_random_string_length_and_chars(self, rng: Generator) -> None:
        text = random_string(40, rng)
        assert len(text) == 40
        assert set(text) <= set(CHARACTER_SET)

    def test_generator_satisfies_protocol(self, rng: Generator) -> None:
        assert isinstance(rng, RandomSource)
        assert isinstance(ScriptedRandom(), RandomSource)


class TestIndividual:
    """Tests for Individual."""

    def test_create_scores_against_goal(self) -> None:
        ind = Individual.create("hallo", "hello")
        assert ind.string == "hallo"
        assert ind.distance == 1

    def test_distance_zero_only_for_goal(self) -> None:
        assert Individual.create("goal", "goal").distance == 0
        assert Individual.create("goad", "goal").distance > 0

    def test_frozen(self) -> None:
        ind = Individual.create("abc", "abd")
        with pytest.raises(AttributeError):
            ind.distance = 0  # type: ignore[misc]

    def test_custom_distance_fn(self) -> None:
        ind = Individual.create("abc", "xyz", distance_fn=lambda a, b: 7)
        assert ind.distance == 7


class TestSeeds:
    """Tests for seed generation."""

    def test_size_length_and_order(self, rng: Generator) -> None:
        seeds = generate_seeds(50, "hello world", rng)
        assert len(seeds) == 50
        assert all(len(ind.string) == len("hello world") for ind in seeds)
        distances = [ind.distance for ind in seeds]
        assert distances == sorted(distances)

    def test_distances_cached_correctly(self, rng: Generator) -> None:
        for ind in generate_seeds(20, "genetic", rng):
            assert ind.distance == levenshtein("genetic", ind.string)

    def test_reproducible_with_same_source(self) -> None:
        first = generate_seeds(30, "reproducible", np.random.default_rng(7))
        second = generate_seeds(30, "reproducible", np.random.default_rng(7))
        assert first == second

    def test_scripted_source_all_first_letter(self) -> None:
        seeds = generate_seeds(
            4, "cat", ScriptedRandom(integers=[0]), character_set=("c", "a", "t")
        )
        assert [ind.string for ind in seeds] == ["ccc"] * 4
        assert [ind.distance for ind in seeds] == [2] * 4

    @pytest.mark.parametrize("seed_number, goal", [(0, "abc"), (-3, "abc"), (5, "")])
    def test_invalid(self, rng: Generator, seed_number: int, goal: str) -> None:
        with pytest.raises(InvalidConfiguration):
            generate_seeds(seed_number, goal, rng)

    def test_rank_is_stable(self) -> None:
        a = Individual("aaa", 1)
        b = Individual("bbb", 0)
        c = Individual("ccc", 1)
        ranked = rank_generation([a, b, c])
        assert ranked[0] is b
        assert ranked[1] is a
        assert ranked[2] is c


class TestCoupler:
    """Tests for Selection.couple."""

    def test_pairs_with_furthest(self) -> None:
        goal = "aaaa"
        survivors = _generation(goal, ["aaaa", "aaab", "bbbb"])
        couples = Selection.couple(survivors)
        assert len(couples) == 3
        assert [first for first, _ in couples] == survivors
        assert couples[0][1].string == "bbbb"
        assert couples[1][1].string == "bbbb"
        assert couples[2][1].string == "aaaa"

    def test_first_maximum_wins(self) -> None:
        survivors = [
            Individual("ab", 0),
            Individual("xb", 1),
            Individual("ay", 1),
        ]
        couples = Selection.couple(survivors)
        # Both candidates are one edit away from "ab"; the earlier one wins.
        assert couples[0][1] is survivors[1]

    def test_identical_survivors_pair_with_self(self) -> None:
        survivors = _generation("cat", ["ccc", "ccc"])
        for first, partner in Selection.couple(survivors):
            assert partner is first

    def test_single_survivor(self) -> None:
        only = Individual.create("abc", "abd")
        assert Selection.couple([only]) == [(only, only)]

    def test_uses_string_distance_not_goal_distance(self) -> None:
        # Same distance to the goal, different strings.
        survivors = _generation("zz", ["az", "za", "zb"])
        calls = []

        def counting(a: str, b: str) -> int:
            calls.append((a, b))
            return levenshtein(a, b)

        Selection.couple(survivors, counting)
        assert len(calls) == len(survivors) ** 2
        assert all(pair[0] in {"az", "za", "zb"} for pair in calls)

    def test_inputs_not_mutated(self) -> None:
        survivors = _generation("hello", ["hallo", "hxllo", "world"])
        snapshot = list(survivors)
        Selection.couple(survivors)
        assert survivors == snapshot

    def test_empty_raises(self) -> None:
        with pytest.raises(InternalInvariantViolation):
            Selection.couple([])

    def test_get_survivors(self) -> None:
        generation = _generation("abc", ["abc", "abd", "xyz", "xbc"])
        survivors = Selection.get_survivors(generation, 2)
        assert survivors == generation[:2]
        with pytest.raises(InternalInvariantViolation):
            Selection.get_survivors(generation, 0)
        with pytest.raises(InternalInvariantViolation):
            Selection.get_survivors(generation, 5)


class TestGeneticOperators:
    """Tests for GeneticOperators."""

    def test_crossover_character_sources(self, rng: Generator) -> None:
        parent1 = "aaaaaaaaaa"
        parent2 = "bbbbbbbbbb"
        for _ in range(50):
            child = GeneticOperators.crossover(parent1, parent2, 0.0, rng)
            assert len(child) == 10
            assert set(child) <= {"a", "b"}

    def test_crossover_distribution(self, rng: Generator) -> None:
        parent1 = "a" * 20
        parent2 = "b" * 20
        counts = np.zeros(20, dtype=int)
        trials = 1000
        for _ in range(trials):
            child = GeneticOperators.crossover(parent1, parent2, 0.0, rng)
            counts += np.array([ch == "a" for ch in child], dtype=int)

        ratios = counts / trials
        assert np.all(ratios > 0.4)
        assert np.all(ratios < 0.6)

    def test_mutation_rate_expected(self, rng: Generator) -> None:
        parent = "a" * 50
        charset = ("x", "y")
        changed = []
        for _ in range(200):
            child = GeneticOperators.crossover(parent, parent, 0.1, rng, charset)
            changed.append(sum(ch != "a" for ch in child))
        avg_rate = np.mean(changed) / len(parent)
        assert 0.08 <= avg_rate <= 0.12

    def test_mutation_rate_zero_and_one(self, rng: Generator) -> None:
        parent = "hello world"
        assert GeneticOperators.crossover(parent, parent, 0.0, rng) == parent
        mutated = GeneticOperators.crossover(parent, parent, 1.0, rng, ("q",))
        assert mutated == "q" * len(parent)

    def test_reproduce_count_and_fresh_distances(self, rng: Generator) -> None:
        goal = "genetic"
        survivors = generate_seeds(5, goal, rng)
        coupled = Selection.couple(survivors)
        offspring = GeneticOperators.reproduce(coupled, 13, goal, 0.05, rng)
        assert len(offspring) == 13
        for child in offspring:
            assert child.distance == levenshtein(goal, child.string)
            assert all(child is not parent for parent in survivors)

    def test_reproduce_cycles_through_couples(self) -> None:
        goal = "aaa"
        first = Individual.create("aaa", goal)
        second = Individual.create("bbb", goal)
        coupled = [(first, first), (second, second)]
        offspring = GeneticOperators.reproduce(
            coupled, 5, goal, 0.0, ScriptedRandom(integers=[0], floats=[0.5])
        )
        assert [child.string for child in offspring] == [
            "aaa",
            "bbb",
            "aaa",
            "bbb",
            "aaa",
        ]

    def test_offspring_never_alias_parents(self) -> None:
        goal = "cat"
        parent = Individual.create("ccc", goal)
        offspring = GeneticOperators.reproduce(
            [(parent, parent)], 3, goal, 0.0, ScriptedRandom()
        )
        for child in offspring:
            assert child == parent
            assert child is not parent

    def test_reproduce_zero(self, rng: Generator) -> None:
        assert GeneticOperators.reproduce([], 0, "abc", 0.1, rng) == []

    def test_reproduce_invalid(self, rng: Generator) -> None:
        with pytest.raises(InternalInvariantViolation):
            GeneticOperators.reproduce([], 2, "abc", 0.1, rng)
        parent = Individual.create("abc", "abc")
        with pytest.raises(InternalInvariantViolation):
            GeneticOperators.reproduce([(parent, parent)], -1, "abc", 0.1, rng)


class TestConvergence:
    """Tests for has_converged."""

    @staticmethod
    def _history(bests: list[int]) -> list[list[Individual]]:
        return [[Individual("x", best), Individual("y", best + 1)] for best in bests]

    def test_short_history_not_converged(self) -> None:
        assert not has_converged(self._history([3, 3]), 3)

    def test_plateau_converges(self) -> None:
        assert has_converged(self._history([5, 4, 2, 2, 2]), 3)

    def test_non_optimal_plateau_converges(self) -> None:
        history = self._history([2, 2])
        assert has_converged(history, 2)
        assert history[-1][0].distance == 2

    def test_recent_change_not_converged(self) -> None:
        assert not has_converged(self._history([2, 2, 2, 1]), 3)

    def test_limit_one_always_converged(self) -> None:
        assert has_converged(self._history([9]), 1)
        assert has_converged(self._history([9, 4]), 1)

    def test_only_trailing_window_matters(self) -> None:
        assert has_converged(self._history([1, 7, 7, 7]), 3)
