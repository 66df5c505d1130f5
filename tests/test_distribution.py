"""Tests for learning and sampling positional distributions."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from permu_eda import (
    Distribution,
    IncorrectDistrType,
    InversionPopulation,
    LengthError,
    PermuPopulation,
    Representation,
    RimPopulation,
)
from permu_eda.distribution import engine


def test_learn_permutation_example():
    """Two permutations of length 4 give the expected count matrix."""
    pop = PermuPopulation.from_sequence([[0, 1, 2, 3], [1, 2, 0, 3]], np.uint8)
    distr = pop.learn()
    assert distr.representation is Representation.PERMUTATION
    assert not distr.soften
    assert distr.matrix.tolist() == [[1, 1, 0, 0], [0, 1, 1, 0], [1, 0, 1, 0], [0, 0, 0, 2]]


@pytest.mark.parametrize(
    "population_cls, rows, cols",
    [(PermuPopulation, 12, 12), (InversionPopulation, 11, 12), (RimPopulation, 11, 12)],
)
def test_learn_shape_and_row_sums(population_cls, rows, cols):
    """One row per position; each row sums to the population size."""
    permus = PermuPopulation.random(40, 12, np.uint8, np.random.default_rng(2))
    if population_cls is PermuPopulation:
        pop = permus
    else:
        pop = population_cls.from_permus(permus)
    distr = engine.learn(pop)
    assert distr.matrix.shape == (rows, cols)
    assert distr.matrix.sum(axis=1).tolist() == [40] * rows


def test_learn_empty_population():
    """An empty population has nothing to learn from."""
    with pytest.raises(LengthError):
        PermuPopulation.zeros(0, 4).learn()


def test_distribution_shape_checked():
    """The number of value columns must match the representation."""
    with pytest.raises(LengthError):
        Distribution(Representation.PERMUTATION, np.zeros((3, 4), dtype=int))
    with pytest.raises(LengthError):
        Distribution(Representation.INVERSION, np.zeros((3, 3), dtype=int))


def test_distribution_rejects_counts_outside_admissible_cells():
    """Counts in cells no vector can hold are rejected."""
    with pytest.raises(ValueError):
        Distribution(
            Representation.INVERSION, [[1, 0, 0, 0], [0, 0, 0, 1], [1, 0, 0, 0]]
        )
    with pytest.raises(ValueError):
        Distribution(Representation.RIM, [[0, 0, 1, 0], [1, 0, 0, 0], [1, 0, 0, 0]])


def test_distribution_rejects_non_integer_counts():
    """Fractional counts are not truncated silently."""
    with pytest.raises(TypeError):
        Distribution(Representation.PERMUTATION, [[0.5, 0.5], [0.5, 0.5]], soften=True)
    with pytest.raises(TypeError):
        Distribution(Representation.PERMUTATION, np.ones((2, 2)))


def test_smooth_permutation_adds_one_everywhere():
    """Permutation distributions get +1 in every cell."""
    distr = Distribution(Representation.PERMUTATION, [[2, 0], [0, 2]])
    assert distr.smooth()
    assert distr.soften
    assert distr.matrix.tolist() == [[3, 1], [1, 3]]


def test_smooth_inversion_upper_triangle():
    """Row i of an inversion distribution only admits 0..n-1-i."""
    distr = Distribution(
        Representation.INVERSION, [[1, 1, 1, 0], [2, 1, 0, 0], [3, 0, 0, 0]]
    )
    distr.smooth()
    assert distr.matrix.tolist() == [[2, 2, 2, 1], [3, 2, 1, 0], [4, 1, 0, 0]]


def test_smooth_rim_admissible_region():
    """Row i of a RIM distribution only admits insertion indices 0..i+1."""
    distr = Distribution(Representation.RIM, np.zeros((3, 4), dtype=int))
    distr.smooth()
    assert distr.matrix.tolist() == [[1, 1, 0, 0], [1, 1, 1, 0], [1, 1, 1, 1]]


def test_smooth_is_applied_once():
    """A second smooth() leaves the matrix untouched."""
    distr = Distribution(Representation.PERMUTATION, [[1, 0], [0, 1]])
    distr.smooth()
    before = distr.matrix.copy()
    assert not distr.smooth()
    assert np.array_equal(distr.matrix, before)


def test_sample_twice_does_not_resoften():
    """Sampling twice from one distribution only softens it the first time."""
    pop = PermuPopulation.random(10, 6, np.uint8, np.random.default_rng(4))
    distr = pop.learn()
    out = PermuPopulation.zeros(10, 6, np.uint8)
    rng = np.random.default_rng(5)

    out.sample(distr, rng)
    assert distr.soften
    after_first = distr.matrix.copy()
    out.sample(distr, rng)
    assert np.array_equal(distr.matrix, after_first)


def test_sampled_permutations_are_valid():
    """Values already placed are never drawn again for a permutation."""
    pop = PermuPopulation.random(30, 15, np.uint8, np.random.default_rng(6))
    distr = pop.learn()
    out = PermuPopulation.zeros(500, 15, np.uint8)
    engine.sample(distr, out, np.random.default_rng(7))
    assert out.is_valid()


def test_sampled_inversions_stay_admissible():
    """Sampled inversion values never exceed n-1-i at position i."""
    permus = PermuPopulation.random(30, 10, np.uint8, np.random.default_rng(8))
    distr = InversionPopulation.from_permus(permus).learn()
    out = InversionPopulation.zeros(500, 9, np.uint8)
    out.sample(distr, np.random.default_rng(9))
    limits = np.arange(9, 0, -1)
    assert (out.matrix <= limits).all()
    assert out.to_permus().is_valid()


def test_sampled_rims_stay_admissible():
    """Sampled RIM values never exceed i+1 at position i."""
    permus = PermuPopulation.random(30, 10, np.uint8, np.random.default_rng(10))
    distr = RimPopulation.from_permus(permus).learn()
    out = RimPopulation.zeros(500, 9, np.uint8)
    out.sample(distr, np.random.default_rng(11))
    limits = np.arange(1, 10)
    assert (out.matrix <= limits).all()
    assert out.to_permus().is_valid()


def test_sample_follows_the_distribution():
    """A population of identities mostly samples identities back."""
    pop = PermuPopulation.identity(1000, 5)
    out = PermuPopulation.zeros(200, 5)
    out.sample(pop.learn(), np.random.default_rng(12))
    matches = out.matrix == np.arange(5)
    assert matches.mean() > 0.9


def test_sample_is_reproducible_with_a_seed():
    """The same seed gives the same samples."""
    pop = PermuPopulation.random(20, 8, np.uint8, np.random.default_rng(13))
    first = PermuPopulation.zeros(20, 8, np.uint8).sample(pop.learn(), np.random.default_rng(1))
    second = PermuPopulation.zeros(20, 8, np.uint8).sample(pop.learn(), np.random.default_rng(1))
    assert first == second


def test_sample_length_error():
    """The output vectors must have one entry per distribution row."""
    distr = PermuPopulation.identity(3, 4).learn()
    with pytest.raises(LengthError):
        PermuPopulation.zeros(2, 5).sample(distr)


def test_sample_incorrect_distribution_type():
    """A distribution of another representation is rejected."""
    distr = InversionPopulation.zeros(3, 3).learn()
    with pytest.raises(IncorrectDistrType):
        PermuPopulation.zeros(2, 3).sample(distr)
    assert not distr.soften


def test_sample_after_resize():
    """resize() prepares a buffer of the distribution's shape."""
    distr = PermuPopulation.identity(3, 6).learn()
    out = PermuPopulation.zeros(1, 2)
    out.resize(4, 6)
    out.sample(distr, np.random.default_rng(14))
    assert out.size == 4
    assert out.is_valid()


def test_weighted_choice_skips_zero_weights():
    """Zero-weight entries are never selected."""
    rng = np.random.default_rng(15)
    weights = np.array([0, 5, 0, 3])
    drawn = {engine._weighted_choice(weights, rng) for _ in range(1000)}
    assert drawn == {1, 3}


def test_distribution_copy_is_independent():
    """Copies do not share the count matrix."""
    distr = PermuPopulation.identity(2, 3).learn()
    clone = distr.copy()
    clone.smooth()
    assert not distr.soften
    assert distr != clone


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
