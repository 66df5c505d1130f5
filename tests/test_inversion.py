"""Tests for the inversion vector representation."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from permu_eda import (
    Distribution,
    ElementRangeError,
    InvalidVector,
    Inversion,
    InversionPopulation,
    LengthError,
    Permutation,
    PermuPopulation,
    Representation,
)
from permu_eda.representations import inversion


def test_encode_example():
    """[0,3,2,1] has inversion vector [0,2,1]."""
    permu = Permutation.from_sequence([0, 3, 2, 1], np.uint8)
    assert inversion.encode(permu).tolist() == [0, 2, 1]


def test_decode_example():
    """[0,2,1] decodes back to [0,3,2,1]."""
    permu = Inversion([0, 2, 1], np.uint8).to_permu()
    assert permu.tolist() == [0, 3, 2, 1]
    assert permu.dtype == np.uint8


def test_encode_into_buffer():
    """encode() fills a given buffer in place."""
    permu = Permutation.from_sequence([3, 1, 0, 2])
    out = Inversion.zeros(3)
    result = Inversion.from_permu(permu, out)
    assert result is out
    assert out.tolist() == [3, 1, 0]


def test_identity_is_all_zeros():
    """The identity encodes to zeros and the reverse to the maximum values."""
    assert inversion.encode(Permutation.identity(6)).tolist() == [0] * 5
    reverse = Permutation.from_sequence([5, 4, 3, 2, 1, 0])
    assert inversion.encode(reverse).tolist() == [5, 4, 3, 2, 1]


@pytest.mark.parametrize("n", range(2, 51))
def test_round_trip(n):
    """decode(encode(p)) == p."""
    rng = np.random.default_rng(n)
    for _ in range(10):
        permu = Permutation.random(n, np.uint8, rng)
        assert inversion.decode(inversion.encode(permu)) == permu


def test_encode_decode_of_valid_vectors():
    """encode(decode(v)) == v for vectors with v[i] <= n-1-i."""
    rng = np.random.default_rng(7)
    n = 12
    for _ in range(100):
        values = [int(rng.integers(0, n - i)) for i in range(n - 1)]
        vector = Inversion(values)
        assert inversion.encode(inversion.decode(vector)).tolist() == values


def test_length_errors():
    """Buffers of the wrong length are rejected."""
    permu = Permutation.from_sequence([0, 3, 2, 1])
    with pytest.raises(LengthError):
        inversion.encode(permu, Inversion.zeros(4))
    with pytest.raises(LengthError):
        inversion.decode(Inversion([0, 2, 1]), Permutation.identity(3))
    with pytest.raises(LengthError):
        inversion.encode(Permutation.identity(0))


def test_decode_invalid_vector():
    """A value larger than its position admits does not decode."""
    with pytest.raises(ElementRangeError):
        inversion.decode(Inversion([0, 3, 0]))


def test_population_zeros_are_identities():
    """An all-zero inversion population decodes to identity permutations."""
    size, length = 20, 10
    permus = InversionPopulation.zeros(size, length - 1, np.uint8).to_permus()
    assert permus == PermuPopulation.identity(size, length, np.uint8)


def test_population_from_permus_fills_buffer():
    """from_permus() overwrites a given population in place."""
    size, length = 5, 4
    out = InversionPopulation.from_sequence([[1, 0, 0]] * size)
    permus = PermuPopulation.identity(size, length)
    InversionPopulation.from_permus(permus, out)
    assert out == InversionPopulation.zeros(size, length - 1)


def test_population_round_trip():
    """Population level encode and decode keep positions."""
    permus = PermuPopulation.random(30, 15, np.uint16, np.random.default_rng(3))
    encoded = InversionPopulation.from_permus(permus)
    assert encoded.length == 14
    assert encoded.to_permus() == permus


def test_population_shape_errors():
    """Output populations of the wrong shape are rejected."""
    permus = PermuPopulation.identity(5, 4)
    with pytest.raises(LengthError):
        InversionPopulation.from_permus(permus, InversionPopulation.zeros(4, 3))
    with pytest.raises(LengthError):
        InversionPopulation.from_permus(permus, InversionPopulation.zeros(5, 4))
    with pytest.raises(LengthError):
        InversionPopulation.zeros(5, 3).to_permus(PermuPopulation.zeros(5, 3))


def test_population_from_sequence_ragged():
    """Vectors of different lengths are rejected."""
    with pytest.raises(LengthError):
        InversionPopulation.from_sequence([[0, 2, 0, 0], [1, 0, 0], [0, 0, 0, 0]])


def test_learn():
    """Each cell counts a value at a position; columns are n = length+1."""
    pop = InversionPopulation.from_sequence([[2, 1, 0], [1, 0, 0], [0, 0, 0]], np.uint8)
    expected = Distribution(
        Representation.INVERSION, [[1, 1, 1, 0], [2, 1, 0, 0], [3, 0, 0, 0]]
    )
    assert pop.learn() == expected


def test_population_from_sequence_rejects_out_of_range_values():
    """Position i of an inversion vector holds at most n-1-i."""
    with pytest.raises(InvalidVector):
        InversionPopulation.from_sequence([[0, 3, 0]], np.uint8)
    with pytest.raises(InvalidVector):
        InversionPopulation.from_sequence([[3, 2, 1], [0, 0, 2]], np.uint8)
    pop = InversionPopulation.from_sequence([[3, 2, 1], [0, 0, 0]], np.uint8)
    assert pop.size == 2


def test_learn_rejects_unchecked_out_of_range_values():
    """Learning from an unchecked population still validates its vectors."""
    pop = InversionPopulation(np.array([[0, 3, 0]], dtype=np.uint8))
    with pytest.raises(InvalidVector):
        pop.learn()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
