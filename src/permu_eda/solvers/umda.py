"""
Univariate marginal distribution algorithm (UMDA) over permutations.

Each generation keeps the best individuals, encodes them in the configured
representation, learns their positional distribution, samples a new
population from it and decodes it back into permutations.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..core.dtypes import DEFAULT_DTYPE, check_length, element_dtype
from ..core.permutation import PermuPopulation, Permutation
from ..distribution.engine import Representation
from ..problems.instance import ProblemInstance
from ..representations.inversion import InversionPopulation
from ..representations.rim import RimPopulation

logger = logging.getLogger(__name__)

_ENCODED_POPULATIONS = {
    Representation.INVERSION: InversionPopulation,
    Representation.RIM: RimPopulation,
}


@dataclass(frozen=True)
class UMDAConfig:
    """
    Configuration of a UMDA run.

    Attributes:
        population_size: Individuals sampled per generation
        selection_size: Best individuals the distribution is learned from
        max_generations: Number of generations, the initial one included
        representation: Representation the distribution is learned in
        dtype: Element dtype of the populations
        seed: Random seed (None for a fresh one)
    """

    population_size: int = 100
    selection_size: int = 50
    max_generations: int = 100
    representation: Representation = Representation.PERMUTATION
    dtype: str = np.dtype(DEFAULT_DTYPE).name
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate the parameters."""
        if self.population_size < 1:
            raise ValueError("population_size must be at least 1")
        if not 1 <= self.selection_size <= self.population_size:
            raise ValueError("selection_size must be in [1, population_size]")
        if self.max_generations < 1:
            raise ValueError("max_generations must be at least 1")
        if not isinstance(self.representation, Representation):
            raise TypeError("representation must be a Representation")
        element_dtype(self.dtype)


@dataclass
class UMDAResult:
    """
    Outcome of a UMDA run.

    Attributes:
        best: Best permutation found
        best_fitness: Its fitness
        history: Best fitness of each generation
    """

    best: Permutation
    best_fitness: int
    history: List[int] = field(default_factory=list)

    @property
    def generations(self) -> int:
        """Number of generations run."""
        return len(self.history)


def _select(
    instance: ProblemInstance, population: PermuPopulation, fitness: np.ndarray, k: int
) -> PermuPopulation:
    """Truncation selection of the k best individuals."""
    order = np.argsort(-fitness if instance.maximize else fitness, kind="stable")
    return PermuPopulation(population.matrix[order[:k]], population.dtype)


def _next_generation(
    selected: PermuPopulation,
    config: UMDAConfig,
    rng: np.random.Generator,
) -> PermuPopulation:
    """Learn from the selected permutations and sample a new population."""
    if config.representation is Representation.PERMUTATION:
        distribution = selected.learn()
        offspring = PermuPopulation.zeros(config.population_size, selected.length, selected.dtype)
        return offspring.sample(distribution, rng)

    population_cls = _ENCODED_POPULATIONS[config.representation]
    distribution = population_cls.from_permus(selected).learn()
    encoded = population_cls.zeros(config.population_size, selected.length - 1, selected.dtype)
    encoded.sample(distribution, rng)
    return encoded.to_permus()


def run_umda(instance: ProblemInstance, config: Optional[UMDAConfig] = None) -> UMDAResult:
    """
    Optimize a problem instance with UMDA.

    Args:
        instance: Problem to solve; its `maximize` flag sets the direction
        config: Run configuration (defaults to UMDAConfig())

    Returns:
        UMDAResult with the best permutation and the fitness history
    """
    config = config if config is not None else UMDAConfig()
    rng = np.random.default_rng(config.seed)
    n = instance.size
    check_length(n, config.dtype)
    if n < 2 and config.representation is not Representation.PERMUTATION:
        raise ValueError("encoded representations need instances of size 2 or more")

    population = PermuPopulation.random(config.population_size, n, config.dtype, rng)
    fitness = instance.evaluate(population)

    best_i = int(np.argmax(fitness) if instance.maximize else np.argmin(fitness))
    best = population[best_i]
    best_fitness = int(fitness[best_i])
    history = [best_fitness]

    for gen in range(1, config.max_generations):
        selected = _select(instance, population, fitness, config.selection_size)
        population = _next_generation(selected, config, rng)
        fitness = instance.evaluate(population)

        gen_i = int(np.argmax(fitness) if instance.maximize else np.argmin(fitness))
        gen_best = int(fitness[gen_i])
        history.append(gen_best)
        if instance.is_better(gen_best, best_fitness):
            best_fitness = gen_best
            best = population[gen_i]

        logger.debug("generation %d: best %d, overall %d", gen, gen_best, best_fitness)

    logger.info(
        "UMDA (%s) on %r finished after %d generations, best fitness %d",
        config.representation.value,
        instance,
        config.max_generations,
        best_fitness,
    )
    return UMDAResult(best=best, best_fitness=best_fitness, history=history)
