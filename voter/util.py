'''Various utility functions for other modules of Voter.

There should normally be no need to use these functions directly.
'''

import bisect
import itertools
import math
import operator
import random
from fractions import Fraction
from typing import Any, Dict, List, Tuple
from numbers import Number


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value.

    The sort is stable, so items with equal values keep their input order.
    '''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))


def group_by_value(votes: Dict[Any, Number]) -> List[List[Any]]:
    '''Group keys with equal values, in descending order of the values.

    Keys within a group keep their input order.
    '''
    return [
        [key for key, _ in group]
        for _, group in itertools.groupby(
            sorted_votes(votes), key=operator.itemgetter(1)
        )
    ]


def to_integer_weights(weights: List[Number]) -> List[int]:
    '''Scale exact weights to integers, keeping their proportions.

    :param weights: Integers or fractions.
    :raises TypeError: If any weight is inexact (e.g. a float), since such
        weights cannot be drawn from reproducibly.
    '''
    fractions = []
    for weight in weights:
        if not isinstance(weight, (int, Fraction)):
            raise TypeError(f'inexact weight {weight!r}, use int or Fraction')
        fractions.append(Fraction(weight))
    denominator = math.lcm(*(frac.denominator for frac in fractions))
    return [int(frac * denominator) for frac in fractions]


def select_weighted_random(candidates: List[Any],
                           weights: List[int],
                           rng: random.Random,
                           ) -> Any:
    '''Draw one candidate with probability proportional to its weight.

    A number is drawn uniformly from one to the total weight and the first
    candidate whose cumulative weight reaches it is selected.

    :param candidates: Candidates to select from.
    :param weights: Non-negative integer weights of the candidates, with
        a positive total.
    :param rng: The random generator to draw from.
    :raises ValueError: If the generator produced a number outside the range
        it was asked for.
    '''
    cum_weights = list(itertools.accumulate(weights))
    total = cum_weights[-1]
    roll = rng.randrange(1, total + 1)
    if not 1 <= roll <= total:
        raise ValueError(f'random draw {roll!r} outside range 1 to {total}')
    return candidates[bisect.bisect_left(cum_weights, roll)]
