'''Objects to assign weights to ranks for the weighted random tally.

A rank scorer returns a list of numerical scores to be assigned to rank
positions given by voters, from the best position downwards. The weighted
random tally sums these scores over all ballots to obtain the weight of each
candidate in the draw.

All scorers here satisfy the conditions the tally relies on: the scores are
non-negative and strictly decreasing as the position worsens, and they are
exact (integers or fractions) so the draws stay reproducible. Candidates not
ranked on a ballot get no score from it.

Scorers hold no state beyond their parameters, so one instance can be
shared by any number of concurrent tallies.
'''

import abc
from fractions import Fraction
from typing import Callable, Dict, List, Union
from numbers import Number

from voter.persist import simple_serialization


class RankScorer(metaclass=abc.ABCMeta):
    '''An abstract base class for rank scorers.

    Rank scorers must provide a `scores()` method that returns a list of
    scores for the given number of positions. The total number of candidates
    still in contention is passed along, since some scorers (such as Borda)
    depend on it.

    Rank scorers must also provide a `to_dict()` method describing their
    setup, which goes into the tally result; the
    :func:`voter.persist.simple_serialization` decorator adds one.
    '''
    @abc.abstractmethod
    def scores(self, n_positions: int, n_candidates: int) -> List[Number]:
        raise NotImplementedError

    def __repr__(self) -> str:
        params = ', '.join(f'{key}={val!r}' for key, val in vars(self).items())
        return f'{type(self).__name__}({params})'


@simple_serialization
class Borda(RankScorer):
    '''Borda rank scorer, corresponding to the original Borda count variant.

    Assigns the `base` score to the last possible position, and one point
    more for each better position, so the first position gets the number of
    candidates plus ``base - 1``.

    :param base: The score for the last possible position. Must be at least
        1 so that every ranked candidate gets a positive weight.
    '''

    def __init__(self, base: int = 1):
        if base < 1:
            raise ValueError(f'Borda base must be at least 1, got {base}')
        self.base = base

    def scores(self, n_positions: int, n_candidates: int) -> List[int]:
        '''Return the scores for the first n_positions positions.

        This gives (number of candidates + base - 1 - position) for positions
        running from 0 (best) to n_positions.

        :param n_positions: Number of scores to be returned.
        :param n_candidates: Number of candidates that could be ranked.
        :raises ValueError: If more positions are requested than there are
            candidates.
        '''
        if n_positions > n_candidates:
            raise ValueError(f'cannot rank {n_positions} out of maximum'
                             f' {n_candidates} candidates')
        top_score = n_candidates + self.base - 1
        return [top_score - position for position in range(n_positions)]


@simple_serialization
class Dowdall(RankScorer):
    '''Dowdall (Nauru) rank scorer.

    Assigns the numbers of the harmonic series (1, 1/2, 1/3...) to
    progressively worse positions.
    '''

    def scores(self, n_positions: int, n_candidates: int) -> List[Fraction]:
        '''Return `1 / (position + 1)` for the first n_positions positions.'''
        return [Fraction(1, position + 1) for position in range(n_positions)]


@simple_serialization
class Geometric(RankScorer):
    '''A geometric progression rank scorer.

    Assigns the numbers of a chosen inverse geometric progression
    (e.g. 1, 1/2, 1/4... for 2) to progressively worse positions.

    :param base: Base of the geometric progression.
    '''
    # http://www.geometric-voting.org.uk/index.htm

    def __init__(self, base: int = 2):
        if base < 2:
            raise ValueError(f'geometric base must be at least 2, got {base}')
        self.base = base

    def scores(self, n_positions: int, n_candidates: int) -> List[Fraction]:
        '''Return `1 / (base ** position)` for the first n_positions positions.'''
        return [
            Fraction(1, self.base ** position)
            for position in range(n_positions)
        ]


RANK_SCORERS: Dict[str, Callable[[], RankScorer]] = {
    'borda': Borda,
    'dowdall': Dowdall,
    'geometric': Geometric,
}


def construct(scorer: Union[str, RankScorer]) -> RankScorer:
    '''Return a rank scorer given by its name or the scorer itself.

    :raises ValueError: If the name is not known.
    '''
    if isinstance(scorer, RankScorer):
        return scorer
    try:
        return RANK_SCORERS[scorer.lower()]()
    except KeyError as e:
        raise ValueError(
            f'unknown rank scorer {scorer!r}, available: '
            + ', '.join(RANK_SCORERS.keys())
        ) from e
