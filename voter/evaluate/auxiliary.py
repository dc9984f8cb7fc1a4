'''Tallies drawing the ranking by lot.

The outcome of these tallies depends on a random generator. Each call
creates its own generator from the seed it is given (or uses a generator
passed in explicitly), so results are reproducible: the same seed with the
same ballots always gives the same ranking. Without a seed, a fresh one is
obtained from the operating system for every call and the ranking varies
from run to run; the seed used is recorded in the result so that such a run
can still be replayed.

The module-level generator of the :mod:`random` module is never touched.
'''

import logging
import random
from typing import Optional, Union

import voter.convert
import voter.util
import voter.vote
from voter.component.rankscore import RankScorer
from voter.evaluate.core import PrngExhausted, Result, Tally, Tier
from voter.persist import simple_serialization
from voter.vote import BallotSet


logger = logging.getLogger(__name__)

SEED_BITS = 64


@simple_serialization
class WeightedRandomTally(Tally):
    '''Weighted random (lottery) tally.

    Draws the candidates one by one without replacement, with probability
    proportional to their weights, and places each drawn candidate in the
    next tier on its own.

    The weight of a candidate is the sum of the scores of its positions over
    all ballots, as given by the rank scorer. With the default Borda scorer,
    a candidate at a position with *k* candidates ranked ahead of it gets
    ``n - k`` points from that ballot, where *n* is the number of candidates
    still undrawn; a candidate that is not ranked gets nothing. After every
    draw, the drawn candidate is removed from all ballots and the weights
    are recomputed among the remaining candidates.

    Once the remaining candidates all have zero weight (nobody ranks any of
    them), they are placed together in the last tier. The last remaining
    candidate is placed without a draw.

    The result metadata contain the ``seed`` used (None if a generator was
    passed in), the serialized ``rank_scorer`` and the ``weights`` of the
    candidates before every draw.

    :param rank_scorer: A rank scorer or the name of one from
        :mod:`voter.component.rankscore`. It must give non-negative, exact
        scores, strictly decreasing with position.
    '''
    name = 'Weighted Random'

    def __init__(self, rank_scorer: Union[str, RankScorer] = 'borda'):
        self._converter = voter.convert.BallotsToPositionalVotes(rank_scorer)
        self.rank_scorer = self._converter.rank_scorer

    def tally(self,
              ballot_set: BallotSet,
              seed: Optional[int] = None,
              rng: Optional[random.Random] = None,
              ) -> Result:
        '''Rank candidates by weighted drawing without replacement.

        :param ballot_set: Validated ballots.
        :param seed: Seed for the random generator. If None and no generator
            is given, a seed is drawn from the operating system.
        :param rng: A random generator to use instead of creating one. Only
            its ``randrange()`` method is called.
        :raises PrngExhausted: If the random generator fails to provide
            a number within the requested range.
        '''
        if rng is None:
            if seed is None:
                seed = random.SystemRandom().getrandbits(SEED_BITS)
            rng = random.Random(seed)
        remaining = list(ballot_set.candidates)
        ballots = list(ballot_set)
        tiers = []
        weight_history = []
        while len(remaining) > 1:
            weights = self._converter.convert(ballots, tuple(remaining))
            weight_history.append(weights)
            logger.debug('weights before draw %d: %s', len(tiers) + 1, weights)
            int_weights = voter.util.to_integer_weights(list(weights.values()))
            if sum(int_weights) == 0:
                logger.info('no weight left, placing %s together', remaining)
                break
            drawn = self._draw(remaining, int_weights, rng)
            logger.info('drew %s for place %d', drawn, len(tiers) + 1)
            tiers.append(Tier([drawn]))
            remaining.remove(drawn)
            ballots = [
                sub_ballot for sub_ballot in (
                    voter.vote.subset_ballot(ballot, remaining)
                    for ballot in ballots
                ) if sub_ballot
            ]
        if remaining:
            tiers.append(Tier(remaining))
        return Result(self.name, tuple(tiers), {
            'seed': seed,
            'rank_scorer': self.rank_scorer.to_dict(),
            'weights': weight_history,
        })

    @staticmethod
    def _draw(candidates, weights, rng):
        try:
            return voter.util.select_weighted_random(candidates, weights, rng)
        except (StopIteration, ValueError) as e:
            raise PrngExhausted(f'random generator failed to draw: {e}') from e
