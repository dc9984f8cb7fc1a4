"""Tallying methods and the dispatcher selecting among them.

The set of methods is closed: Plurality, Weighted Random and Schulze
(winning votes). Each is a member of the :class:`Method` enumeration, and
:func:`tally` dispatches on it explicitly.
"""

import enum
import random
from typing import Dict, Iterable, Optional

import voter.evaluate.auxiliary
import voter.evaluate.condorcet
import voter.evaluate.core
import voter.vote
from voter.candidate import CandidateRegistry
from voter.evaluate.core import Result
from voter.vote import BallotSet, RawBallot


class Method(enum.Enum):
    """A tallying method, valued by its title."""
    PLURALITY = 'Plurality'
    WEIGHTED_RANDOM = 'Weighted Random'
    SCHULZE_WINNING = 'Schulze Winning'

    @property
    def title(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """The name in lowercase with dashes, as used on the command line."""
        return self.name.lower().replace('_', '-')

    @classmethod
    def from_name(cls, name: str) -> 'Method':
        """Find a method by its title, key or enumeration name.

        The lookup ignores case and treats spaces, dashes and underscores
        alike, so ``'Schulze Winning'``, ``'schulze-winning'`` and
        ``'SCHULZE_WINNING'`` all give the same method.

        :raises ValueError: If there is no such method.
        """
        wanted = _normalize_name(name)
        for method in cls:
            if _normalize_name(method.name) == wanted:
                return method
        raise ValueError(
            f'unknown method {name!r}, available: '
            + ', '.join(method.key for method in cls)
        )

    def __str__(self) -> str:
        return self.title


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace('-', ' ').replace('_', ' ')


PLURALITY = voter.evaluate.core.PluralityTally()
WEIGHTED_RANDOM = voter.evaluate.auxiliary.WeightedRandomTally()
SCHULZE_WINNING = voter.evaluate.condorcet.SchulzeTally()


def tally(ballot_set: BallotSet,
          method: Method,
          seed: Optional[int] = None,
          rng: Optional[random.Random] = None,
          ) -> Result:
    """Rank the candidates of the ballot set by the given method.

    :param ballot_set: Validated ballots.
    :param method: The method to use.
    :param seed: Seed for the random generator of the weighted random
        method; ignored by the other methods.
    :param rng: A random generator for the weighted random method, used
        instead of seeding a new one; ignored by the other methods.
    """
    if method is Method.PLURALITY:
        return PLURALITY.tally(ballot_set)
    elif method is Method.WEIGHTED_RANDOM:
        return WEIGHTED_RANDOM.tally(ballot_set, seed=seed, rng=rng)
    elif method is Method.SCHULZE_WINNING:
        return SCHULZE_WINNING.tally(ballot_set)
    else:
        raise ValueError(f'invalid method: {method!r}')


def evaluate(raw_ballots: Iterable[RawBallot],
             registry: CandidateRegistry,
             method: Method,
             seed: Optional[int] = None,
             ) -> Result:
    """Validate raw ballots and rank the candidates by the given method.

    :raises voter.vote.ValidationError: If the ballots are invalid; no
        tally is run then.
    """
    return tally(voter.vote.validate(raw_ballots, registry), method, seed=seed)


def tally_all(ballot_set: BallotSet,
              seed: Optional[int] = None,
              ) -> Dict[Method, Result]:
    """Rank the candidates of the ballot set by every method."""
    return {method: tally(ballot_set, method, seed=seed) for method in Method}
