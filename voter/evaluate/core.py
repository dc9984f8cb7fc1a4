'''General tally machinery and the plurality tally.'''

from __future__ import annotations

import abc
import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Tuple
from numbers import Number

import voter.convert
import voter.util
from voter.candidate import CandidateID
from voter.persist import serialize_value, simple_serialization
from voter.vote import BallotSet


logger = logging.getLogger(__name__)


class InternalError(Exception):
    '''A tally with valid input ended up in an unresolvable state.

    Such errors are not caused by the ballots and cannot be recovered from
    by the caller.
    '''
    pass


class PrngExhausted(InternalError):
    '''The random generator failed to provide a value for a draw.'''
    pass


class Tier(frozenset):
    '''Candidates ranked equally in a result.

    This object, a subclass of ``frozenset``, holds the ids of the
    candidates sharing a place in the ranking. A tier of a single candidate
    means that candidate is placed alone.
    '''
    def __repr__(self) -> str:
        return f'Tier({sorted(self)!r})'


@dataclasses.dataclass(frozen=True)
class Result:
    '''An outcome of a tally: tiers of candidates with metadata.

    :param method: Title of the method that produced the result.
    :param tiers: Tiers from the best to the worst. The first tier holds the
        winner(s). Each candidate appears in exactly one tier.
    :param metadata: Method-specific details of the computation, such as
        vote counts or the pairwise preference matrix.
    '''
    method: str
    tiers: Tuple[Tier, ...]
    metadata: Mapping[str, Any] = dataclasses.field(
        default_factory=dict, hash=False
    )

    @property
    def winners(self) -> Tier:
        '''The first tier.'''
        return self.tiers[0]

    def ranks(self) -> Dict[CandidateID, int]:
        '''Map candidates to their zero-based tier indices.'''
        return {
            cand: rank
            for rank, tier in enumerate(self.tiers) for cand in tier
        }

    def ranking(self) -> List[Tuple[CandidateID, int]]:
        '''List candidates with their zero-based tier indices, best first.

        Candidates sharing a tier are listed in alphabetical order.
        '''
        return [
            (cand, rank)
            for rank, tier in enumerate(self.tiers) for cand in sorted(tier)
        ]

    def to_dict(self) -> Dict[str, Any]:
        '''Serialize the result to a JSON-ready dictionary.'''
        return {
            'method': self.method,
            'tiers': [serialize_value(tier) for tier in self.tiers],
            'metadata': serialize_value(self.metadata),
        }


def tiers_by_score(scores: Dict[CandidateID, Number]) -> Tuple[Tier, ...]:
    '''Group candidates into tiers in descending order of their scores.

    Candidates with equal scores share a tier.
    '''
    return tuple(Tier(group) for group in voter.util.group_by_value(scores))


class Tally(metaclass=abc.ABCMeta):
    '''Rank candidates from a set of ballots.

    A root abstract base class for all tallies. Tallies never modify the
    ballot set and keep no state between calls, so a single instance can
    tally any number of ballot sets, also concurrently.
    '''
    name: str = NotImplemented

    @abc.abstractmethod
    def tally(self, ballot_set: BallotSet, *args, **kwargs) -> Result:
        '''Rank the candidates of the ballot set.

        :param ballot_set: Validated ballots.
        :returns: The ranking as tiers of tied candidates, best first,
            covering every candidate of the registry.
        '''
        raise NotImplementedError


@simple_serialization
class PluralityTally(Tally):
    '''Plurality (first past the post) tally.

    Counts the ballots on which each candidate is ranked first and ranks the
    candidates by the count. Lower preferences are ignored.

    Tie-handling policy: if a ballot ranks several candidates tied at the
    top, each of them gets one full vote from it, so the total of the counts
    exceeds the number of ballots in that case. Candidates with equal counts
    share a tier; candidates ranked first on no ballot share the last tier.

    The result metadata contain the ``counts`` of every candidate.
    '''
    name = 'Plurality'

    def __init__(self):
        self._converter = voter.convert.BallotsToFirstPreference()

    def tally(self, ballot_set: BallotSet) -> Result:
        '''Rank candidates by the number of first preferences.

        :param ballot_set: Validated ballots.
        '''
        counts = self._converter.convert(ballot_set)
        logger.debug('first preference counts: %s', counts)
        tiers = tiers_by_score(counts)
        logger.info('plurality winners with %d votes: %s',
                    counts[next(iter(tiers[0]))], sorted(tiers[0]))
        return Result(self.name, tiers, {'counts': counts})
