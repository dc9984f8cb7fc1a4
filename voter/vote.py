'''Ballot types, ballot sets and the ballot validator.

A ballot ranks candidates from the best to the worst. It is represented by
a tuple of *rank-groups*, each a frozen set of candidate ids tied at that
rank, so both strict rankings and explicit ties can be expressed. A ballot
need not rank every candidate; how omitted candidates are treated is up to
each tally.

Raw ballots, as handed over by whoever collected them, are a looser form of
the same: any sequence of rank-groups where a rank-group may also be given
as a single candidate id. The :func:`validate` function checks raw ballots
against a candidate registry and normalizes them into a :class:`BallotSet`,
the immutable input of all tallies. If a ballot is invalid, it raises
a subclass of :class:`ValidationError` pinpointing the offending ballot
and candidate.
'''

from __future__ import annotations

import collections.abc
import dataclasses
from typing import Any, Collection, FrozenSet, Iterable, Iterator, Optional, Tuple, Union

from voter.candidate import CandidateID, CandidateRegistry


RankGroup = FrozenSet[CandidateID]
Ballot = Tuple[RankGroup, ...]
RawRankGroup = Union[CandidateID, Collection[CandidateID]]
RawBallot = Iterable[RawRankGroup]


class ValidationError(Exception):
    '''Raw ballots are invalid given the candidate registry.

    :param message: Description of the problem.
    :param ballot_index: Zero-based index of the offending ballot, if the
        problem concerns a single ballot.
    :param candidate: The offending candidate id, if any.
    '''
    def __init__(self,
                 message: str,
                 ballot_index: Optional[int] = None,
                 candidate: Optional[Any] = None,
                 ):
        self.ballot_index = ballot_index
        self.candidate = candidate
        if ballot_index is not None:
            message += f' in ballot {ballot_index}'
        super().__init__(message)


class DuplicateCandidateInBallot(ValidationError):
    '''A candidate appears more than once in a single ballot.'''
    def __init__(self, candidate: CandidateID, ballot_index: Optional[int] = None):
        super().__init__(
            f'candidate {candidate!r} ranked more than once',
            ballot_index=ballot_index,
            candidate=candidate,
        )


class UnknownCandidateReference(ValidationError):
    '''A ballot refers to a candidate that is not in the registry.'''
    def __init__(self, candidate: Any, ballot_index: Optional[int] = None):
        super().__init__(
            f'unknown candidate {candidate!r}',
            ballot_index=ballot_index,
            candidate=candidate,
        )


class EmptyInput(ValidationError):
    '''There is nothing to tally.

    Raised for zero ballots or zero candidates, and also for a ballot that
    ranks nobody or contains an empty rank-group.

    :param what: What was found empty.
    :param ballot_index: Zero-based index of the offending ballot, if any.
    '''
    def __init__(self, what: str, ballot_index: Optional[int] = None):
        self.what = what
        super().__init__(f'empty {what}', ballot_index=ballot_index)


@dataclasses.dataclass(frozen=True)
class BallotSet:
    '''An immutable, non-empty sequence of valid ballots.

    Use :func:`validate` to create one from raw ballots; the constructor
    trusts that the ballots are already normalized and valid.

    :param ballots: Validated ballots, in input order.
    :param registry: The registry the ballots were validated against.
    '''
    ballots: Tuple[Ballot, ...]
    registry: CandidateRegistry

    def __post_init__(self):
        if not self.ballots:
            raise EmptyInput('ballots')
        if not len(self.registry):
            raise EmptyInput('candidates')

    @property
    def candidates(self) -> Tuple[CandidateID, ...]:
        '''All candidate ids of the registry, in registry order.'''
        return self.registry.ids

    def __iter__(self) -> Iterator[Ballot]:
        return iter(self.ballots)

    def __len__(self) -> int:
        return len(self.ballots)

    def __getitem__(self, index: int) -> Ballot:
        return self.ballots[index]


def validate(raw_ballots: Iterable[RawBallot],
             registry: CandidateRegistry,
             ) -> BallotSet:
    '''Check raw ballots against the registry and normalize them.

    :param raw_ballots: Raw ballots, each a sequence of rank-groups from the
        best rank to the worst. A rank-group is either a single candidate id
        or a collection of candidate ids tied at that rank.
    :param registry: The candidates standing in the election.
    :returns: A ballot set with every rank-group turned into a frozen set.
    :raises EmptyInput: If there are no ballots or no candidates, or a ballot
        contains no rank-groups or an empty rank-group.
    :raises UnknownCandidateReference: If a ballot refers to a candidate that
        is not in the registry.
    :raises DuplicateCandidateInBallot: If a candidate appears more than once
        in a single ballot.
    '''
    if not len(registry):
        raise EmptyInput('candidates')
    ballots = tuple(
        validate_one(raw_ballot, registry, ballot_index=i)
        for i, raw_ballot in enumerate(raw_ballots)
    )
    if not ballots:
        raise EmptyInput('ballots')
    return BallotSet(ballots, registry)


def validate_one(raw_ballot: RawBallot,
                 registry: CandidateRegistry,
                 ballot_index: Optional[int] = None,
                 ) -> Ballot:
    '''Check a single raw ballot and normalize it.

    :param raw_ballot: A sequence of rank-groups.
    :param registry: The candidates standing in the election.
    :param ballot_index: Position of the ballot in its set, used to pinpoint
        the ballot in error messages.
    :raises ValidationError: If the ballot is not a sequence.
    '''
    if isinstance(raw_ballot, (str, bytes)) or not isinstance(
        raw_ballot, collections.abc.Iterable
    ):
        raise ValidationError(
            f'invalid ballot type {type(raw_ballot).__name__}, must be'
            ' a sequence of rank-groups',
            ballot_index=ballot_index,
        )
    ballot = []
    seen = set()
    for item in raw_ballot:
        members = [item] if _is_single(item) else list(item)
        if not members:
            raise EmptyInput('rank-group', ballot_index=ballot_index)
        for cand in members:
            if not isinstance(cand, str) or cand not in registry:
                raise UnknownCandidateReference(cand, ballot_index)
            if cand in seen:
                raise DuplicateCandidateInBallot(cand, ballot_index)
            seen.add(cand)
        ballot.append(frozenset(members))
    if not ballot:
        raise EmptyInput('ballot', ballot_index=ballot_index)
    return tuple(ballot)


def _is_single(item: Any) -> bool:
    return isinstance(item, str) or not isinstance(
        item, collections.abc.Iterable
    )


class BallotValidator:
    '''Validate raw ballots against a fixed candidate registry.

    :param registry: The candidates standing in the election.
    '''
    def __init__(self, registry: CandidateRegistry):
        self.registry = registry

    def validate(self, raw_ballots: Iterable[RawBallot]) -> BallotSet:
        '''Check the raw ballots, see :func:`validate`.'''
        return validate(raw_ballots, self.registry)

    def validate_one(self, raw_ballot: RawBallot) -> Ballot:
        '''Check a single raw ballot, see :func:`validate_one`.'''
        return validate_one(raw_ballot, self.registry)


def subset_ballot(ballot: Ballot,
                  subset: Collection[CandidateID],
                  ) -> Ballot:
    '''Return a ballot ranking only the candidates in the subset.

    Rank-groups that contain only candidates outside the subset are removed
    and the ballot is shortened.
    '''
    sub_ranking = []
    for group in ballot:
        sub_group = group.intersection(subset)
        if sub_group:
            sub_ranking.append(sub_group)
    return tuple(sub_ranking)


def positions(ballot: Ballot) -> Iterator[Tuple[int, RankGroup]]:
    '''Yield rank-groups with their positions.

    The position of a rank-group is the number of candidates ranked strictly
    ahead of it on the ballot, so candidates tied at a rank share a position
    and the next rank skips the positions they took up (1224 ranking).
    '''
    position = 0
    for group in ballot:
        yield position, group
        position += len(group)
