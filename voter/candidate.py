'''Candidate specifications and the candidate registry.

A candidate is identified by a string id, unique within a single election;
its display name is only used for presentation. The candidates standing in
an election are collected in a :class:`CandidateRegistry`, which fixes both
the set of valid ids and their canonical order. All tallies iterate over
candidates in registry order wherever the order could influence the output,
so that results do not depend on set iteration order.
'''

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union


CandidateID = str


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. an empty or non-string id, or a candidate registered twice.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


@dataclasses.dataclass(frozen=True)
class Candidate:
    '''A single option standing in the election.

    :param id: Identifier of the candidate, unique in the election. This is
        what ballots refer to.
    :param display_name: Name to present to people. Defaults to the id.
    '''
    id: CandidateID
    display_name: Optional[str] = None

    def __post_init__(self):
        validate_id(self.id)
        if self.display_name is None:
            object.__setattr__(self, 'display_name', self.id)

    def __str__(self) -> str:
        return self.display_name


def validate_id(candidate_id: Any) -> None:
    '''Check whether a candidate id is valid.

    :raises CandidateError: If the id is not a non-empty string.
    '''
    if not isinstance(candidate_id, str):
        raise CandidateError(candidate_id, 'a string id')
    if not candidate_id.strip():
        raise CandidateError(candidate_id, 'a non-empty id')


class CandidateRegistry:
    '''A fixed, ordered set of candidates for one election.

    The registry is immutable once constructed. Candidates keep the order
    in which they were given.

    :param candidates: Candidate objects or bare string ids (which are
        turned into candidates with the display name equal to the id).
    :raises CandidateError: If any candidate is invalid or an id occurs
        more than once.
    '''
    def __init__(self, candidates: Iterable[Union[Candidate, CandidateID]]):
        by_id: Dict[CandidateID, Candidate] = {}
        for cand in candidates:
            if not isinstance(cand, Candidate):
                cand = Candidate(cand)
            if cand.id in by_id:
                raise CandidateError(cand.id, 'registered only once')
            by_id[cand.id] = cand
        self._by_id = by_id
        self._ids = tuple(by_id.keys())

    @classmethod
    def from_ids(cls, ids: Iterable[CandidateID]) -> CandidateRegistry:
        '''Create a registry of candidates named by their ids.'''
        return cls(Candidate(cand_id) for cand_id in ids)

    @property
    def ids(self) -> Tuple[CandidateID, ...]:
        '''Candidate ids in registry order.'''
        return self._ids

    def index(self, candidate_id: CandidateID) -> int:
        '''Return the position of the candidate in registry order.'''
        return self._ids.index(candidate_id)

    def sort(self, candidate_ids: Iterable[CandidateID]) -> Tuple[CandidateID, ...]:
        '''Return the given ids in registry order.'''
        wanted = frozenset(candidate_ids)
        return tuple(cand_id for cand_id in self._ids if cand_id in wanted)

    def __getitem__(self, candidate_id: CandidateID) -> Candidate:
        return self._by_id[candidate_id]

    def __contains__(self, candidate_id: Any) -> bool:
        return candidate_id in self._by_id

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CandidateRegistry):
            return NotImplemented
        return list(self) == list(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f'<CandidateRegistry({", ".join(self._ids)})>'
