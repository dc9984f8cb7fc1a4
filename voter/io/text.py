"""Plain text ballot format.

One ballot per line, candidates from the most preferred::

    Strawberry > Apple > Banana
    Strawberry > Banana = Apple * 5
    Banana > Apple > Strawberry * 3
    Apple

``>`` separates ranks, ``=`` joins candidates tied at a rank and an optional
trailing ``* N`` counts the ballot N times. Candidate names may contain any
characters except ``*``, ``>`` and ``=``; surrounding whitespace is
trimmed. Candidates left out of a ballot are unranked on it. Blank lines
and lines starting with ``#`` are skipped. A single line may repeat its
ballot at most ``MAX_BALLOT_COUNT`` times.

Candidates whose names would not read back unchanged (names containing a
delimiter or a line break, starting with ``#`` or with surrounding
whitespace) cannot be dumped; :class:`voter.io.core.NotSupportedInText`
is raised for them.

Unless a candidate registry is given, the candidates are inferred from the
ballots in the order of their first appearance, so a candidate nobody voted
for does not take part in the election.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

import voter.io.core
from voter.candidate import CandidateRegistry
from voter.io.core import BallotFile, NotSupportedInText, ParseError
from voter.vote import Ballot, BallotSet, RawBallot


RANK_DELIMITER = '>'
TIE_DELIMITER = '='
COUNT_DELIMITER = '*'
COMMENT_PREFIX = '#'

# ballots are expanded in memory, so a single line may not repeat more
MAX_BALLOT_COUNT = 1_000_000

RE_COUNT = re.compile(r'\d+')
RE_LINE_BREAK = re.compile(r'[\r\n]')


def _load(lines: Iterable[str],
          registry: Optional[CandidateRegistry] = None,
          ) -> BallotFile:
    ballots = []
    seen = {}
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        ballot, count = parse_line(line, line_number)
        for group in ballot:
            for cand in ([group] if isinstance(group, str) else group):
                seen.setdefault(cand, None)
        ballots.extend([ballot] * count)
    if registry is None:
        registry = CandidateRegistry.from_ids(seen.keys())
    return BallotFile(ballots, registry)


def parse_line(line: str,
               line_number: Optional[int] = None,
               ) -> Tuple[RawBallot, int]:
    """Parse a single ballot line into a raw ballot and its count.

    Rank-groups of a single candidate are returned as the bare name, tied
    rank-groups as a tuple of names (duplicates kept, so that the validator
    can report them).

    :raises ParseError: If the line is malformed.
    """
    vote_part, *count_parts = line.split(COUNT_DELIMITER)
    if len(count_parts) > 1:
        raise ParseError(f'stray {COUNT_DELIMITER!r} in {line!r}', line_number)
    count = 1
    if count_parts:
        count_str = count_parts[0].strip()
        if not RE_COUNT.fullmatch(count_str):
            raise ParseError(f'invalid ballot count {count_str!r}', line_number)
        count = int(count_str)
        if count < 1:
            raise ParseError(f'ballot count must be positive: {count}',
                             line_number)
        if count > MAX_BALLOT_COUNT:
            raise ParseError(
                f'ballot count {count} exceeds maximum {MAX_BALLOT_COUNT}',
                line_number
            )
    ballot: List = []
    for rank_str in vote_part.split(RANK_DELIMITER):
        names = [name.strip() for name in rank_str.split(TIE_DELIMITER)]
        if not all(names):
            raise ParseError(
                f'missing candidate name in {line!r}, check for stray'
                f' {RANK_DELIMITER!r} or {TIE_DELIMITER!r}',
                line_number
            )
        ballot.append(names[0] if len(names) == 1 else tuple(names))
    return tuple(ballot), count


def _dump(ballots: Iterable[Ballot],
          registry: Optional[CandidateRegistry] = None,
          ) -> Iterable[str]:
    if registry is None and isinstance(ballots, BallotSet):
        registry = ballots.registry
    last_line = None
    count = 0
    for ballot in ballots:
        line = format_ballot(ballot, registry)
        if line == last_line and count < MAX_BALLOT_COUNT:
            count += 1
        else:
            if last_line is not None:
                yield _with_count(last_line, count)
            last_line = line
            count = 1
    if last_line is not None:
        yield _with_count(last_line, count)


def format_ballot(ballot: Ballot,
                  registry: Optional[CandidateRegistry] = None,
                  ) -> str:
    """Format a ballot as a line, without its count.

    Tied candidates are listed in registry order if a registry is given,
    alphabetically otherwise.

    :raises NotSupportedInText: If a candidate id would not read back as
        the same id.
    """
    return f' {RANK_DELIMITER} '.join(
        f' {TIE_DELIMITER} '.join(
            _dump_candidate(cand) for cand in (
                registry.sort(group) if registry is not None else sorted(group)
            )
        )
        for group in ballot
    )


def _dump_candidate(candidate: str) -> str:
    for delimiter in (RANK_DELIMITER, TIE_DELIMITER, COUNT_DELIMITER):
        if delimiter in candidate:
            raise NotSupportedInText(
                f'{delimiter!r} in candidate name {candidate!r}'
            )
    if candidate.startswith(COMMENT_PREFIX):
        raise NotSupportedInText(
            f'candidate name starting with {COMMENT_PREFIX!r}: {candidate!r}'
        )
    if candidate != candidate.strip():
        raise NotSupportedInText(
            f'surrounding whitespace in candidate name {candidate!r}'
        )
    if RE_LINE_BREAK.search(candidate):
        raise NotSupportedInText(f'line break in candidate name {candidate!r}')
    return candidate


def _with_count(line: str, count: int) -> str:
    if count == 1:
        return line
    return f'{line} {COUNT_DELIMITER} {count}'


load, loads = voter.io.core.loaders(_load)
dump, dumps = voter.io.core.dumpers(_dump)
