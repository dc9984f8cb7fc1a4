
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import voter.convert
import voter.vote
from voter.candidate import CandidateRegistry


def build_ballot_set(votes, candidates='ABC'):
    return voter.vote.validate(
        [ballot for ballot, n in votes.items() for _ in range(n)],
        CandidateRegistry.from_ids(candidates),
    )


CYCLE = {
    tuple('ABC'): 3,
    tuple('BCA'): 2,
    tuple('CAB'): 4,
}


def test_first_preference():
    ballot_set = build_ballot_set({
        tuple('AB'): 3,
        ('B', ): 2,
        (frozenset('AC'), 'B'): 1,
    }, candidates='ABCD')
    counts = voter.convert.BallotsToFirstPreference().convert(ballot_set)
    assert counts == {'A': 4, 'B': 2, 'C': 1, 'D': 0}
    assert list(counts.keys()) == list('ABCD')


def test_first_preference_total():
    ballot_set = build_ballot_set(CYCLE)
    counts = voter.convert.BallotsToFirstPreference().convert(ballot_set)
    assert sum(counts.values()) == len(ballot_set)


def test_positional_borda():
    ballot_set = build_ballot_set({tuple('ABC'): 2, (frozenset('AB'), 'C'): 1})
    weights = voter.convert.BallotsToPositionalVotes().convert(
        ballot_set, ballot_set.candidates
    )
    assert weights == {'A': 9, 'B': 7, 'C': 3}


def test_positional_unranked_zero():
    ballot_set = build_ballot_set({('B', ): 1}, candidates='ABCD')
    weights = voter.convert.BallotsToPositionalVotes('borda').convert(
        ballot_set, ballot_set.candidates
    )
    assert weights == {'A': 0, 'B': 4, 'C': 0, 'D': 0}


def test_pairwise_cycle():
    ballot_set = build_ballot_set(CYCLE)
    counts = voter.convert.BallotsToPairwiseCounts().convert(ballot_set)
    assert counts == {
        ('A', 'B'): 7, ('B', 'A'): 2,
        ('B', 'C'): 5, ('C', 'B'): 4,
        ('C', 'A'): 6, ('A', 'C'): 3,
    }


def test_pairwise_ties_count_nowhere():
    ballot_set = build_ballot_set({(frozenset('AB'), 'C'): 1})
    counts = voter.convert.BallotsToPairwiseCounts().convert(ballot_set)
    assert counts[('A', 'B')] == 0
    assert counts[('B', 'A')] == 0
    assert counts[('A', 'C')] == 1
    assert counts[('B', 'C')] == 1
    assert counts[('C', 'A')] == 0


@pytest.mark.parametrize('unranked_at_bottom, expected', [
    (True, {
        ('A', 'B'): 2, ('A', 'C'): 2, ('B', 'A'): 1,
        ('B', 'C'): 1, ('C', 'A'): 1, ('C', 'B'): 0,
    }),
    (False, {
        ('A', 'B'): 0, ('A', 'C'): 0, ('B', 'A'): 0,
        ('B', 'C'): 1, ('C', 'A'): 0, ('C', 'B'): 0,
    }),
])
def test_pairwise_unranked(unranked_at_bottom, expected):
    ballot_set = build_ballot_set({('A', ): 2, ('B', 'C'): 1})
    converter = voter.convert.BallotsToPairwiseCounts(
        unranked_at_bottom=unranked_at_bottom
    )
    assert converter.convert(ballot_set) == expected
