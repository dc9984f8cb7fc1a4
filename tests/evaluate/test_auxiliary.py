
import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import voter.evaluate.auxiliary
import voter.vote
from voter.candidate import CandidateRegistry
from voter.component.rankscore import Dowdall
from voter.evaluate.core import PrngExhausted


class ReplayRandom:
    '''Return predefined numbers instead of random ones.'''
    def __init__(self, values):
        self.values = iter(values)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        return next(self.values)


def build_ballot_set(ballots, candidates='ABC'):
    return voter.vote.validate(ballots, CandidateRegistry.from_ids(candidates))


VOTES = {
    'linear': [tuple('ABCD'), tuple('BCAD'), tuple('DCBA'), tuple('ABDC')],
    'truncated': [tuple('AB'), ('C', ), tuple('CA'), ('E', )],
    'tied': [(frozenset('AB'), 'C'), ('D', frozenset('CE'))],
    'single': [('A', ), ('A', )],
}

CANDIDATES = {
    'linear': 'ABCD',
    'truncated': 'ABCDE',
    'tied': 'ABCDE',
    'single': 'A',
}


def test_replay_borda():
    rng = ReplayRandom([4, 3])
    result = voter.evaluate.auxiliary.WeightedRandomTally().tally(
        build_ballot_set([tuple('ABC')]), rng=rng
    )
    assert result.method == 'Weighted Random'
    assert result.tiers == ({'B'}, {'C'}, {'A'})
    assert rng.calls == [(1, 7), (1, 4)]
    assert result.metadata['weights'] == [
        {'A': 3, 'B': 2, 'C': 1},
        {'A': 2, 'C': 1},
    ]
    assert result.metadata['seed'] is None


def test_replay_dowdall():
    rng = ReplayRandom([7, 1])
    tally = voter.evaluate.auxiliary.WeightedRandomTally(Dowdall())
    result = tally.tally(build_ballot_set([tuple('ABC')]), rng=rng)
    assert result.tiers == ({'B'}, {'A'}, {'C'})
    assert rng.calls == [(1, 12), (1, 4)]


def test_tied_share_position():
    result = voter.evaluate.auxiliary.WeightedRandomTally().tally(
        build_ballot_set([(frozenset('AB'), 'C')]), seed=0
    )
    assert result.metadata['weights'][0] == {'A': 3, 'B': 3, 'C': 1}


@pytest.mark.parametrize('set_key', list(VOTES.keys()))
@pytest.mark.parametrize('seed', [0, 1, 42, 2 ** 63])
def test_reproducible(set_key, seed):
    ballot_set = build_ballot_set(VOTES[set_key], CANDIDATES[set_key])
    tally = voter.evaluate.auxiliary.WeightedRandomTally()
    first = tally.tally(ballot_set, seed=seed)
    second = tally.tally(ballot_set, seed=seed)
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert first.metadata['seed'] == seed


@pytest.mark.parametrize('set_key', list(VOTES.keys()))
@pytest.mark.parametrize('seed', range(10))
def test_all_placed_once(set_key, seed):
    ballot_set = build_ballot_set(VOTES[set_key], CANDIDATES[set_key])
    result = voter.evaluate.auxiliary.WeightedRandomTally().tally(
        ballot_set, seed=seed
    )
    placed = [cand for tier in result.tiers for cand in tier]
    assert sorted(placed) == sorted(ballot_set.candidates)
    assert all(len(tier) == 1 for tier in result.tiers[:-1])


@pytest.mark.parametrize('seed', range(20))
def test_zero_weight_last(seed):
    ballot_set = build_ballot_set([('A', ), ('B', )], 'ABCD')
    result = voter.evaluate.auxiliary.WeightedRandomTally().tally(
        ballot_set, seed=seed
    )
    assert len(result.tiers) == 3
    assert {next(iter(tier)) for tier in result.tiers[:2]} == {'A', 'B'}
    assert result.tiers[2] == {'C', 'D'}


def test_single_candidate_no_draw():
    rng = ReplayRandom([])
    result = voter.evaluate.auxiliary.WeightedRandomTally().tally(
        build_ballot_set(VOTES['single'], 'A'), rng=rng
    )
    assert result.tiers == ({'A'}, )
    assert result.metadata['weights'] == []
    assert rng.calls == []


def test_unseeded_records_seed():
    ballot_set = build_ballot_set(VOTES['linear'], CANDIDATES['linear'])
    tally = voter.evaluate.auxiliary.WeightedRandomTally()
    result = tally.tally(ballot_set)
    seed = result.metadata['seed']
    assert isinstance(seed, int)
    assert 0 <= seed < 2 ** voter.evaluate.auxiliary.SEED_BITS
    assert tally.tally(ballot_set, seed=seed) == result


def test_unseeded_varies():
    ballot_set = build_ballot_set([tuple('AB'), tuple('BA')], 'AB')
    tally = voter.evaluate.auxiliary.WeightedRandomTally()
    winners = {tally.tally(ballot_set).winners for i in range(50)}
    assert winners == {frozenset('A'), frozenset('B')}


def test_global_random_untouched():
    random.seed(5)
    state = random.getstate()
    voter.evaluate.auxiliary.WeightedRandomTally().tally(
        build_ballot_set(VOTES['linear'], CANDIDATES['linear']), seed=3
    )
    assert random.getstate() == state


@pytest.mark.parametrize('values', [[], [100], [0], [2, 5]])
def test_prng_exhausted(values):
    with pytest.raises(PrngExhausted):
        voter.evaluate.auxiliary.WeightedRandomTally().tally(
            build_ballot_set([tuple('ABC')]), rng=ReplayRandom(values)
        )
