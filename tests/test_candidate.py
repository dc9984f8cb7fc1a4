
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from voter.candidate import Candidate, CandidateError, CandidateRegistry


def test_display_name_default():
    assert Candidate('Apple').display_name == 'Apple'
    assert str(Candidate('A', 'Apple')) == 'Apple'


@pytest.mark.parametrize('cand_id', [None, 1, '', '   ', ('A', 'B')])
def test_invalid_id(cand_id):
    with pytest.raises(CandidateError):
        Candidate(cand_id)


def test_registry_order():
    registry = CandidateRegistry([Candidate('C'), 'A', Candidate('B', 'Bob')])
    assert registry.ids == ('C', 'A', 'B')
    assert [cand.id for cand in registry] == ['C', 'A', 'B']
    assert len(registry) == 3
    assert registry['B'].display_name == 'Bob'
    assert registry.index('A') == 1
    assert registry.sort({'B', 'C'}) == ('C', 'B')


def test_registry_membership():
    registry = CandidateRegistry.from_ids('ABC')
    assert 'A' in registry
    assert 'D' not in registry
    assert Candidate('A') not in registry


def test_registry_duplicate():
    with pytest.raises(CandidateError):
        CandidateRegistry.from_ids(['A', 'B', 'A'])


def test_registry_eq():
    assert CandidateRegistry.from_ids('AB') == CandidateRegistry(['A', 'B'])
    assert CandidateRegistry.from_ids('AB') != CandidateRegistry.from_ids('BA')
