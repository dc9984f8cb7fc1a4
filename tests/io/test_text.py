
import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import voter.io.text
import voter.vote
from voter.candidate import CandidateRegistry
from voter.io.core import NotSupportedInFormat, NotSupportedInText, ParseError
from voter.vote import DuplicateCandidateInBallot, UnknownCandidateReference

FRUIT = '''# fruit poll
Strawberry > Apple > Banana
Strawberry > Banana = Apple * 5

Banana > Apple > Strawberry *3
Apple
'''


def test_load_fruit():
    ballot_file = voter.io.text.loads(FRUIT)
    assert ballot_file.registry.ids == ('Strawberry', 'Apple', 'Banana')
    assert len(ballot_file.ballots) == 10
    ballot_set = voter.vote.validate(ballot_file.ballots, ballot_file.registry)
    assert ballot_set[0] == (
        frozenset(['Strawberry']), frozenset(['Apple']), frozenset(['Banana'])
    )
    assert ballot_set[1] == (
        frozenset(['Strawberry']), frozenset(['Banana', 'Apple'])
    )
    assert ballot_set[6] == (
        frozenset(['Banana']), frozenset(['Apple']), frozenset(['Strawberry'])
    )
    assert ballot_set[9] == (frozenset(['Apple']), )


def test_load_file():
    ballot_file = voter.io.text.load(io.StringIO(FRUIT))
    assert len(ballot_file.ballots) == 10


def test_load_with_registry():
    registry = CandidateRegistry.from_ids(['Apple', 'Banana', 'Strawberry', 'Kiwi'])
    ballot_file = voter.io.text.loads(FRUIT, registry=registry)
    assert ballot_file.registry is registry
    ballot_set = voter.vote.validate(ballot_file.ballots, ballot_file.registry)
    assert ballot_set.candidates[-1] == 'Kiwi'


def test_load_unknown_in_registry():
    registry = CandidateRegistry.from_ids(['Apple', 'Banana'])
    ballot_file = voter.io.text.loads(FRUIT, registry=registry)
    with pytest.raises(UnknownCandidateReference):
        voter.vote.validate(ballot_file.ballots, ballot_file.registry)


def test_load_empty():
    ballot_file = voter.io.text.loads('# nothing\n\n')
    assert ballot_file.ballots == []
    assert len(ballot_file.registry) == 0


@pytest.mark.parametrize('line, ballot, count', [
    ('A', ('A', ), 1),
    ('A>B', ('A', 'B'), 1),
    ('  A  >  B = C  ', ('A', ('B', 'C')), 1),
    ('Big Apple > B * 12', ('Big Apple', 'B'), 12),
    ('A = A', (('A', 'A'), ), 1),
])
def test_parse_line(line, ballot, count):
    assert voter.io.text.parse_line(line) == (ballot, count)


@pytest.mark.parametrize('line', [
    'A > B * 2 * 3',
    'A > B * x',
    'A > B * 0',
    'A > B * -1',
    'A > B *',
    'A >',
    '> A',
    'A > = B',
    'A >> B',
    '* 3',
])
def test_parse_line_invalid(line):
    with pytest.raises(ParseError):
        voter.io.text.parse_line(line)


def test_parse_error_line_number():
    with pytest.raises(ParseError) as excinfo:
        voter.io.text.loads('A > B\n# comment\nA > > B\n')
    assert excinfo.value.line_number == 3
    assert str(excinfo.value).startswith('line 3: ')


def test_duplicate_reported_by_validation():
    ballot_file = voter.io.text.loads('A > B\nA = B > A\n')
    with pytest.raises(DuplicateCandidateInBallot) as excinfo:
        voter.vote.validate(ballot_file.ballots, ballot_file.registry)
    assert excinfo.value.ballot_index == 1


def test_dumps():
    ballot_set = voter.vote.validate(
        [tuple('AB'), tuple('AB'), (frozenset('CB'), 'A'), tuple('AB')],
        CandidateRegistry.from_ids('ABC'),
    )
    assert voter.io.text.dumps(ballot_set) == (
        'A > B * 2\n'
        'B = C > A\n'
        'A > B\n'
    )


def test_dump_reload():
    ballot_file = voter.io.text.loads(FRUIT)
    ballot_set = voter.vote.validate(ballot_file.ballots, ballot_file.registry)
    out = io.StringIO()
    voter.io.text.dump(out, ballot_set)
    reloaded = voter.io.text.loads(out.getvalue())
    assert reloaded.registry == ballot_file.registry
    assert voter.vote.validate(reloaded.ballots, reloaded.registry) == ballot_set


@pytest.mark.parametrize('cand_id', [
    'A>B', 'A=B', 'A*2', '#1', ' A', 'A ', 'A\nB',
])
def test_dump_unsupported_id(cand_id):
    ballot_set = voter.vote.validate(
        [(cand_id, 'C'), ('C', cand_id)],
        CandidateRegistry.from_ids([cand_id, 'C']),
    )
    with pytest.raises(NotSupportedInText):
        voter.io.text.dumps(ballot_set)


def test_dump_unsupported_is_format_error():
    assert issubclass(NotSupportedInText, NotSupportedInFormat)
    with pytest.raises(NotSupportedInFormat) as excinfo:
        voter.io.text.format_ballot((frozenset(['A>B']), ))
    assert 'plain text' in str(excinfo.value)


def test_dump_supported_id_reloads():
    ballot_set = voter.vote.validate(
        [('Big Apple', 'C#'), ('C#', 'Big Apple')],
        CandidateRegistry.from_ids(['Big Apple', 'C#']),
    )
    reloaded = voter.io.text.loads(voter.io.text.dumps(ballot_set))
    assert voter.vote.validate(reloaded.ballots, reloaded.registry) == ballot_set


@pytest.mark.parametrize('count, valid', [
    (voter.io.text.MAX_BALLOT_COUNT, True),
    (voter.io.text.MAX_BALLOT_COUNT + 1, False),
    (10_000_000_000, False),
])
def test_parse_line_count_cap(count, valid):
    line = f'A > B * {count}'
    if valid:
        assert voter.io.text.parse_line(line) == (('A', 'B'), count)
    else:
        with pytest.raises(ParseError):
            voter.io.text.parse_line(line, 4)


def test_dump_splits_over_cap(monkeypatch):
    monkeypatch.setattr(voter.io.text, 'MAX_BALLOT_COUNT', 2)
    ballot_set = voter.vote.validate(
        [tuple('AB')] * 5, CandidateRegistry.from_ids('AB'),
    )
    assert voter.io.text.dumps(ballot_set) == (
        'A > B * 2\n'
        'A > B * 2\n'
        'A > B\n'
    )
    reloaded = voter.io.text.loads(voter.io.text.dumps(ballot_set))
    assert len(reloaded.ballots) == 5
