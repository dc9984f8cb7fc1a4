"""A commandline tool for quick ranking of candidates from ranked ballots.

Reads ballots in the plain text format (one ballot per line, e.g.
``A > B = C * 3``) and ranks the candidates by one or more methods.
"""

import argparse
import io
import json
import logging
import sys
from typing import Dict, List, Optional

import voter.io.text
import voter.system
import voter.vote
from voter.candidate import CandidateError
from voter.evaluate.core import Result
from voter.io.core import ParseError
from voter.system import Method
from voter.vote import BallotSet, ValidationError

argparser = argparse.ArgumentParser(
    prog='voter',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load input ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load input ballots from standard input',
)
argparser.add_argument(
    '-m', '--method',
    nargs='*',
    help=(
        'ranking methods to use ('
        + ', '.join(method.key for method in Method)
        + '); default (None) uses all of them'
    ),
)
argparser.add_argument(
    '-s', '--seed',
    type=int,
    help='seed for the weighted random method; random if not given',
)
argparser.add_argument(
    '-j', '--json',
    dest='as_json',
    action='store_true',
    help='output the results as JSON, including method details',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tally log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tally log messages or other info',
)


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         method: Optional[List[str]] = None,
         seed: Optional[int] = None,
         as_json: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    methods = gather_methods(method)
    ballot_file = voter.io.text.load(input_file)
    ballot_set = voter.vote.validate(ballot_file.ballots, ballot_file.registry)
    results = {
        meth: voter.system.tally(ballot_set, meth, seed=seed)
        for meth in methods
    }
    if as_json:
        show_json(results)
    else:
        show_ballot_stats(ballot_set)
        for result in results.values():
            show_result(result)


def gather_methods(selected_keys: Optional[List[str]] = None) -> List[Method]:
    """Select desired methods from the available ones."""
    if not selected_keys:
        return list(Method)
    return [Method.from_name(key) for key in selected_keys]


def show_ballot_stats(ballot_set: BallotSet) -> None:
    print(f'Received {len(ballot_set)} ballots')
    print(f'{len(ballot_set.registry)} candidates:')
    for cand in ballot_set.registry:
        print(' ' * 10 + str(cand))


def show_result(result: Result) -> None:
    """Show the ranking of a single method as a table."""
    print()
    print(f'{result.method}:')
    rows = [(str(rank + 1), cand) for cand, rank in result.ranking()]
    n_just_chars = max(len('rank'), max(len(left) for left, _ in rows))
    print('rank'.rjust(n_just_chars), ' ', 'candidate')
    for left, right in rows:
        print(left.rjust(n_just_chars), ' ', right)


def show_json(results: Dict[Method, Result]) -> None:
    print(json.dumps(
        [result.to_dict() for result in results.values()],
        indent=2,
        ensure_ascii=False,
    ))


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        try:
            main(**vars(args))
        except (ParseError, ValidationError, CandidateError, ValueError) as e:
            argparser.exit(1, f'error: {e}\n')
