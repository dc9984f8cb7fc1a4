"""Shared functionality for ballot file I/O. Internal."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Callable, Iterable, List, Optional, TextIO, Tuple

from voter.candidate import CandidateRegistry
from voter.vote import RawBallot


class NotSupportedInFormat(Exception):
    """Signals that the given element is not supported by the I/O format."""

    FORMAT: str = NotImplemented

    def __init__(self, what: str):
        super().__init__(f'{what} not supported by {self.FORMAT}')


class NotSupportedInText(NotSupportedInFormat):
    FORMAT = 'plain text ballot format'


class ParseError(Exception):
    """An input that is invalid according to the given format was detected.

    :param message: Description of the problem.
    :param line_number: One-based number of the offending line, if known.
    """
    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f'line {line_number}: {message}'
        super().__init__(message)


@dataclasses.dataclass
class BallotFile:
    """A container for data returnable from a ballot file.

    The ballots are raw; pass them through :func:`voter.vote.validate`
    together with the registry to obtain a ballot set.
    """
    ballots: List[RawBallot]
    registry: CandidateRegistry


def loaders(line_loader: Callable[..., BallotFile]
            ) -> Tuple[Callable[..., BallotFile], Callable[..., BallotFile]]:
    """Create load() and loads() functions from an iterating function."""
    return_annot = typing.get_type_hints(line_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return line_loader(iter(text.split('\n')), **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
