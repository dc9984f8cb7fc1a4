'''Condorcet tallies.

These tallies work by examining pairwise preferences between candidates
(how many voters prefer one candidate to another). The preferences are
aggregated from the ballots by
:class:`voter.convert.BallotsToPairwiseCounts`, which accounts for tied
rankings and unranked candidates.

Pairwise preferences may be cyclic (A beats B beats C beats A), so a simple
"who beats whom" comparison does not always give a ranking. The Schulze
method resolves this by comparing the strongest paths between candidates
instead of the direct preferences; the relation so obtained is always
acyclic.
'''

import logging
from typing import Dict, List, Tuple
from numbers import Number

import voter.convert
from voter.candidate import CandidateID
from voter.evaluate.core import InternalError, Result, Tally, Tier
from voter.persist import simple_serialization
from voter.vote import BallotSet


logger = logging.getLogger(__name__)

PairMatrix = Dict[Tuple[CandidateID, CandidateID], Number]


def pairwise_wins(votes: PairMatrix,
                  include_ties: bool = False,
                  ) -> List[Tuple[CandidateID, CandidateID]]:
    '''Select pairs of candidates where the first is preferred to the second.

    :param votes: Counts of candidate pairs (pairwise preferences or path
        strengths).
    :param include_ties: Whether to include pairs of candidates that are tied.
        Such a pair will be included in both directions.
    :returns: Ordered pairs from the input that are preferred to the
        opposite ordering.
    '''
    wins = []
    for pair, count in votes.items():
        upper_cand, lower_cand = pair
        anti_count = votes.get((lower_cand, upper_cand), 0)
        if anti_count < count or include_ties and anti_count == count:
            wins.append(pair)
    return wins


def undefeated(candidates: List[CandidateID],
               wins: List[Tuple[CandidateID, CandidateID]],
               ) -> List[CandidateID]:
    '''Return the candidates not beaten by any of the given candidates.

    :param candidates: Candidates to consider; wins by or over anybody else
        are ignored.
    :param wins: Pairs of candidates where the first beats the second.
    '''
    considered = frozenset(candidates)
    beaten = frozenset(
        loser for winner, loser in wins
        if winner in considered and loser in considered
    )
    return [cand for cand in candidates if cand not in beaten]


@simple_serialization
class SchulzeTally(Tally):
    '''Schulze (beatpath) tally, winning votes variant.

    Also called Schwartz sequential dropping or path voting. Proceeds in the
    following steps:

    1.  Counts the pairwise preferences ``d[i, j]``, the number of ballots
        ranking *i* strictly above *j*.
    2.  Keeps the pairwise wins as links of strength ``d[i, j]`` (the raw
        count of winning votes, not the margin); a link only exists where
        ``d[i, j] > d[j, i]``.
    3.  Finds the strongest path ``p[i, j]`` between every pair of
        candidates, the strength of a path being the strength of its weakest
        link.
    4.  Lets *i* beat *j* when ``p[i, j] > p[j, i]``.
    5.  Ranks the candidates by repeatedly taking all candidates not beaten
        by any remaining candidate as the next tier.

    The computation uses exact integers throughout and runs in cubic time in
    the number of candidates.

    The result metadata contain the ``pairwise`` preference counts and the
    ``strongest_paths``, both keyed by ordered candidate pairs.

    :param unranked_at_bottom: Whether candidates omitted from a ballot count
        as ranked below all candidates it ranks (tied among themselves). If
        False, the ballot expresses no preference about them.
    '''
    name = 'Schulze Winning'

    def __init__(self, unranked_at_bottom: bool = True):
        self.unranked_at_bottom = unranked_at_bottom
        self._converter = voter.convert.BallotsToPairwiseCounts(
            unranked_at_bottom=unranked_at_bottom
        )

    def tally(self, ballot_set: BallotSet) -> Result:
        '''Rank candidates by the Schulze method.

        :param ballot_set: Validated ballots.
        '''
        candidates = list(ballot_set.candidates)
        if len(candidates) == 1:
            return Result(self.name, (Tier(candidates), ), {
                'pairwise': {},
                'strongest_paths': {},
            })
        pairwise = self._converter.convert(ballot_set)
        logger.debug('pairwise preferences: %s', pairwise)
        paths = self.widest_paths(pairwise, candidates)
        logger.debug('strongest paths: %s', paths)
        tiers = self.extract_tiers(candidates, pairwise_wins(paths))
        return Result(self.name, tiers, {
            'pairwise': pairwise,
            'strongest_paths': paths,
        })

    @staticmethod
    def widest_paths(counts: PairMatrix,
                     candidates: List[CandidateID],
                     ) -> PairMatrix:
        '''Compute the strengths of the strongest paths between candidates.

        Starts from the pairwise wins, with the strength of a link equal to
        the number of winning votes, and widens the paths through every
        candidate in turn. With the intermediate candidate in the outer loop,
        a single pass reaches the fixpoint.

        :param counts: Pairwise preference counts for every ordered pair of
            distinct candidates.
        :param candidates: All candidates, in registry order.
        :returns: Strongest path strengths for every ordered pair of
            distinct candidates; zero if there is no path.
        '''
        paths = {}
        for pair, count in counts.items():
            if counts.get(tuple(reversed(pair)), 0) < count:
                paths[pair] = count
            else:
                paths[pair] = 0
        for cand_via in candidates:
            for cand_from in candidates:
                if cand_from == cand_via:
                    continue
                for cand_to in candidates:
                    if cand_to in (cand_from, cand_via):
                        continue
                    paths[cand_from, cand_to] = max(
                        paths[cand_from, cand_to],
                        min(
                            paths[cand_from, cand_via],
                            paths[cand_via, cand_to],
                        )
                    )
        return paths

    @staticmethod
    def extract_tiers(candidates: List[CandidateID],
                      wins: List[Tuple[CandidateID, CandidateID]],
                      ) -> Tuple[Tier, ...]:
        '''Rank candidates into tiers by successive undefeated sets.

        :param candidates: All candidates, in registry order.
        :param wins: Pairs of candidates where the first beats the second.
            The relation must be acyclic.
        '''
        remaining = list(candidates)
        tiers = []
        while remaining:
            tier = undefeated(remaining, wins)
            if not tier:
                raise InternalError(f'beat relation cyclic among {remaining}')
            logger.info('tier %d: %s', len(tiers) + 1, tier)
            tiers.append(Tier(tier))
            remaining = [cand for cand in remaining if cand not in tier]
        return tuple(tiers)


def beats(result: Result) -> List[Tuple[CandidateID, CandidateID]]:
    '''Return the pairs where the first candidate beats the second.

    :param result: A result of :class:`SchulzeTally`.
    '''
    return pairwise_wins(result.metadata['strongest_paths'])
