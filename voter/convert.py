'''Aggregate ballots into the forms the tallies operate on.

Each tally reduces the ballots to a simpler aggregate before ranking the
candidates: first preference counts for plurality, positional scores for the
weighted random draw, and counts of pairwise preferences for Schulze. The
converters here produce these aggregates. Every converter lists the
candidates in registry order, including those with zero counts, so the
aggregates are complete and their ordering is stable.
'''

from typing import Dict, Iterable, Tuple, Union
from numbers import Number

import voter.component.rankscore
import voter.vote
from voter.candidate import CandidateID
from voter.component.rankscore import RankScorer
from voter.vote import Ballot, BallotSet


PairwiseCounts = Dict[Tuple[CandidateID, CandidateID], int]


class BallotsToFirstPreference:
    '''Count the ballots ranking each candidate first.

    If a ballot ranks several candidates tied at the top, each of them gets
    one full vote from it. The total of the counts is therefore at least the
    number of ballots and exceeds it by the number of extra candidates in tied
    top ranks.
    '''
    def convert(self, ballot_set: BallotSet) -> Dict[CandidateID, int]:
        '''Convert ballots to first preference counts.'''
        counts = {cand: 0 for cand in ballot_set.candidates}
        for ballot in ballot_set:
            for cand in ballot[0]:
                counts[cand] += 1
        return counts


class BallotsToPositionalVotes:
    '''Sum the scores of candidates' positions over the ballots.

    Assigns a score to each position through a rank scorer and adds up the
    scores per candidate. Candidates tied on a ballot share the position
    (and the score) of the best of their places; candidates not ranked on
    a ballot get nothing from it.

    :param rank_scorer: A rank scorer, or the name of one from
        :mod:`voter.component.rankscore`.
    '''
    def __init__(self, rank_scorer: Union[str, RankScorer] = 'borda'):
        self.rank_scorer = voter.component.rankscore.construct(rank_scorer)

    def convert(self,
                ballots: Iterable[Ballot],
                candidates: Tuple[CandidateID, ...],
                ) -> Dict[CandidateID, Number]:
        '''Convert ballots to summed positional scores.

        :param ballots: Ballots ranking only the given candidates.
        :param candidates: The candidates in contention, in registry order.
        '''
        n_cands = len(candidates)
        rank_scores = self.rank_scorer.scores(n_cands, n_cands)
        weights = {cand: 0 for cand in candidates}
        for ballot in ballots:
            for position, group in voter.vote.positions(ballot):
                for cand in group:
                    weights[cand] += rank_scores[position]
        return weights


class BallotsToPairwiseCounts:
    '''Aggregate ballots to counts of pairwise preferences.

    Basic component for Condorcet methods. For each ballot that ranks
    a candidate strictly above another, adds one to the count of the first
    over the second. Candidates tied on a ballot add to neither direction.

    :param unranked_at_bottom: Whether to consider candidates not ranked on a
        ballot as being ranked last (tied among themselves). If False, these
        candidates are not considered (the voter is assumed not to have any
        preferences there).
    '''
    def __init__(self, unranked_at_bottom: bool = True):
        self.unranked_at_bottom = unranked_at_bottom

    def convert(self, ballot_set: BallotSet) -> PairwiseCounts:
        '''Convert ballots to counts of pairwise preferences.

        :returns: A count for every ordered pair of distinct candidates,
            zeros included.
        '''
        all_cands = ballot_set.candidates
        counts = {
            (upper, lower): 0
            for upper in all_cands for lower in all_cands
            if upper != lower
        }
        for ballot in ballot_set:
            ranking = list(ballot)
            if self.unranked_at_bottom:
                ranked = frozenset().union(*ballot)
                unranked = frozenset(all_cands).difference(ranked)
                if unranked:
                    ranking.append(unranked)
            for i, upper_group in enumerate(ranking):
                for lower_group in ranking[i+1:]:
                    for upper_cand in upper_group:
                        for lower_cand in lower_group:
                            counts[upper_cand, lower_cand] += 1
        return counts
