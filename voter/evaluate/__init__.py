'''Evaluate ballots to rank the candidates.

Every tally takes a validated :class:`voter.vote.BallotSet` and returns
a :class:`core.Result` - an ordered sequence of :class:`core.Tier` objects,
each a frozen set of candidates ranked equally, with the winners in the first
tier. Every candidate of the registry appears in exactly one tier, even if no
ballot mentions it. The result also carries method-specific metadata for
renderers that want to explain the outcome.

Three tallies are provided:

-   :class:`core.PluralityTally` ranks by first preferences.
-   :class:`auxiliary.WeightedRandomTally` draws the ranking by lot, with
    chances weighted by the positions the candidates got on the ballots.
-   :class:`condorcet.SchulzeTally` ranks by strongest beatpaths between
    candidates (Schulze method, winning votes variant).

None of the tallies validate the ballots; use :func:`voter.vote.validate`
for that, or the dispatcher in :mod:`voter.system`, which does so.
'''

from voter.evaluate.core import *    # noqa
