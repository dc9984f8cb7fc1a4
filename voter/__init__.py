"""Voter - rank a fixed set of candidates from ranked ballots.

Voter objects provide the means to turn a collection of ranked ballots into
an ordered, possibly tied ranking of candidates under a choice of three
tallying methods: Plurality, Weighted Random and Schulze (winning votes).

The pieces fit together as follows:

-   The candidates standing in the election are fixed up front in a
    :class:`candidate.CandidateRegistry`.
-   Raw ballots are checked against the registry by the validator in the
    ``vote`` module, which produces an immutable :class:`vote.BallotSet`.
-   The tallies in the ``evaluate`` subpackage turn the ballot set into a
    :class:`evaluate.core.Result`, an ordered sequence of tiers of tied
    candidates with method-specific metadata.
-   The ``system`` module selects the tally for a requested
    :class:`system.Method`.

Reading ballots from text and a command-line front end are provided by the
``io`` subpackage and ``python -m voter``.
"""
