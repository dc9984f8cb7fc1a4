"""Input/output of ballots in text form.

This subpackage is structured into modules by file format. So far, only the
plain text format of :mod:`voter.io.text` is supported; it is the format the
command-line tool reads.
"""
