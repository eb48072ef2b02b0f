"""
Error taxonomy for the engine.

Two families:
  - InvariantViolation (and subclasses): a caller bug or an impossible state.
    There is no sensible recovery; callers should let these propagate.
  - plain ValueError (raised by `validation`): malformed user input that an
    interactive front-end can re-prompt for.
"""


class MastermindError(Exception):
    """Base class for every error raised by this package."""


class InvariantViolation(MastermindError):
    """An engine invariant or call-order precondition was broken."""


class InvalidCombination(InvariantViolation, ValueError):
    """A combination was built with the wrong arity or an out-of-range color."""


class InconsistentFeedback(InvariantViolation):
    """
    Narrowing emptied the candidate set: the (guess, score) pairs seen so far
    cannot all be true for any single secret.
    """
