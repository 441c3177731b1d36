"""Errors raised by the search engine.

Contract violations mean the problem definition (actions, transitions,
evaluation) is ill-defined. They are fatal for the run and never retried.
"""


class MCTSError(Exception):
    """Base class for search engine errors."""


class ContractViolation(MCTSError):
    """The external state/action contract was broken."""


class DuplicateChildError(ContractViolation):
    """A child already exists for the action being expanded."""


class EmptyTransitionError(ContractViolation):
    """apply_action produced no state for an action reported as legal."""


class NoActionSelectedError(ContractViolation):
    """select_action returned nothing although actions were offered."""


class StuckStateError(ContractViolation):
    """A non-terminal state cannot make progress toward a terminal state."""
