"""Error taxonomy for wave orchestration."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A wave plan, path or timing definition is malformed.

    Raised when a sequencer is started or a plan is loaded; the caller
    decides what to do with it. Never raised mid-run.
    """


class ContractViolation(AssertionError):
    """A caller broke an API precondition (logic bug, not user input)."""
