"""
Errors raised by the paper trader.

Every failure is either rejected before any state is touched
(ConfigError), or leaves the session in its last known good state
(TransportError, StateError).
"""


class PaperTraderError(Exception):
    """Base class for all paper trader errors."""


class ConfigError(PaperTraderError):
    """Invalid symbol, capital or configuration value."""


class TransportError(PaperTraderError):
    """A history or price fetch failed."""


class StateError(PaperTraderError):
    """Operation not allowed in the session's current state."""
