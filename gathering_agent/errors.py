# gathering_agent/errors.py - Error taxonomy
"""
Exceptions raised by the gathering agent.

Every error derives from GatheringAgentError so the message adapter can
log and acknowledge failed events with a single except clause.
"""


class GatheringAgentError(Exception):
    """Base class for all gathering agent errors"""


class ConfigurationError(GatheringAgentError):
    """
    Invalid construction-time input (empty agent id, bad gatherer entry).
    Fatal at startup.
    """


class EventDecodingError(GatheringAgentError):
    """Base class for failures decoding a single event"""


class MalformedEnvelopeError(EventDecodingError):
    """The event envelope or its type tag could not be decoded"""


class MalformedPayloadError(EventDecodingError):
    """The typed payload of a recognized event could not be decoded"""


class RegistryError(GatheringAgentError):
    """
    Base class for gatherer lookup failures.

    Attributes:
        reference: The lookup string that failed, kept for diagnostics
    """

    def __init__(self, reference: str, message: str):
        super().__init__(message)
        self.reference = reference

    def __eq__(self, other):
        return type(self) is type(other) and self.reference == other.reference

    def __hash__(self):
        return hash((type(self), self.reference))


class NameFormatError(RegistryError):
    """The reference contains more than one '@' separator"""

    def __init__(self, reference: str):
        super().__init__(
            reference,
            f"could not extract the gatherer version from {reference}, "
            f"version should follow <gathererName>@<version> syntax"
        )


class NotFoundError(RegistryError):
    """No gatherer registered for the given name or name and version"""

    def __init__(self, reference: str):
        super().__init__(reference, f"gatherer `{reference}` not found")
