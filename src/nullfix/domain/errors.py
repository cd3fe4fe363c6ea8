"""Domain exceptions. Everything nullfix raises on purpose derives from NullFixError."""


class NullFixError(Exception):
    """Base class for nullfix failures."""


class ConfigurationError(NullFixError):
    """A required config document could not be read or parsed, or a writer call was contradictory."""


class LedgerResetError(NullFixError):
    """A ledger channel could not be (re)created with its header line."""


class LocationError(NullFixError):
    """A Location was constructed with missing or contradictory parts."""


class IncompatibleFixError(NullFixError):
    """The decision engine was handed a Location whose kind does not fit the violation."""

    def __init__(self, kind_label: str, handler: str) -> None:
        super().__init__(
            f"Incompatible Fix Call: Cannot fix location type: {kind_label} "
            f"with this method: {handler}"
        )
        self.kind_label = kind_label
        self.handler = handler
