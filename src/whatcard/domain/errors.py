class InputValidationError(ValueError):
    """Raised when a required input is missing or unusable."""


class NotFoundError(LookupError):
    kind = "resource"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"{self.kind.capitalize()} not found: {identifier}")


class TransactionNotFoundError(NotFoundError):
    kind = "transaction"


class CardNotFoundError(NotFoundError):
    kind = "card"


class OfferNotFoundError(NotFoundError):
    kind = "offer"


class BenefitNotFoundError(NotFoundError):
    kind = "benefit"


class StateNotFoundError(NotFoundError):
    kind = "user state"


class StateInconsistencyWarning(UserWarning):
    """A benefit cap seen at reversal time differs from the one recorded at apply time."""
