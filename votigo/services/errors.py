class VotingError(Exception):
    """Base class for every error the voting engine reports to a caller."""

    message = "Something went wrong."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(VotingError):
    message = "Not found."


class InvalidTransitionError(VotingError):
    message = "That action is not allowed for this category."


class NeedsOptionsError(InvalidTransitionError):
    message = "Cannot open voting: add at least one option first"


class ValidationError(VotingError):
    message = "Please check your input."


class BallotValidationError(ValidationError):
    message = "Your ballot could not be recorded."


class StorageError(VotingError):
    # Shown to voters as-is; the real cause only goes to the log.
    message = "Something went wrong. Please try again."


class ConstraintViolationError(StorageError):
    pass
