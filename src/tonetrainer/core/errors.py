"""Domain errors shared by the lesson, practice and feedback services."""


class TrainerError(Exception):
    """Base error for service operations."""

    pass


class InvalidInputError(TrainerError):
    """A write request is missing required fields."""

    pass


class NotFoundError(TrainerError):
    """The referenced record does not exist."""

    pass
