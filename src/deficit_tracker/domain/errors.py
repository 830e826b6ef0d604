"""Domain errors."""


class ProfileNotFoundError(LookupError):
    """Raised when a user has no profile."""


class MissingProfileDataError(ValueError):
    """Raised when a profile lacks fields required for BMR."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Profile is missing required fields: {', '.join(missing)}")
