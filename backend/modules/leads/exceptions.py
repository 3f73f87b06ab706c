"""
Leads module exceptions.
"""

from shared.exceptions import ConflictError


class DuplicateLeadError(ConflictError):
    """Raised when an email has already been captured."""

    def __init__(self, email: str):
        super().__init__(
            "This email is already subscribed",
            code="DUPLICATE_LEAD",
            details={"email": email},
        )
