"""
Domain-specific exceptions for member login.

Views translate these into 401 and 403 responses.
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password; the two are not distinguished."""
    pass


class InactiveAccountError(AccountsServiceError):
    """The member exists but an admin has deactivated the account."""
    pass
