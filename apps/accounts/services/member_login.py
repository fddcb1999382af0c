"""Email and password login for collective members."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import InvalidCredentialsError, InactiveAccountError


logger = logging.getLogger(__name__)

User = get_user_model()


def authenticate_member(*, email: str, password: str) -> User:
    """
    Check a member's credentials and stamp ``last_login``.

    Email matching ignores case. Unknown emails and wrong passwords give
    the same error so the endpoint does not reveal which accounts exist.

    Raises:
        InvalidCredentialsError: If no member matches the credentials
        InactiveAccountError: If the member's account is deactivated
    """
    member = User.objects.filter(email__iexact=email.strip()).first()

    if member is None or not member.check_password(password):
        logger.warning("Failed login for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not member.is_active:
        logger.warning("Login refused for deactivated member %s", member.id)
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, member)
    return member
