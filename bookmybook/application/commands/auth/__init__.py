"""Authentication commands."""

from .sign_in import SignInCommand, SignInHandler
from .sign_up import SignUpCommand, SignUpHandler
from .sign_out import SignOutCommand, SignOutHandler

__all__ = [
    "SignInCommand",
    "SignInHandler",
    "SignUpCommand",
    "SignUpHandler",
    "SignOutCommand",
    "SignOutHandler",
]
