"""
Runtime support: error model and account id type.
"""

from .account_id import AccountId
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _errors_all

__all__ = ["AccountId"] + list(_errors_all)
