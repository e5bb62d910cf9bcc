"""
Token authentication class for the API.

Kept separate from the views so that DRF can import it from settings
while authentication classes are initialised without pulling in view
modules (and their model imports).
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token authentication using the ``Token`` keyword.

    Exists to give settings a stable import path.
    """

    keyword = 'Token'
