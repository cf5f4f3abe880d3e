"""Authentication precondition exceptions."""

from __future__ import annotations

from scamvigil.constants.messages import NOT_SIGNED_IN_MESSAGE
from scamvigil.exceptions.base import VigilError


class NotSignedInError(VigilError):
    """Raised when a backend call is attempted without a stored credential."""

    def __init__(self) -> None:
        super().__init__(NOT_SIGNED_IN_MESSAGE)
