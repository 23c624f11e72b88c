from abc import ABC, abstractmethod
from typing import Any


class Authenticator(ABC):
    """
    Abstract base class for the authentication of calls to a source.

    Concrete implementations return the headers and/or the ``requests`` auth object that a
    call to the source needs.
    """

    @abstractmethod
    def get_authentication_headers(self) -> dict[str, str]:
        """
        Returns the headers to add to every request, e.g. ``{"Authorization": "Bearer <token>"}``.
        """
        ...

    @abstractmethod
    def get_auth(self) -> Any:
        """
        Return authentication data in the format of the ``auth`` parameter of ``requests``,
        or None when the headers are sufficient.
        """
        ...
