from typing import Any
from app.services.api.authenticators.authenticator import Authenticator


class NullAuthenticator(Authenticator):
    """
    Null Authenticator that performs no authentication. Used for sources without authentication.
    """
    def get_authentication_headers(self) -> dict[str, str]:
        return {}

    def get_auth(self) -> Any:
        return None
