from typing import Any
from app.services.api.authenticators.authenticator import Authenticator


class ApiKeyAuthenticator(Authenticator):
    """
    Authenticator for the zaaksysteem v2 API, which identifies a caller by an interface id and
    an API key sent as headers.
    """
    def __init__(self, interface_id: str, api_key: str) -> None:
        self.__interface_id = interface_id
        self.__api_key = api_key

    def get_authentication_headers(self) -> dict[str, str]:
        return {
            "API-Interface-ID": self.__interface_id,
            "API-Key": self.__api_key,
        }

    def get_auth(self) -> Any:
        return None
