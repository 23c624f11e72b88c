from app.models.gateway.dto import SourceDto
from app.services.api.authenticators.api_key_authenticator import ApiKeyAuthenticator
from app.services.api.authenticators.authenticator import Authenticator
from app.services.api.authenticators.null_authenticator import NullAuthenticator


class AuthenticatorFactory:
    def create_authenticator(self, source: SourceDto) -> Authenticator:
        match source.authentication:
            case "none":
                return NullAuthenticator()
            case "api_key":
                if source.api_interface_id is None or source.api_key is None:
                    raise ValueError(self.__error_message(source.reference))

                return ApiKeyAuthenticator(
                    interface_id=source.api_interface_id,
                    api_key=source.api_key,
                )
            case _:
                raise ValueError(
                    "incorrect value for authentication, supported types are 'api_key' or 'none'. Please fix the source"
                )

    def __error_message(self, reference: str) -> str:
        return f"api_interface_id and api_key are required for api_key authentication on source {reference}"
