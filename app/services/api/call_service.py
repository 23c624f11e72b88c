import logging
from typing import Any, Dict

from requests import JSONDecodeError, Response
from requests.exceptions import RequestException

from app.exceptions import FetchError
from app.models.gateway.dto import SourceDto
from app.services.api.api_service import HttpService
from app.services.api.authenticators.factory import AuthenticatorFactory

logger = logging.getLogger(__name__)


class SourceApi(HttpService):
    """
    HTTP client bound to a single source.
    """

    def __init__(self, source: SourceDto, auth_factory: AuthenticatorFactory) -> None:
        super().__init__(
            base_url=source.location,
            timeout=source.timeout,
            authenticator=auth_factory.create_authenticator(source),
            headers=source.headers,
        )


class CallService:
    """
    Calls the endpoints of a source. Every failure, be it the connection, a non 2xx status or
    a body that is not JSON, is raised as a FetchError.
    """

    def __init__(self, auth_factory: AuthenticatorFactory | None = None) -> None:
        self.__auth_factory = auth_factory or AuthenticatorFactory()

    def call(
        self,
        source: SourceDto,
        endpoint: str,
        method: str = "GET",
        body: Dict[str, Any] | None = None,
        query: Dict[str, Any] | None = None,
    ) -> Response:
        try:
            api = SourceApi(source, self.__auth_factory)
            response = api.do_request(method=method, sub_route=endpoint, json=body, params=query)
        except (RequestException, ValueError) as e:
            raise FetchError(f"Call to {source.reference} {endpoint} failed: {e}") from e

        if response.status_code >= 300:
            raise FetchError(
                f"Call to {source.reference} {endpoint} returned status {response.status_code}: {response.text[:200]}"
            )

        return response

    def decode_response(self, source: SourceDto, response: Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except (JSONDecodeError, ValueError) as e:
            raise FetchError(f"Could not decode response of {source.reference}: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(f"Expected a JSON object from {source.reference}, got {type(data).__name__}")

        return data
