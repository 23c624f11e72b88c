from abc import ABC
import logging
from typing import Dict, Any
from requests import request, Response
from requests.exceptions import Timeout, ConnectionError
from yarl import URL

from app.services.api.authenticators.authenticator import Authenticator

logger = logging.getLogger(__name__)


class HttpService(ABC):
    """
    Base class for making HTTP requests. Every request is made exactly once, a connection error
    or timeout is raised to the caller.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int,
        authenticator: Authenticator | None = None,
        headers: Dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.authenticator = authenticator
        self.__headers = headers or {}
        self.__timeout = timeout

    def do_request(
        self,
        method: str,
        sub_route: str | None = None,
        json: Dict[str, Any] | None = None,
        params: Dict[str, Any] | None = None,
    ) -> Response:
        """
        Perform an HTTP request.
        """
        headers = self.make_headers()
        url = self.make_target_url(sub_route, params)

        try:
            logger.info(f"Making HTTP {method} request to {url}")
            return request(
                method=method,
                url=str(url),
                headers=headers,
                timeout=self.__timeout,
                json=json,
                auth=self.authenticator.get_auth() if self.authenticator else None,
            )
        except (
            ConnectionError,
            Timeout,
        ) as e:
            logger.error(f"Failed to make request to {url}: {e}")
            raise

    def make_headers(self) -> Dict[str, Any]:
        # We always assume application/json as the content type
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        headers.update(self.__headers)
        if self.authenticator:
            headers.update(self.authenticator.get_authentication_headers())

        return headers

    def make_target_url(
        self, sub_route: str | None = None, params: Dict[str, Any] | None = None
    ) -> URL:
        url = self.base_url
        if sub_route:
            url = f"{url}/{sub_route.lstrip('/')}"

        target = URL(url)
        if params:
            return target.update_query(params)

        return target
