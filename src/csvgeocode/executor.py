"""
csvgeocode — Request Executor
==============================
Issues the HTTP GET for one rendered URL and classifies the outcome.

Outcomes:
    * no response at all       → :class:`~shared.python.exceptions.TransportError`
    * any status other than 200 → :class:`~shared.python.exceptions.HttpStatusError`
    * 200                      → the body text is returned

No retry is attempted: a failed row is reported and the run moves
on.
"""

from __future__ import annotations

import logging

import requests

from shared.python.exceptions import HttpStatusError, TransportError

logger = logging.getLogger("csvgeocode.executor")

USER_AGENT = "csvgeocode/1.0"
REQUEST_TIMEOUT = 30


class RequestExecutor:
    """Fetch rendered URLs through a shared :class:`requests.Session`.

    Args:
        session: Session to reuse.  A new one is created when omitted.
        timeout: Seconds before a connect/read is reported as a transport
                 failure.
        user_agent: ``User-Agent`` header sent with every request.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = user_agent
        self._session = session

    def fetch(self, url: str) -> str:
        """GET *url* and return the response body.

        Raises:
            TransportError: If the request raised before a response arrived.
            HttpStatusError: If the status code is not 200.
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(url, str(exc)) from exc

        if response.status_code != 200:
            raise HttpStatusError(url, response.status_code)

        return response.text

    def close(self) -> None:
        self._session.close()
