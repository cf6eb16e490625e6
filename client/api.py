# client/api.py
import logging

import httpx

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/api/submit-form"


class NetworkError(Exception):
    """The request did not complete or the reply could not be read."""


class SubmissionApi:
    def __init__(self, http_client: httpx.AsyncClient, path: str = SUBMIT_PATH):
        self.http_client = http_client
        self.path = path

    async def submit(self, payload: dict) -> dict:
        """
        POST the canonical payload as JSON.

        Returns the decoded body whatever the HTTP status, since the server
        explains 4xx/5xx failures in the body.

        Raises:
            NetworkError: transport failure or a body that is not a JSON object
        """
        try:
            response = await self.http_client.post(self.path, json=payload)
        except httpx.RequestError as e:
            logger.error("Form submission request failed: %s", e)
            raise NetworkError(str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Unreadable response (%s) from %s", response.status_code, self.path)
            raise NetworkError("invalid response body") from e

        if not isinstance(body, dict):
            raise NetworkError("invalid response body")
        return body
