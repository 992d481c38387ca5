"""
Norsk Pensjon client - one POST per harvest, outcome classified on the spot
"""
import asyncio
import logging
from typing import Optional, Union

import aiohttp
from pydantic import ValidationError

from pensjon_plugin.integrations.errors import (
    AdapterError,
    classify_status,
    decode_failure,
    transport_failure,
    unrecognized_payload,
)
from pensjon_plugin.models.entities import NorskPensjonRequest, NorskPensjonResponse
from pensjon_plugin.models.harvest_request import Party

module_logger = logging.getLogger(__name__)

FetchResult = Union[NorskPensjonResponse, AdapterError]


def create_session() -> aiohttp.ClientSession:
    """Connection pool shared by all requests of one application."""
    return aiohttp.ClientSession(headers={"Accept": "application/json"})


class NorskPensjonClient:
    """Calls the Norsk Pensjon registry on behalf of one subject"""

    def __init__(self, session: aiohttp.ClientSession, url: str, logger: Optional[logging.Logger] = None):
        self.session = session
        self.url = url
        self.logger = logger or module_logger

    async def fetch(self, subject: Party) -> FetchResult:
        body = NorskPensjonRequest(Fodselsnummer=subject.norwegianSocialSecurityNumber)
        self.logger.info(f"Calling Norsk Pensjon for {subject.get_as_string()}")

        try:
            async with self.session.post(self.url, json=body.model_dump()) as resp:
                error = classify_status(resp.status)
                if error is not None:
                    self._log_status_failure(resp.status, subject)
                    return error
                raw = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Call to Norsk Pensjon failed: {e.__class__.__name__}: {e}")
            return transport_failure(e)

        return self._decode(raw)

    def _decode(self, raw: bytes) -> FetchResult:
        # an empty or null body decodes to nothing at all
        if raw.strip() in (b"", b"null"):
            self.logger.error("Norsk Pensjon returned an empty body")
            return unrecognized_payload()

        try:
            response = NorskPensjonResponse.model_validate_json(raw)
        except ValidationError as e:
            reason = "; ".join(err["msg"] for err in e.errors())
            self.logger.error(f"Could not deserialize response: {reason}")
            return decode_failure(reason)

        if response.is_empty():
            self.logger.error("Norsk Pensjon returned an empty object")
            return unrecognized_payload()

        self.logger.info("Norsk Pensjon call succeeded")
        return response

    def _log_status_failure(self, status: int, subject: Party) -> None:
        if status in (401, 403):
            self.logger.error(f"Authentication failed for Norsk Pensjon for {subject.get_as_string()}")
        elif status == 500:
            self.logger.error("Call to Norsk Pensjon failed (500 - internal server error)")
        else:
            self.logger.error(f"Unexpected status code from external API ({status})")
