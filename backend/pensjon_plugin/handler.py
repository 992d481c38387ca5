"""Harvest orchestration: decode request, call upstream, assemble evidence."""

import logging
from typing import List, Union

from pydantic import ValidationError

from pensjon_plugin.evidence import assemble_evidence
from pensjon_plugin.integrations.errors import AdapterError, invalid_request
from pensjon_plugin.integrations.norsk_pensjon_client import NorskPensjonClient
from pensjon_plugin.metadata import get_evidence_codes
from pensjon_plugin.models.entities import EvidenceCode, EvidenceValue
from pensjon_plugin.models.harvest_request import HarvestRequest

logger = logging.getLogger(__name__)

HarvestResult = Union[List[EvidenceValue], AdapterError]


def _describe(err: dict) -> str:
    field = ".".join(str(part) for part in err["loc"]) or "body"
    return f"{field}: {err['msg']}"


def decode_harvest_request(raw_body: bytes) -> Union[HarvestRequest, AdapterError]:
    try:
        return HarvestRequest.model_validate_json(raw_body)
    except ValidationError as e:
        reason = "; ".join(_describe(err) for err in e.errors())
        logger.warning(f"Rejected harvest request: {reason}")
        return invalid_request(reason)


async def handle_harvest(raw_body: bytes, client: NorskPensjonClient) -> HarvestResult:
    request = decode_harvest_request(raw_body)
    if isinstance(request, AdapterError):
        return request

    response = await client.fetch(request.subjectParty)
    if isinstance(response, AdapterError):
        return response

    return assemble_evidence(response)


def get_metadata() -> List[EvidenceCode]:
    return get_evidence_codes()
