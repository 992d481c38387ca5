import json

import pytest

from pensjon_plugin.handler import decode_harvest_request, get_metadata, handle_harvest
from pensjon_plugin.integrations.errors import AdapterError, ErrorCode, Severity
from pensjon_plugin.models.harvest_request import HarvestRequest

PAYLOAD = {"avtaler": [{"leverandor": "DNB", "saldo": 99}]}


class StubClient:
    """Returns a canned outcome and remembers who it was asked about"""

    def __init__(self, outcome):
        self.outcome = outcome
        self.subjects = []

    async def fetch(self, subject):
        self.subjects.append(subject)
        return self.outcome


@pytest.mark.asyncio
async def test_harvest_returns_default_evidence(make_client, harvest_body):
    client, _ = make_client(200, json.dumps(PAYLOAD).encode())

    result = await handle_harvest(harvest_body(), client)

    assert [v.name for v in result] == ["default"]
    assert json.loads(result[0].value) == PAYLOAD


@pytest.mark.asyncio
async def test_identifier_round_trips_to_outbound_body(make_client):
    request = HarvestRequest.model_validate({"subjectParty": {"norwegianSocialSecurityNumber": "01010199999"}})
    client, session = make_client(200, json.dumps(PAYLOAD).encode())

    await handle_harvest(request.model_dump_json().encode(), client)

    assert session.calls[0]["json"] == {"Fodselsnummer": "01010199999"}


@pytest.mark.asyncio
async def test_upstream_error_propagates_unchanged(harvest_body):
    error = AdapterError.transient(ErrorCode.UPSTREAM_ERROR, "later")
    client = StubClient(error)

    result = await handle_harvest(harvest_body(), client)

    assert result is error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"[]",
        b"{}",
        b'{"subjectParty": {}}',
        b'{"subjectParty": {"norwegianSocialSecurityNumber": "123"}}',
        b'{"subjectParty": {"norwegianSocialSecurityNumber": 1010199999}}',
        b'{"subjectParty": {"norwegianOrganizationNumber": "974760673"}}',
        # non-ASCII digits
        json.dumps({"subjectParty": {"norwegianSocialSecurityNumber": "\u0661" * 11}}).encode(),
        json.dumps({"subjectParty": {"norwegianSocialSecurityNumber": "0101019999\uff19"}}).encode(),
    ],
)
async def test_malformed_request_never_reaches_upstream(body):
    client = StubClient(None)

    result = await handle_harvest(body, client)

    assert isinstance(result, AdapterError)
    assert result.severity is Severity.PERMANENT_CLIENT
    assert result.code is ErrorCode.INVALID_REQUEST
    assert client.subjects == []


def test_decode_ignores_unknown_fields(harvest_body):
    request = decode_harvest_request(harvest_body(evidenceCodeName="NorskPensjon", consentReference="x"))

    assert isinstance(request, HarvestRequest)
    assert request.subjectParty.norwegianSocialSecurityNumber == "01010199999"
    assert request.evidenceCodeName == "NorskPensjon"


def test_metadata_is_deterministic():
    first = json.dumps([c.model_dump(mode="json") for c in get_metadata()])
    second = json.dumps([c.model_dump(mode="json") for c in get_metadata()])

    assert first == second


def test_metadata_lists_default_value():
    codes = get_metadata()

    assert [c.evidenceCodeName for c in codes] == ["NorskPensjon"]
    assert [v.evidenceValueName for v in codes[0].values] == ["default"]
