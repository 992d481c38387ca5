"""Static catalog of the evidence codes this plugin can produce."""

from typing import List

from pensjon_plugin.models.entities import EvidenceCode, EvidenceValueDescriptor

SOURCE = "NorskPensjon"
EVIDENCE_CODE_NAME = "NorskPensjon"
SERVICE_CONTEXT = "eBevis"

# Route name hosts use to discover the catalog
METADATA_FUNCTION_NAME = "evidencecodes"


def get_evidence_codes() -> List[EvidenceCode]:
    return [
        EvidenceCode(
            evidenceCodeName=EVIDENCE_CODE_NAME,
            description="Pension agreements and accrued entitlements registered with Norsk Pensjon",
            belongsToServiceContexts=[SERVICE_CONTEXT],
            isPublic=False,
            values=[
                EvidenceValueDescriptor(
                    evidenceValueName="default",
                    valueType="JsonSchema",
                    source=SOURCE,
                )
            ],
        )
    ]
