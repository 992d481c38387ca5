from typing import List
from pensjon_plugin.metadata import SOURCE
from pensjon_plugin.models.entities import EvidenceValue, NorskPensjonResponse


def assemble_evidence(response: NorskPensjonResponse) -> List[EvidenceValue]:
    """Wrap the whole upstream payload as the single "default" evidence value."""
    return [
        EvidenceValue(
            name="default",
            value=response.model_dump_json(),
            source=SOURCE,
            isErrorValue=False,
        )
    ]
