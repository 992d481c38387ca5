# pensjon_plugin/models/entities.py
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, RootModel
from typing import Any, Dict, List


class NorskPensjonRequest(BaseModel):
    Fodselsnummer: str


class NorskPensjonResponse(RootModel[Dict[str, Any]]):
    """Upstream payload, passed through without interpreting its fields."""

    def is_empty(self) -> bool:
        return not self.root


class EvidenceValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    source: str
    isErrorValue: bool = False
    valueType: str = "JsonSchema"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EvidenceValueDescriptor(BaseModel):
    evidenceValueName: str
    valueType: str
    source: str


class EvidenceCode(BaseModel):
    evidenceCodeName: str
    description: str
    belongsToServiceContexts: List[str] = []
    isPublic: bool = False
    values: List[EvidenceValueDescriptor] = []
