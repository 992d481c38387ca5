from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class Party(BaseModel):
    model_config = ConfigDict(frozen=True)

    norwegianSocialSecurityNumber: Optional[str] = Field(default=None, pattern=r"^[0-9]{11}$")
    norwegianOrganizationNumber: Optional[str] = Field(default=None, pattern=r"^[0-9]{9}$")

    def get_as_string(self) -> str:
        """Log-safe rendering; the personal number part is masked."""
        if self.norwegianSocialSecurityNumber:
            return f"ssn:{self.norwegianSocialSecurityNumber[:6]}*****"
        if self.norwegianOrganizationNumber:
            return f"org:{self.norwegianOrganizationNumber}"
        return "unknown party"


class SubjectParty(Party):
    norwegianSocialSecurityNumber: str = Field(pattern=r"^[0-9]{11}$")


class HarvestRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    subjectParty: SubjectParty
    requestorParty: Optional[Party] = None
    evidenceCodeName: Optional[str] = None
    accreditationId: Optional[str] = None
    parameters: Dict[str, Any] = {}
