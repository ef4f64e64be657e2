"""
Wizard Models

Client-side state for one wizard session:
- Stage of the linear flow (access -> form -> generating -> complete)
- Wedding details form (wire names are camelCase, e.g. weddingDate)
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Dict
from enum import Enum


class WizardStage(str, Enum):
    """Stages of the wizard, in order."""
    ACCESS = "access"
    FORM = "form"
    GENERATING = "generating"
    COMPLETE = "complete"


class FormData(BaseModel):
    """Wedding details. Every field is free text; only REQUIRED_FIELDS must be non-blank."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    bride: str = ""
    groom: str = ""
    wedding_date: str = ""
    venue: str = ""
    how_met: str = ""
    proposal: str = ""
    favorite_memory: str = ""
    shared_hobbies: str = ""
    pet_names: str = ""
    future_plans: str = ""

    def to_payload(self) -> Dict[str, str]:
        """camelCase dict as sent to the generation endpoint."""
        return self.model_dump(by_alias=True)

    def missing_required(self) -> List[str]:
        """Wire names of required fields that are blank after trimming, in form order."""
        payload = self.to_payload()
        return [name for name in REQUIRED_FIELDS if not payload[name].strip()]


# Wire names, in form order
FORM_FIELDS = tuple(
    field.alias or name for name, field in FormData.model_fields.items()
)
REQUIRED_FIELDS = ("bride", "groom", "weddingDate", "venue", "howMet")

_ATTRIBUTE_BY_WIRE_NAME = {
    (field.alias or name): name for name, field in FormData.model_fields.items()
}


def resolve_field(name: str) -> str:
    """Map a wire name (weddingDate) or attribute name (wedding_date) to the model attribute."""
    if name in _ATTRIBUTE_BY_WIRE_NAME:
        return _ATTRIBUTE_BY_WIRE_NAME[name]
    if name in FormData.model_fields:
        return name
    raise ValueError(f"Unknown form field: {name}")
