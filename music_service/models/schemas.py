# music_service/models/schemas.py
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from music_service.services.providers import PASSTHROUGH_OPTIONS


class MusicGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    # validated by the orchestrator so a bad prompt gets the structured 400;
    # everything else is forwarded as sent
    prompt: Any = None
    music_length_ms: Any = Field(None, alias="musicLengthMs")
    model_id: Any = Field(None, alias="modelId")
    force_instrumental: Any = Field(None, alias="forceInstrumental")
    respect_sections_durations: Any = Field(None, alias="respectSectionsDurations")
    store_for_inpainting: Any = Field(None, alias="storeForInpainting")
    sign_with_c2pa: Any = Field(None, alias="signWithC2pa")

    def provider_options(self) -> Dict[str, Any]:
        """Passthrough options keyed by their request-body names, unset ones dropped."""
        values = self.model_dump(by_alias=True)
        return {k: values[k] for k in PASSTHROUGH_OPTIONS if values.get(k) is not None}
