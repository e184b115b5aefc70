"""Mode catalogue models."""

from pydantic import BaseModel, ConfigDict, Field


class ModeInfo(BaseModel):
    """Public description of one mode."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    name: str
    description: str
    is_content_generation: bool = Field(..., alias="isContentGeneration")
    always_uses_web_access: bool = Field(..., alias="alwaysUsesWebAccess")


class ModesResponse(BaseModel):
    """All available modes, in catalogue order."""

    modes: list[ModeInfo]
