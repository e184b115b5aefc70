"""Mode catalogue endpoint."""

from fastapi import APIRouter

from prompt_rewriter.api.models.modes import ModeInfo, ModesResponse
from prompt_rewriter.config.modes import MODE_REGISTRY

router = APIRouter(prefix="/api", tags=["modes"])


@router.get("/modes", response_model=ModesResponse)
async def list_modes() -> ModesResponse:
    """List available modes."""
    return ModesResponse(
        modes=[
            ModeInfo(
                key=profile.key,
                name=profile.display_name,
                description=profile.description,
                is_content_generation=profile.is_direct_content,
                always_uses_web_access=profile.always_augmented,
            )
            for profile in MODE_REGISTRY.values()
        ]
    )
