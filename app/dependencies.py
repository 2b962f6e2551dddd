# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for settings and the service objects built
# from them. Routes never read environment variables themselves.
#
# Tests swap any of these via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from agents.filename_synthesizer import FilenameSynthesizer
from agents.prompt_composer import PromptComposer
from app.config import FilenameConfig, Settings, StorageConfig, get_settings
from core.services.profile_service import ProfileService
from core.services.schedule_service import ScheduleService
from core.services.upload_service import UploadService
from lib.vision_client import build_vision_client


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_filename_synthesizer(settings: SettingsDep) -> FilenameSynthesizer:
    """Synthesizer configured for the current filename format and provider."""
    return FilenameSynthesizer(
        config=FilenameConfig.from_settings(settings),
        vision_client=build_vision_client(settings),
    )


def get_upload_service(
    settings: SettingsDep,
    synthesizer: Annotated[FilenameSynthesizer, Depends(get_filename_synthesizer)],
) -> UploadService:
    return UploadService(
        synthesizer=synthesizer,
        max_bytes=settings.max_upload_size_bytes,
        notify_url=settings.UPLOAD_NOTIFY_WEBHOOK_URL,
    )


def get_prompt_composer(settings: SettingsDep) -> PromptComposer:
    """Composer reading brand colors from the live profile row."""
    return PromptComposer(
        storage=StorageConfig.from_settings(settings),
        profile_loader=ProfileService.get_business_profile,
    )


def get_schedule_service(settings: SettingsDep) -> ScheduleService:
    return ScheduleService.from_settings(settings)


# Type aliases for dependency injection
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
PromptComposerDep = Annotated[PromptComposer, Depends(get_prompt_composer)]
ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]
