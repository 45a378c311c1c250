"""Activity heartbeat use case."""

import logfire
from pydantic import BaseModel

from hadik.application.usecase.base import BaseUseCase
from hadik.domain.service import ProfileService
from hadik.domain.value import UserId


class TouchLastSeenRequest(BaseModel):
    user_id: UserId


class TouchLastSeenResponse(BaseModel):
    recorded: bool


class TouchLastSeenUseCase(BaseUseCase):
    """Record member activity. Best-effort: failures are logged, not raised."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: TouchLastSeenRequest) -> TouchLastSeenResponse:
        try:
            await self.profile_service.touch_last_seen(request.user_id)
        except Exception as e:
            logfire.warn(
                "Failed to record last seen", user_id=str(request.user_id), error=str(e)
            )
            return TouchLastSeenResponse(recorded=False)
        return TouchLastSeenResponse(recorded=True)
