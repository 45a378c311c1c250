"""Audit log routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from fastapi.responses import PlainTextResponse

from hadik.application.usecase.audit import (
    ArchiveAuditLogsUseCase,
    ListAuditLogsUseCase,
)
from hadik.application.usecase.audit.archive_audit_logs import ArchiveAuditLogsRequest
from hadik.application.usecase.audit.list_audit_logs import (
    ListAuditLogsRequest,
    ListAuditLogsResponse,
)
from hadik.domain.service import IdentityStore
from hadik.interface.api.routes.session import require_session

router = APIRouter(prefix="/audit-logs", tags=["audit"], route_class=DishkaRoute)


@router.get("/", response_model=ListAuditLogsResponse)
async def list_audit_logs(
    list_audit_logs_use_case: FromDishka[ListAuditLogsUseCase],
    identity_store: FromDishka[IdentityStore],
    limit: int = Query(default=50, ge=1, le=500),
    authorization: str | None = Header(default=None),
) -> ListAuditLogsResponse:
    """Most recent audit entries, newest first."""
    session = await require_session(identity_store, authorization)
    return await list_audit_logs_use_case.execute(
        ListAuditLogsRequest(actor_id=session.user_id, limit=limit)
    )


@router.post("/archive", response_class=PlainTextResponse)
async def archive_audit_logs(
    archive_use_case: FromDishka[ArchiveAuditLogsUseCase],
    identity_store: FromDishka[IdentityStore],
    authorization: str | None = Header(default=None),
) -> PlainTextResponse:
    """Remove entries past retention and return them as a text attachment."""
    session = await require_session(identity_store, authorization)
    result = await archive_use_case.execute(
        ArchiveAuditLogsRequest(actor_id=session.user_id)
    )
    return PlainTextResponse(
        result.content,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Archived-Count": str(result.archived),
        },
    )
