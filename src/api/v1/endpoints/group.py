from fastapi import APIRouter, Depends

from core.di import get_group_service, get_current_caller, get_consistency_service
from core.security import Authenticated
from domains.consistency.service import ConsistencyService
from domains.group.exceptions import (
    GroupForbiddenException,
    GroupNotFoundException,
    InvalidGroupNameException,
)
from domains.group.schemas import (
    DeleteGroupResponse,
    GroupListResponse,
    GroupRequest,
    GroupResponse,
)
from domains.group.service import GroupService
from util.docs import create_error_response

router = APIRouter()


@router.post(
    "",
    status_code=201,
    summary="그룹 생성 API",
    response_model=GroupResponse,
    responses=create_error_response(InvalidGroupNameException),
)
async def create_group(
    request: GroupRequest,
    caller: Authenticated = Depends(get_current_caller),
    service: GroupService = Depends(get_group_service),
):
    return await service.create_group(request, caller)


@router.get(
    "",
    status_code=200,
    summary="내 그룹 목록 조회 API",
    response_model=list[GroupListResponse],
)
async def get_groups(
    caller: Authenticated = Depends(get_current_caller),
    service: GroupService = Depends(get_group_service),
):
    return await service.get_groups(caller)


@router.put(
    "/{group_id}",
    status_code=200,
    summary="그룹 이름 변경 API",
    response_model=GroupResponse,
    responses=create_error_response(
        GroupNotFoundException, GroupForbiddenException, InvalidGroupNameException
    ),
)
async def rename_group(
    group_id: int,
    request: GroupRequest,
    caller: Authenticated = Depends(get_current_caller),
    service: GroupService = Depends(get_group_service),
):
    return await service.rename_group(group_id, request, caller)


@router.delete(
    "/{group_id}",
    status_code=200,
    summary="그룹 삭제 API (연결된 레시피까지 삭제)",
    response_model=DeleteGroupResponse,
    responses=create_error_response(GroupNotFoundException, GroupForbiddenException),
)
async def delete_group(
    group_id: int,
    caller: Authenticated = Depends(get_current_caller),
    service: ConsistencyService = Depends(get_consistency_service),
):
    """
    그룹에 연결된 레시피는 다른 그룹에도 속해 있더라도 함께 삭제된다.
    """
    return await service.delete_group(group_id, caller)
