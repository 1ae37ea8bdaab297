"""Catalog API routes."""

from fastapi import APIRouter, Depends, Query, Request

from src.core.application.security import (
    get_current_profile_id,
    get_optional_profile_id,
)
from src.core.config import settings
from src.core.interfaces.http.response import ApiResponse, page_meta
from src.modules.catalog.application.commands import DeleteToneModelCommand
from src.modules.catalog.application.dependencies import (
    get_catalog_query_service,
    get_delete_tone_model_handler,
    get_my_models_query_service,
)
from src.modules.catalog.application.handlers import DeleteToneModelHandler
from src.modules.catalog.application.services import (
    CatalogQueryService,
    MyModelsQueryService,
)
from src.modules.catalog.interfaces.schemas import (
    CatalogPageResponse,
    CategoryCountResponse,
    DeleteToneModelRequest,
    MyModelResponse,
)
from src.modules.listing.application.query_codec import decode

router = APIRouter(prefix="/models", tags=["catalog"])
account_router = APIRouter(prefix="/account", tags=["account"])


@router.get(
    "",
    response_model=ApiResponse[CatalogPageResponse],
    summary="模型列表",
    description=(
        "按 page / filter / tags / sortBy / sortDirection / username 查询公开模型。"
        "非法参数会回退为默认值，不会报错。"
    ),
)
async def list_models(
    request: Request,
    page_size: int = Query(
        default=settings.MODELS_PAGE_SIZE,
        alias="pageSize",
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="每页数量",
    ),
    profile_id: str | None = Depends(get_optional_profile_id),
    service: CatalogQueryService = Depends(get_catalog_query_service),
) -> ApiResponse[CatalogPageResponse]:
    """List one page of the public catalog."""
    view_state = decode(request.url.query)
    result = await service.fetch_page(view_state, page_size)

    page = CatalogPageResponse.model_validate(result.model_dump(mode="json"))
    if profile_id is not None:
        for item in page.items:
            item.is_owner = item.profile_id == profile_id
    return ApiResponse.success(
        data=page, meta=page_meta(page.total, page.page, page.page_size)
    )


@router.get(
    "/counts",
    response_model=ApiResponse[list[CategoryCountResponse]],
    summary="分类计数",
    description="每个分类下公开模型的数量，名称为复数 slug（amps、pedals）。",
)
async def model_counts(
    service: CatalogQueryService = Depends(get_catalog_query_service),
) -> ApiResponse[list[CategoryCountResponse]]:
    counts = await service.aggregate_counts()
    return ApiResponse.success(
        data=[CategoryCountResponse(name=c.name, count=c.count) for c in counts]
    )


@router.post(
    "/delete",
    response_model=ApiResponse[None],
    summary="删除模型",
    description="软删除自己的模型。profileId 必须是当前登录用户。",
)
async def delete_model(
    body: DeleteToneModelRequest,
    profile_id: str = Depends(get_current_profile_id),
    handler: DeleteToneModelHandler = Depends(get_delete_tone_model_handler),
) -> ApiResponse[None]:
    await handler.handle(
        DeleteToneModelCommand(
            model_id=body.model_id,
            profile_id=body.profile_id,
            caller_profile_id=profile_id,
        )
    )
    return ApiResponse.success(message="Tone model deleted")


@account_router.get(
    "/my-models",
    response_model=ApiResponse[list[MyModelResponse]],
    summary="我的模型",
    description="当前用户的全部模型（含隐藏和私有），按创建时间倒序。",
)
async def my_models(
    profile_id: str = Depends(get_current_profile_id),
    service: MyModelsQueryService = Depends(get_my_models_query_service),
) -> ApiResponse[list[MyModelResponse]]:
    models = await service.list_for_profile(profile_id)
    return ApiResponse.success(
        data=[MyModelResponse.model_validate(m.model_dump(mode="json")) for m in models]
    )
