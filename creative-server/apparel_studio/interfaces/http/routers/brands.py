"""Brand profile endpoints for customers."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.core.security import get_current_account, get_current_customer
from apparel_studio.interfaces.http.deps import get_brand_service, get_db_session
from apparel_studio.interfaces.http.errors import to_http_error
from apparel_studio.interfaces.ws.manager import manager
from apparel_studio.modules.accounts import Account
from apparel_studio.modules.brands import BrandCreateInput, BrandError, BrandService, BrandUpdateInput
from apparel_studio.schemas import BrandCreate, BrandListResponse, BrandResponse, BrandUpdate, ChangeEvent

router = APIRouter()


@router.get("/", response_model=BrandListResponse, summary="List the caller's brands")
async def list_brands(
    account: Account = Depends(get_current_customer),
    service: BrandService = Depends(get_brand_service),
):
    brands = await service.list_brands(customer_id=account.id)
    return BrandListResponse(
        total=len(brands),
        brands=[BrandResponse.model_validate(brand) for brand in brands],
    )


@router.post("/", response_model=BrandResponse, status_code=status.HTTP_201_CREATED, summary="Create a brand")
async def create_brand(
    payload: BrandCreate,
    account: Account = Depends(get_current_customer),
    service: BrandService = Depends(get_brand_service),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        brand = await service.create_brand(BrandCreateInput(customer_id=account.id, **payload.model_dump()))
    except BrandError as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await manager.publish_change(ChangeEvent(table="brands", event="INSERT", id=brand.id), brand.customer_id)
    return BrandResponse.model_validate(brand)


@router.get("/{brand_id}", response_model=BrandResponse, summary="Brand details")
async def get_brand(
    brand_id: str,
    account: Account = Depends(get_current_account),
    service: BrandService = Depends(get_brand_service),
):
    try:
        brand = await service.get_visible_brand(brand_id, account)
    except BrandError as exc:
        raise to_http_error(exc) from exc
    return BrandResponse.model_validate(brand)


@router.patch("/{brand_id}", response_model=BrandResponse, summary="Update a brand")
async def update_brand(
    brand_id: str,
    payload: BrandUpdate,
    account: Account = Depends(get_current_customer),
    service: BrandService = Depends(get_brand_service),
    db: AsyncSession = Depends(get_db_session),
):
    changes = payload.model_dump(exclude_unset=True)
    try:
        brand = await service.update_brand(brand_id, account, BrandUpdateInput(**changes))
    except BrandError as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await manager.publish_change(ChangeEvent(table="brands", event="UPDATE", id=brand.id), brand.customer_id)
    return BrandResponse.model_validate(brand)
