"""Back-office endpoints restricted to administrators."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.core.security import get_current_admin
from apparel_studio.interfaces.http.deps import (
    get_account_service,
    get_brand_service,
    get_db_session,
    get_order_service,
)
from apparel_studio.interfaces.http.errors import DOMAIN_ERRORS, to_http_error
from apparel_studio.interfaces.ws.manager import manager
from apparel_studio.modules.accounts import ROLE_CUSTOMER, Account, AccountService
from apparel_studio.modules.brands import BrandService
from apparel_studio.modules.orders import (
    ATTACHMENT_RESULT,
    AttachmentInput,
    OrderAdminUpdate,
    OrderService,
)
from apparel_studio.schemas import (
    AccountResponse,
    AdminOrderUpdate,
    BrandListResponse,
    BrandResponse,
    ChangeEvent,
    OrderResponse,
)

router = APIRouter()


@router.get("/customers", response_model=list[AccountResponse], summary="List customer accounts")
async def list_customers(
    _: Account = Depends(get_current_admin),
    service: AccountService = Depends(get_account_service),
):
    accounts = await service.list_accounts(role=ROLE_CUSTOMER)
    return [AccountResponse.model_validate(account) for account in accounts]


@router.get("/brands", response_model=BrandListResponse, summary="List every brand")
async def list_all_brands(
    customer: Optional[str] = None,
    _: Account = Depends(get_current_admin),
    service: BrandService = Depends(get_brand_service),
):
    brands = await service.list_brands(customer_id=customer)
    return BrandListResponse(
        total=len(brands),
        brands=[BrandResponse.model_validate(brand) for brand in brands],
    )


@router.patch("/orders/{order_id}", response_model=OrderResponse, summary="Update status, notes and results")
async def update_order(
    order_id: str,
    payload: AdminOrderUpdate,
    _: Account = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
    db: AsyncSession = Depends(get_db_session),
):
    update = OrderAdminUpdate(
        status=payload.status,
        admin_notes=payload.admin_notes,
        results=[
            AttachmentInput(url=item.url, name=item.name, type=ATTACHMENT_RESULT)
            for item in payload.results
        ],
    )
    try:
        order = await service.admin_update(order_id, update)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await manager.publish_change(ChangeEvent(table="orders", event="UPDATE", id=order.id), order.customer_id)
    if update.results:
        await manager.publish_change(
            ChangeEvent(table="attachments", event="INSERT", id=order.id),
            order.customer_id,
        )
    return OrderResponse.model_validate(order)
