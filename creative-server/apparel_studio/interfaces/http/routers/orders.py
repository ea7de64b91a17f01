"""Order endpoints shared by customers and administrators."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.core.security import get_current_account, get_current_customer
from apparel_studio.interfaces.http.deps import get_asset_bundler, get_db_session, get_order_service
from apparel_studio.interfaces.http.errors import DOMAIN_ERRORS, to_http_error
from apparel_studio.interfaces.http.responses import ResponseArchiveDelivery
from apparel_studio.interfaces.ws.manager import manager
from apparel_studio.modules.accounts import Account
from apparel_studio.modules.bundles import AssetBundler, BundleError
from apparel_studio.modules.orders import AttachmentInput, Order, OrderCreateInput, OrderService, OrderStatus
from apparel_studio.schemas import (
    AttachmentBatchCreate,
    ChangeEvent,
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    RevisionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_schema(order: Order) -> OrderResponse:
    return OrderResponse.model_validate(order)


async def _publish(order: Order, event: str, table: str = "orders") -> None:
    await manager.publish_change(ChangeEvent(table=table, event=event, id=order.id), order.customer_id)


@router.get("/", response_model=OrderListResponse, summary="List visible orders")
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    account: Account = Depends(get_current_account),
    service: OrderService = Depends(get_order_service),
):
    orders = await service.list_for(account, status=status_filter)
    return OrderListResponse(total=len(orders), orders=[_to_schema(order) for order in orders])


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place an order")
async def create_order(
    payload: OrderCreate,
    account: Account = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service),
    db: AsyncSession = Depends(get_db_session),
):
    fields = payload.model_dump(exclude={"attachments"})
    attachments = [AttachmentInput(**item.model_dump()) for item in payload.attachments]
    try:
        order = await service.create_order(
            OrderCreateInput(customer_id=account.id, attachments=attachments, **fields)
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await _publish(order, "INSERT")
    return _to_schema(order)


@router.get("/{order_id}", response_model=OrderResponse, summary="Order details")
async def get_order(
    order_id: str,
    account: Account = Depends(get_current_account),
    service: OrderService = Depends(get_order_service),
):
    try:
        order = await service.get_visible_order(order_id, account)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    return _to_schema(order)


@router.post("/{order_id}/attachments", response_model=OrderResponse, summary="Attach brief files")
async def add_attachments(
    order_id: str,
    payload: AttachmentBatchCreate,
    account: Account = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service),
    db: AsyncSession = Depends(get_db_session),
):
    attachments = [AttachmentInput(**item.model_dump()) for item in payload.attachments]
    try:
        order = await service.add_brief_attachments(order_id, account, attachments)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await _publish(order, "INSERT", table="attachments")
    return _to_schema(order)


@router.post("/{order_id}/revision", response_model=OrderResponse, summary="Request revisions")
async def request_revision(
    order_id: str,
    payload: RevisionRequest,
    account: Account = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        order = await service.request_revision(order_id, account, payload.notes)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await _publish(order, "UPDATE")
    return _to_schema(order)


@router.post("/{order_id}/complete", response_model=OrderResponse, summary="Accept the delivered work")
async def complete_order(
    order_id: str,
    account: Account = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        order = await service.mark_completed(order_id, account)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    await _publish(order, "UPDATE")
    return _to_schema(order)


@router.get(
    "/{order_id}/bundle",
    response_class=Response,
    responses={200: {"content": {"application/zip": {}}}},
    summary="Download every asset of the order as one zip",
)
async def download_bundle(
    order_id: str,
    account: Account = Depends(get_current_account),
    service: OrderService = Depends(get_order_service),
    bundler: AssetBundler = Depends(get_asset_bundler),
):
    try:
        order, brand = await service.load_bundle_context(order_id, account)
    except DOMAIN_ERRORS as exc:
        raise to_http_error(exc) from exc

    try:
        return await bundler.bundle(order, brand, ResponseArchiveDelivery())
    except BundleError as exc:
        logger.error("Bundle for order %s failed: %s", order_id, exc)
        raise to_http_error(exc) from exc
