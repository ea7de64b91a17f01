"""Authentication endpoints used by the web client."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.core.config import get_settings
from apparel_studio.core.security import create_access_token, get_current_account
from apparel_studio.interfaces.http.deps import get_account_service, get_db_session
from apparel_studio.interfaces.http.errors import to_http_error
from apparel_studio.modules.accounts import (
    ROLE_CUSTOMER,
    Account,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
)
from apparel_studio.schemas import AccountLoginResponse, AccountResponse, LoginRequest, RegisterRequest

router = APIRouter()


def _ws_url(request: Request, token: str) -> str:
    host_header = request.headers.get("host", f"localhost:{get_settings().port}")
    scheme = "ws"
    if request.headers.get("x-forwarded-proto") == "https" or request.url.scheme == "https":
        scheme = "wss"
    return f"{scheme}://{host_header}/ws/web?token={token}"


def _login_response(request: Request, account: Account) -> AccountLoginResponse:
    access_token = create_access_token(account)
    return AccountLoginResponse(
        access_token=access_token,
        account=AccountResponse.model_validate(account),
        ws_url=_ws_url(request, access_token),
    )


@router.post(
    "/register",
    response_model=AccountLoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a customer account",
)
async def register(
    payload: RegisterRequest,
    request: Request,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountLoginResponse:
    try:
        account = await account_service.create_account(
            AccountCreateInput(
                email=payload.email,
                password=payload.password,
                name=payload.name,
                role=ROLE_CUSTOMER,
            )
        )
    except AccountAlreadyExistsError as exc:
        raise to_http_error(exc) from exc
    await db.commit()
    return _login_response(request, account)


@router.post("/login", response_model=AccountLoginResponse, summary="Sign in with e-mail and password")
async def login(
    payload: LoginRequest,
    request: Request,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountLoginResponse:
    account = await account_service.authenticate(payload.email, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    await account_service.set_last_login(account.id)
    await db.commit()
    return _login_response(request, account)


@router.get("/me", response_model=AccountResponse, summary="Current account profile")
async def current_account(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)
