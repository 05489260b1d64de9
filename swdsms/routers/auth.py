from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from swdsms.services.account_service import AccountService
from swdsms.services.errors import AccountExistsError, InvalidCredentialsError, ValidationError

router = APIRouter(prefix="/api", tags=["auth"])


class SignupPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    username: Optional[str] = None
    email: Optional[str] = None
    account_type: Optional[str] = Field(default=None, alias="accountType")
    password: Optional[str] = None


class LoginPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password: Optional[str] = None
    account_type: Optional[str] = Field(default=None, alias="accountType")


def _get_account_service(request: Request) -> AccountService:
    svc = getattr(getattr(request.app, "state", None), "account_service", None)
    if not svc:
        raise RuntimeError("AccountService not configured")
    return svc


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/signup")
def signup(payload: SignupPayload, request: Request):
    svc = _get_account_service(request)
    try:
        user = svc.signup(payload.full_name, payload.username, payload.email, payload.account_type, payload.password)
    except ValidationError as exc:
        return _error(exc.message, 400)
    except AccountExistsError as exc:
        return _error(exc.message, 409)
    return {"success": True, "user": user.summary()}


@router.post("/login")
def login(payload: LoginPayload, request: Request):
    svc = _get_account_service(request)
    try:
        user = svc.login(payload.username, payload.password, payload.account_type)
    except ValidationError as exc:
        return _error(exc.message, 400)
    except InvalidCredentialsError as exc:
        return _error(exc.message, 401)
    return {"success": True, "user": user.summary()}


@router.get("/users")
def list_users(request: Request):
    svc = _get_account_service(request)
    return [user.public() for user in svc.list_users()]
