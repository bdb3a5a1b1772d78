from fastapi import APIRouter, HTTPException

from adapters.base import QueryEngine, QueryExecutionError
from adapters.factory import get_engine
from api.schemas import AccountCreateRequest, AccountListResponse, AccountSummaryResponse
from mapper.errors import DecodeError
from tutorial import SCHEMA_PATH
from tutorial.accounts import account_summary, create_account, get_account, list_accounts
from tutorial.records import Account
from utils.env_loader import load_environments

router = APIRouter()


def _engine() -> QueryEngine:
    load_environments()
    engine = get_engine()
    engine.apply_schema(SCHEMA_PATH)
    return engine


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, QueryExecutionError):
        status = 409 if exc.kind == "constraint_violation" else 503
        return HTTPException(status_code=status, detail={"kind": exc.kind, "message": str(exc)})
    return HTTPException(status_code=500, detail={"kind": type(exc).__name__, "message": str(exc)})


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/accounts", response_model=AccountListResponse)
def accounts_list() -> AccountListResponse:
    try:
        accounts = list_accounts(_engine())
    except (QueryExecutionError, DecodeError) as exc:
        raise _http_error(exc) from exc
    return AccountListResponse(accounts=accounts, count=len(accounts))


@router.post("/accounts", response_model=Account)
def accounts_create(request: AccountCreateRequest) -> Account:
    try:
        return create_account(_engine(), request.username)
    except (QueryExecutionError, DecodeError) as exc:
        raise _http_error(exc) from exc


@router.get("/accounts/{username}", response_model=Account)
def accounts_get(username: str) -> Account:
    try:
        account = get_account(_engine(), username)
    except (QueryExecutionError, DecodeError) as exc:
        raise _http_error(exc) from exc
    if account is None:
        raise HTTPException(status_code=404, detail=f"Account not found: {username}")
    return account


@router.get("/accounts/{username}/summary", response_model=AccountSummaryResponse)
def accounts_summary(username: str) -> AccountSummaryResponse:
    try:
        summary = account_summary(_engine(), username)
    except (QueryExecutionError, DecodeError) as exc:
        raise _http_error(exc) from exc
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Account not found: {username}")
    return AccountSummaryResponse(username=summary.username, post_count=summary.post_count)
