from typing import List

from pydantic import BaseModel, Field

from tutorial.records import Account


class AccountCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=120)


class AccountListResponse(BaseModel):
    accounts: List[Account]
    count: int


class AccountSummaryResponse(BaseModel):
    username: str
    post_count: int
