from __future__ import annotations

import random
import string
from typing import List, Optional
from uuid import uuid4

from adapters.base import QueryEngine
from mapper.decode import decode_object
from tutorial import queries
from tutorial.records import Account, AccountSummary, Post


def random_username() -> str:
    # Usernames are exclusive, so every run needs a fresh one.
    suffix = "".join(random.choices(string.ascii_letters + string.digits, k=5))
    return f"User_{suffix}"


def create_account(engine: QueryEngine, username: str) -> Account:
    engine.execute(queries.INSERT_ACCOUNT, (uuid4(), username))
    return decode_object(engine.query_required_single(queries.SELECT_ACCOUNT, (username,)), Account)


def get_account(engine: QueryEngine, username: str) -> Optional[Account]:
    result = engine.query_single(queries.SELECT_ACCOUNT, (username,))
    return decode_object(result, Account) if result is not None else None


def list_accounts(engine: QueryEngine) -> List[Account]:
    return [decode_object(result, Account) for result in engine.query(queries.LIST_ACCOUNTS)]


def account_summary(engine: QueryEngine, username: str) -> Optional[AccountSummary]:
    result = engine.query_single(queries.ACCOUNT_SUMMARY, (username,))
    return decode_object(result, AccountSummary) if result is not None else None


def create_post(
    engine: QueryEngine,
    title: str,
    author: Account,
    likes: int = 0,
    editor: Optional[Account] = None,
) -> None:
    editor_id = editor.id if editor is not None else None
    engine.execute(queries.INSERT_POST, (uuid4(), title, likes, author.id, editor_id))


def posts_by(engine: QueryEngine, username: str) -> List[Post]:
    return [decode_object(result, Post) for result in engine.query(queries.POSTS_BY_AUTHOR, (username,))]
