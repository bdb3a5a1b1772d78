from __future__ import annotations

from typing import Optional

from mapper.types import Bool, Int16, Int32, Record, Str, Uuid


class Account(Record):
    # Field order matters for decode_queryable: select username before id.
    username: Str
    id: Uuid


class IsAStruct(Record):
    name: Str
    number: Int16
    is_cool: Bool


class Post(Record):
    title: Str
    likes: Int32
    author: Account
    editor: Optional[Account] = None


class AccountSummary(Record):
    username: Str
    # Counted by the engine; never derived client-side.
    post_count: Int32
