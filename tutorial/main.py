"""Run the tutorial's fixed sequence of queries and print what comes back.

Each step shows one way of getting a typed value out of the engine: a bare
scalar, a generic object, raw json, json decoded into a record, and an
object decoded straight into a record.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Optional, Sequence
from uuid import UUID, uuid4

from adapters.base import QueryEngine, QueryExecutionError
from adapters.factory import get_engine
from mapper.decode import decode_json, decode_object, decode_queryable, decode_scalar, decode_typed
from mapper.errors import DecodeError, SchemaMismatch
from mapper.results import Object
from tutorial import SCHEMA_PATH, queries
from tutorial.accounts import account_summary, create_account, create_post, posts_by, random_username
from tutorial.records import Account, IsAStruct
from utils.env_loader import load_environments

logger = logging.getLogger(__name__)


def run_tutorial(engine: QueryEngine) -> None:
    engine.apply_schema(SCHEMA_PATH)

    # A plain string.
    query_res = decode_scalar(engine.query_required_single(queries.STRING_QUERY), str)
    print(f"Query result: `{query_res}`\n")

    # Two values at once come back as a generic object.
    pair = engine.query_required_single(queries.PAIR_QUERY)
    print(f"String and num query res: {pair}\n")

    # Arguments are bound positionally.
    with_args = engine.query_required_single(queries.ARGS_QUERY, ("Hi there", 10))
    print(f"Result of query with arguments: {with_args}\n")

    # Insert an account and fetch only its id.
    username = random_username()
    engine.execute(queries.INSERT_ACCOUNT, (uuid4(), username))
    account_id = decode_scalar(engine.query_required_single(queries.SELECT_ACCOUNT_ID, (username,)), UUID)
    print(f"Only returned one field, a Uuid: {account_id}\n")

    # Select a shape: the object carries both the field names and the values.
    username = random_username()
    engine.execute(queries.INSERT_ACCOUNT, (uuid4(), username))
    shaped = engine.query_required_single(queries.SELECT_ACCOUNT, (username,))
    if isinstance(shaped, Object):
        for field in shaped.fields:
            print(f"Got a field: {field.name}={field.value!r}")
        print()

    # The same shape as json.
    username = random_username()
    engine.execute(queries.INSERT_ACCOUNT, (uuid4(), username))
    json_res = decode_json(engine.query_single_json(queries.SELECT_ACCOUNT, (username,)))
    print(f"Json res is pretty easy: {json_res}\n")

    as_value = json.loads(json_res)
    print(f"Username is {as_value['username']},\nId is {as_value['id']}.\n")

    as_account = decode_typed(json_res, Account)
    print(f"Deserialized: {as_account!r}\n")

    # No json needed: decode the object directly, fields in declared order.
    username = random_username()
    engine.execute(queries.INSERT_ACCOUNT, (uuid4(), username))
    queryable = decode_queryable(engine.query_required_single(queries.SELECT_ACCOUNT, (username,)), Account)
    print(f"As Account, no need for intermediate json: {queryable!r}\n")

    # Swapping the field order breaks the ordered decode.
    try:
        decode_queryable(engine.query_required_single(queries.SELECT_ACCOUNT_ID_FIRST, (username,)), Account)
    except SchemaMismatch as exc:
        print(f"Cannot make into Account: {exc}\n")

    # Typed scalars: a 16-bit integer and a boolean.
    sample_name = f"sample_{username}"
    engine.execute(queries.INSERT_SAMPLE, (sample_name, 7, True))
    sample = decode_object(engine.query_required_single(queries.SELECT_SAMPLE, (sample_name,)), IsAStruct)
    print(f"Sample struct: {sample!r}\n")

    # Links decode into nested records; an empty link is None.
    author = create_account(engine, random_username())
    editor = create_account(engine, random_username())
    create_post(engine, "First post", author, likes=3)
    create_post(engine, "Second post", author, likes=5, editor=editor)
    for post in posts_by(engine, author.username):
        editor_name = post.editor.username if post.editor else None
        print(f"Post {post.title!r} by {post.author.username}, likes={post.likes}, editor={editor_name}")
    print()

    # The count is computed by the engine.
    summary = account_summary(engine, author.username)
    print(f"Account summary: {summary!r}\n")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the typed query tutorial.")
    parser.add_argument("--db-engine", default=None, help="sqlite or postgres (defaults to DB_ENGINE).")
    parser.add_argument("--env-file", default=".env", help="Optional .env file with connection settings.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    load_environments(args.env_file)
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        engine = get_engine(db_engine=args.db_engine)
        run_tutorial(engine)
    except (QueryExecutionError, DecodeError, ValueError) as exc:
        logger.error(f"Tutorial stopped: {exc}")
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
