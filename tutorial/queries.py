STRING_QUERY = "SELECT 'This is a query fetching a string'"

PAIR_QUERY = "SELECT 'Hi' AS greeting, 9.8 AS number"

ARGS_QUERY = "SELECT $0 AS text, $1 AS number"

INSERT_ACCOUNT = "INSERT INTO account (id, username) VALUES ($0, $1)"

SELECT_ACCOUNT_ID = "SELECT id FROM account WHERE username = $0"

SELECT_ACCOUNT = "SELECT username, id FROM account WHERE username = $0"

# Same shape with the fields swapped; does not line up with Account.
SELECT_ACCOUNT_ID_FIRST = "SELECT id, username FROM account WHERE username = $0"

LIST_ACCOUNTS = "SELECT username, id FROM account ORDER BY username"

ACCOUNT_SUMMARY = """
SELECT
    a.username,
    (SELECT COUNT(*) FROM post p WHERE p.author_id = a.id) AS post_count
FROM account a
WHERE a.username = $0
"""

INSERT_POST = "INSERT INTO post (id, title, likes, author_id, editor_id) VALUES ($0, $1, $2, $3, $4)"

POSTS_BY_AUTHOR = """
SELECT
    p.title,
    p.likes,
    a.username AS "author.username",
    a.id AS "author.id",
    e.username AS "editor.username",
    e.id AS "editor.id"
FROM post p
JOIN account a ON a.id = p.author_id
LEFT JOIN account e ON e.id = p.editor_id
WHERE a.username = $0
ORDER BY p.title
"""

INSERT_SAMPLE = "INSERT INTO sample (name, number, is_cool) VALUES ($0, $1, $2)"

SELECT_SAMPLE = "SELECT name, number, is_cool FROM sample WHERE name = $0"
