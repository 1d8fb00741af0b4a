"""
SQL pretty-printing for format_sql

Layout only: the statement is tokenized (never parsed), keywords are
upper-cased and clauses start on their own line. Operators, function names,
literals, quoting and comments come out exactly as written, so the query
means the same thing on whatever engine it was written for.

Tokenizes as MySQL, whatever engine the server is connected to.
"""

import re
from typing import Optional

import sqlglot
from sqlglot.tokens import Token, TokenType

FORMAT_DIALECT = "mysql"

INDENT = "  "

_COMMENT_RE = re.compile(r"--[^\n]*|#[^\n]*|/\*.*?\*/", re.DOTALL)

# Keywords that open a new line
CLAUSE_KEYWORDS = frozenset({
    "SELECT", "FROM", "WHERE", "GROUP BY", "ORDER BY", "HAVING", "LIMIT", "OFFSET",
    "UNION", "INTERSECT", "EXCEPT", "VALUES", "SET", "RETURNING", "JOIN",
})

JOIN_MODIFIERS = frozenset({"LEFT", "RIGHT", "INNER", "FULL", "OUTER", "CROSS", "NATURAL", "STRAIGHT_JOIN"})

SPACED_OPERATORS = frozenset({"=", "<>", "!=", "<", ">", "<=", ">=", "<=>", "||", "&&"})


def _keywords() -> frozenset:
    return frozenset(sqlglot.Dialect.get_or_raise(FORMAT_DIALECT).tokenizer_class.KEYWORDS)


class _Layout:
    """Accumulates output text and tracks line starts and paren depth."""

    def __init__(self):
        self.parts: list[str] = []
        self.depth = 0
        self.at_line_start = True
        self.statement_break = False

    def newline(self):
        if self.at_line_start:
            return
        self.parts.append("\n" + INDENT * self.depth)
        self.at_line_start = True

    def write(self, text: str, space: bool):
        if self.statement_break:
            self.parts.append(";\n\n")
            self.statement_break = False
            self.at_line_start = True
        elif space and not self.at_line_start:
            self.parts.append(" ")
        self.parts.append(text)
        self.at_line_start = False

    def comments(self, gap: str):
        for comment in _COMMENT_RE.findall(gap):
            self.write(comment, space=True)
            if not comment.startswith("/*"):
                self.newline()

    def text(self) -> str:
        if self.statement_break:
            self.parts.append(";")
        lines = "".join(self.parts).split("\n")
        return "\n".join(line.rstrip() for line in lines).strip()


def format_sql(sql: str) -> str:
    """
    Pretty-print one or more SQL statements.

    Raises:
        sqlglot.errors.TokenError: if the SQL cannot be tokenized
            (for example an unterminated string literal)
    """
    keywords = _keywords()
    tokens: list[Token] = sqlglot.tokenize(sql, read=FORMAT_DIALECT)

    def keyword_of(token: Optional[Token]) -> Optional[str]:
        if token is None:
            return None
        word = " ".join(sql[token.start:token.end + 1].split())
        upper = word.upper()
        return upper if word[:1].isalpha() and upper in keywords else None

    layout = _Layout()
    names = [keyword_of(t) for t in tokens]
    prev_end = -1
    prev_text: Optional[str] = None
    statement_start = True

    for i, token in enumerate(tokens):
        gap = sql[prev_end + 1:token.start]
        layout.comments(gap)
        prev_end = token.end

        if token.token_type == TokenType.SEMICOLON:
            layout.statement_break = True
            layout.depth = 0
            statement_start = True
            prev_text = None
            continue

        keyword = names[i]
        previous = names[i - 1] if i > 0 else None
        following = names[i + 1] if i + 1 < len(tokens) else None
        text = keyword or sql[token.start:token.end + 1]

        if text == ")":
            layout.depth = max(layout.depth - 1, 0)

        breaks = False
        if not statement_start:
            if keyword in CLAUSE_KEYWORDS:
                breaks = not (
                    (keyword == "FROM" and previous == "DELETE")
                    or (keyword == "JOIN" and previous in JOIN_MODIFIERS)
                )
            elif keyword in JOIN_MODIFIERS:
                breaks = previous not in JOIN_MODIFIERS and following in JOIN_MODIFIERS | {"JOIN"}
        if breaks:
            layout.newline()

        if text in (",", ")"):
            space = False
        elif prev_text == "," or text in SPACED_OPERATORS or prev_text in SPACED_OPERATORS:
            space = True
        elif prev_text == "(":
            space = False
        else:
            space = gap != ""

        layout.write(text, space)

        if text == "(":
            layout.depth += 1
        prev_text = text
        statement_start = False

    layout.comments(sql[prev_end + 1:])
    return layout.text()
