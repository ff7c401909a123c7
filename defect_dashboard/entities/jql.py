"""JQL building blocks.

Queries are built as immutable :class:`JqlQuery` values: every clause added
returns a new query, status literals are always escaped, free-form user
fragments are always parenthesized and trusted clauses (fixed time windows)
are appended verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union
from urllib.parse import quote

from defect_dashboard.entities.constants import PROJECT_KEY, TypeFilter
from defect_dashboard.utils import fallbacks
from defect_dashboard.utils.exceptions import InvalidInputError
from defect_dashboard.utils.fallbacks import FallbackMonitor

_ORDER_BY = re.compile(r"\border\s+by\b", re.IGNORECASE)
_TOP_LEVEL_OR = re.compile(r"\bor\b|\|\|", re.IGNORECASE)


def escape_literal(value: str) -> str:
    """Quote ``value`` as a JQL string literal."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def normalize_type_filter(
    type_filter: Union[TypeFilter, str, None],
    monitor: Optional[FallbackMonitor] = None,
) -> TypeFilter:
    """Map a raw filter value to :class:`TypeFilter`; unknown values become ``Bug``."""
    if isinstance(type_filter, TypeFilter):
        return type_filter
    try:
        return TypeFilter(type_filter)
    except ValueError:
        (monitor or fallbacks.FALLBACK_MONITOR).record(
            fallbacks.TYPE_FILTER,
            "unrecognized type filter, using Bug",
            type_filter=type_filter,
        )
        return TypeFilter.BUG


def type_clause(
    type_filter: Union[TypeFilter, str, None],
    monitor: Optional[FallbackMonitor] = None,
) -> str:
    """Build the issue type clause; unknown filters fall back to ``Bug``."""
    resolved = normalize_type_filter(type_filter, monitor)
    if resolved is TypeFilter.ALL:
        return "type IN (Bug, Task)"
    return f"type = {resolved.value}"


@dataclass(frozen=True, slots=True)
class JqlQuery:
    """A project scoped query: ``project = "<key>"`` ANDed with its clauses."""

    project_key: str
    clauses: Tuple[str, ...] = ()

    def where(self, clause: str) -> JqlQuery:
        """AND a trusted clause verbatim."""
        clause = clause.strip()
        if not clause:
            return self
        return JqlQuery(self.project_key, self.clauses + (clause,))

    def where_status(self, status: str) -> JqlQuery:
        return self.where(f"status = {escape_literal(status)}")

    def where_user(self, fragment: str) -> JqlQuery:
        """AND a free-form fragment, wrapped in parentheses."""
        fragment = fragment.strip()
        if not fragment:
            return self
        return self.where(f"({fragment})")

    def render(self) -> str:
        return " AND ".join((f"project = {escape_literal(self.project_key)}",) + self.clauses)

    def __str__(self) -> str:
        return self.render()


def base_jql(
    type_filter: Union[TypeFilter, str, None],
    status: Optional[str] = None,
    project_key: str = PROJECT_KEY,
    monitor: Optional[FallbackMonitor] = None,
) -> JqlQuery:
    query = JqlQuery(project_key).where(type_clause(type_filter, monitor))
    if status:
        query = query.where_status(status)
    return query


def with_extra_clauses(
    base: JqlQuery,
    clauses: Iterable[Optional[str]] = (),
    user_clauses: Iterable[Optional[str]] = (),
) -> JqlQuery:
    """AND trusted ``clauses`` verbatim, then each of ``user_clauses`` parenthesized."""
    query = base
    for clause in clauses:
        if clause:
            query = query.where(clause)
    for clause in user_clauses:
        if clause:
            query = query.where_user(clause)
    return query


def jira_search_url(base_url: str, jql: Union[JqlQuery, str]) -> str:
    """Deep link into Jira's own issue search for ``jql``."""
    encoded = quote(str(jql), safe="-_.!~*'()")
    return f"{base_url.rstrip('/')}/issues/?jql={encoded}"


def validate_raw_fragment(fragment: str, allow_top_level_or: bool = True) -> str:
    """Reject fragments that could escape the parentheses they are wrapped in.

    Args:
        fragment: Caller supplied JQL.
        allow_top_level_or: False for fragments ANDed without parentheses;
            an ``OR`` outside parentheses and string literals is then rejected.

    Raises:
        InvalidInputError: On unbalanced parentheses, an unterminated string
            literal, an ``ORDER BY`` clause or a rejected top-level ``OR``.
    """
    fragment = fragment.strip()
    depth = 0
    quote_char = None
    escaped = False
    top_level = []
    for char in fragment:
        if quote_char:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote_char:
                quote_char = None
            top_level.append(" ")
            continue
        if char in ('"', "'"):
            quote_char = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                break
        top_level.append(char if depth == 0 and char not in "()" else " ")
    if quote_char or depth != 0:
        raise InvalidInputError(f"Unbalanced JQL fragment: {fragment}")
    if _ORDER_BY.search(fragment):
        raise InvalidInputError(f"ORDER BY is not allowed in a JQL fragment: {fragment}")
    if not allow_top_level_or and _TOP_LEVEL_OR.search("".join(top_level)):
        raise InvalidInputError(f"OR must be parenthesized in this JQL fragment: {fragment}")
    return fragment
