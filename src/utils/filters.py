"""Predicate builder for list endpoints.

Optional query inputs are turned into SQLAlchemy predicate fragments and
folded with AND. Inputs that are absent or empty contribute nothing, so a
request with no filters yields an always-true predicate.
"""

from typing import List

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

LIKE_ESCAPE_CHAR = "\\"


def escape_like(value: str, escape_char: str = LIKE_ESCAPE_CHAR) -> str:
    """Escape LIKE wildcards so user input only matches literally.

    Args:
        value: Raw user input.
        escape_char: Escape character passed to the ``ESCAPE`` clause.

    Returns:
        Input with the escape character, ``%`` and ``_`` escaped.
    """
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", escape_char + "%")
        .replace("_", escape_char + "_")
    )


def _is_absent(value) -> bool:
    return value is None or (isinstance(value, str) and value == "")


class FilterBuilder:
    """Accumulates predicate fragments for one list query.

    Example:
        where = (
            FilterBuilder()
            .search(search, UserModel.name, UserModel.email)
            .equals(UserModel.role, role)
            .build()
        )
    """

    def __init__(self):
        self._conditions: List[ColumnElement] = []

    def search(self, value, *columns) -> "FilterBuilder":
        """Case-insensitive substring match of ``value`` against any column."""
        if _is_absent(value):
            return self
        pattern = f"%{escape_like(str(value))}%"
        matches = [
            column.ilike(pattern, escape=LIKE_ESCAPE_CHAR) for column in columns
        ]
        self._conditions.append(matches[0] if len(matches) == 1 else or_(*matches))
        return self

    def contains(self, column, value) -> "FilterBuilder":
        """Case-insensitive substring match against a single column."""
        return self.search(value, column)

    def equals(self, column, value) -> "FilterBuilder":
        """Exact match, used for enums and ids."""
        if _is_absent(value):
            return self
        self._conditions.append(column == value)
        return self

    def __len__(self) -> int:
        return len(self._conditions)

    def build(self) -> ColumnElement:
        """Fold the fragments with AND.

        Returns:
            The conjunction, or ``true()`` when no fragment was added.
        """
        if not self._conditions:
            return true()
        if len(self._conditions) == 1:
            return self._conditions[0]
        return and_(*self._conditions)
