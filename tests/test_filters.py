"""Tests for the predicate builder."""

import pytest
from sqlalchemy.sql.elements import True_

from models.user import UserModel
from utils.filters import FilterBuilder, escape_like


@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("plain", "plain"),
        ("100%", "100\\%"),
        ("a_b", "a\\_b"),
        ("back\\slash", "back\\\\slash"),
        ("%_", "\\%\\_"),
    ],
)
def test_escape_like(raw, escaped):
    assert escape_like(raw) == escaped


class TestFilterBuilder:
    """Predicate accumulation without a database."""

    def test_empty_builder_is_always_true(self):
        builder = FilterBuilder()
        assert len(builder) == 0
        assert isinstance(builder.build(), True_)

    def test_absent_and_empty_inputs_are_ignored(self):
        builder = (
            FilterBuilder()
            .search(None, UserModel.name)
            .search("", UserModel.name, UserModel.email)
            .contains(UserModel.name, "")
            .equals(UserModel.role, None)
            .equals(UserModel.role, "")
        )
        assert len(builder) == 0
        assert isinstance(builder.build(), True_)

    def test_each_input_adds_one_fragment(self):
        builder = (
            FilterBuilder()
            .search("ada", UserModel.name, UserModel.email)
            .equals(UserModel.role, "teacher")
        )
        assert len(builder) == 2

    def test_search_ors_columns(self):
        clause = FilterBuilder().search("ada", UserModel.name, UserModel.email).build()
        sql = str(clause.compile(compile_kwargs={"literal_binds": True}))
        assert " OR " in sql
        assert "%ada%" in sql


class TestFilterBuilderQueries:
    """Predicates evaluated against a real database."""

    def _names(self, db, where):
        return sorted(u.name for u in db.query(UserModel).filter(where).all())

    def test_search_is_case_insensitive_substring(self, db, factory):
        factory.user(name="Ada Lovelace", email="ada@example.edu")
        factory.user(name="Alan Turing", email="alan@example.edu")
        factory.user(name="Grace Hopper", email="grace@navy.mil")

        where = FilterBuilder().search("LOVE", UserModel.name, UserModel.email).build()
        assert self._names(db, where) == ["Ada Lovelace"]

        where = FilterBuilder().search("example", UserModel.name, UserModel.email).build()
        assert self._names(db, where) == ["Ada Lovelace", "Alan Turing"]

    def test_conditions_are_anded(self, db, factory):
        factory.user(name="Ada Student", role="student")
        factory.user(name="Ada Teacher", role="teacher")

        where = (
            FilterBuilder()
            .search("ada", UserModel.name)
            .equals(UserModel.role, "teacher")
            .build()
        )
        assert self._names(db, where) == ["Ada Teacher"]

    def test_wildcards_in_input_match_literally(self, db, factory):
        factory.user(name="100% Attendance")
        factory.user(name="1000 Points")
        factory.user(name="snake_case")
        factory.user(name="snakeXcase")

        assert self._names(db, FilterBuilder().search("100%", UserModel.name).build()) == [
            "100% Attendance"
        ]
        assert self._names(db, FilterBuilder().search("_", UserModel.name).build()) == [
            "snake_case"
        ]
        assert self._names(db, FilterBuilder().search("%", UserModel.name).build()) == [
            "100% Attendance"
        ]
