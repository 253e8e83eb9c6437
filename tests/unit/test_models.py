"""
Unit tests for model schema details.

Tests cover:
- Case-insensitive uniqueness of usernames and emails
"""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex

from app.models.user import User


def user_index(name: str):
    return next(ix for ix in User.__table__.indexes if ix.name == name)


class TestUserUniqueness:
    """Test unique indexes on users."""

    @pytest.mark.parametrize(
        "name,column",
        [
            ("uq_users_username_lower", "username"),
            ("uq_users_email_lower", "email"),
        ],
    )
    def test_lower_unique_index(self, name, column):
        """Uniqueness is enforced on lower(column), like the lookups."""
        index = user_index(name)
        ddl = str(CreateIndex(index).compile(dialect=postgresql.dialect()))

        assert index.unique
        assert "UNIQUE" in ddl
        assert f"lower({column})" in ddl

    def test_no_case_sensitive_unique(self):
        """No plain unique constraint lets "Alice" and "alice" coexist."""
        for column in ("username", "email"):
            assert not User.__table__.c[column].unique
