"""
Unit tests for response/access policies, error helpers and the commit helper.
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from api.errors import (
    AggregationError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    parse_uuid,
)
from api.policies import ensure_owner, require_results
from db.session import commit_or_raise


class TestRequireResults:

    def test_empty_list_is_not_found_by_default(self):
        with pytest.raises(NotFoundError) as exc_info:
            require_results([], "Videos are not found")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Videos are not found"

    def test_non_empty_list_passes_through(self):
        items = [1, 2]
        assert require_results(items, "unused") is items

    def test_policy_can_be_disabled_per_call(self):
        assert require_results([], "unused", enabled=False) == []

    def test_policy_follows_config_flag(self):
        with patch("api.policies.config.flags.empty_result_not_found", False):
            assert require_results([], "unused") == []


class TestEnsureOwner:

    def test_owner_allowed(self):
        owner = uuid.uuid4()
        ensure_owner(owner, owner, "nope")

    def test_non_owner_forbidden(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owner(uuid.uuid4(), uuid.uuid4(), "You can only delete your own tweets")

        assert exc_info.value.status_code == 403
        assert "own tweets" in exc_info.value.message


class TestErrors:

    def test_parse_uuid_valid(self):
        value = uuid.uuid4()
        assert parse_uuid(str(value), "video") == value

    @pytest.mark.parametrize("raw", ["", "abc", "12345", "not-a-uuid-at-all"])
    def test_parse_uuid_invalid(self, raw):
        with pytest.raises(BadRequestError, match="Invalid video ID"):
            parse_uuid(raw, "video")

    def test_default_messages(self):
        assert NotFoundError().message == "Resource not found"
        assert AggregationError().status_code == 500

    def test_aggregation_error_is_persistence_error(self):
        assert issubclass(AggregationError, PersistenceError)


class TestCommitOrRaise:

    def test_successful_commit(self):
        session = MagicMock()

        commit_or_raise(session, "creating a tweet")

        session.commit.assert_called_once()
        session.rollback.assert_not_called()

    def test_failed_commit_rolls_back_and_raises(self):
        session = MagicMock()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("down"))

        with pytest.raises(PersistenceError) as exc_info:
            commit_or_raise(session, "creating a tweet")

        session.rollback.assert_called_once()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Something went wrong while creating a tweet"
