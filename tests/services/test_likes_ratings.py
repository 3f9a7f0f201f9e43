# tests/services/test_likes_ratings.py
"""Tests for per-user uniqueness of likes and ratings."""

import pytest
from sqlalchemy import func, select

from social_api.core.errors import AuthenticationError, BadUserInputError, NotFoundError
from social_api.models import Like, Rating
from social_api.repositories import LikeRepository, RatingRepository
from social_api.services import like_service, rating_service
from tests.conftest import caller_for


def _count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


def _miss_first_lookup(monkeypatch, repository):
    """Make the next ``find`` call report no row, as a concurrent request would see it."""
    original = repository.find
    calls = {"n": 0}

    def find(self, user_id, post_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return original(self, user_id, post_id)

    monkeypatch.setattr(repository, "find", find)


class TestLikes:
    def test_like_is_idempotent(self, db_session, test_user, test_post):
        caller = caller_for(test_user)
        first = like_service.like_post(db_session, test_post.id, caller)
        second = like_service.like_post(db_session, test_post.id, caller)

        assert first.id == second.id
        assert _count(db_session, Like) == 1

    def test_concurrent_duplicate_returns_existing_like(
        self, db_session, test_user, test_post, monkeypatch
    ):
        caller = caller_for(test_user)
        winner = like_service.like_post(db_session, test_post.id, caller)
        _miss_first_lookup(monkeypatch, LikeRepository)

        result = like_service.like_post(db_session, test_post.id, caller)

        assert result.id == winner.id
        assert _count(db_session, Like) == 1

    def test_like_missing_post(self, db_session, test_user):
        with pytest.raises(NotFoundError):
            like_service.like_post(db_session, "missing", caller_for(test_user))

    def test_anonymous_cannot_like(self, db_session, test_post):
        with pytest.raises(AuthenticationError):
            like_service.like_post(db_session, test_post.id, None)
        assert _count(db_session, Like) == 0

    def test_unlike(self, db_session, test_user, test_post):
        caller = caller_for(test_user)
        like_service.like_post(db_session, test_post.id, caller)

        assert like_service.unlike_post(db_session, test_post.id, caller) is True
        assert _count(db_session, Like) == 0

    def test_unlike_without_like(self, db_session, test_user, test_post):
        with pytest.raises(NotFoundError) as excinfo:
            like_service.unlike_post(db_session, test_post.id, caller_for(test_user))
        assert excinfo.value.message == "Like not found"


class TestRatings:
    def test_rerating_overwrites(self, db_session, test_user, test_post):
        caller = caller_for(test_user)
        first = rating_service.rate_post(db_session, test_post.id, 2, caller)
        second = rating_service.rate_post(db_session, test_post.id, 5, caller)

        assert first.id == second.id
        assert second.value == 5
        assert _count(db_session, Rating) == 1
        assert rating_service.average_rating(db_session, test_post.id) == 5.0

    def test_concurrent_duplicate_falls_back_to_update(
        self, db_session, test_user, test_post, monkeypatch
    ):
        caller = caller_for(test_user)
        rating_service.rate_post(db_session, test_post.id, 1, caller)
        _miss_first_lookup(monkeypatch, RatingRepository)

        result = rating_service.rate_post(db_session, test_post.id, 3, caller)

        assert result.value == 3
        assert _count(db_session, Rating) == 1

    @pytest.mark.parametrize("value", [0, 6, -1, 100])
    def test_out_of_range(self, db_session, test_user, test_post, value):
        with pytest.raises(BadUserInputError) as excinfo:
            rating_service.rate_post(db_session, test_post.id, value, caller_for(test_user))
        assert excinfo.value.message == "Rating must be between 1 and 5"
        assert _count(db_session, Rating) == 0

    def test_range_checked_before_post_lookup(self, db_session, test_user):
        with pytest.raises(BadUserInputError):
            rating_service.rate_post(db_session, "missing", 9, caller_for(test_user))

    def test_rate_missing_post(self, db_session, test_user):
        with pytest.raises(NotFoundError):
            rating_service.rate_post(db_session, "missing", 3, caller_for(test_user))

    def test_average_of_no_ratings_is_none(self, db_session, test_post):
        assert rating_service.average_rating(db_session, test_post.id) is None

    def test_average(self, db_session, test_user, other_user, test_post):
        rating_service.rate_post(db_session, test_post.id, 1, caller_for(test_user))
        rating_service.rate_post(db_session, test_post.id, 4, caller_for(other_user))
        assert rating_service.average_rating(db_session, test_post.id) == pytest.approx(2.5)
