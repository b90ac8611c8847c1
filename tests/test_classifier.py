"""Tests for control-plane error classification."""

import pytest

from pinecone_sdk.errors import (
    ActionForbiddenError,
    BadRequestError,
    CollectionNotFoundError,
    CollectionsQuotaExceededError,
    ForbiddenError,
    IndexNotFoundError,
    InternalServerError,
    InvalidCloudError,
    InvalidRegionError,
    NotFoundError,
    PendingCollectionError,
    PodQuotaExceededError,
    ResourceAlreadyExistsError,
    ResponseError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableEntityError,
    classify,
)
from pinecone_sdk.errors.classifier import NOT_FOUND_RULES, match_body


class TestClassifyByStatus:
    """Tests for statuses that map to a single kind."""

    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (409, ResourceAlreadyExistsError),
            (412, PendingCollectionError),
            (422, UnprocessableEntityError),
            (500, InternalServerError),
        ],
    )
    def test_status_maps_to_kind(self, status, kind):
        """Each mapped status should produce exactly its kind."""
        error = classify(status, "irrelevant body")

        assert type(error) is kind
        assert error.status_code == status

    def test_unmapped_status_is_unknown_response(self):
        """Unmapped statuses should carry the raw status and body."""
        error = classify(418, "I'm a teapot")

        assert type(error) is UnknownResponseError
        assert error.status_code == 418
        assert error.body == "I'm a teapot"
        assert str(error) == "status: 418 content: I'm a teapot"

    def test_conflict_is_a_conflict_error(self):
        """409 should be matchable as both ResourceAlreadyExists and Conflict."""
        from pinecone_sdk.errors import ConflictError

        assert isinstance(classify(409, ""), ConflictError)


class TestClassifyForbidden:
    """Tests for 403 body refinement."""

    @pytest.mark.parametrize(
        ("body", "kind"),
        [
            ("Deletion protection is enabled for this index", ActionForbiddenError),
            ("Request exceeds the project's index quota", PodQuotaExceededError),
            ("Collection quota reached", CollectionsQuotaExceededError),
            ("nothing recognisable", InternalServerError),
        ],
    )
    def test_body_selects_kind(self, body, kind):
        """The body substring should decide the kind."""
        assert type(classify(403, body)) is kind

    def test_deletion_protection_wins_over_index(self):
        """'Deletion protection' is checked before 'index'."""
        error = classify(403, "Deletion protection is enabled for index foo")

        assert type(error) is ActionForbiddenError
        assert isinstance(error, ForbiddenError)

    def test_index_wins_over_collection(self):
        """'index' is checked before 'Collection'."""
        error = classify(403, "Collection cannot be created from this index")

        assert type(error) is PodQuotaExceededError


class TestClassifyNotFound:
    """Tests for 404 body refinement."""

    @pytest.mark.parametrize(
        ("body", "kind"),
        [
            ("Index foo not found", IndexNotFoundError),
            ("Collection bar not found", CollectionNotFoundError),
            ("Unknown region eu-north-9", InvalidRegionError),
            ("Unknown cloud azure2", InvalidCloudError),
            ("Not found", InternalServerError),
        ],
    )
    def test_body_selects_kind(self, body, kind):
        """The body substring should decide the kind."""
        assert type(classify(404, body)) is kind

    def test_first_matching_rule_wins(self):
        """A body naming both Index and region is an index error."""
        error = classify(404, "Index foo not found in region us-east-1")

        assert type(error) is IndexNotFoundError
        assert isinstance(error, NotFoundError)

    def test_matching_is_case_sensitive(self):
        """Lowercase 'index' is not a 404 refinement."""
        assert type(classify(404, "index missing")) is InternalServerError


class TestMatchBody:
    """Tests for the rule evaluator."""

    def test_returns_default_when_no_rule_matches(self):
        """Unmatched bodies should fall back to the given default."""
        assert match_body("x", NOT_FOUND_RULES, default=NotFoundError) is NotFoundError

    def test_empty_rules_return_default(self):
        """No rules means the default kind."""
        assert match_body("Index", ()) is InternalServerError


class TestResponseErrorMessage:
    """Tests for message extraction from response bodies."""

    def test_json_error_message_is_extracted(self):
        """error.message of a JSON body should become the message."""
        body = '{"error": {"code": "NOT_FOUND", "message": "Index foo not found"}, "status": 404}'

        error = classify(404, body)

        assert error.message == "Index foo not found"
        assert error.body == body

    def test_raw_body_is_kept_when_not_json(self):
        """Non-JSON bodies should be used verbatim."""
        error = classify(500, "upstream exploded")

        assert error.message == "upstream exploded"

    def test_json_without_message_keeps_raw_body(self):
        """JSON bodies without a message field should be used verbatim."""
        error = classify(400, '["unexpected"]')

        assert error.message == '["unexpected"]'

    def test_all_kinds_are_response_errors(self):
        """Every classified error should be raisable and catchable."""
        with pytest.raises(ResponseError):
            raise classify(401, "bad key")
