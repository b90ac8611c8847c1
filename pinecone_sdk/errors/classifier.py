"""Map control-plane responses onto the SDK error hierarchy.

The service reuses 403 and 404 for several unrelated conditions, so those two
statuses are refined by looking for substrings in the response body. Rules are
evaluated in order and the first match wins; the order is significant because
a body can contain more than one of the substrings.
"""

from collections.abc import Sequence

from pinecone_sdk.errors.exceptions import (
    ActionForbiddenError,
    BadRequestError,
    CollectionNotFoundError,
    CollectionsQuotaExceededError,
    IndexNotFoundError,
    InternalServerError,
    InvalidCloudError,
    InvalidRegionError,
    PendingCollectionError,
    PodQuotaExceededError,
    ResourceAlreadyExistsError,
    ResponseError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableEntityError,
)

BodyRule = tuple[str, type[ResponseError]]

FORBIDDEN_RULES: Sequence[BodyRule] = (
    ("Deletion protection", ActionForbiddenError),
    ("index", PodQuotaExceededError),
    ("Collection", CollectionsQuotaExceededError),
)

NOT_FOUND_RULES: Sequence[BodyRule] = (
    ("Index", IndexNotFoundError),
    ("Collection", CollectionNotFoundError),
    ("region", InvalidRegionError),
    ("cloud", InvalidCloudError),
)

# Statuses whose kind is decided by the body; unmatched bodies fall back to
# InternalServerError.
BODY_RULES: dict[int, Sequence[BodyRule]] = {
    403: FORBIDDEN_RULES,
    404: NOT_FOUND_RULES,
}

STATUS_KINDS: dict[int, type[ResponseError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    409: ResourceAlreadyExistsError,
    412: PendingCollectionError,
    422: UnprocessableEntityError,
    500: InternalServerError,
}


def match_body(
    body: str,
    rules: Sequence[BodyRule],
    default: type[ResponseError] = InternalServerError,
) -> type[ResponseError]:
    """Return the kind of the first rule whose substring occurs in ``body``."""
    for needle, kind in rules:
        if needle in body:
            return kind
    return default


def classify(status_code: int, body: str) -> ResponseError:
    """Classify a failed control-plane response.

    Args:
        status_code: HTTP status code of the response.
        body: Raw response body text.

    Returns:
        An (unraised) exception instance describing the failure. Unmapped
        statuses produce ``UnknownResponseError`` carrying status and body.
    """
    rules = BODY_RULES.get(status_code)
    if rules is not None:
        kind = match_body(body, rules)
    else:
        kind = STATUS_KINDS.get(status_code, UnknownResponseError)
    return kind(status_code, body)
