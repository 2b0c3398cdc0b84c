from typing import Set
from landing_cms.domain.exceptions import Conflict

DRAFT = "DRAFT"
STAGING = "STAGING"
PUBLISHED = "PUBLISHED"
PAGE_STATUSES = (DRAFT, STAGING, PUBLISHED)

ENV_STAGING = "staging"
ENV_PRODUCTION = "production"
PUBLISH_ENVIRONMENTS = {
    ENV_STAGING: STAGING,
    ENV_PRODUCTION: PUBLISHED,
}

# Explicit publish transitions. Edits move any status back to DRAFT
# and do not go through this table.
ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    DRAFT: {STAGING, PUBLISHED},
    STAGING: {STAGING, PUBLISHED},  # re-staging issues a new preview token
    PUBLISHED: {PUBLISHED},  # back to DRAFT only via update
}

def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page publish transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise Conflict(
            f"Illegal page transition: {from_status} → {to_status}"
        )
