"""Backend endpoint table and path templating."""

from collections.abc import Mapping
import re
from urllib.parse import quote

API_ENDPOINTS: Mapping[str, str] = {
    # Auth & User
    "CREATE_USER": "/users",
    "GET_USER": "/users/:id",
    "UPDATE_USER": "/users/:id",
    # Regions
    "GET_REGIONS": "/regions",
    "GET_REGION_BY_NAME": "/regions/search",
    # Examples (policy cases)
    "GET_EXAMPLES": "/examples",
    "GET_EXAMPLE_BY_ID": "/examples/:id",
    "CREATE_EXAMPLE": "/examples",
    "UPDATE_EXAMPLE": "/examples/:id",
    "DELETE_EXAMPLE": "/examples/:id",
    "LIKE_EXAMPLE": "/examples/:id/like",
    "BOOKMARK_EXAMPLE": "/examples/:id/bookmark",
    "GET_EXAMPLE_COMMENTS": "/examples/:id/comments",
    "CREATE_EXAMPLE_COMMENT": "/examples/:id/comments",
    # Proposals
    "GET_PROPOSALS": "/proposals",
    "GET_PROPOSAL_BY_ID": "/proposals/:id",
    "CREATE_PROPOSAL": "/proposals",
    "LIKE_PROPOSAL": "/proposals/:id/like",
    "BOOKMARK_PROPOSAL": "/proposals/:id/bookmark",
    "GET_PROPOSAL_COMMENTS": "/proposals/:id/comments",
    "CREATE_PROPOSAL_COMMENT": "/proposals/:id/comments",
    # Drafting helpers
    "CREATE_GUIDELINE": "/guidelines",
    "REVISE_PROPOSAL": "/helper",
    "AUTOFILL": "/autofill",
    # Tags
    "GET_TAGS": "/tags",
    "GET_TAGS_BY_CATEGORY": "/tags/:category",
}

_PLACEHOLDER = re.compile(r":(\w+)")


def build_endpoint(template: str, params: Mapping[str, str | int]) -> str:
    """Replace ``:name`` placeholders in ``template`` with quoted values.

    Placeholder names match whole words only. Placeholders without a
    matching parameter are left in place.
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in params:
            return match.group(0)
        return quote(str(params[name]), safe="")

    return _PLACEHOLDER.sub(_substitute, template)
