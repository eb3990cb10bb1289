"""Data models for webmentions, credentials and pull requests (Pydantic)."""

from pydantic import BaseModel, Field

DEFAULT_BASE_BRANCH = "main"


class WebmentionRequest(BaseModel):
    """Source/target pair received from a webmention sender."""

    source: str
    target: str


class Credential(BaseModel):
    """GitHub bearer token read from the credential file."""

    token: str = Field(min_length=1, repr=False)


class PullRequestDraft(BaseModel):
    """Pull request to open for one webmention."""

    title: str
    body: str
    head_branch: str
    base_branch: str = DEFAULT_BASE_BRANCH


class PullRequestResult(BaseModel):
    """Created pull request as reported by the API."""

    number: int
    html_url: str


class Response(BaseModel):
    """HTTP response produced by the router."""

    status: int
    body: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
