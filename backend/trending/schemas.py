from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field


class RepoDetail(dict):
    """Lightweight mapping to hold repository metadata from the REST API."""

    full_name: str
    html_url: str
    description: Optional[str]
    language: Optional[str]
    stargazers_count: int
    forks_count: int


class EnrichedRepository(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str  # owner/name
    desc: str = ""
    summary: str = ""

    @computed_field
    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.name}"


class TrendingResponse(BaseModel):
    count: int
    repos: List[EnrichedRepository]
