from typing import List, Optional, Protocol

from ..schemas import RepoDetail


class TrendingExtractor(Protocol):
    """Turns the trending page HTML into ordered "owner/name" identifiers."""

    def extract(self, html: str) -> List[str]:
        ...


class RepoSource(Protocol):
    async def fetch_trending_html(self) -> str:
        ...

    async def get_repository(self, full_name: str) -> Optional[RepoDetail]:
        ...

    async def get_readme(self, full_name: str) -> str:
        ...
