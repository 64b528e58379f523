"""Test doubles and page builders shared by the test modules."""

from typing import Dict, List, Optional

from trending.schemas import RepoDetail


def make_trending_html(hrefs: List[str]) -> str:
    """Build a minimal page shaped like https://github.com/trending."""
    rows = "\n".join(
        f"""
        <article class="Box-row">
            <h2 class="h3 lh-condensed">
                <a href="{href}" data-view-component="true" class="Link">
                    <span class="text-normal">owner /</span> repo
                </a>
            </h2>
            <p class="col-9 color-fg-muted my-1 pr-4">Some description</p>
        </article>
        """
        for href in hrefs
    )
    return f"<html><body><main>{rows}</main></body></html>"


class FakeSource:
    """In-memory RepoSource."""

    def __init__(
        self,
        html: str = "",
        details: Optional[Dict[str, Optional[RepoDetail]]] = None,
        readmes: Optional[Dict[str, str]] = None,
    ):
        self.html = html
        self.details = details or {}
        self.readmes = readmes or {}
        self.calls: List[str] = []

    async def fetch_trending_html(self) -> str:
        self.calls.append("trending")
        return self.html

    async def get_repository(self, full_name: str) -> Optional[RepoDetail]:
        self.calls.append(f"detail:{full_name}")
        return self.details.get(full_name)

    async def get_readme(self, full_name: str) -> str:
        self.calls.append(f"readme:{full_name}")
        if full_name not in self.readmes:
            raise RuntimeError(f"GitHub 404: readme of {full_name}")
        return self.readmes[full_name]


class FakeClock:
    """Monotonic clock advanced only by its own sleep()."""

    def __init__(self):
        self.now = 1000.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
