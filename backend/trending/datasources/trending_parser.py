"""GitHub Trending 页面解析。

The markup is not a documented contract, so selection lives behind the
``TrendingExtractor`` protocol and the pipeline never touches BeautifulSoup.
"""

from typing import List

from bs4 import BeautifulSoup
from loguru import logger

from .base import TrendingExtractor

# Repository headings on https://github.com/trending
REPO_HEADING_SELECTOR = "h2.h3.lh-condensed"


class SoupTrendingExtractor(TrendingExtractor):
    def __init__(self, selector: str = REPO_HEADING_SELECTOR):
        self.selector = selector

    def extract(self, html: str) -> List[str]:
        soup = BeautifulSoup(html, "html.parser")
        names: List[str] = []
        for heading in soup.select(self.selector):
            link = heading.find("a")
            href = link.get("href") if link else None
            if not href:
                logger.debug(f"[热榜] 跳过缺少链接的标题: {heading.get_text(strip=True)!r}")
                continue
            href = href.strip()
            if href.startswith("/"):
                href = href[1:]
            names.append(href.strip())
        logger.info(f"[热榜] 解析到 {len(names)} 个仓库")
        return names
