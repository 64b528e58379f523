from typing import List

from loguru import logger

from .rate_limiter import RateLimiter
from .translator import Translator
from ..datasources.base import RepoSource, TrendingExtractor
from ..schemas import EnrichedRepository


class PageAssembler:
    """抓取热榜 → 仓库详情 → 翻译描述 → 总结 README，严格串行"""

    def __init__(
        self,
        source: RepoSource,
        extractor: TrendingExtractor,
        translator: Translator,
        limiter: RateLimiter,
    ):
        self.source = source
        self.extractor = extractor
        self.translator = translator
        self.limiter = limiter

    async def assemble(self) -> List[EnrichedRepository]:
        try:
            html = await self.source.fetch_trending_html()
        except Exception as e:
            logger.error(f"[热榜] 获取 trending 页面失败: {type(e).__name__}: {e}")
            return []

        names = self.extractor.extract(html)
        repos: List[EnrichedRepository] = []
        for name in names:
            try:
                item = await self._enrich(name)
            except Exception:
                logger.exception(f"[热榜] 处理仓库异常，跳过: {name}")
                continue
            if item is not None:
                repos.append(item)

        logger.info(f"[热榜] 完成，共 {len(repos)}/{len(names)} 个仓库")
        return repos

    async def _enrich(self, name: str) -> EnrichedRepository | None:
        logger.info(f"[热榜] 处理仓库: {name}")
        detail = await self.source.get_repository(name)
        if not detail:
            logger.warning(f"[热榜] 无法获取仓库详情，跳过: {name}")
            return None

        desc = await self.translator.translate_description(detail.get("description"))

        # API 速率限制
        await self.limiter.wait()

        try:
            readme = await self.source.get_readme(name)
            summary = await self.translator.summarize_readme(readme)
        except Exception as e:
            logger.warning(f"[热榜] README 总结失败 {name}: {type(e).__name__}: {e}")
            summary = ""

        # API 速率限制
        await self.limiter.wait()

        return EnrichedRepository(name=name, desc=desc, summary=summary)
