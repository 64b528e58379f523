import base64
import binascii
from typing import Optional

import httpx
from loguru import logger

from .base import RepoSource
from ..config import Settings, get_settings
from ..schemas import RepoDetail


class GitHubAdapter(RepoSource):
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "Trending-Digest",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        self.timeout = self.settings.github_timeout_seconds
        client_kwargs = {
            "base_url": str(self.settings.github_base_url),
        }
        # http(s):// and socks5:// urls are both accepted by httpx (socks needs httpx[socks])
        if self.settings.github_proxy:
            client_kwargs["proxy"] = self.settings.github_proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**client_kwargs)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_trending_html(self) -> str:
        url = self.settings.github_trending_url
        try:
            # the trending page is plain HTML, not the REST API
            resp = await self.client.get(
                url, headers={"User-Agent": "Mozilla/5.0"}, timeout=self.timeout
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RuntimeError(f"GitHub trending {exc.response.status_code}: {url}") from exc
        except httpx.RequestError as exc:
            raise RuntimeError(f"GitHub trending request error: {type(exc).__name__} {repr(exc)}") from exc
        return resp.text

    async def get_repository(self, full_name: str) -> RepoDetail | None:
        """根据 full_name 获取单个仓库的详细信息，失败返回 None"""
        try:
            resp = await self.client.get(f"/repos/{full_name}", headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(f"[GitHub] 获取仓库详情失败 {full_name}: HTTP {exc.response.status_code}")
            return None
        except httpx.RequestError as exc:
            logger.warning(f"[GitHub] 获取仓库详情请求异常 {full_name}: {type(exc).__name__} {exc}")
            return None

        try:
            item = resp.json()
        except ValueError:
            logger.warning(f"[GitHub] 仓库详情不是合法 JSON: {full_name}")
            return None
        if not isinstance(item, dict):
            logger.warning(f"[GitHub] 仓库详情不是 JSON 对象: {full_name} ({type(item).__name__})")
            return None
        return RepoDetail(
            {
                "full_name": item.get("full_name") or full_name,
                "html_url": item.get("html_url"),
                "description": item.get("description"),
                "language": item.get("language"),
                "stargazers_count": item.get("stargazers_count", 0),
                "forks_count": item.get("forks_count", 0),
            }
        )

    async def get_readme(self, full_name: str) -> str:
        """获取 README 并解码 base64 内容，任何失败都抛出 RuntimeError"""
        try:
            resp = await self.client.get(f"/repos/{full_name}/readme", headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RuntimeError(f"GitHub {exc.response.status_code}: readme of {full_name}") from exc
        except httpx.RequestError as exc:
            raise RuntimeError(f"GitHub request error: {type(exc).__name__} {repr(exc)}") from exc

        try:
            content = resp.json()["content"]
            raw = base64.b64decode(content)
        except (ValueError, KeyError, TypeError, binascii.Error) as exc:
            raise RuntimeError(f"Malformed readme payload for {full_name}: {exc}") from exc
        return raw.decode("utf-8", errors="replace")
