from typing import Optional

from loguru import logger
from openai import AsyncOpenAI

from ..config import Settings, get_settings


class LLMClient:
    """Chat-completion wrapper; complete() never raises."""

    def __init__(self, client: Optional[AsyncOpenAI], model: str, temperature: float = 0.3):
        # client may be None when no API key is configured
        self.client = client
        self.model = model
        self.temperature = temperature

    async def complete(self, content: str, system_role: str) -> str:
        if not self.client:
            logger.warning("[LLM] client 未配置 (缺少 MOONSHOT_API_KEY)，返回空结果")
            return ""
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": system_role}, {"role": "user", "content": content}],
                temperature=self.temperature,
            )
            return resp.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"[LLM] 请求失败: {type(e).__name__}: {e}")
            return ""


def build_llm_client(settings: Optional[Settings] = None) -> LLMClient:
    settings = settings or get_settings()
    if not settings.moonshot_api_key:
        return LLMClient(None, settings.moonshot_model, settings.llm_temperature)
    client = AsyncOpenAI(
        api_key=settings.moonshot_api_key,
        base_url=str(settings.moonshot_api_base),
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
    return LLMClient(client, settings.moonshot_model, settings.llm_temperature)
