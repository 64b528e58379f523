from typing import Optional

from .llm_client import LLMClient

NO_DESCRIPTION = "无描述"
TRANSLATE_ROLE = "你是翻译专家，擅长各种语言翻译"
SUMMARIZE_ROLE = "你是翻译专家，擅长各种语言翻译和总结"


class Translator:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def translate_description(self, description: Optional[str]) -> str:
        return await self.llm.complete(f"{description or NO_DESCRIPTION} 翻译成中文", TRANSLATE_ROLE)

    async def summarize_readme(self, readme: str) -> str:
        return await self.llm.complete(f"{readme} 总结成200字的中文", SUMMARIZE_ROLE)
