import sys
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from loguru import logger

from .config import Settings, get_settings
from .datasources.github_adapter import GitHubAdapter
from .datasources.trending_parser import SoupTrendingExtractor
from .schemas import EnrichedRepository, TrendingResponse
from .services.assembler import PageAssembler
from .services.llm_client import build_llm_client
from .services.rate_limiter import build_rate_limiter
from .services.translator import Translator

settings = get_settings()

logger.remove()
logger.add(sys.stderr, level=settings.log_level.upper())

app = FastAPI(title="Trending Digest", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


async def get_assembler(settings: Settings = Depends(get_settings)) -> AsyncGenerator[PageAssembler, None]:
    # one set of clients per request, closed when the response is done
    github = GitHubAdapter(settings)
    try:
        yield PageAssembler(
            source=github,
            extractor=SoupTrendingExtractor(),
            translator=Translator(build_llm_client(settings)),
            limiter=build_rate_limiter(settings),
        )
    finally:
        await github.aclose()


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@app.get("/", response_class=HTMLResponse)
async def home(request: Request, assembler: PageAssembler = Depends(get_assembler)):
    repos: List[EnrichedRepository] = await assembler.assemble()
    return templates.TemplateResponse(request, "index.html", {"repos": repos})


@app.get("/api/trending", response_model=TrendingResponse)
async def trending(assembler: PageAssembler = Depends(get_assembler)):
    repos = await assembler.assemble()
    return TrendingResponse(count=len(repos), repos=repos)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
