# fandom_oracle/server.py
"""
Fandom Oracle - Enclave HTTP Server

Endpoints:
  GET  /               liveness ping
  GET  /health_check   enclave public key + upstream reachability
  POST /process_data   {"payload": {"name": "..."}} -> signed MetricRecord envelope

The enclave keypair is generated once when the app is built and never leaves
process memory.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from fandom_oracle.cache import FreshnessCache
from fandom_oracle.config import OracleConfig
from fandom_oracle.errors import OracleError
from fandom_oracle.feeds.myanimelist import MyAnimeListFeed
from fandom_oracle.orchestrator import OracleOrchestrator
from fandom_oracle.signer import IntentSigner

log = logging.getLogger("fandom_oracle")


class AnimeQuery(BaseModel):
    name: str


class ProcessDataRequest(BaseModel):
    payload: AnimeQuery


def create_app(
    config: Optional[OracleConfig] = None,
    fetcher=None,
    signer: Optional[IntentSigner] = None,
    cache: Optional[FreshnessCache] = None,
) -> FastAPI:
    config = config or OracleConfig.from_env()
    fetcher = fetcher or MyAnimeListFeed(
        base_url=config.base_url,
        client_id=config.client_id,
        bearer_token=config.bearer_token,
        timeout=config.timeout_secs,
    )
    signer = signer or IntentSigner()
    cache = cache or FreshnessCache(ttl_secs=config.cache_ttl_secs)
    orchestrator = OracleOrchestrator(cache=cache, fetcher=fetcher, signer=signer)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(f"Fandom oracle starting, upstream {config.base_url}")
        log.info(f"Enclave pubkey: {signer.public_key_hex}")
        log.info(f"Upstream auth: {'client id' if config.client_id else 'bearer' if config.bearer_token else 'none'}")
        yield

    app = FastAPI(
        title="Fandom Oracle",
        description="Enclave oracle - fetch external fandom metrics, return signed intents",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.cache = cache
    app.state.signer = signer
    app.state.orchestrator = orchestrator

    @app.exception_handler(OracleError)
    async def oracle_error_handler(request: Request, exc: OracleError):
        log.warning(f"{request.url.path} failed: {exc.message}")
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.get("/", response_class=PlainTextResponse)
    async def ping():
        return "Pong!"

    @app.get("/health_check")
    async def health_check():
        return {
            "pk": signer.public_key_hex,
            "endpoints_status": {fetcher.upstream_host: await fetcher.is_reachable()},
        }

    @app.post("/process_data")
    async def process_data(request: ProcessDataRequest):
        signed = await orchestrator.process_data(request.payload.name)
        return JSONResponse(signed.to_dict())

    return app


def main():
    config = OracleConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(asctime)s [ORACLE] %(message)s")
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
