"""
RiceUp — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from riceup import __version__
from riceup.data.store import open_store
from riceup.errors import RiceUpError
from riceup.api.dependencies import set_store, fail
from riceup.api.router_meta import router as meta_router
from riceup.api.router_prices import router as prices_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the price dataset before serving."""
    from riceup.config import DATA_FILE, USE_FALLBACK
    print(f"  DATA_FILE = {DATA_FILE}")
    print(f"  DATA_FILE exists = {DATA_FILE.exists()}")
    print(f"  USE_FALLBACK = {USE_FALLBACK}")

    store = open_store(DATA_FILE, USE_FALLBACK)
    set_store(store)

    if store.row_count() > 0:
        print(f"\nRiceUp ready — {store.row_count():,} records, "
              f"{len(store.types())} types, {len(store.categories())} categories\n")
    else:
        print("\nRiceUp ready — no price data loaded.\n")
    yield


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RiceUpError)
    async def riceup_error(request: Request, exc: RiceUpError):
        return fail(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()) if p != 'body') or 'body'}: {e.get('msg')}"
            for e in errors
        )
        return fail(400, f"Invalid request: {detail}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return fail(exc.status_code, str(exc.detail))


def create_app() -> FastAPI:
    app = FastAPI(
        title="RiceUp API",
        description="Rice market prices and linear-trend price forecasts",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(meta_router)
    app.include_router(prices_router)
    return app


app = create_app()
