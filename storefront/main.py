# storefront/main.py
import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api.errors import install_error_handlers
from storefront.api.middleware import access_log_middleware, auth_middleware
from storefront.api.routers import auth, carts, categories, health, orders, products, users
from storefront.data.seed import seed as seed_store
from storefront.repos.auth_store import AuthStore
from storefront.repos.memory_store import MemoryStore
from storefront.repos.session_repo import build_session_repo
from storefront.tasks.expire import run_session_sweeper
from storefront.utils.logging import get_logger
from storefront.utils.settings import HOST, PORT, SEED_DATA, SESSION_SWEEP_SECONDS

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = None
    if SESSION_SWEEP_SECONDS > 0:
        sweeper = asyncio.create_task(run_session_sweeper(app.state.auth_store, SESSION_SWEEP_SECONDS))
        logger.info(f"Session sweeper running every {SESSION_SWEEP_SECONDS}s")

    yield

    if sweeper is not None:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


def create_app(
    store: MemoryStore | None = None,
    auth_store: AuthStore | None = None,
    seed: bool | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.store = store if store is not None else MemoryStore()
    app.state.auth_store = auth_store if auth_store is not None else AuthStore(sessions=build_session_repo())

    if SEED_DATA if seed is None else seed:
        seed_store(app.state.store)

    install_error_handlers(app)

    # last added runs first: access log wraps the auth check
    app.middleware("http")(auth_middleware)
    app.middleware("http")(access_log_middleware)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
