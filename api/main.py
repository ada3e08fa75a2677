from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import db, errors, log, settings
from posts import router as posts_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.configure_logging()
    # Refuse to start without DATABASE_URL and JWT_SECRET.
    settings.require_startup_settings()
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


def create_app() -> FastAPI:
    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.install_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(posts_router.router, tags=["posts"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"success": True, "message": "Welcome to the API"}

    return app


app = create_app()
