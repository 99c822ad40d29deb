import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cubegen import __version__
from cubegen.api.routes import router
from cubegen.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="CubeGen DSL Service",
        version=__version__,
    )

    # Middleware first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes after middleware
    app.include_router(router)
    return app


app = create_app()
