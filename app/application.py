import logging

from typing import Any

from fastapi import FastAPI
import uvicorn

from app.container import get_database, setup_container
from app.routers.default import router as default_router
from app.routers.health import router as health_router
from app.routers.notification_router import router as notification_router
from app.routers.object_router import router as object_router
from app.routers.synchronization_router import router as synchronization_router
from app.config import get_config
from app.stats import StatsdMiddleware, setup_stats


def get_uvicorn_params() -> dict[str, Any]:
    config = get_config()
    kwargs = {
        "host": config.uvicorn.host,
        "port": config.uvicorn.port,
        "reload": config.uvicorn.reload,
        "reload_delay": config.uvicorn.reload_delay,
        "reload_dirs": config.uvicorn.reload_dirs,
    }
    if (
        config.uvicorn.use_ssl
        and config.uvicorn.ssl_base_dir is not None
        and config.uvicorn.ssl_cert_file is not None
        and config.uvicorn.ssl_key_file is not None
    ):
        kwargs["ssl_keyfile"] = (
            config.uvicorn.ssl_base_dir + "/" + config.uvicorn.ssl_key_file
        )
        kwargs["ssl_certfile"] = (
            config.uvicorn.ssl_base_dir + "/" + config.uvicorn.ssl_cert_file
        )

    return kwargs


def run() -> None:
    uvicorn.run("app.application:create_fastapi_app", factory=True, **get_uvicorn_params())


def create_fastapi_app() -> FastAPI:
    setup_stats(get_config().stats)

    application_init()
    return setup_fastapi()


def application_init() -> None:
    config = get_config()
    setup_logging()
    setup_container()
    if config.database.create_tables:
        get_database().generate_tables()


def setup_logging() -> None:
    loglevel = logging.getLevelName(get_config().app.loglevel.value.upper())

    if isinstance(loglevel, str):
        raise ValueError(f"Invalid loglevel {loglevel.upper()}")
    logging.basicConfig(
        level=loglevel,
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )


def setup_fastapi() -> FastAPI:
    config = get_config()

    fastapi = (
        FastAPI(docs_url=config.uvicorn.docs_url, redoc_url=config.uvicorn.redoc_url)
        if config.uvicorn.swagger_enabled
        else FastAPI(docs_url=None, redoc_url=None)
    )

    routers = [
        default_router,
        health_router,
        notification_router,
        object_router,
        synchronization_router,
    ]
    for router in routers:
        fastapi.include_router(router)

    stats_conf = config.stats
    if stats_conf.enabled:
        fastapi.add_middleware(StatsdMiddleware, module_name=stats_conf.module_name or "default")

    return fastapi
