import pathlib

from app.config import (
    Config,
    ConfigApp,
    ConfigDatabase,
    ConfigGateway,
    ConfigUvicorn,
    ConfigStats,
    LogLevel,
)

RESOURCES_PATH = pathlib.Path(__file__).parent.parent / "resources" / "xxllnc_to_ktb.json"


def get_test_config() -> Config:
    return Config(
        app=ConfigApp(
            loglevel=LogLevel.error,
        ),
        database=ConfigDatabase(
            dsn="sqlite:///:memory:",
            create_tables=True,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=False,
            pool_recycle=1,
        ),
        uvicorn=ConfigUvicorn(
            swagger_enabled=False,
            docs_url="/docs",
            redoc_url="/redoc",
            host="0.0.0.0",
            port=8510,
            reload=True,
            use_ssl=False,
            ssl_base_dir=None,
            ssl_cert_file=None,
            ssl_key_file=None,
        ),
        gateway=ConfigGateway(
            resources_path=str(RESOURCES_PATH),
            plugin_name="common-gateway/xxllnc-to-ktb-bundle",
            notification_event="zaaksysteem.notification.task",
        ),
        stats=ConfigStats(
            enabled=True, host=None, port=None, module_name="xxllnc_to_ktb"
        ),
    )
