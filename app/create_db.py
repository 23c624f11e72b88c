import logging

from app import application, container

logger = logging.getLogger(__name__)


def main() -> None:
    application.application_init()
    logger.info("Creating synchronization and object tables")
    container.get_database().generate_tables()


if __name__ == "__main__":
    main()
