import logging
import argparse

from core.config_loader import load_config
from database.init_db import init_db
from web.backend.app import create_app
from web.backend.dependencies import DatabaseManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="TalentLink API server")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--host", default=None, help="Override web.host")
    parser.add_argument("--port", type=int, default=None, help="Override web.port")
    parser.add_argument("--init-db-only", action="store_true", help="Create tables and exit")
    return parser.parse_args()


def main():
    import uvicorn

    args = parse_args()
    config = load_config(args.config)

    db_manager = DatabaseManager(config.database)
    init_db(db_manager.engine)
    if args.init_db_only:
        logger.info("Database initialized; exiting")
        return

    app = create_app(config, db_manager)

    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info(f"Starting TalentLink API on {host}:{port}")
    logger.info(f"API Docs: http://{host}:{port}/docs")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
