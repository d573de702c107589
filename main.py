import logging

import dotenv
import uvicorn

from mirror_gateway import create_app
from mirror_gateway.config import Config

dotenv.load_dotenv()

config = Config()

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = create_app(config)


if __name__ == "__main__":
    logger.info(f"Starting mirror gateway on {config.HOST}:{config.PORT}")
    logger.info(f"Configuration: {config}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
