# bigbasket/main.py
import uvicorn

from bigbasket.api import create_app
from bigbasket.data.database import Base, engine
from bigbasket.data.seed import seed
from bigbasket.utils.logging import configure_logging, get_logger
from bigbasket.utils.settings import SEED_CATALOG

# import modeli przed create_all, zeby byly w Base.metadata
import bigbasket.data.models  # noqa: F401

configure_logging()
logger = get_logger(__name__)

logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise

if SEED_CATALOG:
    seed()


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
