# main.py
import logging

import uvicorn

from fintrack.utils.config import DATABASE_URL, HOST, LOG_LEVEL, PORT, SEED_DEMO
from fintrack.models import SessionLocal, init_db
from fintrack.seed_db import seed_demo
from fintrack.web_app import app

# Import handler modules (they register via decorators)
import fintrack.handlers.fallback_handler
import fintrack.handlers.category_handler
import fintrack.handlers.transaction_handler
import fintrack.handlers.report_handler
import fintrack.handlers.goal_handler

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Initialize database
    init_db(DATABASE_URL)

    if SEED_DEMO:
        session = SessionLocal()
        try:
            seed_demo(session)
        finally:
            session.close()

    logger.info("Finance tracker running on %s:%s", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
