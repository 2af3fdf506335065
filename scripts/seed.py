import sys

from sqlmodel import Session

from videoshare.core.config import Settings
from videoshare.core.logging_config import configure_logging
from videoshare.db.session import build_engine, init_db
from videoshare.db.seed import seed_all, DEFAULT_SEED_PATH


def run_seed(seed_path: str = str(DEFAULT_SEED_PATH)) -> None:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings)
    init_db(engine)
    with Session(engine) as session:
        seed_all(session, seed_path)
    engine.dispose()


if __name__ == "__main__":
    run_seed(*sys.argv[1:2])
