import argparse
import logging
import random

from sqlalchemy.orm import Session

from shared.core.database import Base, SessionLocal, engine
from .app import models  # noqa: F401
from .app.enum.property_enum import PROPERTY_SIZES
from .app.services.property_manager_service import PropertyManagerService

logger = logging.getLogger(__name__)


def seed_data(count: int, unit_price: str, seed: int | None = None):
    """Initial property spawn: price every size and create unlisted units."""
    Base.metadata.create_all(bind=engine)

    rng = random.Random(seed)
    db: Session = SessionLocal()
    try:
        service = PropertyManagerService(db)
        service.set_price(unit_price)
        capacities = [rng.choice(PROPERTY_SIZES) for _ in range(count)]
        spawned = service.spawn_properties(capacities)
        logger.info("Seeded %s properties at unit price %s",
                    len(spawned), unit_price)
        return spawned
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the property database")
    parser.add_argument("--count", type=int, default=100)
    parser.add_argument("--price", default="1500.00")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    seed_data(args.count, args.price, args.seed)
