# storefront/tasks/low_stock.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.inventory_repo import InventoryRepo
from storefront.utils.settings import LOW_STOCK_THRESHOLD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.low_stock.report_low_stock_task")
def report_low_stock_task(threshold: int | None = None):
    threshold = LOW_STOCK_THRESHOLD if threshold is None else threshold
    logger.info(f"Low stock report started, threshold {threshold}")

    db = SessionLocal()
    try:
        records = InventoryRepo(db).list_low_stock(threshold)

        for r in records:
            logger.warning(
                f"Low stock: store {r.store_id}, product {r.product_id}, "
                f"{r.quantity} left at {r.location or 'unknown location'}"
            )

        logger.info(f"Low stock report finished, {len(records)} record(s)")
        return [
            {"store_id": r.store_id, "product_id": r.product_id, "quantity": r.quantity}
            for r in records
        ]
    finally:
        db.close()
