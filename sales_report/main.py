import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from sales_report.config import settings
from sales_report.engine import build_report
from sales_report.errors import ReportValidationError
from sales_report.models import EntityId, SalesData
from sales_report.policies import DEFAULT_POLICIES
from sales_report.store import DataStore, store

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _seed_store() -> None:
    from scripts.seed_data import seed
    fresh = DataStore()
    seed(fresh, settings.SEED)
    store.replace_with(fresh)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Auto-seed on startup so the service is immediately usable
    if settings.SEED_ON_STARTUP:
        _seed_store()
        logger.info(
            "Seeded %d products, %d sellers, %d purchase records",
            len(store.products), len(store.sellers), len(store.purchase_records),
        )
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="Seller revenue, profit and bonus reporting",
    lifespan=lifespan,
)


def _parse_id(raw: str) -> EntityId:
    return int(raw) if raw.isdecimal() else raw


def _report_or_422(data: SalesData) -> list[dict]:
    try:
        report = build_report(data, DEFAULT_POLICIES)
    except ReportValidationError as exc:
        logger.warning("Report rejected: %s", exc)
        raise HTTPException(422, str(exc))
    return [entry.model_dump() for entry in report]


# ── Sellers ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(_parse_id(seller_id))
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return seller.model_dump()


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/report", summary="Sales report over the stored data")
def get_report():
    return {"report": _report_or_422(store.snapshot())}


@app.get(
    "/api/v1/sellers/{seller_id}/report",
    summary="Report entry for one seller, ranked against the whole roster",
)
def get_seller_report(seller_id: str):
    sid = _parse_id(seller_id)
    if store.get_seller(sid) is None:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    for rank, entry in enumerate(_report_or_422(store.snapshot())):
        if entry["seller_id"] == sid:
            return {"rank": rank, **entry}
    raise HTTPException(404, f"Seller '{seller_id}' not found")


@app.post("/api/v1/report", summary="Sales report over the posted data")
def post_report(data: SalesData):
    return {"report": _report_or_422(data)}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    _seed_store()
    return {
        "status": "seeded",
        "products": len(store.products),
        "sellers": len(store.sellers),
        "purchase_records": len(store.purchase_records),
    }
