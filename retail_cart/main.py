import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retail_cart.config import settings
from retail_cart.routes import cart, checkout, health


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Cart engine starting, upstream {settings.api_root}")
    yield

app = FastAPI(title="Retail Cart Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(checkout.router, prefix="/checkout", tags=["Checkout"])
app.include_router(health.router, prefix="/health", tags=["Health"])

@app.get("/")
def root():
    return {
        "cart": [
            "/cart", "/cart/refresh", "/cart/sync", "/cart/items/{id}",
            "/cart/items/bulk-delete", "/cart/summary"
        ],
        "checkout": [
            "/checkout/preview", "/checkout/submit"
        ],
    }
