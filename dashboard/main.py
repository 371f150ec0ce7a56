import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard.api import admin, messages, orders, products, users
from dashboard.core.config import APP_NAME, LOG_LEVEL
from dashboard.core.errors import DashboardError, FormValidationError
from dashboard.services.sessions import SessionRegistry

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME)
app.state.sessions = SessionRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
app.include_router(messages.router, prefix="/api/messages", tags=["messages"])


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    body = {"alert": exc.message}
    if isinstance(exc, FormValidationError):
        body["fields"] = exc.fields
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/")
def root():
    return {"status": "ok", "app": APP_NAME}
