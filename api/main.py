import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from budgets import router as budgets_router
from categories import router as categories_router
from core.db import Database
from core.errors import install_exception_handlers
from transactions import router as transactions_router
from users import repository as users_repository
from users import router as users_router

API_PREFIX = "/api/v1"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One storage handle per process, shared by every request.
    database = Database.from_env()
    await database.connect()
    await users_repository.ensure_indexes(database)
    app.state.database = database
    try:
        yield
    finally:
        await database.close()


app = FastAPI(title="Finance Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(auth_router.router, prefix=API_PREFIX, tags=["auth"])
app.include_router(auth_router.oauth_router, tags=["oauth"])
app.include_router(users_router.router, prefix=API_PREFIX, tags=["users"])
app.include_router(categories_router.router, prefix=API_PREFIX, tags=["categories"])
app.include_router(transactions_router.router, prefix=API_PREFIX, tags=["transactions"])
app.include_router(budgets_router.router, prefix=API_PREFIX, tags=["budgets"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "finance tracker api"}
