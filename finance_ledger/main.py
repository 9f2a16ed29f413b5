import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finance_ledger.api import accounts, auth, budgets, categories, dashboard, goals, reconciliation, transactions
from finance_ledger.core.config import CORS_ORIGINS, LOG_LEVEL
from finance_ledger.database import create_db_and_tables

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Finance Ledger", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(transactions.router)
app.include_router(budgets.router)
app.include_router(goals.router)
app.include_router(categories.router)
app.include_router(dashboard.router)
app.include_router(reconciliation.router)


@app.get("/")
def root():
    return {"message": "Finance ledger server"}
