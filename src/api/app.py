"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import comparison, mortgage, refinance
from src.config import settings

app = FastAPI(
    title="Mortgage Planner",
    description="Amortization schedules, extra payments, ARM recasts and refinance break-even",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(mortgage.router)
app.include_router(refinance.router)
app.include_router(comparison.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
