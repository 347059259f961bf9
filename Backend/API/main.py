import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from deps import settings
from routers import plinko, rounds, verify
from services.errors import (
    HashMismatch, InvalidParameter, InvalidSeedFormat, PlinkoError, RoundNotFound, StateViolation,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Plinko API (Provably Fair)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"https://.*\.vercel\.app",
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Routers
app.include_router(rounds.router)
app.include_router(verify.router)
app.include_router(plinko.router)

ERROR_STATUS = {
    InvalidParameter: 400,
    InvalidSeedFormat: 400,
    RoundNotFound: 404,
    StateViolation: 409,
    HashMismatch: 409,
}


@app.exception_handler(PlinkoError)
async def plinko_error_handler(request: Request, exc: PlinkoError):
    status = ERROR_STATUS.get(type(exc), 400)
    if isinstance(exc, HashMismatch):
        logger.error("Commitment mismatch on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


@app.get("/healthz")
def healthz():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=5000)
