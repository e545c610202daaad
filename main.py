import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import uvicorn

from database import check_connection, init_db
from routers import auth, dashboard, kos, mobile_auth, mobile_kos, payments, profile, sewa, transactions, users
from utils.logger import logger

# Load .env
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Migrations own the schema in production; INIT_DB=true creates tables for local runs
    if os.getenv("INIT_DB", "false").lower() == "true":
        init_db()
    if not check_connection():
        logger.warning("Starting without a database connection")
    yield


# App instance
app = FastAPI(title="Kos API", lifespan=lifespan)

# CORS
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched paths come through here with Starlette's default detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _error(404, "Route not found")
    response = _error(exc.status_code, exc.detail)
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return _error(400, "Input tidak valid")

    first = errors[0]
    if first.get("type") == "value_error" and first.get("ctx", {}).get("error"):
        message = str(first["ctx"]["error"])
    else:
        field = next((str(part) for part in reversed(first.get("loc", ())) if part != "body"), None)
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Input tidak valid")
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error(500, "Terjadi kesalahan internal")


@app.get("/api/health")
def health():
    return {"success": True, "database": check_connection()}


app.include_router(auth.router)
app.include_router(mobile_auth.router)
app.include_router(users.router)
app.include_router(kos.router)
app.include_router(mobile_kos.router)
app.include_router(profile.router)
app.include_router(sewa.router)
app.include_router(transactions.mobile_router)
app.include_router(transactions.router)
app.include_router(payments.router)
app.include_router(dashboard.router)

if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
