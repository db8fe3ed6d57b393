import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kondate.db.database import init_db
from kondate.errors import NoEligibleRecipeError, PartialWriteError, PersistenceError, ValidationError
from app.dependencies import read_session_token, is_public, SESSION_COOKIE
from app.routers import auth, settings, family, plan, daily_menus, shopping, inventory, history

logger = logging.getLogger("kondate.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Kondate", lifespan=lifespan)


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if not is_public(request.url.path):
        token = request.cookies.get(SESSION_COOKIE)
        if not token or not read_session_token(token):
            return JSONResponse({"detail": "Not signed in"}, status_code=401)
    return await call_next(request)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"detail": str(exc)}, status_code=422)


@app.exception_handler(NoEligibleRecipeError)
async def no_recipe_handler(request: Request, exc: NoEligibleRecipeError):
    return JSONResponse({"detail": str(exc)}, status_code=409)


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("Persistence failure on %s %s", request.method, request.url.path, exc_info=exc)
    body = {"detail": "Could not save or load data. Please reload and try again."}
    if isinstance(exc, PartialWriteError):
        body["missing"] = exc.missing
    return JSONResponse(body, status_code=503)


app.include_router(auth.router)
app.include_router(settings.router)
app.include_router(family.router)
app.include_router(plan.router)
app.include_router(daily_menus.router)
app.include_router(shopping.router)
app.include_router(inventory.router)
app.include_router(history.router)
