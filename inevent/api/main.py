# ---------------- Imports principaux ----------------
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from inevent.database import init_db
from inevent.security.auth import user_context_from_token
from inevent.api import appointments, email_templates, campaigns


logger = logging.getLogger("uvicorn.error")

# ---------------- Définition app FastAPI ----------------
app = FastAPI(title="InEvent API")
app.include_router(appointments.router)
app.include_router(email_templates.router)
app.include_router(campaigns.router)


@app.get("/")
def read_root():
    return {"status": "ok"}


@app.on_event("startup")
def _on_startup():
    if os.getenv("INEVENT_SKIP_CREATE_ALL") or os.getenv("PYTEST_CURRENT_TEST"):
        return
    try:
        init_db()
        logger.info("Tables InEvent vérifiées")
    except Exception:
        logger.exception("Création des tables impossible", exc_info=True)
        raise


# ---------------- Contexte utilisateur depuis le cookie de session ----------------
@app.middleware("http")
async def session_cookie_middleware(request: Request, call_next):
    ctx = user_context_from_token(request.cookies.get("auth_token"))
    if ctx:
        request.state.user_ctx = ctx
    return await call_next(request)


# ---------------- Middleware CORS ----------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
