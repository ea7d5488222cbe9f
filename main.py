"""
Main API module for Universal Loot.

Responsibilities:
    - Expose registration and login endpoints that issue bearer tokens
    - Expose inventory CRUD; reads are public, writes require a valid token
    - Translate auth/storage errors into HTTP responses in one place

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - Signing secret, bcrypt cost and storage backend are resolved from settings
      once per app and injected into the hasher, issuer, verifier and service.
    - In-memory Storage by default; Postgres via LOOT_STORAGE_BACKEND=postgres.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and auth logic."
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from auth.dependencies import get_current_user
from auth.errors import AuthError, StorageUnavailable
from auth.schemas import RegisterOut, TokenOut, UserLogin, UserRegister
from auth.service import AuthService
from auth.tokens import Identity, TokenIssuer, TokenVerifier
from auth.utils import PasswordHasher
from loot_platform.config import Settings, settings as default_settings
from loot_platform.storage.base import BaseStorage
from loot_platform.storage.storage_factory import get_storage


class ItemIn(BaseModel):
    """Request payload for creating or replacing an item."""
    name: str
    quantity: int = 0
    price: float = 0.0


def create_app(storage: Optional[BaseStorage] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage (BaseStorage, optional): Backend to use. Defaults to `get_storage()`.
        settings (Settings, optional): Configuration snapshot. Defaults to the
            module-level `loot_platform.config.settings`.

    Returns:
        FastAPI: A fully configured application instance with its own storage,
                 hasher, token issuer/verifier and auth service.

    Why an app factory?
        - Enables per-test isolation in pytest (fresh store, distinct secret).
        - Encourages dependency injection and easy swapping of implementations.
        - Avoids accidental global state across workers/processes.
    """
    cfg = settings or default_settings
    log = logging.getLogger("loot")

    # basic console logging (optional)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=cfg.LOG_LEVEL)

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    store = storage if storage is not None else get_storage()
    hasher = PasswordHasher(rounds=cfg.BCRYPT_ROUNDS)
    issuer = TokenIssuer(cfg.JWT_SECRET, ttl_seconds=cfg.TOKEN_TTL_SECONDS)
    verifier = TokenVerifier(cfg.JWT_SECRET)
    auth_service = AuthService(storage=store, hasher=hasher, issuer=issuer)

    log.info("Loot storage backend: %s", type(store).__name__)
    if cfg.EPHEMERAL_SECRET:
        log.warning("JWT_SECRET is not set; using a random per-process secret")

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            store.ensure_schema()
        except StorageUnavailable:
            log.error("Database connection error; continuing without schema check")
        yield
        store.close()

    app = FastAPI(
        title="Universal Loot",
        description="Item inventory API with bcrypt credentials and JWT bearer auth",
        docs_url="/docs",  # Swagger UI endpoint
        lifespan=lifespan,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    app.state.storage = store
    app.state.auth_service = auth_service
    app.state.token_verifier = verifier

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s %s failed: %r", request.method, request.url.path, exc.__cause__)
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Universal Loot API is live"

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/register", response_model=RegisterOut)
    def register(req: UserRegister) -> Dict[str, Any]:
        """
        Register a new user.

        Raises:
            InvalidInput (400), DuplicateUsername (409), StorageUnavailable (500).
        """
        user = auth_service.register(req.username, req.password)
        return {"message": "User registered", "user": user.to_public()}

    @app.post("/login", response_model=TokenOut)
    def login(req: UserLogin) -> Dict[str, Any]:
        """
        Exchange username/password for a bearer token.

        Unknown user and wrong password produce the same 400 response.
        """
        token = auth_service.login(req.username, req.password)
        return {"message": "Login successful", "token": token}

    @app.get("/me")
    def me(user: Identity = Depends(get_current_user)) -> Dict[str, Any]:
        return user.to_dict()

    # GET all items (public)
    @app.get("/items")
    def list_items() -> List[Dict[str, Any]]:
        return store.list_items()

    @app.post("/items")
    def create_item(item: ItemIn, user: Identity = Depends(get_current_user)) -> Dict[str, Any]:
        created = store.create_item(item.name, item.quantity, item.price)
        log.info("Item %s created by %s", created["id"], user.username)
        return created

    @app.put("/items/{item_id}")
    def update_item(item_id: int, item: ItemIn, user: Identity = Depends(get_current_user)) -> Dict[str, Any]:
        updated = store.update_item(item_id, item.name, item.quantity, item.price)
        if updated is None:
            raise HTTPException(status_code=404, detail="Item not found")
        log.info("Item %s updated by %s", item_id, user.username)
        return updated

    @app.delete("/items/{item_id}")
    def delete_item(item_id: int, user: Identity = Depends(get_current_user)) -> Dict[str, Any]:
        if not store.delete_item(item_id):
            raise HTTPException(status_code=404, detail="Item not found")
        log.info("Item %s deleted by %s", item_id, user.username)
        return {"message": f"Item {item_id} deleted"}

    return app


# Backward compatibility for uvicorn and legacy imports:
# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)
