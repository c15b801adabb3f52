"""
FastAPI Application - REST API for Scoundrel front ends.

Endpoints:
    GET    /api/v1/health                  Health check
    POST   /api/v1/games                   Deal a new game
    GET    /api/v1/games                   List games in progress
    GET    /api/v1/games/{id}              Get game state
    DELETE /api/v1/games/{id}              End a game
    POST   /api/v1/games/{id}/face         Face the current room
    POST   /api/v1/games/{id}/avoid        Avoid the current room
    POST   /api/v1/games/{id}/select       Resolve a room card
    POST   /api/v1/games/{id}/restart      Reload the last save

Intents that are not allowed right now (wrong phase, bad index, game
over) are not errors: they return 200 with applied=false.
"""

from typing import Optional, Union
import logging

from fastapi import FastAPI, Body, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..session import SessionManager
from ..storage import GameStorage, FileStore, STORAGE_KEY
from .service import APIService
from .schemas import (
    NewGameRequest,
    SelectCardRequest,
    GameStateResponse,
    IntentResponse,
    ErrorResponse,
    ErrorCode,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)


def _session_manager(settings: Settings) -> SessionManager:
    """Sessions keep their saves on disk when a save dir is configured."""
    if not settings.save_dir:
        return SessionManager()

    store = FileStore(settings.save_dir)
    return SessionManager(
        storage_factory=lambda session_id: GameStorage(store, key=f"{STORAGE_KEY}:{session_id}")
    )


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()
    api_service = service or APIService(session_manager=_session_manager(settings))

    app = FastAPI(
        title="Scoundrel Engine API",
        description="Single-player dungeon crawl card game.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def to_response(result, status_code: int = 404):
        """Pass models through; turn ErrorResponse into a JSON error."""
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
        return result

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ErrorResponse(
            error="Request did not validate",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(exc.errors())},
        )
        return to_response(error, status_code=422)

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="scoundrel", version=__version__)

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        tags=["Games"],
        summary="Deal a new game",
    )
    async def new_game(request: Optional[NewGameRequest] = Body(None)) -> GameStateResponse:
        response = api_service.new_game(request)
        logger.info("Dealt game %s", response.game_id)
        return response

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games in progress",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return to_response(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game and delete its save",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        return EndGameResponse(success=api_service.end_game(game_id), game_id=game_id)

    @app.post(
        "/api/v1/games/{game_id}/restart",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Reload the last save, or deal a new game",
    )
    async def restart(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return to_response(api_service.restart(game_id))

    @app.post(
        "/api/v1/games/{game_id}/face",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rooms"],
        summary="Face the current room",
    )
    async def face_room(game_id: str) -> Union[IntentResponse, JSONResponse]:
        return to_response(api_service.face_room(game_id))

    @app.post(
        "/api/v1/games/{game_id}/avoid",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rooms"],
        summary="Avoid the current room",
    )
    async def avoid_room(game_id: str) -> Union[IntentResponse, JSONResponse]:
        return to_response(api_service.avoid_room(game_id))

    @app.post(
        "/api/v1/games/{game_id}/select",
        response_model=IntentResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rooms"],
        summary="Resolve the room card at an index",
    )
    async def select_card(
        game_id: str,
        request: SelectCardRequest,
    ) -> Union[IntentResponse, JSONResponse]:
        return to_response(api_service.select_card(game_id, request.index))

    return app


# For running directly: uvicorn scoundrel.api.app:app
app = create_app()
