import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Optional

from fastapi import APIRouter, FastAPI, WebSocket, Depends, HTTPException, Path, Request
from fastapi.middleware.cors import CORSMiddleware

from engine.core.constants import WIDTH
from client.app.api.websocket_manager import ConnectionManager, build_state_message
from client.app.core.config import Settings, configure_logging, get_settings
from client.app.core.dialog import StaticBookDialog
from client.app.engine.bridge import EngineCommandError, LocalEngineBridge
from client.app.models.enums import BookPhase
from client.app.schemas.state_schema import BookRequest, StateResponse
from client.app.services.board_decoder import EncodedBoardError
from client.app.services.interaction_controller import InteractionController

logger = logging.getLogger(__name__)

router = APIRouter()


def create_app(controller: Optional[InteractionController] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    controller = controller or InteractionController(LocalEngineBridge())
    manager = ConnectionManager()

    async def push_state(ctrl: InteractionController):
        await manager.broadcast(build_state_message(ctrl.snapshot().model_dump(mode="json")))

    controller.subscribe(push_state)

    # --- LIFESPAN MANAGER (Auto-open the configured book) ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.book_path:
            logger.info("Opening configured book %s", settings.book_path)
            await controller.open_book(StaticBookDialog(settings.book_path))
        yield

    app = FastAPI(title="Connect Four Book Client", lifespan=lifespan)
    app.state.controller = controller
    app.state.settings = settings
    app.state.manager = manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


def get_controller(request: Request) -> InteractionController:
    return request.app.state.controller


def get_loaded_controller(request: Request) -> InteractionController:
    controller = request.app.state.controller
    if controller.phase != BookPhase.BOOK_LOADED:
        raise HTTPException(status_code=409, detail="Open a book first")
    return controller


async def run_command(controller: InteractionController, command: Awaitable) -> StateResponse:
    """Runs a controller command and maps engine/protocol failures to HTTP errors."""
    try:
        await command
    except EncodedBoardError as e:
        logger.error("Engine sent a malformed board: %s", e)
        raise HTTPException(status_code=500, detail=f"Malformed board from engine: {e}")
    except EngineCommandError as e:
        logger.error("Engine command failed: %s", e)
        raise HTTPException(status_code=502, detail=f"Engine error: {e}")
    return controller.snapshot()


@router.post("/book", response_model=StateResponse)
async def open_book(request: Request, body: BookRequest,
                    controller: InteractionController = Depends(get_controller)):
    if controller.phase != BookPhase.NO_BOOK_LOADED:
        raise HTTPException(status_code=409, detail=f"Book phase is {controller.phase}")

    path = body.path or request.app.state.settings.book_path
    if not await controller.open_book(StaticBookDialog(path)):
        raise HTTPException(status_code=400, detail=controller.notice or "No book selected")
    return controller.snapshot()


@router.get("/state", response_model=StateResponse)
async def get_state(controller: InteractionController = Depends(get_controller)):
    return controller.snapshot()


@router.post("/columns/{column}/play", response_model=StateResponse)
async def play_column(column: int = Path(ge=1, le=WIDTH),
                      controller: InteractionController = Depends(get_loaded_controller)):
    """Drops a piece; an illegal move comes back as 'notice' with the board unchanged."""
    return await run_command(controller, controller.play_column(column))


@router.post("/moves/back", response_model=StateResponse)
async def back_move(controller: InteractionController = Depends(get_loaded_controller)):
    return await run_command(controller, controller.undo())


@router.post("/reset", response_model=StateResponse)
async def reset_game(controller: InteractionController = Depends(get_loaded_controller)):
    return await run_command(controller, controller.reset())


@router.post("/refresh", response_model=StateResponse)
async def refresh(controller: InteractionController = Depends(get_loaded_controller)):
    return await run_command(controller, controller.refresh())


@router.websocket("/ws")
async def state_websocket(websocket: WebSocket):
    controller: InteractionController = websocket.app.state.controller
    manager: ConnectionManager = websocket.app.state.manager
    initial = build_state_message(controller.snapshot().model_dump(mode="json"))
    await manager.handle_session(websocket, initial)


configure_logging(get_settings().log_level)
app = create_app()
