import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated, Literal, Union

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from game.config import GameConfig, load_config
from game.controller import InputController
from game.session import GameSession
from game.state import Direction, GameState, Status

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent

app = FastAPI(title="Snake")
app.state.config = None


def get_config() -> GameConfig:
    """Return the active game config, loading it on first use."""
    if app.state.config is None:
        app.state.config = load_config(os.environ.get("SNAKE_CONFIG"))
    return app.state.config


class DirectionMessage(BaseModel):
    type: Literal["direction"]
    direction: Direction

    @field_validator("direction", mode="before")
    @classmethod
    def parse_direction(cls, value):
        if isinstance(value, str):
            return Direction.parse(value)
        return value


class KeyMessage(BaseModel):
    type: Literal["key"]
    key: str


class PauseMessage(BaseModel):
    type: Literal["pause"]


class ResetMessage(BaseModel):
    type: Literal["reset"]


ClientMessage = Annotated[
    Union[DirectionMessage, KeyMessage, PauseMessage, ResetMessage],
    Field(discriminator="type"),
]
client_message_adapter = TypeAdapter(ClientMessage)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/config")
async def get_game_config():
    """Return the game settings new sessions are created with."""
    return get_config().to_dict()


def state_message(state: GameState) -> dict:
    if state.status is Status.GAME_OVER:
        return {"type": "game_over", "state": state.to_dict(), "final_score": state.score}
    return {"type": "state_update", "state": state.to_dict()}


async def send_updates(websocket: WebSocket, queue: asyncio.Queue) -> None:
    """Forward queued state snapshots to the client."""
    while True:
        state = await queue.get()
        await websocket.send_json(state_message(state))


@app.websocket("/ws/game")
async def websocket_game(websocket: WebSocket):
    """WebSocket endpoint for real-time game communication."""
    await websocket.accept()

    session = GameSession(get_config())
    controls = InputController(session)
    updates: asyncio.Queue = asyncio.Queue()
    session.subscribe(updates.put_nowait)

    await websocket.send_json(state_message(session.snapshot()))
    sender = asyncio.create_task(send_updates(websocket, updates))
    session.start()

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = client_message_adapter.validate_python(json.loads(data))
            except (json.JSONDecodeError, ValidationError, ValueError) as e:
                await websocket.send_json({"type": "error", "message": str(e)})
                continue

            if isinstance(message, DirectionMessage):
                session.request_direction(message.direction)
            elif isinstance(message, KeyMessage):
                controls.handle_key(message.key)
            elif isinstance(message, PauseMessage):
                session.toggle_pause()
            elif isinstance(message, ResetMessage):
                session.request_reset()

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception:
        logger.exception("Game loop error")
    finally:
        await session.close()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug("Update sender stopped: %s", e)


def find_available_port(start_port: int = 8000, max_attempts: int = 100) -> int:
    """Return the first port from start_port the game server can bind.

    Raises:
        RuntimeError: If none of the max_attempts ports is free
    """
    import socket

    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("0.0.0.0", port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts - 1}")


def resolve_port(default_port: int = 8000) -> int:
    """Use $PORT when set, otherwise the first free port from default_port."""
    explicit = int(os.environ.get("PORT", 0))
    if explicit:
        return explicit

    port = find_available_port(default_port)
    if port != default_port:
        logger.info("Port %d is in use, using port %d instead", default_port, port)
    return port


if __name__ == "__main__":
    import uvicorn

    load_dotenv(BASE_DIR / ".env")
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = resolve_port()
    logger.info("Starting server at http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
