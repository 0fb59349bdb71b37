"""WebSocket endpoints for streaming events in and state out."""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from cad_dispatch.services.receiver import ReceiverFullError
from cad_dispatch.websocket.schemas import AckMessage, ErrorMessage, PongMessage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/events")
async def websocket_events(websocket: WebSocket):
    """
    WebSocket transport for dispatch events.

    Protocol:
    - Each text frame is one event envelope, e.g.
        {"type": "IncidentOccurred", "incidentId": 10, "codeName": "code", "loc": {"x": 12, "y": 3}}
    - Server replies {"type": "ack", "pending": n} once the event is queued
    - {"type": "ping"} is answered with {"type": "pong"}
    - Frames that are not JSON objects get {"type": "error", "message": "..."}

    Events are validated by the engine when they are processed, not here.
    """
    receiver = websocket.app.state.receiver
    await websocket.accept()

    try:
        while True:
            raw_message = await websocket.receive_text()

            try:
                data = json.loads(raw_message)
                if not isinstance(data, dict):
                    error = ErrorMessage(message="Event must be a JSON object")
                    await websocket.send_json(error.model_dump())
                    continue

                if data.get("type") == "ping":
                    await websocket.send_json(PongMessage().model_dump())
                    continue

                pending = receiver.submit_nowait(data)
                await websocket.send_json(AckMessage(pending=pending).model_dump())

            except json.JSONDecodeError:
                error = ErrorMessage(message="Invalid JSON")
                await websocket.send_json(error.model_dump())
            except ReceiverFullError as e:
                logger.warning(f"Rejecting websocket event: {e}")
                error = ErrorMessage(message=str(e))
                await websocket.send_json(error.model_dump())

    except WebSocketDisconnect:
        logger.info("Event stream disconnected")
    except Exception as e:
        logger.exception(f"WebSocket error: {e}")


@router.websocket("/ws/state")
async def websocket_state(websocket: WebSocket):
    """
    WebSocket stream of the dispatch board.

    Sends the current snapshot on connect, then a state_update message after
    every applied event. Client frames other than ping are ignored.
    """
    manager = websocket.app.state.ws_manager
    engine = websocket.app.state.engine
    await manager.connect(websocket)

    try:
        await manager.send_state(websocket, engine.snapshot())
        while True:
            raw_message = await websocket.receive_text()
            try:
                data = json.loads(raw_message)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and data.get("type") == "ping":
                await websocket.send_json(PongMessage().model_dump())

    except WebSocketDisconnect:
        await manager.disconnect(websocket)
    except Exception as e:
        logger.exception(f"WebSocket error: {e}")
        await manager.disconnect(websocket)
