"""Live comment event routes."""

import asyncio

import logfire
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from board.application.usecase.comment import (
    SubscribeCommentsRequest,
    SubscribeCommentsUseCase,
    event_message,
)
from board.domain.error import InvalidInputError
from board.domain.service import Subscription

router = APIRouter(tags=["subscriptions"])


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    async for event in subscription:
        await websocket.send_json(event_message(event))


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # Clients only listen; anything they send is ignored
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws/comments")
async def comment_events(websocket: WebSocket, channels: str | None = None) -> None:
    """Stream comment events as `{"event": ..., "data": ...}` JSON messages.

    `channels` is a comma-separated subset of created, updated, deleted
    (or commentAdded, commentUpdated, commentDeleted); all when omitted.
    Only events published after the connection opens are delivered.
    """
    names = [name for name in (channels or "").split(",") if name.strip()]
    container = websocket.app.state.dishka_container
    subscribe_use_case = await container.get(SubscribeCommentsUseCase)

    try:
        subscription = await subscribe_use_case.execute(
            SubscribeCommentsRequest(channels=names)
        )
    except InvalidInputError as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e))
        return

    async with subscription:
        await websocket.accept()
        logfire.info("Event stream opened", channels=names or "all")

        forward = asyncio.create_task(_forward(websocket, subscription))
        disconnect = asyncio.create_task(_wait_for_disconnect(websocket))
        try:
            done, _ = await asyncio.wait(
                {forward, disconnect}, return_when=asyncio.FIRST_COMPLETED
            )
            for task in done:
                if task is forward and not task.cancelled():
                    exc = task.exception()
                    if exc is not None and not isinstance(exc, WebSocketDisconnect):
                        raise exc
        finally:
            forward.cancel()
            disconnect.cancel()
            await asyncio.gather(forward, disconnect, return_exceptions=True)
            logfire.info(
                "Event stream closed",
                channels=names or "all",
                dropped=subscription.dropped,
            )
