"""
Server-Sent Events over a live Subscription.

Each snapshot becomes one ``data:`` event holding the full JSON payload.
A comment line is sent every KEEPALIVE_SECONDS without updates so proxies
keep the connection open. The subscription is cancelled when the client
disconnects or the stream ends for any other reason.
"""

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Callable

from fastapi.responses import StreamingResponse

from bookmybook.domain.exceptions import StoreError, StorePreconditionError
from bookmybook.domain.ports.subscription import Subscription

logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 15.0


def _event(payload: Any, event: str | None = None) -> str:
    prefix = f"event: {event}\n" if event else ""
    return f"{prefix}data: {json.dumps(payload, default=str)}\n\n"


async def _events(
    subscription: Subscription[Any],
    serialize: Callable[[Any], Any],
    keepalive: float,
) -> AsyncIterator[str]:
    try:
        while True:
            try:
                snapshot = await subscription.next(timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keepalive\n\n"
                continue
            except StopAsyncIteration:
                break
            yield _event(serialize(snapshot))
    except StorePreconditionError as e:
        logger.warning(f"Live query waiting on store setup: {e}")
        yield _event({"error": str(e), "state": "setup_in_progress"}, event="error")
    except StoreError as e:
        logger.error(f"Live query failed: {e}")
        yield _event({"error": str(e)}, event="error")
    finally:
        subscription.cancel()
        logger.debug("SSE stream closed, subscription cancelled")


def sse_response(
    subscription: Subscription[Any],
    serialize: Callable[[Any], Any],
    keepalive: float = KEEPALIVE_SECONDS,
) -> StreamingResponse:
    return StreamingResponse(
        _events(subscription, serialize, keepalive),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
