from __future__ import annotations

import logging
import random

import httpx

logger = logging.getLogger("wordsquare")


def format_notification(
    solutions: list[tuple[str, ...]],
    grid_size: int,
    timings: dict,
    rng: random.Random | None = None,
) -> tuple[str, str]:
    """Build the (title, body) pair for a solve notification."""
    title = f"Word squares {grid_size}x{grid_size} - {len(solutions)} found"

    if solutions:
        pick = (rng or random).choice(solutions)
        shown = "\n".join(pick)
    else:
        shown = "No solutions found!"

    stages = " | ".join(f"{name}:{ms}ms" for name, ms in timings.items())
    return title, shown + "\n\n" + stages


async def send_notification(
    solutions: list[tuple[str, ...]],
    grid_size: int,
    timings: dict,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
    transport: httpx.AsyncBaseTransport | None = None,
):
    """Send solve results to ntfy.sh. Best-effort: failures are logged, not raised."""
    try:
        title, body = format_notification(solutions, grid_size, timings)

        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Priority": "default",
                    "Tags": "abc",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except httpx.HTTPError as e:
        logger.error("Failed to send notification: %s", e)
