"""Structured logging around closet tool calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from closet_app.logging_config import get_logger, log_event
from logic.color_harmony import BUCKETS

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def summarize_outcome(result: Any) -> Dict[str, Any]:
    """Reduce a tool result to the counters worth logging.

    Recommendation payloads report their status and the size of each bucket,
    listings report how many items came back, and a ``None``/``False`` result
    means the addressed item did not exist.
    """

    if isinstance(result, dict) and "status" in result:
        outcome: Dict[str, Any] = {"status": result["status"]}
        for bucket in BUCKETS:
            if bucket in result:
                outcome[f"{bucket}_count"] = len(result[bucket])
        return outcome
    if isinstance(result, list):
        return {"status": "ok", "item_count": len(result)}
    if result is None or result is False:
        return {"status": "not_found"}
    return {"status": "ok"}


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log the outcome of a closet tool and optionally validate its keyword input.

    Successful calls are logged at INFO, calls whose outcome is not ``ok`` at
    WARNING, and exceptions at ERROR before being re-raised.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "tool_input_rejected",
                        tool=tool_name,
                        fields=[".".join(str(part) for part in error["loc"]) for error in exc.errors()],
                    )
                    if on_validation_error is None:
                        raise
                    return on_validation_error(exc)

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "tool_call_failed",
                    tool=tool_name,
                    item_id=kwargs.get("item_id"),
                    duration_ms=_elapsed_ms(start),
                    exc_info=True,
                )
                raise

            outcome = summarize_outcome(result)
            log_event(
                LOGGER,
                logging.INFO if outcome["status"] == "ok" else logging.WARNING,
                "tool_call_completed",
                tool=tool_name,
                item_id=kwargs.get("item_id"),
                duration_ms=_elapsed_ms(start),
                **outcome,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool", "summarize_outcome"]
