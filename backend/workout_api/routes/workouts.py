from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..errors import DependencyError, ValidationError
from ..http import error_response, json_response
from ..models import CreateWorkoutRequest, WorkoutRangeQuery
from ..parsing import decode_payload, querystring
from ..store import WorkoutStore

logger = logging.getLogger(__name__)


def post_workout(
    event: Dict[str, Any],
    *,
    origin: str,
    store: WorkoutStore,
    now_iso: Callable[[], str],
) -> Dict[str, Any]:
    """
    Create (or overwrite) the workout at OWNER#{ownerId} / WORKOUT#{workoutId}.

    `timestamp` defaults to the creation time; `createdAt` is always now.
    """
    logger.debug("Create workout event: %s", event)
    try:
        req = CreateWorkoutRequest.from_payload(decode_payload(event))
        record = req.to_record(now=now_iso())
        store.put_workout(record)
    except ValidationError as exc:
        logger.info("Rejected workout: %s", exc)
        return error_response(exc, origin=origin)
    except DependencyError as exc:
        logger.error("Error creating workout: %s", exc, exc_info=True)
        return error_response(exc, origin=origin)
    except Exception as exc:
        logger.error("Error creating workout: %s", exc, exc_info=True)
        return error_response(DependencyError.wrap("Failed to create workout", exc), origin=origin)

    logger.info("Workout created: %s / %s", record.pk, record.sk)
    return json_response(201, {"message": "Workout created successfully", "item": record.to_dict()}, origin=origin)


def get_workouts(event: Dict[str, Any], *, origin: str, store: WorkoutStore) -> Dict[str, Any]:
    """List workouts across all owners with from <= timestamp <= to, oldest first."""
    logger.debug("Get workouts event: %s", event)
    try:
        q = WorkoutRangeQuery.from_querystring(querystring(event))
        workouts = store.query_by_timestamp(q.from_ts, q.to_ts)
    except ValidationError as exc:
        logger.info("Rejected workout query: %s", exc)
        return error_response(exc, origin=origin)
    except DependencyError as exc:
        logger.error("Error getting workouts: %s", exc, exc_info=True)
        return error_response(exc, origin=origin)
    except Exception as exc:
        logger.error("Error getting workouts: %s", exc, exc_info=True)
        return error_response(DependencyError.wrap("Failed to get workouts", exc), origin=origin)

    logger.info("Found %s workouts between %s and %s", len(workouts), q.from_ts, q.to_ts)
    return json_response(
        200,
        {"count": len(workouts), "from": q.from_ts, "to": q.to_ts, "workouts": workouts},
        origin=origin,
    )
