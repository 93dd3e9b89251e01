"""
Lambda entry points for the workout API.

`handler` serves every route from one function. `create_workout`,
`get_workouts` and `get_upload_url` serve a deployment that maps each
route to its own function.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from workout_api.config import Settings
from workout_api.db import get_s3_client, get_table
from workout_api.errors import DependencyError
from workout_api.http import error_response, origin_from_event
from workout_api.parsing import path as get_path
from workout_api.photos import PhotoStore
from workout_api.router import dispatch, upload_workout_id
from workout_api.routes.uploads import post_upload_url
from workout_api.routes.workouts import get_workouts as get_workouts_route
from workout_api.routes.workouts import post_workout
from workout_api.store import WorkoutStore
from workout_api.timeutil import now_epoch_ms, now_iso

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    # The Lambda runtime installs the root handler; only the level is ours.
    logging.getLogger().setLevel(settings.log_level)


def _store(settings: Settings) -> WorkoutStore:
    return WorkoutStore(get_table(settings.table_name), index_name=settings.gsi_name)


def _photos(settings: Settings) -> Optional[PhotoStore]:
    if not settings.photo_bucket:
        return None
    return PhotoStore(get_s3_client(), settings.photo_bucket)


def _guarded(event: Dict[str, Any], failure: str, fn: Callable[[Settings, str], Dict[str, Any]]) -> Dict[str, Any]:
    origin = "*"
    try:
        settings = Settings.from_env()
        _configure_logging(settings)
        origin = origin_from_event(event, settings.allowed_origin)
        return fn(settings, origin)
    except Exception as exc:
        logger.error("Unhandled error: %s", exc, exc_info=True)
        return error_response(DependencyError.wrap(failure, exc), origin=origin)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    def run(settings: Settings, origin: str) -> Dict[str, Any]:
        return dispatch(
            event,
            origin=origin,
            get_store=lambda: _store(settings),
            get_photos=lambda: _photos(settings),
            now_iso=now_iso,
            now_epoch_ms=now_epoch_ms,
            require_existing=settings.require_existing_workout,
        )

    return _guarded(event, "Internal server error", run)


def create_workout(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    def run(settings: Settings, origin: str) -> Dict[str, Any]:
        return post_workout(event, origin=origin, store=_store(settings), now_iso=now_iso)

    return _guarded(event, "Failed to create workout", run)


def get_workouts(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    def run(settings: Settings, origin: str) -> Dict[str, Any]:
        return get_workouts_route(event, origin=origin, store=_store(settings))

    return _guarded(event, "Failed to get workouts", run)


def get_upload_url(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    def run(settings: Settings, origin: str) -> Dict[str, Any]:
        photos = PhotoStore(get_s3_client(), settings.require_bucket())
        return post_upload_url(
            event,
            upload_workout_id(event, get_path(event)),
            origin=origin,
            store=_store(settings),
            photos=photos,
            now_iso=now_iso,
            now_epoch_ms=now_epoch_ms,
            require_existing=settings.require_existing_workout,
        )

    return _guarded(event, "Failed to generate upload URL", run)
