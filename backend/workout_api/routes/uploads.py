from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..errors import DependencyError, NotFoundError, ValidationError
from ..http import error_response, json_response
from ..keys import photo_key
from ..models import UploadUrlRequest
from ..parsing import parse_json_body, path_parameter
from ..photos import UPLOAD_URL_EXPIRES_IN, PhotoStore
from ..store import WorkoutStore

logger = logging.getLogger(__name__)


def post_upload_url(
    event: Dict[str, Any],
    workout_id: Optional[str] = None,
    *,
    origin: str,
    store: WorkoutStore,
    photos: PhotoStore,
    now_iso: Callable[[], str],
    now_epoch_ms: Callable[[], int],
    require_existing: bool = False,
) -> Dict[str, Any]:
    """
    Issue a pre-signed PUT URL for a workout photo and record its key on the
    workout.

    The URL is issued before the record is updated. If the update fails the
    caller gets a 500 even though a usable URL already exists.
    """
    logger.debug("Upload URL event: %s", event)
    if workout_id is None:
        workout_id = path_parameter(event, "workoutId")
    try:
        req = UploadUrlRequest.from_parts(workout_id, parse_json_body(event, required=False))
        if require_existing and store.get_workout(req.user_id, req.workout_id) is None:
            raise NotFoundError("Workout not found")

        key = photo_key(req.user_id, req.workout_id, now_epoch_ms())
        upload_url = photos.presign_upload(key, req.content_type, expires_in=UPLOAD_URL_EXPIRES_IN)
        store.attach_photo(req.user_id, req.workout_id, key, now_iso())
    except (ValidationError, NotFoundError) as exc:
        logger.info("Rejected upload URL request: %s", exc)
        return error_response(exc, origin=origin)
    except DependencyError as exc:
        logger.error("Error generating upload URL: %s", exc, exc_info=True)
        return error_response(exc, origin=origin)
    except Exception as exc:
        logger.error("Error generating upload URL: %s", exc, exc_info=True)
        return error_response(DependencyError.wrap("Failed to generate upload URL", exc), origin=origin)

    logger.info("Generated upload URL for workout %s, photoKey: %s", req.workout_id, key)
    return json_response(
        200,
        {"uploadUrl": upload_url, "photoKey": key, "expiresIn": UPLOAD_URL_EXPIRES_IN},
        origin=origin,
    )
