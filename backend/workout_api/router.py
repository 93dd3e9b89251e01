from __future__ import annotations

import re
from typing import Any, Callable, Dict, Optional
from urllib.parse import unquote

from .errors import DependencyError
from .http import error_response, json_response, options_response
from .parsing import method as get_method
from .parsing import path as get_path
from .parsing import path_parameter
from .photos import PhotoStore
from .routes.uploads import post_upload_url
from .routes.workouts import get_workouts, post_workout
from .store import WorkoutStore


_UPLOAD_PATH_RE = re.compile(r"^/workouts/([^/]+)/upload/?$")


def upload_workout_id(event: Dict[str, Any], p: str) -> Optional[str]:
    workout_id = path_parameter(event, "workoutId")
    if workout_id is not None:
        return workout_id
    m = _UPLOAD_PATH_RE.match(p)
    if m is None:
        return None
    return unquote(m.group(1)).strip() or None


def dispatch(
    event: Dict[str, Any],
    *,
    origin: str,
    get_store: Callable[[], WorkoutStore],
    get_photos: Callable[[], Optional[PhotoStore]],
    now_iso: Callable[[], str],
    now_epoch_ms: Callable[[], int],
    require_existing: bool = False,
) -> Dict[str, Any]:
    m = get_method(event)
    p = get_path(event).rstrip("/") or "/"

    if m == "OPTIONS":
        return options_response(origin=origin)

    if m == "POST" and p == "/workouts":
        return post_workout(event, origin=origin, store=get_store(), now_iso=now_iso)
    if m == "GET" and p == "/workouts":
        return get_workouts(event, origin=origin, store=get_store())
    if m == "POST" and _UPLOAD_PATH_RE.match(p):
        photos = get_photos()
        if photos is None:
            err = DependencyError("Failed to generate upload URL", "Missing required env var: PHOTO_BUCKET")
            return error_response(err, origin=origin)
        return post_upload_url(
            event,
            upload_workout_id(event, p),
            origin=origin,
            store=get_store(),
            photos=photos,
            now_iso=now_iso,
            now_epoch_ms=now_epoch_ms,
            require_existing=require_existing,
        )

    return json_response(404, {"error": "not_found"}, origin=origin)
