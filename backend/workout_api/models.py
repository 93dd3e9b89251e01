from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .keys import ALL_WORKOUTS_PK, owner_pk, workout_sk
from .timeutil import parse_iso


DEFAULT_CONTENT_TYPE = "image/jpeg"

CREATE_REQUIRED_FIELDS = ("ownerId", "workoutId", "activityType", "durationMinutes")


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _parse_duration(value: Any) -> int:
    # Zero is a real duration; only absence counts as missing.
    if isinstance(value, bool):
        raise ValidationError("Invalid durationMinutes", "durationMinutes must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValidationError("Invalid durationMinutes", "durationMinutes must be an integer")


@dataclass(frozen=True)
class WorkoutRecord:
    owner_id: str
    workout_id: str
    activity_type: str
    duration_minutes: int
    timestamp: str
    created_at: str
    photo_key: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def pk(self) -> str:
        return owner_pk(self.owner_id)

    @property
    def sk(self) -> str:
        return workout_sk(self.workout_id)

    def to_dict(self) -> Dict[str, Any]:
        """The record as returned to callers, without the index attributes."""
        data: Dict[str, Any] = {
            "pk": self.pk,
            "sk": self.sk,
            "ownerId": self.owner_id,
            "workoutId": self.workout_id,
            "activityType": self.activity_type,
            "durationMinutes": self.duration_minutes,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
        }
        if self.photo_key is not None:
            data["photoKey"] = self.photo_key
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        return data

    def to_item(self) -> Dict[str, Any]:
        item = self.to_dict()
        item["GSI1PK"] = ALL_WORKOUTS_PK
        item["GSI1SK"] = self.timestamp
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "WorkoutRecord":
        pk = str(item.get("pk", ""))
        sk = str(item.get("sk", ""))
        return cls(
            owner_id=str(item.get("ownerId") or pk.split("#", 1)[-1]),
            workout_id=str(item.get("workoutId") or sk.split("#", 1)[-1]),
            activity_type=str(item.get("activityType", "")),
            duration_minutes=int(item.get("durationMinutes", 0)),
            timestamp=str(item.get("timestamp", "")),
            created_at=str(item.get("createdAt", "")),
            photo_key=item.get("photoKey"),
            updated_at=item.get("updatedAt"),
        )


@dataclass(frozen=True)
class CreateWorkoutRequest:
    owner_id: str
    workout_id: str
    activity_type: str
    duration_minutes: int
    timestamp: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "CreateWorkoutRequest":
        owner_id = _clean_str(data.get("ownerId"))
        workout_id = _clean_str(data.get("workoutId"))
        activity_type = _clean_str(data.get("activityType"))
        duration = data.get("durationMinutes")
        if isinstance(duration, str) and not duration.strip():
            duration = None

        present = {
            "ownerId": owner_id is not None,
            "workoutId": workout_id is not None,
            "activityType": activity_type is not None,
            "durationMinutes": duration is not None,
        }
        missing: List[str] = [name for name in CREATE_REQUIRED_FIELDS if not present[name]]
        if missing:
            raise ValidationError("Missing required fields: " + ", ".join(missing))

        timestamp = _clean_str(data.get("timestamp"))
        if timestamp is not None and parse_iso(timestamp) is None:
            raise ValidationError(
                "Invalid timestamp",
                "timestamp must be in ISO 8601 format (e.g., 2026-02-01T00:00:00Z)",
            )

        return cls(
            owner_id=str(owner_id),
            workout_id=str(workout_id),
            activity_type=str(activity_type),
            duration_minutes=_parse_duration(duration),
            timestamp=timestamp,
        )

    def to_record(self, *, now: str) -> WorkoutRecord:
        return WorkoutRecord(
            owner_id=self.owner_id,
            workout_id=self.workout_id,
            activity_type=self.activity_type,
            duration_minutes=self.duration_minutes,
            timestamp=self.timestamp or now,
            created_at=now,
        )


@dataclass(frozen=True)
class WorkoutRangeQuery:
    from_ts: str
    to_ts: str

    @classmethod
    def from_querystring(cls, qs: Dict[str, str]) -> "WorkoutRangeQuery":
        from_ts = _clean_str(qs.get("from"))
        to_ts = _clean_str(qs.get("to"))
        if from_ts is None or to_ts is None:
            raise ValidationError(
                "Missing required query parameters: from and to",
                'Both "from" and "to" date parameters are required in ISO 8601 format '
                "(e.g., 2026-02-01T00:00:00Z)",
            )

        from_dt = parse_iso(from_ts)
        to_dt = parse_iso(to_ts)
        if from_dt is None or to_dt is None:
            raise ValidationError(
                "Invalid date format",
                "Dates must be in ISO 8601 format (e.g., 2026-02-01T00:00:00Z)",
            )
        if from_dt > to_dt:
            raise ValidationError(
                "Invalid date range",
                '"from" date must be before or equal to "to" date',
            )
        # The index compares strings, so the bounds are used exactly as sent.
        return cls(from_ts=from_ts, to_ts=to_ts)


@dataclass(frozen=True)
class UploadUrlRequest:
    workout_id: str
    user_id: str
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_parts(cls, workout_id: Optional[str], body: Dict[str, Any]) -> "UploadUrlRequest":
        user_id = _clean_str(body.get("userId"))
        if workout_id is None or user_id is None:
            raise ValidationError("Missing required fields: workoutId (in path) and userId (in body)")
        content_type = _clean_str(body.get("contentType")) or DEFAULT_CONTENT_TYPE
        return cls(workout_id=workout_id, user_id=user_id, content_type=content_type)
