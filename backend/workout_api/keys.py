from __future__ import annotations


# Sentinel partition of the timestamp index. Every workout shares it so the
# whole collection can be range-queried in time order; it also means index
# throughput is bounded by a single partition.
ALL_WORKOUTS_PK = "WORKOUTS"

PHOTO_EXTENSION = ".jpg"


def owner_pk(owner_id: str) -> str:
    return f"OWNER#{owner_id}"


def workout_sk(workout_id: str) -> str:
    return f"WORKOUT#{workout_id}"


def photo_key(user_id: str, workout_id: str, epoch_ms: int) -> str:
    # Millisecond timestamp keeps keys unique per request without a lookup.
    return f"workouts/{user_id}/{workout_id}/{epoch_ms}{PHOTO_EXTENSION}"
