"""
DynamoDB access for workout records.

All workouts live in one table keyed by `OWNER#{ownerId}` / `WORKOUT#{workoutId}`.
A global secondary index (`GSI1PK` / `GSI1SK`) puts every record under the
constant `WORKOUTS` partition, sorted by `timestamp`, which is what the
range query reads.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Key  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore

from .errors import DependencyError
from .keys import ALL_WORKOUTS_PK, owner_pk, workout_sk
from .models import WorkoutRecord

logger = logging.getLogger(__name__)

_AWS_ERRORS = (BotoCoreError, ClientError)


class WorkoutStore:
    def __init__(self, table: Any, *, index_name: str = "TimestampIndex") -> None:
        self.table = table
        self.index_name = index_name

    def put_workout(self, record: WorkoutRecord) -> Dict[str, Any]:
        """Write the full record. An existing (owner, workout) pair is overwritten."""
        item = record.to_item()
        try:
            self.table.put_item(Item=item)
        except _AWS_ERRORS as exc:
            raise DependencyError.wrap("Failed to create workout", exc) from exc
        return item

    def get_workout(self, owner_id: str, workout_id: str) -> Optional[WorkoutRecord]:
        try:
            res = self.table.get_item(Key={"pk": owner_pk(owner_id), "sk": workout_sk(workout_id)})
        except _AWS_ERRORS as exc:
            raise DependencyError.wrap("Failed to load workout", exc) from exc
        item = res.get("Item")
        if not item:
            return None
        return WorkoutRecord.from_item(item)

    def query_by_timestamp(self, from_ts: str, to_ts: str) -> List[Dict[str, Any]]:
        """
        Every workout whose timestamp lies in [from_ts, to_ts], oldest first.

        Follows `LastEvaluatedKey` so results past the 1 MB page limit are
        not dropped.
        """
        kwargs: Dict[str, Any] = {
            "IndexName": self.index_name,
            "KeyConditionExpression": Key("GSI1PK").eq(ALL_WORKOUTS_PK) & Key("GSI1SK").between(from_ts, to_ts),
            "ScanIndexForward": True,
        }
        items: List[Dict[str, Any]] = []
        try:
            while True:
                resp = self.table.query(**kwargs)
                items.extend(resp.get("Items") or [])
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except _AWS_ERRORS as exc:
            raise DependencyError.wrap("Failed to get workouts", exc) from exc
        return items

    def attach_photo(self, owner_id: str, workout_id: str, photo_key: str, updated_at: str) -> None:
        # Unconditional: DynamoDB upserts when the record does not exist.
        try:
            self.table.update_item(
                Key={"pk": owner_pk(owner_id), "sk": workout_sk(workout_id)},
                UpdateExpression="SET photoKey = :photoKey, updatedAt = :updatedAt",
                ExpressionAttributeValues={":photoKey": photo_key, ":updatedAt": updated_at},
            )
        except _AWS_ERRORS as exc:
            raise DependencyError.wrap("Failed to generate upload URL", exc) from exc
