"""Best-effort persistence of prompt/response exchanges."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic_core import to_jsonable_python

logger = logging.getLogger(__name__)

COLLECTION_NAME = "aigenerateds"


class ResponseLogger:
    """Writes ``{userId, prompt, response}`` records to MongoDB."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    @classmethod
    def from_database(cls, db: AsyncIOMotorDatabase) -> "ResponseLogger":
        return cls(db[COLLECTION_NAME])

    async def save(self, user_id: str, prompt: str, response: Any) -> Optional[str]:
        """
        Insert one exchange record.

        Args:
            user_id: Id of the signed-in user
            prompt: Prompt text sent to the model
            response: Raw reply (dicts, lists, SDK/pydantic models)

        Returns:
            Inserted id as a string, or None if the write failed
        """
        try:
            document = {
                "userId": user_id,
                "prompt": prompt,
                "response": to_jsonable_python(response),
                "createdAt": datetime.now(timezone.utc),
            }
            result = await self.collection.insert_one(document)
            return str(result.inserted_id)
        except Exception as e:
            logger.error(
                f"Failed to save response to db: {e}",
                extra={"user_id": user_id},
                exc_info=True,
            )
            return None
