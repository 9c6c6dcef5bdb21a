import time
from datetime import date
from typing import List

from maktab.feedback.schemas import FeedbackCreate, FeedbackRead
from maktab.storage import FEEDBACK, StorageBackend


class FeedbackService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def add_feedback(self, feedback: FeedbackCreate) -> FeedbackRead:
        data = feedback.model_dump()
        data["date"] = date.today().isoformat()
        data["timestamp"] = time.time()
        key = self.storage.add(FEEDBACK, data)
        return FeedbackRead(id=key, **data)

    def get_feedback(self) -> List[FeedbackRead]:
        return [FeedbackRead(**r) for r in self.storage.list_ordered(FEEDBACK, "timestamp", descending=True)]

    def delete_feedback(self, feedback_id: str) -> bool:
        if not self.storage.get(FEEDBACK, feedback_id):
            return False
        self.storage.delete(FEEDBACK, feedback_id)
        return True
