import logging
from typing import Dict, List

from maktab.config.school_config import SchoolConfig
from maktab.storage import CONFIG, StorageBackend
from maktab.subjects.schemas import SubjectConfig

logger = logging.getLogger(__name__)

SUBJECTS_KEY = "subjects"


class SubjectService:
    """Global subject list with the maximum marks of each subject."""

    def __init__(self, storage: StorageBackend, config: SchoolConfig):
        self.storage = storage
        self.config = config

    def get_subjects(self) -> List[SubjectConfig]:
        """Stored subjects, seeding and saving the defaults the first time."""
        doc = self.storage.get(CONFIG, SUBJECTS_KEY)
        if doc and doc.get("active_subjects"):
            return [SubjectConfig(**s) for s in doc["active_subjects"]]

        defaults = [SubjectConfig(**s) for s in self.config.default_subjects]
        logger.info("No subjects configured, saving defaults")
        self.update_subjects(defaults)
        return defaults

    def update_subjects(self, subjects: List[SubjectConfig]) -> List[SubjectConfig]:
        """Replace the subject list. Saved results are left untouched."""
        names = [s.name for s in subjects]
        if len(names) != len(set(names)):
            raise ValueError("Subject names must be unique")
        self.storage.set(CONFIG, SUBJECTS_KEY, {
            "active_subjects": [s.model_dump() for s in subjects],
        })
        return subjects

    def max_marks_by_subject(self) -> Dict[str, int]:
        return {s.name: s.max_marks for s in self.get_subjects()}
