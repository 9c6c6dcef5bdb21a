from fastapi import APIRouter, Depends
from typing import Dict, Any

from maktab.config.school_config import SchoolConfig
from maktab.dependencies import get_school_config, get_subject_service
from maktab.subjects.service import SubjectService

router = APIRouter(
    prefix="/api/config",
    tags=["configuration"]
)

@router.get("/school-options")
def get_school_options(
    config: SchoolConfig = Depends(get_school_config),
    subjects: SubjectService = Depends(get_subject_service),
) -> Dict[str, Any]:
    """
    Get the options used to populate dropdowns in the frontend.
    """
    return {
        "classes": config.classes,
        "months": config.months,
        "subjects": [s.model_dump() for s in subjects.get_subjects()],
    }
