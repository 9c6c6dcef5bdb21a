"""
Grade table and the aggregate computed from a marks map.

The same table is used for two different things: the grade of a raw subject
mark on the marksheet, and the overall grade of an exam percentage. A raw mark
out of a subject whose maximum is not 100 is still banded as if it were out of 100.
"""
from typing import Dict, Mapping, NamedTuple

from maktab.config.school_config import FALLBACK_MAX_MARKS, PASS_MARK

# (inclusive lower bound, grade, performance level), checked top-down
GRADE_TABLE = [
    (85, "A+", "OPL"),
    (80, "A", "OPL"),
    (70, "B+", "APL"),
    (60, "B", "APL"),
    (50, "C+", "MPL"),
    (35, "C", "MPL"),
]
LOWEST_GRADE = ("D", "BPL")

PERFORMANCE_LEVELS = {
    "OPL": "Outstanding Performance Level",
    "APL": "Achieved Performance Level",
    "MPL": "Minimum Performance Level",
    "BPL": "Below Performance Level",
}


class GradeInfo(NamedTuple):
    grade: str
    performance_level: str


def grade_of(score: float) -> GradeInfo:
    for lower_bound, grade, level in GRADE_TABLE:
        if score >= lower_bound:
            return GradeInfo(grade, level)
    return GradeInfo(*LOWEST_GRADE)


def summarize_marks(
    marks: Mapping[str, float],
    max_marks: Mapping[str, int],
    pass_mark: float = PASS_MARK,
    fallback_max: int = FALLBACK_MAX_MARKS,
) -> Dict:
    """
    Recompute every derived field of a result from its marks map.

    ``max_marks`` is the current subject configuration; subjects no longer in it
    count ``fallback_max`` towards the maximum. The output depends only on the
    contents of ``marks``, never on insertion order.
    """
    total = 0
    max_total = 0
    is_pass = True
    for subject in sorted(marks):
        score = marks[subject]
        total += score
        max_total += max_marks.get(subject, fallback_max)
        if score < pass_mark:
            is_pass = False

    percentage = round(total / max_total * 100, 2) if max_total > 0 else 0
    return {
        "total_marks": total,
        "max_total_marks": max_total,
        "percentage": percentage,
        "overall_grade": grade_of(percentage).grade,
        "is_pass": is_pass,
    }
