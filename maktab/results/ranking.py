from typing import Iterable


def rank_from_totals(totals: Iterable[float], my_total: float) -> int:
    """
    Position of ``my_total`` among ``totals`` sorted high to low, counting from 1.

    Tied totals share the rank of the first one in the sorted list, so
    [90, 90, 70] ranks 90 as 1 and 70 as 3. Returns 0 when ``my_total`` is not
    among the totals.
    """
    ordered = sorted(totals, reverse=True)
    try:
        return ordered.index(my_total) + 1
    except ValueError:
        return 0
