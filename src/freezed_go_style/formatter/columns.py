"""
AlignmentCalculator: column widths for one constructor's parameter block.
"""

from typing import Dict, List

from freezed_go_style.schemas import ColumnWidths, Parameter


def compute_column_widths(parameters: List[Parameter]) -> ColumnWidths:
    """
    Widest decorator per position, decorator count and widest type.

    A parameter without a decorator at position i does not take part in
    that position's width (it is not counted as zero-length).
    """
    per_position: Dict[int, int] = {}
    for param in parameters:
        for index, decorator in enumerate(param.decorators):
            per_position[index] = max(per_position.get(index, 0), len(decorator))

    return ColumnWidths(
        per_decorator_position=per_position,
        max_decorator_count=max((len(p.decorators) for p in parameters), default=0),
        max_type_width=max((len(p.type_text) for p in parameters), default=0),
    )
