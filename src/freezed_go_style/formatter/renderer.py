"""
LineRenderer: produce the replacement text of one aligned constructor.
"""

from typing import List

from freezed_go_style.schemas import ColumnWidths, ListStyle, Parameter

SEPARATOR = ","


def render_parameter_line(param: Parameter, widths: ColumnWidths) -> str:
    """One aligned parameter line, without indentation."""
    cells = []
    for position in range(widths.max_decorator_count):
        decorator = param.decorators[position] if position < len(param.decorators) else ""
        cells.append(decorator.ljust(widths.per_decorator_position.get(position, 0)) + " ")
    cells.append(param.type_text.ljust(widths.max_type_width) + " ")
    cells.append(param.name + SEPARATOR)
    return "".join(cells)


def render_constructor(
    head: str,
    style: ListStyle,
    clause: str,
    parameters: List[Parameter],
    widths: ColumnWidths,
    indent: str = "",
    indent_unit: str = "  ",
    newline: str = "\n",
) -> str:
    """
    Replacement text for a constructor, from its first token through the
    terminating semicolon.

    The first line carries no indentation because the span starts at the
    first token; the existing indentation in front of it is kept.

    Args:
        head: Declaration up to the opening parenthesis, e.g. "const factory User"
        style: Parameter list style (decides the brace/bracket pair)
        clause: Original text after the closing parenthesis, e.g. " = _User;"
        parameters: Parameters in source order
        widths: Column widths computed over parameters
        indent: Indentation of the line holding the constructor
        indent_unit: Extra indentation for parameter and comment lines
        newline: Line ending of the file
    """
    param_indent = indent + indent_unit
    lines = [f"{head.strip()}({style.opener}"]

    for param in parameters:
        for comment in param.comments:
            lines.append(param_indent + comment)
        lines.append(param_indent + render_parameter_line(param, widths))

    lines.append(f"{indent}{style.closer}){clause}")
    return newline.join(lines)
