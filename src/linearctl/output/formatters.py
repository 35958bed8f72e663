"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and panels) or
machines (--json).  The formatter layer picks the mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from linearctl.output.renderers import render_result

if TYPE_CHECKING:
    from linearctl.services.result import ServiceResult


def format_result(
    result: ServiceResult, *, json_output: bool = False, verbose: bool = False
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return Rich-rendered text.
        verbose: Include error detail and the telemetry span tree.
    """
    if json_output:
        return result.model_dump_json(indent=2, exclude_none=True)
    return render_result(result, verbose=verbose)
