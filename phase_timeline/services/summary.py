from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total} success={success} failed={failed} mapping_required={m}
phases={phases} span={first_start}..{last_end}

span is "-" when no batch produced a timeline.
"""


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a run.

    Examples:
        >>> from datetime import date
        >>> from phase_timeline.models.processing_result import BatchStatus, FileStat
        >>> stat = FileStat("a.csv", BatchStatus.SUCCESS, phases=2,
        ...                 start_date=date(2024, 1, 1), end_date=date(2024, 3, 31))
        >>> render_summary_line(RunResult(file_stats=(stat,)))
        'SUMMARY files=1 success=1 failed=0 mapping_required=0 phases=2 span=2024-01-01..2024-03-31'
    """
    span = result.span
    span_str = f"{span[0].isoformat()}..{span[1].isoformat()}" if span else "-"
    return (
        f"SUMMARY files={len(result.file_stats)} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"mapping_required={result.mapping_required_files} "
        f"phases={result.total_phases} "
        f"span={span_str}"
    )
