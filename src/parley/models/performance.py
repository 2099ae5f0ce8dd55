from pydantic import BaseModel, ConfigDict


class PerformanceLevel(BaseModel):
    """Display band for a percentage score. Not used by the scoring arithmetic."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str
    color: str
    description: str


# (inclusive lower bound, band), checked top-down
PERFORMANCE_BANDS: tuple[tuple[float, PerformanceLevel], ...] = (
    (
        90.0,
        PerformanceLevel(
            level="Excellent",
            color="#4caf50",
            description="Outstanding performance! You exceeded expectations.",
        ),
    ),
    (
        75.0,
        PerformanceLevel(
            level="Good",
            color="#8bc34a",
            description="Good job! You demonstrated strong skills.",
        ),
    ),
    (
        60.0,
        PerformanceLevel(
            level="Satisfactory",
            color="#ff9800",
            description="Satisfactory performance with room for improvement.",
        ),
    ),
    (
        40.0,
        PerformanceLevel(
            level="Needs Improvement",
            color="#ff5722",
            description="Additional practice recommended to improve skills.",
        ),
    ),
)

UNSATISFACTORY = PerformanceLevel(
    level="Unsatisfactory",
    color="#f44336",
    description="Significant improvement needed. Consider reviewing training materials.",
)


def get_performance_level(percentage: float) -> PerformanceLevel:
    """Map a 0-100 percentage onto its performance band."""
    for lower_bound, band in PERFORMANCE_BANDS:
        if percentage >= lower_bound:
            return band
    return UNSATISFACTORY
