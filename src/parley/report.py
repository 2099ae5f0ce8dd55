from __future__ import annotations

from parley.models.scoring import ScoringResult


def result_to_markdown(result: ScoringResult) -> str:
    """Render a scoring result as a Markdown summary for trainees and reviewers."""
    level = result.performance_level
    lines: list[str] = []
    lines.append("# Training Performance Evaluation")
    lines.append("")
    lines.append(f"- **Score**: {result.percentage:.1f}%")
    lines.append(
        f"- **Weighted points**: {result.total_score:.1f} / {result.max_total_score:.1f}"
    )
    lines.append(f"- **Performance level**: {level.level}")
    lines.append(f"- {level.description}")
    lines.append("")
    lines.append("## Overall feedback")
    lines.append(result.overall_feedback)
    lines.append("")
    lines.append("## Rubric scores")
    for s in result.rubric_scores:
        lines.append(f"### {s.metric_name}")
        lines.append(f"- **Score**: {s.score:g} / {s.max_score:g} (weight {s.weight:g})")
        lines.append(f"- **Feedback**: {s.feedback}")
        if s.evidence:
            lines.append("- **Evidence**:")
            for quote in s.evidence:
                lines.append(f'  - "{quote}"')
        lines.append("")
    if result.strengths:
        lines.append("## Strengths")
        for item in result.strengths:
            lines.append(f"- {item}")
        lines.append("")
    if result.areas_for_improvement:
        lines.append("## Areas for improvement")
        for item in result.areas_for_improvement:
            lines.append(f"- {item}")
    return "\n".join(lines).rstrip() + "\n"
