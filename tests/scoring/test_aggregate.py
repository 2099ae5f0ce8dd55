from typing import Any

import pytest

from parley.errors import MalformedResponseError
from parley.models.response import GeneratedEvaluation
from parley.scoring.aggregate import (
    NO_FEEDBACK,
    NO_OVERALL_FEEDBACK,
    aggregate,
    clamp_score,
    map_rubric_scores,
    round_percentage,
)


def _generated(entries: list[dict[str, Any]], **extra: Any) -> GeneratedEvaluation:
    return GeneratedEvaluation.model_validate({"rubric_scores": entries, **extra})


class TestClampScore:
    @pytest.mark.parametrize(
        "raw, expected",
        [(-3, 1), (0, 1), (1, 1), (3.5, 3.5), (5, 5), (7, 5), (1e9, 5)],
    )
    def test_clamps_into_inclusive_range(self, make_rubric: Any, raw: float, expected: float) -> None:
        rubric = make_rubric(min_score=1, max_score=5)
        assert clamp_score(raw, rubric) == expected


class TestRoundPercentage:
    @pytest.mark.parametrize(
        "value, expected",
        [(86.66666, 86.7), (86.65, 86.7), (86.64, 86.6), (100.0, 100.0), (0.04, 0.0), (89.95, 90.0)],
    )
    def test_one_decimal_half_up(self, value: float, expected: float) -> None:
        assert round_percentage(value) == pytest.approx(expected)


class TestMapRubricScores:
    def test_positional_mapping(self, make_rubric: Any) -> None:
        rubrics = [make_rubric("first", max_score=10), make_rubric("second", max_score=5)]
        generated = _generated(
            [
                {"score": 9, "feedback": "great", "evidence": ["q1"]},
                {"score": 2, "feedback": "meh", "evidence": []},
            ]
        )
        scores = map_rubric_scores(generated, rubrics)

        assert [s.rubric_id for s in scores] == ["first", "second"]
        assert [s.score for s in scores] == [9, 2]
        assert scores[0].evidence == ["q1"]
        assert scores[1].max_score == 5

    def test_echoed_ids_do_not_override_position(
        self, make_rubric: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        rubrics = [make_rubric("a"), make_rubric("b")]
        generated = _generated(
            [{"rubric_id": "b", "score": 1}, {"rubric_id": "a", "score": 9}]
        )
        with caplog.at_level("WARNING", logger="parley"):
            scores = map_rubric_scores(generated, rubrics)

        assert [(s.rubric_id, s.score) for s in scores] == [("a", 1), ("b", 9)]
        assert "using position" in caplog.text

    def test_defaults_for_missing_narrative(self, make_rubric: Any) -> None:
        scores = map_rubric_scores(
            _generated([{"score": 4}, {"score": 5, "feedback": "   "}]),
            [make_rubric("a"), make_rubric("b")],
        )
        assert scores[0].feedback == NO_FEEDBACK
        assert scores[0].evidence == []
        assert scores[1].feedback == NO_FEEDBACK

    def test_out_of_range_scores_are_clamped(self, make_rubric: Any) -> None:
        scores = map_rubric_scores(
            _generated([{"score": 12}, {"score": -2}]),
            [make_rubric("a", max_score=10), make_rubric("b", min_score=1, max_score=5)],
        )
        assert [s.score for s in scores] == [10, 1]

    def test_fewer_entries_than_rubrics(self, make_rubric: Any) -> None:
        with pytest.raises(MalformedResponseError, match="Expected 2 rubric scores, got 1"):
            map_rubric_scores(_generated([{"score": 4}]), [make_rubric("a"), make_rubric("b")])

    def test_more_entries_than_rubrics(self, make_rubric: Any) -> None:
        with pytest.raises(MalformedResponseError, match="Expected 1 rubric scores, got 2"):
            map_rubric_scores(_generated([{"score": 4}, {"score": 5}]), [make_rubric("a")])


class TestAggregate:
    def test_weighted_total_and_percentage(self, make_rubric: Any) -> None:
        rubrics = [make_rubric("a", weight=1.0), make_rubric("b", weight=2.0)]
        generated = _generated([{"score": 8}, {"score": 9}], overall_feedback="Well done")
        result = aggregate(map_rubric_scores(generated, rubrics), rubrics, generated)

        assert result.total_score == pytest.approx(2.6)
        assert result.max_total_score == pytest.approx(3.0)
        assert result.percentage == 86.7
        assert result.overall_feedback == "Well done"

    def test_denominator_is_sum_of_weights_not_ranges(self, make_rubric: Any) -> None:
        rubrics = [make_rubric("a", max_score=100, weight=1), make_rubric("b", max_score=4, weight=1)]
        generated = _generated([{"score": 50}, {"score": 4}])
        result = aggregate(map_rubric_scores(generated, rubrics), rubrics, generated)

        assert result.max_total_score == 2
        assert result.total_score == pytest.approx(1.5)
        assert result.percentage == 75.0

    def test_zero_weight_rubric_contributes_nothing(self, make_rubric: Any) -> None:
        rubrics = [make_rubric("a", weight=0), make_rubric("b", weight=1)]
        generated = _generated([{"score": 0}, {"score": 10}])
        result = aggregate(map_rubric_scores(generated, rubrics), rubrics, generated)

        assert result.percentage == 100.0

    def test_narrative_defaults(self, make_rubric: Any) -> None:
        rubrics = [make_rubric()]
        generated = _generated([{"score": 5}])
        result = aggregate(map_rubric_scores(generated, rubrics), rubrics, generated)

        assert result.overall_feedback == NO_OVERALL_FEEDBACK
        assert result.strengths == []
        assert result.areas_for_improvement == []
