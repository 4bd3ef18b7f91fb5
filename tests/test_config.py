import pytest

from somfilter.config import FilteringArguments, ThresholdStrategy


def test_defaults():
    args = FilteringArguments()
    assert args.threshold_strategy is ThresholdStrategy.OPTIMAL_F_SCORE
    assert args.posterior_threshold == 0.1
    assert args.max_false_positive_rate == 0.05
    assert args.f_score_beta == 1.0
    assert args.contamination_estimate == 0.0


@pytest.mark.parametrize(
    "name, expected",
    [
        ("CONSTANT", ThresholdStrategy.CONSTANT),
        ("false_discovery_rate", ThresholdStrategy.FALSE_DISCOVERY_RATE),
        ("optimal-f-score", ThresholdStrategy.OPTIMAL_F_SCORE),
        (ThresholdStrategy.CONSTANT, ThresholdStrategy.CONSTANT),
    ],
)
def test_parse_strategy(name, expected):
    assert ThresholdStrategy.parse(name) is expected


def test_unknown_strategy_name_is_rejected():
    with pytest.raises(ValueError, match="Unknown threshold strategy"):
        FilteringArguments(threshold_strategy="MEDIAN")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"posterior_threshold": 1.5},
        {"posterior_threshold": -0.1},
        {"max_false_positive_rate": -0.01},
        {"f_score_beta": -1.0},
        {"f_score_beta": float("nan")},
        {"contamination_estimate": 2.0},
    ],
)
def test_invalid_parameters_are_rejected(kwargs):
    with pytest.raises(ValueError):
        FilteringArguments(**kwargs)


def test_contamination_estimate_may_be_unset():
    assert FilteringArguments(contamination_estimate=None).contamination_estimate is None
