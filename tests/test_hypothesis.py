import logging
import math

import numpy as np
import pytest
from scipy import stats as scipy_stats

from colstats.errors import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    NonFiniteInputError,
    StatisticsError,
)
from colstats.schema import RegressionResult, Tail
from colstats.stats.hypothesis import (
    anova_1way_test,
    matched_pairs_t_test,
    one_samp_t_test,
    one_samp_z_test,
    regression_test,
    two_samp_t_test,
    variance_test,
)

A = [1.0, 2.0, 3.0, 4.0, 5.0]
B = [2.0, 3.0, 4.0, 5.0, 6.0]


def test_one_samp_z_test_known_dataset():
    two_sided = one_samp_z_test(A, "two-sided", 0.0)
    greater = one_samp_z_test(A, "greater", 0.0)
    less = one_samp_z_test(A, "less", 0.0)

    assert np.isclose(two_sided.statistic, 3.0 / math.sqrt(0.5))
    assert np.isclose(two_sided.p_value, 2.209e-5, rtol=1e-2)
    assert np.isclose(greater.p_value, 1.105e-5, rtol=1e-2)
    assert np.isclose(less.p_value, 1.0, atol=1e-4)
    assert two_sided.df == ()


def test_one_samp_z_test_two_sided_handles_negative_statistic():
    result = one_samp_z_test(A, Tail.TWO_SIDED, mu0=6.0)
    assert result.statistic < 0
    assert 0.0 <= result.p_value <= 1.0
    mirrored = one_samp_z_test(A, Tail.TWO_SIDED, mu0=0.0)
    assert np.isclose(result.p_value, mirrored.p_value)


def test_one_samp_t_test_known_dataset():
    assert np.isclose(one_samp_t_test(A, "two-sided", 0.0).p_value, 0.01324, atol=1e-4)
    assert np.isclose(one_samp_t_test(A, "greater", 0.0).p_value, 0.006618, atol=1e-5)
    assert np.isclose(one_samp_t_test(A, "less", 0.0).p_value, 0.9934, atol=1e-4)


def test_one_samp_t_test_matches_scipy():
    sample = [4.9, 5.3, 4.6, 5.1, 5.8, 4.7, 5.0]
    expected = scipy_stats.ttest_1samp(sample, popmean=4.76)
    result = one_samp_t_test(sample, "two-sided", mu0=4.76)
    assert np.isclose(result.statistic, expected.statistic)
    assert np.isclose(result.p_value, expected.pvalue)
    assert result.df == (6.0,)


def test_two_samp_t_test_known_dataset():
    assert np.isclose(two_samp_t_test(A, B, 0.0, "two-sided").p_value, 0.3466, atol=1e-4)
    assert np.isclose(two_samp_t_test(A, B, 0.0, "greater").p_value, 0.8267, atol=1e-4)
    assert np.isclose(two_samp_t_test(A, B, 0.0, "less").p_value, 0.1733, atol=1e-4)


def test_two_samp_t_test_matches_scipy_welch():
    x1 = [12.1, 14.3, 11.8, 15.2, 13.7, 12.9]
    x2 = [10.2, 9.8, 11.5, 10.9]
    expected = scipy_stats.ttest_ind(x1, x2, equal_var=False)
    result = two_samp_t_test(x1, x2)
    assert np.isclose(result.statistic, expected.statistic)
    assert np.isclose(result.p_value, expected.pvalue)


def test_two_samp_t_test_shifts_by_delta0():
    shifted = two_samp_t_test(B, A, delta0=1.0)
    assert np.isclose(shifted.statistic, 0.0)
    assert np.isclose(shifted.p_value, 1.0)


def test_matched_pairs_t_test_known_dataset():
    paired = [2.0, 5.0, 4.0, 7.0, 9.0]
    two_sided = matched_pairs_t_test(A, paired, 0.0, "two-sided")
    assert np.isclose(two_sided.statistic, -4.0)
    assert np.isclose(two_sided.p_value, 0.01613, atol=1e-4)
    assert np.isclose(matched_pairs_t_test(A, paired, 0.0, "greater").p_value, 0.9919, atol=1e-4)
    assert np.isclose(matched_pairs_t_test(A, paired, 0.0, "less").p_value, 0.008065, atol=1e-5)


def test_matched_pairs_requires_equal_length():
    with pytest.raises(InvalidParameterError):
        matched_pairs_t_test(A, [1.0, 2.0, 3.0])


def test_variance_test_known_dataset():
    assert np.isclose(variance_test(A, B, "less").p_value, 0.5)
    assert np.isclose(variance_test(A, B, "greater").p_value, 0.5)
    assert np.isclose(variance_test(A, B, "two-sided").p_value, 1.0)
    assert np.isclose(variance_test(A, B).statistic, 1.0)


def test_variance_test_two_sided_is_twice_the_smaller_tail():
    wide = [1.0, 9.0, 2.5, 8.0, 0.5, 7.5]
    narrow = [4.9, 5.1, 5.0, 5.3, 4.8]
    for x1, x2 in ((wide, narrow), (narrow, wide), (A, B)):
        less = variance_test(x1, x2, "less").p_value
        greater = variance_test(x1, x2, "greater").p_value
        two_sided = variance_test(x1, x2, "two-sided").p_value
        assert np.isclose(two_sided, min(1.0, 2.0 * min(less, greater)))
        assert np.isclose(less + greater, 1.0)


def test_variance_test_reports_degrees_of_freedom():
    result = variance_test(A, [1.0, 4.0, 2.0])
    assert result.df == (4.0, 2.0)


def test_anova_known_dataset():
    result = anova_1way_test([A, B])
    assert np.isclose(result.statistic, 1.0)
    assert np.isclose(result.p_value, 0.3466, atol=1e-4)
    assert result.df == (1.0, 8.0)


def test_anova_two_groups_equals_pooled_t_squared():
    x1 = [2.1, 3.4, 1.9, 5.0, 4.2]
    x2 = [6.3, 5.5, 7.1, 4.8]
    pooled = scipy_stats.ttest_ind(x1, x2, equal_var=True)
    result = anova_1way_test([x1, x2])
    assert np.isclose(result.statistic, pooled.statistic**2)
    assert np.isclose(result.p_value, pooled.pvalue)


def test_anova_matches_scipy_for_unequal_groups():
    groups = [[4.2, 4.8, 5.1], [5.9, 6.3, 5.7, 6.8], [4.9, 5.2, 5.0, 5.5, 4.7]]
    expected = scipy_stats.f_oneway(*groups)
    result = anova_1way_test(groups)
    assert np.isclose(result.statistic, expected.statistic)
    assert np.isclose(result.p_value, expected.pvalue)


def test_anova_input_validation():
    with pytest.raises(InsufficientDataError):
        anova_1way_test([A])
    with pytest.raises(InsufficientDataError):
        anova_1way_test([[1.0], [2.0]])
    with pytest.raises(InsufficientDataError):
        anova_1way_test([A, []])
    with pytest.raises(DegenerateInputError):
        anova_1way_test([[1.0, 1.0], [2.0, 2.0]])
    with pytest.raises(NonFiniteInputError):
        anova_1way_test([A, [1.0, math.nan]])


def test_regression_known_dataset():
    result = regression_test(A, [2.0, 30.0, 4.0, 50.0, 6.0])
    assert isinstance(result, RegressionResult)
    assert np.isclose(result.statistic, 0.1396, atol=1e-4)
    assert np.isclose(result.p_value, 0.7335, atol=1e-4)
    assert np.isclose(result.slope, 2.8)
    assert np.isclose(result.intercept, 10.0)
    assert result.df == (1.0, 3.0)


def test_regression_matches_linregress():
    x = [0.5, 1.1, 2.3, 2.9, 4.2, 5.0, 6.4]
    y = [1.2, 1.9, 3.8, 4.1, 6.6, 7.0, 9.5]
    fit = scipy_stats.linregress(x, y)
    result = regression_test(x, y)
    t_slope = fit.slope / fit.stderr
    assert np.isclose(result.statistic, t_slope**2)
    assert np.isclose(result.p_value, fit.pvalue)
    assert np.isclose(result.r_squared, fit.rvalue**2)


def test_regression_perfect_fit_gives_infinite_statistic():
    result = regression_test(A, [2.0, 4.0, 6.0, 8.0, 10.0])
    assert math.isinf(result.statistic) or result.statistic > 1e12
    assert result.p_value < 1e-12
    assert np.isclose(result.r_squared, 1.0)


def test_regression_unrelated_data_gives_large_p_value():
    result = regression_test(A, [1.0, 3.0, 5.0, 3.0, 1.0])
    assert np.isclose(result.statistic, 0.0)
    assert np.isclose(result.p_value, 1.0)

    rng = np.random.default_rng(2024)
    p_values = [
        regression_test(np.arange(30.0), rng.normal(size=30)).p_value
        for _ in range(200)
    ]
    assert 0.4 < float(np.mean(p_values)) < 0.6


def test_regression_input_validation():
    with pytest.raises(InsufficientDataError):
        regression_test([1.0, 2.0], [3.0, 4.0])
    with pytest.raises(InvalidParameterError):
        regression_test(A, [1.0, 2.0, 3.0])
    with pytest.raises(DegenerateInputError):
        regression_test([3.0, 3.0, 3.0], [1.0, 2.0, 3.0])
    with pytest.raises(DegenerateInputError):
        regression_test(A, [4.0] * 5)


@pytest.mark.parametrize("tails", ["both", "two_sided", "", None, 2])
def test_invalid_tail_selector_raises(tails):
    with pytest.raises(InvalidParameterError):
        one_samp_z_test(A, tails)
    with pytest.raises(InvalidParameterError):
        variance_test(A, B, tails)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        one_samp_t_test([1.0], "less")
    assert issubclass(InvalidParameterError, StatisticsError)


def test_zero_variance_tests_are_degenerate():
    with pytest.raises(DegenerateInputError):
        one_samp_t_test([3.0, 3.0, 3.0])
    with pytest.raises(DegenerateInputError):
        two_samp_t_test([1.0, 1.0], [2.0, 2.0])
    with pytest.raises(DegenerateInputError):
        variance_test([1.0, 1.0, 1.0], B)
    with pytest.raises(DegenerateInputError):
        matched_pairs_t_test(A, B)


@pytest.mark.parametrize("constant", [[0.1, 0.1, 0.1], [0.7, 0.7, 0.7]])
def test_constant_decimal_samples_are_degenerate(constant):
    with pytest.raises(DegenerateInputError):
        one_samp_z_test(constant)
    with pytest.raises(DegenerateInputError):
        one_samp_t_test(constant)
    with pytest.raises(DegenerateInputError):
        variance_test(constant, [1.0, 2.0, 3.0])
    with pytest.raises(DegenerateInputError):
        variance_test([1.0, 2.0, 3.0], constant)
    with pytest.raises(DegenerateInputError):
        regression_test(constant, [1.0, 2.0, 3.0])
    with pytest.raises(DegenerateInputError):
        regression_test([1.0, 2.0, 3.0], constant)


def test_anova_constant_decimal_groups_are_degenerate():
    with pytest.raises(DegenerateInputError):
        anova_1way_test([[0.1, 0.1, 0.1], [0.7, 0.7, 0.7]])


def test_anova_allows_constant_groups_when_another_varies():
    result = anova_1way_test([[0.1, 0.1, 0.1], [0.7, 0.8, 0.9]])
    expected = scipy_stats.f_oneway([0.1, 0.1, 0.1], [0.7, 0.8, 0.9])
    assert np.isclose(result.statistic, expected.statistic)
    assert np.isclose(result.p_value, expected.pvalue)


def test_overflowing_samples_raise_instead_of_nan():
    huge = [1e200, -1e200, 0.0]
    with pytest.raises(NonFiniteInputError):
        variance_test(huge, huge)
    with pytest.raises(NonFiniteInputError):
        one_samp_t_test(huge)
    with pytest.raises(NonFiniteInputError):
        two_samp_t_test(huge, A)
    with pytest.raises(NonFiniteInputError):
        anova_1way_test([huge, A])
    with pytest.raises(NonFiniteInputError):
        regression_test(huge, [1.0, 2.0, 4.0])


@pytest.mark.parametrize("mu0", [math.nan, math.inf, "3"])
def test_non_finite_null_value_raises(mu0):
    with pytest.raises(InvalidParameterError):
        one_samp_t_test(A, "two-sided", mu0)


def test_tests_log_statistics_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="colstats.stats.hypothesis")
    regression_test(A, [2.0, 30.0, 4.0, 50.0, 6.0])
    assert any("regression_test:" in rec.message for rec in caplog.records)
