"""Unit tests for criteria lookup and optimization step sequencing."""

import pytest

from desyde.errors import StepRangeError
from desyde.settings import Config, CriteriaResolver, StepSequencer
from desyde.settings.types import OptCriterion

POWER = OptCriterion.POWER
THROUGHPUT = OptCriterion.THROUGHPUT
LATENCY = OptCriterion.LATENCY


# ============================================================================
# CriteriaResolver
# ============================================================================

class TestCriteriaResolver:

    def test_has_criterion(self):
        resolver = CriteriaResolver((POWER, THROUGHPUT))

        assert resolver.has_criterion(POWER)
        assert resolver.has_criterion(THROUGHPUT)
        assert not resolver.has_criterion(LATENCY)

    @pytest.mark.parametrize("criteria,expected", [
        ((), False),
        ((THROUGHPUT,), False),
        ((THROUGHPUT, POWER), True),
        ((POWER, POWER, LATENCY), True),
    ])
    def test_is_multi_step(self, criteria, expected):
        assert CriteriaResolver(criteria).is_multi_step() is expected

    def test_governing_criterion(self):
        resolver = CriteriaResolver((THROUGHPUT, POWER, LATENCY))

        assert resolver.governing_criterion(0) is THROUGHPUT
        assert resolver.governing_criterion(1) is POWER
        assert resolver.governing_criterion(2) is LATENCY

    @pytest.mark.parametrize("step", [3, 4, -1])
    def test_governing_criterion_out_of_range(self, step):
        resolver = CriteriaResolver((THROUGHPUT, POWER, LATENCY))

        with pytest.raises(StepRangeError):
            resolver.governing_criterion(step)

    def test_step_range_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            CriteriaResolver(()).governing_criterion(0)


# ============================================================================
# StepSequencer
# ============================================================================

class TestStepSequencer:

    def test_starts_at_step_zero(self, make_settings):
        sequencer = StepSequencer(make_settings(THROUGHPUT, POWER))
        assert sequencer.current_step == 0

    def test_advance_increments_by_one(self, make_settings):
        settings = make_settings(THROUGHPUT, POWER, LATENCY)
        sequencer = StepSequencer(settings)

        assert sequencer.advance() == 1
        assert sequencer.current_step == 1
        assert settings.optimization_step == 1

        assert sequencer.advance() == 2
        assert sequencer.current_step == 2

    def test_len_minus_one_advances_reach_last_step(self, make_settings):
        criteria = (THROUGHPUT, POWER, LATENCY, POWER)
        sequencer = StepSequencer(make_settings(*criteria))

        for _ in range(len(criteria) - 1):
            sequencer.advance()

        assert sequencer.current_step == len(criteria) - 1

    def test_advance_past_last_step_is_fatal(self, make_settings):
        sequencer = StepSequencer(make_settings(THROUGHPUT, POWER))
        sequencer.advance()

        with pytest.raises(StepRangeError):
            sequencer.advance()
        # Cursor unchanged by the failed advance
        assert sequencer.current_step == 1

    def test_advance_without_criteria_is_fatal(self, make_settings):
        sequencer = StepSequencer(make_settings())

        with pytest.raises(StepRangeError):
            sequencer.advance()

    def test_do_optimize(self, make_settings):
        assert StepSequencer(make_settings(POWER)).do_optimize()
        assert not StepSequencer(make_settings()).do_optimize()

    def test_step_implicit_queries_follow_cursor(self, make_settings):
        sequencer = StepSequencer(make_settings(THROUGHPUT, POWER))

        assert sequencer.do_optimize_thput()
        assert not sequencer.do_optimize_power()

        sequencer.advance()

        assert not sequencer.do_optimize_thput()
        assert sequencer.do_optimize_power()

    def test_step_queries_on_empty_criteria_raise(self, make_settings):
        sequencer = StepSequencer(make_settings())

        with pytest.raises(StepRangeError):
            sequencer.do_optimize_thput()


# ============================================================================
# Config step API
# ============================================================================

class TestConfigStepQueries:

    @pytest.mark.parametrize("criteria", [
        (THROUGHPUT,),
        (POWER, THROUGHPUT),
        (LATENCY, POWER, THROUGHPUT, THROUGHPUT),
        (OptCriterion.NONE, POWER),
    ])
    def test_step_qualified_queries_match_criteria(self, make_settings, criteria):
        config = Config.from_settings(make_settings(*criteria))

        for step, criterion in enumerate(criteria):
            assert config.do_optimize_thput(step) == (criterion is THROUGHPUT)
            assert config.do_optimize_power(step) == (criterion is POWER)

    def test_do_multi_step_iff_more_than_one_criterion(self, make_settings):
        assert not Config.from_settings(make_settings()).do_multi_step()
        assert not Config.from_settings(make_settings(POWER)).do_multi_step()
        assert Config.from_settings(make_settings(POWER, THROUGHPUT)).do_multi_step()

    def test_query_at_criteria_length_raises(self, make_settings):
        config = Config.from_settings(make_settings(POWER, THROUGHPUT))

        with pytest.raises(StepRangeError):
            config.do_optimize_thput(2)
        with pytest.raises(StepRangeError):
            config.do_optimize_power(2)

    def test_staged_run(self, make_settings):
        """Driver loop over a throughput-then-power run."""
        config = Config.from_settings(make_settings(THROUGHPUT, POWER))
        seen = []

        while True:
            seen.append("thput" if config.do_optimize_thput() else "power")
            if config.settings.optimization_step == len(config.settings.criteria) - 1:
                break
            config.inc_optimization_step()

        assert seen == ["thput", "power"]
