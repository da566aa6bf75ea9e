"""Tests for configuration validation."""

import warnings

import pytest

from dismal.config import ConfigValidator
from dismal.simulation import Simulation


class TestTypeValidation:
    """Test type checking for configuration parameters."""

    def test_integer_params_accept_int(self):
        """Integer parameters should accept int values."""
        cfg = {"n_agents": 100, "n_iters": 50, "sample_size": 4}
        # Should not raise
        ConfigValidator._validate_types(cfg)

    def test_integer_params_reject_float(self):
        cfg = {"n_agents": 100.5}
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types(cfg)

    def test_integer_params_reject_string(self):
        cfg = {"sample_size": "10"}
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types(cfg)

    def test_integer_params_reject_bool(self):
        """bool is an int subclass but not a valid count."""
        cfg = {"n_iters": True}
        with pytest.raises(ValueError, match="must be int"):
            ConfigValidator._validate_types(cfg)

    def test_seed_accepts_none(self):
        ConfigValidator._validate_types({"seed": None})

    def test_float_params_accept_int(self):
        """Float parameters should accept int values (coercion)."""
        ConfigValidator._validate_types({"money_init": 5, "price_adjust": 0})

    def test_float_params_reject_string(self):
        cfg = {"min_price": "0.2"}
        with pytest.raises(ValueError, match="must be float"):
            ConfigValidator._validate_types(cfg)

    def test_str_or_none_params(self):
        ConfigValidator._validate_types(
            {"pipeline_path": None, "log_file": "out.dat", "init_strategy": None}
        )
        with pytest.raises(ValueError, match="must be str or None"):
            ConfigValidator._validate_types({"log_file": 3})

    def test_variant_must_be_string(self):
        with pytest.raises(ValueError, match="'variant' must be str"):
            ConfigValidator._validate_types({"variant": 1})

    def test_verbose_flags_type(self):
        ConfigValidator._validate_types({"verbose_flags": "CS"})
        ConfigValidator._validate_types({"verbose_flags": 12})
        with pytest.raises(ValueError, match="verbose_flags"):
            ConfigValidator._validate_types({"verbose_flags": ["C"]})


class TestRangeValidation:
    """Test parameter range checks."""

    @pytest.mark.parametrize(
        "key", ["n_agents", "n_iters", "sample_size", "report_steps"]
    )
    def test_counts_must_be_positive(self, key):
        with pytest.raises(ValueError, match=f"'{key}' must be >= 1"):
            ConfigValidator._validate_ranges({key: 0})

    def test_negative_seed_rejected(self):
        with pytest.raises(ValueError, match="'seed' must be >= 0"):
            ConfigValidator._validate_ranges({"seed": -1})

    @pytest.mark.parametrize("key", ["min_price", "max_production", "max_consumption"])
    def test_strictly_positive(self, key):
        with pytest.raises(ValueError, match=f"'{key}' must be > 0.0"):
            ConfigValidator._validate_ranges({key: 0.0})

    def test_zero_money_allowed(self):
        ConfigValidator._validate_ranges({"money_init": 0.0, "savings_level": 0.0})

    def test_negative_money_rejected(self):
        with pytest.raises(ValueError, match="'money_init' must be >= 0.0"):
            ConfigValidator._validate_ranges({"money_init": -1.0})


class TestChoiceValidation:
    def test_unknown_variant(self):
        with pytest.raises(ValueError, match="'variant' must be one of"):
            ConfigValidator._validate_choices({"variant": "keynes"})

    def test_unknown_init_strategy(self):
        with pytest.raises(ValueError, match="init_strategy"):
            ConfigValidator._validate_choices({"init_strategy": "random"})

    def test_unknown_verbose_letters(self):
        with pytest.raises(ValueError, match="Unknown verbose flag"):
            ConfigValidator._validate_choices({"verbose_flags": "CXZ"})

    def test_valid_choices(self):
        ConfigValidator._validate_choices(
            {"variant": "target", "init_strategy": "uniform", "verbose_flags": "TALCDS"}
        )


class TestRelationshipValidation:
    def test_min_above_max_consumption(self):
        cfg = {"min_consumption": 5.0, "max_consumption": 2.0}
        with pytest.raises(ValueError, match="min_consumption"):
            ConfigValidator._validate_relationships(cfg)

    def test_sensitivity_bounds_order(self):
        cfg = {"sensitivity_min": 0.1, "sensitivity_max": 0.01}
        with pytest.raises(ValueError, match="sensitivity_min"):
            ConfigValidator._validate_relationships(cfg)

    def test_low_production_warns(self):
        cfg = {"min_consumption": 3.0, "max_consumption": 10.0, "max_production": 2.0}
        with pytest.warns(UserWarning, match="max_production"):
            ConfigValidator._validate_relationships(cfg)

    def test_report_steps_above_n_iters_warns(self):
        with pytest.warns(UserWarning, match="report_steps"):
            ConfigValidator._validate_relationships({"n_iters": 5, "report_steps": 25})

    def test_no_warning_for_defaults(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            Simulation.init(n_agents=5)
        assert not [w for w in caught if issubclass(w.category, UserWarning)]


class TestLoggingValidation:
    def test_valid_logging(self):
        ConfigValidator._validate_logging(
            {"default_level": "deep_debug", "events": {"clear_market": "INFO"}}
        )

    def test_logging_must_be_dict(self):
        with pytest.raises(ValueError, match="must be dict"):
            ConfigValidator._validate_logging("DEBUG")

    def test_invalid_default_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            ConfigValidator._validate_logging({"default_level": "LOUD"})

    def test_invalid_event_level(self):
        with pytest.raises(ValueError, match="clear_market"):
            ConfigValidator._validate_logging({"events": {"clear_market": "LOUD"}})

    def test_empty_events_allowed(self):
        ConfigValidator._validate_logging({"events": None})


class TestSimulationIntegration:
    """Validation runs as part of Simulation.init()."""

    def test_bad_type_through_init(self):
        with pytest.raises(ValueError, match="must be int"):
            Simulation.init(n_agents=2.5)

    def test_bad_variant_through_init(self):
        with pytest.raises(ValueError, match="variant"):
            Simulation.init(variant="nope")

    def test_bad_yaml_value_through_init(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("min_price: -1\n")
        with pytest.raises(ValueError, match="min_price"):
            Simulation.init(config=path)
