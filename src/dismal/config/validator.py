"""Centralized configuration validation for Dismal."""

from __future__ import annotations

import warnings
from typing import Any

from dismal.config.schema import INIT_STRATEGIES, VARIANTS
from dismal.logging import VERBOSE_CODES


class ConfigValidator:
    """
    Centralized validation for simulation configuration.

    All validation happens once at Simulation.init() to ensure:
    - Type correctness
    - Valid parameter ranges
    - Relationship constraints between parameters
    - Clear error messages with actionable feedback
    """

    VALID_LOG_LEVELS = {"DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    @staticmethod
    def validate_config(cfg: dict[str, Any]) -> None:
        """
        Validate all configuration parameters.

        Parameters
        ----------
        cfg : dict
            Configuration dictionary to validate.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        ConfigValidator._validate_types(cfg)
        ConfigValidator._validate_ranges(cfg)
        ConfigValidator._validate_choices(cfg)
        ConfigValidator._validate_relationships(cfg)

        if "logging" in cfg:
            ConfigValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """
        Ensure correct types for configuration parameters.

        Raises
        ------
        ValueError
            If any parameter has incorrect type.
        """
        int_params = [
            "n_agents",
            "n_iters",
            "sample_size",
            "report_steps",
            "seed",
        ]

        float_params = [
            "money_init",
            "savings_level",
            "min_consumption",
            "max_consumption",
            "max_production",
            "expected_production",
            "min_price",
            "price_adjust",
            "poverty_line",
            "sensitivity_min",
            "sensitivity_max",
        ]

        str_or_none_params = ["init_strategy", "log_file", "pipeline_path"]

        for key in int_params:
            if key not in cfg:
                continue
            val = cfg[key]
            # bool is an int subclass but never a valid count
            if val is not None and (not isinstance(val, int) or isinstance(val, bool)):
                raise ValueError(
                    f"Config parameter '{key}' must be int, got {type(val).__name__}"
                )

        for key in float_params:
            if key not in cfg:
                continue
            val = cfg[key]
            if not isinstance(val, (int, float)) or isinstance(val, bool):
                raise ValueError(
                    f"Config parameter '{key}' must be float, got {type(val).__name__}"
                )

        for key in str_or_none_params:
            if key not in cfg:
                continue
            val = cfg[key]
            if val is not None and not isinstance(val, str):
                raise ValueError(
                    f"Config parameter '{key}' must be str or None, "
                    f"got {type(val).__name__}"
                )

        if "variant" in cfg and not isinstance(cfg["variant"], str):
            raise ValueError(
                f"Config parameter 'variant' must be str, "
                f"got {type(cfg['variant']).__name__}"
            )

        if "verbose_flags" in cfg:
            val = cfg["verbose_flags"]
            if val is not None and not isinstance(val, (str, int)):
                raise ValueError(
                    f"Config parameter 'verbose_flags' must be str or int, "
                    f"got {type(val).__name__}"
                )

    @staticmethod
    def _validate_ranges(cfg: dict[str, Any]) -> None:
        """
        Ensure parameters are in valid ranges.

        Raises
        ------
        ValueError
            If any parameter is out of valid range.
        """
        # (min_val, max_val, strict_min); None means unbounded
        constraints: dict[str, tuple[float | None, float | None, bool]] = {
            # Population and run length
            "n_agents": (1, None, False),
            "n_iters": (1, None, False),
            "report_steps": (1, None, False),
            "seed": (0, None, False),
            # Search friction
            "sample_size": (1, None, False),
            # Balances and quantities
            "money_init": (0.0, None, False),
            "savings_level": (0.0, None, False),
            "min_consumption": (0.0, None, False),
            "max_consumption": (0.0, None, True),
            "max_production": (0.0, None, True),
            "expected_production": (0.0, None, False),
            "poverty_line": (0.0, None, False),
            # Prices
            "min_price": (0.0, None, True),
            "price_adjust": (0.0, None, False),
            "sensitivity_min": (0.0, None, False),
            "sensitivity_max": (0.0, None, False),
        }

        for key, (min_val, max_val, strict) in constraints.items():
            if key not in cfg:
                continue

            val = cfg[key]

            if val is None:
                continue

            if min_val is not None:
                if strict and val <= min_val:
                    raise ValueError(
                        f"Config parameter '{key}' must be > {min_val}, got {val}"
                    )
                if val < min_val:
                    raise ValueError(
                        f"Config parameter '{key}' must be >= {min_val}, got {val}"
                    )

            if max_val is not None and val > max_val:
                raise ValueError(
                    f"Config parameter '{key}' must be <= {max_val}, got {val}"
                )

    @staticmethod
    def _validate_choices(cfg: dict[str, Any]) -> None:
        """
        Validate enumerated string parameters and verbose flag letters.

        Raises
        ------
        ValueError
            If a value is not one of the allowed choices.
        """
        if "variant" in cfg and cfg["variant"] not in VARIANTS:
            raise ValueError(
                f"Config parameter 'variant' must be one of {VARIANTS}, "
                f"got {cfg['variant']!r}"
            )

        init_strategy = cfg.get("init_strategy")
        if init_strategy is not None and init_strategy not in INIT_STRATEGIES:
            raise ValueError(
                f"Config parameter 'init_strategy' must be one of "
                f"{INIT_STRATEGIES} or None, got {init_strategy!r}"
            )

        flags = cfg.get("verbose_flags")
        if isinstance(flags, str):
            unknown = sorted(set(flags) - set(VERBOSE_CODES))
            if unknown:
                raise ValueError(
                    f"Unknown verbose flag(s) {''.join(unknown)!r}. "
                    f"Valid flags: {''.join(VERBOSE_CODES)}"
                )

    @staticmethod
    def _validate_relationships(cfg: dict[str, Any]) -> None:
        """
        Validate cross-parameter constraints.

        Raises
        ------
        ValueError
            If an ordering constraint is violated.
        """
        min_csmp = cfg.get("min_consumption", 0.0)
        max_csmp = cfg.get("max_consumption", float("inf"))
        if min_csmp > max_csmp:
            raise ValueError(
                f"min_consumption ({min_csmp}) must be <= "
                f"max_consumption ({max_csmp})"
            )

        lo = cfg.get("sensitivity_min", 0.0)
        hi = cfg.get("sensitivity_max", float("inf"))
        if lo > hi:
            raise ValueError(
                f"sensitivity_min ({lo}) must be <= sensitivity_max ({hi})"
            )

        # The model assumes supply always covers minimum consumption
        max_prod = cfg.get("max_production", float("inf"))
        if max_prod < min_csmp:
            warnings.warn(
                f"max_production ({max_prod}) < min_consumption ({min_csmp}). "
                "Supply cannot cover everyone's minimum consumption.",
                UserWarning,
                stacklevel=3,
            )

        n_iters = cfg.get("n_iters", 0)
        report_steps = cfg.get("report_steps", 0)
        if n_iters and report_steps and report_steps > n_iters:
            warnings.warn(
                f"report_steps ({report_steps}) > n_iters ({n_iters}). "
                "Statistics will be sampled every tick.",
                UserWarning,
                stacklevel=3,
            )

    @staticmethod
    def _validate_logging(log_config: dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Parameters
        ----------
        log_config : dict
            Logging configuration dictionary with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - events: dict[str, str] (per-event overrides)

        Raises
        ------
        ValueError
            If logging configuration is invalid.
        """
        if not isinstance(log_config, dict):
            raise ValueError(
                f"Logging configuration must be dict, "
                f"got {type(log_config).__name__}"
            )

        if "default_level" in log_config:
            level = log_config["default_level"]
            if not isinstance(level, str):
                raise ValueError(
                    f"Logging default_level must be str, got {type(level).__name__}"
                )

            if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}'. "
                    f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                )

        if "events" in log_config:
            events = log_config["events"] or {}
            if not isinstance(events, dict):
                raise ValueError(
                    f"Logging events must be dict, got {type(events).__name__}"
                )

            for event_name, level in events.items():
                if not isinstance(event_name, str):
                    raise ValueError(
                        f"Event name must be str, got {type(event_name).__name__}"
                    )

                if not isinstance(level, str):
                    raise ValueError(
                        f"Log level for event '{event_name}' must be str, "
                        f"got {type(level).__name__}"
                    )

                if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                    raise ValueError(
                        f"Invalid log level '{level}' for event '{event_name}'. "
                        f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                    )
