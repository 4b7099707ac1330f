"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from datetime import MAXYEAR, MINYEAR, date
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import yaml
from pydantic import ValidationError

from date_calculator.core.business_calendar import BusinessDateCalculator
from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.core.holiday_provider import HolidayProvider
from date_calculator.data.schemas import Config, parse_weekdays

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "settings.yaml")

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        # 1. Load from YAML file
        config_dict = self._load_yaml()

        # 2. Apply environment variable overrides
        config_dict = self._apply_env_overrides(config_dict)

        # 3. Validate and create Config object
        try:
            return Config(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return self._flatten_config(config) if config else {}

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        sections = {
            "calendar": {
                "timezone": "timezone",
                "first_weekday": "first_weekday",
            },
            "business_days": {
                "weekend_days": "weekend_days",
                "max_search_steps": "max_search_steps",
                "steps_per_business_day": "steps_per_business_day",
            },
            "holidays": {
                "dates": "holidays",
                "country": "country",
                "subdivision": "subdivision",
                "language": "holiday_language",
            },
            "output": {
                "format": "output_format",
                "directory": "output_directory",
            },
        }

        result = {}
        for section, keys in sections.items():
            values = config.get(section) or {}
            for yaml_key, field in keys.items():
                if yaml_key in values:
                    result[field] = values[yaml_key]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables:
        - DATECALC_TIMEZONE -> timezone
        - DATECALC_FIRST_WEEKDAY -> first_weekday
        - DATECALC_WEEKEND_DAYS -> weekend_days (e.g. "fri,sat" or "6,7")
        - DATECALC_COUNTRY -> country
        - DATECALC_SUBDIVISION -> subdivision
        - DATECALC_HOLIDAY_LANGUAGE -> holiday_language
        - DATECALC_MAX_SEARCH_STEPS -> max_search_steps
        - DATECALC_STEPS_PER_BUSINESS_DAY -> steps_per_business_day
        - DATECALC_OUTPUT_FORMAT -> output_format
        - DATECALC_OUTPUT_DIRECTORY -> output_directory

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        env_mappings = {
            "DATECALC_TIMEZONE": "timezone",
            "DATECALC_FIRST_WEEKDAY": "first_weekday",
            "DATECALC_WEEKEND_DAYS": ("weekend_days", lambda v: sorted(parse_weekdays(v))),
            "DATECALC_COUNTRY": "country",
            "DATECALC_SUBDIVISION": "subdivision",
            "DATECALC_HOLIDAY_LANGUAGE": "holiday_language",
            "DATECALC_MAX_SEARCH_STEPS": ("max_search_steps", int),
            "DATECALC_STEPS_PER_BUSINESS_DAY": ("steps_per_business_day", int),
            "DATECALC_OUTPUT_FORMAT": "output_format",
            "DATECALC_OUTPUT_DIRECTORY": "output_directory",
        }

        for env_var, mapping in env_mappings.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue
            if isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
                    continue
            else:
                config_key = mapping
                config_dict[config_key] = env_value
            logger.debug(f"Override from env: {env_var} -> {config_key}")

        return config_dict

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save.
            output_path: Optional output path. If not provided, uses default.
        """
        output_path = output_path or self.config_path

        config_dict = {
            "calendar": {
                "timezone": config.timezone,
                "first_weekday": config.first_weekday.name.lower(),
            },
            "business_days": {
                "weekend_days": [d.name.lower() for d in config.weekend_days],
                "max_search_steps": config.max_search_steps,
                "steps_per_business_day": config.steps_per_business_day,
            },
            "holidays": {
                "dates": [d.isoformat() for d in config.holidays],
                "country": config.country,
                "subdivision": config.subdivision,
                "language": config.holiday_language,
            },
            "output": {
                "format": config.output_format,
                "directory": config.output_directory,
            },
        }

        # Ensure directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Saved configuration to: {output_path}")


def build_calculator(
    config: Config,
    span: Optional[Tuple[date, date]] = None,
    extra_holidays: Iterable = (),
) -> BusinessDateCalculator:
    """
    Assemble a business date calculator from a configuration.

    Country holidays are loaded for every year touched by ``span``, padded by
    one year on each side so that navigation across a year boundary still
    sees them.

    Args:
        config: Validated configuration.
        span: Dates the caller is going to work with. Without a span no
            country holidays are loaded.
        extra_holidays: Additional holiday dates or datetimes.

    Returns:
        BusinessDateCalculator configured from ``config``.
    """
    holiday_dates = list(config.holidays) + list(extra_holidays)

    provider = holiday_provider_for(config)
    if provider is not None and span is not None:
        first, last = sorted(span)
        start = date(max(first.year - 1, MINYEAR), 1, 1)
        end = date(min(last.year + 1, MAXYEAR), 12, 31)
        holiday_dates.extend(provider.get_holiday_dates(start, end))

    calendar = CalendarSystem(timezone=config.timezone, first_weekday=config.first_weekday)
    return BusinessDateCalculator(
        calendar=calendar,
        holidays=holiday_dates,
        weekend_days=config.weekend_days,
        limits=config.limits,
    )


def holiday_provider_for(config: Config) -> Optional[HolidayProvider]:
    """Holiday provider for the configured country, or None when no country is set."""
    if not config.country:
        return None
    return HolidayProvider(
        country=config.country,
        subdivision=config.subdivision,
        language=config.holiday_language,
    )
