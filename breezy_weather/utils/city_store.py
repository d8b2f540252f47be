"""JSON file persistence for the tracked city list."""

import json
import os
from pathlib import Path

from breezy_weather.exceptions import ConfigurationException, ErrorCode
from breezy_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class JsonCityStore:
    """Loads and saves an ordered list of city names as a JSON array."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> list[str]:
        """Read the stored city list.

        Returns:
            City names in stored order, or an empty list if the file is missing

        Raises:
            ConfigurationException: If the file is not a JSON array of strings
        """
        if not self.path.exists():
            log_with_context(
                logger,
                "info",
                "City file not found, starting with no cities",
                file_path=str(self.path),
                event_type="city_store_missing",
            )
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            log_with_context(
                logger,
                "error",
                "Invalid JSON in city file",
                file_path=str(self.path),
                error=str(e),
                event_type="city_store_invalid",
            )
            raise ConfigurationException(
                f"{self.path.name} contains invalid JSON: {e}",
                code=ErrorCode.CONFIG_INVALID,
                details={"file_path": str(self.path)},
            ) from e

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise ConfigurationException(
                f"{self.path.name} must contain a JSON array of strings",
                code=ErrorCode.CONFIG_INVALID,
                details={"file_path": str(self.path)},
            )

        return data

    def save(self, cities: list[str]) -> None:
        """Write the city list, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(cities, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self.path)
        log_with_context(
            logger,
            "debug",
            "City file saved",
            file_path=str(self.path),
            count=len(cities),
            event_type="city_store_saved",
        )
