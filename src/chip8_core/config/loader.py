import logging
from dataclasses import fields
from typing import Any, Dict

import yaml

from chip8_core.instructions.base import Quirks
from chip8_core.transport.memory import FONT_SET
from .models import MachineConfig, ScreenConfig

logger = logging.getLogger(__name__)

_INT_KEYS = ("memory_size", "program_start", "font_start", "cpu_hz", "timer_hz")

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.load_from_dict(data or {})

    def load_from_dict(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")
        return self._parse_config(data)

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        known = {f.name for f in fields(MachineConfig)}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown config key '%s'", key)

        config = MachineConfig()
        for key in _INT_KEYS:
            if key in data:
                setattr(config, key, self._parse_int(data[key]))

        if data.get("seed") is not None:
            config.seed = self._parse_int(data["seed"])

        screen_data = data.get("screen", {}) or {}
        if not isinstance(screen_data, dict):
            raise ValueError(f"screen must be a mapping, got {type(screen_data).__name__}")
        config.screen = ScreenConfig(
            width=self._parse_int(screen_data.get("width", config.screen.width)),
            height=self._parse_int(screen_data.get("height", config.screen.height)),
        )
        config.quirks = self._parse_quirks(data.get("quirks", {}) or {})

        self._validate(config)
        return config

    def _parse_quirks(self, data: Dict[str, Any]) -> Quirks:
        if not isinstance(data, dict):
            raise ValueError(f"quirks must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(Quirks)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown quirk '%s'", key)
                continue
            if not isinstance(value, bool):
                raise ValueError(f"Quirk '{key}' must be a boolean: {value}")
            values[key] = value
        return Quirks(**values)

    def _validate(self, config: MachineConfig) -> None:
        if config.memory_size <= 0:
            raise ValueError(f"memory_size must be positive: {config.memory_size}")
        if not 0 <= config.program_start < config.memory_size:
            raise ValueError(f"program_start {config.program_start:#06x} outside memory")
        if config.font_start < 0 or config.font_start + len(FONT_SET) > config.memory_size:
            raise ValueError(f"font_start {config.font_start:#06x} does not leave room for the font set")
        if config.cpu_hz <= 0 or config.timer_hz <= 0:
            raise ValueError("cpu_hz and timer_hz must be positive")
        if config.screen.width <= 0 or config.screen.height <= 0:
            raise ValueError("Screen dimensions must be positive")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
