"""
Configuration management for quadnav

Values come from, in increasing priority:
1. dataclass defaults below
2. config/default.yaml (or the file given with --config)
3. QUADNAV_<SECTION>_<KEY> environment variables
4. command line options handled in main.py
"""

import os
import logging
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class AutopilotConfig:
    """Height and yaw navigator parameters"""

    # Tick loop
    period_ms: int = 25                 # How often the navigators check the drone

    # Limits
    height_limit_dm: int = 300          # Max |target| for height navigation

    # Two-speed control law
    height_band_dm: int = 4             # Half scale within this band
    yaw_band_deg: int = 10              # Half scale within this band
    full_scale: int = 32500
    half_scale: int = 16250

    @property
    def period_s(self) -> float:
        return self.period_ms / 1000.0


@dataclass
class SerialConfig:
    """Serial connection to the flight controller"""
    port: str = "/dev/ttyACM0"
    baudrate: int = 115200
    timeout: float = 0.1                 # seconds


@dataclass
class LinkConfig:
    """Stick transmission"""
    keepalive_hz: float = 20.0          # Resend sticks even when nobody flushes

    # AUX1..AUX4 appended after the four stick channels (AUX1=armed, AUX2=mode)
    aux_channels: List[int] = field(default_factory=lambda: [1800, 1800, 1500, 1500])


@dataclass
class TelemetryConfig:
    """Telemetry polling"""
    poll_hz: float = 40.0
    stale_after_ms: int = 500           # Age after which a snapshot is reported stale


@dataclass
class SimulationConfig:
    """Simulated vehicle"""

    enabled: bool = False

    # Rates at full stick deflection
    climb_rate_dms: float = 10.0        # dm/s
    yaw_rate_dps: float = 30.0          # deg/s

    initial_height_dm: int = 0
    initial_heading_deg: int = 0


@dataclass
class InterfaceConfig:
    """Interface configuration"""

    # REST API
    rest_enabled: bool = False
    rest_host: str = "0.0.0.0"
    rest_port: int = 8080

    # Logging
    log_file: str = ""
    log_level: str = "INFO"


@dataclass
class Config:
    """All configuration sections"""

    autopilot: AutopilotConfig = field(default_factory=AutopilotConfig)
    serial: SerialConfig = field(default_factory=SerialConfig)
    link: LinkConfig = field(default_factory=LinkConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    interface: InterfaceConfig = field(default_factory=InterfaceConfig)

    SECTIONS = ('autopilot', 'serial', 'link', 'telemetry', 'simulation', 'interface')
    ENV_PREFIX = "QUADNAV_"
    DEFAULT_PATH = Path(__file__).parent.parent / "config" / "default.yaml"

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Build a config from defaults, a YAML file and the environment

        A missing file is not an error; the dataclass defaults apply.
        """
        config = cls()

        path = Path(config_path) if config_path else cls.DEFAULT_PATH
        if path.exists():
            with open(path, 'r') as f:
                config._update_from_dict(yaml.safe_load(f) or {})
        else:
            logger.debug(f"No config file at {path}, using defaults")

        config._update_from_env()
        return config

    def _update_from_dict(self, d: dict):
        """Apply {section: {key: value}}; unknown sections and keys are ignored"""
        for section_name in self.SECTIONS:
            values = d.get(section_name)
            if not isinstance(values, dict):
                continue
            section = getattr(self, section_name)
            known = {f.name for f in fields(section)}
            for key in known.intersection(values):
                setattr(section, key, values[key])

    def _update_from_env(self):
        """Apply QUADNAV_<SECTION>_<KEY> variables, typed like the current value"""
        for name, raw in os.environ.items():
            if not name.startswith(self.ENV_PREFIX):
                continue
            section_name, _, key = name[len(self.ENV_PREFIX):].lower().partition("_")
            if section_name not in self.SECTIONS or not key:
                continue
            section = getattr(self, section_name)
            if key in {f.name for f in fields(section)}:
                setattr(section, key, _coerce(getattr(section, key), raw))

    def save(self, config_path: str):
        """Write every section to a YAML file"""
        with open(config_path, 'w') as f:
            yaml.safe_dump(asdict(self), f, default_flow_style=False, sort_keys=False)


def _coerce(current, raw: str):
    """Parse an environment string into the type of `current`"""
    if isinstance(current, bool):
        return raw.strip().lower() in ('true', '1', 'yes', 'on')
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    if isinstance(current, list):
        return [int(item) for item in raw.split(",") if item.strip()]
    return raw


_config: Optional[Config] = None


def get_config() -> Config:
    """Process-wide configuration, loaded on first use"""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Optional[Config]):
    """Replace the process-wide configuration (None reloads on next get_config)"""
    global _config
    _config = config
