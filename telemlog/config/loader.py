import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from telemlog.config.broker import load_mqtt_defaults
from telemlog.core.constants import ALARM_FLAGS, INPUT_TOPIC, OUTPUT_TOPIC, TOPIC_VERSION


class MQTTConfig(BaseModel):
    host: str = "localhost"
    port: int = 1883
    client_id: str = "telemlog"
    username: Optional[str] = None
    password: Optional[str] = None
    keepalive: int = 60
    qos: int = 0
    topic_prefix: str = TOPIC_VERSION
    input_topic: str = INPUT_TOPIC
    output_topic: str = OUTPUT_TOPIC


class TelemlogConfig(BaseModel):
    mqtt: MQTTConfig = Field(default_factory=MQTTConfig)
    workers: int = Field(default=2, ge=1)
    queue_size: int = Field(default=10000, ge=1)
    log_level: str = "INFO"
    # overrides merged over the built-in ALARM_FLAGS table
    alarm_flags: Dict[str, List[int]] = Field(default_factory=dict)

    def alarm_table(self) -> Dict[str, tuple]:
        table = dict(ALARM_FLAGS)
        table.update({k: tuple(v) for k, v in self.alarm_flags.items()})
        return table


def load_config(path: str) -> TelemlogConfig:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config not found: {path}")
    with open(Path(path), "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a mapping")

    # Fill mqtt defaults if missing or partial
    if not isinstance(cfg.get("mqtt"), dict):
        cfg["mqtt"] = {}
    for key, value in load_mqtt_defaults().items():
        cfg["mqtt"].setdefault(key, value)

    # pydantic raises ValidationError (a ValueError) on bad shapes
    return TelemlogConfig(**cfg)


def default_config() -> TelemlogConfig:
    """Config used when no file is given: built-in defaults plus env overrides."""
    return TelemlogConfig(mqtt=load_mqtt_defaults())
