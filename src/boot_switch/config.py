"""Runtime settings, read from the environment and overridden by CLI flags."""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from boot_switch.platforms.common import current_platform

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8088
CONFIG_FILENAME = 'config.yaml'
APP_DIRNAME = 'boot-switch'


def default_config_path(env: Mapping[str, str] | None = None, platform_name: str | None = None) -> Path:
    env = os.environ if env is None else env
    platform_name = platform_name or current_platform()
    if platform_name == 'Windows' and env.get('APPDATA'):
        base = Path(env['APPDATA'])
    elif env.get('XDG_CONFIG_HOME'):
        base = Path(env['XDG_CONFIG_HOME'])
    else:
        base = Path.home() / '.config'
    return base / APP_DIRNAME / CONFIG_FILENAME


def _parse_port(value: str | None) -> int:
    try:
        port = int(value) if value else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    config_path: Path = field(default_factory=default_config_path)
    platform: str = field(default_factory=current_platform)
    log_level: str = 'WARNING'
    log_file: Optional[str] = None

    @property
    def is_windows(self) -> bool:
        return self.platform.lower() == 'windows'

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> 'Settings':
        env = os.environ if env is None else env
        platform_name = env.get('BOOT_SWITCH_PLATFORM') or current_platform()
        config = env.get('BOOT_SWITCH_CONFIG')
        return cls(
            host=env.get('BOOT_SWITCH_HOST') or DEFAULT_HOST,
            port=_parse_port(env.get('BOOT_SWITCH_PORT') or env.get('PORT')),
            config_path=Path(config).expanduser() if config else default_config_path(env, platform_name),
            platform=platform_name,
            log_level=env.get('BOOT_SWITCH_LOG_LEVEL') or 'WARNING',
            log_file=env.get('BOOT_SWITCH_LOG_FILE') or None,
        )
