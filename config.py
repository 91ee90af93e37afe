#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Configuration
Centralised configuration read from environment variables, with validation

Version: 1.0.0
Date: 2026-10-17
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any, Tuple
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"

class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Blob store settings"""
    path: Path
    json_indent: int = 2

@dataclass
class ClockConfig:
    """Time zone used for "today" and day counting"""
    timezone: str = "UTC"

@dataclass
class ProgramConfig:
    """Catalog settings"""
    default_program_id: str = "30-day-fresh-start"
    starter_program_ids: Tuple[str, ...] = ("30-day-fresh-start",)

@dataclass
class AchievementConfig:
    """Achievement engine settings"""
    # False keeps streak badges on the time-based gate list
    streak_own_sequence: bool = False
    celebration_queue_enabled: bool = True

def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'

class JourneyConfig:
    """Main configuration class"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Load configuration from environment variables"""

        # Directories
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Storage
        self.storage = StorageConfig(
            path=self.data_dir / os.getenv('STORAGE_FILE', 'journey_store.json'),
            json_indent=int(os.getenv('STORAGE_JSON_INDENT', 2))
        )

        # Clock
        self.clock = ClockConfig(
            timezone=os.getenv('TIMEZONE', 'UTC')
        )

        # Programs
        starter_ids = os.getenv('STARTER_PROGRAM_IDS', '30-day-fresh-start')
        self.programs = ProgramConfig(
            default_program_id=os.getenv('DEFAULT_PROGRAM_ID', '30-day-fresh-start'),
            starter_program_ids=tuple(pid.strip() for pid in starter_ids.split(',') if pid.strip())
        )

        # Achievements
        self.achievements = AchievementConfig(
            streak_own_sequence=_env_bool('ACHIEVEMENT_STREAK_OWN_SEQUENCE', 'false'),
            celebration_queue_enabled=_env_bool('ACHIEVEMENT_QUEUE_ENABLED', 'true')
        )

        # Logging
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO'))
        self.log_to_file = _env_bool('LOG_TO_FILE', 'false')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Validate configuration"""
        errors = []

        if self.clock.timezone not in pytz.all_timezones_set:
            errors.append(f"Unknown TIMEZONE '{self.clock.timezone}'")

        if self.storage.json_indent < 0:
            errors.append("STORAGE_JSON_INDENT must not be negative")

        if not self.programs.starter_program_ids:
            errors.append("STARTER_PROGRAM_IDS must name at least one program")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Create the data and log directories"""
        directories = [self.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Build the logging dictConfig"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"journey_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def to_dict(self) -> Dict[str, Any]:
        """Serialise configuration to a dict"""
        return {
            'environment': self.environment.value,
            'storage_path': str(self.storage.path),
            'timezone': self.clock.timezone,
            'default_program_id': self.programs.default_program_id,
            'starter_program_ids': list(self.programs.starter_program_ids),
            'streak_own_sequence': self.achievements.streak_own_sequence,
            'celebration_queue_enabled': self.achievements.celebration_queue_enabled,
            'log_level': self.log_level.value,
            'log_to_file': self.log_to_file
        }

# Global configuration instance
config = JourneyConfig()

__all__ = [
    'config',
    'JourneyConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'ClockConfig',
    'ProgramConfig',
    'AchievementConfig'
]
