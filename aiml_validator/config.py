# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for the AIML validator."""

import os
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .exceptions import ConfigurationError
from .schema_source.http_source import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SCHEMA_BASE_URL
from .taxonomy.loader import DEFAULT_TAXONOMY_VERSION
from .utils.logging_utils import configure_split_stream_logging

ENV_PREFIX = "AIML_VALIDATOR_"


@dataclass(frozen=True)
class ValidatorConfig:
    """Configuration class for a validator instance."""
    taxonomy_version: str = DEFAULT_TAXONOMY_VERSION
    # Reserved for stricter enforcement; the rule set does not change with it.
    strict: bool = False
    debug: bool = False

    # schema retrieval
    schema_base_url: str = DEFAULT_SCHEMA_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = 1

    log_level: str = "INFO"
    print_level: str = "ERROR"

    def __post_init__(self):
        if self.request_timeout <= 0:
            raise ConfigurationError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        try:
            return cls(
                taxonomy_version=os.getenv(f'{ENV_PREFIX}TAXONOMY_VERSION', DEFAULT_TAXONOMY_VERSION),
                strict=os.getenv(f'{ENV_PREFIX}STRICT', 'false').lower() == 'true',
                debug=os.getenv(f'{ENV_PREFIX}DEBUG', 'false').lower() == 'true',
                schema_base_url=os.getenv(f'{ENV_PREFIX}SCHEMA_BASE_URL', DEFAULT_SCHEMA_BASE_URL),
                request_timeout=float(os.getenv(f'{ENV_PREFIX}REQUEST_TIMEOUT', str(DEFAULT_REQUEST_TIMEOUT))),
                max_workers=int(os.getenv(f'{ENV_PREFIX}MAX_WORKERS', '1')),
                log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'INFO'),
                print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'ERROR'),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}* environment value: {e}") from e

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'ValidatorConfig':
        """Create configuration from a mapping, rejecting unknown keys and wrong types."""
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration must be an object")

        known = {f.name: f for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(unknown)}")

        for key, value in data.items():
            expected = _EXPECTED_TYPES[known[key].name]
            # bool is an int subclass; only accept it for flags
            if isinstance(value, bool) and expected is not bool:
                raise ConfigurationError(f"{key} must be of type {_type_name(expected)}")
            if not isinstance(value, expected):
                raise ConfigurationError(f"{key} must be of type {_type_name(expected)}")

        return cls(**dict(data))

    def with_overrides(self, **overrides: Any) -> 'ValidatorConfig':
        if not overrides:
            return self
        ValidatorConfig.from_mapping(overrides)
        return replace(self, **overrides)

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level_name = "DEBUG" if self.debug else self.log_level
        level = getattr(logging, level_name.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('aiml_validator')


_EXPECTED_TYPES = {
    "taxonomy_version": str,
    "strict": bool,
    "debug": bool,
    "schema_base_url": str,
    "request_timeout": (int, float),
    "max_workers": int,
    "log_level": str,
    "print_level": str,
}


def _type_name(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__
