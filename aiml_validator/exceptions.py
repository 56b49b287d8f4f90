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

"""Custom exceptions for the AIML entity validator."""


class AimlValidatorError(Exception):
    """Base exception for validator related errors."""
    pass


class ConfigurationError(AimlValidatorError):
    """Exception raised for invalid validator configuration."""
    pass


class TaxonomyError(AimlValidatorError):
    """Exception raised when a taxonomy cannot be loaded or is inconsistent."""
    pass


class FormatVersionError(TaxonomyError):
    """Exception raised when a version string cannot be parsed."""
    pass


class EntityParseError(AimlValidatorError):
    """Exception raised when input cannot be turned into an entity mapping.

    ``field`` names the pseudo-field reported in the resulting finding.
    """

    field = "input"
    suggestion = "Provide a valid AIML schema object or JSON string"


class NullInputError(EntityParseError):
    """Exception raised for a null input value."""
    pass


class EmptyInputError(EntityParseError):
    """Exception raised for an empty string or empty mapping."""
    pass


class InvalidJsonError(EntityParseError):
    """Exception raised for unparsable serialized input."""

    field = "JSON"
    suggestion = "Please check for missing commas, brackets, or quotes"


class NonObjectInputError(EntityParseError):
    """Exception raised when the parsed document is not a mapping."""
    pass


class SchemaSourceError(AimlValidatorError):
    """Base exception for schema retrieval failures."""
    pass


class SchemaNotFoundError(SchemaSourceError):
    """Exception raised when a schema document does not exist."""
    pass


class SchemaNetworkError(SchemaSourceError):
    """Exception raised for transport level failures."""
    pass


class MalformedSchemaError(SchemaSourceError):
    """Exception raised when a schema document cannot be parsed or has the wrong shape."""
    pass


class ModuleReferenceError(AimlValidatorError):
    """Exception raised for a module reference that names no module."""
    pass
