"""
Configuration Validation Module
Validates collaborator settings on startup
"""
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from cdr_gateway.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""
    collaborator: str
    setting: str
    is_valid: bool
    message: str


class ConfigValidator:
    """
    Validates collaborator configuration at startup.

    The line classifier key is required: without it every call fails
    classification. Backend URLs have built-in defaults, so one not set by
    the environment, .env or YAML is only a warning.
    """

    REQUIRED_SETTINGS = {
        "classifier": [("line_classifier_api_key", "IPQualityScore line classifier")],
    }

    DEFAULTED_SETTINGS = {
        "cdr_store": [("cdr_api_url", "CDR backend")],
        "campaigns": [("campaign_api_url", "Campaign backend")],
        "numbers": [("numbers_api_url", "Number inventory backend")],
    }

    def __init__(self, settings: Settings, strict: bool = False):
        """
        Initialize validator.

        Args:
            settings: Loaded application settings
            strict: If True, treat warnings as errors
        """
        self.settings = settings
        self.strict = strict
        self.results: List[ValidationResult] = []

    def validate_all(self) -> Tuple[bool, List[ValidationResult]]:
        """
        Validate all collaborator settings.

        Returns:
            Tuple of (all_valid, list of results)
        """
        self.results = []

        for collaborator, settings_list in self.REQUIRED_SETTINGS.items():
            for field_name, description in settings_list:
                env_var = field_name.upper()
                if not getattr(self.settings, field_name, None):
                    self._add_error(collaborator, env_var,
                        f"{description} requires {env_var} to be set")
                else:
                    self._add_success(collaborator, env_var, f"{description} configured")

        for collaborator, settings_list in self.DEFAULTED_SETTINGS.items():
            for field_name, description in settings_list:
                env_var = field_name.upper()
                value = getattr(self.settings, field_name, None)
                if field_name not in self.settings.model_fields_set:
                    self._add_warning(collaborator, env_var,
                        f"{description} not set explicitly, using {value}")
                else:
                    self._add_success(collaborator, env_var, f"{description} at {value}")

        errors = [r for r in self.results if not r.is_valid]
        return len(errors) == 0, self.results

    def _add_success(self, collaborator: str, setting: str, message: str):
        """Add successful validation result."""
        self.results.append(ValidationResult(
            collaborator=collaborator,
            setting=setting,
            is_valid=True,
            message=message
        ))

    def _add_error(self, collaborator: str, setting: str, message: str):
        """Add error validation result."""
        self.results.append(ValidationResult(
            collaborator=collaborator,
            setting=setting,
            is_valid=False,
            message=message
        ))

    def _add_warning(self, collaborator: str, setting: str, message: str):
        """Add warning validation result."""
        self.results.append(ValidationResult(
            collaborator=collaborator,
            setting=setting,
            is_valid=not self.strict,  # Warnings become errors in strict mode
            message=f"WARNING: {message}"
        ))

    def log_results(self):
        """Log all validation results."""
        errors = [r for r in self.results if not r.is_valid]
        warnings = [r for r in self.results if r.is_valid and "WARNING" in r.message]
        successes = [r for r in self.results if r.is_valid and "WARNING" not in r.message]

        if successes:
            logger.info("Collaborator configuration validated:")
            for r in successes:
                logger.info(f"  ✓ [{r.collaborator}] {r.message}")

        if warnings:
            for r in warnings:
                logger.warning(f"  ⚠ [{r.collaborator}] {r.message}")

        if errors:
            logger.error("Collaborator configuration errors:")
            for r in errors:
                logger.error(f"  ✗ [{r.collaborator}] {r.message}")

    def get_error_summary(self) -> Optional[str]:
        """Get summary of errors for exception message."""
        errors = [r for r in self.results if not r.is_valid]
        if not errors:
            return None

        lines = ["Collaborator configuration errors:"]
        for r in errors:
            lines.append(f"  - {r.setting}: {r.message}")
        return "\n".join(lines)


def validate_config_on_startup(settings: Settings, strict: bool = False) -> None:
    """
    Validate collaborator settings at startup.

    Call this from the FastAPI lifespan.

    Args:
        settings: Loaded application settings
        strict: If True, fail on warnings too

    Raises:
        RuntimeError: If required configuration is missing
    """
    validator = ConfigValidator(settings, strict=strict)
    all_valid, results = validator.validate_all()
    validator.log_results()

    if not all_valid:
        error_msg = validator.get_error_summary()
        raise RuntimeError(error_msg)

    logger.info("All collaborator configurations validated successfully")
