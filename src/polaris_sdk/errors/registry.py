"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, PolarisError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: PolarisError | None = None,
    ) -> PolarisError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation. A
                ``detail`` or ``suggestion`` entry overrides the template.
            cause: Optional cause error

        Returns:
            PolarisError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = context.get("suggestion") or self._interpolate(
            template.suggestion_template, context
        )

        if message is None:
            message = f"Error {code}"

        return PolarisError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            detail_template="The SDK configuration is invalid",
            suggestion_template="Check the configuration file and fix errors",
        )

        self._templates["CONFIG_NOT_FOUND"] = ErrorTemplate(
            code="CONFIG_NOT_FOUND",
            category=ErrorCategory.CONFIG,
            message_template="Not found",
            detail_template="No {source} configuration found",
            suggestion_template="Set the RUBRIK_POLARIS_SERVICEACCOUNT_* environment variables",
        )

        self._templates["ACCOUNT_INVALID"] = ErrorTemplate(
            code="ACCOUNT_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid service account {field}",
            suggestion_template="Download a new service account file from RSC",
        )

        self._templates["LOG_LEVEL_INVALID"] = ErrorTemplate(
            code="LOG_LEVEL_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid log level",
            detail_template="Unknown log level '{level}'",
            suggestion_template="Use one of: trace, debug, info, warn, error, fatal",
        )

        self._templates["QUERY_INVALID"] = ErrorTemplate(
            code="QUERY_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid GraphQL query",
            detail_template="The GraphQL query must not be empty",
        )
