"""
Utilities for string interpolation using environment variables.
"""
import logging
import re
from typing import Mapping

logger = logging.getLogger(__name__)

# ${VAR}, ${VAR:-default} or ${VAR:+value}
_PATTERN = re.compile(r'\$\{([^}:]+)(?::(-|\+)([^}]*))?\}')

class EnvironmentInterpolator:
    """
    Utility for interpolating environment variables in strings.
    Supports ${VAR}, ${VAR:-default}, and ${VAR:+value}.
    """
    @staticmethod
    def interpolate(template: str, context: Mapping[str, str], strict: bool = True) -> str:
        """
        Interpolates environment variables in the template string using the provided context.

        :param template: The string containing ${VAR} placeholders.
        :param context: The environment variables context.
        :param strict: Raise on an unset ${VAR}; otherwise substitute an empty string.
        :return: The interpolated string.
        :raises KeyError: If strict and a variable is not found and no default is provided.
        """
        def replace(match):
            var_name = match.group(1)
            modifier = match.group(2)
            alt_value = match.group(3)

            value = context.get(var_name)

            if modifier == '-':
                # use default if VAR is unset or empty
                return value if value else alt_value
            if modifier == '+':
                # use alt_value only if VAR is set and not empty
                return alt_value if value else ''
            if value is not None:
                return value
            if strict:
                raise KeyError(f"Variable {var_name} not found in context")
            logger.warning("Variable %s is not set, substituting an empty string", var_name)
            return ''

        return _PATTERN.sub(replace, template)
