"""
Validation of service configuration and behavior data.
"""
from typing import Any, Mapping
import pydantic
from ..MODELS.service_config import Behavior, BehaviorRegistry, ServiceConfig, ServiceRecord
from ..errors import ValidationError

def _describe(exc: pydantic.ValidationError, service: str, kind: str) -> ValidationError:
    """
    Turns the first pydantic error into a ValidationError naming the service and field.
    """
    error = exc.errors()[0]
    loc = error.get('loc') or ()
    field = str(loc[0]) if loc else None
    error_type = error.get('type')

    if error_type in ('model_type', 'model_attributes_type'):
        message = f"{kind} entry for {service!r} must be a mapping"
    elif error_type == 'value_error':
        message = f"{kind} entry for {service!r}: {error['ctx']['error']}"
    elif field == 'depends':
        message = f"depends of {service!r} must be either a service name or a list of service names"
    elif error_type == 'missing':
        message = f"{kind} entry for {service!r} is missing a {field} function"
    elif error_type == 'callable_type':
        message = f"{field} of {service!r} must be a function"
    else:
        message = f"{kind} entry for {service!r} is invalid: {error.get('msg')}"
    return ValidationError(message, service=service, field=field)

def validate_config(config: ServiceConfig) -> bool:
    """
    Checks every configuration entry.

    :param config: Service configuration data.
    :return: True when valid.
    :raises ValidationError: On the first invalid entry.
    """
    if not isinstance(config, Mapping):
        raise ValidationError("Service configuration must be a mapping of service names to records")
    for name, record in config.items():
        try:
            ServiceRecord.model_validate(record)
        except pydantic.ValidationError as e:
            raise _describe(e, name, "Service configuration") from e
    return True

def validate_behaviors(behaviors: BehaviorRegistry) -> bool:
    """
    Checks every behavior entry has a callable ``start`` and, if present, a callable ``stop``.

    :param behaviors: Start/stop callbacks per service.
    :return: True when valid.
    :raises ValidationError: On the first invalid entry.
    """
    if not isinstance(behaviors, Mapping):
        raise ValidationError("Service behaviors must be a mapping of service names to behaviors")
    for name, behavior in behaviors.items():
        if not isinstance(behavior, (Mapping, Behavior)) and not hasattr(behavior, 'start'):
            raise ValidationError(
                f"Service behavior entry for {name!r} must be a mapping", service=name
            )
        if isinstance(behavior, Mapping) and 'stop' in behavior and not callable(behavior['stop']):
            raise ValidationError(f"stop of {name!r} must be a function", service=name, field='stop')
        try:
            Behavior.model_validate(behavior)
        except pydantic.ValidationError as e:
            raise _describe(e, name, "Service behavior") from e
    return True

def validate(config: ServiceConfig, behaviors: BehaviorRegistry) -> bool:
    """
    Validates both service configuration and behavior data.
    """
    validate_config(config)
    validate_behaviors(behaviors)
    for name in config:
        if name not in behaviors:
            raise ValidationError(
                f"Service {name!r} has no behavior registered", service=name, field='start'
            )
    return True

def behavior_callbacks(behavior: Any):
    """
    Returns the ``(start, stop)`` callbacks of a behavior entry.
    Entries may be mappings or objects with ``start``/``stop`` attributes.
    """
    if isinstance(behavior, Mapping):
        return behavior.get('start'), behavior.get('stop')
    return getattr(behavior, 'start', None), getattr(behavior, 'stop', None)
