"""
Models for service configuration records and start/stop behaviors.
"""
from typing import Any, Callable, List, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

class ServiceRecord(BaseModel):
    """
    Configuration data for a single service.

    Any field is allowed. ``depends`` names the services that must be started first,
    either as a single name or a list of names. Records hold data only, never callables.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    depends: Union[StrictStr, List[StrictStr]] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def reject_callables(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            for key, value in data.items():
                if callable(value):
                    raise ValueError(
                        f"field {key!r} holds a callable; "
                        "service configuration should not contain functions"
                    )
            # field names are opaque data and need not be strings
            return {str(key): value for key, value in data.items()}
        return data

class Behavior(BaseModel):
    """
    Start and optional stop callbacks for a service.

    ``start(config, deps)`` returns the running value of the service.
    ``stop(value, deps)`` tears it down; its return value is ignored.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    start: Callable[..., Any]
    stop: Optional[Callable[..., Any]] = None

ServiceConfig = Mapping[str, Mapping[str, Any]]
BehaviorRegistry = Mapping[str, Union[Behavior, Mapping[str, Callable[..., Any]], Any]]
