# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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

"""
Lifecycle management for a system of interdependent services.
"""
import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
import yaml
from ..MODELS.service_config import BehaviorRegistry, ServiceConfig
from ..RUNNERS.dependency_resolver import DependencyResolver
from ..RUNNERS.validator import behavior_callbacks, validate as validate_system
from ..errors import UnknownServiceError, ValidationError

logger = logging.getLogger(__name__)

def _plain(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (tuple, set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

class System:
    """
    Starts and stops services in dependency order.

    A service is running while its value is not None. Starting a service first
    starts everything it depends on and hands their values to its start callback.
    """
    def __init__(self, config: ServiceConfig, behaviors: BehaviorRegistry, validate: bool = False):
        """
        Builds the system and resolves its start order.

        :param config: Configuration record per service name.
        :param behaviors: Start and optional stop callbacks per service name.
        :param validate: Check config and behaviors before doing anything else.
        :raises ValidationError: If validation is requested and fails.
        :raises CycleError: If the services depend on each other in a cycle.
        :raises UnknownDependencyError: If a service depends on an unconfigured name.
        """
        if validate:
            validate_system(config, behaviors)

        self.config = config
        self.behaviors = behaviors
        self.resolver = DependencyResolver()
        self._order: Tuple[str, ...] = tuple(self.resolver.resolve_order(config))
        self._graph: Dict[str, List[str]] = self.resolver.graph(config)
        self._values: Dict[str, Any] = {name: None for name in config}

    @property
    def order(self) -> Tuple[str, ...]:
        """
        Start order. Bulk stop walks it backwards.
        """
        return self._order

    @property
    def values(self) -> Mapping[str, Any]:
        """
        Read-only view of the current value of every service.
        """
        return MappingProxyType(self._values)

    def _check(self, name: str):
        if name not in self._values:
            raise UnknownServiceError(name)

    def get(self, name: str) -> Any:
        """
        Returns the current value of a service, None when it is stopped.
        """
        self._check(name)
        return self._values[name]

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_running(self, name: str) -> bool:
        return self.get(name) is not None

    def running(self) -> List[str]:
        """
        Names of the running services.
        """
        return [name for name, value in self._values.items() if value is not None]

    def status(self) -> Dict[str, str]:
        """
        Returns the status of all services.

        :return: Service names and their statuses ('running' or 'stopped').
        """
        return {name: "running" if value is not None else "stopped"
                for name, value in self._values.items()}

    def dependencies(self, name: str) -> List[str]:
        """
        Names of the services ``name`` directly depends on.
        """
        self._check(name)
        return list(self._graph[name])

    def dependents(self, name: str) -> List[str]:
        """
        Names of the services that directly depend on ``name``.
        """
        self._check(name)
        return self.resolver.dependents_of(self.config, name)

    def _dependency_values(self, deps: List[str]) -> Dict[str, Any]:
        return {dep: self._values[dep] for dep in deps}

    def start(self, name: Optional[str] = None) -> "System":
        """
        Starts a service and everything it depends on, or all services when no name is given.
        Services that are already running are left alone.

        :param name: The service to start.
        :return: The system.
        """
        if name is None:
            logger.info("Starting services in order: %s", ", ".join(self._order))
            services = self._order
        else:
            self._check(name)
            services = self._walk(name)
        for service in services:
            self._start(service)
        return self

    def _walk(self, name: str) -> List[str]:
        """
        ``name`` and everything it transitively depends on, dependencies first.
        Each service appears once, however many services share it.
        """
        ordered = []
        path = [name]
        seen = {name}
        stack = [iter(self._graph[name])]
        while stack:
            for dep in stack[-1]:
                if dep not in seen:
                    seen.add(dep)
                    path.append(dep)
                    stack.append(iter(self._graph[dep]))
                    break
            else:
                stack.pop()
                ordered.append(path.pop())
        return ordered

    def _callbacks(self, name: str):
        if name not in self.behaviors:
            raise ValidationError(f"Service {name!r} has no behavior registered", service=name)
        return behavior_callbacks(self.behaviors[name])

    def _start(self, name: str):
        if self._values[name] is not None:
            logger.debug("Service %s is already running", name)
            return

        start, _ = self._callbacks(name)
        logger.debug("Starting service: %s", name)
        value = start(self.config, self._dependency_values(self._graph[name]))
        if value is None:
            logger.debug("Start function of %s returned None, service stays stopped", name)
        self._values[name] = value

    def stop(self, name: Optional[str] = None) -> "System":
        """
        Stops a service, or all services in reverse start order when no name is given.
        Stopping a service never stops the services that depend on it.

        :param name: The service to stop.
        :return: The system.
        """
        if name is None:
            logger.info("Stopping services in order: %s", ", ".join(reversed(self._order)))
            for service in reversed(self._order):
                self._stop(service)
        else:
            self._check(name)
            self._stop(name)
        return self

    def _stop(self, name: str):
        value = self._values[name]
        if value is None:
            return

        _, stop = self._callbacks(name)
        logger.debug("Stopping service: %s", name)
        if stop is not None:
            stop(value, self._dependency_values(self._graph[name]))
        self._values[name] = None

    def __enter__(self) -> "System":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def __str__(self) -> str:
        running = self.running()
        if not running:
            return "System"
        return "System{" + ", ".join(running) + "}"

    def __repr__(self) -> str:
        return f"<System running={self.running()!r} order={list(self._order)!r}>"

    def to_json(self, indent: int = 2) -> str:
        """
        Renders the service configuration as JSON. Values and behaviors are never included.
        """
        return json.dumps(self.config, indent=indent, default=_plain)

    def to_yaml(self) -> str:
        """
        Renders the service configuration as YAML.
        """
        return yaml.safe_dump(json.loads(self.to_json()), sort_keys=False)
