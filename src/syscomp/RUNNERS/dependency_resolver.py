"""
Dependency resolution for services to determine startup and shutdown order.
"""
import logging
from typing import Dict, List, Mapping, Tuple
from ..MODELS.service_config import ServiceConfig
from ..errors import CycleError, UnknownDependencyError

logger = logging.getLogger(__name__)

def dependencies_of(config: ServiceConfig, name: str) -> List[str]:
    """
    Names of the services ``name`` depends on, in declared order.

    :param config: Service configuration data.
    :param name: The service name.
    :return: Dependency names. Empty when ``depends`` is missing.
    """
    record = config[name]
    depends = record.get('depends') if isinstance(record, Mapping) else None
    if not depends:
        return []
    if isinstance(depends, str):
        return [depends]
    return list(depends)

def edges_of(config: ServiceConfig) -> List[Tuple[str, str]]:
    """
    Graph edges ``(dependency, dependent)``: the dependency must start first.
    """
    return [(dep, name) for name in config for dep in dependencies_of(config, name)]

def sorted_order(config: ServiceConfig) -> List[str]:
    """
    Topologically sorts service names so every dependency precedes its dependents.

    Services are visited in config order and each one's dependencies in declared
    order, so the result is the same on every run.

    :param config: Service configuration data.
    :return: Service names in the order they should be started.
    :raises CycleError: If a service transitively depends on itself.
    :raises UnknownDependencyError: If a dependency is not configured.
    """
    dependencies = {name: dependencies_of(config, name) for name in config}

    ordered = []
    visited = set()

    for root in config:
        if root in visited:
            continue
        # Explicit depth-first walk; ``path`` holds the services currently being visited.
        path = [root]
        processing = {root}
        stack = [iter(dependencies[root])]
        while stack:
            name = path[-1]
            for dep in stack[-1]:
                if dep not in dependencies:
                    raise UnknownDependencyError(name, dep)
                if dep in processing:
                    raise CycleError(path[path.index(dep):] + [dep])
                if dep not in visited:
                    path.append(dep)
                    processing.add(dep)
                    stack.append(iter(dependencies[dep]))
                    break
            else:
                stack.pop()
                path.pop()
                processing.remove(name)
                visited.add(name)
                ordered.append(name)

    logger.debug("Resolved start order: %s", ", ".join(ordered))
    return ordered

class DependencyResolver:
    """
    Resolves the startup and shutdown order of services based on their dependencies.
    """
    def resolve_order(self, config: ServiceConfig) -> List[str]:
        """
        Determines the correct order to start services.
        Stopping uses the same order reversed.
        """
        return sorted_order(config)

    def dependents_of(self, config: ServiceConfig, name: str) -> List[str]:
        """
        Names of the services that directly depend on ``name``, in config order.
        """
        return [dependent for dep, dependent in edges_of(config) if dep == name]

    def graph(self, config: ServiceConfig) -> Dict[str, List[str]]:
        """
        Adjacency mapping from each service to its direct dependencies.
        """
        return {name: dependencies_of(config, name) for name in config}
