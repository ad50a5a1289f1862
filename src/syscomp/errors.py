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
Errors raised while building or running a system of services.

Errors raised by user start/stop callbacks are never wrapped and do not
appear here.
"""
from typing import List, Optional


class SyscompError(Exception):
    """
    Base class for every error raised by syscomp itself.
    """


class ValidationError(SyscompError, TypeError):
    """
    Service configuration or behavior data has the wrong shape.
    """
    def __init__(self, message: str, service: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.service = service
        self.field = field


class CycleError(SyscompError, ValueError):
    """
    The dependency graph contains a cycle.

    ``cycle`` lists the services on the cycle, with the first name repeated at the end.
    """
    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.cycle)}")


class UnknownDependencyError(SyscompError, KeyError):
    """
    A service depends on a name that is not configured.
    """
    def __init__(self, service: str, dependency: str):
        self.service = service
        self.dependency = dependency
        super().__init__(f"Service {service!r} depends on unknown service {dependency!r}")

    def __str__(self):
        return self.args[0]


class UnknownServiceError(SyscompError, KeyError):
    """
    A start, stop or lookup named a service that is not configured.
    """
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown service {name!r}")

    def __str__(self):
        return self.args[0]


class ConfigFileError(SyscompError, ValueError):
    """
    A configuration file could not be turned into service configuration.
    """
