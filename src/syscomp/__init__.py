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
syscomp - System Components

Declarative dependency wiring and ordered start/stop lifecycle management
for named, interdependent services.
"""

from .MANAGERS.system import System
from .MODELS.service_config import Behavior, ServiceRecord
from .RUNNERS.dependency_resolver import dependencies_of, edges_of, sorted_order
from .errors import (
    ConfigFileError,
    CycleError,
    SyscompError,
    UnknownDependencyError,
    UnknownServiceError,
    ValidationError,
)

__version__ = "0.1.0"
__author__ = "Michael Maillet, Damien Davison, Sacha Davison"
__license__ = "Apache-2.0"

__all__ = [
    "System",
    "Behavior",
    "ServiceRecord",
    "dependencies_of",
    "edges_of",
    "sorted_order",
    "SyscompError",
    "ValidationError",
    "CycleError",
    "UnknownDependencyError",
    "UnknownServiceError",
    "ConfigFileError",
]
