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
Parsers for service configuration files written in YAML or JSON.
"""
import os
from typing import Any, Dict, Mapping, Optional
import yaml
from dotenv import dotenv_values
from ..UTILS.string_interpolation import EnvironmentInterpolator
from ..errors import ConfigFileError

class ConfigParser:
    """
    Parser for service configuration files.

    The document maps service names to records. JSON documents are parsed too,
    since JSON is valid YAML.
    """
    def __init__(self,
                 context: Optional[Mapping[str, str]] = None,
                 env_file: Optional[str] = None,
                 strict: bool = False):
        """
        Initializes the parser with the variables used for ${VAR} interpolation.

        :param context: Variables that override everything else.
        :param env_file: A .env file whose variables override the process environment.
        :param strict: Fail on unset variables instead of substituting empty strings.
        """
        self.context: Dict[str, str] = dict(os.environ)
        if env_file:
            if not os.path.exists(env_file):
                raise ConfigFileError(f"Environment file {env_file} not found")
            self.context.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        if context:
            self.context.update(context)
        self.strict = strict

    def parse(self, config_path: str) -> Dict[str, Dict[str, Any]]:
        """
        Parses a configuration file from a path.

        :param config_path: Path to the configuration file.
        :return: Service configuration data.
        """
        with open(config_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> Dict[str, Dict[str, Any]]:
        """
        Parses a configuration document from a string.

        :param content: YAML or JSON content.
        :return: Service configuration data.
        :raises ConfigFileError: If the document is not a mapping of service records.
        """
        try:
            content = EnvironmentInterpolator.interpolate(content, self.context, strict=self.strict)
        except KeyError as e:
            raise ConfigFileError(str(e.args[0])) from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Invalid configuration document: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigFileError("Configuration document must map service names to records")

        config = {}
        for name, record in data.items():
            if record is None:
                record = {}
            if not isinstance(record, dict):
                raise ConfigFileError(f"Configuration of service {name!r} must be a mapping")
            config[str(name)] = record
        return config
