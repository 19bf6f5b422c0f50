# Copyright (c) 2020 PaddlePaddle Authors. All Rights Reserved.
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

import copy
import os

import yaml


def load_yaml(config):
    if os.path.isfile(config):
        with open(config, 'r', encoding="utf-8") as rb:
            _config = yaml.load(rb.read(), Loader=yaml.FullLoader)
            return _config
    else:
        raise ValueError("config {} can not be supported".format(config))


def flatten_environs(envs, separator="."):
    """
    flatten a nested dict into dotted keys, e.g.
    {"hyper_parameters": {"optimizer": {"learning_rate": 0.1}}}
    becomes {"hyper_parameters.optimizer.learning_rate": 0.1}
    """
    flatten_dict = {}
    assert isinstance(envs, dict)

    def fatten_env_namespace(namespace_nests, local_envs):
        for k, v in local_envs.items():
            if isinstance(v, dict):
                nests = copy.deepcopy(namespace_nests)
                nests.append(k)
                fatten_env_namespace(nests, v)
            else:
                global_k = separator.join(namespace_nests + [k])
                flatten_dict[global_k] = v

    fatten_env_namespace([], envs)
    return flatten_dict


def load_config(yaml_file, other_part=None):
    """
    load a yaml file and keep the flattened keys of the running parts
    Args:
        yaml_file(str): path of the yaml file
        other_part(list): extra top level sections to keep
    Return:
        config(dict): dotted keys to values, plus "config_abs_dir"
    """
    part_list = ["workspace", "runner", "hyper_parameters"]
    if other_part:
        part_list += other_part
    _envs = load_yaml(yaml_file)
    if not isinstance(_envs, dict):
        raise ValueError("config {} should be a mapping".format(yaml_file))
    config = {}
    for k, v in flatten_environs(_envs).items():
        for f in part_list:
            if k.startswith(f):
                config[k] = v
    config["config_abs_dir"] = os.path.dirname(os.path.abspath(yaml_file))
    return config


def get_required(config, key):
    value = config.get(key, None)
    if value is None:
        raise ValueError("{} must be set in config".format(key))
    return value


def pretty_print_envs(envs, header=None):
    spacing = 5
    max_k = 45
    max_v = 50

    for k, v in envs.items():
        max_k = max(max_k, len(k))

    h_format = "{{:^{}s}}{}{{:<{}s}}\n".format(max_k, " " * spacing, max_v)
    l_format = "{{:<{}s}}{{}}{{:<{}s}}\n".format(max_k, max_v)
    length = max_k + max_v + spacing

    border = "".join(["="] * length)
    line = "".join(["-"] * length)

    draws = ""
    draws += border + "\n"

    if header:
        draws += h_format.format(header[0], header[1])
    else:
        draws += h_format.format("widerec Config", "Value")

    draws += line + "\n"

    for k, v in envs.items():
        draws += l_format.format(k, " " * spacing, str(v))

    draws += border

    _str = "\n{}\n".format(draws)
    return _str
