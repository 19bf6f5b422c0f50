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


def assert_list_not_null_and_size_equal(first, second):
    """
    check two lists are both present and have the same length
    Args:
        first(list)
        second(list)
    Raise:
        ValueError: when either list is None or the sizes differ
    """
    if first is None or second is None:
        raise ValueError("list should not be None, but received {} and {}".
                         format(type(first), type(second)))
    if len(first) != len(second):
        raise ValueError("list size not equal: {} vs {}".format(
            len(first), len(second)))


def assert_same_topology(layer_name, expected, actual):
    if expected != actual:
        raise ValueError("{} topology mismatch: {} vs {}".format(
            layer_name, expected, actual))
