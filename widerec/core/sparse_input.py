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


class SparseInput(object):
    """
    One-hot input of a categorical column: the active index and its value.
    """

    def __init__(self, value_index, value=1.0):
        self.value_index = int(value_index)
        self.value = float(value)

    def __eq__(self, other):
        if not isinstance(other, SparseInput):
            return NotImplemented
        return (self.value_index == other.value_index and
                self.value == other.value)

    def __repr__(self):
        return "SparseInput(value_index={}, value={})".format(
            self.value_index, self.value)
