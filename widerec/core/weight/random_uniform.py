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

from widerec.core.weight.initialisable import RandomInitialisable


class RandomUniform(RandomInitialisable):
    def __init__(self, low=-0.05, high=0.05, seed=None):
        super(RandomUniform, self).__init__(seed)
        if low > high:
            raise ValueError("low {} should not be larger than high {}".
                             format(low, high))
        self.low = low
        self.high = high

    def _sample(self, shape, fan_in, fan_out):
        return self._random.uniform(self.low, self.high, shape)
