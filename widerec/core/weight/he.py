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

import math

from widerec.core.weight.initialisable import RandomInitialisable


class He(RandomInitialisable):
    """
    N(0, 2 / fan_in), fan_in of an empty shape counts as 1
    """

    def _sample(self, shape, fan_in, fan_out):
        std = math.sqrt(2.0 / max(fan_in, 1))
        return self._random.normal(0.0, std, shape)
