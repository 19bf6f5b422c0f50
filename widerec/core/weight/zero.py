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

import numpy as np

from widerec.core.weight.initialisable import Initialisable


class Zero(Initialisable):
    def init_scalar(self):
        return 0.0

    def init_vector(self, length):
        return np.zeros((length, ), dtype="float32")

    def init_matrix(self, rows, cols):
        return np.zeros((rows, cols), dtype="float32")
