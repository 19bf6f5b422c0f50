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

from widerec.core.layer import AbstractLayer, SerializationType
from widerec.core.weight import get_initialisable


class BiasLayer(AbstractLayer):
    """
    One scalar weight added to every output unit of the wide part.
    """

    def __init__(self, weight=0.0):
        super(BiasLayer, self).__init__()
        self.weights = np.array([weight], dtype="float32")
        self.w_grads = np.zeros((1, ), dtype="float32")

    @property
    def weight(self):
        return float(self.weights[0])

    @property
    def w_grad(self):
        return float(self.w_grads[0])

    def get_out_dim(self):
        return 1

    def forward(self, unit=1.0):
        return float(unit) * self.weight

    def backward(self, back_inputs, sig):
        # bias feeds every output unit, so its gradient sums over them
        grad = float(np.sum(back_inputs)) * sig
        self.w_grads[0] += grad
        return grad

    def init_weight(self, method):
        self.weights[0] = get_initialisable(method).init_scalar()

    def init_grads(self):
        self.w_grads[0] = 0.0

    def combine(self, other):
        self.w_grads[0] += other.w_grads[0]
        return self

    def update(self, optimizer, num_records=1):
        optimizer.update("wide_bias", self.weights,
                         self.w_grads / num_records)

    def _write(self, out):
        if self.serialization_type == SerializationType.GRADIENTS:
            out.write_float(self.w_grad)
        else:
            out.write_float(self.weight)

    def _read_fields(self, in_):
        if self.serialization_type == SerializationType.GRADIENTS:
            self.w_grads[0] = in_.read_float()
        else:
            self.weights[0] = in_.read_float()
