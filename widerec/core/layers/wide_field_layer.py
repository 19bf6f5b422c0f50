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
from widerec.core.utils.validation import assert_same_topology
from widerec.core.weight import get_initialisable


class WideFieldLayer(AbstractLayer):
    """
    Wide part of one categorical column.

    The column is one-hot encoded, so forward only picks the row of the
    active category instead of multiplying a full one-hot vector, and
    backward only touches that row. Gradients are kept sparse as
    {row index: float32[out_dim]}.
    """

    def __init__(self, column_id=0, in_dim=0, out_dim=1, l2_reg=0.0):
        super(WideFieldLayer, self).__init__()
        self.column_id = column_id
        self.in_dim = in_dim
        self.out_dim = out_dim
        self.l2_reg = l2_reg
        self.weights = np.zeros((in_dim, out_dim), dtype="float32")
        self.w_grads = {}
        self.last_input = None

    def get_out_dim(self):
        return self.out_dim

    def forward(self, sparse_input):
        self.last_input = None
        index = sparse_input.value_index
        if index < 0 or index >= self.in_dim:
            raise IndexError("column {} index {} out of range [0, {})".format(
                self.column_id, index, self.in_dim))
        self.last_input = sparse_input
        return self.weights[index] * np.float32(sparse_input.value)

    def backward(self, back_inputs, sig):
        if self.last_input is None:
            raise RuntimeError("backward of column {} called before forward".
                               format(self.column_id))
        index = self.last_input.value_index
        back_inputs = np.asarray(back_inputs, dtype="float32")
        grad = (self.last_input.value * back_inputs * sig +
                self.l2_reg * self.weights[index]).astype("float32")
        if index in self.w_grads:
            self.w_grads[index] += grad
        else:
            self.w_grads[index] = grad.copy()
        return grad

    def init_weight(self, method):
        initializer = get_initialisable(method)
        self.weights = initializer.init_matrix(self.in_dim, self.out_dim)

    def init_grads(self):
        self.w_grads = {}

    def combine(self, other):
        assert_same_topology(
            "WideFieldLayer", (self.column_id, self.in_dim, self.out_dim),
            (other.column_id, other.in_dim, other.out_dim))
        for index, grad in other.w_grads.items():
            if index in self.w_grads:
                self.w_grads[index] = self.w_grads[index] + grad
            else:
                self.w_grads[index] = np.array(grad, dtype="float32")
        return self

    def update(self, optimizer, num_records=1):
        if not self.w_grads:
            return
        rows = sorted(self.w_grads.keys())
        grads = np.stack([self.w_grads[i] for i in rows]) / num_records
        optimizer.update("wide_field_{}".format(self.column_id),
                         self.weights, grads, rows)

    def _write(self, out):
        out.write_int(self.column_id)
        out.write_int(self.in_dim)
        out.write_int(self.out_dim)
        if self.serialization_type == SerializationType.MODEL_SPEC:
            out.write_float(self.l2_reg)
        if self.serialization_type == SerializationType.GRADIENTS:
            out.write_int(len(self.w_grads))
            for index in sorted(self.w_grads.keys()):
                out.write_int(index)
                out.write_float_array(self.w_grads[index])
        else:
            out.write_float_array(self.weights)

    def _read_fields(self, in_):
        self.column_id = in_.read_int()
        self.in_dim = in_.read_int()
        self.out_dim = in_.read_int()
        if self.serialization_type == SerializationType.MODEL_SPEC:
            self.l2_reg = in_.read_float()
        if self.serialization_type == SerializationType.GRADIENTS:
            self.w_grads = {}
            for _ in range(in_.read_int()):
                index = in_.read_int()
                self.w_grads[index] = in_.read_float_array((self.out_dim, ))
        else:
            self.weights = in_.read_float_array((self.in_dim, self.out_dim))
