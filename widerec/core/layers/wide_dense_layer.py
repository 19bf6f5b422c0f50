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


class WideDenseLayer(AbstractLayer):
    """
    Linear transform over the concatenated dense columns of the wide part.
    """

    def __init__(self, column_ids=None, in_dim=0, out_dim=1, l2_reg=0.0):
        super(WideDenseLayer, self).__init__()
        self.column_ids = list(column_ids) if column_ids is not None else []
        self.in_dim = in_dim
        self.out_dim = out_dim
        self.l2_reg = l2_reg
        self.weights = np.zeros((in_dim, out_dim), dtype="float32")
        self.w_grads = np.zeros((in_dim, out_dim), dtype="float32")
        self.last_input = None

    def get_out_dim(self):
        return self.out_dim

    def forward(self, dense_inputs):
        self.last_input = None
        if dense_inputs is None:
            raise ValueError("dense inputs should not be None")
        dense_inputs = np.asarray(dense_inputs, dtype="float32").reshape(-1)
        if dense_inputs.shape[0] != self.in_dim:
            raise ValueError("dense input size {} not match in_dim {}".format(
                dense_inputs.shape[0], self.in_dim))
        self.last_input = dense_inputs
        return dense_inputs.dot(self.weights)

    def backward(self, back_inputs, sig):
        if self.last_input is None:
            raise RuntimeError("backward of dense layer called before forward")
        back_inputs = np.asarray(back_inputs, dtype="float32").reshape(-1)
        grad = (np.outer(self.last_input, back_inputs) * sig +
                self.l2_reg * self.weights).astype("float32")
        self.w_grads += grad
        return grad

    def init_weight(self, method):
        initializer = get_initialisable(method)
        self.weights = initializer.init_matrix(self.in_dim, self.out_dim)

    def init_grads(self):
        self.w_grads = np.zeros((self.in_dim, self.out_dim), dtype="float32")

    def combine(self, other):
        assert_same_topology("WideDenseLayer", (self.in_dim, self.out_dim),
                             (other.in_dim, other.out_dim))
        self.w_grads = self.w_grads + other.w_grads
        return self

    def update(self, optimizer, num_records=1):
        optimizer.update("wide_dense", self.weights,
                         self.w_grads / num_records)

    def _write(self, out):
        out.write_int(self.in_dim)
        out.write_int(self.out_dim)
        if self.serialization_type == SerializationType.MODEL_SPEC:
            out.write_float(self.l2_reg)
            out.write_int(len(self.column_ids))
            for column_id in self.column_ids:
                out.write_int(column_id)
        if self.serialization_type == SerializationType.GRADIENTS:
            out.write_float_array(self.w_grads)
        else:
            out.write_float_array(self.weights)

    def _read_fields(self, in_):
        self.in_dim = in_.read_int()
        self.out_dim = in_.read_int()
        if self.serialization_type == SerializationType.MODEL_SPEC:
            self.l2_reg = in_.read_float()
            self.column_ids = [in_.read_int() for _ in range(in_.read_int())]
        shape = (self.in_dim, self.out_dim)
        if self.serialization_type == SerializationType.GRADIENTS:
            self.w_grads = in_.read_float_array(shape)
        else:
            self.weights = in_.read_float_array(shape)
