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

from widerec.core.layer import AbstractLayer
from widerec.core.layers.bias_layer import BiasLayer
from widerec.core.layers.wide_dense_layer import WideDenseLayer
from widerec.core.layers.wide_field_layer import WideFieldLayer
from widerec.core.utils.validation import assert_list_not_null_and_size_equal
from widerec.core.utils.validation import assert_same_topology
from widerec.core.weight import get_initialisable


class WideLayer(AbstractLayer):
    """
    Wide part of WideAndDeep: one WideFieldLayer per wide column, one
    WideDenseLayer over the dense columns and one BiasLayer.

    Sub-layer outputs are added together, so the output width of every
    sub-layer must agree with the first field layer's. Dense and bias
    layers are optional: a checkpoint may omit them.
    """

    def __init__(self, layers=None, dense_layer=None, bias=None):
        super(WideLayer, self).__init__()
        self.layers = layers if layers is not None else []
        self.dense_layer = dense_layer
        self.bias = bias

    def get_out_dim(self):
        length = 0
        for layer in self.layers:
            length += layer.get_out_dim()
        length += 1  # bias
        length += 1  # dense layer
        return length

    def _accumulator_dim(self):
        if self.layers:
            return self.layers[0].get_out_dim()
        if self.dense_layer is not None:
            return self.dense_layer.get_out_dim()
        return 1

    def forward(self, sparse_inputs, dense_inputs=None):
        """
        Args:
            sparse_inputs(list): one SparseInput per wide column
            dense_inputs(list|np.ndarray): concatenated dense values
        Return:
            results(np.ndarray): float32 vector of the shared output width
        """
        assert_list_not_null_and_size_equal(self.layers, sparse_inputs)
        results = np.zeros((self._accumulator_dim(), ), dtype="float32")
        for layer, sparse_input in zip(self.layers, sparse_inputs):
            field_forwards = layer.forward(sparse_input)
            assert field_forwards.shape == results.shape
            results += field_forwards

        if self.dense_layer is not None:
            dense_forwards = self.dense_layer.forward(dense_inputs)
            assert dense_forwards.shape == results.shape
            results += dense_forwards

        if self.bias is not None:
            results += self.bias.forward(1.0)
        return results

    def backward(self, back_inputs, sig=1.0):
        """
        Forward is a plain sum, so every sub-layer receives the same
        back_inputs. Returns the gradient contribution of each field layer,
        then the dense layer's, then the bias one wrapped in an array.
        """
        back_inputs = np.asarray(back_inputs, dtype="float32").reshape(-1)
        grads = []
        for layer in self.layers:
            grads.append(layer.backward(back_inputs, sig))
        if self.dense_layer is not None:
            grads.append(self.dense_layer.backward(back_inputs, sig))
        if self.bias is not None:
            grads.append(
                np.array(
                    [self.bias.backward(back_inputs, sig)], dtype="float32"))
        return grads

    def init_weight(self, method):
        # one initializer for all sub-layers so a seeded one is not replayed
        initializer = get_initialisable(method)
        for layer in self.layers:
            layer.init_weight(initializer)
        if self.dense_layer is not None:
            self.dense_layer.init_weight(initializer)
        if self.bias is not None:
            self.bias.init_weight(initializer)

    def init_grads(self):
        for layer in self.layers:
            layer.init_grads()
        if self.dense_layer is not None:
            self.dense_layer.init_grads()
        if self.bias is not None:
            self.bias.init_grads()

    def combine(self, other):
        assert_list_not_null_and_size_equal(self.layers, other.layers)
        assert_same_topology(
            "WideLayer",
            (self.dense_layer is None, self.bias is None),
            (other.dense_layer is None, other.bias is None))
        for layer, other_layer in zip(self.layers, other.layers):
            layer.combine(other_layer)
        if self.dense_layer is not None:
            self.dense_layer.combine(other.dense_layer)
        if self.bias is not None:
            self.bias.combine(other.bias)
        return self

    def update(self, optimizer, num_records=1):
        if num_records <= 0:
            raise ValueError("num_records should be positive, but got {}".
                             format(num_records))
        for layer in self.layers:
            layer.update(optimizer, num_records)
        if self.dense_layer is not None:
            self.dense_layer.update(optimizer, num_records)
        if self.bias is not None:
            self.bias.update(optimizer, num_records)

    def _write(self, out):
        out.write_int(len(self.layers))
        for layer in self.layers:
            layer.write(out, self.serialization_type)

        if self.dense_layer is None:
            out.write_boolean(False)
        else:
            out.write_boolean(True)
            self.dense_layer.write(out, self.serialization_type)

        if self.bias is None:
            out.write_boolean(False)
        else:
            out.write_boolean(True)
            self.bias.write(out, self.serialization_type)

    def _read_fields(self, in_):
        layer_size = in_.read_int()
        if layer_size < 0:
            raise IOError("negative wide layer size {}".format(layer_size))
        for i in range(layer_size):
            if i >= len(self.layers):
                self.layers.append(WideFieldLayer())
            self.layers[i].read_fields(in_, self.serialization_type)
        del self.layers[layer_size:]

        if not in_.read_boolean():
            self.dense_layer = None
        else:
            if self.dense_layer is None:
                self.dense_layer = WideDenseLayer()
            self.dense_layer.read_fields(in_, self.serialization_type)

        if not in_.read_boolean():
            self.bias = None
        else:
            if self.bias is None:
                self.bias = BiasLayer()
            self.bias.read_fields(in_, self.serialization_type)
