#   Copyright (c) 2020 PaddlePaddle Authors. All Rights Reserved.
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

import os
import shutil
import tempfile
import unittest

import numpy as np
import paddle

from widerec.core.layer import SerializationType
from widerec.core.layers import (BiasLayer, WideDenseLayer, WideFieldLayer,
                                 WideLayer)
from widerec.core.sparse_input import SparseInput
from widerec.core.utils import save_load


def build_wide_layer():
    layers = [WideFieldLayer(0, 3), WideFieldLayer(1, 4)]
    wide_layer = WideLayer(layers, WideDenseLayer([2, 3], 2), BiasLayer())
    wide_layer.init_weight("gaussian")
    return wide_layer


class TestSaveLoad(unittest.TestCase):
    def setUp(self):
        self.model_path = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.model_path)

    def test_save_and_load_model(self):
        wide_layer = build_wide_layer()
        model_file = save_load.save_model(wide_layer, self.model_path, 3)
        self.assertEqual(model_file,
                         os.path.join(self.model_path, "3", "rec.wnd"))

        restored = save_load.load_model(
            os.path.join(self.model_path, "3"), WideLayer())
        self.assertEqual(restored.serialization_type,
                         SerializationType.MODEL_SPEC)
        for layer, restored_layer in zip(wide_layer.layers, restored.layers):
            self.assertTrue(
                np.array_equal(layer.weights, restored_layer.weights))
        self.assertEqual(restored.bias.weight, wide_layer.bias.weight)

    def test_load_weights_into_existing_topology(self):
        wide_layer = build_wide_layer()
        save_load.save_model(
            wide_layer,
            self.model_path,
            0,
            serialization_type=SerializationType.WEIGHTS)
        target = build_wide_layer()
        target.init_weight("zero")
        save_load.load_model(os.path.join(self.model_path, "0"), target)
        self.assertTrue(
            np.array_equal(target.dense_layer.weights,
                           wide_layer.dense_layer.weights))

    def test_truncated_checkpoint(self):
        model_file = save_load.save_model(build_wide_layer(), self.model_path,
                                          1)
        with open(model_file, "rb") as f:
            data = f.read()
        with open(model_file, "wb") as f:
            f.write(data[:len(data) // 2])
        with self.assertRaises(EOFError):
            save_load.load_model(
                os.path.join(self.model_path, "1"), WideLayer())

    def test_paddle_params(self):
        wide_layer = build_wide_layer()
        save_load.save_paddle_params(wide_layer, self.model_path)
        self.assertTrue(
            os.path.exists(os.path.join(self.model_path, "wide.pdparams")))

        target = build_wide_layer()
        target.init_weight("zero")
        save_load.load_paddle_params(self.model_path, target)
        self.assertTrue(
            np.allclose(target.layers[1].weights, wide_layer.layers[1].weights))
        self.assertAlmostEqual(target.bias.weight, wide_layer.bias.weight)

    def test_paddle_params_shape_mismatch(self):
        save_load.save_paddle_params(build_wide_layer(), self.model_path)
        target = WideLayer([WideFieldLayer(0, 5)], None, None)
        with self.assertRaises(ValueError):
            save_load.load_paddle_params(self.model_path, target)


class TestAgainstPaddleAutograd(unittest.TestCase):
    """
    The wide part is a linear model, so paddle autograd over the same
    weights must give the same output and weight gradients.
    """

    def test_forward_and_backward(self):
        wide_layer = build_wide_layer()
        sparse_inputs = [SparseInput(2, 1.0), SparseInput(1, 0.5)]
        dense_inputs = np.array([0.3, -1.2], dtype="float32")
        out = wide_layer.forward(sparse_inputs, dense_inputs)
        back_inputs = np.array([0.7], dtype="float32")
        wide_layer.backward(back_inputs, 1.0)

        params = {
            k: paddle.to_tensor(v, stop_gradient=False)
            for k, v in save_load.to_state_dict(wide_layer).items()
        }
        pd_out = params["wide_bias.b_0"] + paddle.matmul(
            paddle.to_tensor(dense_inputs.reshape(1, -1)),
            params["wide_dense.w_0"]).reshape([-1])
        for layer, sparse_input in zip(wide_layer.layers, sparse_inputs):
            one_hot = np.zeros((1, layer.in_dim), dtype="float32")
            one_hot[0, sparse_input.value_index] = sparse_input.value
            pd_out = pd_out + paddle.matmul(
                paddle.to_tensor(one_hot),
                params["wide_field_{}.w_0".format(layer.column_id)]).reshape(
                    [-1])
        self.assertTrue(np.allclose(pd_out.numpy(), out, atol=1e-5))

        (pd_out * paddle.to_tensor(back_inputs)).sum().backward()
        self.assertTrue(
            np.allclose(params["wide_dense.w_0"].grad.numpy(),
                        wide_layer.dense_layer.w_grads))
        self.assertTrue(
            np.allclose(params["wide_bias.b_0"].grad.numpy(),
                        wide_layer.bias.w_grads))
        for layer, sparse_input in zip(wide_layer.layers, sparse_inputs):
            grad = params["wide_field_{}.w_0".format(layer.column_id)].grad
            expected = np.zeros_like(layer.weights)
            expected[sparse_input.value_index] = layer.w_grads[
                sparse_input.value_index]
            self.assertTrue(np.allclose(grad.numpy(), expected))


if __name__ == '__main__':
    unittest.main()
