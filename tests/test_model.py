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
import yaml

from widerec.core.model import WideModel, create_model, log_loss, sigmoid
from widerec.core.optimizer import AdaGrad, GradientDescent, create_optimizer
from widerec.core.sparse_input import SparseInput
from widerec.core.utils import envs


class TestWideModel(unittest.TestCase):
    def setUp(self):
        self.config = {
            "hyper_parameters.wide_field_dims": [2, 3],
            "hyper_parameters.dense_feature_dim": 1,
            "hyper_parameters.init_method": "zero",
        }

    def test_create_model(self):
        model = create_model(self.config)
        layer = model.wide_layer
        self.assertEqual([l.in_dim for l in layer.layers], [2, 3])
        self.assertEqual([l.column_id for l in layer.layers], [0, 1])
        self.assertEqual(layer.dense_layer.in_dim, 1)
        self.assertEqual(model.predict([SparseInput(0), SparseInput(2)],
                                       [1.0]), 0.5)

    def test_create_model_without_dense(self):
        self.config["hyper_parameters.dense_feature_dim"] = 0
        model = create_model(self.config)
        self.assertIsNone(model.wide_layer.dense_layer)
        self.assertEqual(
            model.predict([SparseInput(1), SparseInput(1)]), 0.5)

    def test_create_model_config_errors(self):
        with self.assertRaises(ValueError):
            create_model({})
        self.config["hyper_parameters.wide_column_ids"] = [4]
        with self.assertRaises(ValueError):
            create_model(self.config)

    def test_train_example_gradient(self):
        model = create_model(self.config)
        loss = model.train_example([SparseInput(1), SparseInput(0)], [2.0],
                                   1)
        self.assertAlmostEqual(loss, np.log(2.0), places=5)
        self.assertEqual(model.num_records, 1)
        # d loss / d logit = 0.5 - 1
        self.assertTrue(
            np.allclose(model.wide_layer.layers[0].w_grads[1], [-0.5]))
        self.assertTrue(
            np.allclose(model.wide_layer.dense_layer.w_grads, [[-1.0]]))
        self.assertEqual(model.wide_layer.bias.w_grad, -0.5)

    def test_training_reduces_loss(self):
        model = create_model(self.config)
        optimizer = GradientDescent(0.5)
        examples = [
            ([SparseInput(0), SparseInput(0)], [1.0], 1),
            ([SparseInput(1), SparseInput(1)], [-1.0], 0),
            ([SparseInput(0), SparseInput(2)], [0.5], 1),
            ([SparseInput(1), SparseInput(2)], [-0.5], 0),
        ]
        losses = []
        for _ in range(30):
            total = 0.0
            for sparse, dense, label in examples:
                total += model.train_example(sparse, dense, label)
            model.apply_gradients(optimizer)
            losses.append(total / len(examples))

        self.assertLess(losses[-1], losses[0])
        self.assertEqual(model.num_records, 0)
        self.assertGreater(model.predict(*examples[0][:2]), 0.5)
        self.assertLess(model.predict(*examples[1][:2]), 0.5)

    def test_apply_without_records(self):
        model = create_model(self.config)
        model.apply_gradients(GradientDescent(1.0))
        self.assertEqual(model.wide_layer.bias.weight, 0.0)

    def test_helpers(self):
        self.assertAlmostEqual(float(sigmoid(0.0)), 0.5)
        self.assertAlmostEqual(float(sigmoid(1000.0)), 1.0)
        self.assertTrue(np.isfinite(log_loss(0.0, 1)))


class TestCreateModelFromYaml(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.yaml_file = os.path.join(self.tmp_dir, "config.yaml")
        with open(self.yaml_file, "w") as f:
            yaml.safe_dump({
                "runner": {
                    "model_save_path": "output_model"
                },
                "hyper_parameters": {
                    "wide_field_dims": [4, 4, 4],
                    "dense_feature_dim": 2,
                    "l2_reg": 0.01,
                    "init_method": "xavier",
                    "seed": 7,
                    "optimizer": {
                        "class": "AdaGrad",
                        "learning_rate": 0.1
                    }
                },
                "dataset": {
                    "name": "ignored"
                }
            }, f)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_load_config(self):
        config = envs.load_config(self.yaml_file)
        self.assertEqual(config["hyper_parameters.optimizer.class"], "AdaGrad")
        self.assertEqual(config["runner.model_save_path"], "output_model")
        self.assertEqual(config["config_abs_dir"], self.tmp_dir)
        self.assertNotIn("dataset.name", config)
        self.assertIn("dataset.name",
                      envs.load_config(self.yaml_file, ["dataset"]))

    def test_seeded_model(self):
        config = envs.load_config(self.yaml_file)
        first = create_model(config).wide_layer
        second = create_model(config).wide_layer
        self.assertEqual(first.layers[0].l2_reg, 0.01)
        self.assertTrue(
            np.array_equal(first.layers[2].weights, second.layers[2].weights))
        # one initializer across sub-layers, so columns get different draws
        self.assertFalse(
            np.array_equal(first.layers[0].weights, first.layers[1].weights))

    def test_missing_file(self):
        with self.assertRaises(ValueError):
            envs.load_config(os.path.join(self.tmp_dir, "missing.yaml"))

    def test_sample_config(self):
        yaml_file = os.path.join(
            os.path.dirname(os.path.abspath(__file__)), "..", "models",
            "rank", "wide", "config.yaml")
        config = envs.load_config(yaml_file)
        model = create_model(config)
        self.assertEqual([l.column_id for l in model.wide_layer.layers],
                         [1, 4, 7, 9])
        self.assertEqual(model.wide_layer.dense_layer.in_dim, 13)
        self.assertIsInstance(create_optimizer(config), AdaGrad)

    def test_pretty_print(self):
        text = envs.pretty_print_envs({"a": 1}, ("Key", "Value"))
        self.assertIn("Key", text)
        self.assertIn("a", text)


if __name__ == '__main__':
    unittest.main()
