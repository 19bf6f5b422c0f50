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

import logging

import numpy as np

from widerec.core.layers import BiasLayer, WideDenseLayer, WideFieldLayer
from widerec.core.layers import WideLayer
from widerec.core.utils import envs
from widerec.core.weight import InitMethod, get_initialisable

logging.basicConfig(
    format='%(asctime)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)

_EPS = 1e-7


def sigmoid(x):
    x = np.clip(x, -88.0, 88.0)
    return 1.0 / (1.0 + np.exp(-x))


def log_loss(pred, label):
    pred = min(max(float(pred), _EPS), 1.0 - _EPS)
    return -(label * np.log(pred) + (1.0 - label) * np.log(1.0 - pred))


class WideModel(object):
    """
    Binary classifier on top of a WideLayer: output unit 0 is the logit.

    Gradients of every train_example call are accumulated in the layer
    until apply_gradients averages them over the counted records.
    """

    def __init__(self, wide_layer):
        self.wide_layer = wide_layer
        self.num_records = 0

    def forward(self, sparse_inputs, dense_inputs=None):
        return self.wide_layer.forward(sparse_inputs, dense_inputs)

    def predict(self, sparse_inputs, dense_inputs=None):
        logits = self.forward(sparse_inputs, dense_inputs)
        return float(sigmoid(logits[0]))

    def train_example(self, sparse_inputs, dense_inputs, label, sig=1.0):
        logits = self.forward(sparse_inputs, dense_inputs)
        pred = float(sigmoid(logits[0]))
        back_inputs = np.zeros_like(logits)
        back_inputs[0] = pred - label
        self.wide_layer.backward(back_inputs, sig)
        self.num_records += 1
        loss = log_loss(pred, label)
        logger.debug("label: {}, pred: {}, loss: {}".format(label, pred,
                                                           loss))
        return loss

    def apply_gradients(self, optimizer):
        if self.num_records == 0:
            return
        self.wide_layer.update(optimizer, self.num_records)
        self.wide_layer.init_grads()
        self.num_records = 0


def create_model(config):
    """
    build a WideModel from the flattened hyper_parameters of a config
    """
    field_dims = envs.get_required(config, "hyper_parameters.wide_field_dims")
    column_ids = config.get("hyper_parameters.wide_column_ids",
                            list(range(len(field_dims))))
    if len(column_ids) != len(field_dims):
        raise ValueError("wide_column_ids size {} not match wide_field_dims {}".
                         format(len(column_ids), len(field_dims)))
    dense_dim = config.get("hyper_parameters.dense_feature_dim", 0)
    dense_column_ids = config.get("hyper_parameters.dense_column_ids",
                                  list(range(dense_dim)))
    out_dim = config.get("hyper_parameters.out_dim", 1)
    l2_reg = config.get("hyper_parameters.l2_reg", 0.0)
    init_method = config.get("hyper_parameters.init_method",
                             InitMethod.ZERO_INIT)
    seed = config.get("hyper_parameters.seed", None)

    layers = [
        WideFieldLayer(column_id, field_dim, out_dim, l2_reg)
        for column_id, field_dim in zip(column_ids, field_dims)
    ]
    dense_layer = None
    if dense_dim > 0:
        dense_layer = WideDenseLayer(dense_column_ids, dense_dim, out_dim,
                                     l2_reg)
    wide_layer = WideLayer(layers, dense_layer, BiasLayer())
    wide_layer.init_weight(get_initialisable(init_method, seed=seed))
    logger.info(
        envs.pretty_print_envs({
            "wide columns": len(layers),
            "dense dim": dense_dim,
            "out dim": out_dim,
            "l2 reg": l2_reg,
            "init method": init_method
        }, ("WideModel", "Value")))
    return WideModel(wide_layer)
