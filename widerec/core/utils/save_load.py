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
import os

import numpy as np
import paddle

from widerec.core.layer import SerializationType
from widerec.core.utils.data_io import DataInput, DataOutput

logging.basicConfig(
    format='%(asctime)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)


def _mkdir_if_not_exist(path):
    if not os.path.exists(path):
        os.makedirs(path)


def save_model(layer,
               model_path,
               epoch_id,
               prefix='rec',
               serialization_type=SerializationType.MODEL_SPEC):
    """
    write <model_path>/<epoch_id>/<prefix>.wnd: the serialization type as
    an int, then the layer stream
    """
    SerializationType.check(serialization_type)
    model_path = os.path.join(model_path, str(epoch_id))
    _mkdir_if_not_exist(model_path)
    model_file = os.path.join(model_path, prefix + ".wnd")
    with open(model_file, "wb") as f:
        out = DataOutput(f)
        out.write_int(serialization_type)
        layer.write(out, serialization_type)
    logger.info("Already save model in {}".format(model_path))
    return model_file


def load_model(model_path, layer, prefix='rec'):
    logger.info("start load model from {}".format(model_path))
    model_file = os.path.join(model_path, prefix + ".wnd")
    with open(model_file, "rb") as f:
        in_ = DataInput(f)
        serialization_type = SerializationType.check(in_.read_int())
        layer.read_fields(in_, serialization_type)
    return layer


def to_state_dict(wide_layer):
    state_dict = {}
    for layer in wide_layer.layers:
        state_dict["wide_field_{}.w_0".format(layer.column_id)] = \
            layer.weights
    if wide_layer.dense_layer is not None:
        state_dict["wide_dense.w_0"] = wide_layer.dense_layer.weights
    if wide_layer.bias is not None:
        state_dict["wide_bias.b_0"] = wide_layer.bias.weights
    return state_dict


def save_paddle_params(wide_layer, model_path, prefix='wide'):
    """
    save wide weights as paddle .pdparams, keyed like to_state_dict
    """
    _mkdir_if_not_exist(model_path)
    model_prefix = os.path.join(model_path, prefix)
    state_dict = {
        k: paddle.to_tensor(v)
        for k, v in to_state_dict(wide_layer).items()
    }
    paddle.save(state_dict, model_prefix + ".pdparams")
    logger.info("Already save paddle params in {}".format(model_path))


def load_paddle_params(model_path, wide_layer, prefix='wide'):
    logger.info("start load paddle params from {}".format(model_path))
    model_prefix = os.path.join(model_path, prefix)
    param_state_dict = paddle.load(
        model_prefix + ".pdparams", return_numpy=True)
    for name, weights in to_state_dict(wide_layer).items():
        if name not in param_state_dict:
            raise ValueError("{} not found in {}.pdparams".format(
                name, model_prefix))
        value = np.asarray(param_state_dict[name], dtype="float32")
        if value.shape != weights.shape:
            raise ValueError("{} shape {} not match {}".format(
                name, value.shape, weights.shape))
        weights[...] = value
    return wide_layer
