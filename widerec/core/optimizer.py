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

import abc
import logging

import numpy as np

logging.basicConfig(
    format='%(asctime)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)


class Optimizer(metaclass=abc.ABCMeta):
    """
    Update weights in place from accumulated gradients.

    Every parameter is identified by a stable key so that stateful
    optimizers keep one slot per parameter. When rows is given, weights is
    2-D and grads holds only the rows listed in rows (sparse update of a
    wide field layer).
    """

    def __init__(self, learning_rate):
        if learning_rate <= 0:
            raise ValueError("learning_rate should be positive, but got {}".
                             format(learning_rate))
        self.learning_rate = float(learning_rate)
        self._slots = {}

    def _slot(self, key, name, like):
        slot_key = (key, name)
        if slot_key not in self._slots:
            self._slots[slot_key] = np.zeros_like(like, dtype="float32")
        return self._slots[slot_key]

    def update(self, key, weights, grads, rows=None):
        grads = np.asarray(grads, dtype="float32")
        if rows is None:
            if grads.shape != weights.shape:
                raise ValueError("grads shape {} not match weights {}".format(
                    grads.shape, weights.shape))
            index = Ellipsis
        else:
            index = np.asarray(rows, dtype="int64")
            if grads.shape != (len(index), ) + weights.shape[1:]:
                raise ValueError("grads shape {} not match {} rows".format(
                    grads.shape, len(index)))
        self._apply(key, weights, grads, index)

    @abc.abstractmethod
    def _apply(self, key, weights, grads, index):
        pass


class GradientDescent(Optimizer):
    def _apply(self, key, weights, grads, index):
        weights[index] -= self.learning_rate * grads


class Momentum(Optimizer):
    def __init__(self, learning_rate, momentum=0.9):
        super(Momentum, self).__init__(learning_rate)
        self.momentum = momentum

    def _apply(self, key, weights, grads, index):
        velocity = self._slot(key, "velocity", weights)
        velocity[index] = self.momentum * velocity[index] + grads
        weights[index] -= self.learning_rate * velocity[index]


class AdaGrad(Optimizer):
    def __init__(self, learning_rate, epsilon=1e-6):
        super(AdaGrad, self).__init__(learning_rate)
        self.epsilon = epsilon

    def _apply(self, key, weights, grads, index):
        moment = self._slot(key, "moment", weights)
        moment[index] += grads * grads
        weights[index] -= self.learning_rate * grads / (
            np.sqrt(moment[index]) + self.epsilon)


class Adam(Optimizer):
    """
    Adam with lazy sparse update: rows not touched keep their moments.
    """

    def __init__(self,
                 learning_rate,
                 beta1=0.9,
                 beta2=0.999,
                 epsilon=1e-8):
        super(Adam, self).__init__(learning_rate)
        self.beta1 = beta1
        self.beta2 = beta2
        self.epsilon = epsilon
        self._steps = {}

    def _apply(self, key, weights, grads, index):
        m = self._slot(key, "m", weights)
        v = self._slot(key, "v", weights)
        step = self._steps.get(key, 0) + 1
        self._steps[key] = step
        m[index] = self.beta1 * m[index] + (1 - self.beta1) * grads
        v[index] = self.beta2 * v[index] + (1 - self.beta2) * grads * grads
        m_hat = m[index] / (1 - self.beta1**step)
        v_hat = v[index] / (1 - self.beta2**step)
        weights[index] -= self.learning_rate * m_hat / (
            np.sqrt(v_hat) + self.epsilon)


_optimizers = {
    "sgd": GradientDescent,
    "gradientdescent": GradientDescent,
    "momentum": Momentum,
    "adagrad": AdaGrad,
    "adam": Adam,
}


def create_optimizer(config):
    name = config.get("hyper_parameters.optimizer.class", "SGD")
    lr = config.get("hyper_parameters.optimizer.learning_rate", 0.001)
    clazz = _optimizers.get(str(name).lower(), None)
    if clazz is None:
        raise ValueError("optimizer {} can not be recognized".format(name))
    logger.info("create optimizer {} with learning_rate {}".format(name, lr))
    return clazz(learning_rate=lr)
