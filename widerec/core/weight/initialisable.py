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

import numpy as np


class InitMethod(object):
    """
    Names of the supported weight init methods.
    """
    ZERO_INIT = "zero"
    ONE_INIT = "one"
    GAUSSIAN_INIT = "gaussian"
    UNIFORM_INIT = "uniform"
    XAVIER_INIT = "xavier"
    HE_INIT = "he"
    LECUN_INIT = "lecun"

    ALL = (ZERO_INIT, ONE_INIT, GAUSSIAN_INIT, UNIFORM_INIT, XAVIER_INIT,
           HE_INIT, LECUN_INIT)


class Initialisable(metaclass=abc.ABCMeta):
    """
    Produce initial weights as a python float, a 1-D or a 2-D float32 array.
    """

    @abc.abstractmethod
    def init_scalar(self):
        pass

    @abc.abstractmethod
    def init_vector(self, length):
        pass

    @abc.abstractmethod
    def init_matrix(self, rows, cols):
        pass


class RandomInitialisable(Initialisable):
    """
    Base of initializers drawing from a seeded numpy RandomState. Subclasses
    only implement _sample(shape, fan_in, fan_out).
    """

    def __init__(self, seed=None):
        self._random = np.random.RandomState(seed)

    @abc.abstractmethod
    def _sample(self, shape, fan_in, fan_out):
        pass

    def init_scalar(self):
        return float(self._sample((1, ), 1, 1)[0])

    def init_vector(self, length):
        return self._sample((length, ), length, 1).astype("float32")

    def init_matrix(self, rows, cols):
        return self._sample((rows, cols), rows, cols).astype("float32")
