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


class SerializationType(object):
    """
    Selects which part of a layer goes into the byte stream.
    """
    WEIGHTS = 0
    GRADIENTS = 1
    MODEL_SPEC = 2

    ALL = (WEIGHTS, GRADIENTS, MODEL_SPEC)

    @staticmethod
    def check(serialization_type):
        if serialization_type not in SerializationType.ALL:
            raise ValueError("unknown serialization type {}".format(
                serialization_type))
        return serialization_type


class AbstractLayer(metaclass=abc.ABCMeta):
    """
    Base of all wide layers.

    A layer computes forward outputs, accumulates gradients in backward and
    reads/writes itself from/to a DataOutput/DataInput. The serialization
    type is kept on the instance so that a composite layer can pass the one
    it was given down to every nested layer.
    """

    def __init__(self):
        self.serialization_type = SerializationType.MODEL_SPEC

    @abc.abstractmethod
    def get_out_dim(self):
        pass

    @abc.abstractmethod
    def forward(self, *inputs):
        pass

    @abc.abstractmethod
    def backward(self, back_inputs, sig):
        pass

    @abc.abstractmethod
    def init_weight(self, method):
        """
        Args:
            method(str|Initialisable): init method name or initializer
        """
        pass

    @abc.abstractmethod
    def init_grads(self):
        pass

    @abc.abstractmethod
    def combine(self, other):
        """
        add gradients accumulated in another layer of the same topology
        """
        pass

    @abc.abstractmethod
    def update(self, optimizer, num_records=1):
        pass

    def write(self, out, serialization_type=None):
        if serialization_type is not None:
            self.serialization_type = SerializationType.check(
                serialization_type)
        self._write(out)

    def read_fields(self, in_, serialization_type=None):
        if serialization_type is not None:
            self.serialization_type = SerializationType.check(
                serialization_type)
        self._read_fields(in_)

    @abc.abstractmethod
    def _write(self, out):
        pass

    @abc.abstractmethod
    def _read_fields(self, in_):
        pass
