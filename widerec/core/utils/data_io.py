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

import struct

import numpy as np

_INT = struct.Struct(">i")
_FLOAT = struct.Struct(">f")
_BOOL = struct.Struct(">?")


class DataOutput(object):
    """
    Big-endian writer over a binary file-like object. The layout matches
    java.io.DataOutput so checkpoints written by either side can be shared.
    """

    def __init__(self, stream):
        self._stream = stream

    def write_int(self, value):
        self._stream.write(_INT.pack(int(value)))

    def write_boolean(self, value):
        self._stream.write(_BOOL.pack(bool(value)))

    def write_float(self, value):
        self._stream.write(_FLOAT.pack(float(value)))

    def write_float_array(self, values):
        """
        write an int length followed by the flattened float32 values
        """
        values = np.asarray(values, dtype=">f4").reshape(-1)
        self.write_int(values.size)
        self._stream.write(values.tobytes())


class DataInput(object):
    """
    Reader counterpart of DataOutput. A short read raises EOFError.
    """

    def __init__(self, stream):
        self._stream = stream

    def _read(self, size):
        data = self._stream.read(size)
        if data is None or len(data) != size:
            raise EOFError("expect {} bytes but got {}".format(
                size, 0 if data is None else len(data)))
        return data

    def read_int(self):
        return _INT.unpack(self._read(_INT.size))[0]

    def read_boolean(self):
        return _BOOL.unpack(self._read(_BOOL.size))[0]

    def read_float(self):
        return _FLOAT.unpack(self._read(_FLOAT.size))[0]

    def read_float_array(self, shape=None):
        size = self.read_int()
        if size < 0:
            raise IOError("negative array length {}".format(size))
        values = np.frombuffer(
            self._read(size * 4), dtype=">f4").astype("float32")
        if shape is not None:
            values = values.reshape(shape)
        return values
