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

from widerec.core.layers.bias_layer import BiasLayer
from widerec.core.layers.wide_dense_layer import WideDenseLayer
from widerec.core.layers.wide_field_layer import WideFieldLayer
from widerec.core.layers.wide_layer import WideLayer

__all__ = ["BiasLayer", "WideDenseLayer", "WideFieldLayer", "WideLayer"]
