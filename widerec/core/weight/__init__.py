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

from widerec.core.weight.initialisable import InitMethod, Initialisable
from widerec.core.weight.zero import Zero
from widerec.core.weight.one import One
from widerec.core.weight.random_gaussian import RandomGaussian
from widerec.core.weight.random_uniform import RandomUniform
from widerec.core.weight.xavier import Xavier
from widerec.core.weight.he import He
from widerec.core.weight.lecun import Lecun

__all__ = [
    "InitMethod", "Initialisable", "Zero", "One", "RandomGaussian",
    "RandomUniform", "Xavier", "He", "Lecun", "get_initialisable"
]

_initialisables = {
    InitMethod.ZERO_INIT: Zero,
    InitMethod.ONE_INIT: One,
    InitMethod.GAUSSIAN_INIT: RandomGaussian,
    InitMethod.UNIFORM_INIT: RandomUniform,
    InitMethod.XAVIER_INIT: Xavier,
    InitMethod.HE_INIT: He,
    InitMethod.LECUN_INIT: Lecun,
}


def get_initialisable(method, seed=None):
    """
    Args:
        method(str|Initialisable): init method name, or an initializer
            instance which is returned as is
        seed(int): seed for the random initializers
    Return:
        initializer(Initialisable)
    """
    if isinstance(method, Initialisable):
        return method
    if not isinstance(method, str):
        raise ValueError("init method should be str, but received {}".format(
            type(method)))
    name = method.strip().lower()
    if name.endswith("_init"):
        name = name[:-len("_init")]
    if name not in _initialisables:
        raise ValueError("init method {} can not be recognized, choose one of {}".
                         format(method, list(InitMethod.ALL)))
    clazz = _initialisables[name]
    if clazz in (Zero, One):
        return clazz()
    return clazz(seed=seed)
