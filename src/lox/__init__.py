"""
Lox Programming Language Implementation

A small dynamically typed scripting language with closures, first class
functions and classes with multiple inheritance, run by a tree walking
interpreter.
"""

__version__ = "0.2.0"


from ._error import *
from ._token import *
from . import _ast as ast
from ._scan import *
from ._parse import *
from ._resolve import *
from ._env import *
from ._value import *
from ._ops import *
from ._func import *
from ._class import *
from ._array import *
from ._builtin import *
from ._interp import *
from ._printer import *
from ._run import *
