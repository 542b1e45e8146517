from .basic_io import BasicIO
from lox.builtin_function import BuiltinFunction
from lox.errors import LoxRuntimeError
from lox.environment import Environment
from typing import List, Any


def populate_io_environment(env: Environment) -> Environment:
    basic_io = BasicIO()

    def std_fread(args: List[Any]) -> Any:
        filename = args[0]
        if not isinstance(filename, str):
            raise LoxRuntimeError(None, 'First argument to fread must be a string.')
        return basic_io.read_file(filename)

    env.define('fread', BuiltinFunction('fread', 1, std_fread))
    return env
