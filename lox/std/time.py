import time
from typing import Any, List

from lox.builtin_function import BuiltinFunction
from lox.environment import Environment


def populate_time_environment(env: Environment) -> Environment:
    def std_clock(args: List[Any]) -> Any:
        return time.time()

    env.define('clock', BuiltinFunction('clock', 0, std_clock))
    return env
