"""Native functions available to every Lox program."""

from lox.environment import Environment
from .io import populate_io_environment
from .time import populate_time_environment


def populate_native_environment(env: Environment) -> Environment:
    populate_time_environment(env)
    populate_io_environment(env)
    return env
