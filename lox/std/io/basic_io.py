from lox.errors import LoxRuntimeError


class BasicIO:
    def read_file(self, filename: str) -> str:
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError):
            raise LoxRuntimeError(None, f'Path: {filename} was not found or could not be opened.')
