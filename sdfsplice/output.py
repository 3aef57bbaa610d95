import sys


class Output:
    """An append-only, indentation-aware sink for generated lines."""
    def __init__(self):
        self.indent = 0

    def push_indent(self, n: int = 1):
        self.indent += n

    def pop_indent(self, n: int = 1):
        if n > self.indent:
            raise ValueError(f"Cannot pop {n} indentation levels from {self.indent}")
        self.indent -= n

    def write(self, line: str):
        self._emit("\t" * self.indent + line)

    def _emit(self, line: str):
        raise NotImplementedError


class LineOutput(Output):
    """Collects lines in memory."""
    def __init__(self):
        super().__init__()
        self.lines = []

    def _emit(self, line: str):
        self.lines.append(line)

    def getvalue(self) -> str:
        return "\n".join(self.lines)


class StreamOutput(Output):
    """Writes each line to a text stream (stdout by default)."""
    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def _emit(self, line: str):
        self.stream.write(line + "\n")
