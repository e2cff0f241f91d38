from enum import Enum, auto, unique


@unique
class ScanKind(Enum):
    EMIT = auto()
    FINAL = auto()
    STOP = auto()
    NEED_MORE = auto()

    @classmethod
    def terminal_kinds(cls):
        return (cls.FINAL, cls.STOP)

    @property
    def terminates(self):
        return self in ScanKind.terminal_kinds()

    @property
    def emits(self):
        return self in (ScanKind.EMIT, ScanKind.FINAL)
