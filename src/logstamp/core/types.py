"""Type aliases for logstamp."""

from pathlib import Path
from typing import TypeAlias

# Path types
PathLike: TypeAlias = str | Path

# A (year, day, hour, minute, second) breakdown
UnitTuple: TypeAlias = tuple[int, int, int, int, int]
