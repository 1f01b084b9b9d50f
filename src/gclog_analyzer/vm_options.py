"""JVM command line options as printed at the top of a GC log."""

from __future__ import annotations

import re
from collections.abc import Iterable

from gclog_analyzer.event import GCCollectorType
from gclog_analyzer.util import parse_jvm_size_to_bytes

OptionValue = bool | int | str

COMMAND_LINE_PATTERN: re.Pattern[str] = re.compile(r"(?:CommandLine flags|Command Line):\s*(?P<options>.+)")

BOOLEAN_OPTION_PATTERN: re.Pattern[str] = re.compile(r"^-XX:(?P<sign>[+-])(?P<name>\w+)$")
VALUE_OPTION_PATTERN: re.Pattern[str] = re.compile(r"^-XX:(?P<name>\w+)=(?P<value>\S+)$")
SIZE_VALUE_PATTERN: re.Pattern[str] = re.compile(r"^(?P<value>\d+)(?P<unit>[kKmMgGtT])?$")

# -Xmx512m style shorthands and the -XX name they stand for
SHORTHAND_OPTIONS: dict[str, str] = {
    "-Xmx": "MaxHeapSize",
    "-Xms": "InitialHeapSize",
    "-Xmn": "NewSize",
    "-Xss": "ThreadStackSize",
}

COLLECTOR_FLAGS: dict[str, GCCollectorType] = {
    "UseG1GC": GCCollectorType.G1,
    "UseConcMarkSweepGC": GCCollectorType.CMS,
    "UseParallelGC": GCCollectorType.PARALLEL,
    "UseParallelOldGC": GCCollectorType.PARALLEL,
    "UseSerialGC": GCCollectorType.SERIAL,
    "UseZGC": GCCollectorType.ZGC,
}


class VmOptions:
    """Parsed ``-XX`` flags.

    Size-like values are normalized to bytes; ``-XX:+Flag``/``-XX:-Flag`` become
    booleans; anything else is kept as text.
    """

    def __init__(self, original: str) -> None:
        self.original = original.strip()
        self._options: dict[str, OptionValue] = {}
        self.other_options: list[str] = []
        for token in self.original.split():
            self._parse_token(token)

    def _parse_token(self, token: str) -> None:
        if match := BOOLEAN_OPTION_PATTERN.match(token):
            self._options[match.group("name")] = match.group("sign") == "+"
            return
        if match := VALUE_OPTION_PATTERN.match(token):
            self._options[match.group("name")] = self._convert_value(match.group("value"))
            return
        for prefix, name in SHORTHAND_OPTIONS.items():
            if token.startswith(prefix) and len(token) > len(prefix):
                self._options[name] = self._convert_value(token[len(prefix) :])
                return
        self.other_options.append(token)

    @staticmethod
    def _convert_value(value: str) -> OptionValue:
        if match := SIZE_VALUE_PATTERN.match(value):
            return parse_jvm_size_to_bytes(match.group("value"), match.group("unit"))
        return value

    def contains_option(self, name: str) -> bool:
        return name in self._options

    def get_option_value(self, name: str, default: OptionValue | None = None) -> OptionValue | None:
        return self._options.get(name, default)

    def get_int_option(self, name: str) -> int | None:
        value = self._options.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_collector_type(self) -> GCCollectorType:
        for flag, collector in COLLECTOR_FLAGS.items():
            if self._options.get(flag) is True:
                return collector
        return GCCollectorType.UNKNOWN

    def __str__(self) -> str:
        return self.original

    def __repr__(self) -> str:
        return f"VmOptions({self.original!r})"


def parse_vm_options(log_lines: Iterable[str]) -> VmOptions | None:
    """Find the command line flags line, if the log has one."""
    for line in log_lines:
        if "Command" in line and (match := COMMAND_LINE_PATTERN.search(line)):
            return VmOptions(match.group("options"))
    return None
