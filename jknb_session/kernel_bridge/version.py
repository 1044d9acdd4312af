"""
Kernel Version

Version record and version-code encoding for the kernel side of a session.
"""

from typing import Dict


def get_version_code_from(name: str, build_number: int) -> int:
    """
    Compute the version code of the kernel source.

    The result is xyz000 + build_number where x, y and z are the digits of an
    'x.y.z' version name, e.g. ("1.2.3", 45) -> 123045.

    Components are expected to be single digits; larger ones are not
    rejected and will overlap neighbouring positions. A non-numeric component
    raises ValueError.
    """
    code = 0
    for position, part in enumerate(reversed(name.split('.'))):
        code += int(part) * 10 ** position
    return code * 1000 + build_number


class KernelVersion:
    """Immutable version record: '<name>.<build>' plus its numeric code."""

    __slots__ = ('_name', '_code')

    def __init__(self, version_name: str, build_number: int):
        self._name = f"{version_name}.{build_number}"
        self._code = get_version_code_from(version_name, build_number)

    @property
    def name(self) -> str:
        return self._name

    @property
    def code(self) -> int:
        return self._code

    def dict(self) -> Dict[str, object]:
        """Fresh dictionary copy of the record."""
        return {'name': self._name, 'code': self._code}

    def __eq__(self, other) -> bool:
        if not isinstance(other, KernelVersion):
            return NotImplemented
        return self._name == other._name and self._code == other._code

    def __hash__(self) -> int:
        return hash((self._name, self._code))

    def __repr__(self) -> str:
        return f"KernelVersion(name={self._name!r}, code={self._code})"
