"""
Unit tests for kernel version encoding.
"""

import pytest
from jknb_session.kernel_bridge.version import KernelVersion, get_version_code_from


class TestVersionCode:
    """Test version code computation."""

    def test_example(self):
        assert get_version_code_from("1.2.3", 45) == 123045

    @pytest.mark.parametrize("x,y,z,build", [
        (0, 0, 0, 0),
        (0, 0, 1, 999),
        (9, 9, 9, 0),
        (4, 0, 7, 12),
        (1, 0, 0, 1),
    ])
    def test_digit_positions(self, x, y, z, build):
        """Test (x*100 + y*10 + z) * 1000 + build."""
        expected = (x * 100 + y * 10 + z) * 1000 + build
        assert get_version_code_from(f"{x}.{y}.{z}", build) == expected

    def test_build_number_can_exceed_three_digits(self):
        """Test a large build number is added as-is."""
        assert get_version_code_from("1.0.0", 12345) == 112345

    def test_non_numeric_component(self):
        """Test non-numeric components raise ValueError."""
        with pytest.raises(ValueError):
            get_version_code_from("1.two.3", 0)


class TestKernelVersion:
    """Test the version record."""

    def test_name_and_code(self):
        version = KernelVersion("1.2.3", 45)

        assert version.name == "1.2.3.45"
        assert version.code == 123045

    def test_dict_returns_fresh_copy(self):
        version = KernelVersion("1.2.3", 45)

        first = version.dict()
        first["code"] = -1

        assert version.dict() == {"name": "1.2.3.45", "code": 123045}

    def test_read_only(self):
        version = KernelVersion("1.2.3", 45)

        with pytest.raises(AttributeError):
            version.code = 1

    def test_equality(self):
        assert KernelVersion("1.2.3", 4) == KernelVersion("1.2.3", 4)
        assert KernelVersion("1.2.3", 4) != KernelVersion("1.2.3", 5)
        assert len({KernelVersion("1.2.3", 4), KernelVersion("1.2.3", 4)}) == 1
