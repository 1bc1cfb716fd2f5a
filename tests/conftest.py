"""
Pytest configuration and shared fixtures for the mountkit test suite.
"""

import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mountkit.config import clear_config_cache  # noqa: E402
from mountkit.stats import clear_root_device_cache  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test with built-in defaults and empty caches."""
    monkeypatch.setenv("MOUNTKIT_CONFIG", str(tmp_path / "missing-config.toml"))
    monkeypatch.delenv("MOUNTKIT_MOUNT_DIR", raising=False)
    monkeypatch.setattr("mountkit.config.manager._CONFIG", None)
    monkeypatch.setattr("mountkit.config.manager._CONFIG_FILE_PATH", None)
    clear_root_device_cache()
    yield
    clear_config_cache()
    clear_root_device_cache()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def free_output():
    """Output of ``free -b -t -w`` on a 2 GB machine without swap."""
    return [
        "               total        used        free      shared     buffers       cache   available",
        "Mem:      2101825536    98390016  1823117312    12967936    16809984   163508224  1844318208",
        "Swap:              0           0           0",
        "Total:    2101825536    98390016  1823117312",
    ]


@pytest.fixture
def cpuinfo_x86():
    """Two cores worth of an x86 /proc/cpuinfo."""
    return (
        "processor\t: 0\n"
        "vendor_id\t: GenuineIntel\n"
        "cpu family\t: 6\n"
        "model\t\t: 158\n"
        "model name\t: Intel(R) Core(TM) i5-8500 CPU @ 3.00GHz\n"
        "cpu MHz\t\t: 3000.000\n"
        "flags\t\t: fpu vme de pse tsc\n"
        "\n"
        "processor\t: 1\n"
        "vendor_id\t: GenuineIntel\n"
        "model name\t: Intel(R) Core(TM) i5-8500 CPU @ 3.00GHz\n"
        "cpu MHz\t\t: 800.012\n"
    )


@pytest.fixture
def cpuinfo_arm():
    """An old ARM kernel /proc/cpuinfo without clock speed."""
    return (
        "Processor\t: ARMv7 Processor rev 10 (v7l)\n"
        "processor\t: 0\n"
        "BogoMIPS\t: 1988.28\n"
        "Features\t: swp half thumb fastmult vfp edsp neon vfpv3\n"
        "\n"
        "Hardware\t: Freescale i.MX 6Quad/DualLite (Device Tree)\n"
        "Revision\t: 0000\n"
    )
