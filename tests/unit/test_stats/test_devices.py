"""
Unit tests for root device resolution, login.defs and device numbering.
"""

import threading
from unittest.mock import patch

import pytest

from mountkit.stats import (
    clear_root_device_cache,
    get_login_defs,
    get_next_device,
    get_root_device_file,
    is_root_device_file,
)
from mountkit.validation import ExecutionError, ValidationError

RUN_COMMAND = "mountkit.stats.devices.run_command"


@pytest.mark.unit
class TestRootDeviceFile:
    """Test cases for root device resolution."""

    def test_resolves_with_findmnt(self):
        """Test that findmnt resolves the root device."""
        with patch(RUN_COMMAND, return_value=(["/dev/sda1"], 0)) as mock_run:
            assert get_root_device_file() == "/dev/sda1"
        mock_run.assert_called_once_with("findmnt", ["-f", "-n", "-o", "SOURCE", "/"])

    def test_result_is_cached(self):
        """Test that findmnt runs only once."""
        with patch(RUN_COMMAND, return_value=(["/dev/sda1"], 0)) as mock_run:
            get_root_device_file()
            get_root_device_file()
            get_root_device_file()
        assert mock_run.call_count == 1

    def test_clear_cache(self):
        """Test that clearing the cache resolves again."""
        with patch(RUN_COMMAND, side_effect=[(["/dev/sda1"], 0), (["/dev/nvme0n1p2"], 0)]):
            assert get_root_device_file() == "/dev/sda1"
            clear_root_device_cache()
            assert get_root_device_file() == "/dev/nvme0n1p2"

    def test_failure_is_not_cached(self):
        """Test that a failed lookup is retried later."""
        error = ExecutionError("findmnt", [], 1)
        with patch(RUN_COMMAND, side_effect=[error, (["/dev/sda1"], 0)]):
            with pytest.raises(ExecutionError):
                get_root_device_file()
            assert get_root_device_file() == "/dev/sda1"

    def test_empty_output_raises(self):
        """Test that empty findmnt output raises."""
        with patch(RUN_COMMAND, return_value=([], 0)):
            with pytest.raises(ExecutionError):
                get_root_device_file()

    def test_concurrent_first_resolution(self):
        """Test that concurrent callers share one lookup."""
        results = []
        with patch(RUN_COMMAND, return_value=(["/dev/sda1"], 0)) as mock_run:
            threads = [
                threading.Thread(target=lambda: results.append(get_root_device_file()))
                for _ in range(8)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        assert results == ["/dev/sda1"] * 8
        assert mock_run.call_count == 1


@pytest.mark.unit
class TestIsRootDeviceFile:
    """Test cases for root device comparison."""

    def test_legacy_alias_is_always_root(self):
        """Test that /dev/root matches without a lookup."""
        with patch(RUN_COMMAND) as mock_run:
            assert is_root_device_file("/dev/root") is True
            assert is_root_device_file("/dev/root", exact=False) is True
        mock_run.assert_not_called()

    @pytest.mark.parametrize(
        "device_file, exact, expected",
        [
            ("/dev/sda1", True, True),
            ("/dev/sda", True, False),
            ("/dev/sda", False, True),
            ("/dev/sdb", False, False),
            ("/dev/sdb1", True, False),
        ],
    )
    def test_match(self, device_file, exact, expected):
        """Test exact and prefix matching."""
        with patch(RUN_COMMAND, return_value=(["/dev/sda1"], 0)):
            assert is_root_device_file(device_file, exact=exact) is expected


@pytest.mark.unit
class TestLoginDefs:
    """Test cases for login.defs reading."""

    def test_reads_file(self, temp_dir):
        """Test reading settings and skipping comments."""
        path = temp_dir / "login.defs"
        path.write_text(
            "#\n# /etc/login.defs - Configuration control definitions\n#\n"
            "MAIL_DIR        /var/mail\n"
            "UID_MIN                  1000\n"
            "UID_MAX                 60000\n"
        )
        defs = get_login_defs(str(path))
        assert defs == {"MAIL_DIR": "/var/mail", "UID_MIN": "1000", "UID_MAX": "60000"}

    def test_unreadable_file(self, temp_dir):
        """Test that an unreadable file gives None."""
        assert get_login_defs(str(temp_dir / "missing")) is None

    def test_default_path_from_config(self, temp_dir, monkeypatch):
        """Test that the path defaults to the configured one."""
        path = temp_dir / "login.defs"
        path.write_text("GID_MIN 1000\n")
        config = temp_dir / "config.toml"
        config.write_text(f'[stats]\nlogin_defs = "{path}"\n')
        monkeypatch.setenv("MOUNTKIT_CONFIG", str(config))
        assert get_login_defs() == {"GID_MIN": "1000"}


@pytest.mark.unit
class TestNextDevice:
    """Test cases for free device name lookup."""

    def test_lowest_free_disk_number(self):
        """Test that the lowest unused number is returned."""
        output = ["name", "", "sda", "sda1", "md0", "md1", "md3", "md127p1"]
        with patch(RUN_COMMAND, return_value=(output, 0)) as mock_run:
            assert get_next_device("disk", "md") == "md2"
        mock_run.assert_called_once_with("awk", ["{print $4}", "/proc/partitions"])

    def test_all_numbers_in_use(self):
        """Test that None is returned when all numbers are taken."""
        output = [f"md{i}" for i in range(256)]
        with patch(RUN_COMMAND, return_value=(output, 0)):
            assert get_next_device("disk", "md") is None

    def test_numbers_above_range_do_not_count(self):
        """Test that numbers above the range are ignored."""
        output = [f"md{i}" for i in range(255)] + ["md300"]
        with patch(RUN_COMMAND, return_value=(output, 0)):
            assert get_next_device("disk", "md") == "md255"

    def test_interface_names_are_stripped(self):
        """Test that padded interface names are matched."""
        output = ["    lo", "  eth0", "bond0", " bond1"]
        with patch(RUN_COMMAND, return_value=(output, 0)) as mock_run:
            assert get_next_device("iface", "bond") == "bond2"
            assert get_next_device("iface", "eth") == "eth1"
        assert mock_run.call_args[0] == ("awk", ["-F:", "/:/ {print $1}", "/proc/net/dev"])

    def test_prefix_is_matched_literally(self):
        """Test that the name prefix is not a regex."""
        output = ["br-lan0", "brxlan0"]
        with patch(RUN_COMMAND, return_value=(output, 0)):
            assert get_next_device("iface", "br-lan") == "br-lan1"

    def test_unused_name(self):
        """Test a name with no devices at all."""
        with patch(RUN_COMMAND, return_value=(["sda", "sda1"], 0)):
            assert get_next_device("disk", "md") == "md0"

    def test_unknown_type(self):
        """Test that an unknown device class is rejected."""
        with pytest.raises(ValidationError):
            get_next_device("printer", "lp")
