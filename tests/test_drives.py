from __future__ import annotations

import os
from collections import namedtuple

import pytest

from folderatlas import drives

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")


@pytest.fixture
def fake_psutil(monkeypatch):
    parts = [
        Partition("/dev/sdb1", "/data", "ext4", "rw"),
        Partition("/dev/sda1", "/", "ext4", "rw"),
        Partition("/dev/sda1", "/", "ext4", "rw"),
        Partition("none", "", "tmpfs", "rw"),
        Partition("/dev/sdc1", "/broken", "ext4", "rw"),
    ]
    usage = {
        os.path.abspath("/"): Usage(1000, 400, 600, 40.0),
        os.path.abspath("/data"): Usage(5000, 1000, 4000, 20.0),
    }

    def disk_usage(path):
        if path not in usage:
            raise OSError(5, "I/O error", path)
        return usage[path]

    monkeypatch.setattr(drives.psutil, "disk_partitions", lambda all=False: parts)
    monkeypatch.setattr(drives.psutil, "disk_usage", disk_usage)


def test_list_drives_dedupes_and_skips_unreadable(fake_psutil):
    out = drives.list_drives()
    assert [d["mountpoint"] for d in out] == [os.path.abspath("/"), os.path.abspath("/data")]
    assert out[1]["total"] == 5000
    assert out[1]["fstype"] == "ext4"


def test_disk_usage_for_picks_longest_mountpoint(fake_psutil):
    u = drives.disk_usage_for("/data/projects/x")
    assert u["mountpoint"] == os.path.abspath("/data")
    assert u["percent"] == 20.0

    assert drives.disk_usage_for("/home/user")["mountpoint"] == os.path.abspath("/")


def test_disk_usage_for_empty_path():
    assert drives.disk_usage_for("") is None
