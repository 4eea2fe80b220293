from __future__ import annotations

import pytest

from folderatlas.models import (
    MODE_DISPLAY,
    MODE_STRUCTURAL,
    DepthPolicy,
    FolderRecord,
    ScanReport,
    ScanStats,
)


def _report(policy: DepthPolicy) -> ScanReport:
    records = [
        FolderRecord(1, "r/b", 2500),
        FolderRecord(2, "r/b/c", 500),
        FolderRecord(3, "r/b/c/d", 100),
        FolderRecord(1, "r/a", 1000),
    ]
    return ScanReport(root="r", root_size=3500, records=records, policy=policy, stats=ScanStats())


def test_default_policy_is_unlimited_structural():
    p = DepthPolicy()
    assert p.unlimited
    assert p.mode == MODE_STRUCTURAL
    assert p.descends_past(100)


def test_any_negative_limit_is_unlimited():
    assert DepthPolicy(limit=-7).unlimited


def test_structural_descent_stops_at_limit():
    p = DepthPolicy(limit=2)
    assert p.descends_past(1)
    assert not p.descends_past(2)


def test_display_policy_always_descends():
    p = DepthPolicy(limit=1, mode=MODE_DISPLAY)
    assert p.descends_past(5)
    assert p.shows(1)
    assert not p.shows(2)


def test_zero_limit_still_shows_root_children():
    p = DepthPolicy(limit=0, mode=MODE_DISPLAY)
    assert p.shows(1)
    assert not p.shows(2)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        DepthPolicy(mode="sideways")


def test_with_limit_keeps_mode():
    p = DepthPolicy(limit=1, mode=MODE_DISPLAY).with_limit(4)
    assert p == DepthPolicy(limit=4, mode=MODE_DISPLAY)


def test_visible_uses_policy_limit_by_default():
    rep = _report(DepthPolicy(limit=2, mode=MODE_DISPLAY))
    assert [r.path for r in rep.visible()] == ["r/b", "r/b/c", "r/a"]
    assert [r.path for r in rep.visible(1)] == ["r/b", "r/a"]
    assert len(rep.visible(-1)) == 4


def test_can_drill():
    display = _report(DepthPolicy(limit=1, mode=MODE_DISPLAY))
    assert display.can_drill(-1)
    assert display.can_drill(10)

    structural = _report(DepthPolicy(limit=2))
    assert structural.can_drill(1)
    assert structural.can_drill(2)
    assert not structural.can_drill(3)
    assert not structural.can_drill(-1)

    assert _report(DepthPolicy()).can_drill(-1)


def test_stats_note_skip_deduplicates():
    stats = ScanStats()
    stats.note_skip("/x", PermissionError("denied"))
    stats.note_skip("/x", PermissionError("denied"))
    stats.note_skip("/y", FileNotFoundError("gone"))
    assert stats.permission_denied == ["/x"]
    assert stats.errors == ["/y"]
    assert stats.skipped == 2
