import os
import stat
from types import SimpleNamespace

import pytest

from sysprogkit.layout import (
    Flags,
    Summary,
    align_left,
    align_right,
    file_type,
    format_counts,
    tree_prefix,
    truncate,
    verbose_details,
)


def _st(mode, size=0, blocks=0, uid=None, gid=None):
    return SimpleNamespace(
        st_mode=mode,
        st_size=size,
        st_blocks=blocks,
        st_uid=os.getuid() if uid is None else uid,
        st_gid=os.getgid() if gid is None else gid,
    )


def test_combined_flags_keep_tree_view():
    combined = Flags.TREE | Flags.SUMMARY | Flags.VERBOSE
    assert tree_prefix("| ", combined, False) == "|-"
    assert tree_prefix("| ", combined, True) == "`-"


def test_summary_record_counts_types():
    s = Summary()
    s.record(_st(stat.S_IFREG | 0o644, size=10, blocks=8))
    s.record(_st(stat.S_IFDIR | 0o755, size=4, blocks=2))
    s.record(_st(stat.S_IFLNK | 0o777, size=3))
    s.record(_st(stat.S_IFIFO | 0o600))
    s.record(_st(stat.S_IFSOCK | 0o600))
    assert (s.files, s.dirs, s.links, s.fifos, s.socks) == (1, 1, 1, 1, 1)
    assert s.size == 17
    assert s.blocks == 10


def test_summary_block_device_counts_into_blocks():
    s = Summary()
    s.record(_st(stat.S_IFBLK | 0o600, blocks=0))
    assert s.blocks == 1
    assert s.files == 0


def test_summary_merge_adds_all_fields():
    a = Summary(files=1, dirs=2, links=3, fifos=4, socks=5, size=6, blocks=7)
    b = Summary(files=1, dirs=1, links=1, fifos=1, socks=1, size=1, blocks=1)
    a.merge(b)
    assert a == Summary(files=2, dirs=3, links=4, fifos=5, socks=6, size=7, blocks=8)
    assert b == Summary(files=1, dirs=1, links=1, fifos=1, socks=1, size=1, blocks=1)


def test_tree_prefix_base_level():
    assert tree_prefix("| ", Flags.TREE, False) == "|-"
    assert tree_prefix("| ", Flags.TREE, True) == "`-"


def test_tree_prefix_nested_levels():
    result = tree_prefix("|-  ", Flags.TREE, False)
    assert result == "| |-"
    assert tree_prefix("`-  ", Flags.TREE, True) == "  `-"


def test_tree_prefix_without_tree_blanks_marks():
    result = tree_prefix("|-  `-  ", Flags.NONE, True)
    assert result == "|       "
    assert len(result) == len("|-  `-  ")


def test_tree_prefix_too_short_for_tree():
    with pytest.raises(ValueError):
        tree_prefix("", Flags.TREE, False)


def test_truncate_keeps_short_name():
    assert truncate("  ", "file.txt", 54) == "file.txt"


def test_truncate_long_name_fits_exactly():
    name = "x" * 80
    prefix = "  |-"
    result = truncate(prefix, name, 54)
    assert len(prefix) + len(result) == 54
    assert result.endswith("...")
    assert name.startswith(result[:-3])


def test_truncate_no_room():
    with pytest.raises(ValueError):
        truncate("a" * 53, "long-name", 54)


def test_align_right_and_left():
    assert align_right("ab", 5) == "   ab"
    assert align_left("ab", 5) == "ab   "
    assert align_right("abcdef", 3) == "abc"
    assert align_left("abcdef", 3) == "abc"


def test_format_counts_plurals():
    assert format_counts(1, 2, 0, 1, 3) == (
        "1 file, 2 directories, 0 links, 1 pipe, and 3 sockets"
    )
    assert format_counts(2, 1, 1, 0, 1) == (
        "2 files, 1 directory, 1 link, 0 pipes, and 1 socket"
    )


def test_format_counts_is_capped():
    big = 10**30
    assert len(format_counts(big, big, big, big, big)) == 99


@pytest.mark.parametrize(
    "mode, code",
    [
        (stat.S_IFREG, " "),
        (stat.S_IFDIR, "d"),
        (stat.S_IFLNK, "l"),
        (stat.S_IFCHR, "c"),
        (stat.S_IFBLK, "b"),
        (stat.S_IFIFO, "f"),
        (stat.S_IFSOCK, "s"),
    ],
)
def test_file_type(mode, code):
    assert file_type(mode | 0o644) == code


def test_verbose_details_directory_type(tmp_path):
    result = verbose_details(os.lstat(tmp_path))
    assert result.endswith("  d")


def test_verbose_details_unknown_owner_uses_ids():
    st = _st(stat.S_IFIFO | 0o600, size=5, blocks=0, uid=4000000, gid=4000001)
    result = verbose_details(st)
    assert result[2:10].strip() == "4000000"
    assert result[11:19].strip() == "4000001"
    assert result.endswith("f")