"""Tests for recursive deletion."""

import os

from ofd_webui.store.delete import delete_tree


def test_removes_directory_tree(data_root):
    target = data_root / "Acme" / "PLA"

    assert delete_tree(target) is True
    assert not target.exists()
    assert (data_root / "Acme" / "PETG").is_dir()


def test_missing_path_returns_false(data_root):
    assert delete_tree(data_root / "Acme" / "ABS") is False


def test_removes_plain_file(data_root):
    target = data_root / "Acme" / "brand.json"

    assert delete_tree(target) is True
    assert not target.exists()


def test_removes_symlink_but_not_its_target(data_root):
    link = data_root / "Alias"
    os.symlink(data_root / "Acme", link)

    assert delete_tree(link) is True
    assert not os.path.lexists(link)
    assert (data_root / "Acme" / "PLA" / "PolyLite" / "filament.json").exists()


def test_dangling_symlink_is_removed(data_root, tmp_path):
    link = data_root / "Broken"
    os.symlink(tmp_path / "gone", link)

    assert delete_tree(link) is True
    assert not os.path.lexists(link)
