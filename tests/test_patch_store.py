import os
import stat

import pytest
import toml

from xenia_manager.core.patch_store import (
    NO_DESCRIPTION,
    LocalFileSystem,
    PatchDocumentStore,
    PatchIOError,
    PatchParseError,
    PatchToggle,
)


def _read(path):
    return toml.loads(path.read_text(encoding="utf-8"))


def test_load_projects_entries_in_document_order(patch_file):
    toggles = PatchDocumentStore(patch_file).load()

    assert toggles == [
        PatchToggle(name="A", is_enabled=True, description="Unlocks the framerate"),
        PatchToggle(name="B", is_enabled=False, description=NO_DESCRIPTION),
    ]


def test_load_twice_returns_fresh_lists(patch_file):
    store = PatchDocumentStore(patch_file)
    first = store.load()
    first[0].is_enabled = False

    second = store.load()
    assert second[0].is_enabled is True


def test_save_without_edits_preserves_document(patch_file):
    original = _read(patch_file)
    store = PatchDocumentStore(patch_file)

    assert store.save(store.load()) is True
    assert _read(patch_file) == original


def test_toggle_only_changes_its_own_entry(patch_file):
    store = PatchDocumentStore(patch_file)
    toggles = store.load()
    toggles[1].is_enabled = True
    store.save(toggles)

    patches = _read(patch_file)["patch"]
    assert patches[0]["is_enabled"] is True
    assert patches[1]["is_enabled"] is True
    assert patches[0]["desc"] == "Unlocks the framerate"
    assert "desc" not in patches[1]
    assert patches[0]["be32"] == [{"address": 2181038080, "value": 1610612736}]
    assert [p["name"] for p in patches] == ["A", "B"]


def test_missing_file_loads_empty_and_save_is_noop(tmp_path):
    path = tmp_path / "missing.patch.toml"
    store = PatchDocumentStore(path)

    assert store.load() == []
    assert store.save([PatchToggle(name="A", is_enabled=True)]) is False
    assert not path.exists()


def test_unmatched_toggle_is_skipped(patch_file):
    original = _read(patch_file)
    store = PatchDocumentStore(patch_file)

    store.save([PatchToggle(name="Not there", is_enabled=True)])

    assert _read(patch_file) == original


def test_duplicate_names_update_first_occurrence_only(tmp_path):
    path = tmp_path / "dup.patch.toml"
    path.write_text(
        '[[patch]]\nname = "A"\nis_enabled = true\nid = 1\n\n'
        '[[patch]]\nname = "A"\nis_enabled = true\nid = 2\n',
        encoding="utf-8",
    )

    PatchDocumentStore(path).save([PatchToggle(name="A", is_enabled=False)])

    patches = _read(path)["patch"]
    assert [(p["id"], p["is_enabled"]) for p in patches] == [(1, False), (2, True)]


def test_save_rereads_file_and_keeps_external_changes(patch_file):
    store = PatchDocumentStore(patch_file)
    toggles = store.load()

    document = _read(patch_file)
    document["title_name"] = "Halo 3 (edited elsewhere)"
    patch_file.write_text(toml.dumps(document), encoding="utf-8")

    toggles[0].is_enabled = False
    store.save(toggles)

    saved = _read(patch_file)
    assert saved["title_name"] == "Halo 3 (edited elsewhere)"
    assert saved["patch"][0]["is_enabled"] is False


def test_document_without_patch_array(tmp_path):
    path = tmp_path / "nopatch.toml"
    path.write_text('title_name = "Game"\npatch = "not a table array"\n', encoding="utf-8")
    store = PatchDocumentStore(path)

    assert store.load() == []
    store.save([PatchToggle(name="A", is_enabled=True)])
    assert _read(path) == {"title_name": "Game", "patch": "not a table array"}


def test_malformed_is_enabled_values(tmp_path):
    path = tmp_path / "odd.patch.toml"
    path.write_text(
        '[[patch]]\nname = "string true"\nis_enabled = "TRUE"\n\n'
        '[[patch]]\nname = "number"\nis_enabled = 1\n\n'
        '[[patch]]\nname = "missing"\n\n'
        '[[patch]]\nname = 42\nis_enabled = true\n',
        encoding="utf-8",
    )

    toggles = PatchDocumentStore(path).load()

    assert [(t.name, t.is_enabled) for t in toggles] == [
        ("string true", True),
        ("number", False),
        ("missing", False),
        ("42", True),
    ]


def test_saving_writes_boolean_over_string_flag(tmp_path):
    path = tmp_path / "odd.patch.toml"
    path.write_text('[[patch]]\nname = "A"\nis_enabled = "false"\n', encoding="utf-8")
    store = PatchDocumentStore(path)

    toggles = store.load()
    toggles[0].is_enabled = True
    store.save(toggles)

    assert _read(path)["patch"][0]["is_enabled"] is True


def test_parse_error_on_load(tmp_path):
    path = tmp_path / "broken.patch.toml"
    path.write_text('[[patch]]\nname = "unterminated\n', encoding="utf-8")

    with pytest.raises(PatchParseError):
        PatchDocumentStore(path).load()


def test_parse_error_on_save_leaves_file_untouched(patch_file):
    store = PatchDocumentStore(patch_file)
    toggles = store.load()
    broken = '[[patch]]\nname = "unterminated\n'
    patch_file.write_text(broken, encoding="utf-8")

    with pytest.raises(PatchParseError):
        store.save(toggles)
    assert patch_file.read_text(encoding="utf-8") == broken


def test_save_leaves_no_temporary_files(patch_file):
    store = PatchDocumentStore(patch_file)
    store.save(store.load())

    assert sorted(p.name for p in patch_file.parent.iterdir()) == [patch_file.name]


class ReadOnlyFileSystem(LocalFileSystem):
    def __init__(self):
        self.writes = 0

    def write_text(self, path, text):
        self.writes += 1
        raise PermissionError(13, "Permission denied", str(path))


def test_write_failure_is_reported_and_file_unchanged(patch_file):
    original = patch_file.read_text(encoding="utf-8")
    fs = ReadOnlyFileSystem()
    store = PatchDocumentStore(patch_file, file_system=fs)

    with pytest.raises(PatchIOError):
        store.save(store.load())
    assert fs.writes == 1
    assert patch_file.read_text(encoding="utf-8") == original


def test_missing_file_never_writes(tmp_path):
    fs = ReadOnlyFileSystem()
    store = PatchDocumentStore(tmp_path / "missing.toml", file_system=fs)

    assert store.save([PatchToggle(name="A", is_enabled=True)]) is False
    assert fs.writes == 0


def test_read_failure_is_reported(tmp_path):
    class UnreadableFileSystem(LocalFileSystem):
        def exists(self, path):
            return True

        def read_text(self, path):
            raise OSError("disk on fire")

    with pytest.raises(PatchIOError):
        PatchDocumentStore(tmp_path / "x.toml", file_system=UnreadableFileSystem()).load()


def test_control_characters_in_strings_survive_save(tmp_path):
    path = tmp_path / "escapes.patch.toml"
    path.write_text(
        'title_name = "Tab\\there"\n'
        'tags = ["bell\\u0007", "slash \\\\ here"]\n'
        "\n"
        "[[patch]]\n"
        'name = "A"\n'
        'desc = "ESC\\u001B[1m bold\\b\\f\\u007F"\n'
        "is_enabled = false\n",
        encoding="utf-8",
    )
    original = _read(path)
    store = PatchDocumentStore(path)
    toggles = store.load()
    toggles[0].is_enabled = True

    assert store.save(toggles) is True

    saved = _read(path)
    assert saved["patch"][0]["desc"] == "ESC\x1b[1m bold\b\f\x7f"
    assert saved["patch"][0]["is_enabled"] is True
    saved["patch"][0]["is_enabled"] = False
    assert saved == original


def test_save_refuses_output_that_changes_the_document(patch_file, monkeypatch):
    before = patch_file.read_text(encoding="utf-8")
    monkeypatch.setattr(toml, "dumps", lambda document, encoder=None: 'title_name = "Other"\n')
    store = PatchDocumentStore(patch_file)

    with pytest.raises(PatchParseError):
        store.save(store.load())
    assert patch_file.read_text(encoding="utf-8") == before


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_keeps_file_mode(patch_file):
    patch_file.chmod(0o644)
    store = PatchDocumentStore(patch_file)

    store.save(store.load())

    assert stat.S_IMODE(patch_file.stat().st_mode) == 0o644
