import io
import zipfile

import pytest
import requests

from xenia_manager.core.updater import UpdateError, Updater


def _release_zip() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("Xenia Manager.exe", b"new manager")
        zf.writestr("Xenia Manager Updater.exe", b"new updater")
        zf.writestr("Newtonsoft.Json.dll", b"library")
        zf.writestr("Assets/readme.txt", b"nested")
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, payload: bytes, status_code: int = 200, send_length: bool = True):
        self.payload = payload
        self.status_code = status_code
        self.headers = {"Content-Length": str(len(payload))} if send_length else {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.payload), chunk_size):
            yield self.payload[start:start + chunk_size]


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def get(self, url, stream=False, timeout=None):
        self.requests.append((url, stream))
        return self.response


def test_download_reports_progress(base_dir):
    payload = b"x" * 20000
    session = FakeSession(FakeResponse(payload))
    updater = Updater(base_dir=base_dir, url="https://example.invalid/release.zip", session=session)
    progress = []

    path = updater.download(progress.append)

    assert path.read_bytes() == payload
    assert session.requests == [("https://example.invalid/release.zip", True)]
    assert progress[-1] == 100
    assert progress == sorted(progress)


def test_download_without_length_reports_zero(base_dir):
    session = FakeSession(FakeResponse(b"abc", send_length=False))
    progress = []

    Updater(base_dir=base_dir, session=session).download(progress.append)

    assert progress == [0]


def test_download_http_error(base_dir):
    session = FakeSession(FakeResponse(b"", status_code=404))

    with pytest.raises(UpdateError):
        Updater(base_dir=base_dir, session=session).download()


def test_install_moves_files_except_updater(base_dir):
    (base_dir / "Xenia Manager Updater.exe").write_bytes(b"running updater")
    updater = Updater(base_dir=base_dir, session=FakeSession(None))
    updater.archive_path.write_bytes(_release_zip())

    moved = updater.install()

    assert sorted(p.name for p in moved) == ["Newtonsoft.Json.dll", "Xenia Manager.exe"]
    assert (base_dir / "Xenia Manager.exe").read_bytes() == b"new manager"
    assert (base_dir / "Xenia Manager Updater.exe").read_bytes() == b"running updater"
    assert not updater.archive_path.exists()
    assert not updater.update_dir.exists()


def test_install_corrupt_archive(base_dir):
    updater = Updater(base_dir=base_dir, session=FakeSession(None))
    updater.archive_path.write_bytes(b"not a zip")

    with pytest.raises(UpdateError):
        updater.install()


def test_delete_old_version(base_dir):
    updater = Updater(base_dir=base_dir, session=FakeSession(None))
    updater.manager_executable.write_bytes(b"old")

    updater.delete_old_version()
    updater.delete_old_version()

    assert not updater.manager_executable.exists()


def test_run_without_launch(base_dir):
    (base_dir / "Xenia Manager.exe").write_bytes(b"old manager")
    updater = Updater(base_dir=base_dir, session=FakeSession(FakeResponse(_release_zip())))

    updater.run(launch=False)

    assert (base_dir / "Xenia Manager.exe").read_bytes() == b"new manager"
    assert sorted(p.name for p in base_dir.iterdir()) == ["Newtonsoft.Json.dll", "Xenia Manager.exe"]


def test_run_stops_after_failed_download(base_dir):
    (base_dir / "Xenia Manager.exe").write_bytes(b"old manager")
    updater = Updater(base_dir=base_dir, session=FakeSession(FakeResponse(b"", status_code=500)))

    with pytest.raises(UpdateError):
        updater.run(launch=False)
    assert (base_dir / "Xenia Manager.exe").read_bytes() == b"old manager"


def test_download_with_invalid_length_reports_zero(base_dir):
    response = FakeResponse(b"abc")
    response.headers = {"Content-Length": "bogus"}
    progress = []

    path = Updater(base_dir=base_dir, session=FakeSession(response)).download(progress.append)

    assert path.read_bytes() == b"abc"
    assert progress == [0]


def test_run_reports_each_step(base_dir):
    updater = Updater(base_dir=base_dir, session=FakeSession(FakeResponse(_release_zip())))
    messages = []
    progress = []

    updater.run(progress=progress.append, status=messages.append, launch=False)

    assert messages == ["Downloading the latest version...", "Installing..."]
    assert progress[-1] == 100


def test_run_launches_new_manager(base_dir, monkeypatch):
    launched = []
    monkeypatch.setattr(
        "xenia_manager.core.updater.subprocess.Popen",
        lambda args, cwd=None: launched.append((args, cwd)),
    )
    updater = Updater(base_dir=base_dir, session=FakeSession(FakeResponse(_release_zip())))
    messages = []

    updater.run(status=messages.append)

    assert messages[-1] == "Starting Xenia Manager..."
    assert launched == [([str(base_dir / "Xenia Manager.exe")], str(base_dir))]
