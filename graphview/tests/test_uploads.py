import io

from fastapi import UploadFile

from graphview.uploads import avatar_filename, save_avatar


class TestAvatarFilename:
    def test_keeps_lowercased_extension(self):
        assert avatar_filename("portrait.PNG", now_ms=1700000000000) == "avatar_1700000000000.png"

    def test_uses_last_extension(self):
        assert avatar_filename("archive.tar.gz", now_ms=1) == "avatar_1.gz"

    def test_defaults_to_png(self):
        assert avatar_filename("noextension", now_ms=1) == "avatar_1.png"
        assert avatar_filename("trailingdot.", now_ms=1) == "avatar_1.png"
        assert avatar_filename(None, now_ms=1) == "avatar_1.png"

    def test_rejects_path_characters(self):
        assert avatar_filename("x./../evil", now_ms=1) == "avatar_1.png"


def test_save_avatar(tmp_path):
    upload = UploadFile(file=io.BytesIO(b"image-bytes"), filename="me.webp")

    url = save_avatar(upload, upload_dir=tmp_path / "avatars")

    filename = url.rsplit("/", 1)[-1]
    assert url == f"/uploads/{filename}"
    assert filename.endswith(".webp")
    assert (tmp_path / "avatars" / filename).read_bytes() == b"image-bytes"
