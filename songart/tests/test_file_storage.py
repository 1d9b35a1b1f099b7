from songart.storage.file_storage import OutputStorage


def test_paths_are_derived_from_the_slug(tmp_path, entry_factory):
    storage = OutputStorage(tmp_path / "2009")
    entry = entry_factory(title="Test Song")
    assert storage.image_path(entry) == tmp_path / "2009" / "test-song.png"
    assert storage.thumbnail_path(entry) == tmp_path / "2009" / "test-song_small.png"


def test_empty_slug_falls_back_to_number(tmp_path, entry_factory):
    storage = OutputStorage(tmp_path)
    assert storage.filename_for(entry_factory(number=77, title="?!?")) == "song-77.png"


def test_whitespace_in_output_root_is_kept(tmp_path, entry_factory):
    storage = OutputStorage(tmp_path / "year one")
    assert storage.image_path(entry_factory()).parent.name == "year one"


def test_ensure_root_creates_directory(tmp_path):
    storage = OutputStorage(tmp_path / "a" / "b")
    assert not storage.output_root.exists()
    assert storage.ensure_root().is_dir()


def test_colliding_slugs_get_the_song_number(tmp_path, entry_factory):
    storage = OutputStorage(tmp_path)
    first = entry_factory(number=1, title="Test Song")
    second = entry_factory(number=2, title="Test song!")
    assert storage.filename_for(first) == "test-song.png"
    assert storage.filename_for(second) == "test-song-2.png"
    assert storage.thumbnail_path(second) == tmp_path / "test-song-2_small.png"
    # claims are stable per song number
    assert storage.filename_for(first) == "test-song.png"
    assert storage.image_path(second) == tmp_path / "test-song-2.png"


def test_suffixed_name_already_taken(tmp_path, entry_factory):
    storage = OutputStorage(tmp_path)
    assert storage.claim(entry_factory(number=7, title="Test Song 2")) == "test-song-2.png"
    assert storage.claim(entry_factory(number=1, title="Test Song")) == "test-song.png"
    assert storage.claim(entry_factory(number=2, title="Test Song")) == "test-song-2-2.png"
