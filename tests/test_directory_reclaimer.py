# tests/test_directory_reclaimer.py
import os
import threading

from offloader.services.directory_reclaimer import DirectoryReclaimer


def test_reclaims_empty_chain_up_to_base(base_dir):
    leaf = base_dir / "a" / "b" / "c"
    leaf.mkdir(parents=True)

    removed = DirectoryReclaimer(str(base_dir)).reclaim(str(leaf / "photo.jpg"))

    assert removed == [str(leaf), str(base_dir / "a" / "b"), str(base_dir / "a")]
    assert base_dir.is_dir()
    assert not (base_dir / "a").exists()


def test_stops_at_first_non_empty_directory(base_dir):
    leaf = base_dir / "a" / "b" / "c"
    leaf.mkdir(parents=True)
    (base_dir / "a" / "keep.jpg").write_bytes(b"x")

    removed = DirectoryReclaimer(str(base_dir)).reclaim(str(leaf / "photo.jpg"))

    assert removed == [str(leaf), str(base_dir / "a" / "b")]
    assert (base_dir / "a" / "keep.jpg").exists()


def test_hidden_files_keep_a_directory(base_dir):
    leaf = base_dir / "a"
    leaf.mkdir()
    (leaf / ".htaccess").write_text("deny")

    assert DirectoryReclaimer(str(base_dir)).reclaim(str(leaf / "photo.jpg")) == []
    assert leaf.is_dir()


def test_base_dir_is_never_removed(base_dir):
    assert DirectoryReclaimer(str(base_dir)).reclaim(str(base_dir / "photo.jpg")) == []
    assert base_dir.is_dir()


def test_paths_outside_base_are_ignored(tmp_path, base_dir):
    outside = tmp_path / "elsewhere" / "empty"
    outside.mkdir(parents=True)

    assert DirectoryReclaimer(str(base_dir)).reclaim(str(outside / "photo.jpg")) == []
    assert outside.is_dir()


def test_missing_directory_is_a_noop(base_dir):
    assert DirectoryReclaimer(str(base_dir)).reclaim(str(base_dir / "gone" / "photo.jpg")) == []


def test_parent_segments_cannot_leave_base(tmp_path, base_dir):
    outside = tmp_path / "outside"
    outside.mkdir()

    removed = DirectoryReclaimer(str(base_dir)).reclaim(f"{base_dir}/../outside/photo.jpg")

    assert removed == []
    assert outside.is_dir()


def test_concurrent_reclaims_in_one_directory(base_dir):
    leaf = base_dir / "2024" / "05"
    files = [leaf / f"photo-{i}.jpg" for i in range(8)]
    for path in files:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x")

    reclaimer = DirectoryReclaimer(str(base_dir))
    barrier = threading.Barrier(len(files))
    errors = []

    def delete_and_reclaim(path):
        try:
            barrier.wait()
            os.remove(path)
            reclaimer.reclaim(str(path))
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=delete_and_reclaim, args=(p,)) for p in files]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert not (base_dir / "2024").exists()
    assert base_dir.is_dir()


def test_lock_pool_does_not_grow(base_dir):
    reclaimer = DirectoryReclaimer(str(base_dir))
    before = len(reclaimer._locks)

    for i in range(200):
        leaf = base_dir / f"d{i}"
        leaf.mkdir()
        reclaimer.reclaim(str(leaf / "photo.jpg"))

    assert len(reclaimer._locks) == before
