import os

from orbitalbase import classpath

from tests.helpers import write_tree
from tests.helpers import write_zip


def test_get_resource_in_directory(tmp_path):
    write_tree(tmp_path, {"a/x.conf": b"x"})
    loader = classpath.ResourceLoader([tmp_path])
    assert loader.get_resource("a/x.conf") == classpath.ResourceLocation.file(str(tmp_path / "a/x.conf"))
    assert loader.get_resource("/a/x.conf").protocol == "file"
    assert loader.get_resource("a/missing.conf") is None


def test_get_resource_in_zip(tmp_path):
    jar = write_zip(tmp_path / "r.zip", {"a/b/y.conf": b"y"})
    loader = classpath.ResourceLoader([jar])
    assert loader.get_resource("a/b/y.conf") == classpath.ResourceLocation.zip(str(jar), "a/b/y.conf")
    # Directories resolve even without explicit entries.
    assert loader.get_resource("a/b/") == classpath.ResourceLocation.zip(str(jar), "a/b/")
    assert loader.get_resource("a/c/") is None


def test_first_root_wins(tmp_path):
    first = write_tree(tmp_path / "first", {"p.properties": b"a=1"})
    second = write_tree(tmp_path / "second", {"p.properties": b"a=2", "q.properties": b"b=2"})
    loader = classpath.ResourceLoader([first, second])
    with loader.open_resource("p.properties") as f:
        assert f.read() == b"a=1"
    with loader.open_resource("q.properties") as f:
        assert f.read() == b"b=2"


def test_unusable_roots_are_ignored(tmp_path):
    not_a_zip = tmp_path / "plain.txt"
    not_a_zip.write_text("hello")
    loader = classpath.ResourceLoader([not_a_zip, tmp_path / "missing"])
    assert loader.get_resource("anything") is None
    assert loader.open_resource("anything") is None
    assert loader.list_resource("anything") is None


def test_open_resource_skips_directories(tmp_path):
    write_tree(tmp_path, {"a/x.conf": b"x"})
    jar = write_zip(tmp_path / "r.zip", {"b/y.conf": b"y"}, directories=["b/"])
    loader = classpath.ResourceLoader([tmp_path, jar])
    assert loader.open_resource("a") is None
    assert loader.open_resource("b/") is None
    with loader.open_resource("b/y.conf") as f:
        assert f.read() == b"y"


def test_list_directory(tmp_path):
    write_tree(tmp_path, {"a/x.conf": b"", "a/b/y.conf": b"", "a/z.txt": b""})
    loader = classpath.ResourceLoader([tmp_path])
    assert loader.list_resource("a/") == ["b", "x.conf", "z.txt"]
    assert loader.list_resource("a/x.conf") is None
    assert loader.list_resource("nope/") is None


def test_list_zip_deduplicates_subdirectories(tmp_path):
    jar = write_zip(tmp_path / "r.zip", {
        "a/x.conf": b"",
        "a/b/y.conf": b"",
        "a/b/w.conf": b"",
        "other/a/q.conf": b"",
    }, directories=["a/", "a/b/"])
    loader = classpath.ResourceLoader([jar])
    assert loader.list_resource("a/") == ["b", "x.conf"]
    assert loader.list_resource("a/b/") == ["w.conf", "y.conf"]


def test_list_unknown_protocol_has_no_children():
    class RemoteLoader(classpath.ResourceLoader):
        def get_resource(self, name):
            return classpath.ResourceLocation("http", "http://example.com/" + name, None)

    assert RemoteLoader().list_resource("a/") is None
    assert RemoteLoader().open_resource("a/x.conf") is None


def test_loader_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(classpath.RESOURCE_PATH_ENVAR, os.pathsep.join([str(tmp_path / "a"), str(tmp_path / "b")]))
    loader = classpath.ResourceLoader.from_environment()
    assert loader.roots[0:2] == [str(tmp_path / "a"), str(tmp_path / "b")]


def test_set_loader_installs_and_restores(tmp_path):
    loader = classpath.ResourceLoader([tmp_path])
    classpath.set_loader(loader)
    assert classpath.get_loader() is loader
    classpath.set_loader(None)
    assert classpath.get_loader() is not loader
