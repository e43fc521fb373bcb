from worldfs.listing import list_node
from worldfs.nodes import File, Folder, Root
from worldfs.path_utils import normalize_path, resolve


def _tree() -> Root:
    return Root(
        {
            "zeta": Folder(children={"b.json": File()}),
            "Alpha.schema": File(),
            "mid.mps": File(),
            "empty": Folder(),
        }
    )


def test_folder_lists_each_child_once_sorted() -> None:
    root = _tree()
    assert list_node(root, "") == "Alpha.schema\nempty\nmid.mps\nzeta\n"
    assert list_node(resolve(root, "zeta"), "zeta") == "b.json\n"


def test_empty_folder_lists_nothing() -> None:
    assert list_node(_tree().children["empty"], "empty") == ""


def test_file_lists_as_its_path() -> None:
    root = _tree()
    assert list_node(resolve(root, "zeta/b.json"), "zeta/./b.json") == "zeta/./b.json"


def test_root_spellings_list_identically() -> None:
    root = _tree()
    outputs = set()
    for raw in ("", "/", "."):
        path = normalize_path(raw)
        node = root if path == "" else resolve(root, path)
        outputs.add(list_node(node, path))
    assert len(outputs) == 1
